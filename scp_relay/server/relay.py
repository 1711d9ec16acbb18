"""SCP message forwarding between a session's server and its clients."""
import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from scp_relay.protocol.events import ClientConnectedEvent, MessageId, ScpMessageEvent
from scp_relay.protocol.scp import ScpFormatError, hello_record, make_ack, parse_record
from scp_relay.protocol.types import Direction
from scp_relay.state.connection import Connection
from scp_relay.state.models import ClientEntry, LoggedMessage, Session

logger = logging.getLogger(__name__)

DEFAULT_ACK_DELAY = 0.1


def _describe(scp_message: str) -> str:
    try:
        record = parse_record(scp_message)
    except ScpFormatError:
        return "unparsed"
    return f"{record.kind.value} id={record.message_id}"


class RelayEngine:
    """Forwards SCP records and synthesizes delayed acknowledgments.

    Acknowledgments are asyncio tasks. Closing a connection does not cancel
    them; an ack whose target is closed when it fires is dropped.
    """

    def __init__(self, ack_delay: float = DEFAULT_ACK_DELAY) -> None:
        self._ack_delay = ack_delay
        self._pending: set[asyncio.Task] = set()

    @property
    def pending_acks(self) -> int:
        return len(self._pending)

    async def introduce(self, session: Session, entry: ClientEntry) -> bool:
        """Announce a newly joined client to the server, then relay its HELLO."""
        server = session.server
        if server is None or not server.is_open:
            return False
        await server.send(ClientConnectedEvent(username=entry.username, client_id=entry.client_id))
        await server.send(ScpMessageEvent(
            scp_message=hello_record(entry.username),
            direction=Direction.CLIENT_TO_SERVER.value,
            from_="client",
            client_id=entry.client_id,
        ))
        return True

    async def forward(
        self,
        session: Session,
        sender: Connection,
        scp_message: str,
        direction: str,
        message_id: Optional[MessageId] = None,
    ) -> int:
        """Log and relay one record; returns the number of copies delivered."""
        session.log_message(LoggedMessage(
            scp_message=scp_message, direction=direction,
            timestamp=datetime.now(timezone.utc), message_id=message_id,
        ))
        logger.info(
            "Forwarding %s direction=%s message_id=%s code=%s",
            _describe(scp_message), direction, message_id, session.code,
        )
        if direction == Direction.CLIENT_TO_SERVER.value:
            return await self._to_server(session, sender, scp_message, message_id)
        if direction == Direction.SERVER_TO_CLIENT.value:
            return await self._to_clients(session, scp_message, message_id)
        logger.warning("Unknown direction %r for session %s, message logged only", direction, session.code)
        return 0

    async def _to_server(
        self, session: Session, sender: Connection, scp_message: str, message_id: Optional[MessageId],
    ) -> int:
        delivered = 0
        if session.has_open_server():
            sent = await session.server.send(ScpMessageEvent(
                scp_message=scp_message,
                direction=Direction.CLIENT_TO_SERVER.value,
                from_="client",
                message_id=message_id,
                client_id=sender.connection_id,
            ))
            delivered = int(sent)
        else:
            logger.info("No open server for session %s, message logged only", session.code)

        # The relay acknowledges acceptance, so this is sent even when
        # the server was unreachable.
        self._schedule_ack(lambda: sender, ScpMessageEvent(
            scp_message=make_ack(scp_message),
            direction=Direction.SERVER_TO_CLIENT.value,
            from_="server",
            message_id=message_id,
        ))
        return delivered

    async def _to_clients(self, session: Session, scp_message: str, message_id: Optional[MessageId]) -> int:
        delivered = 0
        for entry in session.open_clients():
            sent = await entry.connection.send(ScpMessageEvent(
                scp_message=scp_message,
                direction=Direction.SERVER_TO_CLIENT.value,
                from_="server",
                message_id=message_id,
            ))
            if not sent:
                continue
            delivered += 1
            self._schedule_ack(lambda: session.server, ScpMessageEvent(
                scp_message=make_ack(scp_message),
                direction=Direction.CLIENT_TO_SERVER.value,
                from_="client",
                message_id=message_id,
                client_id=entry.client_id,
            ))
        return delivered

    def _schedule_ack(self, target: Callable[[], Optional[Connection]], event: ScpMessageEvent) -> None:
        task = asyncio.create_task(self._send_ack_later(target, event))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _send_ack_later(self, target: Callable[[], Optional[Connection]], event: ScpMessageEvent) -> None:
        await asyncio.sleep(self._ack_delay)
        connection = target()
        if connection is None or not connection.is_open:
            logger.debug("Dropping ack for message_id=%s: target gone", event.message_id)
            return
        await connection.send(event)

    async def aclose(self) -> None:
        """Cancel every pending acknowledgment."""
        tasks = list(self._pending)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
