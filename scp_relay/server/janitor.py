"""Periodic eviction of old sessions."""
import asyncio
import logging
from datetime import timedelta
from typing import Optional

from scp_relay.state.registry import SessionRegistry

logger = logging.getLogger(__name__)


class Janitor:
    """Sweeps the registry every ``interval`` seconds.

    Evicted sessions are dropped silently: their participants stay
    connected but no longer receive relayed traffic.
    """

    def __init__(self, registry: SessionRegistry, interval: float = 300.0, max_age: float = 3600.0) -> None:
        self._registry = registry
        self._interval = interval
        self._max_age = timedelta(seconds=max_age)
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def run_once(self) -> list[str]:
        evicted = self._registry.sweep(self._max_age)
        if evicted:
            logger.info("Janitor evicted %d session(s)", len(evicted))
        return evicted

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            self.run_once()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run())
        logger.info("Janitor started interval=%ss max_age=%s", self._interval, self._max_age)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
