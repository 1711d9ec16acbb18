"""Relay configuration."""
import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

_RECOGNISED_BOOL_VALUES = frozenset(
    ("1", "true", "yes", "0", "false", "no")
)


@dataclass(frozen=True)
class JanitorConfig:
    """Session eviction settings.

    ``sweep_interval``: seconds between sweeps.
    ``session_max_age``: seconds a session may live before it is evicted.
    """

    sweep_interval: float = 300.0
    session_max_age: float = 3600.0


@dataclass(frozen=True)
class CorsConfig:
    enabled: bool = True
    allow_origins: tuple[str, ...] = ("*",)


@dataclass(frozen=True)
class RelayConfig:
    host: str = "0.0.0.0"
    port: int = 3001
    log_level: str = "INFO"
    ack_delay: float = 0.1
    janitor: JanitorConfig = field(default_factory=JanitorConfig)
    cors: CorsConfig = field(default_factory=CorsConfig)


def _parse_bool(value: str, default: bool) -> bool:
    """Parse a boolean environment variable with explicit default.

    Recognises ``true/1/yes`` and ``false/0/no`` (case-insensitive).
    Returns *default* when the value is empty or unset.
    Logs a warning and returns *default* for unrecognised values.
    """
    if not value:
        return default
    normalised = value.lower()
    if normalised not in _RECOGNISED_BOOL_VALUES:
        logger.warning(
            "Unrecognised boolean value %r, using default %s. "
            "Expected one of: true/1/yes or false/0/no.",
            value,
            default,
        )
        return default
    return normalised in ("1", "true", "yes")


def _env_number(name: str, default: str, kind: type = float):
    raw = os.environ.get(name, default)
    try:
        value = kind(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {raw!r}")
    return value


def load_config_from_env() -> RelayConfig:
    origins_raw = os.environ.get("RELAY_CORS_ORIGINS", "*")
    origins = tuple(o.strip() for o in origins_raw.split(",") if o.strip()) or ("*",)

    return RelayConfig(
        host=os.environ.get("RELAY_HOST", "0.0.0.0"),
        port=_env_number("PORT", "3001", int),
        log_level=os.environ.get("RELAY_LOG_LEVEL", "INFO").upper(),
        ack_delay=_env_number("RELAY_ACK_DELAY", "0.1"),
        janitor=JanitorConfig(
            sweep_interval=_env_number("RELAY_SWEEP_INTERVAL", "300"),
            session_max_age=_env_number("RELAY_SESSION_MAX_AGE", "3600"),
        ),
        cors=CorsConfig(
            enabled=_parse_bool(os.environ.get("RELAY_CORS_ENABLED", ""), default=True),
            allow_origins=origins,
        ),
    )
