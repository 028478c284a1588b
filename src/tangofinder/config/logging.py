"""Logging setup shared by the CLI and hosting processes."""

from __future__ import annotations

import logging
import os

from .errors import ConfigurationError

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def resolve_log_level(value: int | str | None = None) -> int:
    """Turn a level name/number (or ``TANGOFINDER_LOG_LEVEL``) into a logging level."""

    raw = value if value is not None else os.getenv("TANGOFINDER_LOG_LEVEL", "INFO")
    if isinstance(raw, int):
        return raw
    level = logging.getLevelNamesMapping().get(raw.strip().upper())
    if level is None:
        raise ConfigurationError(f"Unknown log level: {raw}")
    return level


def configure_logging(*, level: int | str | None = None, force: bool = False) -> None:
    """Initialise the root logger with a terse CLI-friendly format.

    SQLAlchemy's engine logger stays at WARNING unless we run at DEBUG, where the
    emitted SQL is useful for checking the compiled filter criteria.
    """

    resolved = resolve_log_level(level)
    logging.basicConfig(level=resolved, format=LOG_FORMAT, datefmt="%H:%M:%S", force=force)
    engine_level = logging.INFO if resolved <= logging.DEBUG else logging.WARNING
    logging.getLogger("sqlalchemy.engine").setLevel(engine_level)
