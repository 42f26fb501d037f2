"""Centralized logging configuration.

Each ``log_level_*`` setting controls a group of loggers, so the chatty
transport (httpx/httpcore) can be silenced while gateway and orchestrator
activity stays visible.

Usage:
    from admin_console.infrastructure.logging.log_config import setup_logging
    setup_logging()   # once at startup; create_console() calls it
"""

import logging
import sys

from admin_console.config import Settings, get_settings

_DEFAULT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s — %(message)s"

# Settings field → logger names it governs
_CATEGORY_MAP: dict[str, tuple[str, ...]] = {
    "log_level_http": ("httpx", "httpcore"),
    "log_level_gateway": ("admin_console.infrastructure.api",),
    "log_level_orchestrator": (
        "admin_console.application.services",
        "admin_console.orchestrator",
    ),
}


def setup_logging(settings: Settings | None = None) -> dict[str, int]:
    """Apply the configured levels; returns the level set per logger name."""
    settings = settings or get_settings()

    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))
    if not root.handlers:
        _install_stderr_handler(root)

    applied: dict[str, int] = {}
    for field_name, logger_names in _CATEGORY_MAP.items():
        level = _parse_level(getattr(settings, field_name))
        for logger_name in logger_names:
            logging.getLogger(logger_name).setLevel(level)
            applied[logger_name] = level

    logging.getLogger(__name__).debug(
        "Logging configured: root=%s %s",
        logging.getLevelName(root.level),
        " ".join(f"{name}={logging.getLevelName(level)}" for name, level in applied.items()),
    )
    return applied


def _install_stderr_handler(root: logging.Logger) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT))
    root.addHandler(handler)


def _parse_level(raw: str) -> int:
    """Level name → ``logging`` constant; unknown names fall back to INFO."""
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else logging.INFO
