"""Colored orchestration logger — one ANSI-colored line per CRUD network step.

Lets you follow each record screen's load/create/update/delete cycles in a
terminal:

    ✏️ [UPDATE] Updating user (id=4)
    ✏️ [UPDATE] ✓ Updating user — 0.08s (id=4)
    🗑️ [DELETE] ✗ Deleting ride — failed after 0.02s → ServerStatusError: 409: En uso

Stage colors: blue load, green create, yellow update, magenta delete,
red errors, gray details.
"""

import logging
import time
from contextlib import contextmanager
from typing import Any, Iterator, NamedTuple

_RESET = "\033[0m"
_BOLD = "\033[1m"
_DIM = "\033[2m"
_RED = "\033[91m"
_GREEN = "\033[92m"
_YELLOW = "\033[93m"
_BLUE = "\033[94m"
_MAGENTA = "\033[95m"
_GRAY = "\033[90m"


def _paint(text: str, *codes: str) -> str:
    return f"{''.join(codes)}{text}{_RESET}"


class Stage(NamedTuple):
    label: str
    color: str
    icon: str

    @property
    def tag(self) -> str:
        return f"{self.icon} [{self.label}]"


class CrudStage:
    """The network steps an orchestrator performs."""

    LOAD = Stage("LOAD", _BLUE, "🔄")
    CREATE = Stage("CREATE", _GREEN, "➕")
    UPDATE = Stage("UPDATE", _YELLOW, "✏️")
    DELETE = Stage("DELETE", _MAGENTA, "🗑️")


def _details(fields: dict[str, Any], *codes: str) -> str:
    if not fields:
        return ""
    joined = " | ".join(f"{key}={value}" for key, value in fields.items())
    return " " + _paint(f"({joined})", *codes)


class OrchestrationLogger:
    """Stage-aware logger for a CRUD orchestrator.

    Usage:
        log = OrchestrationLogger("admin_console.orchestrator.users")
        with log.timed_step(CrudStage.LOAD, "Loading users"):
            records = await gateway.list()
    """

    def __init__(self, name: str):
        self._logger = logging.getLogger(name)

    def step_start(self, stage: Stage, message: str, **fields: Any) -> None:
        line = _paint(stage.tag, stage.color, _BOLD) + " " + _paint(message, stage.color)
        self._logger.info(line + _details(fields, _GRAY))

    def step_complete(self, stage: Stage, message: str, **fields: Any) -> None:
        line = _paint(stage.tag, stage.color) + " " + _paint(f"✓ {message}", _GREEN)
        self._logger.info(line + _details(fields, _GRAY))

    def step_error(self, stage: Stage, message: str, error: BaseException | None = None) -> None:
        line = _paint(stage.tag, _RED, _BOLD) + " " + _paint(f"✗ {message}", _RED)
        if error is not None:
            line += " " + _paint(f"→ {type(error).__name__}: {error}", _DIM)
        self._logger.error(line)

    def detail(self, message: str, **fields: Any) -> None:
        self._logger.debug("   " + _paint(f"├─ {message}", _GRAY) + _details(fields, _DIM))

    @contextmanager
    def timed_step(self, stage: Stage, message: str, **fields: Any) -> Iterator[None]:
        """Log the start and outcome of one awaited network step with its duration."""
        self.step_start(stage, message, **fields)
        started = time.perf_counter()
        try:
            yield
        except Exception as exc:
            self.step_error(stage, f"{message} — failed after {time.perf_counter() - started:.2f}s", exc)
            raise
        self.step_complete(stage, f"{message} — {time.perf_counter() - started:.2f}s", **fields)
