"""Domain objects describing the state of a CRUD screen for one record type."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

RecordT = TypeVar("RecordT")


class CrudStatus(str, Enum):
    """Lifecycle states of a CRUD orchestrator."""

    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    LOAD_ERROR = "load_error"
    EDITING = "editing"
    SUBMITTING = "submitting"
    SUBMIT_ERROR = "submit_error"
    DELETING = "deleting"


class NotificationLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    """A dismissible message for the operator (the console's toast)."""

    level: NotificationLevel
    message: str


@dataclass(frozen=True)
class CrudState(Generic[RecordT]):
    """Immutable snapshot of an orchestrator.

    ``records`` always holds the last list fetched from the server; it is
    kept while loading, editing or after a failed write.
    """

    status: CrudStatus = CrudStatus.IDLE
    records: tuple[RecordT, ...] = ()
    load_error: str | None = None
    editing: RecordT | None = None
    form: dict[str, Any] = field(default_factory=dict)
    field_errors: dict[str, str] = field(default_factory=dict)
    submit_error: str | None = None
    notification: Notification | None = None

    @property
    def modal_open(self) -> bool:
        return self.status in (
            CrudStatus.EDITING,
            CrudStatus.SUBMITTING,
            CrudStatus.SUBMIT_ERROR,
        )

    @property
    def is_busy(self) -> bool:
        return self.status in (CrudStatus.LOADING, CrudStatus.SUBMITTING, CrudStatus.DELETING)

    @property
    def is_create(self) -> bool:
        """True when the open form creates a new record instead of editing one."""
        return self.modal_open and self.editing is None
