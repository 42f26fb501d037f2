"""Application service — generic CRUD state machine for one record type.

One ``CrudOrchestrator`` backs one list/create/edit/delete screen. It owns the
list snapshot, loading/error status, the record being edited, the form draft
and the modal visibility, and it sequences validation and gateway calls.

Every successful write is followed by a full list reload instead of splicing
the server's answer into the local list: one extra round trip per mutation,
but server-assigned fields (ids, timestamps, derived values) on screen are
always freshly fetched.

Each network cycle is tagged with a generation number; a response whose
generation is no longer current (the screen was refreshed or abandoned in the
meantime) is dropped without touching state.
"""

import logging
from collections.abc import Callable
from dataclasses import replace
from typing import Any, Generic

from admin_console.application.interfaces import ResourceGateway
from admin_console.application.resources import RecordDescriptor, RecordT
from admin_console.application.validation import ValidationResult, validate
from admin_console.domain.entities import CrudState, CrudStatus, Notification, NotificationLevel
from admin_console.domain.exceptions import InvalidTransitionError, TransportError
from admin_console.infrastructure.logging.colored_logger import CrudStage, OrchestrationLogger

logger = logging.getLogger(__name__)

StateListener = Callable[[CrudState], None]

_FORM_STATES = (CrudStatus.EDITING, CrudStatus.SUBMIT_ERROR)


class CrudOrchestrator(Generic[RecordT]):
    """Drives one record type's screen. Depends on the gateway port (DI)."""

    def __init__(
        self,
        descriptor: RecordDescriptor[RecordT],
        gateway: ResourceGateway[RecordT],
    ):
        self._descriptor = descriptor
        self._gateway = gateway
        self._state: CrudState[RecordT] = CrudState()
        self._generation = 0
        self._listeners: list[StateListener] = []
        self._log = OrchestrationLogger(f"admin_console.orchestrator.{descriptor.plural_label}")

    @property
    def descriptor(self) -> RecordDescriptor[RecordT]:
        return self._descriptor

    @property
    def state(self) -> CrudState[RecordT]:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Call ``listener`` with every new state; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ── List loading ──

    async def load(self) -> CrudState[RecordT]:
        """Fetch the list from the server: ``* → LOADING → LOADED | LOAD_ERROR``."""
        return await self._load()

    async def refresh(self) -> CrudState[RecordT]:
        return await self._load()

    async def retry(self) -> CrudState[RecordT]:
        """Repeat the last failed step — a submission or a list load."""
        self._require({CrudStatus.LOAD_ERROR, CrudStatus.SUBMIT_ERROR}, "retry")
        if self._state.status == CrudStatus.SUBMIT_ERROR:
            await self.submit()
            return self._state
        return await self._load()

    def abandon(self) -> None:
        """Forget everything; responses still in flight will be discarded."""
        self._next_generation()
        self._set_state(**_blank_state())
        logger.debug("%s screen abandoned", self._descriptor.label)

    # ── Modal form ──

    def open_create(self) -> None:
        self._require({CrudStatus.LOADED, CrudStatus.LOAD_ERROR}, "open the create form")
        self._set_state(
            status=CrudStatus.EDITING,
            editing=None,
            form=self._descriptor.empty_form(),
            field_errors={},
            submit_error=None,
        )

    def open_edit(self, record: RecordT) -> None:
        self._require({CrudStatus.LOADED}, "open the edit form")
        self._set_state(
            status=CrudStatus.EDITING,
            editing=record,
            form=self._descriptor.form_from_record(record),
            field_errors={},
            submit_error=None,
        )

    def update_field(self, name: str, value: Any) -> Any:
        """Store one keystroke's worth of input and return the normalized value."""
        self._require(set(_FORM_STATES), "edit the form")
        normalized = self._descriptor.normalize(name, value)
        field_errors = {k: v for k, v in self._state.field_errors.items() if k != name}
        self._set_state(form={**self._state.form, name: normalized}, field_errors=field_errors)
        return normalized

    def cancel(self) -> None:
        """Close the form without writing anything."""
        self._require(set(_FORM_STATES), "cancel the form")
        self._set_state(
            status=CrudStatus.LOAD_ERROR if self._state.load_error else CrudStatus.LOADED,
            editing=None,
            form={},
            field_errors={},
            submit_error=None,
        )

    def dismiss_notification(self) -> None:
        if self._state.notification is not None:
            self._set_state(notification=None)

    # ── Writes ──

    async def submit(self) -> ValidationResult:
        """Validate the draft and, when valid, create or update the record.

        Invalid input leaves the state where it was with ``field_errors`` set
        and makes no network call. A gateway failure moves to
        ``SUBMIT_ERROR`` with the draft untouched and the modal still open.
        """
        self._require(set(_FORM_STATES), "submit the form")
        editing = self._state.editing
        is_update = editing is not None

        result = validate(self._descriptor, self._state.form, for_update=is_update)
        if not result.ok:
            self._log.detail("Rejected invalid input", fields=",".join(sorted(result.errors)))
            self._set_state(field_errors=result.errors)
            return result

        generation = self._next_generation()
        label = self._descriptor.label
        self._set_state(status=CrudStatus.SUBMITTING, field_errors={}, submit_error=None)

        try:
            if is_update:
                record_id = editing.id  # type: ignore[union-attr]
                with self._log.timed_step(CrudStage.UPDATE, f"Updating {label.lower()}", id=record_id):
                    await self._gateway.update(record_id, result.value)
            else:
                with self._log.timed_step(CrudStage.CREATE, f"Creating {label.lower()}"):
                    await self._gateway.create(result.value)
        except TransportError as exc:
            if self._is_stale(generation):
                return result
            action = "update" if is_update else "create"
            self._set_state(
                status=CrudStatus.SUBMIT_ERROR,
                submit_error=str(exc),
                notification=Notification(NotificationLevel.ERROR, f"Could not {action} {label.lower()}"),
            )
            return result

        if self._is_stale(generation):
            return result

        done = "updated" if is_update else "created"
        await self._load(notification=Notification(NotificationLevel.SUCCESS, f"{label} {done}"))
        return result

    async def delete(self, record_id: int) -> bool:
        """Delete a record the operator already confirmed, then reload.

        On failure the displayed list is left exactly as it was; nothing is
        removed locally. Returns whether the delete went through.
        """
        self._require({CrudStatus.LOADED}, "delete")
        generation = self._next_generation()
        label = self._descriptor.label
        self._set_state(status=CrudStatus.DELETING)

        try:
            with self._log.timed_step(CrudStage.DELETE, f"Deleting {label.lower()}", id=record_id):
                await self._gateway.delete(record_id)
        except TransportError:
            if not self._is_stale(generation):
                self._set_state(
                    status=CrudStatus.LOADED,
                    notification=Notification(NotificationLevel.ERROR, f"Could not delete {label.lower()}"),
                )
            return False

        if self._is_stale(generation):
            return False

        await self._load(notification=Notification(NotificationLevel.SUCCESS, f"{label} deleted"))
        return True

    # ── Internals ──

    async def _load(self, notification: Notification | None = None) -> CrudState[RecordT]:
        generation = self._next_generation()
        plural = self._descriptor.plural_label
        changes: dict[str, Any] = {
            "status": CrudStatus.LOADING,
            "editing": None,
            "form": {},
            "field_errors": {},
            "submit_error": None,
        }
        if notification is not None:
            changes["notification"] = notification
        self._set_state(**changes)

        try:
            with self._log.timed_step(CrudStage.LOAD, f"Loading {plural}"):
                records = await self._gateway.list()
        except TransportError as exc:
            if not self._is_stale(generation):
                self._set_state(
                    status=CrudStatus.LOAD_ERROR,
                    load_error=str(exc),
                    notification=Notification(NotificationLevel.ERROR, f"Could not load {plural}"),
                )
            return self._state

        if not self._is_stale(generation):
            self._set_state(status=CrudStatus.LOADED, records=tuple(records), load_error=None)
        return self._state

    def _next_generation(self) -> int:
        self._generation += 1
        return self._generation

    def _is_stale(self, generation: int) -> bool:
        if generation == self._generation:
            return False
        logger.debug(
            "Discarding stale %s response (generation %d, current %d)",
            self._descriptor.plural_label,
            generation,
            self._generation,
        )
        return True

    def _require(self, allowed: set[CrudStatus], action: str) -> None:
        if self._state.status not in allowed:
            raise InvalidTransitionError(self._state.status.value, action)

    def _set_state(self, **changes: Any) -> None:
        self._state = replace(self._state, **changes)
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception:
                logger.exception("State listener failed")


def _blank_state() -> dict[str, Any]:
    return {
        "status": CrudStatus.IDLE,
        "records": (),
        "load_error": None,
        "editing": None,
        "form": {},
        "field_errors": {},
        "submit_error": None,
        "notification": None,
    }
