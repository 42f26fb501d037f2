"""HTTP implementation of the ResourceGateway port.

One instance serves one record type; the descriptor supplies the collection
path, the envelope's collection key and the schemas used on both sides of
the wire.
"""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from admin_console.application.interfaces import RecordInput, ResourceGateway
from admin_console.application.resources import RecordDescriptor, RecordT
from admin_console.application.schemas import WireModel
from admin_console.application.validation import validate
from admin_console.domain.exceptions import NotFoundError, ResponseFormatError, ServerStatusError
from admin_console.infrastructure.api.api_client import ApiClient

logger = logging.getLogger(__name__)


class HttpResourceGateway(ResourceGateway[RecordT]):
    """Infrastructure adapter — CRUD for one record type over ``ApiClient``."""

    def __init__(self, descriptor: RecordDescriptor[RecordT], api_client: ApiClient):
        self._descriptor = descriptor
        self._client = api_client

    @property
    def descriptor(self) -> RecordDescriptor[RecordT]:
        return self._descriptor

    async def list(self) -> list[RecordT]:
        data = await self._client.get(self._descriptor.collection_path)
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise ResponseFormatError(
                f"{self._descriptor.collection_path} returned no '{self._descriptor.collection_key}' collection"
            )

        items = data.get(self._descriptor.collection_key) or []
        if not isinstance(items, list):
            raise ResponseFormatError(
                f"'{self._descriptor.collection_key}' is not a list in {self._descriptor.collection_path}"
            )

        records = [self._parse(item) for item in items]
        logger.debug("Listed %d %s", len(records), self._descriptor.plural_label)
        return records

    async def get_one(self, record_id: int) -> RecordT:
        try:
            data = await self._client.get(self._descriptor.item_path(record_id))
        except ServerStatusError as exc:
            self._raise_not_found(exc, record_id)
            raise
        return self._parse(data)

    async def create(self, data: RecordInput) -> RecordT:
        payload = self._payload(data, for_update=False)
        body = await self._client.post(self._descriptor.collection_path, payload)
        record = self._parse(body)
        logger.info("Created %s", self._descriptor.label.lower())
        return record

    async def update(self, record_id: int, data: RecordInput) -> RecordT:
        payload = self._payload(data, for_update=True)
        try:
            body = await self._client.put(self._descriptor.item_path(record_id), payload)
        except ServerStatusError as exc:
            self._raise_not_found(exc, record_id)
            raise
        record = self._parse(body)
        logger.info("Updated %s id=%s", self._descriptor.label.lower(), record_id)
        return record

    async def delete(self, record_id: int) -> None:
        try:
            await self._client.delete(self._descriptor.item_path(record_id))
        except ServerStatusError as exc:
            if exc.status_code != 404:
                raise
            # Already gone; the caller reloads the list either way
            logger.info(
                "%s id=%s was already deleted", self._descriptor.label, record_id
            )
            return
        logger.info("Deleted %s id=%s", self._descriptor.label.lower(), record_id)

    # ── Helpers ──

    def _payload(self, data: RecordInput, *, for_update: bool) -> dict[str, Any]:
        """Request body for a write; raw mappings are validated first."""
        if isinstance(data, WireModel):
            return data.to_payload()
        result = validate(self._descriptor, data, for_update=for_update)
        return result.raise_for_errors().to_payload()

    def _parse(self, data: Any) -> RecordT:
        try:
            return self._descriptor.parse_record(data)
        except PydanticValidationError as exc:
            raise ResponseFormatError(
                f"Malformed {self._descriptor.label.lower()} record from server: "
                f"{exc.error_count()} invalid field(s)"
            ) from exc

    def _raise_not_found(self, exc: ServerStatusError, record_id: int) -> None:
        if exc.status_code == 404:
            raise NotFoundError(self._descriptor.label, record_id, exc.message) from exc
