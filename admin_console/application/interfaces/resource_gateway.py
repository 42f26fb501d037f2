"""Abstract gateway interface (port) for one record type on the remote API."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

RecordT = TypeVar("RecordT")

RecordInput = BaseModel | Mapping[str, Any]


class ResourceGateway(ABC, Generic[RecordT]):
    """Port for remote record access — implemented in the infrastructure layer.

    Implementations never retry; failures surface as ``TransportError``
    subclasses and retry policy belongs to the caller.
    """

    @abstractmethod
    async def list(self) -> list[RecordT]:
        """Return the server's current collection in server order."""
        ...

    @abstractmethod
    async def get_one(self, record_id: int) -> RecordT:
        """Retrieve a single record. Raises ``NotFoundError`` when absent."""
        ...

    @abstractmethod
    async def create(self, data: RecordInput) -> RecordT:
        """Create a record and return the stored version."""
        ...

    @abstractmethod
    async def update(self, record_id: int, data: RecordInput) -> RecordT:
        """Replace a record's mutable fields and return the stored version."""
        ...

    @abstractmethod
    async def delete(self, record_id: int) -> None:
        """Delete a record."""
        ...
