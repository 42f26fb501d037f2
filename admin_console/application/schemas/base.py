"""Shared base for schemas that cross the wire."""

from typing import Any

from pydantic import BaseModel, ConfigDict


class WireModel(BaseModel):
    """Pydantic model whose aliases are the remote API's field names.

    Python code uses snake_case attributes; ``to_payload`` renders the wire
    names. Identifiers and timestamps never appear on input models.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_payload(self) -> dict[str, Any]:
        """Request body for POST/PUT — fields left as ``None`` are omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)
