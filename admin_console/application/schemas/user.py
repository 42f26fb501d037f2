"""Pydantic DTOs for the user record type."""

from typing import Annotated

from pydantic import Field, StringConstraints, field_validator

from admin_console.application.schemas.base import WireModel
from admin_console.domain.entities import User

UserName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=50)]
UserRole = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=20)]
# Credentials are taken verbatim; surrounding whitespace is significant.
Credential = Annotated[str, StringConstraints(min_length=6, max_length=100)]


class UserCreate(WireModel):
    """Schema for creating a new user — the credential is required."""

    name: UserName = Field(..., alias="nombre", title="Name", examples=["Ana Torres"])
    role: UserRole = Field(..., alias="rol", title="Role", examples=["admin"])
    credential: Credential = Field(..., alias="clave", title="Password")


class UserUpdate(WireModel):
    """Schema for updating a user.

    An empty credential means "leave unchanged" and is left out of the
    request body; the server is expected to keep the stored one.
    """

    name: UserName = Field(..., alias="nombre", title="Name")
    role: UserRole = Field(..., alias="rol", title="Role")
    credential: Credential | None = Field(None, alias="clave", title="Password")

    @field_validator("credential", mode="before")
    @classmethod
    def _blank_means_unchanged(cls, value: object) -> object:
        if value == "":
            return None
        return value


class UserResponse(WireModel):
    """Schema returned by the remote API."""

    id: int
    name: str = Field(..., alias="nombre")
    role: str = Field(..., alias="rol")
    created_at: str | None = Field(None, alias="fechaCreacion")

    def to_entity(self) -> User:
        return User(
            id=self.id,
            name=self.name,
            role=self.role,
            created_at=self.created_at or "",
        )
