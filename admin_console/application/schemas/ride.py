"""Pydantic DTOs for the taxi ride record type."""

import re
from typing import Annotated

from pydantic import Field, StringConstraints, field_validator
from pydantic_core import PydanticCustomError

from admin_console.application.schemas.base import WireModel
from admin_console.domain.entities import Ride

PLATE_PATTERN = re.compile(r"^[A-Z]{3}[0-9]{3}$")

RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
PlateText = Annotated[str, StringConstraints(strip_whitespace=True)]


class RideCreate(WireModel):
    """Schema for creating a new ride."""

    client: RequiredText = Field(..., alias="cliente", title="Client")
    plate: PlateText = Field(..., alias="taxi", title="Plate", examples=["ABC123"])
    driver: RequiredText = Field(..., alias="taxista", title="Driver")
    distance_km: float = Field(..., alias="kilometros", title="Distance", gt=0, allow_inf_nan=False)
    origin_district: RequiredText = Field(..., alias="barrioInicio", title="Origin district")
    destination_district: RequiredText = Field(..., alias="barrioLlegada", title="Destination district")
    passenger_count: int = Field(..., alias="cantidadPasajeros", title="Passenger count", ge=1, le=8)
    fare: float = Field(..., alias="precio", title="Fare", gt=0, allow_inf_nan=False)
    duration_minutes: int = Field(..., alias="duracionMinutos", title="Duration", gt=0)

    # Lax mode would read True/False as 1/0
    @field_validator("distance_km", "fare", mode="before")
    @classmethod
    def _reject_bool_number(cls, value: object) -> object:
        if isinstance(value, bool):
            raise PydanticCustomError("float_type", "Input should be a valid number")
        return value

    @field_validator("passenger_count", "duration_minutes", mode="before")
    @classmethod
    def _reject_bool_integer(cls, value: object) -> object:
        if isinstance(value, bool):
            raise PydanticCustomError("int_type", "Input should be a valid integer")
        return value

    @field_validator("plate")
    @classmethod
    def _plate_format(cls, value: str) -> str:
        # Checked on the submitted text as-is; keystroke normalization is not assumed.
        if not PLATE_PATTERN.match(value):
            raise PydanticCustomError(
                "plate_format",
                "Plate must have the format ABC123 (3 uppercase letters followed by 3 digits)",
            )
        return value


class RideUpdate(RideCreate):
    """Schema for updating a ride — a full replacement of its mutable fields."""


class RideResponse(WireModel):
    """Schema returned by the remote API."""

    id: int
    client: str = Field(..., alias="cliente")
    plate: str = Field(..., alias="taxi")
    driver: str = Field(..., alias="taxista")
    distance_km: float = Field(..., alias="kilometros")
    origin_district: str = Field(..., alias="barrioInicio")
    destination_district: str = Field(..., alias="barrioLlegada")
    passenger_count: int = Field(..., alias="cantidadPasajeros")
    fare: float = Field(..., alias="precio")
    duration_minutes: int = Field(..., alias="duracionMinutos")
    created_at: str | None = Field(None, alias="fechaCreacion")

    def to_entity(self) -> Ride:
        return Ride(
            id=self.id,
            client=self.client,
            plate=self.plate,
            driver=self.driver,
            distance_km=self.distance_km,
            origin_district=self.origin_district,
            destination_district=self.destination_district,
            passenger_count=self.passenger_count,
            fare=self.fare,
            duration_minutes=self.duration_minutes,
            created_at=self.created_at or "",
        )
