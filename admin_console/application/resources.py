"""Record-type descriptors.

A descriptor bundles everything the generic gateway and orchestrator need to
know about one record type: wire paths, schemas, form defaults and the
per-field normalizers applied while typing.
"""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

from admin_console.application.formatting import format_fare, format_timestamp
from admin_console.application.schemas import (
    RideCreate,
    RideResponse,
    RideUpdate,
    UserCreate,
    UserResponse,
    UserUpdate,
    WireModel,
)
from admin_console.domain.entities import Ride, User
from admin_console.domain.normalizers import normalize_plate

RecordT = TypeVar("RecordT")


class RecordKind(str, Enum):
    """Record types managed by the console."""

    USER = "user"
    RIDE = "ride"


@dataclass(frozen=True)
class RecordDescriptor(Generic[RecordT]):
    kind: RecordKind
    label: str
    plural_label: str
    collection_path: str
    collection_key: str
    create_schema: type[WireModel]
    update_schema: type[WireModel]
    response_schema: type[Any]
    empty_form: Callable[[], dict[str, Any]]
    form_from_record: Callable[[RecordT], dict[str, Any]]
    display_row: Callable[[RecordT], dict[str, str]]
    normalizers: Mapping[str, Callable[[Any], Any]] = field(default_factory=dict)

    def parse_record(self, data: Any) -> RecordT:
        """Build an entity from one record of a response envelope."""
        return self.response_schema.model_validate(data).to_entity()

    def rows(self, records: Iterable[RecordT]) -> list[dict[str, str]]:
        """Table rows (column label → display text) for a list screen."""
        return [self.display_row(record) for record in records]

    def item_path(self, record_id: int | str) -> str:
        return f"{self.collection_path}/{record_id}"

    def normalize(self, name: str, value: Any) -> Any:
        normalizer = self.normalizers.get(name)
        if normalizer is None:
            return value
        return normalizer(value)


def _empty_user_form() -> dict[str, Any]:
    return {"nombre": "", "rol": "", "clave": ""}


def _user_form(user: User) -> dict[str, Any]:
    # The stored credential is never sent back; blank keeps it unchanged.
    return {"nombre": user.name, "rol": user.role, "clave": ""}


def _user_row(user: User) -> dict[str, str]:
    return {
        "ID": str(user.id),
        "Name": user.name,
        "Role": user.role,
        "Created": format_timestamp(user.created_at),
    }


def _empty_ride_form() -> dict[str, Any]:
    return {
        "cliente": "",
        "taxi": "",
        "taxista": "",
        "kilometros": "",
        "barrioInicio": "",
        "barrioLlegada": "",
        "cantidadPasajeros": "",
        "precio": "",
        "duracionMinutos": "",
    }


def _ride_form(ride: Ride) -> dict[str, Any]:
    return {
        "cliente": ride.client,
        "taxi": ride.plate,
        "taxista": ride.driver,
        "kilometros": ride.distance_km,
        "barrioInicio": ride.origin_district,
        "barrioLlegada": ride.destination_district,
        "cantidadPasajeros": ride.passenger_count,
        "precio": ride.fare,
        "duracionMinutos": ride.duration_minutes,
    }


def _ride_row(ride: Ride) -> dict[str, str]:
    return {
        "ID": str(ride.id),
        "Client": ride.client,
        "Plate": ride.plate,
        "Driver": ride.driver,
        "Km": f"{ride.distance_km:g}",
        "From": ride.origin_district,
        "To": ride.destination_district,
        "Passengers": str(ride.passenger_count),
        "Fare": format_fare(ride.fare),
        "Duration": f"{ride.duration_minutes} min",
        "Created": format_timestamp(ride.created_at),
    }


USERS: RecordDescriptor[User] = RecordDescriptor(
    kind=RecordKind.USER,
    label="User",
    plural_label="users",
    collection_path="/usuarios",
    collection_key="usuarios",
    create_schema=UserCreate,
    update_schema=UserUpdate,
    response_schema=UserResponse,
    empty_form=_empty_user_form,
    form_from_record=_user_form,
    display_row=_user_row,
)

RIDES: RecordDescriptor[Ride] = RecordDescriptor(
    kind=RecordKind.RIDE,
    label="Ride",
    plural_label="rides",
    collection_path="/carreras-taxi",
    collection_key="carreras",
    create_schema=RideCreate,
    update_schema=RideUpdate,
    response_schema=RideResponse,
    empty_form=_empty_ride_form,
    form_from_record=_ride_form,
    display_row=_ride_row,
    normalizers={"taxi": normalize_plate},
)

_DESCRIPTORS: dict[RecordKind, RecordDescriptor] = {
    RecordKind.USER: USERS,
    RecordKind.RIDE: RIDES,
}


def get_descriptor(kind: RecordKind | str | RecordDescriptor) -> RecordDescriptor:
    """Resolve a record-type tag (or an existing descriptor) to its descriptor."""
    if isinstance(kind, RecordDescriptor):
        return kind
    try:
        return _DESCRIPTORS[RecordKind(kind)]
    except ValueError as exc:
        raise KeyError(f"Unknown record type '{kind}'") from exc
