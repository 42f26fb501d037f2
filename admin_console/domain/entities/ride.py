"""Domain entity — a single taxi ride record."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Ride:
    """A taxi ride as stored by the remote API."""

    id: int
    client: str
    plate: str  # ABC123
    driver: str
    distance_km: float
    origin_district: str
    destination_district: str
    passenger_count: int
    fare: float
    duration_minutes: int
    created_at: str
