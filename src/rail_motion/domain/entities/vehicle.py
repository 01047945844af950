# domain/entities/vehicle.py
from dataclasses import dataclass

from rail_motion.domain.entities.geography import Point


@dataclass(frozen=True)
class VehicleSnapshot:
    """One vehicle as reported by the arrivals feed for a single polling cycle."""

    id: str
    line_id: str
    line_name: str
    current_station: str
    destination: str = "Unknown"
    time_to_station: int = 0  # seconds
    direction: str = ""
    track_code: str = ""


@dataclass(frozen=True)
class VehiclePosition:
    id: str
    line_id: str
    line_name: str
    destination: str
    time_to_station: int
    position: Point
    heading: float  # degrees from north

    @classmethod
    def of(cls, vehicle: VehicleSnapshot, position: Point, heading: float) -> "VehiclePosition":
        return cls(
            id=vehicle.id,
            line_id=vehicle.line_id,
            line_name=vehicle.line_name,
            destination=vehicle.destination,
            time_to_station=vehicle.time_to_station,
            position=position,
            heading=heading,
        )


@dataclass(frozen=True)
class VehicleTrail:
    id: str
    line_id: str
    line_name: str
    coordinates: tuple[Point, ...]
