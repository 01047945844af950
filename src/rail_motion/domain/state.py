# rail_motion/domain/state.py
from collections.abc import Iterator
from dataclasses import dataclass, field

from rail_motion.domain.entities.geography import Path, Point
from rail_motion.domain.entities.motion import Keyframe
from rail_motion.domain.entities.vehicle import VehicleSnapshot

Velocity = tuple[float, float]

ZERO_VELOCITY: Velocity = (0.0, 0.0)


@dataclass(frozen=True)
class VehicleAnimationRecord:
    """
    Animation state of one vehicle. Immutable: every change goes through
    ``dataclasses.replace`` so the ingest path and the frame path never share
    a half-updated record.

    Field ownership:
      • ingest writes current / previous / path / vehicle / last_seen
      • the frame tick writes velocity / last_rendered / trail
    """

    vehicle: VehicleSnapshot
    current: Keyframe
    previous: Keyframe | None
    last_rendered: Point
    trail: tuple[Point, ...]
    path: Path | None = None
    velocity: Velocity = ZERO_VELOCITY
    last_seen: float = 0.0

    @classmethod
    def first_sighting(cls, vehicle: VehicleSnapshot, at: Point, now: float):
        return cls(
            vehicle=vehicle,
            current=Keyframe(at, now),
            previous=None,
            last_rendered=at,
            trail=(at,),
            last_seen=now,
        )

    @property
    def id(self) -> str:
        return self.vehicle.id

    @property
    def animating(self) -> bool:
        return self.previous is not None


@dataclass
class AnimationStore:
    records: dict[str, VehicleAnimationRecord] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.records)

    def __contains__(self, vehicle_id: str) -> bool:
        return vehicle_id in self.records

    def __iter__(self) -> Iterator[VehicleAnimationRecord]:
        # snapshot so callers may put/remove while iterating
        return iter(list(self.records.values()))

    def get(self, vehicle_id: str) -> VehicleAnimationRecord | None:
        return self.records.get(vehicle_id)

    def put(self, record: VehicleAnimationRecord) -> None:
        self.records[record.id] = record

    def remove(self, vehicle_id: str) -> VehicleAnimationRecord | None:
        return self.records.pop(vehicle_id, None)

    def ids(self) -> set[str]:
        return set(self.records)
