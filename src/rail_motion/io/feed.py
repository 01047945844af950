# rail_motion/io/feed.py
import json
from collections.abc import Iterable, Iterator, Mapping

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from rail_motion.app.events import SnapshotBatch
from rail_motion.domain.entities.vehicle import VehicleSnapshot
from rail_motion.domain.lines import line_display_name


class VehicleModel(BaseModel):
    """One vehicle as served by the arrivals API (camelCase or snake_case keys)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")
    id: str
    line_id: str
    line_name: str | None = None
    current_station: str
    destination: str = "Unknown"
    time_to_station: int = 0
    direction: str = ""
    track_code: str = ""

    def to_snapshot(self) -> VehicleSnapshot:
        return VehicleSnapshot(
            id=self.id,
            line_id=self.line_id,
            line_name=self.line_name or line_display_name(self.line_id),
            current_station=self.current_station,
            destination=self.destination,
            time_to_station=self.time_to_station,
            direction=self.direction,
            track_code=self.track_code,
        )


class BatchModel(BaseModel):
    model_config = ConfigDict(extra="ignore")
    t: float = 0.0
    vehicles: list[VehicleModel] = Field(
        default_factory=list, validation_alias=AliasChoices("vehicles", "trains")
    )


def _dedupe(snaps: Iterable[VehicleSnapshot]) -> tuple[VehicleSnapshot, ...]:
    # a repeated id keeps its last occurrence, at its last position
    by_id: dict[str, VehicleSnapshot] = {}
    for snap in snaps:
        by_id.pop(snap.id, None)
        by_id[snap.id] = snap
    return tuple(by_id.values())


def parse_vehicles(items: Iterable[Mapping]) -> tuple[VehicleSnapshot, ...]:
    return _dedupe(VehicleModel.model_validate(item).to_snapshot() for item in items)


def parse_batch(payload: Mapping) -> SnapshotBatch:
    model = BatchModel.model_validate(payload)
    return SnapshotBatch(t=model.t, vehicles=_dedupe(v.to_snapshot() for v in model.vehicles))


class ReplayFeed:
    """
    Recorded polling cycles, one JSON object per line:
        {"t": 10.0, "vehicles": [{"id": ..., "lineId": ..., "currentStation": ...}, ...]}
    """

    def __init__(self, batches: Iterable[SnapshotBatch]):
        self.batches = sorted(batches, key=lambda b: b.t)

    @classmethod
    def from_jsonl(cls, file: str) -> "ReplayFeed":
        with open(file, encoding="utf-8") as f:
            return cls(parse_batch(json.loads(line)) for line in f if line.strip())

    def __iter__(self) -> Iterator[SnapshotBatch]:
        return iter(self.batches)

    def __len__(self) -> int:
        return len(self.batches)

    def schedule(self, kernel, offset: float = 0.0) -> int:
        for b in self.batches:
            kernel.schedule(SnapshotBatch(t=b.t + offset, vehicles=b.vehicles))
        return len(self.batches)
