# rail_motion/app/controllers/ingest.py
from collections.abc import Iterable
from dataclasses import dataclass, field, replace

from rail_motion.app.events import SnapshotBatch
from rail_motion.app.protocols import EvictionPolicy, LineNames, StationLookup
from rail_motion.domain.entities.vehicle import VehicleSnapshot
from rail_motion.domain.lines import line_display_name
from rail_motion.domain.mechanics.mechanics_core import Animator
from rail_motion.domain.state import AnimationStore
from rail_motion.io.business_events import (
    PathUnresolvedBiz,
    StationUnresolvedBiz,
    TransitionStartedBiz,
    VehicleAddedBiz,
    VehicleEvictedBiz,
)
from rail_motion.io.recorder import Recorder


@dataclass
class IngestResult:
    added: list[str] = field(default_factory=list)
    moved: list[str] = field(default_factory=list)
    refreshed: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)  # station not resolvable this cycle
    evicted: list[str] = field(default_factory=list)


class IngestHandler:
    """
    Applies one full snapshot set to the store: new vehicles get a record, a
    changed station starts a transition, missing vehicles go through eviction.
    Never touches the spring state (velocity / last rendered / trail).
    """

    def __init__(
        self,
        store: AnimationStore,
        animator: Animator,
        stations: StationLookup,
        eviction: EvictionPolicy,
        line_names: LineNames = line_display_name,
        recorder: Recorder | None = None,
        run_id: str = "local",
    ):
        self.store = store
        self.animator = animator
        self.stations = stations
        self.eviction = eviction
        self.line_names = line_names
        self.recorder = recorder
        self.run_id = run_id

    def _biz(self, cls, t: float, **kw) -> None:
        if self.recorder:
            self.recorder.emit(cls(run_id=self.run_id, t=t, name=cls.__name__, **kw))

    def on_snapshot_batch(self, ev: SnapshotBatch):
        self.ingest(ev.vehicles, now=ev.t)
        return []

    def ingest(self, vehicles: Iterable[VehicleSnapshot], now: float) -> IngestResult:
        res = IngestResult()
        seen: set[str] = set()
        for v in vehicles:
            seen.add(v.id)
            self._apply(v, now, res)
        self._evict(seen, now, res)
        return res

    def _apply(self, v: VehicleSnapshot, now: float, res: IngestResult) -> None:
        rec = self.store.get(v.id)
        at = self.stations.lookup(v.current_station)
        if at is None:
            # skip this cycle; an existing animation keeps running and still counts as seen
            if rec is not None:
                self.store.put(replace(rec, last_seen=now))
            res.skipped.append(v.id)
            self._biz(StationUnresolvedBiz, now, vehicle_id=v.id, station=v.current_station)
            return

        if rec is None:
            self.store.put(self.animator.spawn(v, at, now))
            res.added.append(v.id)
            self._biz(
                VehicleAddedBiz,
                now,
                vehicle_id=v.id,
                line_name=v.line_name,
                station=v.current_station,
            )
            return

        if at == rec.current.position:
            self.store.put(replace(rec, vehicle=v, last_seen=now))
            res.refreshed.append(v.id)
            return

        line_name = self.line_names(v.line_id)
        nxt = self.animator.begin_transition(rec, v, at, now, line_name)
        self.store.put(nxt)
        res.moved.append(v.id)
        self._biz(
            TransitionStartedBiz,
            now,
            vehicle_id=v.id,
            line_name=line_name,
            station=v.current_station,
            on_track=nxt.path is not None,
            path_points=len(nxt.path) if nxt.path is not None else 0,
        )
        if nxt.path is None:
            self._biz(PathUnresolvedBiz, now, vehicle_id=v.id, line_name=line_name)

    def _evict(self, seen: set[str], now: float, res: IngestResult) -> None:
        for vid in sorted(self.store.ids() - seen):
            rec = self.store.get(vid)
            if self.eviction.expired(rec.last_seen, now):
                self.store.remove(vid)
                res.evicted.append(vid)
                self._biz(VehicleEvictedBiz, now, vehicle_id=vid, last_seen=rec.last_seen)
