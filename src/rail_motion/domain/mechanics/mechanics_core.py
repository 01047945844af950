# rail_motion/domain/mechanics/mechanics_core.py
from collections.abc import Callable
from dataclasses import dataclass, replace

from rail_motion.app.protocols import PathResolver
from rail_motion.domain.entities.geography import Point
from rail_motion.domain.entities.motion import (
    Keyframe,
    bearing_deg,
    clamp01,
    ease_in_out_quad,
    lerp_point,
    manhattan,
)
from rail_motion.domain.entities.vehicle import VehiclePosition, VehicleSnapshot
from rail_motion.domain.mechanics.mechanics_samplers import heading_along_path, sample_along_path
from rail_motion.domain.mechanics.mechanics_smoothing import smooth_damp_point
from rail_motion.domain.state import VehicleAnimationRecord


@dataclass
class Animator:
    """
    Pure per-vehicle animation rules. Nothing here holds state between calls:
    every method takes a record and returns a new one.
    """

    resolver: PathResolver
    easing: Callable[[float], float] = ease_in_out_quad
    duration_s: float = 14.0  # just under the polling interval
    smooth_time_s: float = 0.5
    heading_window: float = 0.05
    overshoot_eps: float = 1e-12
    trail_max_len: int = 20
    trail_min_step: float = 3e-5

    # ---------------- ingest side ----------------

    def spawn(self, vehicle: VehicleSnapshot, at: Point, now: float) -> VehicleAnimationRecord:
        return VehicleAnimationRecord.first_sighting(vehicle, at, now)

    def begin_transition(
        self,
        record: VehicleAnimationRecord,
        vehicle: VehicleSnapshot,
        at: Point,
        now: float,
        line_name: str,
    ) -> VehicleAnimationRecord:
        # Start from where the vehicle is drawn, not from the stale keyframe,
        # and keep the spring velocity so consecutive hops blend.
        start = record.last_rendered
        return replace(
            record,
            vehicle=vehicle,
            previous=Keyframe(start, now),
            current=Keyframe(at, now),
            path=self.resolver.resolve(start, at, line_name),
            last_seen=now,
        )

    # ---------------- frame side ----------------

    def progress(self, record: VehicleAnimationRecord, now: float) -> float:
        raw = clamp01((now - record.current.timestamp) / self.duration_s)
        return self.easing(raw)

    def target(self, record: VehicleAnimationRecord, now: float) -> tuple[Point, float]:
        """Where the vehicle should be at ``now`` before smoothing, and its heading."""
        prev, cur = record.previous, record.current
        p = self.progress(record, now)
        path = record.path
        if path is not None and len(path) >= 2:
            return (
                sample_along_path(path.points, p),
                heading_along_path(path.points, p, self.heading_window),
            )
        heading = bearing_deg(prev.position, cur.position) if prev.position != cur.position else 0.0
        return lerp_point(prev.position, cur.position, p), heading

    def advance(
        self, record: VehicleAnimationRecord, now: float, dt: float
    ) -> tuple[VehicleAnimationRecord, VehiclePosition]:
        if not record.animating:
            at = record.current.position
            rec = replace(record, last_rendered=at, velocity=(0.0, 0.0))
            return rec, VehiclePosition.of(record.vehicle, at, 0.0)

        goal, heading = self.target(record, now)
        pos, vel = smooth_damp_point(
            record.last_rendered,
            goal,
            record.velocity,
            self.smooth_time_s,
            dt,
            self.overshoot_eps,
        )
        trail = self._extend_trail(record.trail, pos)
        rec = replace(record, last_rendered=pos, velocity=vel, trail=trail)
        return rec, VehiclePosition.of(record.vehicle, pos, heading)

    def _extend_trail(self, trail: tuple[Point, ...], pos: Point) -> tuple[Point, ...]:
        if trail and manhattan(pos, trail[-1]) <= self.trail_min_step:
            return trail
        return (trail + (pos,))[-self.trail_max_len :]
