# rail_motion/app/controllers/frames.py
from collections.abc import Callable, Iterable

from rail_motion.app.events import FrameTick
from rail_motion.domain.entities.vehicle import VehiclePosition, VehicleTrail
from rail_motion.domain.mechanics.mechanics_core import Animator
from rail_motion.domain.state import AnimationStore

FrameListener = Callable[[list[VehiclePosition]], None]


class FrameHandler:
    """
    The animation driver. Each ``FrameTick`` advances every record by the real
    time since the previous frame (capped at ``max_dt_s``) and schedules the
    next tick, until ``stop`` is called.
    """

    def __init__(
        self,
        store: AnimationStore,
        animator: Animator,
        *,
        hz: float = 60.0,
        max_dt_s: float = 0.1,
        min_trail_len: int = 2,
        now: Callable[[], float] | None = None,
        listeners: Iterable[FrameListener] = (),
    ):
        self.store = store
        self.animator = animator
        self.period = 1.0 / hz
        self.max_dt_s = max_dt_s
        self.min_trail_len = min_trail_len
        self._now = now
        self.listeners = list(listeners)
        self.positions: list[VehiclePosition] = []
        self._last_t: float | None = None
        self._running = True

    @property
    def running(self) -> bool:
        return self._running

    def start(self, t: float = 0.0) -> FrameTick:
        self._running = True
        return FrameTick(t=t, frame=0)

    def stop(self) -> None:
        # the tick in flight, if any, will not reschedule itself
        self._running = False

    def on_frame_tick(self, ev: FrameTick):
        if not self._running:
            return []
        now = self._now() if self._now else ev.t
        self.tick(now)
        return [FrameTick(t=now + self.period, frame=ev.frame + 1)]

    def tick(self, now: float) -> list[VehiclePosition]:
        dt = 0.0 if self._last_t is None else min(max(now - self._last_t, 0.0), self.max_dt_s)
        self._last_t = now
        out = []
        for rec in self.store:
            nxt, pos = self.animator.advance(rec, now, dt)
            self.store.put(nxt)
            out.append(pos)
        self.positions = out
        for fn in self.listeners:
            fn(out)
        return out

    def trails(self) -> list[VehicleTrail]:
        return [
            VehicleTrail(
                id=rec.id,
                line_id=rec.vehicle.line_id,
                line_name=rec.vehicle.line_name,
                coordinates=rec.trail,
            )
            for rec in self.store
            if len(rec.trail) > self.min_trail_len
        ]
