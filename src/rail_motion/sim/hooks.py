# rail_motion/sim/hooks.py
from typing import Any, Protocol

from rail_motion.sim.event import BaseEvent


class KernelHooks(Protocol):
    """
    Observation points of the event loop, called in this order per run:
    run_start, then (dispatch_start, schedule*, dispatch_end) per event, then
    run_end. ``stopped`` fires from ``Kernel.stop``; ``error`` right before the
    kernel raises. Hooks observe only and must not schedule.
    """

    def run_start(self, *, until: float | None, max_events: int | None, qsize: int) -> None: ...

    def run_end(self, *, processed: int, last_t: float, qsize: int, wall_ms: float) -> None: ...

    def schedule(self, ev: BaseEvent, *, now: float, qsize: int) -> None: ...

    def dispatch_start(self, ev: BaseEvent, *, seq: int, qsize: int, handlers: int) -> None: ...

    def dispatch_end(self, ev: BaseEvent, *, out_events: int, qsize: int, ms: float) -> None: ...

    def error(self, ev: BaseEvent, *, reason: str, **kw: Any) -> None: ...

    def stopped(self, *, now: float, dropped: int) -> None: ...


class NoopHooks:
    """Default when logging is off (tests, embedded use)."""

    def run_start(self, **_):
        pass

    def run_end(self, **_):
        pass

    def schedule(self, ev, **_):
        pass

    def dispatch_start(self, ev, **_):
        pass

    def dispatch_end(self, ev, **_):
        pass

    def error(self, ev, **_):
        pass

    def stopped(self, **_):
        pass
