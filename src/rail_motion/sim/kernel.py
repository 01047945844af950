# rail_motion/sim/kernel.py

import heapq
import queue
import threading
import time
from collections.abc import Callable, Iterable
from dataclasses import replace

from .event import BaseEvent
from .hooks import KernelHooks, NoopHooks

Handler = Callable[[BaseEvent], Iterable[BaseEvent] | None]


class Kernel:
    """
    Single-threaded event loop. Handlers run one at a time on the thread that
    called ``run``; ``post`` and ``stop`` are the only calls safe from other
    threads. Both wake a realtime loop that is waiting for its next event.

    With ``realtime=True`` dispatch is paced against a monotonic clock and
    ``now`` follows real elapsed seconds (never earlier than the event time).
    """

    def __init__(
        self,
        hooks: KernelHooks | None = None,
        *,
        realtime: bool = False,
        monotonic: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], object] | None = None,
    ):
        self._t = 0.0
        self._q: list[tuple[float, int, BaseEvent]] = []
        self._seq = 0
        self._subs: dict[type[BaseEvent], list[Handler]] = {}
        self._hooks = hooks or NoopHooks()
        self._inbox: queue.SimpleQueue[BaseEvent] = queue.SimpleQueue()
        self._stopped = False
        self._realtime = realtime
        self._wake = threading.Event()
        self._lock = threading.Lock()
        self._running = False
        self._monotonic = monotonic
        self._sleep = sleep or self._wake.wait
        self._wall0: float | None = None

    @property
    def now(self) -> float:
        return self._t

    @property
    def pending(self) -> int:
        return len(self._q)

    @property
    def stopped(self) -> bool:
        return self._stopped

    def on(self, etype: type[BaseEvent], handler: Handler) -> None:
        self._subs.setdefault(etype, []).append(handler)

    def schedule(self, ev: BaseEvent) -> None:
        self._seq += 1
        heapq.heappush(self._q, (ev.t, self._seq, ev))
        self._hooks.schedule(ev, now=self._t, qsize=len(self._q))

    def post(self, ev: BaseEvent) -> None:
        """Hand an event over from another thread; it is scheduled by the loop."""
        self._inbox.put(ev)
        self._wake.set()

    def stop(self) -> None:
        """
        Stop at the next dispatch boundary and drop everything still queued.
        While ``run`` is active only the loop thread touches the queue, so the
        drop happens there.
        """
        with self._lock:
            self._stopped = True
            dropped = len(self._q)
            if not self._running:
                self._q.clear()
        self._wake.set()
        self._hooks.stopped(now=self._t, dropped=dropped)

    # ---------------------------------------------------------------

    def _drain_inbox(self) -> None:
        while True:
            try:
                ev = self._inbox.get_nowait()
            except queue.Empty:
                return
            # late arrivals are handled "now" rather than rejected
            self.schedule(ev if ev.t >= self._t else replace(ev, t=self._t))

    def _elapsed(self) -> float:
        return self._monotonic() - self._wall0

    def _wait_until(self, t: float) -> bool:
        """Sleep until kernel time ``t``. False when woken early by ``stop`` or ``post``."""
        lag = t - self._elapsed()
        if lag <= 1e-9:
            return True
        self._sleep(lag)
        return not self._stopped and self._elapsed() >= t - 1e-9

    def _due(self) -> bool:
        # clear before draining so a post racing the drain still wakes the wait
        self._wake.clear()
        self._drain_inbox()
        return bool(self._q) and not self._stopped and self._wait_until(self._q[0][0])

    def run(self, until: float | None = None, max_events: int | None = None) -> int:
        t0 = time.perf_counter()
        with self._lock:
            self._stopped = False
            self._running = True
        if self._realtime and self._wall0 is None:
            self._wall0 = self._monotonic() - self._t
        self._drain_inbox()
        self._hooks.run_start(until=until, max_events=max_events, qsize=len(self._q))
        processed = 0
        try:
            while self._q and not self._stopped and (until is None or self._q[0][0] <= until):
                if self._realtime and not self._due():
                    continue
                t, _, ev = heapq.heappop(self._q)
                if t < self._t - 1e-9:
                    self._hooks.error(ev, reason="time_backwards", prev_t=self._t, t=t)
                    raise RuntimeError(f"time went backwards: {t} < {self._t}")
                self._t = max(t, self._elapsed()) if self._realtime else t
                handlers = self._subs.get(type(ev), ())
                t1 = time.perf_counter()
                self._hooks.dispatch_start(
                    ev, seq=self._seq, qsize=len(self._q), handlers=len(handlers)
                )
                total_out = 0
                for h in handlers:
                    out = h(ev) or ()
                    for nxt in out:
                        if nxt.t + 1e-12 < self._t:
                            self._hooks.error(
                                ev,
                                reason="scheduled_past",
                                scheduled_t=nxt.t,
                                nxt_type=type(nxt).__name__,
                            )
                            raise RuntimeError(
                                f"handler scheduled past event at {nxt.t} < now {self._t}"
                            )
                        self.schedule(nxt)
                        total_out += 1
                if self._stopped:
                    # a handler asked to stop: nothing it returned may outlive the run
                    self._q.clear()
                ms = (time.perf_counter() - t1) * 1000
                self._hooks.dispatch_end(ev, out_events=total_out, qsize=len(self._q), ms=ms)
                processed += 1
                if max_events and processed >= max_events:
                    break
                if not self._stopped:
                    self._drain_inbox()
        finally:
            with self._lock:
                if self._stopped:
                    self._q.clear()
                self._running = False
        self._hooks.run_end(
            processed=processed,
            last_t=self._t,
            qsize=len(self._q),
            wall_ms=(time.perf_counter() - t0) * 1000,
        )
        return processed
