# io/kernel_logging.py
import json
import logging
import sys
from dataclasses import asdict, is_dataclass

from rail_motion.sim.hooks import NoopHooks


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)
        return json.dumps(payload, default=str)


def default_json_logger(name="rail_motion", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
        logger.setLevel(level)
    return logger


class KernelLogging(NoopHooks):
    """
    One place to shape and emit structured logs for the animation kernel.
    Snapshot batches are logged at INFO; frames only in debug mode, sampled.
    """

    BUSINESS = {"SnapshotBatch"}

    def __init__(
        self,
        run_id: str = "local",
        clock=None,
        level: str = "INFO",
        debug: bool = False,
        sample_every: int = 60,
        logger: logging.Logger | None = None,
    ):
        self.run_id, self.clock, self.debug, self.sample_every = (
            run_id,
            clock,
            debug,
            max(1, sample_every),
        )
        self.log = logger or default_json_logger(level=level)
        self._processed = 0

    # --------------- Helpers -----------------------------

    def _emit(self, level: str, msg: str, **extra):
        t = extra.get("t")
        wall = self.clock.to_wall(t) if (self.clock and t is not None) else None
        payload = {"run_id": self.run_id}
        if wall:
            payload["wall"] = wall.isoformat()
        self.log.log(getattr(logging, level), msg, extra={"extra": {**payload, **extra}})

    def _shape_event(self, ev, want_name: bool = False):
        name = type(ev).__name__
        base = {"t": getattr(ev, "t", None)}
        vehicles = getattr(ev, "vehicles", None)
        if vehicles is not None:
            # batches are large; log their size, not their content
            base["vehicles"] = len(vehicles)
        elif is_dataclass(ev):
            evd = asdict(ev)
            evd.pop("t", None)
            if evd:
                base["data"] = evd
        return (name, base) if want_name else base

    # --------------------------------------------------------

    # engine lifecycle

    def run_start(self, *, until: float | None, max_events: int | None, qsize: int | None):
        self._emit("INFO", "run_start", until=until, max_events=max_events, qsize=qsize)

    def run_end(self, *, processed: int, **extra):
        self._emit("INFO", "run_end", processed=processed, **extra)

    def stopped(self, *, now: float, dropped: int):
        self._emit("INFO", "stopped", now=now, dropped=dropped)

    def schedule(self, ev, *, now: float, qsize: int):
        if self.debug and (qsize % self.sample_every) == 0:
            self._emit("DEBUG", "schedule", **self._shape_event(ev), now=now, qsize=qsize)

    def dispatch_start(self, ev, *, seq: int, qsize: int, handlers: int):
        self._processed += 1
        name, extra = self._shape_event(ev, want_name=True)
        if name in self.BUSINESS:
            level = "INFO"
        elif self.debug and (self._processed % self.sample_every) == 0:
            level = "DEBUG"
        else:
            level = None
        if level:
            self._emit(level, name, **extra, seq=seq, qsize=qsize, handlers=handlers)

    def dispatch_end(self, ev, *, out_events: int, qsize: int, **extra):
        if self.debug and (self._processed % self.sample_every) == 0:
            self._emit("DEBUG", "dispatch_done", out_events=out_events, qsize=qsize, **extra)

    def error(self, ev, *, reason: str, **extra):
        name, shaped = self._shape_event(ev, want_name=True)
        self._emit("ERROR", "kernel_error", event=name, reason=reason, **{**shaped, **extra})
