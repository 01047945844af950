# tests/io/test_kernel_logging.py
import json
import logging

from rail_motion.app.events import FrameTick, SnapshotBatch
from rail_motion.io.business_events import VehicleAddedBiz
from rail_motion.io.kernel_logging import KernelLogging, _JsonFormatter
from rail_motion.io.recorder import MemorySink, Recorder
from rail_motion.sim.clock import SimClock
from rail_motion.sim.kernel import Kernel


class _ListHandler(logging.Handler):
    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.setFormatter(_JsonFormatter())
        self.lines: list[dict] = []

    def emit(self, record):
        self.lines.append(json.loads(self.format(record)))


def _logger(name: str) -> tuple[logging.Logger, _ListHandler]:
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    h = _ListHandler()
    logger.handlers = [h]
    return logger, h


def test_batches_are_logged_with_size_and_wall_time():
    logger, h = _logger("rail_motion.test.batches")
    hooks = KernelLogging(run_id="r-1", clock=SimClock.utc_epoch(2025, 1, 1), logger=logger)
    k = Kernel(hooks=hooks)
    k.on(SnapshotBatch, lambda ev: [])
    k.schedule(SnapshotBatch(t=90.0, vehicles=()))
    k.run()

    msgs = [line["msg"] for line in h.lines]
    assert msgs == ["run_start", "SnapshotBatch", "run_end"]
    batch = h.lines[1]
    assert batch["run_id"] == "r-1" and batch["vehicles"] == 0
    assert batch["wall"].startswith("2025-01-01T00:01:30")


def test_frames_are_sampled_in_debug_only():
    logger, h = _logger("rail_motion.test.frames")
    quiet = KernelLogging(logger=logger)
    for i in range(120):
        quiet.dispatch_start(FrameTick(t=i / 60, frame=i), seq=i, qsize=1, handlers=1)
    assert h.lines == []

    loud = KernelLogging(logger=logger, debug=True, sample_every=60)
    for i in range(120):
        loud.dispatch_start(FrameTick(t=i / 60, frame=i), seq=i, qsize=1, handlers=1)
    assert [line["msg"] for line in h.lines] == ["FrameTick", "FrameTick"]
    assert h.lines[0]["data"] == {"frame": 59}


def test_recorder_survives_a_broken_sink(caplog):
    class Broken:
        def write(self, ev):
            raise OSError("disk full")

    mem = MemorySink()
    rec = Recorder(Broken(), mem)
    ev = VehicleAddedBiz(
        run_id="r",
        t=0.0,
        name="VehicleAddedBiz",
        vehicle_id="1",
        line_name="Central",
        station="Bank",
    )
    with caplog.at_level(logging.ERROR, logger="rail_motion.io.recorder"):
        rec.emit(ev)
    assert mem.named("VehicleAddedBiz") == [ev]
    assert "Broken" in caplog.text
