# rail_motion/app/wiring.py
from rail_motion.app.controllers.frames import FrameHandler
from rail_motion.app.controllers.ingest import IngestHandler
from rail_motion.app.events import FrameTick, SnapshotBatch
from rail_motion.sim.kernel import Kernel


def wire(kernel: Kernel, *, ingest: IngestHandler, frames: FrameHandler) -> None:
    k = kernel

    # data side: low frequency, creates / moves / evicts records
    k.on(SnapshotBatch, ingest.on_snapshot_batch)

    # render side: self-rescheduling tick, only touches spring state
    k.on(FrameTick, frames.on_frame_tick)
