# rail_motion/app/build.py
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from rail_motion.app.controllers.frames import FrameHandler
from rail_motion.app.controllers.ingest import IngestHandler
from rail_motion.app.protocols import StationLookup
from rail_motion.app.wiring import wire
from rail_motion.config.models import ScenarioModel, StationsByPath, StationsInline, StationsRef
from rail_motion.domain.mechanics.mechanics_core import Animator
from rail_motion.domain.mechanics.mechanics_factory import build_animator
from rail_motion.domain.mechanics.mechanics_geometry import GeometryIndex
from rail_motion.domain.state import AnimationStore
from rail_motion.io.kernel_logging import KernelLogging  # JSON logs
from rail_motion.io.recorder import JsonlSink, Recorder, Sink
from rail_motion.io.stations import StationDirectory
from rail_motion.runtime.registries import make_eviction, resolve_geometry
from rail_motion.runtime.resources import load_geojson
from rail_motion.sim.clock import SimClock
from rail_motion.sim.hooks import NoopHooks
from rail_motion.sim.kernel import Kernel


@dataclass
class App:
    kernel: Kernel
    clock: SimClock
    geometry: GeometryIndex
    stations: StationLookup
    store: AnimationStore
    animator: Animator
    ingest: IngestHandler
    frames: FrameHandler
    recorder: Recorder

    def stop(self) -> None:
        self.frames.stop()
        self.kernel.stop()


def load_stations(ref: StationsRef) -> StationDirectory:
    if isinstance(ref, StationsInline):
        return StationDirectory(ref.coordinates, aliases=ref.aliases)
    if isinstance(ref, StationsByPath):
        return StationDirectory.from_geojson(load_geojson(ref.file), aliases=ref.aliases)
    raise TypeError(ref)


def build(
    cfg: ScenarioModel | Mapping,
    *,
    use_logging: bool = True,
    sinks: list[Sink] | None = None,
    deps: dict[str, Any] | None = None,
) -> App:
    # 0) Validate config
    model = cfg if isinstance(cfg, ScenarioModel) else ScenarioModel.model_validate(cfg)
    deps = deps or {}

    # 1) Clock
    epoch = model.clock.epoch
    clock = SimClock.utc_epoch(*epoch) if epoch else SimClock.starting_now()

    # 2) Kernel (with hooks)
    recorder = Recorder(*(sinks if sinks is not None else [JsonlSink()]))
    hooks = (
        KernelLogging(
            run_id=model.run_id,
            clock=clock,
            level=model.log.level,
            debug=model.log.debug,
            sample_every=model.log.sample_every,
        )
        if use_logging
        else NoopHooks()
    )
    kernel = Kernel(hooks=hooks, realtime=model.clock.realtime)

    # 3) Static data & mechanics
    geometry = resolve_geometry(model.geometry, deps=deps)
    stations = deps["stations"] if "stations" in deps else load_stations(model.stations)
    animator = build_animator(model.animation, model.trail, model.resolver, geometry=geometry)

    # 4) Handlers (inject deps explicitly)
    store = AnimationStore()
    ingest = IngestHandler(
        store=store,
        animator=animator,
        stations=stations,
        eviction=make_eviction(model.eviction),
        recorder=recorder,
        run_id=model.run_id,
    )
    frames = FrameHandler(
        store=store,
        animator=animator,
        hz=model.frames.hz,
        max_dt_s=model.animation.max_dt_s,
        min_trail_len=model.trail.min_render_len,
        now=(lambda: kernel.now) if model.clock.realtime else None,
    )

    # 5) Wiring
    wire(kernel, ingest=ingest, frames=frames)

    # 6) Seed the frame loop
    kernel.schedule(frames.start(kernel.now))

    return App(kernel, clock, geometry, stations, store, animator, ingest, frames, recorder)
