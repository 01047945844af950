# tests/app/test_frame_driver.py
from dataclasses import replace

from rail_motion.app.controllers.frames import FrameHandler
from rail_motion.app.events import FrameTick
from rail_motion.domain.entities.geography import Point
from rail_motion.domain.entities.motion import Keyframe
from rail_motion.domain.entities.vehicle import VehicleSnapshot
from rail_motion.domain.mechanics.mechanics_core import Animator
from rail_motion.domain.mechanics.mechanics_resolvers import StraightLineResolver
from rail_motion.domain.state import AnimationStore


def _v(vid: str = "C-1", station: str = "Alpha") -> VehicleSnapshot:
    return VehicleSnapshot(id=vid, line_id="central", line_name="Central", current_station=station)


def _moving_store(animator: Animator, vid: str = "C-1") -> AnimationStore:
    store = AnimationStore()
    rec = animator.spawn(_v(vid), Point(0.0, 0.0), 0.0)
    store.put(animator.begin_transition(rec, _v(vid, "Bravo"), Point(1.0, 0.0), 0.0, "Central"))
    return store


def test_tick_reschedules_itself_until_stopped():
    animator = Animator(resolver=StraightLineResolver())
    frames = FrameHandler(AnimationStore(), animator, hz=50.0)
    first = frames.start(2.0)
    assert first == FrameTick(t=2.0, frame=0)

    (nxt,) = frames.on_frame_tick(first)
    assert nxt.frame == 1 and abs(nxt.t - 2.02) < 1e-12

    frames.stop()
    assert not frames.running
    assert frames.on_frame_tick(nxt) == []


def test_first_frame_does_not_move_and_stalls_are_capped():
    animator = Animator(resolver=StraightLineResolver())
    store = _moving_store(animator)
    frames = FrameHandler(store, animator, max_dt_s=0.1)

    frames.tick(4.9)
    assert store.get("C-1").last_rendered == Point(0.0, 0.0)  # dt = 0 on the first frame

    rec = store.get("C-1")
    frames.tick(30.0)  # a 25 s gap, e.g. the page was hidden
    expected, _ = animator.advance(rec, 30.0, 0.1)
    assert store.get("C-1").last_rendered == expected.last_rendered


def test_tick_publishes_positions_to_listeners():
    animator = Animator(resolver=StraightLineResolver())
    store = _moving_store(animator)
    store.put(animator.spawn(_v("C-2"), Point(5.0, 5.0), 0.0))
    got = []
    frames = FrameHandler(store, animator, listeners=[got.append])

    frames.tick(0.0)
    frames.tick(7.0)
    assert len(got) == 2
    assert {p.id for p in got[-1]} == {"C-1", "C-2"}
    assert frames.positions == got[-1]
    parked = next(p for p in frames.positions if p.id == "C-2")
    assert parked.position == Point(5.0, 5.0) and parked.heading == 0.0
    moving = next(p for p in frames.positions if p.id == "C-1")
    assert abs(moving.heading - 90.0) < 1e-9
    assert moving.destination == "Unknown"


def test_only_long_trails_are_exposed():
    animator = Animator(resolver=StraightLineResolver())
    store = _moving_store(animator)
    store.put(animator.spawn(_v("C-2"), Point(5.0, 5.0), 0.0))
    frames = FrameHandler(store, animator, min_trail_len=2)

    assert frames.trails() == []
    t = 0.0
    for _ in range(120):
        t += 1 / 60
        frames.tick(t)
    trails = frames.trails()
    assert [tr.id for tr in trails] == ["C-1"]
    assert len(trails[0].coordinates) > 2
    assert trails[0].line_name == "Central"


def test_stationary_record_with_previous_keyframe_stays_still():
    animator = Animator(resolver=StraightLineResolver())
    store = AnimationStore()
    rec = animator.spawn(_v(), Point(1.0, 1.0), 0.0)
    store.put(replace(rec, previous=Keyframe(Point(1.0, 1.0), 0.0)))
    frames = FrameHandler(store, animator)
    for k in range(60):
        frames.tick(k / 60)
    assert store.get("C-1").last_rendered == Point(1.0, 1.0)
    assert store.get("C-1").velocity == (0.0, 0.0)
