# tests/io/test_feed.py
import json

import pytest
from pydantic import ValidationError

from rail_motion.io.feed import ReplayFeed, parse_batch, parse_vehicles
from rail_motion.sim.kernel import Kernel


def test_camel_and_snake_case_keys():
    (a, b) = parse_vehicles(
        [
            {
                "id": "1",
                "lineId": "central",
                "lineName": "Central",
                "currentStation": "Bank",
                "timeToStation": 90,
                "platformName": "Westbound",
            },
            {"id": "2", "line_id": "victoria", "current_station": "Brixton"},
        ]
    )
    assert a.line_name == "Central" and a.time_to_station == 90
    assert b.line_name == "Victoria"
    assert b.destination == "Unknown" and b.time_to_station == 0


def test_unknown_line_id_passes_through():
    (v,) = parse_vehicles([{"id": "1", "lineId": "elizabeth", "currentStation": "Bond Street"}])
    assert v.line_name == "elizabeth"


def test_repeated_id_keeps_the_last_report():
    vs = parse_vehicles(
        [
            {"id": "1", "lineId": "central", "currentStation": "Bank"},
            {"id": "2", "lineId": "central", "currentStation": "Holborn"},
            {"id": "1", "lineId": "central", "currentStation": "St Paul's"},
        ]
    )
    assert [(v.id, v.current_station) for v in vs] == [("2", "Holborn"), ("1", "St Paul's")]


def test_missing_required_field_is_rejected():
    with pytest.raises(ValidationError):
        parse_vehicles([{"id": "1", "lineId": "central"}])


def test_parse_batch_accepts_trains_key():
    batch = parse_batch({"t": 30, "trains": [{"id": "1", "lineId": "c", "currentStation": "x"}]})
    assert batch.t == 30.0 and len(batch.vehicles) == 1


def test_replay_feed_from_jsonl_sorts_and_schedules(tmp_path):
    path = tmp_path / "feed.jsonl"
    rows = [
        {"t": 15.0, "vehicles": []},
        {"t": 0.0, "vehicles": [{"id": "1", "lineId": "central", "currentStation": "Bank"}]},
    ]
    path.write_text("\n".join(json.dumps(r) for r in rows) + "\n\n")
    feed = ReplayFeed.from_jsonl(str(path))
    assert len(feed) == 2
    assert [b.t for b in feed] == [0.0, 15.0]

    k = Kernel()
    seen = []
    k.on(type(feed.batches[0]), lambda ev: seen.append((ev.t, len(ev.vehicles))))
    assert feed.schedule(k, offset=5.0) == 2
    k.run()
    assert seen == [(5.0, 1), (20.0, 0)]
