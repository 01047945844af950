# main.py
import json
import sys

from rail_motion.app.build import build
from rail_motion.io.feed import ReplayFeed
from rail_motion.io.render import positions_to_geojson, trails_to_geojson


def run(config_path: str, feed_path: str, until: float | None = None) -> dict:
    with open(config_path, encoding="utf-8") as f:
        app = build(json.load(f))

    feed = ReplayFeed.from_jsonl(feed_path)
    feed.schedule(app.kernel)
    if until is None:
        # let the last hop finish animating
        until = (feed.batches[-1].t if len(feed) else 0.0) + app.animator.duration_s

    app.kernel.run(until=until)
    app.stop()
    return {
        "positions": positions_to_geojson(app.frames.positions),
        "trails": trails_to_geojson(app.frames.trails()),
    }


if __name__ == "__main__":
    # logs go to stdout, so the final frame is written to a file
    if len(sys.argv) < 4:
        sys.exit("usage: main.py SCENARIO.json FEED.jsonl OUT.json [UNTIL_S]")
    horizon = float(sys.argv[4]) if len(sys.argv) > 4 else None
    with open(sys.argv[3], "w", encoding="utf-8") as out:
        json.dump(run(sys.argv[1], sys.argv[2], horizon), out)
