import math
from bisect import bisect_left
from collections.abc import Sequence
from itertools import accumulate, pairwise

from rail_motion.domain.entities.geography import Point, Pt, to_point
from rail_motion.domain.entities.motion import bearing_deg

ORIGIN = Point(0.0, 0.0)


def segment_lengths(path: Sequence[Pt]) -> list[float]:
    pts = [to_point(p) for p in path]
    return [math.hypot(b.x - a.x, b.y - a.y) for a, b in pairwise(pts)]


def path_length(path: Sequence[Pt]) -> float:
    return sum(segment_lengths(path))


def sample_along_path(path: Sequence[Pt], progress: float) -> Point:
    """
    Point at ``progress`` (0..1) of the arc length of ``path``.
    Degenerate input never raises: empty -> origin, one vertex or zero length -> first vertex.
    """
    if len(path) == 0:
        return ORIGIN
    if len(path) == 1 or progress <= 0:
        return to_point(path[0])
    if progress >= 1:
        return to_point(path[-1])

    lengths = segment_lengths(path)
    cum = list(accumulate(lengths))  # cum[k] = arc length at the end of segment k
    total = cum[-1]
    if total == 0:
        return to_point(path[0])

    target = progress * total
    k = min(bisect_left(cum, target), len(lengths) - 1)
    start = cum[k] - lengths[k]
    f = (target - start) / lengths[k]
    a, b = to_point(path[k]), to_point(path[k + 1])
    return Point(a.x + (b.x - a.x) * f, a.y + (b.y - a.y) * f)


def heading_along_path(path: Sequence[Pt], progress: float, window: float = 0.05) -> float:
    """Bearing of the chord between progress-window and progress+window, clamped to [0, 1]."""
    behind = sample_along_path(path, max(0.0, progress - window))
    ahead = sample_along_path(path, min(1.0, progress + window))
    return bearing_deg(behind, ahead)
