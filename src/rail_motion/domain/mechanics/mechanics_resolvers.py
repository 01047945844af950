import math

import numpy as np

from rail_motion.app.protocols import PathResolver
from rail_motion.domain.entities.geography import Path, Point, Polyline
from rail_motion.domain.mechanics.mechanics_geometry import GeometryIndex


def nearest_vertex(coords: np.ndarray, p: Point) -> tuple[int, float]:
    """Index of the vertex closest to p (first one on ties) and its distance."""
    d = np.hypot(coords[:, 0] - p.x, coords[:, 1] - p.y)
    i = int(np.argmin(d))
    return i, float(d[i])


class TrackPathResolver(PathResolver):
    """
    Greedy nearest-vertex matcher: picks the polyline of the line whose vertices
    lie closest to both endpoints and slices the vertex range between them.
    Good for adjacent-station hops; it is not a routing search.
    """

    def __init__(self, geometry: GeometryIndex):
        self.geometry = geometry

    def _match(self, pl: Polyline, a: Point, b: Point) -> tuple[float, int, int] | None:
        i, da = nearest_vertex(pl.coords, a)
        j, db = nearest_vertex(pl.coords, b)
        if i == j:
            return None  # both ends map to the same vertex; nothing to slice
        return da + db, i, j

    def resolve(self, a: Point, b: Point, line_name: str) -> Path | None:
        best: tuple[float, int, int] | None = None
        best_pl: Polyline | None = None
        for pl in self.geometry.segments_for_line(line_name):
            m = self._match(pl, a, b)
            if m is None:
                continue
            if best is None or m[0] < best[0]:
                best, best_pl = m, pl
        if best is None or not math.isfinite(best[0]):
            return None

        _, i, j = best
        lo, hi = min(i, j), max(i, j)
        pts = [best_pl.point(k) for k in range(lo, hi + 1)]
        if i > j:
            pts.reverse()
        return Path(points=tuple(pts), line_name=line_name)


class StraightLineResolver(PathResolver):
    """Never resolves; vehicles interpolate on the chord between keyframes."""

    def resolve(self, a: Point, b: Point, line_name: str) -> Path | None:
        return None
