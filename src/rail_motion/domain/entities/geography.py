from dataclasses import dataclass

import numpy as np


# Core geometry types used by mechanics
@dataclass(frozen=True)
class Point:
    x: float  # longitude, planar degrees
    y: float  # latitude

    @property
    def xy(self) -> tuple[float, float]:
        return (self.x, self.y)


Pt = Point | tuple[float, float]


def to_point(p: Pt) -> Point:
    return p if isinstance(p, Point) else Point(float(p[0]), float(p[1]))


@dataclass(frozen=True, eq=False)
class Polyline:
    """One contiguous drawn stretch of track for one line name.

    ``coords`` is an ``(n, 2)`` float array (lon, lat) and is read-only.
    """

    line_name: str
    coords: np.ndarray

    def __len__(self) -> int:
        return int(self.coords.shape[0])

    def point(self, i: int) -> Point:
        return Point(float(self.coords[i, 0]), float(self.coords[i, 1]))


@dataclass(frozen=True)
class Path:
    """Vertices cut from a polyline, ordered from the origin toward the destination."""

    points: tuple[Point, ...]
    line_name: str = ""

    def __len__(self) -> int:
        return len(self.points)

    @property
    def start(self) -> Point:
        return self.points[0]

    @property
    def end(self) -> Point:
        return self.points[-1]
