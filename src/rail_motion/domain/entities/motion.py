import math
from dataclasses import dataclass

from rail_motion.domain.entities.geography import Point


@dataclass(frozen=True)
class Keyframe:
    position: Point
    timestamp: float  # kernel seconds


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def lerp_point(a: Point, b: Point, t: float) -> Point:
    return Point(lerp(a.x, b.x, t), lerp(a.y, b.y, t))


def clamp01(t: float) -> float:
    return 0.0 if t <= 0.0 else 1.0 if t >= 1.0 else t


# ---- easing curves: [0, 1] -> [0, 1]


def linear(t: float) -> float:
    return t


def ease_in_out_quad(t: float) -> float:
    """Slow start and end; the default for station-to-station hops."""
    return 2 * t * t if t < 0.5 else 1 - (-2 * t + 2) ** 2 / 2


def ease_in_out_sine(t: float) -> float:
    return -(math.cos(math.pi * t) - 1) / 2


def ease_out_cubic(t: float) -> float:
    return 1 - (1 - t) ** 3


def bearing_deg(a: Point, b: Point) -> float:
    """Compass bearing from a to b: 0 = north, clockwise, in [0, 360)."""
    angle = math.degrees(math.atan2(b.x - a.x, b.y - a.y))
    return (angle + 360.0) % 360.0


def manhattan(a: Point, b: Point) -> float:
    return abs(a.x - b.x) + abs(a.y - b.y)
