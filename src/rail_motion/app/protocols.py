from typing import Protocol, runtime_checkable

from rail_motion.domain.entities.geography import Path, Point


# ------------- Mechanics --------------------
@runtime_checkable
class PathResolver(Protocol):
    """
    Responsibilities:
      • Find the stretch of track joining two approximate coordinates on one line.
      • Return None when no polyline fits; callers fall back to a straight line.
    Units: planar lon/lat degrees.
    """

    def resolve(self, a: Point, b: Point, line_name: str) -> Path | None: ...


@runtime_checkable
class Easing(Protocol):
    def __call__(self, t: float) -> float: ...


# ------------- Collaborators --------------------
@runtime_checkable
class StationLookup(Protocol):
    """Station name -> coordinate. None means unresolved; the vehicle is skipped this cycle."""

    def lookup(self, station_name: str) -> Point | None: ...


@runtime_checkable
class LineNames(Protocol):
    def __call__(self, line_id: str) -> str: ...


# --------------- Policies -------------------------


@runtime_checkable
class EvictionPolicy(Protocol):
    """Decide whether a vehicle missing from the latest batch should be dropped."""

    def expired(self, last_seen: float, now: float) -> bool: ...
