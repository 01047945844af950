# rail_motion/io/business_events.py

from dataclasses import dataclass


# Base type for analytics events (not scheduled in the kernel!)
@dataclass
class BizEvent:
    run_id: str
    t: float  # kernel time
    name: str  # stable event name


@dataclass
class VehicleAddedBiz(BizEvent):
    vehicle_id: str
    line_name: str
    station: str


@dataclass
class TransitionStartedBiz(BizEvent):
    vehicle_id: str
    line_name: str
    station: str
    on_track: bool  # False => straight-line fallback
    path_points: int = 0


@dataclass
class PathUnresolvedBiz(BizEvent):
    vehicle_id: str
    line_name: str


@dataclass
class StationUnresolvedBiz(BizEvent):
    vehicle_id: str
    station: str


@dataclass
class VehicleEvictedBiz(BizEvent):
    vehicle_id: str
    last_seen: float
