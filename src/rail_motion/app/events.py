# app/events.py
from dataclasses import dataclass

from rail_motion.domain.entities.vehicle import VehicleSnapshot
from rail_motion.sim.event import BaseEvent


# Data side: one full replacement set of vehicles per polling cycle
@dataclass(order=True)
class SnapshotBatch(BaseEvent):
    vehicles: tuple[VehicleSnapshot, ...] = ()


# Render side
@dataclass(order=True)
class FrameTick(BaseEvent):
    frame: int = 0
