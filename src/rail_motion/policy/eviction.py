# rail_motion/policy/eviction.py
from rail_motion.app.protocols import EvictionPolicy


class ImmediateEviction(EvictionPolicy):
    """Absence from a batch is the removal signal."""

    def expired(self, last_seen: float, now: float) -> bool:
        return True


class GraceEviction(EvictionPolicy):
    def __init__(self, grace_s: float = 60.0):
        self.grace_s = grace_s

    def expired(self, last_seen: float, now: float) -> bool:
        return now - last_seen > self.grace_s
