# sim/clock.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

SEC = 1.0
MIN = 60.0


@dataclass(frozen=True)
class SimClock:
    epoch: datetime  # wall time of kernel t=0; naive means UTC

    @classmethod
    def utc_epoch(cls, y: int, m: int, d: int, hh=0, mm=0, ss=0) -> SimClock:
        return cls(datetime(y, m, d, hh, mm, ss, tzinfo=UTC))

    @classmethod
    def starting_now(cls) -> SimClock:
        return cls(datetime.now(UTC))

    # wall -> kernel seconds
    def to_sim(self, dt: datetime) -> float:
        epoch = self.epoch if self.epoch.tzinfo else self.epoch.replace(tzinfo=UTC)
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=UTC)
        return (dt - epoch).total_seconds()

    # kernel seconds -> wall
    def to_wall(self, t: float) -> datetime:
        return self.epoch + timedelta(seconds=t)
