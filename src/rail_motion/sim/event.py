# sim/event.py
from dataclasses import dataclass


@dataclass(order=True)
class BaseEvent:
    """Anything the kernel can schedule; ``t`` is kernel seconds."""

    t: float
