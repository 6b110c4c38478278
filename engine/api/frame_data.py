from __future__ import annotations
from dataclasses import dataclass, field
from typing import List


@dataclass
class Point:
    x: float
    y: float
    button: int = 1


@dataclass
class FrameData:
    timestamp: float
    # clicks delivered since the previous frame, in logical (un-mirrored) screen coords
    clicks: List[Point] = field(default_factory=list)
