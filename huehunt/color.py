from __future__ import annotations
from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Color:
    """HSL color: hue in [0, 360), saturation and lightness in [0, 100]."""
    h: int
    s: int
    l: int

    def __post_init__(self):
        assert 0 <= self.h < 360, f"hue out of range: {self.h}"
        assert 0 <= self.s <= 100, f"saturation out of range: {self.s}"
        assert 0 <= self.l <= 100, f"lightness out of range: {self.l}"

    def with_channel(self, channel: str, value: int) -> "Color":
        if channel not in ("s", "l"):
            raise ValueError(f"unknown channel {channel!r}")
        return replace(self, **{channel: value})

    def distinguishable(self, other: "Color", threshold: float) -> bool:
        if self.h != other.h:
            return True
        gap = max(abs(self.s - other.s), abs(self.l - other.l))
        return gap >= threshold
