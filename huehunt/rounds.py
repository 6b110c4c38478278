from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .color import Color
from .const import (
    CHANNEL_MIDPOINT,
    DELTA_STEP_EVERY,
    GRID_STEPS,
    LIGHTNESS_RANGE,
    MIN_DELTA,
    MIN_GRID_SIZE,
    MAX_GRID_SIZE,
    RANKS,
    SATURATION_RANGE,
    START_DELTA,
    TOP_RANK,
)


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Random source for round generation; pass a seed for reproducible rounds."""
    return np.random.default_rng(seed)


def color_delta(score: int) -> int:
    """Saturation/lightness gap between base and target, in percentage points."""
    return max(MIN_DELTA, START_DELTA - score // DELTA_STEP_EVERY)


def grid_size_for(score: int) -> int:
    if score < 0:
        raise ValueError(f"score must be non-negative, got {score}")
    for min_score, size in GRID_STEPS:
        if score >= min_score:
            return size
    return MIN_GRID_SIZE


@dataclass(frozen=True)
class Round:
    grid_size: int
    tiles: Tuple[Color, ...]
    target_index: int

    def __post_init__(self):
        assert MIN_GRID_SIZE <= self.grid_size <= MAX_GRID_SIZE, \
            f"grid size out of range: {self.grid_size}"
        assert len(self.tiles) == self.grid_size * self.grid_size, \
            "tile count does not match grid"
        assert self.contains(self.target_index), \
            f"target index out of range: {self.target_index}"
        target = self.tiles[self.target_index]
        others = {c for i, c in enumerate(self.tiles) if i != self.target_index}
        assert len(others) == 1 and target not in others, \
            "round must have exactly one differing tile"

    @property
    def total_tiles(self) -> int:
        return len(self.tiles)

    @property
    def target_color(self) -> Color:
        return self.tiles[self.target_index]

    @property
    def base_color(self) -> Color:
        # any non-target tile; grids are at least 2x2
        return self.tiles[1 if self.target_index == 0 else 0]

    def contains(self, index) -> bool:
        return 0 <= index < len(self.tiles)


def generate_colors(score: int, rng: np.random.Generator) -> Tuple[Color, Color]:
    """
    Returns (base, target). Hue, saturation and lightness are drawn at random;
    the target differs from the base in exactly one of saturation/lightness.
    The gap is subtracted when the base channel sits above the midpoint so the
    target never leaves the 0..100 range.
    """
    h = int(rng.integers(0, 360))
    s = int(rng.integers(*SATURATION_RANGE))
    l = int(rng.integers(*LIGHTNESS_RANGE))
    base = Color(h, s, l)

    delta = color_delta(score)
    channel = "l" if rng.random() > 0.5 else "s"
    value = s if channel == "s" else l
    shifted = value - delta if value > CHANNEL_MIDPOINT else value + delta
    return base, base.with_channel(channel, shifted)


def build_round(score: int, rng: np.random.Generator) -> Round:
    size = grid_size_for(score)
    base, target = generate_colors(score, rng)
    total = size * size
    target_index = int(rng.integers(0, total))

    tiles = [base] * total
    tiles[target_index] = target
    return Round(grid_size=size, tiles=tuple(tiles), target_index=target_index)


def rank_for(score: int) -> str:
    for below, title in RANKS:
        if score < below:
            return title
    return TOP_RANK
