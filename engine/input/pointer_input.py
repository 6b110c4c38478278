from __future__ import annotations
import pygame
from typing import List, Tuple

from engine.api.frame_data import Point


class PointerInput:
    """
    Collects mouse clicks between frames:
    - Each button press becomes one Point, delivered once via drain().
    - Respects mirroring by converting window coords -> logical coords.
    - Pending clicks are dropped when the window loses focus.
    """

    def __init__(self, screen_size: Tuple[int, int], mirror: bool = False, buttons=(1,)):
        self.screen_size = screen_size
        self.mirror = mirror
        self.buttons = tuple(buttons)
        self._pending: List[Point] = []

    def _to_logical(self, x: int, y: int) -> Tuple[float, float]:
        w, _ = self.screen_size
        if self.mirror:
            x = (w - 1) - x
        return float(x), float(y)

    def handle_pygame_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.MOUSEBUTTONDOWN:
            if event.button not in self.buttons:
                return
            lx, ly = self._to_logical(*event.pos)
            self._pending.append(Point(lx, ly, event.button))

        elif event.type == pygame.WINDOWFOCUSLOST:
            self._pending.clear()

    def drain(self) -> List[Point]:
        out, self._pending = self._pending, []
        return out
