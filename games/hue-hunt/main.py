from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from typing import Optional

import pygame

from engine.api import Game, FrameData
from engine.app.context import Context
from engine.render.shapes import draw_text, draw_text_centered
from huehunt import Color, Phase, SessionController, SessionSnapshot, make_rng
from huehunt.const import MAX_TIME

log = logging.getLogger(__name__)

# Layout
HUD_HEIGHT = 96                    # px reserved above the board
FOOTER_HEIGHT = 48                 # px reserved below the board
TILE_GAP = 6                       # px between tiles
BOARD_MARGIN = 24

# UX
HUD_COLOR = (230, 230, 230)
DIM_COLOR = (150, 150, 150)
LOW_TIME_COLOR = (235, 90, 90)
LOW_TIME_SEC = 5
ACCENT_COLOR = (110, 120, 240)
BEST_COLOR = (240, 200, 70)
PANEL_COLOR = (28, 30, 38)
HUD_FONT_SIZE = 28
BIG_FONT_SIZE = 56

# Start / play-again button
BUTTON_WIDTH = 320
BUTTON_HEIGHT = 64
BUTTON_HIT_PAD = 6                 # enlarge hit box a bit around the rect


def hsl_to_rgb(color: Color) -> tuple[int, int, int]:
    c = pygame.Color(0, 0, 0)
    c.hsla = (color.h, color.s, color.l, 100)
    return c.r, c.g, c.b


@dataclass
class GridLayout:
    """Square board of n x n tiles; maps screen points to row-major tile indices."""
    left: int
    top: int
    size: int
    n: int
    gap: int = TILE_GAP

    @property
    def tile_size(self) -> float:
        return (self.size - self.gap * (self.n - 1)) / self.n

    def board_rect(self) -> pygame.Rect:
        return pygame.Rect(self.left, self.top, self.size, self.size)

    def tile_rect(self, index: int) -> pygame.Rect:
        row, col = divmod(index, self.n)
        step = self.tile_size + self.gap
        return pygame.Rect(
            round(self.left + col * step), round(self.top + row * step),
            math.floor(self.tile_size), math.floor(self.tile_size))

    def tile_at(self, x: float, y: float) -> Optional[int]:
        rx = x - self.left
        ry = y - self.top
        if rx < 0 or ry < 0 or rx >= self.size or ry >= self.size:
            return None
        step = self.tile_size + self.gap
        col, ox = divmod(rx, step)
        row, oy = divmod(ry, step)
        # clicks in the gutter between tiles hit nothing
        if ox >= self.tile_size or oy >= self.tile_size:
            return None
        return int(row) * self.n + int(col)


def fit_board(screen_size: tuple[int, int], grid_px: Optional[int], n: int) -> GridLayout:
    w, h = screen_size
    room = min(w - 2 * BOARD_MARGIN, h - HUD_HEIGHT - FOOTER_HEIGHT - BOARD_MARGIN)
    size = min(int(grid_px), room) if grid_px else room
    left = (w - size) // 2
    top = HUD_HEIGHT + (h - HUD_HEIGHT - FOOTER_HEIGHT - size) // 2
    return GridLayout(left=left, top=top, size=size, n=n)


class HueHunt(Game):
    def on_load(self, ctx: Context, manifest):
        self.ctx = ctx
        self.manifest = manifest
        options = manifest.get("options", {}) or {}
        w, h = ctx.screen_size
        cx, cy = w // 2, h // 2

        # Game-over panel with the replay button near its bottom edge
        self.panel_rect = pygame.Rect(0, 0, 420, 320)
        self.panel_rect.center = (cx, cy)
        self.start_rect = pygame.Rect(0, 0, BUTTON_WIDTH, BUTTON_HEIGHT)
        self.start_rect.center = (cx, cy + 90)
        self.play_again_rect = pygame.Rect(0, 0, BUTTON_WIDTH, BUTTON_HEIGHT)
        self.play_again_rect.center = (cx, self.panel_rect.bottom - 50)

        self.grid_px: Optional[int] = options.get("grid_px")
        self.session = SessionController(ctx.scheduler, rng=make_rng(options.get("seed")))
        self.snap: SessionSnapshot = self.session.snapshot()
        self.layout = fit_board(ctx.screen_size, self.grid_px, self.snap.grid_size)
        # best score before the current session, to flag a new record on game over
        self._best_before = self.snap.best_score
        self._start_requested = False

    # ------------- helpers -------------
    def _start(self):
        self._best_before = self.session.best_score
        self.snap = self.session.start()
        self._relayout()

    def _relayout(self):
        if self.layout.n != self.snap.grid_size:
            self.layout = fit_board(self.ctx.screen_size, self.grid_px, self.snap.grid_size)

    def _button_rect(self) -> Optional[pygame.Rect]:
        if self.snap.phase is Phase.NotStarted:
            return self.start_rect
        if self.snap.phase is Phase.Ended:
            return self.play_again_rect
        return None

    def _button_hit(self, p) -> bool:
        rect = self._button_rect()
        if rect is None:
            return False
        # Slightly padded hit box so it feels easy to click
        hitbox = rect.inflate(BUTTON_HIT_PAD * 2, BUTTON_HIT_PAD * 2)
        return hitbox.collidepoint(p.x, p.y)

    # ------------- loop hooks -------------
    def on_update(self, dt_ms: float, frame: FrameData) -> None:
        prev_phase = self.snap.phase
        # the countdown may have ended the session during scheduler.advance
        self.snap = self.session.snapshot()

        # starting here rather than in on_event keeps this frame's dt off the new countdown
        if self._start_requested:
            self._start_requested = False
            self._start()
            return

        # clicks from a frame where the phase changed were aimed at the old screen
        if self.snap.phase is not prev_phase:
            return

        for p in frame.clicks:
            if self.snap.phase is not Phase.Active:
                if self._button_hit(p):
                    self._start()
                    return
                continue
            index = self.layout.tile_at(p.x, p.y)
            if index is None:
                continue
            self.session.guess(index)
            self.snap = self.session.snapshot()
            self._relayout()

    def on_draw(self, surface: pygame.Surface) -> None:
        self._draw_hud(surface)
        if self.snap.phase is Phase.NotStarted:
            self._draw_start_screen(surface)
        elif self.snap.phase is Phase.Active:
            self._draw_grid(surface)
            self._draw_footer(surface)
        else:
            self._draw_game_over(surface)

    def _draw_hud(self, surface: pygame.Surface) -> None:
        s = self.snap
        w, _ = self.ctx.screen_size
        draw_text(surface, f"Score: {s.score}", (24, 24), HUD_COLOR, size=HUD_FONT_SIZE)
        draw_text(surface, f"Best: {s.best_score}", (24, 56), DIM_COLOR, size=22)

        time_color = LOW_TIME_COLOR if s.phase is Phase.Active and s.time_remaining <= LOW_TIME_SEC else HUD_COLOR
        draw_text(surface, f"Time: {s.time_remaining}s", (w - 170, 24), time_color, size=HUD_FONT_SIZE)

        # time bar
        pct = max(0.0, min(1.0, s.time_remaining / MAX_TIME))
        bar = pygame.Rect(w - 170, 58, 140, 6)
        pygame.draw.rect(surface, PANEL_COLOR, bar)
        pygame.draw.rect(surface, time_color, (bar.x, bar.y, int(bar.w * pct), bar.h))

    def _draw_grid(self, surface: pygame.Surface) -> None:
        rnd = self.snap.round
        if rnd is None:
            return
        # every tile but one shares a color
        base_rgb = hsl_to_rgb(rnd.base_color)
        target_rgb = hsl_to_rgb(rnd.target_color)
        for i in range(rnd.total_tiles):
            rgb = target_rgb if i == rnd.target_index else base_rgb
            pygame.draw.rect(surface, rgb, self.layout.tile_rect(i), border_radius=8)

    def _draw_footer(self, surface: pygame.Surface) -> None:
        w, h = self.ctx.screen_size
        n = self.snap.grid_size
        draw_text(surface, f"Grid: {n}x{n}", (24, h - 36), DIM_COLOR, size=22)
        draw_text(surface, f"Diff: {self.snap.delta}%", (w - 120, h - 36), DIM_COLOR, size=22)

    def _draw_button(self, surface: pygame.Surface, rect: pygame.Rect, label: str) -> None:
        pygame.draw.rect(surface, ACCENT_COLOR, rect, width=3, border_radius=12)
        draw_text_centered(surface, label, rect.center, ACCENT_COLOR, size=30)

    def _draw_start_screen(self, surface: pygame.Surface) -> None:
        w, h = self.ctx.screen_size
        cx, cy = w // 2, h // 2
        draw_text_centered(surface, "Hue Hunt", (cx, cy - 80), HUD_COLOR, size=BIG_FONT_SIZE)
        draw_text_centered(surface, "Find the tile that doesn't fit in.", (cx, cy - 20), DIM_COLOR, size=26)
        draw_text_centered(surface, "The color gap shrinks as your score grows.", (cx, cy + 10), DIM_COLOR, size=26)
        self._draw_button(surface, self.start_rect, "Start")
        draw_text_centered(surface, "or press SPACE", (cx, self.start_rect.bottom + 24), DIM_COLOR, size=22)

    def _draw_game_over(self, surface: pygame.Surface) -> None:
        panel = self.panel_rect
        cx = panel.centerx
        pygame.draw.rect(surface, PANEL_COLOR, panel, border_radius=16)

        s = self.snap
        draw_text_centered(surface, "Time's up!", (cx, panel.top + 40), HUD_COLOR, size=42)
        draw_text_centered(surface, s.rank, (cx, panel.top + 84), ACCENT_COLOR, size=30)
        draw_text_centered(surface, f"Score {s.score}   Best {s.best_score}", (cx, panel.top + 130), HUD_COLOR, size=28)
        if s.score > self._best_before:
            draw_text_centered(surface, "New best!", (cx, panel.top + 166), BEST_COLOR, size=26)
        self._draw_button(surface, self.play_again_rect, "Play again")

    def on_event(self, event: pygame.event.Event) -> None:
        # Keyboard fallback: space/enter starts (or restarts mid-game) on the next update
        if event.type == pygame.KEYDOWN and event.key in (pygame.K_SPACE, pygame.K_RETURN):
            self._start_requested = True

    def on_unload(self) -> None:
        self.session.close()


def get_game():
    return HueHunt()
