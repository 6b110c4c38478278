from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Protocol

import numpy as np

from .const import INITIAL_TIME, MAX_TIME, TICK_INTERVAL_MS, TIME_BONUS, WRONG_GUESS_PENALTY
from .rounds import Round, build_round, color_delta, grid_size_for, make_rng, rank_for

log = logging.getLogger(__name__)


class Phase(Enum):
    NotStarted = 1
    Active = 2
    Ended = 3


class TaskHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def schedule_repeating(self, interval_ms: float, callback: Callable[[], None]) -> TaskHandle: ...


@dataclass(frozen=True)
class SessionSnapshot:
    phase: Phase
    score: int
    time_remaining: int
    best_score: int
    round: Optional[Round]

    @property
    def grid_size(self) -> int:
        return self.round.grid_size if self.round else grid_size_for(self.score)

    @property
    def delta(self) -> int:
        return color_delta(self.score)

    @property
    def rank(self) -> str:
        return rank_for(self.score)


class SessionController:
    """
    Owns one game session: phase, score, countdown and the current round.

    The countdown is a repeating task taken from `scheduler`; it exists only
    while the phase is Active. Best score is kept per process, shared by every
    controller, and only moves when a session ends.
    """

    _best_score: int = 0

    def __init__(self, scheduler: Scheduler, rng: Optional[np.random.Generator] = None):
        self.scheduler = scheduler
        self.rng = rng if rng is not None else make_rng()

        self.phase: Phase = Phase.NotStarted
        self.score = 0
        self.time_remaining = INITIAL_TIME
        self.round: Optional[Round] = None
        self._countdown: Optional[TaskHandle] = None

    @property
    def best_score(self) -> int:
        return SessionController._best_score

    @classmethod
    def reset_best_score(cls) -> None:
        cls._best_score = 0

    # ------------- commands -------------
    def start(self) -> SessionSnapshot:
        self._stop_countdown()
        self.score = 0
        self.time_remaining = INITIAL_TIME
        self.round = build_round(0, self.rng)
        self.phase = Phase.Active
        self._countdown = self.scheduler.schedule_repeating(TICK_INTERVAL_MS, self.tick)
        log.info("session started (best=%d)", self.best_score)
        return self.snapshot()

    def guess(self, index) -> bool:
        """Returns True when the guess was applied, False when it was ignored."""
        if self.phase is not Phase.Active or self.round is None:
            log.debug("guess %r ignored in phase %s", index, self.phase.name)
            return False
        if isinstance(index, bool) or not isinstance(index, (int, np.integer)) \
                or not self.round.contains(index):
            log.debug("guess %r ignored: outside %d tiles", index, self.round.total_tiles)
            return False

        if index == self.round.target_index:
            self.score += 1
            self.time_remaining = min(self.time_remaining + TIME_BONUS, MAX_TIME)
            self.round = build_round(self.score, self.rng)
            log.debug("hit: score=%d time=%d grid=%d",
                      self.score, self.time_remaining, self.round.grid_size)
        else:
            # penalty only; running out of time is the countdown's job
            self.time_remaining = max(self.time_remaining - WRONG_GUESS_PENALTY, 0)
            log.debug("miss at %d: time=%d", index, self.time_remaining)
        return True

    def tick(self) -> None:
        if self.phase is not Phase.Active:
            return
        self.time_remaining -= 1
        if self.time_remaining <= 0:
            self.time_remaining = 0
            self._end()

    def close(self) -> None:
        self._stop_countdown()

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            phase=self.phase,
            score=self.score,
            time_remaining=self.time_remaining,
            best_score=self.best_score,
            round=self.round,
        )

    # ------------- helpers -------------
    def _end(self) -> None:
        self._stop_countdown()
        self.phase = Phase.Ended
        self.round = None
        if self.score > SessionController._best_score:
            SessionController._best_score = self.score
        log.info("session ended: score=%d best=%d", self.score, self.best_score)

    def _stop_countdown(self) -> None:
        if self._countdown is not None:
            self._countdown.cancel()
            self._countdown = None
