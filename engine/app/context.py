from __future__ import annotations
from dataclasses import dataclass
import pygame
from typing import Tuple
from engine.api.config import EngineConfig
from engine.app.scheduler import FrameScheduler


@dataclass
class Context:
    screen: pygame.Surface
    clock: pygame.time.Clock
    cfg: EngineConfig
    scheduler: FrameScheduler
    screen_size: Tuple[int, int]
