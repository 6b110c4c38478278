from .game_base import Game
from .frame_data import FrameData, Point
from .config import EngineConfig
from engine.app.scheduler import FrameScheduler, RepeatingTask

__all__ = ["Game", "FrameData", "Point", "EngineConfig", "FrameScheduler", "RepeatingTask"]
