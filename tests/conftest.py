import os
import sys
from pathlib import Path

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ["PYGAME_HIDE_SUPPORT_PROMPT"] = "hide"

# Ensure the repo root (containing engine/, huehunt/, games/) is on sys.path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from engine.app.scheduler import FrameScheduler
from huehunt import SessionController, make_rng


@pytest.fixture(autouse=True)
def reset_best_score():
    SessionController.reset_best_score()
    yield
    SessionController.reset_best_score()


@pytest.fixture()
def rng():
    return make_rng(1234)


@pytest.fixture()
def scheduler():
    return FrameScheduler()


@pytest.fixture()
def controller(scheduler, rng):
    ctrl = SessionController(scheduler, rng=rng)
    yield ctrl
    ctrl.close()


def wrong_index(rnd):
    return (rnd.target_index + 1) % rnd.total_tiles
