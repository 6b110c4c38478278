from .color import Color
from .rounds import Round, build_round, color_delta, generate_colors, grid_size_for, make_rng, rank_for
from .session import Phase, SessionController, SessionSnapshot

__all__ = [
    "Color",
    "Round",
    "build_round",
    "color_delta",
    "generate_colors",
    "grid_size_for",
    "make_rng",
    "rank_for",
    "Phase",
    "SessionController",
    "SessionSnapshot",
]
