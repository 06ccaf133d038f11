"""Reference puzzle encodings built on the gridlogic constrainers."""

from .fillomino import build_fillomino, solve_fillomino
from .io_handler import load_objects, save_objects
from .numberlink import build_model, deduce, solve

__all__ = [
    "build_fillomino",
    "build_model",
    "deduce",
    "load_objects",
    "save_objects",
    "solve",
    "solve_fillomino",
]
