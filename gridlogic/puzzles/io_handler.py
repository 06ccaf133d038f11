# io_handler.py
"""Saving and loading link-puzzle object lists as JSON."""

import json
import logging

from .. import config
from ..errors import PuzzleError

logger = logging.getLogger(__name__)

KNOWN_TYPES = {
    config.FLOOR_CELL,
    config.END_POINT,
    config.SIMPLE_LOOP,
    config.SLITHERLINK,
    config.SOLVE_MODE,
}


def save_objects(file_path, objects):
    """Writes the object list to file_path as indented JSON."""
    with open(file_path, "w", encoding="utf-8") as f:
        json.dump(list(objects), f, indent=4)
    logger.info("saved %d objects to %s", len(objects), file_path)


def load_objects(file_path):
    """
    Reads an object list, keeping the object types the solver understands.

    Unknown types (e.g. purely decorative editor objects) are skipped.
    """
    with open(file_path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise PuzzleError(f"{file_path}: expected a list of objects")

    objects = []
    for item in data:
        try:
            kind, x, y = item["type"], item["x"], item["y"]
        except (KeyError, TypeError):
            raise PuzzleError(f"{file_path}: malformed object {item!r}") from None
        if kind not in KNOWN_TYPES:
            logger.warning("%s: skipping object of unknown type %r", file_path, kind)
            continue
        objects.append({"type": kind, "x": x, "y": y, "data": item.get("data") or {}})
    logger.info("loaded %d objects from %s", len(objects), file_path)
    return objects
