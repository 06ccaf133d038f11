# config.py
"""
Global parameters for gridlogic.
Rendering widths, labels, and the object type names of the link-puzzle format.
"""

# Rendering
BLANK = " "
NUMBER_WIDTH = 3          # width of one numeric cell in *_to_string helpers
PATH_LABEL_WIDTH = 4      # "A00 " style path numbering

# Region subtree arrows, keyed by parent type name
PARENT_LABELS = {
    "X": " ",
    "R": "R",
    "N": "⭡",
    "E": "⭢",
    "S": "⭣",
    "W": "⭠",
    "NE": "⭧",
    "NW": "⭦",
    "SE": "⭨",
    "SW": "⭩",
}

# Link-puzzle object types
FLOOR_CELL = "FloorCell"
END_POINT = "EndPoint"
SIMPLE_LOOP = "Simpleloop"
SLITHERLINK = "Slitherlink"
SOLVE_MODE = "Solve_mode"

# Worker modes
MODE_SOLVE = "SOLVE"
MODE_DEDUCT = "DEDUCT"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
