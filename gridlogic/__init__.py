"""
gridlogic - constraint encodings for grid logic puzzles, solved with z3.

Build a lattice, a symbol set and a SymbolGrid, layer region, path and shape
constrainers onto the grid's solver, then solve and read results back
through the grids the constrainers expose.
"""

from .errors import (
    EngineError,
    GridLogicError,
    LatticeError,
    PayloadSortError,
    PuzzleError,
    ShapeSpecError,
    SymbolSpecError,
)
from .geometry import (
    Direction,
    FlatToppedHexagonalLattice,
    Lattice,
    Neighbor,
    Point,
    PointyToppedHexagonalLattice,
    RectangularLattice,
    Vector,
    get_rectangle_lattice,
    get_square_lattice,
)
from .grids import SymbolGrid
from .paths import PathConstrainer, PathSymbolSet
from .quadtree import ExpressionQuadTree
from .regions import RegionConstrainer
from .shapes import Shape, ShapeConstrainer
from .sightlines import count_cells, reduce_cells
from .symbols import (
    Symbol,
    SymbolSet,
    make_letter_range_symbol_set,
    make_number_range_symbol_set,
)

__version__ = "0.1.0"
__all__ = [
    "Direction",
    "EngineError",
    "ExpressionQuadTree",
    "FlatToppedHexagonalLattice",
    "GridLogicError",
    "Lattice",
    "LatticeError",
    "Neighbor",
    "PathConstrainer",
    "PathSymbolSet",
    "PayloadSortError",
    "Point",
    "PointyToppedHexagonalLattice",
    "PuzzleError",
    "RectangularLattice",
    "RegionConstrainer",
    "Shape",
    "ShapeConstrainer",
    "ShapeSpecError",
    "Symbol",
    "SymbolGrid",
    "SymbolSet",
    "SymbolSpecError",
    "Vector",
    "count_cells",
    "get_rectangle_lattice",
    "get_square_lattice",
    "make_letter_range_symbol_set",
    "make_number_range_symbol_set",
    "reduce_cells",
]
