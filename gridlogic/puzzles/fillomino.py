# fillomino.py
"""
Fillomino: divide the grid into regions, each cell showing its region's size,
with no two edge-adjacent regions of the same size.
"""

import logging

from z3 import Implies

from ..engine import add_constraint
from ..geometry import Point, get_rectangle_lattice
from ..grids import SymbolGrid
from ..regions import RegionConstrainer
from ..symbols import make_number_range_symbol_set

logger = logging.getLogger(__name__)


def build_fillomino(givens, max_size=None):
    """
    Builds the fillomino constraints.

    :param givens: rows of ints, 0 for an empty cell
    :param max_size: the largest region allowed; defaults to the number of cells
    :return: (SymbolGrid, RegionConstrainer)
    """
    height, width = len(givens), len(givens[0])
    if max_size is None:
        max_size = height * width
    lattice = get_rectangle_lattice(height, width)
    sym = make_number_range_symbol_set(1, max_size)
    sg = SymbolGrid(lattice, sym)
    rc = RegionConstrainer(lattice, sg.solver, max_region_size=max_size)

    for p in lattice.points:
        region_size = rc.region_size_grid[p]
        add_constraint(sg.solver, sg.cell_at(p) == region_size)
        given = givens[p.y][p.x]
        if given:
            add_constraint(sg.solver, region_size == given)
        # neighbors showing the same size belong to the same region
        for n in lattice.edge_sharing_neighbors(rc.region_size_grid, p):
            add_constraint(
                sg.solver,
                Implies(
                    region_size == n.symbol,
                    rc.region_id_grid[p] == rc.region_id_grid[n.location],
                ),
            )
    return sg, rc


def solve_fillomino(givens, max_size=None):
    """
    Solves a fillomino puzzle.

    :return: rows of region sizes, or None if there is no solution
    """
    sg, _ = build_fillomino(givens, max_size)
    if not sg.solve():
        return None
    solved = sg.solved_grid()
    return [
        [solved[Point(y, x)] for x in range(len(givens[0]))]
        for y in range(len(givens))
    ]
