# numberlink.py
"""
Link puzzles over the editor's object list format.

A puzzle is a list of dicts ``{"type": ..., "x": ..., "y": ..., "data": {...}}``:

- FloorCell:   a cell paths may use
- EndPoint:    a path end carrying ``num``; the two ends of a number are joined
- Simpleloop:  a cell some path must pass through
- Slitherlink: ``num`` of the four links of the 2x2 block whose top left
  corner is the vertex at (x, y) that carry a path
- Solve_mode:  a known link, ``dir`` right/down, ``style`` line/cross

Coordinates are editor (x, y); lattice points are (y, x) relative to the
top left of the bounding box.
"""

import logging
from collections import defaultdict

from z3 import Not, Or

from .. import config
from ..engine import add_constraint, pb_eq
from ..errors import PuzzleError
from ..geometry import Point, RectangularLattice, get_rectangle_lattice
from ..grids import SymbolGrid
from ..paths import PathConstrainer, PathSymbolSet

logger = logging.getLogger(__name__)

N = RectangularLattice.EDGE_DIRECTIONS["N"]
S = RectangularLattice.EDGE_DIRECTIONS["S"]
E = RectangularLattice.EDGE_DIRECTIONS["E"]
W = RectangularLattice.EDGE_DIRECTIONS["W"]

# editor link direction -> (direction from this cell, direction back from the next cell)
LINK_DIRECTIONS = {
    "right": (E, W),
    "down": (S, N),
}


def _has_arm(sym, cell, d):
    return Or([cell == s for s in sym.symbols_for_direction(d)])


# --- model construction ---

def build_model(objects):
    """
    Builds the grid, path constraints and clue constraints for a puzzle.

    Nothing is solved here. Returns None for an empty puzzle, otherwise a
    dict with the SymbolGrid ("sg"), its PathSymbolSet ("sym"), the
    PathConstrainer ("pc"), the lattice, the bounding box origin
    ("min_x", "min_y") and the set of floor cells in editor coordinates.
    """
    if not objects:
        return None

    xs = [obj["x"] for obj in objects]
    ys = [obj["y"] for obj in objects]
    min_x, min_y = min(xs), min(ys)
    width = max(xs) - min_x + 1
    height = max(ys) - min_y + 1

    floor_cells = set()
    endpoints = {}
    number_to_points = defaultdict(list)
    simple_loops = []
    slitherlinks = []
    links = []

    for obj in objects:
        pos = (obj["x"], obj["y"])
        kind = obj["type"]
        data = obj.get("data") or {}
        if kind == config.FLOOR_CELL:
            floor_cells.add(pos)
        elif kind == config.END_POINT:
            floor_cells.add(pos)
            num = data.get("num", 1)
            endpoints[pos] = num
            number_to_points[num].append(pos)
        elif kind == config.SIMPLE_LOOP:
            simple_loops.append(pos)
        elif kind == config.SLITHERLINK:
            slitherlinks.append((pos, data.get("num", 0)))
        elif kind == config.SOLVE_MODE:
            links.append((pos, data.get("dir", "right"), data.get("style", "line")))

    lattice = get_rectangle_lattice(height, width)
    sym = PathSymbolSet(lattice)
    sym.append("EMPTY", ".")
    sg = SymbolGrid(lattice, sym)
    pc = PathConstrainer(sg, allow_loops=False)
    solver = sg.solver

    def to_point(pos):
        return Point(pos[1] - min_y, pos[0] - min_x)

    def get_cell(gx, gy):
        return sg.grid.get(to_point((gx, gy)))

    for p in lattice.points:
        pos = (p.x + min_x, p.y + min_y)
        cell = sg.grid[p]
        if pos in endpoints:
            add_constraint(solver, sym.is_terminal(cell))
        else:
            add_constraint(solver, Not(sym.is_terminal(cell)))
        if pos not in floor_cells:
            add_constraint(solver, sg.cell_is(p, sym.EMPTY))

    for num, positions in number_to_points.items():
        if len(positions) != 2:
            raise PuzzleError(f"Number {num} has {len(positions)} endpoints, expected 2")
        p1, p2 = to_point(positions[0]), to_point(positions[1])
        path_instance = lattice.index_of(p1)
        add_constraint(
            solver,
            pc.path_instance_grid[p1] == path_instance,
            pc.path_instance_grid[p2] == path_instance,
        )

    for (gx, gy), direction, style in links:
        if direction not in LINK_DIRECTIONS:
            continue
        d, back = LINK_DIRECTIONS[direction]
        dy, dx = d.vector
        terms = []
        c_curr = get_cell(gx, gy)
        c_next = get_cell(gx + dx, gy + dy)
        if c_curr is not None:
            terms.append(_has_arm(sym, c_curr, d))
        if c_next is not None:
            terms.append(_has_arm(sym, c_next, back))
        for term in terms:
            add_constraint(solver, term if style == "line" else Not(term))

    for pos in simple_loops:
        add_constraint(solver, sg.grid[to_point(pos)] != sym.EMPTY)

    for (gx, gy), target in slitherlinks:
        c_tl = get_cell(gx - 1, gy - 1)
        c_tr = get_cell(gx, gy - 1)
        c_bl = get_cell(gx - 1, gy)
        terms = []
        if c_tl is not None:
            terms.append((_has_arm(sym, c_tl, E), 1))
            terms.append((_has_arm(sym, c_tl, S), 1))
        if c_bl is not None:
            terms.append((_has_arm(sym, c_bl, E), 1))
        if c_tr is not None:
            terms.append((_has_arm(sym, c_tr, S), 1))
        if terms:
            add_constraint(solver, pb_eq(terms, target))
        elif target != 0:
            raise PuzzleError(f"Slitherlink clue at {(gx, gy)} touches no cells")

    logger.debug(
        "link puzzle %dx%d: %d endpoints, %d loop clues, %d vertex clues, %d known links",
        width,
        height,
        len(endpoints),
        len(simple_loops),
        len(slitherlinks),
        len(links),
    )
    return {
        "sg": sg,
        "sym": sym,
        "pc": pc,
        "lattice": lattice,
        "min_x": min_x,
        "min_y": min_y,
        "floor_cells": floor_cells,
    }


def _link_object(gx, gy, direction, style):
    return {
        "type": config.SOLVE_MODE,
        "x": gx,
        "y": gy,
        "data": {"dir": direction, "style": style},
    }


def _links_of(ctx, solved_grid):
    """Yields ((Point, dir), has_line) for the right and down link of every cell."""
    sym = ctx["sym"]
    for p in ctx["lattice"].points:
        value = solved_grid[p]
        for direction, (d, _) in LINK_DIRECTIONS.items():
            yield (p, direction), value in sym.symbols_for_direction(d)


# --- solving ---

def solve(objects):
    """
    Solves a puzzle.

    :param objects: the puzzle object list
    :return: a list of Solve_mode line objects, empty if there is no solution
    """
    ctx = build_model(objects)
    if not ctx:
        return []
    sg = ctx["sg"]
    min_x, min_y = ctx["min_x"], ctx["min_y"]

    if not sg.solve():
        logger.info("link puzzle has no solution")
        return []

    solution_objects = []
    for (p, direction), has_line in _links_of(ctx, sg.solved_grid()):
        if has_line:
            solution_objects.append(_link_object(p.x + min_x, p.y + min_y, direction, "line"))
    logger.info("link puzzle solved with %d links", len(solution_objects))
    return solution_objects


def deduce(objects):
    """
    Finds the links that are the same in every solution (the backbone).

    Starting from one solution, repeatedly asks for a solution in which at
    least one still-undecided link differs, and drops the links that
    flipped, until no such solution exists.

    :param objects: the puzzle object list
    :return: Solve_mode objects; "line" for links present in every solution,
        "cross" for links absent from every solution between two floor cells
    """
    ctx = build_model(objects)
    if not ctx:
        return []
    sg, sym = ctx["sg"], ctx["sym"]
    min_x, min_y = ctx["min_x"], ctx["min_y"]
    floor_cells = ctx["floor_cells"]

    if not sg.solve():
        logger.info("deduce: puzzle has no solution")
        return []

    candidates = dict(_links_of(ctx, sg.solved_grid()))
    iteration = 1
    while candidates:
        blocking_terms = []
        for (p, direction), expected in candidates.items():
            d = LINK_DIRECTIONS[direction][0]
            is_line = _has_arm(sym, sg.grid[p], d)
            blocking_terms.append(Not(is_line) if expected else is_line)
        add_constraint(sg.solver, Or(blocking_terms))
        logger.debug("deduce: iteration %d, %d candidates", iteration, len(candidates))

        if not sg.solve():
            break
        for key, has_line in _links_of(ctx, sg.solved_grid()):
            if key in candidates and candidates[key] != has_line:
                del candidates[key]
        iteration += 1

    deduced_objects = []
    for (p, direction), is_line in candidates.items():
        gx, gy = p.x + min_x, p.y + min_y
        if is_line:
            deduced_objects.append(_link_object(gx, gy, direction, "line"))
            continue
        dy, dx = LINK_DIRECTIONS[direction][0].vector
        if (gx, gy) in floor_cells and (gx + dx, gy + dy) in floor_cells:
            deduced_objects.append(_link_object(gx, gy, direction, "cross"))
    logger.info("deduce: %d fixed links after %d iterations", len(deduced_objects), iteration)
    return deduced_objects
