# paths.py
"""
Constraints for puzzles where paths are filled into the grid.

Paths may be closed (loops) or open ("terminated" paths). Each path cell
holds a symbol naming the directions its arms point in. Arms must agree
between neighbors, every cell of a path shares one instance id, and an
order number walks along the path from one end, so symbol assignments that
only look like a path (disjoint loops sharing an id) have no model.
"""

import itertools
import logging

from z3 import And, BoolVal, If, Implies, Int, Not, Or, Sum

from . import config
from .engine import add_constraint, eval_int
from .symbols import SymbolSet
from .utils import combinations

logger = logging.getLogger(__name__)


class PathSymbolSet(SymbolSet):
    """
    A SymbolSet of path segment and path terminal symbols.

    Segment symbols come first, one per unordered pair of edge-sharing
    directions, named by joining the direction names (on a rectangular
    lattice: NS, NE, NW, SE, SW, EW). Terminal symbols follow, one per
    direction, named after it. Other symbols (e.g. an empty cell) may be
    appended afterwards.

    :param lattice: the structure of the grid
    :param include_terminals: if True, create symbols for path terminals
    """

    def __init__(self, lattice, include_terminals=True):
        super().__init__([])
        self._include_terminals = include_terminals
        self._symbols_for_direction = {d: [] for d in lattice.edge_sharing_directions()}
        self._symbol_for_direction_pair = {}
        self._terminal_for_direction = {}
        self._max_path_segment_symbol_index = -1
        self._max_path_terminal_symbol_index = -1

        dirs = lattice.edge_sharing_directions()
        for di, dj in combinations(dirs, 2):
            idx = self.append(di.name + dj.name, lattice.label_for_direction_pair(di, dj))
            self._symbols_for_direction[di].append(idx)
            self._symbols_for_direction[dj].append(idx)
            self._symbol_for_direction_pair[(di, dj)] = idx
            self._symbol_for_direction_pair[(dj, di)] = idx
            self._max_path_segment_symbol_index = idx

        if include_terminals:
            for d in dirs:
                idx = self.append(d.name, lattice.label_for_direction(d))
                self._symbols_for_direction[d].append(idx)
                self._terminal_for_direction[d] = idx
                self._max_path_terminal_symbol_index = idx

    def is_path(self, symbol):
        """Returns an expression true iff the symbol is part of a path."""
        if self._include_terminals:
            return symbol <= self._max_path_terminal_symbol_index
        return symbol <= self._max_path_segment_symbol_index

    def is_path_segment(self, symbol):
        """Returns an expression true iff the symbol is a non-terminal path segment."""
        return symbol <= self._max_path_segment_symbol_index

    def is_terminal(self, symbol):
        """Returns an expression true iff the symbol is a path terminal."""
        if not self._include_terminals:
            return BoolVal(False)
        return And(
            symbol > self._max_path_segment_symbol_index,
            symbol <= self._max_path_terminal_symbol_index,
        )

    def symbols_for_direction(self, d):
        """Returns the symbol indices having an arm in direction d."""
        return self._symbols_for_direction[d]

    def symbol_for_direction_pair(self, d1, d2):
        """Returns the segment symbol index with arms in d1 and d2."""
        return self._symbol_for_direction_pair[(d1, d2)]

    def terminal_for_direction(self, d):
        """Returns the terminal symbol index with its one arm in d, or None."""
        return self._terminal_for_direction.get(d)


class PathConstrainer:
    """
    Creates constraints ensuring the symbols of a SymbolGrid form paths.

    :param symbol_grid: the grid to constrain; its symbol set must be a PathSymbolSet
    :param complete: if True, every cell must be part of a path
    :param allow_terminated_paths: if True, paths may be open
    :param allow_loops: if True, paths may be closed loops
    :param name: optional prefix for variable names
    """

    _instance_ids = itertools.count()

    def __init__(
        self,
        symbol_grid,
        complete=False,
        allow_terminated_paths=True,
        allow_loops=True,
        name=None,
    ):
        self._name = name if name is not None else f"pc-{next(PathConstrainer._instance_ids)}"
        self._symbol_grid = symbol_grid
        self._complete = complete
        self._allow_terminated_paths = allow_terminated_paths
        self._allow_loops = allow_loops
        self._num_paths = None

        self._path_instance_grid = {
            p: Int(f"{self._name}-pi-{p.y}-{p.x}") for p in symbol_grid.grid
        }
        self._path_order_grid = {
            p: Int(f"{self._name}-po-{p.y}-{p.x}") for p in symbol_grid.grid
        }

        self._add_path_edge_constraints()
        self._add_path_instance_grid_constraints()
        self._add_path_order_grid_constraints()
        self._add_allow_terminated_paths_constraints()
        logger.debug(
            "%s: %d cells, complete=%s terminated=%s loops=%s",
            self._name,
            len(self._path_order_grid),
            complete,
            allow_terminated_paths,
            allow_loops,
        )

    def _points_dir(self, cell, d):
        sym = self._symbol_grid.symbol_set
        return Or([cell == s for s in sym.symbols_for_direction(d)])

    def _add_path_edge_constraints(self):
        solver = self._symbol_grid.solver
        sym = self._symbol_grid.symbol_set
        lattice = self._symbol_grid.lattice
        grid = self._symbol_grid.grid

        for p, cell in grid.items():
            for d in lattice.edge_sharing_directions():
                np = p.translate(d)
                ncell = grid.get(np)
                if ncell is not None:
                    add_constraint(
                        solver,
                        Implies(
                            self._points_dir(cell, d),
                            self._points_dir(ncell, lattice.opposite_direction(d)),
                        ),
                    )
                else:
                    add_constraint(
                        solver, *[cell != s for s in sym.symbols_for_direction(d)]
                    )

    def _add_path_instance_grid_constraints(self):
        solver = self._symbol_grid.solver
        sym = self._symbol_grid.symbol_set
        lattice = self._symbol_grid.lattice
        grid = self._symbol_grid.grid
        num_points = len(grid)

        for p, pi in self._path_instance_grid.items():
            cell = grid[p]
            add_constraint(
                solver,
                pi >= (0 if self._complete else -1),
                pi < num_points,
                sym.is_path(cell) == (pi != -1),
                # a path's instance id is the lattice index of its order 0 cell
                (self._path_order_grid[p] == 0) == (pi == lattice.index_of(p)),
            )
            for d in lattice.edge_sharing_directions():
                np = p.translate(d)
                if np in grid:
                    add_constraint(
                        solver,
                        Implies(self._points_dir(cell, d), pi == self._path_instance_grid[np]),
                    )

    def _add_path_order_grid_constraints(self):
        solver = self._symbol_grid.solver
        sym = self._symbol_grid.symbol_set
        lattice = self._symbol_grid.lattice
        grid = self._symbol_grid.grid
        order = self._path_order_grid

        for p, po in order.items():
            cell = grid[p]
            add_constraint(
                solver,
                po >= (0 if self._complete else -1),
                po < len(grid),
                sym.is_path(cell) == (po != -1),
            )

            for d in lattice.edge_sharing_directions():
                s = sym.terminal_for_direction(d)
                np = p.translate(d)
                if s is None or np not in order:
                    continue
                # terminals sit at an end of the numbering, walking inward
                add_constraint(
                    solver,
                    Implies(
                        cell == s,
                        Or(
                            And(po == 0, order[np] == 1),
                            And(po > 0, order[np] == po - 1),
                        ),
                    ),
                )

            for d1, d2 in combinations(lattice.edge_sharing_directions(), 2):
                p1, p2 = p.translate(d1), p.translate(d2)
                if p1 not in order or p2 not in order:
                    continue
                s = sym.symbol_for_direction_pair(d1, d2)
                o1, o2 = order[p1], order[p2]
                add_constraint(
                    solver,
                    Implies(cell == s, o1 != o2),
                    Implies(
                        And(cell == s, po > 0),
                        Or(
                            And(o1 == po - 1, self._next_order(o2, po)),
                            And(self._next_order(o1, po), o2 == po - 1),
                        ),
                    ),
                )

    def _next_order(self, neighbor_order, po):
        # a loop's numbering wraps back to its order 0 cell
        if self._allow_loops:
            return Or(neighbor_order == po + 1, neighbor_order == 0)
        return neighbor_order == po + 1

    def _add_allow_terminated_paths_constraints(self):
        if self._allow_terminated_paths:
            return
        sym = self._symbol_grid.symbol_set
        for cell in self._symbol_grid.grid.values():
            add_constraint(self._symbol_grid.solver, Not(sym.is_terminal(cell)))

    @property
    def num_paths(self):
        """An expression for the number of distinct paths (one order 0 cell each)."""
        if self._num_paths is None:
            self._num_paths = Sum([If(po == 0, 1, 0) for po in self._path_order_grid.values()])
        return self._num_paths

    @property
    def path_instance_grid(self):
        """
        Path instance ids, keyed by Point.

        Each path has a distinct id, the lattice index of its order 0 cell;
        -1 for cells outside any path.
        """
        return self._path_instance_grid

    @property
    def path_order_grid(self):
        """
        Path traversal order, keyed by Point.

        -1 for cells outside any path.
        """
        return self._path_order_grid

    def path_numbering_to_string(self):
        """
        Renders each path cell as its instance letter plus its order, e.g. ``A03``.

        Call only after the solver has been checked.
        """
        model = self._symbol_grid.solver.model()
        lattice = self._symbol_grid.lattice
        blank = " " * config.PATH_LABEL_WIDTH

        def print_function(p):
            pi = eval_int(model, self._path_instance_grid[p])
            if pi == -1:
                return blank
            po = eval_int(model, self._path_order_grid[p])
            return f"{chr(ord('A') + pi)}{po:02d}".ljust(config.PATH_LABEL_WIDTH)

        return lattice.to_string(print_function, blank)
