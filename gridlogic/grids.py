# grids.py
"""Grids of cells that can be solved to contain specific symbols."""

import itertools
import logging

from z3 import Int, Or

from .engine import add_constraint, eval_int, is_sat, new_solver

logger = logging.getLogger(__name__)


class SymbolGrid:
    """
    A grid of cells, one z3 Int per lattice point, each ranging over a SymbolSet.

    :param lattice: the structure of the grid
    :param symbol_set: the symbols to be filled into the grid
    :param solver: a Solver or Optimize; a new Solver is created if None
    :param name: optional prefix for variable names; by default a process-wide
        counter keeps names unique across grids sharing one solver
    """

    _instance_ids = itertools.count()

    def __init__(self, lattice, symbol_set, solver=None, name=None):
        if name is None:
            name = f"sg-{next(SymbolGrid._instance_ids)}"
        self._lattice = lattice
        self._symbol_set = symbol_set
        self._solver = new_solver(solver)
        self._grid = {}
        lo, hi = symbol_set.min_index(), symbol_set.max_index()
        for p in lattice.points:
            v = Int(f"{name}-{p.y}-{p.x}")
            add_constraint(self._solver, v >= lo, v <= hi)
            self._grid[p] = v
        logger.debug("%s: %d cells over symbols [%d, %d]", name, len(self._grid), lo, hi)

    @property
    def solver(self):
        return self._solver

    @property
    def symbol_set(self):
        return self._symbol_set

    @property
    def grid(self):
        """The dict of Point to z3 constant."""
        return self._grid

    @property
    def lattice(self):
        return self._lattice

    def cell_at(self, p):
        return self._grid[p]

    def edge_sharing_neighbors(self, p):
        """Returns the Neighbors sharing an edge with the cell at p."""
        return self._lattice.edge_sharing_neighbors(self._grid, p)

    def vertex_sharing_neighbors(self, p):
        """Returns the Neighbors sharing a vertex with the cell at p (orthogonal and diagonal)."""
        return self._lattice.vertex_sharing_neighbors(self._grid, p)

    def cell_is(self, p, value):
        """Returns an expression that's true iff the cell at p contains value."""
        return self._grid[p] == value

    def cell_is_one_of(self, p, values):
        cell = self._grid[p]
        return Or([cell == v for v in values])

    def solve(self):
        """Returns True if the puzzle has a solution."""
        result = is_sat(self._solver)
        logger.info("solve: %s", "sat" if result else "unsat")
        return result

    def is_unique(self):
        """
        Returns True if the current solution is the only one.

        Must be called after a successful solve. Asserts that some cell
        differs from the current model, so afterwards the solver's model
        (if any) is an alternate solution.
        """
        model = self._solver.model()
        or_terms = [cell != model.eval(cell, model_completion=True) for cell in self._grid.values()]
        add_constraint(self._solver, Or(or_terms))
        unique = not is_sat(self._solver)
        logger.info("is_unique: %s", unique)
        return unique

    def solved_grid(self):
        """Returns a dict of Point to solved symbol index. Call after solve."""
        model = self._solver.model()
        return {p: eval_int(model, cell) for p, cell in self._grid.items()}

    def to_string(self, hook_function=None):
        """
        Renders the solved grid using symbol labels. Call after solve.

        :param hook_function: optional; called with (Point, symbol index) for
            each cell, returns a string to show or None for the default label
        """
        model = self._solver.model()
        label_width = max(len(s.label) for s in self._symbol_set.symbols.values())

        def print_function(p):
            i = eval_int(model, self._grid[p])
            label = None
            if hook_function is not None:
                label = hook_function(p, i)
            if label is None:
                symbol = self._symbol_set.symbols.get(i)
                label = symbol.label if symbol is not None else str(i)
                label = label.rjust(label_width)
            return label

        return self._lattice.to_string(print_function, " " * label_width)

    def print(self, hook_function=None):
        print(self.to_string(hook_function))
