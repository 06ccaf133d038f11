# regions.py
"""
Constraints grouping cells into contiguous regions.

Each region is modeled as a subtree spanning its cells: every cell either is
outside all regions (X), is the root of its region (R), or points at the
edge-sharing neighbor that is its parent. Region id and region size are
copied along parent edges, and subtree sizes are summed up them, so a model
only exists when every parent chain ends at a root.
"""

import itertools
import logging

from z3 import And, If, Implies, Int, Or, Sum

from . import config
from .engine import add_constraint, eval_int, new_solver
from .geometry import Direction
from .utils import combinations

logger = logging.getLogger(__name__)

# parent_grid value for a cell that is not part of any region
X = 0
# parent_grid value for the root of a region's subtree
R = 1


class RegionConstrainer:
    """
    Creates constraints for grouping cells into contiguous regions.

    :param lattice: the structure of the grid
    :param solver: a Solver or Optimize; a new Solver is created if None
    :param complete: if True, every cell must be part of a region
    :param rectangular: if True, for each cell in a region, pairs of its
        neighbors in the same region must pull their common neighbors into
        the region too
    :param min_region_size: the minimum size of a region, default 1
    :param max_region_size: the maximum size of a region, default the lattice size
    :param name: optional prefix for variable names
    """

    _instance_ids = itertools.count()

    def __init__(
        self,
        lattice,
        solver=None,
        complete=True,
        rectangular=False,
        min_region_size=None,
        max_region_size=None,
        name=None,
    ):
        self._name = name if name is not None else f"rc-{next(RegionConstrainer._instance_ids)}"
        self._lattice = lattice
        self._solver = new_solver(solver)
        self._complete = complete
        self._min_region_size = 1 if min_region_size is None else min_region_size
        self._max_region_size = (
            len(lattice.points) if max_region_size is None else max_region_size
        )
        self._manage_edge_sharing_directions()
        self._create_grids()
        self._add_constraints()
        if rectangular:
            self._add_rectangular_constraints()
        logger.debug(
            "%s: %d cells, region size [%d, %d], complete=%s rectangular=%s",
            self._name,
            len(lattice.points),
            self._min_region_size,
            self._max_region_size,
            complete,
            rectangular,
        )

    def _manage_edge_sharing_directions(self):
        self._edge_sharing_vector_to_index = {}
        self._parent_type_to_index = {"X": X, "R": R}
        self._parent_types = ["X", "R"]
        for d in self._lattice.edge_sharing_directions():
            index = len(self._parent_types)
            self._parent_type_to_index[d.name] = index
            self._edge_sharing_vector_to_index[d.vector] = index
            self._parent_types.append(d.name)

    def _make_var(self, prefix, p):
        return Int(f"{self._name}-{prefix}-{p.y}-{p.x}")

    def _create_grids(self):
        num_points = len(self._lattice.points)
        self._parent_grid = {}
        self._subtree_size_grid = {}
        self._region_id_grid = {}
        self._region_size_grid = {}

        for p in self._lattice.points:
            parent = self._make_var("p", p)
            add_constraint(
                self._solver,
                parent >= (R if self._complete else X),
                parent < len(self._parent_types),
            )
            self._parent_grid[p] = parent

            subtree_size = self._make_var("ss", p)
            add_constraint(
                self._solver,
                subtree_size >= (1 if self._complete else 0),
                subtree_size <= self._max_region_size,
            )
            self._subtree_size_grid[p] = subtree_size

            region_id = self._make_var("id", p)
            add_constraint(
                self._solver,
                region_id >= (0 if self._complete else -1),
                region_id < num_points,
                Implies(parent == X, region_id == -1),
                Implies(parent == R, region_id == self._lattice.index_of(p)),
            )
            self._region_id_grid[p] = region_id

            region_size = self._make_var("rs", p)
            if self._complete:
                add_constraint(self._solver, region_size >= self._min_region_size)
            else:
                add_constraint(
                    self._solver,
                    Or(region_size >= self._min_region_size, region_size == -1),
                )
            add_constraint(
                self._solver,
                region_size <= self._max_region_size,
                Implies(parent == X, region_size == -1),
                Implies(parent == R, region_size == subtree_size),
            )
            self._region_size_grid[p] = region_size

    def _add_constraints(self):
        for p in self._lattice.points:
            parent = self._parent_grid[p]
            subtree_size_terms = [If(parent != X, 1, 0)]

            for d in self._lattice.edge_sharing_directions():
                sp = p.translate(d)
                if sp in self._parent_grid:
                    # sp's parent is p when sp points back in the opposite direction
                    opposite = self.edge_sharing_direction_to_index(
                        self._lattice.opposite_direction(d)
                    )
                    sp_parent = self._parent_grid[sp]
                    add_constraint(
                        self._solver,
                        Implies(parent == X, sp_parent != opposite),
                        Implies(
                            sp_parent == opposite,
                            And(
                                self._region_id_grid[p] == self._region_id_grid[sp],
                                self._region_size_grid[p] == self._region_size_grid[sp],
                            ),
                        ),
                    )
                    subtree_size_terms.append(
                        If(sp_parent == opposite, self._subtree_size_grid[sp], 0)
                    )
                else:
                    add_constraint(
                        self._solver,
                        parent != self.edge_sharing_direction_to_index(d),
                    )

            add_constraint(
                self._solver, self._subtree_size_grid[p] == Sum(subtree_size_terms)
            )

    def _add_rectangular_constraints(self):
        for p in self._lattice.points:
            region_id = self._region_id_grid[p]
            neighbors = self._lattice.edge_sharing_neighbors(self._region_id_grid, p)
            for n1, n2 in combinations(neighbors, 2):
                n1_points = {
                    n.location
                    for n in self._lattice.edge_sharing_neighbors(self._region_id_grid, n1.location)
                }
                n2_points = {
                    n.location
                    for n in self._lattice.edge_sharing_neighbors(self._region_id_grid, n2.location)
                }
                common_points = (n1_points & n2_points) - {p}
                if not common_points:
                    continue
                add_constraint(
                    self._solver,
                    Implies(
                        And(
                            n1.symbol == region_id,
                            n2.symbol == region_id,
                            region_id != -1,
                        ),
                        And([self._region_id_grid[cp] == region_id for cp in sorted(common_points)]),
                    ),
                )

    def edge_sharing_direction_to_index(self, direction):
        """
        Returns the parent_grid value meaning "my parent lies in this direction".

        For instance, for the direction (-1, 0), returns the index for N.

        :param direction: a Direction or a Vector
        """
        if isinstance(direction, Direction):
            direction = direction.vector
        return self._edge_sharing_vector_to_index[direction]

    def parent_type_to_index(self, parent_type):
        """
        Returns the parent_grid value for a parent type name.

        :param parent_type: a direction name like "N", or "R" or "X"
        """
        return self._parent_type_to_index[parent_type]

    @property
    def solver(self):
        return self._solver

    @property
    def region_id_grid(self):
        """
        Region identifiers, keyed by Point.

        A region's id is the lattice index of the root of its subtree, or -1
        for cells outside any region.
        """
        return self._region_id_grid

    @property
    def region_size_grid(self):
        return self._region_size_grid

    @property
    def parent_grid(self):
        return self._parent_grid

    @property
    def subtree_size_grid(self):
        """One plus the number of descendants of each cell in its region's subtree."""
        return self._subtree_size_grid

    # --- rendering; call only after the solver has been checked ---

    def trees_to_string(self):
        model = self._solver.model()

        def print_function(p):
            parent_type = self._parent_types[eval_int(model, self._parent_grid[p])]
            return config.PARENT_LABELS.get(parent_type, parent_type)

        return self._lattice.to_string(print_function, config.BLANK)

    def _numbers_to_string(self, cell_map):
        model = self._solver.model()
        width = config.NUMBER_WIDTH
        return self._lattice.to_string(
            lambda p: str(eval_int(model, cell_map[p])).rjust(width), " " * width
        )

    def subtree_sizes_to_string(self):
        return self._numbers_to_string(self._subtree_size_grid)

    def region_ids_to_string(self):
        return self._numbers_to_string(self._region_id_grid)

    def region_sizes_to_string(self):
        return self._numbers_to_string(self._region_size_grid)
