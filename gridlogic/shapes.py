# shapes.py
"""
Constraints for placing fixed shapes into the grid.

Every cell gets a shape type (which shape covers it) and a shape instance
(the lattice index of the anchor of the placement covering it). For each
anchor, the instance id is either unused, or used by exactly the cells of
one shape variant translated onto that anchor.
"""

import enum
import itertools
import logging
from collections import defaultdict

from z3 import And, Const, IntSort, IntVal, Int, Not, Or, is_expr

from . import config
from .engine import add_constraint, eval_int, new_solver, pb_eq
from .errors import PayloadSortError, ShapeSpecError
from .geometry import Vector
from .quadtree import ExpressionQuadTree

logger = logging.getLogger(__name__)


class ShapeExprKey(enum.Enum):
    HAS_INSTANCE_ID = 0
    NOT_HAS_INSTANCE_ID = 1
    HAS_SHAPE_TYPE = 2


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


def _payload_sort(payload):
    if is_expr(payload):
        return payload.sort()
    if _is_int(payload):
        return IntSort()
    raise PayloadSortError(f"Could not determine z3 sort for {payload!r}")


class Shape:
    """
    A shape defined by a list of Vector offsets.

    :param offsets: each offset is a Vector, or a (Vector, payload) tuple to
        attach a payload value (a z3 expression or an int) to that cell
    """

    def __init__(self, offsets):
        self._offset_tuples = []
        for offset in offsets:
            if isinstance(offset, Vector):
                self._offset_tuples.append((offset, None))
            elif (
                isinstance(offset, tuple)
                and len(offset) == 2
                and isinstance(offset[0], Vector)
            ):
                payload = offset[1]
                if payload is not None and not (is_expr(payload) or _is_int(payload)):
                    raise PayloadSortError(f"Unsupported payload {payload!r}")
                self._offset_tuples.append(offset)
            else:
                raise ShapeSpecError(f"Invalid shape offset: {offset!r}")
        if not self._offset_tuples:
            raise ShapeSpecError("A shape must have at least one offset")

    @property
    def offset_vectors(self):
        return [v for v, _ in self._offset_tuples]

    @property
    def offsets_with_payloads(self):
        return self._offset_tuples

    def __len__(self):
        return len(self._offset_tuples)

    def transform(self, f):
        """Returns a new shape with each offset transformed by f."""
        return Shape([(f(v), payload) for v, payload in self._offset_tuples])

    def canonicalize(self):
        """
        Returns an equivalent shape in sorted order whose first offset is Vector(0, 0).

        Equivalent shapes canonicalize identically, which is what variant
        deduplication relies on.
        """
        offset_tuples = sorted(self._offset_tuples, key=lambda t: t[0])
        first_negated = offset_tuples[0][0].negate()
        return Shape([(v.translate(first_negated), payload) for v, payload in offset_tuples])

    def equivalent(self, shape):
        """Returns True iff the shapes have the same offsets and payloads, in order."""
        if len(self._offset_tuples) != len(shape._offset_tuples):
            return False
        for (v1, p1), (v2, p2) in zip(self._offset_tuples, shape._offset_tuples):
            if v1 != v2:
                return False
            if is_expr(p1) and is_expr(p2):
                if not p1.eq(p2):
                    return False
            elif is_expr(p1) or is_expr(p2):
                return False
            elif p1 != p2:
                return False
        return True


class ShapeConstrainer:
    """
    Creates constraints for placing fixed shape regions into the grid.

    :param lattice: the structure of the grid
    :param shapes: the shapes to place; list a shape several times to require
        that many copies (when allow_copies is False)
    :param solver: a Solver or Optimize; a new Solver is created if None
    :param complete: if True, every cell must be part of a shape
    :param allow_rotations: if True, rotations of the shapes may be placed
    :param allow_reflections: if True, reflections of the shapes may be placed
    :param allow_copies: if True, any number of copies of each shape may be placed
    :param name: optional prefix for variable names
    """

    _instance_ids = itertools.count()

    def __init__(
        self,
        lattice,
        shapes,
        solver=None,
        complete=False,
        allow_rotations=False,
        allow_reflections=False,
        allow_copies=False,
        name=None,
    ):
        self._name = name if name is not None else f"sc-{next(ShapeConstrainer._instance_ids)}"
        self._lattice = lattice
        self._shapes = list(shapes)
        self._solver = new_solver(solver)
        self._complete = complete
        self._allow_copies = allow_copies
        if not self._shapes:
            raise ShapeSpecError("At least one shape is required")

        self._make_variants(allow_rotations, allow_reflections)
        self._create_grids()
        self._add_constraints()

    def _make_variants(self, allow_rotations, allow_reflections):
        fs = self._lattice.transformation_functions(allow_rotations, allow_reflections)
        self._variants = []
        for shape in self._shapes:
            shape_variants = []
            for f in fs:
                variant = shape.transform(f).canonicalize()
                if not any(variant.equivalent(v) for v in shape_variants):
                    shape_variants.append(variant)
            self._variants.append(shape_variants)
        logger.debug(
            "%s: variants per shape %s", self._name, [len(v) for v in self._variants]
        )

    def _create_grids(self):
        num_points = len(self._lattice.points)
        lower = 0 if self._complete else -1
        self._shape_type_grid = {}
        self._shape_instance_grid = {}
        for p in self._lattice.points:
            shape_type = Int(f"{self._name}-st-{p.y}-{p.x}")
            add_constraint(self._solver, shape_type >= lower, shape_type < len(self._shapes))
            self._shape_type_grid[p] = shape_type

            shape_instance = Int(f"{self._name}-si-{p.y}-{p.x}")
            add_constraint(self._solver, shape_instance >= lower, shape_instance < num_points)
            self._shape_instance_grid[p] = shape_instance

        self._shape_payload_grid = None
        sort = None
        for shape in self._shapes:
            for _, payload in shape.offsets_with_payloads:
                if payload is None:
                    continue
                payload_sort = _payload_sort(payload)
                if sort is None:
                    sort = payload_sort
                elif not sort.eq(payload_sort):
                    raise PayloadSortError(
                        f"Payload {payload!r} has sort {payload_sort}, expected {sort}"
                    )
        if sort is None:
            return
        self._shape_payload_grid = {
            p: Const(f"{self._name}-sp-{p.y}-{p.x}", sort) for p in self._lattice.points
        }

    def _add_constraints(self):
        self._add_grid_agreement_constraints()
        self._add_shape_instance_constraints()
        if not self._allow_copies:
            for shape_index, shape in enumerate(self._shapes):
                self._add_single_copy_constraints(shape_index, shape)

    def _add_grid_agreement_constraints(self):
        for p, shape_type in self._shape_type_grid.items():
            add_constraint(
                self._solver, (shape_type == -1) == (self._shape_instance_grid[p] == -1)
            )

    def _add_shape_instance_constraints(self):
        int_vals = [IntVal(i) for i in range(max(len(self._lattice.points), len(self._variants)))]

        quadtree = ExpressionQuadTree(self._lattice.points)
        for instance_id in range(len(self._lattice.points)):
            quadtree.add_expr(
                (ShapeExprKey.HAS_INSTANCE_ID, instance_id),
                lambda p, i=instance_id: self._shape_instance_grid[p] == int_vals[i],
            )
            quadtree.add_expr(
                (ShapeExprKey.NOT_HAS_INSTANCE_ID, instance_id),
                lambda p, i=instance_id: Not(self._shape_instance_grid[p] == int_vals[i]),
            )
        for shape_index in range(len(self._variants)):
            quadtree.add_expr(
                (ShapeExprKey.HAS_SHAPE_TYPE, shape_index),
                lambda p, i=shape_index: self._shape_type_grid[p] == int_vals[i],
            )

        root_options = defaultdict(list)
        for shape_index, variants in enumerate(self._variants):
            for variant in variants:
                for root_point in self._lattice.points:
                    instance_id = self._lattice.index_of(root_point)
                    point_payload_tuples = []
                    for offset_vector, payload in variant.offsets_with_payloads:
                        point = root_point.translate(offset_vector)
                        if point not in self._shape_instance_grid:
                            point_payload_tuples = None
                            break
                        point_payload_tuples.append((point, payload))
                    if not point_payload_tuples:
                        continue

                    and_terms = []
                    for point, payload in point_payload_tuples:
                        and_terms.append(
                            quadtree.get_point_expr(
                                (ShapeExprKey.HAS_INSTANCE_ID, instance_id), point
                            )
                        )
                        and_terms.append(
                            quadtree.get_point_expr(
                                (ShapeExprKey.HAS_SHAPE_TYPE, shape_index), point
                            )
                        )
                        if self._shape_payload_grid is not None and payload is not None:
                            and_terms.append(self._shape_payload_grid[point] == payload)
                    other_points_expr = quadtree.get_other_points_expr(
                        (ShapeExprKey.NOT_HAS_INSTANCE_ID, instance_id),
                        [point for point, _ in point_payload_tuples],
                    )
                    if other_points_expr is not None:
                        and_terms.append(other_points_expr)
                    root_options[root_point].append(And(and_terms))

        num_options = 0
        for p in self._lattice.points:
            instance_id = self._lattice.index_of(p)
            not_has_instance_id_expr = quadtree.get_other_points_expr(
                (ShapeExprKey.NOT_HAS_INSTANCE_ID, instance_id), []
            )
            or_terms = root_options[p]
            num_options += len(or_terms)
            if or_terms:
                add_constraint(self._solver, Or(or_terms + [not_has_instance_id_expr]))
            else:
                add_constraint(self._solver, not_has_instance_id_expr)
        logger.debug("%s: %d candidate placements", self._name, num_options)

    def _add_single_copy_constraints(self, shape_index, shape):
        sum_terms = [(shape_type == shape_index, 1) for shape_type in self._shape_type_grid.values()]
        add_constraint(self._solver, pb_eq(sum_terms, len(shape)))

    @property
    def solver(self):
        return self._solver

    @property
    def variants(self):
        """The deduplicated canonical variants of each shape, in shapes list order."""
        return self._variants

    @property
    def shape_type_grid(self):
        """
        Shape types, keyed by Point.

        Each cell holds the index (into the shapes list) of the shape placed
        over it, or -1.
        """
        return self._shape_type_grid

    def shape_type_at(self, p):
        return self._shape_type_grid[p]

    @property
    def shape_instance_grid(self):
        """
        Shape instance ids, keyed by Point.

        All cells of one placed shape share an id (the lattice index of the
        placement's anchor); -1 where no shape is placed.
        """
        return self._shape_instance_grid

    def shape_instance_at(self, p):
        return self._shape_instance_grid[p]

    @property
    def shape_payload_grid(self):
        """Payload constants keyed by Point, or None if the shapes carry no payloads."""
        return self._shape_payload_grid

    def shape_payload_at(self, p):
        return self._shape_payload_grid[p]

    # --- rendering; call only after the solver has been checked ---

    def _numbers_to_string(self, cell_map):
        model = self._solver.model()
        width = config.NUMBER_WIDTH

        def print_function(p):
            value = eval_int(model, cell_map[p])
            return str(value).rjust(width) if value >= 0 else None

        return self._lattice.to_string(print_function, " " * width)

    def shape_types_to_string(self):
        return self._numbers_to_string(self._shape_type_grid)

    def shape_instances_to_string(self):
        return self._numbers_to_string(self._shape_instance_grid)
