# geometry.py
"""
Geometric objects for modeling grids of cells.

Points and vectors are value types, so they can be used directly as dict keys
and set members. A lattice is the ordered set of points making up a grid,
together with the adjacency rules (edge sharing and vertex sharing) and the
transformations (rotation and reflection) that the grid supports.
"""

from collections import namedtuple

from .errors import LatticeError
from .utils import zip_columns


class Vector(namedtuple("Vector", ["dy", "dx"])):
    """An offset in two dimensions."""

    __slots__ = ()

    def negate(self):
        return Vector(-self.dy, -self.dx)

    def translate(self, other):
        """Returns this vector offset by another vector."""
        return Vector(self.dy + other.dy, self.dx + other.dx)


class Direction(namedtuple("Direction", ["name", "vector"])):
    """A named vector that offsets by one cell in the grid."""

    __slots__ = ()


class Point(namedtuple("Point", ["y", "x"])):
    """A location, generally the center of a grid cell. Ordered by (y, x)."""

    __slots__ = ()

    def translate(self, d):
        """
        Translates this point.

        :param d: a Vector or a Direction
        """
        if isinstance(d, Direction):
            d = d.vector
        return Point(self.y + d.dy, self.x + d.dx)


# A cell adjacent to another: its location, the direction it lies in, and
# whatever value the cell map held for it (usually a z3 constant).
Neighbor = namedtuple("Neighbor", ["location", "direction", "symbol"])


def _compose(f, g):
    return lambda v: f(g(v))


def _transformations(rotate, reflect, order, allow_rotations, allow_reflections):
    """
    Builds the transformation group generated by one rotation and one reflection.

    :param rotate: the smallest clockwise rotation of the lattice
    :param reflect: any reflection of the lattice
    :param order: how many times rotate must be applied to return to identity
    """
    fs = [lambda v: v]
    if allow_rotations:
        for _ in range(order - 1):
            fs.append(_compose(rotate, fs[-1]))
    if allow_reflections:
        fs = fs + [_compose(reflect, f) for f in fs]
    return fs


class Lattice:
    """
    Base class for the structure of a grid.

    Subclasses supply the directions, labels and transformations; the base
    class owns the sorted point list and the point to index bijection.

    :param points: the points in the lattice, in any order; duplicates are dropped
    """

    def __init__(self, points):
        self._points = sorted(set(Point(*p) for p in points))
        if not self._points:
            raise LatticeError("A lattice must contain at least one point")
        self._point_indices = {p: i for i, p in enumerate(self._points)}
        self._vector_direction = {d.vector: d for d in self.vertex_sharing_directions()}

    @property
    def points(self):
        """The points in the lattice, sorted."""
        return self._points

    def point_to_index(self, point):
        """Returns the index of the point in the sorted point list, or None."""
        return self._point_indices.get(point)

    def index_of(self, point):
        """Like point_to_index, but raises LatticeError for unknown points."""
        index = self._point_indices.get(point)
        if index is None:
            raise LatticeError(f"{point} is not in the lattice")
        return index

    def __contains__(self, point):
        return point in self._point_indices

    def __len__(self):
        return len(self._points)

    def edge_sharing_directions(self):
        """Directions to the cells that share an edge with a cell."""
        raise NotImplementedError()

    def vertex_sharing_directions(self):
        """Directions to the cells that share a vertex with a cell."""
        raise NotImplementedError()

    def label_for_direction(self, direction):
        """Returns a label for a path terminal arm pointing in the direction."""
        raise NotImplementedError()

    def label_for_direction_pair(self, dir1, dir2):
        """Returns a label for a path segment with arms in both directions."""
        raise NotImplementedError()

    def transformation_functions(self, allow_rotations, allow_reflections):
        """
        Returns the allowed Vector -> Vector transformations.

        The list always starts with the identity and is closed under
        composition.
        """
        raise NotImplementedError()

    def get_inside_outside_check_directions(self):
        """
        Returns directions for a loop inside/outside parity check.

        The first element is the direction to look; the second is a list of
        directions whose path arms count as crossings. On a rectangular grid
        (N, [W]) means: look north and count the cells with an arm going west.
        """
        raise NotImplementedError()

    def opposite_direction(self, direction):
        return self._vector_direction[direction.vector.negate()]

    def edge_sharing_points(self, point):
        return [point.translate(d) for d in self.edge_sharing_directions()]

    def vertex_sharing_points(self, point):
        return [point.translate(d) for d in self.vertex_sharing_directions()]

    @staticmethod
    def _get_neighbors(cell_map, p, directions):
        cells = []
        for d in directions:
            point = p.translate(d)
            cell = cell_map.get(point)
            if cell is not None:
                cells.append(Neighbor(point, d, cell))
        return cells

    def edge_sharing_neighbors(self, cell_map, p):
        """
        Returns the Neighbors sharing an edge with p.

        :param cell_map: a dict from Point to value (usually z3 constants)
        :param p: the point of the given cell
        """
        return Lattice._get_neighbors(cell_map, p, self.edge_sharing_directions())

    def vertex_sharing_neighbors(self, cell_map, p):
        """Returns the Neighbors sharing a vertex with p."""
        return Lattice._get_neighbors(cell_map, p, self.vertex_sharing_directions())

    def to_string(self, hook_function, blank=" "):
        """
        Renders something for each location, top to bottom, left to right.

        :param hook_function: called with each Point in the lattice; returns the
            string to show, or None for blank. Strings with embedded newlines
            are treated as multi-line elements.
        :param blank: shown for locations outside the lattice
        """
        min_y = self._points[0].y
        max_y = self._points[-1].y
        min_x = min(p.x for p in self._points)
        max_x = max(p.x for p in self._points)
        rows = []
        for y in range(min_y, max_y + 1):
            columns = []
            for x in range(min_x, max_x + 1):
                p = Point(y, x)
                output = hook_function(p) if p in self._point_indices else None
                columns.append(blank if output is None else output)
            rows.append(zip_columns(columns))
        return "\n".join(rows)

    def print(self, hook_function, blank=" "):
        print(self.to_string(hook_function, blank))


class RectangularLattice(Lattice):
    """A lattice of square cells."""

    EDGE_DIRECTIONS = {
        "N": Direction("N", Vector(-1, 0)),
        "S": Direction("S", Vector(1, 0)),
        "E": Direction("E", Vector(0, 1)),
        "W": Direction("W", Vector(0, -1)),
    }
    VERTEX_DIRECTIONS = dict(
        EDGE_DIRECTIONS,
        NE=Direction("NE", Vector(-1, 1)),
        NW=Direction("NW", Vector(-1, -1)),
        SE=Direction("SE", Vector(1, 1)),
        SW=Direction("SW", Vector(1, -1)),
    )

    _DIRECTION_LABELS = {"N": "╵", "S": "╷", "E": "╶", "W": "╴"}
    _PAIR_LABELS = {
        frozenset(["N", "S"]): "│",
        frozenset(["E", "W"]): "─",
        frozenset(["N", "E"]): "└",
        frozenset(["S", "E"]): "┌",
        frozenset(["S", "W"]): "┐",
        frozenset(["N", "W"]): "┘",
    }

    def edge_sharing_directions(self):
        return list(RectangularLattice.EDGE_DIRECTIONS.values())

    def vertex_sharing_directions(self):
        return list(RectangularLattice.VERTEX_DIRECTIONS.values())

    def label_for_direction(self, direction):
        try:
            return RectangularLattice._DIRECTION_LABELS[direction.name]
        except KeyError:
            raise LatticeError(f"No label for direction {direction.name}") from None

    def label_for_direction_pair(self, dir1, dir2):
        try:
            return RectangularLattice._PAIR_LABELS[frozenset([dir1.name, dir2.name])]
        except KeyError:
            raise LatticeError(
                f"No label for direction pair {dir1.name}, {dir2.name}"
            ) from None

    def transformation_functions(self, allow_rotations, allow_reflections):
        return _transformations(
            lambda v: Vector(v.dx, -v.dy),
            lambda v: Vector(v.dy, -v.dx),
            4,
            allow_rotations,
            allow_reflections,
        )

    def get_inside_outside_check_directions(self):
        return (
            RectangularLattice.EDGE_DIRECTIONS["N"],
            [RectangularLattice.EDGE_DIRECTIONS["W"]],
        )


class _HexagonalLattice(Lattice):
    # Hexagonal lattices use doubled coordinates, so half the (y, x) pairs in
    # a bounding box are not cells; rendering leaves those blank.
    DIRECTIONS = {}

    def edge_sharing_directions(self):
        return list(self.DIRECTIONS.values())

    def vertex_sharing_directions(self):
        return list(self.DIRECTIONS.values())

    def label_for_direction(self, direction):
        return direction.name

    def label_for_direction_pair(self, dir1, dir2):
        return dir1.name + dir2.name


class PointyToppedHexagonalLattice(_HexagonalLattice):
    """Hexagons with a vertex at the top; rows are horizontal, columns doubled."""

    DIRECTIONS = {
        "NE": Direction("NE", Vector(-1, 1)),
        "E": Direction("E", Vector(0, 2)),
        "SE": Direction("SE", Vector(1, 1)),
        "SW": Direction("SW", Vector(1, -1)),
        "W": Direction("W", Vector(0, -2)),
        "NW": Direction("NW", Vector(-1, -1)),
    }

    def transformation_functions(self, allow_rotations, allow_reflections):
        return _transformations(
            lambda v: Vector((v.dy + v.dx) // 2, (v.dx - 3 * v.dy) // 2),
            lambda v: Vector(-v.dy, v.dx),
            6,
            allow_rotations,
            allow_reflections,
        )

    def get_inside_outside_check_directions(self):
        return (self.DIRECTIONS["E"], [self.DIRECTIONS["NE"], self.DIRECTIONS["NW"]])


class FlatToppedHexagonalLattice(_HexagonalLattice):
    """Hexagons with an edge at the top; columns are vertical, rows doubled."""

    DIRECTIONS = {
        "N": Direction("N", Vector(-2, 0)),
        "NE": Direction("NE", Vector(-1, 1)),
        "SE": Direction("SE", Vector(1, 1)),
        "S": Direction("S", Vector(2, 0)),
        "SW": Direction("SW", Vector(1, -1)),
        "NW": Direction("NW", Vector(-1, -1)),
    }

    def transformation_functions(self, allow_rotations, allow_reflections):
        return _transformations(
            lambda v: Vector((v.dy + 3 * v.dx) // 2, (v.dx - v.dy) // 2),
            lambda v: Vector(v.dy, -v.dx),
            6,
            allow_rotations,
            allow_reflections,
        )

    def get_inside_outside_check_directions(self):
        return (self.DIRECTIONS["N"], [self.DIRECTIONS["NW"], self.DIRECTIONS["SW"]])


def get_rectangle_lattice(height, width):
    """Returns a RectangularLattice of the given size, with (0, 0) at the top left."""
    return RectangularLattice([Point(y, x) for y in range(height) for x in range(width)])


def get_square_lattice(length):
    return get_rectangle_lattice(length, length)
