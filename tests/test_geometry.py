import pytest

from gridlogic import (
    FlatToppedHexagonalLattice,
    LatticeError,
    Point,
    PointyToppedHexagonalLattice,
    RectangularLattice,
    Vector,
    get_rectangle_lattice,
    get_square_lattice,
)

N = RectangularLattice.EDGE_DIRECTIONS["N"]
S = RectangularLattice.EDGE_DIRECTIONS["S"]
E = RectangularLattice.EDGE_DIRECTIONS["E"]
W = RectangularLattice.EDGE_DIRECTIONS["W"]


def test_points_are_value_keys():
    d = {Point(1, 2): "a"}
    assert d[Point(1, 2)] == "a"
    assert Point(0, 5) < Point(1, 0)
    assert Point(1, 1).translate(E) == Point(1, 2)
    assert Point(1, 1).translate(Vector(-1, -1)) == Point(0, 0)
    assert Vector(2, -3).negate() == Vector(-2, 3)
    assert Vector(1, 1).translate(Vector(2, 3)) == Vector(3, 4)


def test_lattice_sorts_and_indexes_points():
    lattice = RectangularLattice([Point(1, 0), Point(0, 1), Point(0, 0), Point(0, 1)])
    assert lattice.points == [Point(0, 0), Point(0, 1), Point(1, 0)]
    for i, p in enumerate(lattice.points):
        assert lattice.point_to_index(p) == i
        assert lattice.index_of(p) == i
    assert lattice.point_to_index(Point(5, 5)) is None
    with pytest.raises(LatticeError):
        lattice.index_of(Point(5, 5))
    assert Point(1, 0) in lattice
    assert len(lattice) == 3


def test_empty_lattice_is_rejected():
    with pytest.raises(LatticeError):
        RectangularLattice([])


def test_rectangle_lattice_shape():
    lattice = get_rectangle_lattice(2, 3)
    assert len(lattice.points) == 6
    assert lattice.points[-1] == Point(1, 2)
    assert len(get_square_lattice(3).points) == 9


def test_opposite_directions():
    lattice = get_square_lattice(2)
    assert lattice.opposite_direction(N) == S
    assert lattice.opposite_direction(E) == W
    ne = RectangularLattice.VERTEX_DIRECTIONS["NE"]
    sw = RectangularLattice.VERTEX_DIRECTIONS["SW"]
    assert lattice.opposite_direction(ne) == sw
    for d in lattice.edge_sharing_directions():
        assert lattice.opposite_direction(lattice.opposite_direction(d)) == d


def test_neighbors_skip_points_missing_from_map():
    lattice = get_square_lattice(2)
    cell_map = {p: lattice.index_of(p) for p in lattice.points}
    neighbors = lattice.edge_sharing_neighbors(cell_map, Point(0, 0))
    assert sorted(n.location for n in neighbors) == [Point(0, 1), Point(1, 0)]
    for n in neighbors:
        assert n.symbol == cell_map[n.location]
        assert Point(0, 0).translate(n.direction) == n.location
    assert len(lattice.vertex_sharing_neighbors(cell_map, Point(0, 0))) == 3
    assert len(lattice.edge_sharing_points(Point(0, 0))) == 4
    assert len(lattice.vertex_sharing_points(Point(0, 0))) == 8


def test_to_string_rows_and_holes():
    lattice = get_rectangle_lattice(2, 3)
    assert lattice.to_string(lambda p: str(p.x)) == "012\n012"
    sparse = RectangularLattice([Point(0, 0), Point(1, 1)])
    assert sparse.to_string(lambda p: "#") == "# \n #"
    assert sparse.to_string(lambda p: None, ".") == "..\n.."


def test_to_string_multiline_elements():
    lattice = get_rectangle_lattice(1, 2)
    assert lattice.to_string(lambda p: "a\nb", "  ") == "aa\nbb"


def test_rectangular_labels():
    lattice = get_square_lattice(1)
    assert lattice.label_for_direction_pair(N, S) == "│"
    assert lattice.label_for_direction_pair(S, N) == "│"
    assert lattice.label_for_direction_pair(W, E) == "─"
    assert lattice.label_for_direction(E) == "╶"


def test_inside_outside_directions():
    look, crossings = get_square_lattice(1).get_inside_outside_check_directions()
    assert look == N
    assert crossings == [W]


@pytest.mark.parametrize(
    "allow_rotations, allow_reflections, expected",
    [(False, False, 1), (True, False, 4), (False, True, 2), (True, True, 8)],
)
def test_rectangular_transformation_counts(allow_rotations, allow_reflections, expected):
    lattice = get_square_lattice(1)
    fs = lattice.transformation_functions(allow_rotations, allow_reflections)
    assert len(fs) == expected
    v = Vector(1, 2)
    assert fs[0](v) == v
    assert len({f(v) for f in fs}) == expected


def test_rectangular_transformations_are_closed():
    fs = get_square_lattice(1).transformation_functions(True, True)
    v = Vector(1, 2)
    images = {f(v) for f in fs}
    for f in fs:
        for g in fs:
            assert f(g(v)) in images


def test_rectangular_rotation_is_clockwise():
    rotate = get_square_lattice(1).transformation_functions(True, False)[1]
    assert rotate(N.vector) == E.vector
    assert rotate(E.vector) == S.vector


def test_pointy_hexagonal_rotations_cycle_directions():
    lattice = PointyToppedHexagonalLattice([Point(0, 0)])
    fs = lattice.transformation_functions(True, False)
    assert len(fs) == 6
    east = lattice.DIRECTIONS["E"].vector
    assert fs[1](east) == lattice.DIRECTIONS["SE"].vector
    assert {f(east) for f in fs} == {d.vector for d in lattice.edge_sharing_directions()}


def test_flat_hexagonal_rotations_cycle_directions():
    lattice = FlatToppedHexagonalLattice([Point(0, 0)])
    fs = lattice.transformation_functions(True, False)
    north = lattice.DIRECTIONS["N"].vector
    assert fs[1](north) == lattice.DIRECTIONS["NE"].vector
    assert {f(north) for f in fs} == {d.vector for d in lattice.edge_sharing_directions()}


def test_hexagonal_full_group():
    lattice = PointyToppedHexagonalLattice([Point(0, 0)])
    fs = lattice.transformation_functions(True, True)
    assert len(fs) == 12
    v = Vector(1, 5)
    images = {f(v) for f in fs}
    assert len(images) == 12
    for f in fs:
        for g in fs:
            assert f(g(v)) in images


def test_hexagonal_opposites_and_rendering():
    lattice = PointyToppedHexagonalLattice(
        [Point(0, 0), Point(0, 2), Point(1, 1), Point(1, 3)]
    )
    d = lattice.DIRECTIONS
    assert lattice.opposite_direction(d["NE"]) == d["SW"]
    assert lattice.opposite_direction(d["E"]) == d["W"]
    assert lattice.to_string(lambda p: "o") == "o o \n o o"
    assert lattice.label_for_direction_pair(d["E"], d["W"]) == "EW"
    look, crossings = lattice.get_inside_outside_check_directions()
    assert look == d["E"]
    assert crossings == [d["NE"], d["NW"]]
