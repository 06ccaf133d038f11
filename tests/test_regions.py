from collections import Counter

from z3 import And, Or, Solver, sat, unsat

from gridlogic import (
    Point,
    RegionConstrainer,
    Vector,
    get_rectangle_lattice,
    get_square_lattice,
)
from gridlogic.engine import eval_int
from gridlogic.regions import R, X


def values(model, grid):
    return {p: eval_int(model, v) for p, v in grid.items()}


def check_region_model(lattice, rc, model):
    parents = values(model, rc.parent_grid)
    ids = values(model, rc.region_id_grid)
    sizes = values(model, rc.region_size_grid)
    counts = Counter(i for i in ids.values() if i != -1)
    direction_of = {
        rc.edge_sharing_direction_to_index(d): d for d in lattice.edge_sharing_directions()
    }

    for p in lattice.points:
        if parents[p] == X:
            assert ids[p] == -1
            assert sizes[p] == -1
            continue
        assert sizes[p] == counts[ids[p]]
        # walking parent pointers ends at the root whose index is the region id
        q = p
        for _ in range(len(lattice.points)):
            if parents[q] == R:
                break
            q = q.translate(direction_of[parents[q]])
            assert ids[q] == ids[p]
        assert parents[q] == R
        assert lattice.index_of(q) == ids[p]


def test_every_partition_of_a_square_is_consistent():
    lattice = get_square_lattice(2)
    rc = RegionConstrainer(lattice, Solver())
    solver = rc.solver
    seen = 0
    while solver.check() == sat and seen < 200:
        model = solver.model()
        check_region_model(lattice, rc, model)
        solver.add(
            Or([v != eval_int(model, v) for v in rc.region_id_grid.values()])
        )
        seen += 1
    # 1 + 3 + 2 + 2 + 1 partitions, times the root choices of their regions
    assert seen == 33


def test_index_lookups_agree():
    lattice = get_square_lattice(2)
    rc = RegionConstrainer(lattice)
    assert rc.parent_type_to_index("X") == X
    assert rc.parent_type_to_index("R") == R
    for d in lattice.edge_sharing_directions():
        assert rc.edge_sharing_direction_to_index(d) == rc.parent_type_to_index(d.name)
        assert rc.edge_sharing_direction_to_index(d) == rc.edge_sharing_direction_to_index(d)
    assert rc.parent_type_to_index("N") == 2


def test_min_region_size_forces_single_region():
    lattice = get_rectangle_lattice(1, 3)
    rc = RegionConstrainer(lattice, min_region_size=2)
    assert rc.solver.check() == sat
    model = rc.solver.model()
    assert set(values(model, rc.region_size_grid).values()) == {3}
    assert len(set(values(model, rc.region_id_grid).values())) == 1


def test_min_and_max_region_size():
    lattice = get_rectangle_lattice(1, 4)
    rc = RegionConstrainer(lattice, min_region_size=2, max_region_size=2)
    assert rc.solver.check() == sat
    ids = values(rc.solver.model(), rc.region_id_grid)
    assert ids[Point(0, 0)] == ids[Point(0, 1)]
    assert ids[Point(0, 2)] == ids[Point(0, 3)]
    assert ids[Point(0, 0)] != ids[Point(0, 2)]
    check_region_model(lattice, rc, rc.solver.model())


def test_incomplete_regions_may_leave_cells_out():
    lattice = get_rectangle_lattice(1, 2)
    rc = RegionConstrainer(lattice, complete=False)
    rc.solver.add(rc.parent_grid[Point(0, 0)] == X)
    assert rc.solver.check() == sat
    model = rc.solver.model()
    assert eval_int(model, rc.region_id_grid[Point(0, 0)]) == -1
    assert eval_int(model, rc.subtree_size_grid[Point(0, 0)]) == 0
    assert eval_int(model, rc.region_size_grid[Point(0, 1)]) == 1
    check_region_model(lattice, rc, model)


def l_shape(rc):
    ids = rc.region_id_grid
    return And(
        ids[Point(0, 0)] == ids[Point(0, 1)],
        ids[Point(0, 0)] == ids[Point(1, 0)],
        ids[Point(0, 0)] != ids[Point(1, 1)],
    )


def test_rectangular_regions_reject_an_l_shape():
    lattice = get_square_lattice(2)
    rc = RegionConstrainer(lattice, rectangular=True)
    rc.solver.add(l_shape(rc))
    assert rc.solver.check() == unsat

    rc = RegionConstrainer(lattice)
    rc.solver.add(l_shape(rc))
    assert rc.solver.check() == sat


def test_renderers():
    rc = RegionConstrainer(get_square_lattice(1))
    assert rc.solver.check() == sat
    assert rc.trees_to_string() == "R"
    assert rc.region_ids_to_string() == "  0"
    assert rc.region_sizes_to_string() == "  1"
    assert rc.subtree_sizes_to_string() == "  1"


def test_direction_index_accepts_vectors():
    lattice = get_square_lattice(2)
    rc = RegionConstrainer(lattice)
    north = lattice.edge_sharing_directions()[0]
    assert rc.edge_sharing_direction_to_index(Vector(-1, 0)) == rc.parent_type_to_index("N")
    assert rc.edge_sharing_direction_to_index(north.vector) == rc.edge_sharing_direction_to_index(north)
