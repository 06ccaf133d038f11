from gridlogic.puzzles import build_fillomino, solve_fillomino


def test_solves_a_row():
    assert solve_fillomino([[1, 2, 0]]) == [[1, 2, 2]]


def test_same_sized_neighbors_must_merge():
    assert solve_fillomino([[2, 2, 2]]) is None


def test_small_grid():
    givens = [
        [3, 0],
        [0, 1],
    ]
    assert solve_fillomino(givens) == [[3, 3], [3, 1]]


def test_build_exposes_regions():
    sg, rc = build_fillomino([[2, 0]], max_size=2)
    assert sg.solve()
    assert set(sg.solved_grid().values()) == {2}
    assert rc.solver is sg.solver
