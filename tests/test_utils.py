from gridlogic.utils import combinations, zip_columns


def test_combinations_lexicographic_order():
    assert list(combinations([1, 2, 3, 4], 2)) == [
        [1, 2], [1, 3], [1, 4], [2, 3], [2, 4], [3, 4],
    ]


def test_combinations_can_be_iterated_twice():
    c = combinations("abc", 2)
    first = list(c)
    second = list(c)
    assert first == second == [["a", "b"], ["a", "c"], ["b", "c"]]


def test_combinations_edge_lengths():
    assert list(combinations([1, 2], 0)) == [[]]
    assert list(combinations([1, 2], 3)) == []
    assert list(combinations([1, 2, 3], 3)) == [[1, 2, 3]]


def test_combinations_len():
    assert len(combinations(range(6), 2)) == 15
    assert len(combinations(range(6), 7)) == 0
    assert len(combinations(range(6), 2)) == len(list(combinations(range(6), 2)))


def test_zip_columns_joins_multiline_cells():
    assert zip_columns(["a\nb", "c\nd"]) == "ac\nbd"
    assert zip_columns(["x", "y", "z"]) == "xyz"
