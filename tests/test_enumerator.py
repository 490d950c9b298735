from chord_framework.enumerator import enumerate_candidates


def test_orders_by_size_then_bitmask():
    result = list(enumerate_candidates(['a', 'b', 'c'], 1, 3))
    assert result == [
        ('a',), ('b',), ('c',),
        ('a', 'b'), ('a', 'c'), ('b', 'c'),
        ('a', 'b', 'c'),
    ]


def test_bitmask_order_differs_from_lexicographic():
    # Masks 3, 5, 6, 9, 10, 12
    result = list(enumerate_candidates(['a', 'b', 'c', 'd'], 2, 2))
    assert result == [
        ('a', 'b'), ('a', 'c'), ('b', 'c'),
        ('a', 'd'), ('b', 'd'), ('c', 'd'),
    ]


def test_respects_size_range():
    result = list(enumerate_candidates(['a', 'b', 'c', 'd', 'e'], 3, 4))
    assert all(3 <= len(candidate) <= 4 for candidate in result)
    assert len(result) == 10 + 5
    assert result[0] == ('a', 'b', 'c')
    assert result[-1] == ('b', 'c', 'd', 'e')


def test_max_size_larger_than_input():
    result = list(enumerate_candidates(['x', 'y'], 1, 6))
    assert result == [('x',), ('y',), ('x', 'y')]


def test_no_output_when_min_exceeds_length():
    assert list(enumerate_candidates(['a', 'b'], 3, 6)) == []
    assert list(enumerate_candidates([], 1, 3)) == []


def test_keys_keep_input_order():
    result = list(enumerate_candidates(['t', 'a', 'c'], 3, 3))
    assert result == [('t', 'a', 'c')]


def test_reproducible():
    keys = ['c', 'a', 't', 'd', 'r', 'e']
    assert list(enumerate_candidates(keys, 3, 6)) == list(enumerate_candidates(keys, 3, 6))
