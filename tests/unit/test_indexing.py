import pytest

from bipartite_sage.io import NOT_FOUND, Indexing, create_indexings


def test_indexing_is_dense_in_insertion_order():
    nodes = [40, 10, 30, 20]
    indexing = Indexing.build(nodes)

    assert indexing.size() == len(indexing) == 4
    assert sorted(indexing.get(n) for n in nodes) == [0, 1, 2, 3]
    assert [indexing.get(n) for n in nodes] == [0, 1, 2, 3]
    assert list(indexing) == nodes


def test_indexing_missing_node_is_negative():
    indexing = Indexing.build([1, 2])
    assert indexing.get(99) == NOT_FOUND
    assert indexing.get(99) < 0
    assert 99 not in indexing
    assert 1 in indexing


def test_indexing_rejects_duplicates():
    with pytest.raises(ValueError):
        Indexing.build([5, 6, 5])


def test_indexing_from_set_covers_every_member():
    nodes = {7, 3, 11, 2}
    indexing = Indexing.build(nodes)
    assert sorted(idx for _, idx in indexing.items()) == list(range(len(nodes)))
    assert set(indexing) == nodes


def test_create_indexings_replaces_in_place():
    indexings = [Indexing.build([1, 2, 3])] * 4
    same = create_indexings([{10}, {10, 20}], indexings)

    assert same is indexings
    assert len(indexings) == 2
    assert [len(t) for t in indexings] == [1, 2]
    assert 1 not in indexings[0]


def test_create_indexings_for_empty_levels():
    indexings = []
    create_indexings([set(), set()], indexings)
    assert [t.size() for t in indexings] == [0, 0]
