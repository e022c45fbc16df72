import numpy as np
import pytest

from bipartite_sage.graph import InMemoryGraphClient


def star_client(seed=3):
    edges = [(0, n) for n in range(1, 9)]
    return InMemoryGraphClient(edges, {0: [1.0, 2.0], 1: [3.0, 4.0]}, seed=seed)


def test_subgraph_levels_are_cumulative_and_bounded():
    client = star_client()
    levels, neighbors = client.sample_subgraph([0], [3, 2])

    assert len(levels) == 3 and len(neighbors) == 2
    assert levels[0] == {0}
    assert len(neighbors[0][0]) == 3
    assert levels[1] == {0} | set(neighbors[0][0])
    assert levels[1] <= levels[2]
    assert set(neighbors[1]) == levels[1]
    for node, neighs in neighbors[1].items():
        assert len(neighs) <= 2
        assert set(neighs) <= levels[2]


def test_subgraph_without_fanouts_is_seed_level_only():
    levels, neighbors = star_client().sample_subgraph([0, 5, 5], [])
    assert levels == [{0, 5}]
    assert neighbors == []


def test_subgraph_sampling_is_reproducible_with_seed():
    a = star_client(seed=9).sample_subgraph([0], [4])
    b = star_client(seed=9).sample_subgraph([0], [4])
    assert a == b


def test_isolated_node_has_no_neighbors():
    levels, neighbors = star_client().sample_subgraph([42], [5])
    assert neighbors[0][42] == []
    assert levels[1] == {42}


def test_shared_negatives_shape_and_anchor_exclusion():
    client = star_client()
    pool = [1, 2, 3]
    negs = client.sample_negatives(4, [1, 2, 3], pool)

    assert len(negs) == 3
    for anchor, row in zip([1, 2, 3], negs):
        assert len(row) == 4
        assert anchor not in row
        assert set(row) <= set(pool)


def test_negatives_fall_back_to_anchor_when_pool_has_nothing_else():
    negs = star_client().sample_negatives(2, [7, 7], [7, 7])
    assert negs == [[7, 7], [7, 7]]


class ScanCountingPool(list):
    scans = 0

    def __iter__(self):
        self.scans += 1
        return super().__iter__()


def test_pool_is_scanned_only_for_anchors_hit_by_a_shared_negative():
    pool = ScanCountingPool([10, 11, 12])
    negs = star_client().sample_negatives(3, [1, 2, 3, 4], pool)

    assert pool.scans == 0
    assert all(row == negs[0] for row in negs)
    assert set(negs[0]) <= {10, 11, 12}


def test_negatives_reject_bad_arguments():
    client = star_client()
    with pytest.raises(ValueError):
        client.sample_negatives(0, [1], [1])
    with pytest.raises(ValueError):
        client.sample_negatives(1, [1], [])
    assert client.sample_negatives(2, [], [1]) == []


def test_feature_lookup():
    client = star_client()
    feats = client.lookup_node_features([1, 0, 99])
    assert feats.shape == (3, 2)
    np.testing.assert_allclose(feats[0], [3.0, 4.0])
    np.testing.assert_allclose(feats[2], [0.0, 0.0])

    neigh = client.lookup_neighbor_features([1])
    np.testing.assert_allclose(neigh[0], [1.0, 2.0])


def test_feature_dimension_mismatch_is_rejected():
    with pytest.raises(ValueError):
        InMemoryGraphClient([], {1: [1.0], 2: [1.0, 2.0]})
