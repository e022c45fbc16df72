import pytest

from bipartite_sage import IndexInconsistencyError
from bipartite_sage.io import Indexing
from bipartite_sage.reader import UnifiedIndexResolver


def test_users_pass_through_items_are_offset(ids):
    users = Indexing.build([ids["U1"], ids["U2"], ids["U3"]])
    items = Indexing.build([ids["I2"], ids["I1"]])
    resolver = UnifiedIndexResolver(users, items, user_ns_id=0)

    assert resolver.offset == 3
    assert resolver.size == 5
    assert resolver.resolve(ids["U2"]) == 1
    assert resolver(ids["I2"]) == 3
    assert resolver(ids["I1"]) == 4


def test_resolved_indices_are_disjoint_and_dense(ids):
    user_nodes = [ids["U1"], ids["U2"], ids["U3"]]
    item_nodes = [ids["I1"], ids["I2"], ids["I5"]]
    resolver = UnifiedIndexResolver(Indexing.build(user_nodes), Indexing.build(item_nodes), 0)

    user_flat = [resolver.resolve(n) for n in user_nodes]
    item_flat = [resolver.resolve(n) for n in item_nodes]

    assert all(0 <= i < 3 for i in user_flat)
    assert all(3 <= i < 6 for i in item_flat)
    assert sorted(user_flat + item_flat) == list(range(6))


def test_missing_node_is_fatal(ids):
    resolver = UnifiedIndexResolver(Indexing.build([ids["U1"]]), Indexing.build([ids["I1"]]), 0)
    with pytest.raises(IndexInconsistencyError):
        resolver.resolve(ids["U2"])
    with pytest.raises(IndexInconsistencyError):
        resolver.resolve(ids["I2"])
    with pytest.raises(IndexInconsistencyError):
        resolver.resolve(ids["BAD"])


def test_resolver_requires_built_tables():
    with pytest.raises(IndexInconsistencyError):
        UnifiedIndexResolver.from_levels([], [Indexing()], 0)
