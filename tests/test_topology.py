from __future__ import annotations

import pytest

from routesim.core.errors import MalformedRecordError
from routesim.model.state import LinkStateDB
from routesim.topology.topology import Topology


def test_add_or_update_link_is_symmetric() -> None:
    t = Topology()
    assert t.add_or_update_link(1, 2, 7) is True

    assert t.metric(1, 2) == 7
    assert t.metric(2, 1) == 7
    assert t.neighbors(1) == {2: 7}
    assert t.neighbors(2) == {1: 7}


def test_update_matches_unordered_pair() -> None:
    t = Topology.from_edges([(1, 2, 7)])

    assert t.add_or_update_link(2, 1, 3) is True
    assert t.metric(1, 2) == 3
    assert len(t.edge_list()) == 1
    assert t.add_or_update_link(1, 2, 3) is False


def test_remove_link_missing_is_noop() -> None:
    t = Topology.from_edges([(1, 2, 1)])

    assert t.remove_link(3, 4) is False
    assert t.remove_link(2, 1) is True
    assert t.has_link(1, 2) is False
    # nodes survive link removal
    assert t.nodes() == [1, 2]


def test_neighbors_keep_insertion_order() -> None:
    t = Topology.from_edges([(1, 5, 1), (1, 3, 1), (1, 4, 1)])
    assert list(t.neighbors(1)) == [5, 3, 4]


def test_neighbors_returns_copy() -> None:
    t = Topology.from_edges([(1, 2, 1)])
    out = t.neighbors(1)
    out.clear()
    assert t.neighbors(1) == {2: 1}


def test_nodes_sorted_with_mixed_ids() -> None:
    t = Topology.from_edges([("b", 2, 1), ("a", 10, 1)])
    assert t.nodes() == [2, 10, "a", "b"]


@pytest.mark.parametrize("edge", [(1, 1, 3), (1, 2, 0), (1, 2, -4), (1, 2, 9999), (1, 2, 10000)])
def test_rejects_invalid_links(edge) -> None:
    with pytest.raises(MalformedRecordError):
        Topology.from_edges([edge])


def test_infinity_bound_is_per_topology() -> None:
    t = Topology(infinity=10)
    assert t.add_or_update_link(1, 2, 9) is True
    with pytest.raises(MalformedRecordError, match="below infinity"):
        t.add_or_update_link(1, 2, 10)
    assert t.metric(1, 2) == 9


def test_restore_drops_links_and_nodes_added_since_snapshot() -> None:
    t = Topology.from_edges([(1, 2, 1)])
    saved = t.snapshot()

    t.add_or_update_link(2, 3, 4)
    t.add_or_update_link(1, 2, 6)
    t.restore(saved)

    assert t.nodes() == [1, 2]
    assert t.metric(1, 2) == 1
    assert saved == {1: {2: 1}, 2: {1: 1}}


def test_lsdb_mirrors_topology() -> None:
    t = Topology.from_edges([(1, 2, 1), (2, 3, 4)])
    t.add_node(9)

    db = LinkStateDB.from_topology(t)

    assert db.nodes() == [1, 2, 3, 9]
    assert db.neighbors(2) == {1: 1, 3: 4}
    assert db.neighbors(9) == {}
    assert db.is_symmetric()

    t.remove_link(2, 3)
    db.rebuild(t)
    assert db.neighbors(3) == {}
    assert db.is_symmetric()
