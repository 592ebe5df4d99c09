from __future__ import annotations

import pytest

from routesim.core.errors import NodeNotFoundError
from routesim.core.types import INF
from routesim.model.routing import RouteEntry, RoutingTable


def test_new_table_has_self_route_and_infinite_entries() -> None:
    table = RoutingTable(2, [1, 2, 3])

    assert table.get(2) == RouteEntry(2, 2, 0)
    assert table.get(1) == RouteEntry(1, None, INF)
    assert table.get(3).reachable is False
    assert len(table) == 3


def test_upsert_reports_changes() -> None:
    table = RoutingTable(1, [1, 2])

    assert table.upsert(2, 2, 4) is True
    assert table.upsert(2, 2, 4) is False
    assert table.next_hop(2) == 2
    assert table.cost(2) == 4


def test_self_route_cannot_be_overwritten() -> None:
    table = RoutingTable(1, [1, 2])
    table.upsert(1, 2, 5)
    assert table.get(1) == RouteEntry(1, 1, 0)


def test_missing_destination_lookups() -> None:
    table = RoutingTable(1, [1])

    assert table.get(7) is None
    assert table.next_hop(7) is None
    assert table.cost(7) == INF
    with pytest.raises(NodeNotFoundError):
        table.require(7)


def test_snapshot_is_in_destination_order() -> None:
    table = RoutingTable(3, [10, 2, 3, 1])
    assert [e.destination for e in table.snapshot()] == [1, 2, 3, 10]
