from __future__ import annotations

from routesim.core.convergence import count_hash_changes, hash_routes
from routesim.model.routing import RouteEntry


def test_convergence_hash_stable_against_dict_order():
    a = {
        1: [RouteEntry(1, 1, 0), RouteEntry(2, 2, 1), RouteEntry(3, 2, 2)],
        2: [RouteEntry(1, 1, 1), RouteEntry(2, 2, 0), RouteEntry(3, 3, 1)],
    }
    b = {
        2: [RouteEntry(3, 3, 1), RouteEntry(1, 1, 1), RouteEntry(2, 2, 0)],
        1: [RouteEntry(2, 2, 1), RouteEntry(1, 1, 0), RouteEntry(3, 2, 2)],
    }
    assert hash_routes(a) == hash_routes(b)


def test_convergence_hash_sees_next_hop_change():
    a = {1: [RouteEntry(1, 1, 0), RouteEntry(3, 2, 2)]}
    b = {1: [RouteEntry(1, 1, 0), RouteEntry(3, 3, 2)]}
    assert hash_routes(a) != hash_routes(b)


def test_count_hash_changes():
    assert count_hash_changes([]) == 0
    assert count_hash_changes(["a", "a", "b", "b", "a"]) == 2
