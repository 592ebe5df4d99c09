"""Routing table and link-state database models."""

from routesim.model.routing import RouteEntry, RoutingTable
from routesim.model.state import LinkStateDB

__all__ = [
    "LinkStateDB",
    "RouteEntry",
    "RoutingTable",
]
