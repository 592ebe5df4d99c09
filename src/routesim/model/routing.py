from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Optional

from routesim.core.errors import NodeNotFoundError
from routesim.core.types import INF, NO_HOP, Cost, NodeId, sorted_nodes


@dataclass(frozen=True)
class RouteEntry:
    destination: NodeId
    next_hop: Optional[NodeId]
    cost: Cost

    @property
    def reachable(self) -> bool:
        return self.next_hop is not NO_HOP

    def to_dict(self) -> Dict[str, Any]:
        return {
            "destination": self.destination,
            "next_hop": self.next_hop,
            "cost": self.cost,
        }


class RoutingTable:
    """Destination -> (next hop, cost) for a single router.

    Every known destination has an entry; unreachable ones carry
    ``(NO_HOP, infinity)``. The owner's own entry is always ``(owner, 0)``.
    """

    def __init__(self, owner: NodeId, nodes: Iterable[NodeId] = (), infinity: Cost = INF) -> None:
        self.owner = owner
        self.infinity = int(infinity)
        self._entries: Dict[NodeId, RouteEntry] = {}
        self._install_self_route()
        for node in nodes:
            self.add_destination(node)

    def add_destination(self, destination: NodeId) -> bool:
        if destination in self._entries:
            return False
        self._entries[destination] = RouteEntry(destination, NO_HOP, self.infinity)
        return True

    def upsert(self, destination: NodeId, next_hop: Optional[NodeId], cost: Cost) -> bool:
        if destination == self.owner:
            return self._install_self_route()
        entry = RouteEntry(destination, next_hop, int(cost))
        changed = self._entries.get(destination) != entry
        self._entries[destination] = entry
        return changed

    def get(self, destination: NodeId) -> Optional[RouteEntry]:
        return self._entries.get(destination)

    def require(self, destination: NodeId) -> RouteEntry:
        entry = self._entries.get(destination)
        if entry is None:
            raise NodeNotFoundError(destination, context=f"routing table of {self.owner!r}")
        return entry

    def next_hop(self, destination: NodeId) -> Optional[NodeId]:
        entry = self._entries.get(destination)
        return entry.next_hop if entry is not None else NO_HOP

    def cost(self, destination: NodeId) -> Cost:
        entry = self._entries.get(destination)
        return entry.cost if entry is not None else self.infinity

    def snapshot(self) -> List[RouteEntry]:
        return [self._entries[dst] for dst in sorted_nodes(self._entries)]

    def __contains__(self, destination: object) -> bool:
        return destination in self._entries

    def __iter__(self) -> Iterator[RouteEntry]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        return len(self._entries)

    def _install_self_route(self) -> bool:
        entry = RouteEntry(self.owner, self.owner, 0)
        changed = self._entries.get(self.owner) != entry
        self._entries[self.owner] = entry
        return changed
