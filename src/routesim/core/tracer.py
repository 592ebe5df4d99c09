from __future__ import annotations

from typing import Dict, List, Mapping

from routesim.core.errors import NodeNotFoundError, RoutingInvariantError
from routesim.core.types import NO_HOP, Message, MessageTrace, NodeId, TraceStatus
from routesim.model.routing import RoutingTable


class PathTracer:
    """Follows next-hop chains through the current routing tables.

    Hop lists start at the source and stop before the destination.
    """

    def __init__(self, tables: Mapping[NodeId, RoutingTable]) -> None:
        self._tables: Dict[NodeId, RoutingTable] = dict(tables)

    def trace(self, message: Message) -> MessageTrace:
        src, dst = message.source, message.destination
        for node in (src, dst):
            if node not in self._tables:
                raise NodeNotFoundError(node, context="message endpoint")

        entry = self._tables[src].require(dst)
        if not entry.reachable:
            return MessageTrace(message=message, status=TraceStatus.UNREACHABLE, cost=None)

        hops = self.walk(src, dst)
        return MessageTrace(message=message, status=TraceStatus.REACHABLE, cost=entry.cost, hops=tuple(hops))

    def walk(self, src: NodeId, dst: NodeId) -> List[NodeId]:
        hops: List[NodeId] = []
        seen = set()
        current = src
        while current != dst:
            if current in seen or len(hops) > len(self._tables):
                raise RoutingInvariantError(f"forwarding loop toward {dst!r}: {hops + [current]}")
            table = self._tables.get(current)
            if table is None:
                raise RoutingInvariantError(f"next hop {current!r} toward {dst!r} has no routing table")
            seen.add(current)
            hops.append(current)
            next_hop = table.next_hop(dst)
            if next_hop is NO_HOP:
                raise RoutingInvariantError(f"dead end at {current!r} toward {dst!r}: {hops}")
            current = next_hop
        return hops
