from __future__ import annotations

import heapq
from typing import Any, Dict, List, Tuple

from routesim.core.types import Cost, NodeId, node_sort_key
from routesim.model.state import LinkStateDB
from routesim.protocols.base import RoutingSolver
from routesim.topology.topology import Topology


class LinkStateSolver(RoutingSolver):
    """OSPF style link-state solver: one SPF run per router over the LSDB."""

    name = "ls"
    change_mode = "toggle"

    def __init__(self, config: dict | None = None) -> None:
        super().__init__(config)
        self.lsdb = LinkStateDB()

    def _compute(self, topology: Topology) -> None:
        self.lsdb.rebuild(topology)
        for source in self.nodes():
            distances, first_hops = self.shortest_paths(source)
            table = self._tables[source]
            for dst, dist in distances.items():
                if dst == source:
                    continue
                table.upsert(dst, first_hops[dst], dist)

    def shortest_paths(self, source: NodeId) -> Tuple[Dict[NodeId, Cost], Dict[NodeId, NodeId]]:
        """Dijkstra from ``source`` recording the first hop of each path.

        The heap is keyed on ``(distance, node order)`` so the next node to
        settle is the closest one, ties going to the smallest node id. Nodes
        never pushed stay out of ``distances``. Equal-cost alternatives never
        replace a recorded path.
        """
        distances: Dict[NodeId, Cost] = {source: 0}
        first_hops: Dict[NodeId, NodeId] = {}
        pq: List[Tuple[Cost, Tuple[bool, Any], NodeId]] = [(0, node_sort_key(source), source)]

        while pq:
            dist_u, _, u = heapq.heappop(pq)
            if dist_u > distances[u]:
                continue
            for v, cost in self.lsdb.neighbors(u).items():
                alt = dist_u + cost
                if v not in distances or alt < distances[v]:
                    distances[v] = alt
                    first_hops[v] = v if u == source else first_hops[u]
                    heapq.heappush(pq, (alt, node_sort_key(v), v))

        return distances, first_hops
