from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from routesim.core.errors import MalformedRecordError
from routesim.core.types import INF, Cost, NodeId, sorted_nodes


@dataclass
class Edge:
    u: NodeId
    v: NodeId
    cost: Cost


class Topology:
    """Undirected weighted graph; adjacency dicts keep link insertion order.

    Link costs live in ``[1, infinity)``.
    """

    def __init__(self, infinity: Cost = INF) -> None:
        self.infinity = int(infinity)
        self._adj: Dict[NodeId, Dict[NodeId, Cost]] = {}

    def add_node(self, node: NodeId) -> bool:
        if node in self._adj:
            return False
        self._adj[node] = {}
        return True

    def has_node(self, node: NodeId) -> bool:
        return node in self._adj

    def nodes(self) -> List[NodeId]:
        return sorted_nodes(self._adj.keys())

    def neighbors(self, node: NodeId) -> Dict[NodeId, Cost]:
        return dict(self._adj.get(node, {}))

    def has_link(self, u: NodeId, v: NodeId) -> bool:
        return v in self._adj.get(u, {})

    def metric(self, u: NodeId, v: NodeId) -> Optional[Cost]:
        return self._adj.get(u, {}).get(v)

    def add_or_update_link(self, u: NodeId, v: NodeId, cost: Cost) -> bool:
        if u == v:
            raise MalformedRecordError(f"self-link on node {u!r}")
        cost = int(cost)
        if cost <= 0:
            raise MalformedRecordError(f"link cost must be positive, got {cost}")
        if cost >= self.infinity:
            raise MalformedRecordError(f"link cost {cost} must be below infinity ({self.infinity})")
        if self.metric(u, v) == cost:
            return False
        self.add_node(u)
        self.add_node(v)
        self._adj[u][v] = cost
        self._adj[v][u] = cost
        return True

    def remove_link(self, u: NodeId, v: NodeId) -> bool:
        if not self.has_link(u, v):
            return False
        self._adj[u].pop(v, None)
        self._adj[v].pop(u, None)
        return True

    def edge_list(self) -> List[Edge]:
        edges: List[Edge] = []
        seen: set[Tuple[NodeId, NodeId]] = set()
        for u in self.nodes():
            for v, cost in self._adj[u].items():
                key = tuple(sorted_nodes((u, v)))
                if key in seen:
                    continue
                seen.add(key)
                edges.append(Edge(u=key[0], v=key[1], cost=cost))
        return edges

    def snapshot(self) -> Dict[NodeId, Dict[NodeId, Cost]]:
        return {n: dict(nei) for n, nei in self._adj.items()}

    def restore(self, snapshot: Dict[NodeId, Dict[NodeId, Cost]]) -> None:
        self._adj = {n: dict(nei) for n, nei in snapshot.items()}

    def __len__(self) -> int:
        return len(self._adj)

    @classmethod
    def from_edges(cls, edges: Iterable[Tuple[NodeId, NodeId, Cost]], infinity: Cost = INF) -> "Topology":
        t = cls(infinity=infinity)
        for u, v, cost in edges:
            t.add_or_update_link(u, v, cost)
        return t
