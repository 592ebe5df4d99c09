from __future__ import annotations

from typing import Dict, List

from routesim.core.types import Cost, NodeId, sorted_nodes
from routesim.topology.topology import Topology


class LinkStateDB:
    """Symmetric adjacency view of the topology used by the link-state solver."""

    def __init__(self) -> None:
        self._adjacency: Dict[NodeId, Dict[NodeId, Cost]] = {}

    @classmethod
    def from_topology(cls, topology: Topology) -> "LinkStateDB":
        db = cls()
        db.rebuild(topology)
        return db

    def rebuild(self, topology: Topology) -> None:
        self._adjacency = {}
        for node in topology.nodes():
            self._adjacency.setdefault(node, {})
        for edge in topology.edge_list():
            self._adjacency[edge.u][edge.v] = edge.cost
            self._adjacency[edge.v][edge.u] = edge.cost

    def nodes(self) -> List[NodeId]:
        return sorted_nodes(self._adjacency)

    def neighbors(self, node: NodeId) -> Dict[NodeId, Cost]:
        return dict(self._adjacency.get(node, {}))

    def is_symmetric(self) -> bool:
        for u, nei in self._adjacency.items():
            for v, cost in nei.items():
                if self._adjacency.get(v, {}).get(u) != cost:
                    return False
        return True

