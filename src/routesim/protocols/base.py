from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from routesim.core.types import INF, REMOVE_SENTINEL, Cost, NodeId, sorted_nodes
from routesim.model.routing import RouteEntry, RoutingTable
from routesim.topology.topology import Topology


class RoutingSolver:
    """Base class for the centralized routing solvers.

    A solver owns one ``RoutingTable`` per known node. ``solve()`` always
    discards the previous tables and recomputes them from the topology, so
    the result only depends on the topology, never on earlier runs.

    Subclasses define:
    - ``name``: registry name used in logs and results
    - ``change_mode``: how a change record mutates the topology
      (``"replace"`` for distance-vector, ``"toggle"`` for link-state)
    - ``_compute(topology)``: fill ``self._tables`` to a fixed point
    """

    name = "base"
    change_mode = "replace"

    def __init__(self, config: dict | None = None) -> None:
        self.config = config or {}
        self.infinity = int(self.config.get("infinity", INF))
        self.remove_sentinel = int(self.config.get("remove_sentinel", REMOVE_SENTINEL))
        self._tables: Dict[NodeId, RoutingTable] = {}
        self._log = logging.getLogger(f"routesim.protocols.{self.name}")

    @property
    def tables(self) -> Dict[NodeId, RoutingTable]:
        return dict(self._tables)

    def nodes(self) -> List[NodeId]:
        return sorted_nodes(self._tables)

    def table(self, node: NodeId) -> Optional[RoutingTable]:
        return self._tables.get(node)

    def snapshot(self) -> Dict[NodeId, List[RouteEntry]]:
        return {node: self._tables[node].snapshot() for node in self.nodes()}

    def reset(self, nodes: Iterable[NodeId]) -> None:
        known = sorted_nodes(set(nodes))
        self._tables = {node: RoutingTable(node, known, infinity=self.infinity) for node in known}

    def solve(self, topology: Topology) -> Dict[NodeId, RoutingTable]:
        self.reset(topology.nodes())
        self._compute(topology)
        self._log.debug("%s solved %d tables", self.name, len(self._tables))
        return self.tables

    def _compute(self, topology: Topology) -> None:
        raise NotImplementedError
