from __future__ import annotations

from routesim.core.errors import ConvergenceError
from routesim.core.types import NO_HOP, node_less
from routesim.protocols.base import RoutingSolver
from routesim.topology.topology import Topology


class DistanceVectorSolver(RoutingSolver):
    """RIP style distance-vector solver run synchronously to a fixed point.

    Each router only looks at its direct neighbours' current tables. A route
    learned through neighbour N is ignored when N itself routes to the
    destination through this router (split horizon). Equal-cost candidates
    go to the smaller neighbour id so the converged tables are reproducible.
    """

    name = "dv"
    change_mode = "replace"

    def __init__(self, config: dict | None = None) -> None:
        super().__init__(config)
        self.split_horizon = bool(self.config.get("split_horizon", True))
        self.max_passes = max(0, int(self.config.get("max_passes", 0)))
        self.passes = 0

    def _compute(self, topology: Topology) -> None:
        self._install_direct_links(topology)

        limit = self.max_passes or len(self._tables) ** 2 + 1
        self.passes = 0
        while True:
            self.passes += 1
            if self.passes > limit:
                raise ConvergenceError(
                    f"distance-vector did not converge within {limit} passes "
                    f"({len(self._tables)} nodes)"
                )
            if not self.relax_pass(topology):
                break
        self._log.debug("dv converged after %d passes", self.passes)

    def initialize(self, topology: Topology) -> None:
        """Fresh tables holding only the direct links, before any relaxation."""
        self.reset(topology.nodes())
        self._install_direct_links(topology)

    def _install_direct_links(self, topology: Topology) -> None:
        for edge in topology.edge_list():
            self._tables[edge.u].upsert(edge.v, edge.v, edge.cost)
            self._tables[edge.v].upsert(edge.u, edge.u, edge.cost)

    def relax_pass(self, topology: Topology) -> bool:
        """Run one full relaxation pass over every router and destination.

        Returns True when any table entry changed.
        """
        updated = False
        nodes = self.nodes()
        for router in nodes:
            table = self._tables[router]
            neighbors = topology.neighbors(router)
            for dst in nodes:
                if dst == router:
                    continue
                current = table.require(dst)
                best_cost = current.cost
                best_hop = current.next_hop

                for nbr, link_cost in neighbors.items():
                    if nbr == dst:
                        continue
                    learned = self._tables[nbr].require(dst)
                    if not learned.reachable:
                        continue
                    if self.split_horizon and learned.next_hop == router:
                        continue

                    candidate = link_cost + learned.cost
                    if (
                        best_hop is NO_HOP
                        or candidate < best_cost
                        or (candidate == best_cost and node_less(nbr, best_hop))
                    ):
                        best_cost = candidate
                        best_hop = nbr

                if best_hop != current.next_hop or best_cost != current.cost:
                    table.upsert(dst, best_hop, best_cost)
                    updated = True
        return updated
