from __future__ import annotations

import logging
from enum import Enum
from typing import Tuple

from routesim.core.errors import MalformedRecordError, RoutingError
from routesim.core.types import ChangeOutcome, ChangeRecord, NodeId
from routesim.protocols.base import RoutingSolver
from routesim.topology.topology import Topology

_log = logging.getLogger("routesim.changes")


class ApplierState(str, Enum):
    STABLE = "stable"
    APPLYING = "applying"


class ChangeApplier:
    """Integrates one topology change at a time and re-solves all tables.

    The way a change mutates the topology follows the solver family:

    - ``replace`` (distance-vector): the removal sentinel deletes the link,
      any other cost adds it or overwrites its cost.
    - ``toggle`` (link-state): a link already present between the pair is
      removed whatever its cost, a missing one is added with the given cost.
      The removal sentinel only ever removes.

    If the re-solve fails the topology, including any nodes the change
    introduced, is rolled back and the previous tables are recomputed before
    the error propagates.
    """

    def __init__(self, topology: Topology, solver: RoutingSolver) -> None:
        self.topology = topology
        self.solver = solver
        self.state = ApplierState.STABLE
        self.applied = 0

    def validate(self, change: ChangeRecord) -> None:
        if change.node1 == change.node2:
            raise MalformedRecordError(f"change names the same node twice: {change.node1!r}")
        if change.cost == self.solver.remove_sentinel:
            return
        if change.cost <= 0:
            raise MalformedRecordError(f"link cost must be positive, got {change.cost}")
        if change.cost >= self.solver.infinity:
            raise MalformedRecordError(f"link cost {change.cost} must be below infinity ({self.solver.infinity})")

    def apply(self, change: ChangeRecord) -> ChangeOutcome:
        self.validate(change)
        if self.state is not ApplierState.STABLE:
            raise RoutingError("a change is already being applied")

        self.state = ApplierState.APPLYING
        previous = self.topology.snapshot()
        try:
            new_nodes = self._introduce_nodes(change)
            action = self._mutate(change)
            self.solver.solve(self.topology)
        except RoutingError:
            _log.error("change %s-%s cost=%s failed, rolling back", change.node1, change.node2, change.cost)
            self.topology.restore(previous)
            self.solver.solve(self.topology)
            raise
        finally:
            self.state = ApplierState.STABLE

        self.applied += 1
        _log.info(
            "change %d applied: %s %s-%s cost=%s new_nodes=%s",
            self.applied,
            action,
            change.node1,
            change.node2,
            change.cost,
            list(new_nodes),
        )
        return ChangeOutcome(change=change, action=action, new_nodes=new_nodes)

    def _introduce_nodes(self, change: ChangeRecord) -> Tuple[NodeId, ...]:
        new_nodes = []
        for node in (change.node1, change.node2):
            if self.topology.add_node(node):
                new_nodes.append(node)
        return tuple(new_nodes)

    def _mutate(self, change: ChangeRecord) -> str:
        u, v, cost = change.node1, change.node2, change.cost
        existing = self.topology.metric(u, v)

        if cost == self.solver.remove_sentinel:
            return "removed" if self.topology.remove_link(u, v) else "noop"

        if self.solver.change_mode == "toggle" and existing is not None:
            self.topology.remove_link(u, v)
            return "removed"

        if not self.topology.add_or_update_link(u, v, cost):
            return "noop"
        return "added" if existing is None else "updated"
