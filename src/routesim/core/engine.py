from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Optional

from routesim.core.changes import ChangeApplier
from routesim.core.convergence import hash_routes
from routesim.core.errors import MalformedRecordError, NodeNotFoundError
from routesim.core.logging import JsonlLogger
from routesim.core.tracer import PathTracer
from routesim.core.types import ChangeRecord, Link, Message, MessageTrace, SimulationResult, StableState, TraceStatus
from routesim.protocols.base import RoutingSolver
from routesim.protocols.registry import build_solver
from routesim.runtime.config import SimulationConfig
from routesim.topology.topology import Topology

_log = logging.getLogger("routesim.engine")


class Simulation:
    """Batch pipeline: initial solve and trace, then one re-solve and re-trace per change.

    Every yielded ``StableState`` reflects the tables after the previous
    change has been fully integrated; changes are never batched or reordered.
    """

    def __init__(
        self,
        links: Iterable[Link],
        messages: Iterable[Message] = (),
        changes: Iterable[ChangeRecord] = (),
        config: SimulationConfig | None = None,
        logger: JsonlLogger | None = None,
        solver: RoutingSolver | None = None,
    ) -> None:
        self.config = config or SimulationConfig()
        self.solver = solver or build_solver(self.config.protocol, self.config.solver_params())
        self.links = list(links)
        self.messages = list(messages)
        self.changes = list(changes)
        self.logger = logger or JsonlLogger(path=None)
        self.topology = Topology(infinity=self.solver.infinity)
        self.applier: Optional[ChangeApplier] = None
        self.skipped_changes = 0

    def run(self) -> SimulationResult:
        result = SimulationResult(protocol=self.solver.name)
        result.states.extend(self.states())
        result.skipped_changes = self.skipped_changes
        return result

    def states(self) -> Iterator[StableState]:
        self._build_topology()
        self.solver.solve(self.topology)
        self.applier = ChangeApplier(self.topology, self.solver)
        _log.info(
            "initial solve: protocol=%s nodes=%d links=%d",
            self.solver.name,
            len(self.topology),
            len(self.topology.edge_list()),
        )
        self.logger.log("initial_solve", protocol=self.solver.name, nodes=self.topology.nodes())

        index = 0
        yield self._stable_state(index, change=None, action=None)

        for change in self.changes:
            try:
                outcome = self.applier.apply(change)
            except MalformedRecordError as exc:
                self._reject(change, exc)
                continue
            index += 1
            self.logger.log(
                "change_applied",
                index=index,
                action=outcome.action,
                change=[change.node1, change.node2, change.cost],
                new_nodes=list(outcome.new_nodes),
            )
            yield self._stable_state(index, change=change, action=outcome.action)

        self.logger.log("done", states=index + 1, skipped_changes=self.skipped_changes)

    def trace_all(self) -> List[MessageTrace]:
        tracer = PathTracer(self.solver.tables)
        traces: List[MessageTrace] = []
        for message in self.messages:
            try:
                traces.append(tracer.trace(message))
            except NodeNotFoundError as exc:
                _log.warning("message %s -> %s rejected: %s", message.source, message.destination, exc)
                traces.append(MessageTrace(message=message, status=TraceStatus.UNKNOWN_NODE, cost=None))
        return traces

    def _build_topology(self) -> None:
        self.topology = Topology(infinity=self.solver.infinity)
        for link in self.links:
            try:
                if link.is_removal(self.solver.remove_sentinel):
                    raise MalformedRecordError(f"removal sentinel {link.cost} in initial topology")
                self.topology.add_or_update_link(link.node1, link.node2, link.cost)
            except MalformedRecordError as exc:
                if self.config.on_malformed == "fail":
                    raise
                _log.warning("skipping topology link %s: %s", link, exc)
                self.logger.log("record_skipped", kind="link", record=[link.node1, link.node2, link.cost])

    def _reject(self, change: ChangeRecord, exc: MalformedRecordError) -> None:
        if self.config.on_malformed == "fail":
            raise exc
        self.skipped_changes += 1
        _log.warning("skipping change %s: %s", change, exc)
        self.logger.log("record_skipped", kind="change", record=[change.node1, change.node2, change.cost])

    def _stable_state(self, index: int, change: Optional[ChangeRecord], action: Optional[str]) -> StableState:
        tables = self.solver.snapshot()
        traces = self.trace_all()
        route_hash = hash_routes(tables)
        unreachable = sum(1 for t in traces if not t.reachable)
        _log.debug("state %d: hash=%s unreachable_messages=%d", index, route_hash[:12], unreachable)
        self.logger.log("state", index=index, route_hash=route_hash, unreachable_messages=unreachable)
        return StableState(
            index=index,
            change=change,
            tables=tables,
            traces=traces,
            route_hash=route_hash,
            action=action,
        )
