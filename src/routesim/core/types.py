from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple, Union

if TYPE_CHECKING:
    from routesim.model.routing import RouteEntry

NodeId = Union[int, str]
Cost = int

INF: Cost = 9999
REMOVE_SENTINEL: Cost = -999
NO_HOP = None


def node_sort_key(node: NodeId) -> Tuple[bool, Any]:
    """Total order over node ids: integers first, then strings."""
    return (isinstance(node, str), node)


def node_less(a: NodeId, b: NodeId) -> bool:
    return node_sort_key(a) < node_sort_key(b)


def sorted_nodes(nodes) -> List[NodeId]:
    return sorted(nodes, key=node_sort_key)


@dataclass(frozen=True)
class Link:
    node1: NodeId
    node2: NodeId
    cost: Cost

    def key(self) -> Tuple[NodeId, NodeId]:
        return tuple(sorted_nodes((self.node1, self.node2)))  # type: ignore[return-value]

    def is_removal(self, sentinel: Cost = REMOVE_SENTINEL) -> bool:
        return self.cost == sentinel


# A change record has the same shape as a link; only its interpretation differs.
ChangeRecord = Link


@dataclass(frozen=True)
class Message:
    source: NodeId
    destination: NodeId
    text: str


class TraceStatus(str, Enum):
    REACHABLE = "reachable"
    UNREACHABLE = "unreachable"
    UNKNOWN_NODE = "unknown_node"


@dataclass(frozen=True)
class MessageTrace:
    message: Message
    status: TraceStatus
    cost: Optional[Cost]
    hops: Tuple[NodeId, ...] = ()

    @property
    def reachable(self) -> bool:
        return self.status is TraceStatus.REACHABLE

    @property
    def cost_label(self) -> str:
        return str(self.cost) if self.reachable else "infinite"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.message.source,
            "destination": self.message.destination,
            "message": self.message.text,
            "status": self.status.value,
            "cost": self.cost,
            "hops": list(self.hops),
        }


@dataclass(frozen=True)
class ChangeOutcome:
    change: ChangeRecord
    action: str
    new_nodes: Tuple[NodeId, ...] = ()


@dataclass
class StableState:
    index: int
    change: Optional[ChangeRecord]
    tables: Dict[NodeId, List[RouteEntry]]
    traces: List[MessageTrace]
    route_hash: str
    action: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "change": None if self.change is None else self.change.__dict__,
            "action": self.action,
            "route_hash": self.route_hash,
            "tables": {
                str(node): [entry.to_dict() for entry in entries]
                for node, entries in self.tables.items()
            },
            "traces": [trace.to_dict() for trace in self.traces],
        }


@dataclass
class SimulationResult:
    protocol: str
    states: List[StableState] = field(default_factory=list)
    skipped_changes: int = 0

    @property
    def route_hashes(self) -> List[str]:
        return [state.route_hash for state in self.states]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "protocol": self.protocol,
            "skipped_changes": self.skipped_changes,
            "route_hashes": self.route_hashes,
            "states": [state.to_dict() for state in self.states],
        }
