"""Shortest-path routing table simulator with distance-vector and link-state solvers."""

from routesim.core.engine import Simulation
from routesim.core.types import INF, REMOVE_SENTINEL, Link, Message, MessageTrace, StableState, TraceStatus
from routesim.runtime.config import SimulationConfig

__all__ = [
    "INF",
    "REMOVE_SENTINEL",
    "Link",
    "Message",
    "MessageTrace",
    "Simulation",
    "SimulationConfig",
    "StableState",
    "TraceStatus",
]

__version__ = "0.1.0"
