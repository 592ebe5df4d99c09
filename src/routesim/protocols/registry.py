from __future__ import annotations

from typing import Dict, Type

from routesim.protocols.base import RoutingSolver
from routesim.protocols.ospf import LinkStateSolver
from routesim.protocols.rip import DistanceVectorSolver

_REGISTRY: Dict[str, Type[RoutingSolver]] = {
    "dv": DistanceVectorSolver,
    "rip": DistanceVectorSolver,
    "distance_vector": DistanceVectorSolver,
    "ls": LinkStateSolver,
    "ospf": LinkStateSolver,
    "link_state": LinkStateSolver,
}


def register_solver(name: str, solver_cls: Type[RoutingSolver]) -> None:
    _REGISTRY[name.lower()] = solver_cls


def load_solver(name: str) -> Type[RoutingSolver]:
    key = str(name).lower()
    if key not in _REGISTRY:
        raise KeyError(f"Unknown protocol: {name}. Available: {sorted(_REGISTRY.keys())}")
    return _REGISTRY[key]


def build_solver(name: str, config: dict | None = None) -> RoutingSolver:
    return load_solver(name)(config)


def available_protocols() -> list[str]:
    return sorted(_REGISTRY.keys())
