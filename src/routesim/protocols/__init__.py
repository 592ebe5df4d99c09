"""Routing solvers."""

from routesim.protocols.base import RoutingSolver
from routesim.protocols.ospf import LinkStateSolver
from routesim.protocols.registry import available_protocols, build_solver, load_solver, register_solver
from routesim.protocols.rip import DistanceVectorSolver

__all__ = [
    "DistanceVectorSolver",
    "LinkStateSolver",
    "RoutingSolver",
    "available_protocols",
    "build_solver",
    "load_solver",
    "register_solver",
]
