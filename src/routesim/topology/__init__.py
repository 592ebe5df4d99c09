"""Topology model."""

from routesim.topology.topology import Edge, Topology

__all__ = ["Edge", "Topology"]
