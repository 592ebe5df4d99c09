"""Routing engine: change application, path tracing and the simulation pipeline."""
