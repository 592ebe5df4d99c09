"""Run configuration."""

from routesim.runtime.config import SimulationConfig, config_from_dict, load_simulation_config

__all__ = [
    "SimulationConfig",
    "config_from_dict",
    "load_simulation_config",
]
