from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from routesim.core.convergence import count_hash_changes
from routesim.core.engine import Simulation
from routesim.core.logging import JsonlLogger
from routesim.core.types import SimulationResult
from routesim.runtime.config import SimulationConfig, load_simulation_config
from routesim.utils.io import dump_json, read_changes, read_messages, read_topology
from routesim.utils.output import write_states

_log = logging.getLogger("routesim.cli")


def load_effective_config(config_path: str | Path | None, **overrides: Any) -> SimulationConfig:
    return load_simulation_config(config_path).with_overrides(**overrides)


def run_files(
    topology_path: str | Path,
    messages_path: str | Path,
    changes_path: str | Path,
    output_path: str | Path,
    config: SimulationConfig,
    json_path: str | Path | None = None,
) -> SimulationResult:
    policy = config.on_malformed
    limits = {"sentinel": config.remove_sentinel, "infinity": config.infinity}
    links = read_topology(topology_path, on_malformed=policy, **limits)
    messages = read_messages(messages_path, on_malformed=policy)
    changes = read_changes(changes_path, on_malformed=policy, **limits)
    _log.info(
        "loaded %d links, %d messages, %d changes (protocol=%s)",
        len(links),
        len(messages),
        len(changes),
        config.protocol,
    )

    with JsonlLogger(config.event_log) as logger:
        result = Simulation(links, messages, changes, config=config, logger=logger).run()

    count = write_states(output_path, result.states, infinity=config.infinity)
    _log.info(
        "wrote %d routing states to %s (%d changed routing, %d changes skipped)",
        count,
        output_path,
        count_hash_changes(result.route_hashes),
        result.skipped_changes,
    )
    if json_path:
        dump_json(json_path, result.to_dict())
    return result
