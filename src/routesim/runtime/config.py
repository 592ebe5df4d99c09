from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional

from routesim.cli.validate import validate_config
from routesim.core.types import INF, REMOVE_SENTINEL
from routesim.utils.io import load_yaml


@dataclass(frozen=True)
class SimulationConfig:
    protocol: str = "dv"
    infinity: int = INF
    remove_sentinel: int = REMOVE_SENTINEL
    on_malformed: str = "skip"
    max_passes: int = 0
    split_horizon: bool = True
    event_log: Optional[str] = None
    log_level: str = "INFO"

    def solver_params(self) -> Dict[str, Any]:
        return {
            "infinity": self.infinity,
            "remove_sentinel": self.remove_sentinel,
            "max_passes": self.max_passes,
            "split_horizon": self.split_horizon,
        }

    def with_overrides(self, **overrides: Any) -> "SimulationConfig":
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def config_from_dict(raw: Dict[str, Any]) -> SimulationConfig:
    errors = validate_config(raw)
    if errors:
        raise ValueError("Invalid config: " + "; ".join(errors))
    event_log = raw.get("event_log")
    return SimulationConfig(
        protocol=str(raw.get("protocol", "dv")).lower(),
        infinity=int(raw.get("infinity", INF)),
        remove_sentinel=int(raw.get("remove_sentinel", REMOVE_SENTINEL)),
        on_malformed=str(raw.get("on_malformed", "skip")),
        max_passes=int(raw.get("max_passes", 0)),
        split_horizon=bool(raw.get("split_horizon", True)),
        event_log=str(event_log) if event_log else None,
        log_level=str(raw.get("log_level", "INFO")).upper(),
    )


def load_simulation_config(path: str | Path | None) -> SimulationConfig:
    if path is None:
        return SimulationConfig()
    return config_from_dict(load_yaml(path))
