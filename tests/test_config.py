from __future__ import annotations

from pathlib import Path

import pytest

from routesim.cli.validate import validate_config
from routesim.runtime.config import SimulationConfig, load_simulation_config


def test_load_simulation_config_parses_yaml(tmp_path: Path) -> None:
    cfg_path = tmp_path / "sim.yaml"
    cfg_path.write_text(
        """
protocol: OSPF
infinity: 5000
on_malformed: fail
max_passes: 40
split_horizon: false
event_log: results/events.jsonl
log_level: debug
""".strip(),
        encoding="utf-8",
    )
    cfg = load_simulation_config(cfg_path)

    assert cfg.protocol == "ospf"
    assert cfg.infinity == 5000
    assert cfg.on_malformed == "fail"
    assert cfg.max_passes == 40
    assert cfg.split_horizon is False
    assert cfg.event_log == "results/events.jsonl"
    assert cfg.log_level == "DEBUG"
    assert cfg.solver_params()["infinity"] == 5000


def test_defaults_without_file() -> None:
    cfg = load_simulation_config(None)
    assert cfg == SimulationConfig()
    assert cfg.protocol == "dv"
    assert cfg.infinity == 9999
    assert cfg.remove_sentinel == -999


def test_overrides_ignore_none() -> None:
    cfg = SimulationConfig().with_overrides(protocol="ls", log_level=None)
    assert cfg.protocol == "ls"
    assert cfg.log_level == "INFO"


def test_invalid_config_raises(tmp_path: Path) -> None:
    cfg_path = tmp_path / "bad.yaml"
    cfg_path.write_text("protocol: bgp\n", encoding="utf-8")
    with pytest.raises(ValueError, match="protocol"):
        load_simulation_config(cfg_path)


def test_validate_config_collects_errors() -> None:
    errors = validate_config(
        {
            "protocol": "bgp",
            "infinity": 0,
            "on_malformed": "ignore",
            "max_passes": -1,
            "colour": "blue",
        }
    )
    assert len(errors) == 5
    assert any("colour" in e for e in errors)


def test_validate_config_accepts_defaults_file() -> None:
    from routesim.utils.io import load_yaml

    cfg = load_yaml(Path(__file__).resolve().parents[1] / "configs" / "defaults.yaml")
    assert validate_config(cfg) == []
