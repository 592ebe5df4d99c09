from __future__ import annotations

from typing import Any, Dict

from routesim.protocols.registry import available_protocols

_KNOWN_KEYS = {
    "protocol",
    "infinity",
    "remove_sentinel",
    "on_malformed",
    "max_passes",
    "split_horizon",
    "event_log",
    "log_level",
}
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR"}


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_config(cfg: Dict[str, Any]) -> list[str]:
    errors: list[str] = []

    if not isinstance(cfg, dict):
        return ["config must be a mapping"]

    for key in sorted(set(cfg) - _KNOWN_KEYS):
        errors.append(f"Unknown config key '{key}'")

    protocol = str(cfg.get("protocol", "dv")).lower()
    if protocol not in available_protocols():
        errors.append(f"protocol must be one of {available_protocols()}, got '{protocol}'")

    infinity = cfg.get("infinity", 9999)
    if not _is_int(infinity) or infinity <= 0:
        errors.append("infinity must be a positive integer")

    sentinel = cfg.get("remove_sentinel", -999)
    if not _is_int(sentinel) or sentinel > 0:
        errors.append("remove_sentinel must be a non-positive integer")

    if cfg.get("on_malformed", "skip") not in {"skip", "fail"}:
        errors.append("on_malformed must be 'skip' or 'fail'")

    max_passes = cfg.get("max_passes", 0)
    if not _is_int(max_passes) or max_passes < 0:
        errors.append("max_passes must be >= 0")

    if not isinstance(cfg.get("split_horizon", True), bool):
        errors.append("split_horizon must be a boolean")

    if str(cfg.get("log_level", "INFO")).upper() not in _LOG_LEVELS:
        errors.append(f"log_level must be one of {sorted(_LOG_LEVELS)}")

    return errors
