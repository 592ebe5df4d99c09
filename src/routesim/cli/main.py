from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from routesim.cli.run_sim import load_effective_config, run_files
from routesim.cli.validate import validate_config
from routesim.core.errors import RoutingError
from routesim.protocols.registry import available_protocols
from routesim.utils.io import load_yaml

DEFAULT_OUTPUT = "output.txt"

_log = logging.getLogger("routesim.cli")


def _add_run_arguments(parser: argparse.ArgumentParser, with_protocol: bool) -> None:
    parser.add_argument("topology", help="Topology file: '<node1> <node2> <cost>' per line.")
    parser.add_argument("messages", help="Message file: '<source> <destination> <text>' per line.")
    parser.add_argument("changes", help="Changes file: '<node1> <node2> <cost>', cost -999 removes.")
    parser.add_argument("output", nargs="?", default=DEFAULT_OUTPUT, help="Output file (default: output.txt).")
    if with_protocol:
        parser.add_argument("--protocol", choices=available_protocols(), default=None)
    parser.add_argument("--config", default=None, help="YAML config file.")
    parser.add_argument("--json", dest="json_path", default=None, help="Also dump the result as JSON.")
    parser.add_argument("--event-log", default=None, help="Write a JSONL event log to this path.")
    parser.add_argument("--on-malformed", choices=["skip", "fail"], default=None)
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="routesim", description="Routing table simulator")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_run = sub.add_parser("run", help="Compute routing tables and trace messages")
    _add_run_arguments(p_run, with_protocol=True)

    p_validate = sub.add_parser("validate", help="Validate a config file")
    p_validate.add_argument("--config", required=True)

    return parser


def build_fixed_parser(prog: str, protocol: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=prog, description=f"Routing table simulator ({protocol})")
    _add_run_arguments(parser, with_protocol=False)
    parser.set_defaults(protocol=protocol)
    return parser


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _run(args: argparse.Namespace) -> int:
    try:
        config = load_effective_config(
            args.config,
            protocol=args.protocol,
            on_malformed=args.on_malformed,
            event_log=args.event_log,
            log_level=args.log_level,
        )
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    _configure_logging(config.log_level)
    try:
        run_files(args.topology, args.messages, args.changes, args.output, config, json_path=args.json_path)
    except (RoutingError, OSError) as exc:
        _log.error("run failed: %s", exc)
        return 1
    return 0


def _validate(config_path: str) -> int:
    try:
        cfg = load_yaml(config_path)
    except (OSError, ValueError) as exc:
        print(json.dumps({"ok": False, "errors": [str(exc)]}, ensure_ascii=False, indent=2))
        return 1
    errors = validate_config(cfg)
    if errors:
        print(json.dumps({"ok": False, "errors": errors}, ensure_ascii=False, indent=2))
        return 1
    print(json.dumps({"ok": True}, ensure_ascii=False, indent=2))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.cmd == "run":
        return _run(args)
    if args.cmd == "validate":
        return _validate(args.config)
    return 2


def dvr_main(argv: Optional[List[str]] = None) -> int:
    return _run(build_fixed_parser("dvr", "dv").parse_args(argv))


def lsr_main(argv: Optional[List[str]] = None) -> int:
    return _run(build_fixed_parser("lsr", "ls").parse_args(argv))


if __name__ == "__main__":
    raise SystemExit(main())
