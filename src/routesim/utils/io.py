from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, TypeVar

import yaml

from routesim.core.errors import MalformedRecordError
from routesim.core.types import INF, REMOVE_SENTINEL, ChangeRecord, Link, Message, NodeId

_log = logging.getLogger("routesim.io")

T = TypeVar("T")

MALFORMED_POLICIES = ("skip", "fail")


def load_yaml(path: str | Path) -> Dict[str, Any]:
    with Path(path).open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected mapping YAML: {path}")
    return data


def dump_json(path: str | Path, obj: Any) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        json.dump(obj, f, ensure_ascii=False, indent=2, sort_keys=True)


def parse_node_id(token: str) -> NodeId:
    try:
        return int(token)
    except ValueError:
        return token


def parse_cost(token: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise MalformedRecordError(f"cost is not an integer: {token!r}") from None


def parse_link_line(
    line: str,
    *,
    allow_sentinel: bool = False,
    sentinel: int = REMOVE_SENTINEL,
    infinity: int = INF,
) -> Link:
    parts = line.split()
    if len(parts) != 3:
        raise MalformedRecordError(f"expected '<node1> <node2> <cost>', got {len(parts)} fields")
    node1, node2 = parse_node_id(parts[0]), parse_node_id(parts[1])
    cost = parse_cost(parts[2])
    if node1 == node2:
        raise MalformedRecordError(f"self-link on node {node1!r}")
    if cost == sentinel:
        if not allow_sentinel:
            raise MalformedRecordError(f"removal sentinel {sentinel} is not a link cost")
    elif cost <= 0:
        raise MalformedRecordError(f"link cost must be positive, got {cost}")
    elif cost >= infinity:
        raise MalformedRecordError(f"link cost {cost} must be below infinity ({infinity})")
    return Link(node1, node2, cost)


def parse_message_line(line: str) -> Message:
    parts = line.strip().split(None, 2)
    if len(parts) < 2:
        raise MalformedRecordError("expected '<source> <destination> <message>'")
    text = parts[2] if len(parts) == 3 else ""
    return Message(parse_node_id(parts[0]), parse_node_id(parts[1]), text)


def parse_lines(
    lines: Iterable[str],
    parse: Callable[[str], T],
    *,
    on_malformed: str = "skip",
    source: str = "",
) -> List[T]:
    """Parse every meaningful line; blank lines and ``#`` comments are ignored.

    With ``on_malformed="skip"`` a bad line is logged and dropped, with
    ``"fail"`` the first bad line raises ``MalformedRecordError``.
    """
    if on_malformed not in MALFORMED_POLICIES:
        raise ValueError(f"on_malformed must be one of {MALFORMED_POLICIES}, got {on_malformed!r}")
    records: List[T] = []
    for line_no, line in enumerate(lines, start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        try:
            records.append(parse(line))
        except MalformedRecordError as exc:
            err = MalformedRecordError(exc.reason, line=line, line_no=line_no, source=source)
            if on_malformed == "fail":
                raise err from None
            _log.warning("skipping malformed record: %s", err)
    return records


def _read(path: str | Path, parse: Callable[[str], T], on_malformed: str) -> List[T]:
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        return parse_lines(f, parse, on_malformed=on_malformed, source=str(p))


def read_topology(
    path: str | Path,
    on_malformed: str = "skip",
    sentinel: int = REMOVE_SENTINEL,
    infinity: int = INF,
) -> List[Link]:
    return _read(path, lambda line: parse_link_line(line, sentinel=sentinel, infinity=infinity), on_malformed)


def read_changes(
    path: str | Path,
    on_malformed: str = "skip",
    sentinel: int = REMOVE_SENTINEL,
    infinity: int = INF,
) -> List[ChangeRecord]:
    def parse(line: str) -> ChangeRecord:
        return parse_link_line(line, allow_sentinel=True, sentinel=sentinel, infinity=infinity)

    return _read(path, parse, on_malformed)


def read_messages(path: str | Path, on_malformed: str = "skip") -> List[Message]:
    return _read(path, parse_message_line, on_malformed)

