from __future__ import annotations

from pathlib import Path

import pytest

from routesim.core.errors import MalformedRecordError
from routesim.core.types import REMOVE_SENTINEL, Link, Message
from routesim.utils.io import (
    parse_lines,
    parse_link_line,
    parse_message_line,
    read_changes,
    read_messages,
    read_topology,
)


def test_read_topology_parses_links(tmp_path: Path) -> None:
    path = tmp_path / "topology.txt"
    path.write_text("1 2 8\n2 3 3\n\n# comment\n4 1 1\n", encoding="utf-8")

    assert read_topology(path) == [Link(1, 2, 8), Link(2, 3, 3), Link(4, 1, 1)]


def test_read_changes_accepts_sentinel(tmp_path: Path) -> None:
    path = tmp_path / "changes.txt"
    path.write_text("2 4 1\n2 4 -999\n", encoding="utf-8")

    assert read_changes(path) == [Link(2, 4, 1), Link(2, 4, REMOVE_SENTINEL)]


def test_read_messages_keeps_payload_text(tmp_path: Path) -> None:
    path = tmp_path / "messages.txt"
    path.write_text("1 5   here is a message from 1 to 5\n3 4 x\n", encoding="utf-8")

    assert read_messages(path) == [
        Message(1, 5, "here is a message from 1 to 5"),
        Message(3, 4, "x"),
    ]


def test_message_with_empty_payload() -> None:
    assert parse_message_line("1 2") == Message(1, 2, "")


def test_string_node_ids() -> None:
    assert parse_link_line("A B 3") == Link("A", "B", 3)


@pytest.mark.parametrize(
    "line",
    ["1 2", "1 2 3 4", "1 2 x", "1 1 3", "1 2 0", "1 2 -999", "1 2 9999", "1 2 12000"],
)
def test_topology_line_rejects_malformed(line: str) -> None:
    with pytest.raises(MalformedRecordError):
        parse_link_line(line)


def test_parse_lines_skips_bad_lines_by_default(caplog) -> None:
    lines = ["1 2 1\n", "garbage\n", "2 3 1\n"]

    with caplog.at_level("WARNING", logger="routesim.io"):
        links = parse_lines(lines, parse_link_line, source="topo.txt")

    assert links == [Link(1, 2, 1), Link(2, 3, 1)]
    assert "topo.txt:2" in caplog.text


def test_parse_lines_fail_policy_reports_location() -> None:
    with pytest.raises(MalformedRecordError) as excinfo:
        parse_lines(["1 2 1\n", "1 2 abc\n"], parse_link_line, on_malformed="fail", source="topo.txt")

    assert excinfo.value.line_no == 2
    assert "topo.txt:2" in str(excinfo.value)


def test_parse_lines_rejects_unknown_policy() -> None:
    with pytest.raises(ValueError):
        parse_lines([], parse_link_line, on_malformed="ignore")


def test_costs_at_configured_infinity_are_skipped(tmp_path: Path) -> None:
    path = tmp_path / "changes.txt"
    path.write_text("1 2 50\n1 2 49\n1 2 -999\n", encoding="utf-8")

    assert read_changes(path, infinity=50) == [Link(1, 2, 49), Link(1, 2, REMOVE_SENTINEL)]
    with pytest.raises(MalformedRecordError, match="below infinity"):
        read_topology(path, on_malformed="fail", infinity=50)
