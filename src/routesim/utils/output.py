from __future__ import annotations

from pathlib import Path
from typing import IO, Iterable, List, Mapping

from routesim.core.types import INF, MessageTrace, NodeId, StableState, TraceStatus, node_sort_key
from routesim.model.routing import RouteEntry

NO_HOP_LABEL = "-1"


def format_tables(tables: Mapping[NodeId, List[RouteEntry]], infinity: int = INF) -> List[str]:
    """One ``<destination> <next_hop> <cost>`` line per entry, a blank line per router."""
    lines: List[str] = []
    for node in sorted(tables, key=node_sort_key):
        for entry in tables[node]:
            if entry.reachable:
                lines.append(f"{entry.destination} {entry.next_hop} {entry.cost}")
            else:
                lines.append(f"{entry.destination} {NO_HOP_LABEL} {infinity}")
        lines.append("")
    return lines


def format_trace(trace: MessageTrace) -> str:
    msg = trace.message
    head = f"from {msg.source} to {msg.destination} cost {trace.cost_label} hops "
    if trace.status is TraceStatus.REACHABLE:
        hops = "".join(f"{hop} " for hop in trace.hops)
    elif trace.status is TraceStatus.UNKNOWN_NODE:
        hops = "unknown "
    else:
        hops = "unreachable "
    return f"{head}{hops}message {msg.text}"


def format_traces(traces: Iterable[MessageTrace]) -> List[str]:
    lines: List[str] = []
    for trace in traces:
        lines.append(format_trace(trace))
        lines.append("")
    return lines


def format_state(state: StableState, infinity: int = INF) -> List[str]:
    return format_tables(state.tables, infinity) + format_traces(state.traces)


def write_state(fh: IO[str], state: StableState, infinity: int = INF) -> None:
    for line in format_state(state, infinity):
        fh.write(line + "\n")


def write_states(path: str | Path, states: Iterable[StableState], infinity: int = INF) -> int:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with p.open("w", encoding="utf-8") as fh:
        for state in states:
            write_state(fh, state, infinity)
            count += 1
    return count
