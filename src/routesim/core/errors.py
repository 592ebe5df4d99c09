from __future__ import annotations

from typing import Any


class RoutingError(RuntimeError):
    """Base class for every failure raised by routesim."""


class NodeNotFoundError(RoutingError, LookupError):
    def __init__(self, node: Any, context: str = "") -> None:
        self.node = node
        self.context = context
        where = f" ({context})" if context else ""
        super().__init__(f"node not found: {node!r}{where}")


class MalformedRecordError(RoutingError, ValueError):
    def __init__(self, reason: str, line: str = "", line_no: int | None = None, source: str = "") -> None:
        self.reason = reason
        self.line = line
        self.line_no = line_no
        self.source = source
        location = ""
        if source or line_no is not None:
            location = f"{source or '<input>'}:{line_no if line_no is not None else '?'}: "
        suffix = f" [{line.strip()}]" if line.strip() else ""
        super().__init__(f"{location}{reason}{suffix}")


class RoutingInvariantError(RoutingError):
    """Routing tables violate the strictly-decreasing-cost next-hop chain."""


class ConvergenceError(RoutingError):
    """A solver did not reach a fixed point within its pass bound."""
