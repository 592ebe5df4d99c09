from __future__ import annotations

import hashlib
import json
from typing import List, Mapping

from routesim.core.types import NodeId, node_sort_key
from routesim.model.routing import RouteEntry


def hash_routes(tables: Mapping[NodeId, List[RouteEntry]]) -> str:
    """Order-independent digest of a full set of routing tables."""
    normalized: list[list] = []
    for node in sorted(tables, key=node_sort_key):
        rows = sorted(tables[node], key=lambda e: node_sort_key(e.destination))
        normalized.append([str(node), [[str(e.destination), str(e.next_hop), int(e.cost)] for e in rows]])
    payload = json.dumps(normalized, separators=(",", ":"))
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def count_hash_changes(hashes: List[str]) -> int:
    changes = 0
    for prev, current in zip(hashes, hashes[1:]):
        if current != prev:
            changes += 1
    return changes
