from __future__ import annotations

import json
from pathlib import Path
from typing import IO, Any, Optional


class JsonlLogger:
    """Structured simulation events, one JSON object per line.

    Every row carries ``event`` and a running ``seq`` number. Without a path
    the logger accepts events and drops them, so callers never branch on it.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        self.path: Optional[Path] = Path(path) if path else None
        self.seq = 0
        self._fh: Optional[IO[str]] = None
        if self.path is not None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._fh = self.path.open("w", encoding="utf-8")

    @property
    def enabled(self) -> bool:
        return self._fh is not None

    def log(self, event: str, **fields: Any) -> None:
        if self._fh is None:
            return
        self.seq += 1
        row = {"event": event, "seq": self.seq, **fields}
        # node ids may be str or int; default=str covers anything else that slips in
        self._fh.write(json.dumps(row, sort_keys=True, default=str) + "\n")
        self._fh.flush()

    def close(self) -> None:
        if self._fh is not None:
            self._fh.close()
            self._fh = None

    def __enter__(self) -> "JsonlLogger":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
