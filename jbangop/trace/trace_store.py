from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterator, Optional


class TraceStoreJSONL:
    """
    Append-only JSONL file of invocation events, one JSON object per line.
    """

    def __init__(self, path: Path):
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def append(self, event: Dict[str, Any]) -> None:
        """
        Write one event as a single line. Values JSON cannot encode (paths) are stored as str.
        """
        line = json.dumps(event, ensure_ascii=False, default=str)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("a", encoding="utf-8") as f:
            print(line, file=f)

    def iter_events(self, event_type: Optional[str] = None) -> Iterator[Dict[str, Any]]:
        if not self._path.exists():
            return
        with self._path.open("r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                event = json.loads(line)
                if event_type is None or event.get("event_type") == event_type:
                    yield event
