from __future__ import annotations

import json
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional


@dataclass
class EventLogger:
    """
    Append-only JSON Lines sink for board events.

    Each line is one record: {"ts", "tact", "source", "event", "meta"}.
    `source` is the stage that produced it (P1, P2, backlog, simulation);
    `tact` is None for run-level records such as start and done.
    """
    log_path: Path

    def log(
        self,
        source: str,
        event: str,
        meta: Optional[Dict[str, Any]] = None,
        tact: Optional[int] = None,
    ) -> None:
        record = {
            "ts": time.strftime("%Y-%m-%dT%H:%M:%S", time.localtime()),
            "tact": tact,
            "source": source,
            "event": event,
            "meta": meta or {},
        }
        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        with self.log_path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(record, ensure_ascii=False) + "\n")
