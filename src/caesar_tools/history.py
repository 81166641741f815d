import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

HISTORY_PATH = Path.home() / ".caesar_tools_history.jsonl"


def log_event(action: str, payload: Dict[str, Any], path: Optional[Path] = None) -> None:
    """
    Append a simple JSON line to history for traceability.
    """
    target = path or HISTORY_PATH
    record = {
        "action": action,
        "time": datetime.now(timezone.utc).isoformat(timespec="seconds"),
        **payload,
    }
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("a", encoding="utf-8") as fh:
            fh.write(json.dumps(record, ensure_ascii=False) + "\n")
    except OSError:
        # History failures should not break core functionality.
        pass


def read_events(path: Optional[Path] = None, limit: Optional[int] = 20) -> List[Dict[str, Any]]:
    """Return the most recent history records, oldest first."""
    target = path or HISTORY_PATH
    if not target.exists():
        return []
    records: List[Dict[str, Any]] = []
    with target.open("r", encoding="utf-8") as fh:
        for line in fh:
            line = line.strip()
            if not line:
                continue
            try:
                records.append(json.loads(line))
            except json.JSONDecodeError:
                continue
    if limit is not None and limit > 0:
        return records[-limit:]
    return records
