import json
import sys
from datetime import datetime, timezone


def log_event(level: str, event: str, **fields) -> None:
    payload = {
        "ts": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ"),
        "level": level.lower(),
        "event": event,
    }
    payload.update(fields or {})
    sys.stdout.write(json.dumps(payload, ensure_ascii=False, default=str) + "\n")
