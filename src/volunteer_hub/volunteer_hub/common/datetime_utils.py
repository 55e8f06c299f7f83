from __future__ import annotations

import time
from datetime import datetime, timezone


def now_millis() -> int:
    """Current wall-clock time in milliseconds since the epoch.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return int(time.time() * 1000)


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
