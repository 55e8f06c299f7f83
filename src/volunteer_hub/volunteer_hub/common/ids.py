from __future__ import annotations

import uuid


def new_id(prefix: str) -> str:
    """Generate a collision-resistant identifier like ``event_3f2c...``."""
    return f"{prefix}_{uuid.uuid4().hex}"
