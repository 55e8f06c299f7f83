from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.volunteer_hub.volunteer_hub.database.bootstrap import ensure_seeded
from src.volunteer_hub.volunteer_hub.database.connection import DatabaseConnection, DBConfig
from src.volunteer_hub.volunteer_hub.database.mysql_store import MySQLEntityStore


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    conn = DatabaseConnection(DBConfig.from_mapping(settings.DB_CONFIG))
    store = MySQLEntityStore(conn)

    created = ensure_seeded(store, admin_password=getattr(settings, "ADMIN_DEFAULT_PASSWORD", "admin"))
    state = "created admin account" if created else "already seeded"
    print(f"OK: {state} -> {conn.config.describe()} (collections={', '.join(store.list_collections())})")


if __name__ == "__main__":
    main()
