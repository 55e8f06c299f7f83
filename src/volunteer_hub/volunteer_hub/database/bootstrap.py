from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

from werkzeug.security import generate_password_hash

from ..core.constants import ADMIN_NAME, ADMIN_USER_ID, DEFAULT_ADMIN_PASSWORD
from ..core.enums import Collection, Role
from ..users.model import User
from .connection import DatabaseConnection
from .mysql_base import db_cursor
from .store import EntityStore, default_value

logger = logging.getLogger(__name__)


def ensure_seeded(store: EntityStore, *, admin_password: str = DEFAULT_ADMIN_PASSWORD) -> bool:
    """First-run initialisation: one approved admin, every other collection empty.

    Collections that already exist are left untouched. Returns True when the
    admin account was created by this call. Runs as one transaction over every
    collection, so two processes starting together seed at most once: the
    MySQL store creates and locks missing rows before they are checked.
    """

    seeded_admin = False
    with store.transaction(*Collection) as tx:
        if not tx.has(Collection.USERS):
            admin = User(
                user_id=ADMIN_USER_ID,
                role=Role.ADMIN,
                name=ADMIN_NAME,
                password_hash=generate_password_hash(admin_password),
                approved=True,
            )
            tx.write(Collection.USERS, [admin.to_dict()])
            seeded_admin = True

        for collection in Collection:
            if collection != Collection.USERS and not tx.has(collection):
                tx.write(collection, default_value(collection))

    if seeded_admin:
        logger.info("Seeded administrator account %r", ADMIN_NAME)
    return seeded_admin


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema files (handles ';' inside quotes).
    buf: list[str] = []
    quote = ""

    for ch in sql:
        if quote:
            buf.append(ch)
            if ch == quote:
                quote = ""
            continue

        if ch in ("'", '"'):
            quote = ch
            buf.append(ch)
            continue

        if ch == ";":
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{conn_factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: str | Path) -> None:
    ensure_database_exists(conn_factory)
    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))

    with db_cursor(conn_factory, dictionary=False) as (_, cur):
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
    logger.info("Schema applied to %s", conn_factory.config.describe())


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    with db_cursor(conn_factory, dictionary=False) as (_, cur):
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
