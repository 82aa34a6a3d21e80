from __future__ import annotations

import re
from pathlib import Path
from typing import List

from .connection import DBConfig, open_connection

# A statement ends at a ';' outside single-quoted literals.
_STATEMENT = re.compile(r"(?:[^;']|'(?:[^'\\]|\\.)*')+")
_SKIPPED_PREFIXES = ("CREATE DATABASE", "USE ")


def schema_statements(sql: str) -> List[str]:
    """Split schema.sql into executable statements.

    Comment lines are dropped, as are CREATE DATABASE / USE statements: the
    target database comes from DB_CONFIG, not from the file.
    """

    body = "\n".join(line for line in sql.splitlines() if not line.lstrip().startswith("--"))
    statements = []
    for match in _STATEMENT.finditer(body):
        stmt = match.group(0).strip()
        if stmt and not stmt.upper().startswith(_SKIPPED_PREFIXES):
            statements.append(stmt)
    return statements


def _create_database(target: DBConfig) -> None:
    conn = open_connection(target, with_database=False, use_pure=True)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> int:
    """Create the database if needed and run schema.sql; returns the statement count."""
    target = DBConfig.from_dict(db_config)
    statements = schema_statements(Path(schema_path).read_text(encoding="utf-8"))

    _create_database(target)
    conn = open_connection(target, use_pure=True)
    try:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()

    return len(statements)


def list_tables(db_config: dict) -> List[str]:
    conn = open_connection(DBConfig.from_dict(db_config), use_pure=True)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return sorted(row[0] for row in cur.fetchall())
    finally:
        conn.close()
