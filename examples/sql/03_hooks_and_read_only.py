"""Injected create/update hooks, manual keys, and read-only repositories."""

from __future__ import annotations

import sqlite3
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

# Allow running this script directly from repository root.
PROJECT_ROOT = next(
    (parent for parent in Path(__file__).resolve().parents if (parent / "sqlrepo").exists()),
    None,
)
if PROJECT_ROOT and str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from sqlrepo import (
    Repository,
    RepositoryHooks,
    SqlExecutor,
    SQLiteDialect,
    TableDescription,
    UnsupportedOperationError,
)


@dataclass
class Setting:
    # Caller-assigned key plus an explicit "new" flag that is never persisted.
    id: str = ""
    value: str = ""
    persisted: bool = field(default=False, metadata={"transient": True})

    def is_new(self) -> bool:
        return not self.persisted


def setting_from_row(row: Any) -> Setting:
    return Setting(id=row["key"], value=row["value"], persisted=True)


def setting_columns(setting: Setting) -> dict[str, Any]:
    return {"key": setting.id, "value": setting.value}


def touch(columns: dict[str, Any], *_: Any) -> dict[str, Any]:
    columns["updated_at"] = datetime.now(timezone.utc).isoformat()
    return columns


def main() -> None:
    conn = sqlite3.connect(":memory:")
    conn.execute("CREATE TABLE settings (key TEXT PRIMARY KEY, value TEXT, updated_at TEXT)")
    executor = SqlExecutor(conn, SQLiteDialect())
    table = TableDescription("settings", "key")

    settings = Repository[Setting](
        executor,
        setting_from_row,
        table,
        row_unmapper=setting_columns,
        hooks=RepositoryHooks(
            pre_create=touch,
            pre_update=lambda entity, columns: touch(columns),
        ),
    )

    try:
        settings.save(Setting(id="theme", value="dark"))
        theme = settings.find_one("theme")
        print("Stored:", theme)

        theme.value = "light"
        settings.save(theme)
        print("Raw row:", conn.execute("SELECT * FROM settings").fetchall())

        # No unmapper: reads work, writes are rejected before touching the database.
        read_only = Repository[Setting](executor, setting_from_row, table)
        print("Read-only find_all:", read_only.find_all())
        try:
            read_only.save(Setting(id="lang", value="en"))
        except UnsupportedOperationError as exc:
            print("Expected error:", exc)
    finally:
        executor.close()


if __name__ == "__main__":
    main()
