"""Show SQL generation differences across ANSI/SQLite/Postgres/MySQL dialects."""

from __future__ import annotations

import sys
from pathlib import Path

# Allow running this script directly from repository root.
PROJECT_ROOT = next(
    (parent for parent in Path(__file__).resolve().parents if (parent / "sqlrepo").exists()),
    None,
)
if PROJECT_ROOT and str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from sqlrepo import PageRequest, Sort, SqlGenerator, TableDescription, dialect_for


def show_for_dialect(name: str) -> None:
    print(f"\n===== {name} =====")

    gen = SqlGenerator(dialect_for(name))
    table = TableDescription("users", "id")
    columns = {"email": "a@example.com", "age": 30}

    print("count:        ", gen.count(table))
    print("count_by_id:  ", gen.count_by_id(table))
    print("select_by_id: ", gen.select_by_id(table))
    print("select_by_ids:", gen.select_by_ids(table, 3))
    print("page:         ", gen.select_all(table, page=PageRequest(2, 10, Sort.by("email"))))
    print("create:       ", gen.create(table, columns))
    print("update:       ", gen.update(table, columns))
    print("delete_by_id: ", gen.delete_by_id(table))
    print("delete_all:   ", gen.delete_all(table))


def main() -> None:
    for name in ("ansi", "sqlite", "postgres", "mysql"):
        show_for_dialect(name)


if __name__ == "__main__":
    main()
