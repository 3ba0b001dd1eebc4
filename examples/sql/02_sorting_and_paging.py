"""Sorting and paging with Sort, PageRequest and Page."""

from __future__ import annotations

import sqlite3
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# Allow running this script directly from repository root.
PROJECT_ROOT = next(
    (parent for parent in Path(__file__).resolve().parents if (parent / "sqlrepo").exists()),
    None,
)
if PROJECT_ROOT and str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from sqlrepo import (
    DataclassRowMapper,
    DataclassRowUnmapper,
    Order,
    PageRequest,
    Repository,
    Sort,
    SqlExecutor,
    SQLiteDialect,
)


@dataclass
class City:
    id: Optional[int] = None
    name: str = ""
    population: int = 0

    def is_new(self) -> bool:
        return self.id is None


def main() -> None:
    conn = sqlite3.connect(":memory:")
    conn.execute("CREATE TABLE cities (id INTEGER PRIMARY KEY, name TEXT, population INTEGER)")
    executor = SqlExecutor(conn, SQLiteDialect())
    repo = Repository[City](
        executor, DataclassRowMapper(City), "cities", row_unmapper=DataclassRowUnmapper()
    )

    try:
        repo.save_all(
            City(name=name, population=pop)
            for name, pop in [
                ("Oslo", 709_000),
                ("Lima", 10_000_000),
                ("Bern", 134_000),
                ("Kyiv", 2_950_000),
                ("Rome", 2_760_000),
            ]
        )

        by_population = repo.find_all(Sort((Order.desc("population"), Order.asc("name"))))
        print("Largest first:", [c.name for c in by_population])

        request = PageRequest(0, 2, Sort.by("name"))
        while True:
            page = repo.find_page(request)
            print(
                f"Page {page.number + 1}/{page.total_pages}:",
                [c.name for c in page],
                f"(total={page.total})",
            )
            if not page.has_next:
                break
            request = request.next()
    finally:
        executor.close()


if __name__ == "__main__":
    main()
