from __future__ import annotations

import asyncio
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

from loguru import logger

from sqlrepo import (
    AsyncRepository,
    AsyncSqlExecutor,
    DataclassRowMapper,
    DataclassRowUnmapper,
    RepositoryHooks,
    SQLiteDialect,
    stamp_generated_key,
)


@dataclass
class User:
    id: Optional[int] = None
    email: str = ""
    age: Optional[int] = None

    def is_new(self) -> bool:
        return self.id is None


async def main() -> None:
    # Show every executed statement.
    logger.enable("sqlrepo")

    conn = sqlite3.connect(":memory:")
    conn.execute("CREATE TABLE users (id INTEGER PRIMARY KEY, email TEXT, age INTEGER)")
    executor = AsyncSqlExecutor(conn, SQLiteDialect())
    try:
        repo = AsyncRepository[User](
            executor,
            DataclassRowMapper(User),
            "users",
            row_unmapper=DataclassRowUnmapper(),
            hooks=RepositoryHooks(post_create=stamp_generated_key()),
        )

        alice = await repo.save(User(email="alice@example.com", age=20))
        print("inserted:", alice)

        found = await repo.find_one(alice.id)
        if found is None:
            raise RuntimeError("Inserted user was not found.")

        found.age = 21
        await repo.save(found)
        print("after update:", await repo.find_one(found.id))

        await repo.delete(found)
        print("count after delete:", await repo.count())
    finally:
        await executor.aclose()


if __name__ == "__main__":
    asyncio.run(main())
