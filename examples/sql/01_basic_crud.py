"""Basic CRUD example for sqlrepo Repository."""

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
    Repository,
    RepositoryHooks,
    SqlExecutor,
    SQLiteDialect,
    TableDescription,
    stamp_generated_key,
)


@dataclass
class User:
    # Identity: None until the database assigns one.
    id: Optional[int] = None
    email: str = ""
    age: Optional[int] = None

    def is_new(self) -> bool:
        return self.id is None


def main() -> None:
    # 1) Create table; schema management is up to the application.
    conn = sqlite3.connect(":memory:")
    conn.execute(
        "CREATE TABLE users (id INTEGER PRIMARY KEY AUTOINCREMENT, email TEXT, age INTEGER)"
    )

    # 2) Create executor and repository; the generated key is stamped on create.
    executor = SqlExecutor(conn, SQLiteDialect())
    repo = Repository[User](
        executor,
        DataclassRowMapper(User),
        TableDescription("users", "id"),
        row_unmapper=DataclassRowUnmapper(),
        hooks=RepositoryHooks(post_create=stamp_generated_key()),
    )

    try:
        # 3) save() inserts new entities.
        alice = repo.save(User(email="alice@example.com", age=25))
        bob = repo.save(User(email="bob@example.com", age=30))
        print("Inserted:", alice, bob)

        # 4) Find by identity.
        print("Fetched by id:", repo.find_one(alice.id))
        print("Missing id:", repo.find_one(999))

        # 5) save() updates entities that already have an identity.
        bob.age = 31
        repo.save(bob)
        print("After update:", repo.find_one(bob.id))

        # 6) List and count.
        print("All users:", repo.find_all())
        print("Count:", repo.count(), "exists(alice):", repo.exists(alice.id))

        # 7) Delete by entity.
        print("Deleted rows:", repo.delete(alice))
        print("After delete:", repo.find_all())
    finally:
        executor.close()


if __name__ == "__main__":
    main()
