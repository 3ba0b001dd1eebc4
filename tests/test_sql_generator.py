from __future__ import annotations

import unittest

from sqlrepo import (
    DataclassRowMapper,
    Dialect,
    MySQLDialect,
    Order,
    PageRequest,
    PostgresDialect,
    Repository,
    Sort,
    SQLiteDialect,
    SqlGenerator,
    TableDescription,
    get_default_sql_generator,
    set_default_sql_generator,
)
from tests.repository_test_helpers import RecordingExecutor, User

USERS = TableDescription("users", "id")


class AnsiSqlGeneratorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.gen = SqlGenerator()

    def test_counts(self) -> None:
        self.assertEqual(self.gen.count(USERS), "SELECT COUNT(*) FROM users")
        self.assertEqual(
            self.gen.count_by_id(USERS), "SELECT COUNT(id) FROM users WHERE id = ?"
        )

    def test_selects(self) -> None:
        self.assertEqual(self.gen.select_all(USERS), "SELECT * FROM users")
        self.assertEqual(self.gen.select_by_id(USERS), "SELECT * FROM users WHERE id = ?")
        self.assertEqual(
            self.gen.select_by_ids(USERS, 3),
            "SELECT * FROM users WHERE id IN (?, ?, ?)",
        )

    def test_select_by_ids_requires_ids(self) -> None:
        with self.assertRaises(ValueError):
            self.gen.select_by_ids(USERS, 0)

    def test_select_all_sorted(self) -> None:
        sort = Sort((Order.asc("name"), Order.desc("id")))
        self.assertEqual(
            self.gen.select_all(USERS, sort=sort),
            "SELECT * FROM users ORDER BY name ASC, id DESC",
        )

    def test_select_all_unsorted_sort_adds_nothing(self) -> None:
        self.assertEqual(self.gen.select_all(USERS, sort=Sort()), "SELECT * FROM users")

    def test_select_all_paged_uses_fetch_clause_and_page_sort(self) -> None:
        page = PageRequest(2, 10, Sort.by("name"))
        self.assertEqual(
            self.gen.select_all(USERS, page=page),
            "SELECT * FROM users ORDER BY name ASC OFFSET 20 ROWS FETCH NEXT 10 ROWS ONLY",
        )

    def test_explicit_sort_wins_over_page_sort(self) -> None:
        page = PageRequest(0, 5, Sort.by("name"))
        sql = self.gen.select_all(USERS, sort=Sort.by("id", direction="desc"), page=page)
        self.assertEqual(
            sql, "SELECT * FROM users ORDER BY id DESC OFFSET 0 ROWS FETCH NEXT 5 ROWS ONLY"
        )

    def test_insert_follows_column_order(self) -> None:
        self.assertEqual(
            self.gen.create(USERS, {"name": "Ann"}),
            "INSERT INTO users (name) VALUES (?)",
        )
        self.assertEqual(
            self.gen.create(USERS, {"name": "Ann", "id": 3, "age": 4}),
            "INSERT INTO users (name, id, age) VALUES (?, ?, ?)",
        )

    def test_insert_without_columns_uses_default_values(self) -> None:
        self.assertEqual(self.gen.create(USERS, {}), "INSERT INTO users DEFAULT VALUES")

    def test_update_places_identity_last(self) -> None:
        self.assertEqual(
            self.gen.update(USERS, {"name": "Bob"}),
            "UPDATE users SET name = ? WHERE id = ?",
        )
        self.assertEqual(
            self.gen.update(USERS, {"name": "Bob", "age": 3}),
            "UPDATE users SET name = ?, age = ? WHERE id = ?",
        )

    def test_update_without_columns_raises(self) -> None:
        with self.assertRaises(ValueError):
            self.gen.update(USERS, {})

    def test_deletes(self) -> None:
        self.assertEqual(self.gen.delete_by_id(USERS), "DELETE FROM users WHERE id = ?")
        self.assertEqual(self.gen.delete_all(USERS), "DELETE FROM users")

    def test_custom_select_and_from_clause_only_affect_reads(self) -> None:
        table = TableDescription(
            "users", "id", select_clause="u.id, u.name", from_clause="users u"
        )
        self.assertEqual(self.gen.select_by_id(table), "SELECT u.id, u.name FROM users u WHERE id = ?")
        self.assertEqual(self.gen.count(table), "SELECT COUNT(*) FROM users u")
        self.assertEqual(self.gen.delete_all(table), "DELETE FROM users")


class DialectSqlGeneratorTests(unittest.TestCase):
    def test_sqlite_quotes_identifiers_and_uses_limit_offset(self) -> None:
        gen = SqlGenerator(SQLiteDialect())
        self.assertEqual(
            gen.update(USERS, {"name": "x"}),
            'UPDATE "users" SET "name" = ? WHERE "id" = ?',
        )
        self.assertEqual(
            gen.select_all(USERS, page=PageRequest(1, 25)),
            'SELECT * FROM "users" LIMIT 25 OFFSET 25',
        )

    def test_postgres_uses_format_placeholders(self) -> None:
        gen = SqlGenerator(PostgresDialect())
        self.assertEqual(
            gen.create(USERS, {"name": "x", "age": 1}),
            'INSERT INTO "users" ("name", "age") VALUES (%s, %s)',
        )

    def test_mysql_uses_backticks(self) -> None:
        gen = SqlGenerator(MySQLDialect())
        self.assertEqual(gen.delete_by_id(USERS), "DELETE FROM `users` WHERE `id` = %s")

    def test_empty_insert_form_comes_from_dialect(self) -> None:
        self.assertEqual(SqlGenerator(MySQLDialect()).create(USERS, {}), "INSERT INTO `users` () VALUES ()")
        self.assertEqual(
            SqlGenerator(SQLiteDialect()).create(USERS, {}), 'INSERT INTO "users" DEFAULT VALUES'
        )

    def test_qualified_sort_property_is_quoted_per_part(self) -> None:
        gen = SqlGenerator(SQLiteDialect())
        self.assertEqual(gen.order_by(Sort.by("u.name")), ' ORDER BY "u"."name" ASC')

    def test_named_paramstyle_is_rejected(self) -> None:
        class _NamedDialect(Dialect):
            paramstyle = "named"

        with self.assertRaises(ValueError):
            SqlGenerator(_NamedDialect()).select_by_id(USERS)


class DefaultSqlGeneratorTests(unittest.TestCase):
    def tearDown(self) -> None:
        set_default_sql_generator(None)

    def test_repository_builds_generator_for_executor_dialect(self) -> None:
        executor = RecordingExecutor(dialect=SQLiteDialect())
        repo = Repository[User](executor, DataclassRowMapper(User), "users")

        repo.count()

        self.assertEqual(executor.calls[0][1], 'SELECT COUNT(*) FROM "users"')

    def test_process_wide_default_generator_is_used(self) -> None:
        custom = SqlGenerator(PostgresDialect())
        set_default_sql_generator(custom)
        repo = Repository[User](RecordingExecutor(), DataclassRowMapper(User), "users")

        self.assertIs(get_default_sql_generator(), custom)
        self.assertIs(repo.sql, custom)

    def test_explicit_generator_wins_over_default(self) -> None:
        set_default_sql_generator(SqlGenerator(PostgresDialect()))
        explicit = SqlGenerator()
        repo = Repository[User](
            RecordingExecutor(), DataclassRowMapper(User), "users", sql_generator=explicit
        )

        self.assertIs(repo.sql, explicit)


if __name__ == "__main__":
    unittest.main()
