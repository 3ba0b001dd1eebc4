from __future__ import annotations

import unittest
from dataclasses import FrozenInstanceError, dataclass, field
from typing import Optional

from sqlrepo import (
    DataclassRowMapper,
    DataclassRowUnmapper,
    Direction,
    MissingRowUnmapper,
    Order,
    Page,
    PageRequest,
    Sort,
    TableDescription,
    UnsupportedOperationError,
)


@dataclass
class Account:
    id: Optional[int] = None
    owner: str = field(default="", metadata={"column": "owner_name"})
    balance: int = 0
    cache: dict = field(default_factory=dict, metadata={"transient": True})


class TableDescriptionTests(unittest.TestCase):
    def test_defaults(self) -> None:
        table = TableDescription("accounts")
        self.assertEqual(table.id_column, "id")
        self.assertEqual(table.select_clause, "*")
        self.assertIsNone(table.from_clause)

    def test_rejects_blank_names(self) -> None:
        for kwargs in ({"name": ""}, {"name": "t", "id_column": " "}, {"name": "t", "from_clause": ""}):
            with self.subTest(kwargs=kwargs), self.assertRaises(ValueError):
                TableDescription(**kwargs)

    def test_is_immutable(self) -> None:
        with self.assertRaises(FrozenInstanceError):
            TableDescription("t").name = "other"  # type: ignore[misc]


class SortTests(unittest.TestCase):
    def test_sort_by_and_direction_parsing(self) -> None:
        sort = Sort.by("a", "b", direction="desc")
        self.assertEqual([o.direction for o in sort], [Direction.DESC, Direction.DESC])
        self.assertEqual(Order("a", "asc").direction, Direction.ASC)
        self.assertTrue(Order.asc("a").is_ascending)

    def test_and_and_flip(self) -> None:
        sort = Sort.by("a").and_(Sort.by("b", direction=Direction.DESC))
        self.assertEqual([o.property for o in sort], ["a", "b"])
        self.assertEqual(
            [o.direction for o in sort.descending()], [Direction.DESC, Direction.DESC]
        )
        self.assertEqual([o.direction for o in sort.ascending()], [Direction.ASC, Direction.ASC])

    def test_unsorted_is_falsy(self) -> None:
        self.assertFalse(Sort.unsorted())
        self.assertTrue(Sort.by("a"))

    def test_invalid_property_and_direction(self) -> None:
        with self.assertRaises(ValueError):
            Order("name; DROP TABLE users")
        with self.assertRaises(ValueError):
            Order("name", "sideways")
        with self.assertRaises(TypeError):
            Sort(("name",))  # type: ignore[arg-type]


class PageTests(unittest.TestCase):
    def test_page_request_navigation(self) -> None:
        request = PageRequest(2, 10, Sort.by("id"))
        self.assertEqual(request.offset, 20)
        self.assertEqual(request.next().page, 3)
        self.assertEqual(request.previous_or_first().page, 1)
        self.assertEqual(PageRequest.of(0, 5).previous_or_first().page, 0)
        self.assertEqual(request.first(), PageRequest(0, 10, Sort.by("id")))

    def test_page_request_validation(self) -> None:
        with self.assertRaises(ValueError):
            PageRequest(-1, 10)
        with self.assertRaises(ValueError):
            PageRequest(0, 0)
        with self.assertRaises(TypeError):
            PageRequest(0, "10")  # type: ignore[arg-type]

    def test_page_metadata(self) -> None:
        page = Page(content=["a", "b"], pageable=PageRequest(1, 2), total=5)
        self.assertEqual(page.total_pages, 3)
        self.assertEqual(page.number, 1)
        self.assertEqual(page.size, 2)
        self.assertEqual(page.number_of_elements, 2)
        self.assertTrue(page.has_next)
        self.assertTrue(page.has_previous)
        self.assertFalse(page.is_first)
        self.assertFalse(page.is_last)
        self.assertEqual(list(page), ["a", "b"])

    def test_total_pages_is_exact_for_large_totals(self) -> None:
        page = Page(content=[], pageable=PageRequest(0, 10), total=10**17 + 1)
        self.assertEqual(page.total_pages, 10**16 + 1)
        self.assertEqual(Page(content=[], pageable=PageRequest(0, 10), total=10**17).total_pages, 10**16)

    def test_empty_page(self) -> None:
        page = Page(content=[], pageable=PageRequest(0, 10), total=0)
        self.assertEqual(page.total_pages, 0)
        self.assertFalse(page.has_content)
        self.assertTrue(page.is_first)
        self.assertTrue(page.is_last)


class DataclassMappingTests(unittest.TestCase):
    def test_unmapper_respects_column_names_and_transient_fields(self) -> None:
        columns = DataclassRowUnmapper().map_columns(Account(id=1, owner="ann", balance=3))
        self.assertEqual(list(columns.items()), [("id", 1), ("owner_name", "ann"), ("balance", 3)])

    def test_mapper_ignores_unknown_columns(self) -> None:
        account = DataclassRowMapper(Account).map_row(
            {"id": 2, "owner_name": "bob", "balance": 9, "audit": "x"}
        )
        self.assertEqual(account, Account(id=2, owner="bob", balance=9))

    def test_non_dataclass_inputs_are_rejected(self) -> None:
        with self.assertRaises(TypeError):
            DataclassRowMapper(dict)
        with self.assertRaises(TypeError):
            DataclassRowUnmapper().map_columns({"id": 1})

    def test_missing_unmapper_is_unsupported(self) -> None:
        with self.assertRaises(UnsupportedOperationError):
            MissingRowUnmapper().map_columns(Account())


if __name__ == "__main__":
    unittest.main()
