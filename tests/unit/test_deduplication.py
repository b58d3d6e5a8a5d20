"""Unit tests for deduplicate_by_id.

Tests cover:
- first occurrence of every id is kept, later repeats are dropped
- relative order of surviving items is preserved
- deduplication is idempotent
- empty input yields an empty list
- a custom key function is honoured
"""

from __future__ import annotations

from newsfeed_adapters.core.deduplication import deduplicate_by_id
from newsfeed_adapters.core.feed import ArticleItem


def _item(item_id: str, title: str = "") -> ArticleItem:
    return ArticleItem(title=title or item_id, link=f"https://www.reuters.com/{item_id}/", id=item_id)


class TestDeduplicateById:
    def test_keeps_first_occurrence(self) -> None:
        items = [_item("a", "first"), _item("b"), _item("a", "second")]

        result = deduplicate_by_id(items)

        assert [i.id for i in result] == ["a", "b"]
        assert result[0].title == "first"

    def test_preserves_relative_order(self) -> None:
        items = [_item(x) for x in ["c", "a", "c", "b", "a", "d"]]

        assert [i.id for i in deduplicate_by_id(items)] == ["c", "a", "b", "d"]

    def test_is_idempotent(self) -> None:
        items = [_item(x) for x in ["a", "b", "a", "c", "b"]]

        once = deduplicate_by_id(items)
        twice = deduplicate_by_id(once)

        assert twice == once

    def test_unique_input_is_unchanged(self) -> None:
        items = [_item(x) for x in ["a", "b", "c"]]

        assert deduplicate_by_id(items) == items

    def test_empty_input(self) -> None:
        assert deduplicate_by_id([]) == []

    def test_returns_new_list(self) -> None:
        items = [_item("a")]

        assert deduplicate_by_id(items) is not items

    def test_custom_key(self) -> None:
        rows = [{"usn": "1"}, {"usn": "2"}, {"usn": "1"}]

        assert deduplicate_by_id(rows, key=lambda row: row["usn"]) == [{"usn": "1"}, {"usn": "2"}]
