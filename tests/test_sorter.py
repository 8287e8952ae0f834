"""Tests for book list sorting."""

import locale
from datetime import datetime, timezone

import pytest

from books_vault.models import Book
from books_vault.search import SortOption, configure_collation, sort_books

NOW = datetime(2025, 3, 1, tzinfo=timezone.utc)


def _make_book(book_id: str, title: str, pages: str, day: str) -> Book:
    return Book(
        id=book_id,
        title=title,
        author="Some Author",
        pages=pages,
        tag="Fiction",
        date=day,
        created_at=NOW,
        updated_at=NOW,
    )


@pytest.fixture
def books() -> list[Book]:
    return [
        _make_book("b1", "banana", "90", "2025-01-10"),
        _make_book("b2", "Apple", "1000", "2024-12-31"),
        _make_book("b3", "cherry", "200", "2025-03-05"),
        _make_book("b4", "apple pie", "200", "2025-01-10"),
    ]


def _ids(books: list[Book]) -> list[str]:
    return [book.id for book in books]


class TestSortBooks:
    def test_date_desc(self, books: list[Book]) -> None:
        # b1 and b4 share a date and keep input order
        assert _ids(sort_books(books, "date-desc")) == ["b3", "b1", "b4", "b2"]

    def test_date_asc(self, books: list[Book]) -> None:
        assert _ids(sort_books(books, SortOption.DATE_ASC)) == ["b2", "b1", "b4", "b3"]

    def test_title_ignores_case(self, books: list[Book]) -> None:
        assert _ids(sort_books(books, "title-asc")) == ["b2", "b4", "b1", "b3"]
        assert _ids(sort_books(books, "title-desc")) == ["b3", "b1", "b4", "b2"]

    def test_pages_numeric(self, books: list[Book]) -> None:
        # numeric, not lexicographic: "1000" > "200" > "90"
        assert _ids(sort_books(books, "pages-asc")) == ["b1", "b3", "b4", "b2"]
        assert _ids(sort_books(books, "pages-desc")) == ["b2", "b3", "b4", "b1"]

    def test_unknown_criterion_keeps_order(self, books: list[Book]) -> None:
        result = sort_books(books, "rating-desc")
        assert result == books
        assert result is not books

    def test_does_not_mutate_input(self, books: list[Book]) -> None:
        before = list(books)
        sort_books(books, "title-asc")
        assert books == before

    @pytest.mark.parametrize("criterion", [option.value for option in SortOption])
    def test_idempotent(self, books: list[Book], criterion: str) -> None:
        once = sort_books(books, criterion)
        assert sort_books(once, criterion) == once

    def test_unparseable_values_go_last(self, books: list[Book]) -> None:
        books.insert(0, _make_book("bad", "Zed", "many", "someday"))
        assert _ids(sort_books(books, "date-asc"))[-1] == "bad"
        assert _ids(sort_books(books, "date-desc"))[-1] == "bad"
        assert _ids(sort_books(books, "pages-desc"))[-1] == "bad"

    def test_empty(self) -> None:
        assert sort_books([], "date-desc") == []


class TestConfigureCollation:
    def test_sets_collation_category(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[tuple[int, str]] = []
        monkeypatch.setattr(locale, "setlocale", lambda category, name: calls.append((category, name)))

        assert configure_collation("en_US.UTF-8") is True
        assert calls == [(locale.LC_COLLATE, "en_US.UTF-8")]

    def test_unavailable_locale(self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> None:
        def _fail(category: int, name: str) -> str:
            raise locale.Error("unsupported locale setting")

        monkeypatch.setattr(locale, "setlocale", _fail)

        assert configure_collation("xx_XX") is False
        assert "unavailable for title sorting" in caplog.text

    def test_title_key_uses_collation(self, books: list[Book], monkeypatch: pytest.MonkeyPatch) -> None:
        # collation that reverses code-point order
        monkeypatch.setattr(locale, "strxfrm", lambda text: "".join(chr(0x10FFFF - ord(c)) for c in text))
        assert _ids(sort_books(books, "title-asc")) == ["b3", "b1", "b2", "b4"]
