"""Ordering of book lists for display."""

import locale
import logging
from collections.abc import Callable, Iterable
from enum import Enum
from typing import Any, TypeVar

from books_vault.models.book import BookFields

logger = logging.getLogger(__name__)

BookT = TypeVar("BookT", bound=BookFields)


class SortOption(str, Enum):
    """Sort choices offered by the book list."""

    DATE_DESC = "date-desc"
    DATE_ASC = "date-asc"
    TITLE_ASC = "title-asc"
    TITLE_DESC = "title-desc"
    PAGES_DESC = "pages-desc"
    PAGES_ASC = "pages-asc"


DEFAULT_SORT = SortOption.DATE_DESC


def configure_collation(name: str = "") -> bool:
    """Use the user's locale (or ``name``) for title ordering.

    Until this runs, titles compare in the C locale, which is plain
    code-point order of the case-folded text.

    Returns:
        False if the locale is unavailable; the C locale stays in effect.
    """
    try:
        locale.setlocale(locale.LC_COLLATE, name)
    except locale.Error:
        logger.warning("Locale %r unavailable for title sorting, using code-point order", name)
        return False
    return True


def _title_key(book: BookFields) -> Any:
    return (locale.strxfrm(book.title.casefold()), book.title)


def _date_key(book: BookFields) -> Any:
    return book.calendar_date


def _pages_key(book: BookFields) -> Any:
    return book.page_count


# criterion -> (key function, descending)
SORT_KEYS: dict[SortOption, tuple[Callable[[BookFields], Any], bool]] = {
    SortOption.DATE_DESC: (_date_key, True),
    SortOption.DATE_ASC: (_date_key, False),
    SortOption.TITLE_ASC: (_title_key, False),
    SortOption.TITLE_DESC: (_title_key, True),
    SortOption.PAGES_DESC: (_pages_key, True),
    SortOption.PAGES_ASC: (_pages_key, False),
}


def sort_books(books: Iterable[BookT], criterion: SortOption | str) -> list[BookT]:
    """Return a new list of books ordered by the given criterion.

    The sort is stable in both directions, so books that compare equal keep
    their input order. Books whose date or page count cannot be parsed are
    placed after all others, also in input order. An unknown criterion
    returns the books in their original order.

    Args:
        books: Books to order. Not modified.
        criterion: A SortOption or its string value (e.g. "pages-asc").

    Returns:
        A new list.
    """
    items = list(books)
    try:
        option = SortOption(criterion)
    except ValueError:
        return items

    key, descending = SORT_KEYS[option]
    keyed = [(key(book), book) for book in items]
    sortable = [(value, book) for value, book in keyed if value is not None]
    unsortable = [book for value, book in keyed if value is None]

    sortable.sort(key=lambda pair: pair[0], reverse=descending)
    return [book for _, book in sortable] + unsortable
