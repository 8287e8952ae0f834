"""Regular-expression search over book records."""

import html
import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TypeVar

from books_vault.models.book import BookFields
from books_vault.models.stats import SearchSuggestions

logger = logging.getLogger(__name__)

BookT = TypeVar("BookT", bound=BookFields)

MARK_OPEN = "<mark>"
MARK_CLOSE = "</mark>"


@dataclass(frozen=True)
class Matcher:
    """A compiled search expression.

    A matcher without a pattern matches every record; it is what an empty
    search box compiles to.
    """

    pattern: re.Pattern[str] | None = None

    @classmethod
    def match_all(cls) -> "Matcher":
        return cls(pattern=None)

    @property
    def matches_everything(self) -> bool:
        return self.pattern is None

    def search(self, text: str) -> bool:
        if self.pattern is None:
            return True
        return self.pattern.search(text) is not None


@dataclass(frozen=True)
class CompileError:
    """A search expression that could not be compiled."""

    expression: str
    message: str


def compile_pattern(expression: str, case_sensitive: bool = False) -> Matcher | CompileError:
    """Compile a user search expression.

    Args:
        expression: Regular expression typed by the user. Empty means
            "show everything".
        case_sensitive: Match letter case exactly when True.

    Returns:
        A Matcher, or a CompileError describing why the expression is invalid.
    """
    if not expression:
        return Matcher.match_all()

    flags = 0 if case_sensitive else re.IGNORECASE
    try:
        return Matcher(pattern=re.compile(expression, flags))
    except re.error as exc:
        logger.warning("Invalid search pattern %r: %s", expression, exc)
        return CompileError(expression=expression, message=str(exc))


def searchable_text(book: BookFields) -> str:
    """Join the searchable fields so one pattern can span several of them."""
    return " ".join([book.title, book.author, book.tag, book.notes or "", book.date])


def matches(book: BookFields, matcher: Matcher) -> bool:
    """Return True if the matcher finds a match anywhere in the book's fields."""
    if matcher.matches_everything:
        return True
    return matcher.search(searchable_text(book))


def filter_books(books: Iterable[BookT], matcher: Matcher) -> list[BookT]:
    """Keep the books the matcher accepts, in their original order."""
    if matcher.matches_everything:
        return list(books)
    return [book for book in books if matches(book, matcher)]


def highlight(text: str, matcher: Matcher | None) -> str:
    """Escape text for HTML and wrap each match in <mark> tags.

    Matches are found in the raw text and each piece is escaped as it is
    spliced, so a match never lands inside an entity such as ``&amp;``.
    Highlighting is cosmetic: on any failure the original text is
    returned unchanged.
    """
    try:
        raw = text or ""
        if matcher is None or matcher.pattern is None:
            return html.escape(raw)

        parts: list[str] = []
        position = 0
        for match in matcher.pattern.finditer(raw):
            start, end = match.span()
            if start == end:
                continue
            parts.append(html.escape(raw[position:start]))
            parts.append(f"{MARK_OPEN}{html.escape(match.group(0))}{MARK_CLOSE}")
            position = end
        parts.append(html.escape(raw[position:]))
        return "".join(parts)
    except Exception:
        logger.exception("Failed to highlight matches in %r", text)
        return text


def search_suggestions(books: Iterable[BookFields]) -> SearchSuggestions:
    """Collect distinct authors, tags and reading years for search hints."""
    authors: set[str] = set()
    tags: set[str] = set()
    years: set[str] = set()
    for book in books:
        if book.author:
            authors.add(book.author)
        if book.tag:
            tags.add(book.tag)
        year = book.date.split("-")[0]
        if year:
            years.add(year)

    return SearchSuggestions(
        authors=sorted(authors),
        tags=sorted(tags),
        years=sorted(years),
    )
