"""In-memory owner of the book collection and reading settings."""

from __future__ import annotations

import logging
import re
import threading
from collections.abc import Callable, Iterable, Mapping, Sequence
from datetime import datetime, timezone
from typing import Protocol

from books_vault.models.book import Book, BookFields
from books_vault.models.settings import Settings

logger = logging.getLogger(__name__)

ID_PREFIX = "book_"
ID_PATTERN = re.compile(r"book_(\d+)")

EDITABLE_FIELDS = frozenset(BookFields.model_fields)


class BookStore(Protocol):
    """Persistence used by the repositories."""

    def load_collection(self) -> list[Book]: ...

    def save_collection(self, records: Sequence[Book]) -> bool: ...

    def load_settings(self) -> Settings: ...

    def save_settings(self, settings: Settings) -> bool: ...

    def clear(self) -> bool: ...


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _editable_values(fields: BookFields | Mapping[str, object]) -> dict[str, object]:
    values = fields.model_dump() if isinstance(fields, BookFields) else dict(fields)
    return {key: value for key, value in values.items() if key in EDITABLE_FIELDS}


class BookRepository:
    """The single source of truth for the book collection.

    Every mutation goes through this class and is written to the store
    straight away. Reads return copies, so callers never hold a reference
    into the live collection. A failed write is logged and recorded in
    ``last_save_ok``; the in-memory collection stays authoritative.

    Identifiers come from a counter (``book_0001``, ``book_0002``, ...)
    started past the highest number already in use.

    Args:
        store: Persistence backend; its collection is loaded immediately.
        clock: Returns the current time. Defaults to UTC now.
    """

    def __init__(self, store: BookStore, clock: Callable[[], datetime] | None = None) -> None:
        self._store = store
        self._clock = clock or utc_now
        self._lock = threading.RLock()
        self._books: list[Book] = store.load_collection()
        self._next_number = self._first_free_number(book.id for book in self._books)
        self.last_save_ok = True

    # ── Reads ────────────────────────────────────────────────────────────

    def list(self) -> list[Book]:
        """Return a snapshot copy of every book in collection order."""
        with self._lock:
            return [book.model_copy() for book in self._books]

    def get(self, book_id: str) -> Book | None:
        """Return a copy of the book with ``book_id``, or None."""
        with self._lock:
            index = self._index_of(book_id)
            if index is None:
                return None
            return self._books[index].model_copy()

    def __len__(self) -> int:
        with self._lock:
            return len(self._books)

    # ── Mutations ────────────────────────────────────────────────────────

    def add(self, fields: BookFields | Mapping[str, object]) -> Book:
        """Store a new book and return it.

        Any ``id`` or timestamps in ``fields`` are ignored.
        """
        with self._lock:
            now = self._clock()
            book = Book(
                **_editable_values(fields),
                id=self._generate_id({book.id for book in self._books}),
                created_at=now,
                updated_at=now,
            )
            self._books.append(book)
            self._persist()
            logger.info("Added book %s (%s)", book.id, book.title)
            return book.model_copy()

    def update(self, book_id: str, fields: BookFields | Mapping[str, object]) -> Book | None:
        """Replace the supplied fields of an existing book.

        ``id`` and ``createdAt`` always keep their stored values.

        Returns:
            The updated book, or None if no book has ``book_id``; in that
            case nothing changes.
        """
        with self._lock:
            index = self._index_of(book_id)
            if index is None:
                logger.info("Update skipped, book %s not found", book_id)
                return None

            current = self._books[index]
            values = current.model_dump()
            values.update(_editable_values(fields))
            values["updated_at"] = max(self._clock(), _as_utc(current.updated_at))
            updated = Book.model_validate(values)

            self._books[index] = updated
            self._persist()
            return updated.model_copy()

    def delete(self, book_id: str) -> bool:
        """Remove a book. Returns True if one was removed."""
        with self._lock:
            remaining = [book for book in self._books if book.id != book_id]
            if len(remaining) == len(self._books):
                return False
            self._books = remaining
            self._persist()
            return True

    def replace_all(self, records: Iterable[BookFields]) -> list[Book]:
        """Replace the whole collection.

        Records are not validated here; the caller checks them first.
        Records without an id get a new one. A missing ``createdAt`` falls
        back to ``updatedAt``, then to now; ``updatedAt`` is never earlier
        than ``createdAt``.

        Returns:
            Copies of the stored books.
        """
        with self._lock:
            incoming = list(records)
            taken = {record.id for record in incoming if getattr(record, "id", None)}
            self._next_number = max(self._next_number, self._first_free_number(taken))
            now = self._clock()

            books: list[Book] = []
            for record in incoming:
                if isinstance(record, Book):
                    books.append(record.model_copy())
                    continue
                updated_at = getattr(record, "updated_at", None)
                created_at = getattr(record, "created_at", None) or updated_at or now
                updated_at = updated_at or created_at
                if _as_utc(updated_at) < _as_utc(created_at):
                    updated_at = created_at
                books.append(
                    Book(
                        **_editable_values(record),
                        id=getattr(record, "id", None) or self._generate_id(taken),
                        created_at=created_at,
                        updated_at=updated_at,
                    )
                )

            self._books = books
            self._persist()
            logger.info("Replaced collection with %d books", len(books))
            return [book.model_copy() for book in books]

    def clear(self) -> None:
        """Remove every book, in memory and in the store."""
        with self._lock:
            self._books = []
            self.last_save_ok = self._store.clear()
            if not self.last_save_ok:
                logger.warning("Stored books could not be cleared")

    # ── Internals ────────────────────────────────────────────────────────

    def _index_of(self, book_id: str) -> int | None:
        for index, book in enumerate(self._books):
            if book.id == book_id:
                return index
        return None

    def _generate_id(self, taken: set[str]) -> str:
        while True:
            candidate = f"{ID_PREFIX}{self._next_number:04d}"
            self._next_number += 1
            if candidate not in taken:
                taken.add(candidate)
                return candidate

    @staticmethod
    def _first_free_number(ids: Iterable[str]) -> int:
        highest = 0
        for book_id in ids:
            match = ID_PATTERN.fullmatch(book_id)
            if match:
                highest = max(highest, int(match.group(1)))
        return highest + 1

    def _persist(self) -> None:
        self.last_save_ok = self._store.save_collection(self._books)
        if not self.last_save_ok:
            logger.warning("Could not save %d books; changes kept in memory", len(self._books))


class SettingsRepository:
    """Holds the reading settings; updates replace them as a whole."""

    def __init__(self, store: BookStore) -> None:
        self._store = store
        self._lock = threading.RLock()
        self._settings = store.load_settings()
        self.last_save_ok = True

    def get(self) -> Settings:
        with self._lock:
            return self._settings.model_copy()

    def update(self, settings: Settings) -> Settings:
        with self._lock:
            self._settings = settings.model_copy()
            self.last_save_ok = self._store.save_settings(self._settings)
            if not self.last_save_ok:
                logger.warning("Could not save settings; changes kept in memory")
            return self._settings.model_copy()
