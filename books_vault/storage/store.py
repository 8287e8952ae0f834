"""SQLite-backed persistence for the book collection and settings."""

import logging
import sqlite3
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from books_vault.models.book import Book
from books_vault.models.settings import Settings
from books_vault.storage.database import get_connection

logger = logging.getLogger(__name__)

BOOK_COLUMNS: tuple[str, ...] = (
    "id",
    "position",
    "title",
    "author",
    "pages",
    "tag",
    "date",
    "notes",
    "created_at",
    "updated_at",
)


class SQLiteStore:
    """Loads and saves the whole collection and the settings record.

    Every call opens its own connection. Failures are logged and reported
    through the return value; nothing is raised to the caller.

    Args:
        db_path: Path to an initialized SQLite database.
        default_settings: Settings returned when none have been saved.
    """

    def __init__(self, db_path: str | Path, default_settings: Settings | None = None) -> None:
        self._db_path = db_path
        self._default_settings = default_settings or Settings()

    def load_collection(self) -> list[Book]:
        """Load all stored books in their saved order.

        Returns:
            The stored books, or an empty list if nothing is stored or the
            data cannot be read.
        """
        try:
            conn = get_connection(self._db_path)
            try:
                rows = conn.execute(
                    f"SELECT {', '.join(BOOK_COLUMNS)} FROM books ORDER BY position"
                ).fetchall()
            finally:
                conn.close()
            return [
                Book(**{key: row[key] for key in row.keys() if key != "position"})
                for row in rows
            ]
        except (sqlite3.Error, ValidationError):
            logger.exception("Failed to load books from %s", self._db_path)
            return []

    def save_collection(self, records: Sequence[Book]) -> bool:
        """Replace the stored collection with ``records``.

        Returns:
            True if the new collection was written.
        """
        rows = [
            (
                book.id,
                position,
                book.title,
                book.author,
                book.pages,
                book.tag,
                book.date,
                book.notes,
                book.created_at.isoformat(),
                book.updated_at.isoformat(),
            )
            for position, book in enumerate(records)
        ]
        placeholders = ", ".join("?" for _ in BOOK_COLUMNS)
        try:
            conn = get_connection(self._db_path)
            try:
                with conn:
                    conn.execute("DELETE FROM books")
                    conn.executemany(
                        f"INSERT INTO books ({', '.join(BOOK_COLUMNS)}) VALUES ({placeholders})",
                        rows,
                    )
            finally:
                conn.close()
            return True
        except sqlite3.Error:
            logger.exception("Failed to save %d books to %s", len(rows), self._db_path)
            return False

    def load_settings(self) -> Settings:
        """Load saved settings, falling back to the defaults."""
        defaults = self._default_settings.model_copy()
        try:
            conn = get_connection(self._db_path)
            try:
                rows = conn.execute("SELECT key, value FROM settings").fetchall()
            finally:
                conn.close()
        except sqlite3.Error:
            logger.exception("Failed to load settings from %s", self._db_path)
            return defaults

        stored = {row["key"]: row["value"] for row in rows}
        if not stored:
            return defaults

        try:
            return Settings.model_validate({**defaults.model_dump(by_alias=True), **stored})
        except ValidationError:
            logger.exception("Stored settings are invalid, using defaults")
            return defaults

    def save_settings(self, settings: Settings) -> bool:
        """Overwrite the stored settings."""
        values = settings.model_dump(by_alias=True)
        try:
            conn = get_connection(self._db_path)
            try:
                with conn:
                    conn.executemany(
                        "INSERT OR REPLACE INTO settings (key, value, updated_at) "
                        "VALUES (?, ?, CURRENT_TIMESTAMP)",
                        [(key, str(value)) for key, value in values.items()],
                    )
            finally:
                conn.close()
            return True
        except sqlite3.Error:
            logger.exception("Failed to save settings to %s", self._db_path)
            return False

    def clear(self) -> bool:
        """Delete every stored book. Settings are kept."""
        try:
            conn = get_connection(self._db_path)
            try:
                with conn:
                    conn.execute("DELETE FROM books")
            finally:
                conn.close()
            return True
        except sqlite3.Error:
            logger.exception("Failed to clear books in %s", self._db_path)
            return False
