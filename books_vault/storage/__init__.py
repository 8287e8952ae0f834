"""Persistence, repositories and the import/export codec."""

from books_vault.storage.codec import ExportError, export_books, import_books
from books_vault.storage.repository import BookRepository, SettingsRepository
from books_vault.storage.store import SQLiteStore

__all__ = [
    "BookRepository",
    "ExportError",
    "SQLiteStore",
    "SettingsRepository",
    "export_books",
    "import_books",
]
