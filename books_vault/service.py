"""Application service tying validation, search, stats and storage together.

Each public method corresponds to one user action. The Streamlit UI calls
these and only renders what they return.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, Field

from books_vault.config import AppConfig
from books_vault.models.book import Book
from books_vault.models.results import ImportResult
from books_vault.models.settings import Settings
from books_vault.models.stats import DashboardStats, GoalProgress, SearchSuggestions
from books_vault.search.matcher import (
    CompileError,
    Matcher,
    compile_pattern,
    filter_books,
    highlight,
    search_suggestions,
)
from books_vault.search.sorter import SortOption, sort_books
from books_vault.seed import SeedResult, load_sample_books
from books_vault.stats.aggregator import compute_stats, goal_progress
from books_vault.storage.codec import export_books, import_books
from books_vault.storage.database import initialize_database
from books_vault.storage.repository import BookRepository, BookStore, SettingsRepository
from books_vault.storage.store import SQLiteStore
from books_vault.validation.validators import validate_book

logger = logging.getLogger(__name__)


class SubmitResult(BaseModel):
    """Outcome of the add/edit form."""

    ok: bool
    book: Book | None = None
    errors: dict[str, str] = Field(default_factory=dict)
    message: str = ""


class Dashboard(BaseModel):
    """Everything the dashboard page shows."""

    stats: DashboardStats
    goal: GoalProgress
    settings: Settings


@dataclass
class SearchView:
    """Filtered and sorted books plus the matcher used to highlight them.

    ``error`` is set when the search expression did not compile; ``books``
    is then empty.
    """

    books: list[Book] = field(default_factory=list)
    matcher: Matcher | None = None
    error: str | None = None

    def highlight(self, text: str) -> str:
        return highlight(text, self.matcher)


class BooksVault:
    """Entry point for every user action on the collection.

    Args:
        store: Persistence backend for books and settings.
        config: Application configuration. Defaults are used if omitted.
    """

    def __init__(self, store: BookStore, config: AppConfig | None = None) -> None:
        self._config = config or AppConfig()
        self.books = BookRepository(store)
        self.settings = SettingsRepository(store)

    @classmethod
    def from_config(cls, config: AppConfig) -> "BooksVault":
        """Open the SQLite store named in the configuration."""
        initialize_database(config.storage.sqlite_path)
        defaults = Settings(
            page_unit=config.settings.page_unit,
            target_pages=config.settings.target_pages,
        )
        store = SQLiteStore(config.storage.sqlite_path, default_settings=defaults)
        return cls(store, config)

    # ── Books ────────────────────────────────────────────────────────────

    def submit_book(self, fields: Mapping[str, object], book_id: str | None = None) -> SubmitResult:
        """Validate form input, then add a new book or update ``book_id``."""
        validation = validate_book(fields)
        if not validation.valid:
            return SubmitResult(
                ok=False,
                errors=validation.errors,
                message="Please fix the errors above",
            )

        if book_id:
            book = self.books.update(book_id, fields)
            if book is None:
                return SubmitResult(ok=False, message="This book no longer exists")
            message = "Book updated successfully!"
        else:
            book = self.books.add(fields)
            message = "Book added successfully!"

        if not self.books.last_save_ok:
            message += " Changes could not be saved to storage."
        return SubmitResult(ok=True, book=book, message=message)

    def get_book(self, book_id: str) -> Book | None:
        return self.books.get(book_id)

    def delete_book(self, book_id: str) -> bool:
        return self.books.delete(book_id)

    def search(
        self,
        expression: str = "",
        case_sensitive: bool | None = None,
        sort: SortOption | str | None = None,
    ) -> SearchView:
        """Filter the collection with a regular expression and sort it."""
        if case_sensitive is None:
            case_sensitive = self._config.search.case_sensitive
        if sort is None:
            sort = self._config.search.default_sort

        compiled = compile_pattern(expression, case_sensitive)
        if isinstance(compiled, CompileError):
            return SearchView(error=f"Invalid regex pattern: {compiled.message}")

        books = sort_books(filter_books(self.books.list(), compiled), sort)
        return SearchView(books=books, matcher=compiled)

    def suggestions(self) -> SearchSuggestions:
        return search_suggestions(self.books.list())

    # ── Dashboard ────────────────────────────────────────────────────────

    def dashboard(self) -> Dashboard:
        dashboard_config = self._config.dashboard
        stats = compute_stats(
            self.books.list(),
            top_tags=dashboard_config.top_tags,
            other_label=dashboard_config.other_label,
            uncategorized_label=dashboard_config.uncategorized_label,
        )
        settings = self.settings.get()
        return Dashboard(
            stats=stats,
            goal=goal_progress(stats.total_pages, settings.target_pages),
            settings=settings,
        )

    # ── Settings and data management ────────────────────────────────────

    def set_target_pages(self, target: int | str) -> Settings:
        """Set the reading goal.

        Raises:
            ValueError: If ``target`` is not a positive integer.
        """
        try:
            pages = int(target)
        except (TypeError, ValueError):
            pages = 0
        if pages <= 0:
            raise ValueError("Please enter a valid target (positive number)")

        current = self.settings.get()
        return self.settings.update(Settings(page_unit=current.page_unit, target_pages=pages))

    def update_settings(self, settings: Settings) -> Settings:
        return self.settings.update(settings)

    def export_json(self) -> str:
        """Serialize the collection. Raises ExportError on failure."""
        return export_books(self.books.list())

    def import_json(self, data: str | bytes) -> ImportResult:
        """Replace the collection with an import file, only if all of it is valid."""
        result = import_books(data)
        if result.valid:
            self.books.replace_all(result.records)
            logger.info("Imported %d books", len(result.records))
        return result

    def clear_all(self) -> None:
        self.books.clear()

    def load_sample_data(self, path: str | Path | None = None) -> SeedResult:
        """Populate an empty collection from the sample data file."""
        if len(self.books):
            return SeedResult(ok=True, message="Collection already has books")

        result = load_sample_books(path or self._config.storage.seed_path)
        if result.ok:
            self.books.replace_all(result.books)
        return result
