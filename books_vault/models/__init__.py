"""Data models for the Books Vault application."""

from books_vault.models.book import Book, BookFields, ImportedBook
from books_vault.models.results import (
    BookValidation,
    FieldError,
    FieldValidation,
    ImportErrorKind,
    ImportIssue,
    ImportResult,
)
from books_vault.models.settings import Settings
from books_vault.models.stats import (
    DashboardStats,
    GoalProgress,
    SearchSuggestions,
    TagSlice,
    WeekdayBucket,
)

__all__ = [
    "Book",
    "BookFields",
    "BookValidation",
    "DashboardStats",
    "FieldError",
    "FieldValidation",
    "GoalProgress",
    "ImportErrorKind",
    "ImportIssue",
    "ImportResult",
    "ImportedBook",
    "SearchSuggestions",
    "Settings",
    "TagSlice",
    "WeekdayBucket",
]
