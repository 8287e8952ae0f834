"""Search, highlighting and sorting of book lists."""

from books_vault.search.matcher import (
    CompileError,
    Matcher,
    compile_pattern,
    filter_books,
    highlight,
    matches,
    search_suggestions,
)
from books_vault.search.sorter import DEFAULT_SORT, SortOption, configure_collation, sort_books

__all__ = [
    "CompileError",
    "DEFAULT_SORT",
    "Matcher",
    "SortOption",
    "compile_pattern",
    "configure_collation",
    "filter_books",
    "highlight",
    "matches",
    "search_suggestions",
    "sort_books",
]
