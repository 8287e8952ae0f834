"""Book record validation."""

from books_vault.validation.validators import (
    BOOK_FIELDS,
    find_duplicate_words,
    today_date,
    validate_author,
    validate_book,
    validate_date,
    validate_pages,
    validate_tag,
    validate_title,
)

__all__ = [
    "BOOK_FIELDS",
    "find_duplicate_words",
    "today_date",
    "validate_author",
    "validate_book",
    "validate_date",
    "validate_pages",
    "validate_tag",
    "validate_title",
]
