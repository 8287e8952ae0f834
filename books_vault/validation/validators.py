"""Field validation rules for book records."""

import re
from collections.abc import Mapping
from datetime import date

from books_vault.models.book import BookFields
from books_vault.models.results import BookValidation, FieldError, FieldValidation

# Compiled patterns for each field family. Matched with fullmatch so a
# trailing newline cannot slip past the end anchor.
PATTERNS: dict[str, re.Pattern[str]] = {
    "title": re.compile(r"\S(?:.*\S)?", re.DOTALL),
    "category": re.compile(r"[A-Za-z]+(?:[ -][A-Za-z]+)*"),
    "pages": re.compile(r"0|[1-9][0-9]*"),
    "date": re.compile(r"[0-9]{4}-(0[1-9]|1[0-2])-(0[1-9]|[12][0-9]|3[01])"),
}

DOUBLE_WHITESPACE = re.compile(r"\s{2,}")
DUPLICATE_WORDS = re.compile(r"\b(\w+)\s+\1\b", re.IGNORECASE)

BOOK_FIELDS: tuple[str, ...] = ("title", "author", "pages", "tag", "date")


def _ok() -> FieldValidation:
    return FieldValidation(valid=True)


def _fail(error: FieldError, message: str) -> FieldValidation:
    return FieldValidation(valid=False, message=message, error=error)


def _as_text(value: object) -> str:
    return "" if value is None else str(value)


def validate_title(value: object) -> FieldValidation:
    """Validate a book title.

    Titles must be non-empty, carry no leading or trailing whitespace,
    contain no run of two or more whitespace characters, and be at least
    two characters long.
    """
    text = _as_text(value)
    if not text.strip():
        return _fail(FieldError.REQUIRED, "Title is required")

    if not PATTERNS["title"].fullmatch(text):
        return _fail(FieldError.FORMATTING, "Title cannot have leading/trailing spaces")

    if DOUBLE_WHITESPACE.search(text):
        return _fail(FieldError.FORMATTING, "Title cannot have double spaces")

    if len(text) < 2:
        return _fail(FieldError.TOO_SHORT, "Title must be at least 2 characters")

    return _ok()


def _validate_category(value: object, label: str) -> FieldValidation:
    text = _as_text(value)
    if not text.strip():
        return _fail(FieldError.REQUIRED, f"{label} is required")

    if not PATTERNS["category"].fullmatch(text):
        return _fail(
            FieldError.FORMATTING,
            f"{label} must contain only letters, spaces, and hyphens",
        )

    return _ok()


def validate_author(value: object) -> FieldValidation:
    """Validate an author name: letters separated by single spaces or hyphens."""
    return _validate_category(value, "Author")


def validate_tag(value: object) -> FieldValidation:
    """Validate a tag; same character rules as author names."""
    return _validate_category(value, "Tag")


def validate_pages(value: object) -> FieldValidation:
    """Validate a page count given as text (integers are accepted too)."""
    text = _as_text(value)
    if not text.strip():
        return _fail(FieldError.REQUIRED, "Pages is required")

    if not PATTERNS["pages"].fullmatch(text):
        return _fail(FieldError.FORMATTING, "Pages must be a positive integer")

    # Shape is already `0|[1-9][0-9]*`; no int() so long digit runs stay valid
    if text == "0":
        return _fail(FieldError.NOT_POSITIVE, "Pages must be greater than 0")

    return _ok()


def validate_date(value: object) -> FieldValidation:
    """Validate a YYYY-MM-DD date that exists on the calendar."""
    text = _as_text(value)
    if not text.strip():
        return _fail(FieldError.REQUIRED, "Date is required")

    if not PATTERNS["date"].fullmatch(text):
        return _fail(FieldError.FORMATTING, "Date must be in YYYY-MM-DD format")

    year, month, day = (int(part) for part in text.split("-"))
    try:
        date(year, month, day)
    except ValueError:
        return _fail(FieldError.INVALID_CALENDAR_DATE, "Invalid date")

    return _ok()


FIELD_VALIDATORS = {
    "title": validate_title,
    "author": validate_author,
    "pages": validate_pages,
    "tag": validate_tag,
    "date": validate_date,
}


def validate_book(candidate: Mapping[str, object] | BookFields) -> BookValidation:
    """Validate every field of a book candidate.

    All fields are checked even when an earlier one fails, so the caller
    can show each message next to its input.

    Args:
        candidate: A mapping of field values (e.g. raw form input) or a
            BookFields model.

    Returns:
        BookValidation with per-field messages for the failing fields.
    """
    if isinstance(candidate, BookFields):
        values: Mapping[str, object] = candidate.model_dump()
    else:
        values = candidate

    errors: dict[str, str] = {}
    error_kinds: dict[str, FieldError] = {}
    for field, validator in FIELD_VALIDATORS.items():
        result = validator(values.get(field))
        if not result.valid:
            errors[field] = result.message
            if result.error is not None:
                error_kinds[field] = result.error

    return BookValidation(valid=not errors, errors=errors, error_kinds=error_kinds)


def find_duplicate_words(text: str) -> list[str]:
    """Return words immediately repeated in the text ("the the")."""
    return [match.group(1) for match in DUPLICATE_WORDS.finditer(text or "")]


def today_date() -> str:
    """Today's date in YYYY-MM-DD form."""
    return date.today().isoformat()
