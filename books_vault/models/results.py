"""Validation and import result models."""

from enum import Enum

from pydantic import BaseModel, Field

from books_vault.models.book import ImportedBook


class FieldError(str, Enum):
    """Why a single field value was rejected."""

    REQUIRED = "required"
    FORMATTING = "formatting"
    TOO_SHORT = "too_short"
    NOT_POSITIVE = "not_positive"
    INVALID_CALENDAR_DATE = "invalid_calendar_date"


class FieldValidation(BaseModel):
    """Outcome of validating one field value."""

    valid: bool
    message: str = ""
    error: FieldError | None = None


class BookValidation(BaseModel):
    """Outcome of validating a whole book candidate.

    ``errors`` maps field name to the message shown next to that input;
    ``error_kinds`` carries the matching FieldError for programmatic use.
    """

    valid: bool
    errors: dict[str, str] = Field(default_factory=dict)
    error_kinds: dict[str, FieldError] = Field(default_factory=dict)


class ImportErrorKind(str, Enum):
    """Categories of problems found in an import file."""

    MALFORMED_INPUT = "malformed_input"
    SHAPE_ERROR = "shape_error"
    MISSING_FIELD = "missing_field"
    DUPLICATE_ID = "duplicate_id"
    INVALID_PAGES = "invalid_pages"
    INVALID_DATE = "invalid_date"
    INVALID_FIELD = "invalid_field"


class ImportIssue(BaseModel):
    """A single problem found while checking an import file."""

    kind: ImportErrorKind
    message: str
    index: int | None = None  # Position in the incoming list, if element-level
    field: str | None = None


class ImportResult(BaseModel):
    """All-or-nothing import outcome: records are only set when valid."""

    valid: bool
    records: list[ImportedBook] = Field(default_factory=list)
    errors: list[ImportIssue] = Field(default_factory=list)

    @property
    def messages(self) -> list[str]:
        return [issue.message for issue in self.errors]
