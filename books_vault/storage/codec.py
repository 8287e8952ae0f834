"""JSON import and export of the book collection."""

import json
import logging
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone

import chardet
from pydantic import BaseModel, ValidationError

from books_vault.models.book import ImportedBook
from books_vault.models.results import ImportErrorKind, ImportIssue, ImportResult
from books_vault.validation.validators import (
    BOOK_FIELDS,
    validate_author,
    validate_date,
    validate_pages,
    validate_tag,
    validate_title,
)

logger = logging.getLogger(__name__)

# Rule checks for text fields, keyed by field name
TEXT_FIELD_RULES = {
    "title": validate_title,
    "author": validate_author,
    "tag": validate_tag,
}


class ExportError(ValueError):
    """Raised when the collection cannot be serialized."""


def export_filename(now: datetime | None = None) -> str:
    """Name for a downloaded export file."""
    stamp = (now or datetime.now()).strftime("%Y%m%d-%H%M%S")
    return f"books-vault-export-{stamp}.json"


def export_books(records: Iterable[BaseModel | Mapping[str, object]]) -> str:
    """Serialize books to indented JSON.

    Args:
        records: Book models or plain mappings in interchange shape.

    Returns:
        The JSON text.

    Raises:
        ExportError: If any record holds a value JSON cannot represent.
    """
    try:
        payload = [
            record.model_dump(mode="json", by_alias=True)
            if isinstance(record, BaseModel)
            else dict(record)
            for record in records
        ]
        return json.dumps(payload, indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        logger.exception("Failed to export books")
        raise ExportError(f"Could not export books: {exc}") from exc


def decode_import_bytes(raw: bytes) -> str:
    """Decode an uploaded import file.

    Tries UTF-8 first (with or without BOM), then uses chardet for
    fallback detection.

    Args:
        raw: File content.

    Returns:
        The decoded text.
    """
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        pass

    detected = chardet.detect(raw)
    encoding = detected.get("encoding") or "utf-8"
    confidence = detected.get("confidence", 0)

    if confidence < 0.7:
        logger.warning(
            "Low confidence encoding detection for import file: %s (%.0f%%)",
            encoding,
            confidence * 100,
        )

    try:
        return raw.decode(encoding)
    except (UnicodeDecodeError, LookupError):
        logger.error("Failed to decode import file as %s", encoding)
        return raw.decode("utf-8", errors="replace")


def _is_missing(value: object) -> bool:
    return value is None or not str(value).strip()


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _updated_before_created(record: ImportedBook) -> bool:
    if record.created_at is None or record.updated_at is None:
        return False
    return _as_utc(record.updated_at) < _as_utc(record.created_at)


def _check_element(index: int, item: dict, seen_ids: set[str]) -> list[ImportIssue]:
    issues: list[ImportIssue] = []

    for field in BOOK_FIELDS:
        if _is_missing(item.get(field)):
            issues.append(
                ImportIssue(
                    kind=ImportErrorKind.MISSING_FIELD,
                    index=index,
                    field=field,
                    message=f"Book at index {index} is missing required field: {field}",
                )
            )

    book_id = item.get("id")
    if not _is_missing(book_id):
        key = str(book_id)
        if key in seen_ids:
            issues.append(
                ImportIssue(
                    kind=ImportErrorKind.DUPLICATE_ID,
                    index=index,
                    field="id",
                    message=f"Duplicate ID found: {key}",
                )
            )
        seen_ids.add(key)

    pages = item.get("pages")
    if not _is_missing(pages) and not validate_pages(pages).valid:
        issues.append(
            ImportIssue(
                kind=ImportErrorKind.INVALID_PAGES,
                index=index,
                field="pages",
                message=f"Book at index {index} has invalid pages value: {pages}",
            )
        )

    day = item.get("date")
    if not _is_missing(day) and not validate_date(day).valid:
        issues.append(
            ImportIssue(
                kind=ImportErrorKind.INVALID_DATE,
                index=index,
                field="date",
                message=f"Book at index {index} has invalid date format: {day}",
            )
        )

    for field, rule in TEXT_FIELD_RULES.items():
        value = item.get(field)
        if _is_missing(value):
            continue
        result = rule(value)
        if not result.valid:
            issues.append(
                ImportIssue(
                    kind=ImportErrorKind.INVALID_FIELD,
                    index=index,
                    field=field,
                    message=f"Book at index {index} has invalid {field}: {result.message}",
                )
            )

    return issues


def import_books(text: str | bytes) -> ImportResult:
    """Parse and check an import file.

    The whole file is checked before anything is accepted: every problem
    is collected, and if there is any, no records are returned.

    Args:
        text: JSON text (or raw file bytes) holding a list of books.

    Returns:
        ImportResult; ``records`` is only populated when ``valid`` is True.
    """
    if isinstance(text, bytes):
        text = decode_import_bytes(text)

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.warning("Import rejected, invalid JSON: %s", exc)
        return ImportResult(
            valid=False,
            errors=[
                ImportIssue(kind=ImportErrorKind.MALFORMED_INPUT, message=f"Invalid JSON: {exc}")
            ],
        )

    if not isinstance(data, list):
        return ImportResult(
            valid=False,
            errors=[
                ImportIssue(
                    kind=ImportErrorKind.SHAPE_ERROR,
                    message="Data must be an array of books",
                )
            ],
        )

    issues: list[ImportIssue] = []
    records: list[ImportedBook] = []
    seen_ids: set[str] = set()

    for index, item in enumerate(data):
        if not isinstance(item, dict):
            issues.append(
                ImportIssue(
                    kind=ImportErrorKind.SHAPE_ERROR,
                    index=index,
                    message=f"Book at index {index} is not an object",
                )
            )
            continue

        element_issues = _check_element(index, item, seen_ids)
        if element_issues:
            issues.extend(element_issues)
            continue

        try:
            record = ImportedBook.model_validate(item)
        except ValidationError as exc:
            issues.append(
                ImportIssue(
                    kind=ImportErrorKind.SHAPE_ERROR,
                    index=index,
                    message=f"Book at index {index} could not be read: {exc.error_count()} invalid value(s)",
                )
            )
            continue

        if _updated_before_created(record):
            issues.append(
                ImportIssue(
                    kind=ImportErrorKind.INVALID_FIELD,
                    index=index,
                    field="updatedAt",
                    message=f"Book at index {index} has updatedAt earlier than createdAt",
                )
            )
            continue

        records.append(record)

    if issues:
        logger.warning("Import rejected with %d problem(s)", len(issues))
        return ImportResult(valid=False, errors=issues)

    return ImportResult(valid=True, records=records)
