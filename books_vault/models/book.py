"""Book data models."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BookFields(BaseModel):
    """The user-editable values of a book record."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    author: str
    pages: str  # Kept as text, the way it travels in export files
    tag: str
    date: str  # YYYY-MM-DD
    notes: str = ""

    @field_validator("pages", mode="before")
    @classmethod
    def _pages_as_text(cls, value: object) -> object:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("notes", mode="before")
    @classmethod
    def _notes_default(cls, value: object) -> object:
        return "" if value is None else value

    @property
    def page_count(self) -> int | None:
        """Parsed page count, or None when pages is not an integer."""
        try:
            return int(self.pages.strip())
        except ValueError:
            return None

    @property
    def calendar_date(self) -> date | None:
        """Parsed reading date, or None when it is not a real YYYY-MM-DD date."""
        try:
            return date.fromisoformat(self.date)
        except ValueError:
            return None


class Book(BookFields):
    """A stored book record owned by the repository."""

    id: str
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")


class ImportedBook(BookFields):
    """A book accepted from an import file, before the repository adopts it.

    Files written by an export carry ids and timestamps; hand-written files
    may omit them.
    """

    id: str | None = None
    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")
