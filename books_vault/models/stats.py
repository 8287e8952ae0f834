"""Dashboard statistics models."""

from pydantic import BaseModel, Field


class WeekdayBucket(BaseModel):
    """Number of books read on one day of the week."""

    label: str  # "Sun" .. "Sat"
    count: int = 0


class TagSlice(BaseModel):
    """One wedge of the tag distribution chart.

    Degrees are cumulative: a slice starts where the previous one ends,
    and the last slice ends at 360.
    """

    tag: str
    count: int
    percent: int  # Rounded share for legends
    start_degree: float
    end_degree: float

    @property
    def span(self) -> float:
        return self.end_degree - self.start_degree


class DashboardStats(BaseModel):
    """Summary figures computed over the full collection."""

    total_books: int = 0
    total_pages: int = 0
    average_length: int = 0
    top_author: str = ""
    top_tag: str = ""
    weekdays: list[WeekdayBucket] = Field(default_factory=list)
    tag_distribution: list[TagSlice] = Field(default_factory=list)


class GoalProgress(BaseModel):
    """Progress of total pages read against the reading goal."""

    target_pages: int
    total_pages: int
    percentage: float  # Capped at 100 for progress bars
    actual_percentage: float
    remaining: int  # Negative once the goal is exceeded
    status: str  # "remaining", "reached", "exceeded"


class SearchSuggestions(BaseModel):
    """Distinct values offered as search hints."""

    authors: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    years: list[str] = Field(default_factory=list)
