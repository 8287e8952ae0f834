"""Dashboard statistics over the full book collection."""

import math
from collections import Counter
from collections.abc import Iterable, Sequence

from books_vault.models.book import BookFields
from books_vault.models.stats import DashboardStats, GoalProgress, TagSlice, WeekdayBucket

# Sunday-first, matching the dashboard's weekly chart
WEEKDAY_LABELS: tuple[str, ...] = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

TOP_TAGS = 5
OTHER_LABEL = "Other"
UNCATEGORIZED_LABEL = "Uncategorized"
FULL_CIRCLE = 360.0


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 going up (151.5 -> 152)."""
    return math.floor(value + 0.5)


def total_pages(books: Iterable[BookFields]) -> int:
    """Sum of page counts; unparseable or missing pages count as zero."""
    return sum(book.page_count or 0 for book in books)


def average_length(books: Sequence[BookFields]) -> int:
    """Average pages per book, rounded half up. Zero for no books."""
    if not books:
        return 0
    return round_half_up(total_pages(books) / len(books))


def top_value(values: Iterable[str]) -> str:
    """Most frequent value; ties go to the value seen first. Empty -> ""."""
    most_common = Counter(values).most_common(1)
    if not most_common:
        return ""
    return most_common[0][0]


def weekday_histogram(books: Iterable[BookFields]) -> list[WeekdayBucket]:
    """Count books per day of week, Sunday first.

    Books without a valid date are skipped.
    """
    buckets = [WeekdayBucket(label=label) for label in WEEKDAY_LABELS]
    for book in books:
        day = book.calendar_date
        if day is None:
            continue
        # isoweekday: Monday=1 .. Sunday=7
        buckets[day.isoweekday() % 7].count += 1
    return buckets


def tag_distribution(
    books: Sequence[BookFields],
    top_n: int = TOP_TAGS,
    other_label: str = OTHER_LABEL,
    uncategorized_label: str = UNCATEGORIZED_LABEL,
) -> list[TagSlice]:
    """Split the full circle between the most common tags.

    Tags are ranked by count (ties keep first-seen order). When there are
    more than ``top_n`` tags, the rest are folded into one ``other_label``
    slice. Each slice's span is proportional to its count and slices are
    laid out back to back, ending at exactly 360 degrees.

    Args:
        books: The full collection.
        top_n: Number of tags kept as their own slice.
        other_label: Name of the folded slice.
        uncategorized_label: Name used for books without a tag.

    Returns:
        Slices in descending count order. Empty for no books.
    """
    if not books:
        return []

    ranked = Counter(book.tag or uncategorized_label for book in books).most_common()
    if len(ranked) > top_n:
        folded = sum(count for _, count in ranked[top_n:])
        ranked = ranked[:top_n] + [(other_label, folded)]

    total = len(books)
    slices: list[TagSlice] = []
    current = 0.0
    for position, (tag, count) in enumerate(ranked):
        share = count / total
        end = current + share * FULL_CIRCLE
        if position == len(ranked) - 1:
            end = FULL_CIRCLE
        slices.append(
            TagSlice(
                tag=tag,
                count=count,
                percent=round_half_up(share * 100),
                start_degree=current,
                end_degree=end,
            )
        )
        current = end

    return slices


def compute_stats(
    books: Sequence[BookFields],
    top_tags: int = TOP_TAGS,
    other_label: str = OTHER_LABEL,
    uncategorized_label: str = UNCATEGORIZED_LABEL,
) -> DashboardStats:
    """Compute every dashboard figure from scratch.

    Args:
        books: The full, unfiltered collection.
        top_tags: Number of tags shown individually in the distribution.
        other_label: Label of the folded distribution slice.
        uncategorized_label: Label for books without a tag.

    Returns:
        DashboardStats for the collection.
    """
    return DashboardStats(
        total_books=len(books),
        total_pages=total_pages(books),
        average_length=average_length(books),
        top_author=top_value(book.author for book in books),
        top_tag=top_value(book.tag for book in books),
        weekdays=weekday_histogram(books),
        tag_distribution=tag_distribution(
            books,
            top_n=top_tags,
            other_label=other_label,
            uncategorized_label=uncategorized_label,
        ),
    )


def goal_progress(pages_read: int, target_pages: int) -> GoalProgress:
    """Compare pages read with the reading goal."""
    actual = pages_read / target_pages * 100
    remaining = target_pages - pages_read
    if remaining > 0:
        status = "remaining"
    elif remaining == 0:
        status = "reached"
    else:
        status = "exceeded"

    return GoalProgress(
        target_pages=target_pages,
        total_pages=pages_read,
        percentage=min(actual, 100.0),
        actual_percentage=actual,
        remaining=remaining,
        status=status,
    )
