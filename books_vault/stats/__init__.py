"""Dashboard statistics."""

from books_vault.stats.aggregator import (
    WEEKDAY_LABELS,
    average_length,
    compute_stats,
    goal_progress,
    tag_distribution,
    top_value,
    total_pages,
    weekday_histogram,
)

__all__ = [
    "WEEKDAY_LABELS",
    "average_length",
    "compute_stats",
    "goal_progress",
    "tag_distribution",
    "top_value",
    "total_pages",
    "weekday_histogram",
]
