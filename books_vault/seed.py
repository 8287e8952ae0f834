"""Sample data used to populate an empty collection on first run."""

import logging
import random
from datetime import date, datetime, time, timedelta, timezone
from pathlib import Path

from pydantic import BaseModel, Field

from books_vault.models.book import ImportedBook
from books_vault.storage.codec import export_books, import_books

logger = logging.getLogger(__name__)

SAMPLE_CATEGORIES: tuple[str, ...] = (
    "Fiction",
    "Non-Fiction",
    "Sci-Fi",
    "Fantasy",
    "Mystery",
    "Biography",
    "History",
    "Technology",
    "Self-Help",
    "Business",
)

# (title, author, pages)
SAMPLE_TITLES: tuple[tuple[str, str, int], ...] = (
    ("The Great Gatsby", "F Scott Fitzgerald", 180),
    ("Sapiens", "Yuval Noah Harari", 443),
    ("Clean Code", "Robert C Martin", 464),
    ("1984", "George Orwell", 328),
    ("The Art of War", "Sun Tzu", 273),
    ("The Hobbit", "J R R Tolkien", 310),
    ("Educated", "Tara Westover", 334),
    ("Atomic Habits", "James Clear", 320),
    ("The Book Thief", "Markus Zusak", 552),
    ("Thinking Fast and Slow", "Daniel Kahneman", 499),
    ("The Lean Startup", "Eric Ries", 336),
    ("Pride and Prejudice", "Jane Austen", 432),
    ("Dune", "Frank Herbert", 688),
    ("The Alchemist", "Paulo Coelho", 197),
    ("Project Hail Mary", "Andy Weir", 496),
    ("Klara and the Sun", "Kazuo Ishiguro", 303),
    ("The Midnight Library", "Matt Haig", 304),
    ("Foundation", "Isaac Asimov", 255),
    ("Neuromancer", "William Gibson", 271),
    ("Snow Crash", "Neal Stephenson", 480),
    ("Hyperion", "Dan Simmons", 482),
    ("Ender's Game", "Orson Scott Card", 324),
)


class SeedResult(BaseModel):
    """Outcome of loading sample data. Failures carry a user-facing message."""

    ok: bool
    books: list[ImportedBook] = Field(default_factory=list)
    message: str = ""


def load_sample_books(path: str | Path) -> SeedResult:
    """Read and check a sample data file.

    Never raises: a missing file, unreadable content or a rejected import
    all come back as ``ok=False`` with a message.

    Args:
        path: JSON file in the import/export format.

    Returns:
        SeedResult with the accepted books when ``ok`` is True.
    """
    seed_file = Path(path)
    if not seed_file.exists():
        logger.warning("Sample data file not found: %s", seed_file)
        return SeedResult(ok=False, message=f"Sample data not found: {seed_file}")

    try:
        raw = seed_file.read_bytes()
    except OSError:
        logger.exception("Failed to read sample data: %s", seed_file)
        return SeedResult(ok=False, message=f"Could not read sample data: {seed_file}")

    result = import_books(raw)
    if not result.valid:
        return SeedResult(
            ok=False,
            message="Sample data is invalid: " + "; ".join(result.messages[:3]),
        )

    return SeedResult(
        ok=True,
        books=result.records,
        message=f"Loaded {len(result.records)} sample books",
    )


def generate_sample_books(
    today: date, rng: random.Random | None = None, days_back: int = 60
) -> list[ImportedBook]:
    """Build a sample collection spread over the last ``days_back`` days.

    The first few titles land in the current week so the weekday chart
    has something to show.
    """
    rng = rng or random.Random()
    recent_offsets = [0, 0, 0, 1, 1, 2, 2, 5, 7, 8, 12, 14, 25, 35, 45, 60]

    books: list[ImportedBook] = []
    for number, (title, author, pages) in enumerate(SAMPLE_TITLES, start=1):
        if number <= len(recent_offsets):
            offset = recent_offsets[number - 1]
        else:
            offset = rng.randint(0, days_back)
        day = today - timedelta(days=offset)
        stamp = datetime.combine(day, time(12, 0), tzinfo=timezone.utc)
        books.append(
            ImportedBook(
                id=f"book_{number:04d}",
                title=title,
                author=author,
                pages=str(pages),
                tag=rng.choice(SAMPLE_CATEGORIES),
                date=day.isoformat(),
                notes=f"Sample entry for {day.isoformat()}",
                created_at=stamp,
                updated_at=stamp,
            )
        )
    return books


def write_sample_file(path: str | Path, books: list[ImportedBook]) -> None:
    """Write books to a sample data file in export format."""
    seed_file = Path(path)
    seed_file.parent.mkdir(parents=True, exist_ok=True)
    seed_file.write_text(export_books(books), encoding="utf-8")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    target = Path("data/seed.json")
    write_sample_file(target, generate_sample_books(date.today()))
    logger.info("Sample data written to %s", target)
