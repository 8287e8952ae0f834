"""Entry point for the Books Vault application."""

import logging
import subprocess
import sys
from datetime import date
from pathlib import Path

from books_vault.config import load_config
from books_vault.seed import generate_sample_books, write_sample_file
from books_vault.storage.database import initialize_database

logger = logging.getLogger(__name__)


def main() -> None:
    """Initialize the application and launch the Streamlit UI."""
    config = load_config()
    logging.basicConfig(
        level=config.app.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Generate sample data on first run
    seed_file = Path(config.storage.seed_path)
    if not seed_file.exists():
        write_sample_file(seed_file, generate_sample_books(date.today()))
        logger.info("Sample data written to %s", seed_file)

    # Initialize SQLite database
    initialize_database(config.storage.sqlite_path)

    # Launch Streamlit
    subprocess.run(
        [
            sys.executable,
            "-m",
            "streamlit",
            "run",
            "books_vault/ui/app.py",
            "--server.port",
            "8501",
            "--server.headless",
            "true",
        ],
        check=False,
    )


if __name__ == "__main__":
    main()
