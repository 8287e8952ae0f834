"""Configuration loader for the Books Vault application."""

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, PositiveInt


class AppInfo(BaseModel):
    """Application metadata."""

    name: str = "Books Vault"
    version: str = "1.0.0"
    log_level: str = "INFO"


class StorageConfig(BaseModel):
    """Storage paths configuration."""

    sqlite_path: str = "./db/books.db"
    seed_path: str = "./data/seed.json"


class SearchConfig(BaseModel):
    """Book list search and sort defaults."""

    default_sort: str = "date-desc"
    case_sensitive: bool = False


class DashboardConfig(BaseModel):
    """Dashboard aggregation configuration."""

    top_tags: PositiveInt = 5
    other_label: str = "Other"
    uncategorized_label: str = "Uncategorized"


class SettingsDefaults(BaseModel):
    """Reading settings used until the user saves their own."""

    page_unit: str = "pages"
    target_pages: PositiveInt = 1000


class AppConfig(BaseModel):
    """Root application configuration."""

    app: AppInfo = Field(default_factory=AppInfo)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    dashboard: DashboardConfig = Field(default_factory=DashboardConfig)
    settings: SettingsDefaults = Field(default_factory=SettingsDefaults)


def load_config(config_path: str | Path = "config.yaml") -> AppConfig:
    """Load configuration from YAML file and environment variables.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        Fully populated AppConfig instance.
    """
    load_dotenv()

    yaml_data: dict = {}
    config_file = Path(config_path)
    if config_file.exists():
        with open(config_file) as f:
            yaml_data = yaml.safe_load(f) or {}

    config = AppConfig(**yaml_data)

    # Storage locations can be redirected per environment
    db_path = os.getenv("BOOKS_VAULT_DB_PATH")
    if db_path:
        config.storage.sqlite_path = db_path
    seed_path = os.getenv("BOOKS_VAULT_SEED_PATH")
    if seed_path:
        config.storage.seed_path = seed_path

    return config
