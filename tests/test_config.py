"""Tests for configuration loading."""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from books_vault.config import AppConfig, load_config


class TestAppConfigDefaults:
    """Test that AppConfig provides sensible defaults."""

    def test_default_config_creates_successfully(self) -> None:
        config = AppConfig()
        assert config.app.name == "Books Vault"
        assert config.app.log_level == "INFO"

    def test_default_storage_config(self) -> None:
        config = AppConfig()
        assert config.storage.sqlite_path == "./db/books.db"
        assert config.storage.seed_path == "./data/seed.json"

    def test_default_search_config(self) -> None:
        config = AppConfig()
        assert config.search.default_sort == "date-desc"
        assert config.search.case_sensitive is False

    def test_default_dashboard_config(self) -> None:
        config = AppConfig()
        assert config.dashboard.top_tags == 5
        assert config.dashboard.other_label == "Other"
        assert config.dashboard.uncategorized_label == "Uncategorized"

    def test_default_reading_settings(self) -> None:
        config = AppConfig()
        assert config.settings.page_unit == "pages"
        assert config.settings.target_pages == 1000

    def test_rejects_non_positive_target(self) -> None:
        with pytest.raises(ValidationError):
            AppConfig(settings={"target_pages": 0})


class TestLoadConfig:
    """Test loading config from YAML files."""

    def test_load_from_yaml(self, tmp_path: Path) -> None:
        yaml_data = {
            "app": {"name": "Test Vault", "version": "0.1.0"},
            "dashboard": {"top_tags": 3},
        }
        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml.dump(yaml_data))

        config = load_config(config_file)
        assert config.app.name == "Test Vault"
        assert config.app.version == "0.1.0"
        assert config.dashboard.top_tags == 3
        # Other fields keep defaults
        assert config.search.default_sort == "date-desc"

    def test_load_missing_yaml_uses_defaults(self, tmp_path: Path) -> None:
        config = load_config(tmp_path / "nonexistent.yaml")
        assert config.app.name == "Books Vault"

    def test_empty_yaml_uses_defaults(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")

        config = load_config(config_file)
        assert config.settings.target_pages == 1000

    def test_env_vars_override_storage_paths(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text("{}")

        monkeypatch.setenv("BOOKS_VAULT_DB_PATH", "/tmp/vault.db")
        monkeypatch.setenv("BOOKS_VAULT_SEED_PATH", "/tmp/seed.json")

        config = load_config(config_file)
        assert config.storage.sqlite_path == "/tmp/vault.db"
        assert config.storage.seed_path == "/tmp/seed.json"

    def test_load_project_config_yaml(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test loading the actual project config.yaml."""
        monkeypatch.delenv("BOOKS_VAULT_DB_PATH", raising=False)
        monkeypatch.chdir(Path(__file__).parent.parent)

        config = load_config("config.yaml")
        assert config.app.name == "Books Vault"
        assert config.storage.sqlite_path == "./db/books.db"
