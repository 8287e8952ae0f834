"""Tests for the BooksVault application service."""

import json
from pathlib import Path

import pytest

from books_vault.config import AppConfig
from books_vault.models import ImportErrorKind, Settings
from books_vault.service import BooksVault
from books_vault.storage.codec import export_books

PROJECT_SEED = Path(__file__).parent.parent / "data" / "seed.json"


def _form(**overrides: str) -> dict[str, str]:
    data = {
        "title": "Dune",
        "author": "Frank Herbert",
        "pages": "688",
        "tag": "Sci-Fi",
        "date": "2025-02-28",
        "notes": "",
    }
    data.update(overrides)
    return data


@pytest.fixture
def config(tmp_path: Path) -> AppConfig:
    config = AppConfig()
    config.storage.sqlite_path = str(tmp_path / "db" / "books.db")
    config.storage.seed_path = str(PROJECT_SEED)
    return config


@pytest.fixture
def vault(config: AppConfig) -> BooksVault:
    return BooksVault.from_config(config)


class TestSubmitBook:
    def test_add(self, vault: BooksVault) -> None:
        result = vault.submit_book(_form())
        assert result.ok
        assert result.book is not None
        assert result.message == "Book added successfully!"
        assert vault.get_book(result.book.id) is not None

    def test_invalid_input_not_stored(self, vault: BooksVault) -> None:
        result = vault.submit_book(_form(title=" Dune", pages="0"))
        assert not result.ok
        assert set(result.errors) == {"title", "pages"}
        assert vault.books.list() == []

    def test_edit(self, vault: BooksVault) -> None:
        added = vault.submit_book(_form()).book
        assert added is not None

        result = vault.submit_book(_form(title="Dune Messiah"), book_id=added.id)
        assert result.ok
        assert result.message == "Book updated successfully!"
        assert vault.get_book(added.id).title == "Dune Messiah"  # type: ignore[union-attr]

    def test_edit_deleted_book(self, vault: BooksVault) -> None:
        result = vault.submit_book(_form(), book_id="book_9999")
        assert not result.ok
        assert vault.books.list() == []

    def test_reports_unsaved_changes(self, vault: BooksVault) -> None:
        vault.books._store = type(  # type: ignore[attr-defined]
            "BrokenStore", (), {"save_collection": lambda self, records: False}
        )()
        result = vault.submit_book(_form())
        assert result.ok
        assert "could not be saved" in result.message

    def test_delete(self, vault: BooksVault) -> None:
        added = vault.submit_book(_form()).book
        assert added is not None
        assert vault.delete_book(added.id) is True
        assert vault.delete_book(added.id) is False


class TestSearch:
    @pytest.fixture(autouse=True)
    def _books(self, vault: BooksVault) -> None:
        vault.submit_book(_form(title="Dune", pages="688", date="2025-01-01"))
        vault.submit_book(_form(title="1984", author="George Orwell", tag="Fiction", pages="328", date="2025-03-01"))
        vault.submit_book(_form(title="Educated", author="Tara Westover", tag="Memoir", pages="334", date="2025-02-01"))

    def test_default_sort_is_newest_first(self, vault: BooksVault) -> None:
        view = vault.search()
        assert view.error is None
        assert [b.title for b in view.books] == ["1984", "Educated", "Dune"]

    def test_filter_and_sort(self, vault: BooksVault) -> None:
        view = vault.search("du", sort="pages-asc")
        assert [b.title for b in view.books] == ["Educated", "Dune"]
        assert view.highlight("Dune") == "<mark>Du</mark>ne"

    def test_case_sensitive(self, vault: BooksVault) -> None:
        view = vault.search("du", case_sensitive=True)
        assert [b.title for b in view.books] == ["Educated"]

    def test_invalid_pattern(self, vault: BooksVault) -> None:
        view = vault.search("[unclosed")
        assert view.books == []
        assert view.error is not None
        assert view.error.startswith("Invalid regex pattern")

    def test_suggestions(self, vault: BooksVault) -> None:
        assert vault.suggestions().tags == ["Fiction", "Memoir", "Sci-Fi"]


class TestDashboard:
    def test_stats_and_goal(self, vault: BooksVault) -> None:
        vault.submit_book(_form(pages="100", tag="A"))
        vault.submit_book(_form(pages="201", tag="A"))
        vault.set_target_pages(600)

        dashboard = vault.dashboard()
        assert dashboard.stats.total_pages == 301
        assert dashboard.stats.average_length == 151
        assert dashboard.stats.top_tag == "A"
        assert dashboard.goal.remaining == 299
        assert dashboard.settings.target_pages == 600

    def test_empty(self, vault: BooksVault) -> None:
        dashboard = vault.dashboard()
        assert dashboard.stats.total_books == 0
        assert dashboard.goal.target_pages == 1000


class TestSettings:
    def test_set_target(self, vault: BooksVault, config: AppConfig) -> None:
        settings = vault.set_target_pages("750")
        assert settings.target_pages == 750
        assert BooksVault.from_config(config).settings.get().target_pages == 750

    @pytest.mark.parametrize("target", [0, -10, "abc", ""])
    def test_rejects_invalid_target(self, vault: BooksVault, target: object) -> None:
        with pytest.raises(ValueError, match="positive number"):
            vault.set_target_pages(target)  # type: ignore[arg-type]
        assert vault.settings.get().target_pages == 1000

    def test_update_settings_replaces_all(self, vault: BooksVault) -> None:
        vault.update_settings(Settings(page_unit="chapters", target_pages=20))
        assert vault.settings.get() == Settings(page_unit="chapters", target_pages=20)

    def test_defaults_from_config(self, config: AppConfig) -> None:
        config.settings.target_pages = 42
        assert BooksVault.from_config(config).settings.get().target_pages == 42


class TestImportExport:
    def test_round_trip_through_service(self, vault: BooksVault, config: AppConfig) -> None:
        vault.submit_book(_form())
        vault.submit_book(_form(title="Dune Messiah"))
        exported = vault.export_json()

        other_config = config.model_copy(deep=True)
        other_config.storage.sqlite_path = config.storage.sqlite_path + ".other"
        other = BooksVault.from_config(other_config)
        result = other.import_json(exported)

        assert result.valid
        assert [b.model_dump() for b in other.books.list()] == [b.model_dump() for b in vault.books.list()]

    def test_rejected_import_leaves_collection_untouched(self, vault: BooksVault) -> None:
        vault.submit_book(_form())
        before = [b.model_dump() for b in vault.books.list()]

        items = [_form(title=f"Book {n}") for n in range(5)]
        del items[3]["date"]
        result = vault.import_json(json.dumps(items))

        assert not result.valid
        assert [i.kind for i in result.errors] == [ImportErrorKind.MISSING_FIELD]
        assert [b.model_dump() for b in vault.books.list()] == before

    def test_import_assigns_missing_ids(self, vault: BooksVault) -> None:
        result = vault.import_json(json.dumps([_form(), _form(title="Dune Messiah")]))
        assert result.valid
        ids = [b.id for b in vault.books.list()]
        assert len(set(ids)) == 2

    def test_import_replaces_collection(self, vault: BooksVault) -> None:
        vault.submit_book(_form(title="Old Book"))
        vault.import_json(export_books([]))
        assert vault.books.list() == []

    def test_clear_all(self, vault: BooksVault, config: AppConfig) -> None:
        vault.submit_book(_form())
        vault.clear_all()
        assert vault.books.list() == []
        assert BooksVault.from_config(config).books.list() == []


class TestSampleData:
    def test_seeds_empty_collection(self, vault: BooksVault) -> None:
        result = vault.load_sample_data()
        assert result.ok
        assert len(vault.books) == 10

    def test_skips_non_empty_collection(self, vault: BooksVault) -> None:
        vault.submit_book(_form())
        result = vault.load_sample_data()
        assert result.ok
        assert result.books == []
        assert len(vault.books) == 1

    def test_missing_file_is_recoverable(self, vault: BooksVault, tmp_path: Path) -> None:
        result = vault.load_sample_data(tmp_path / "missing.json")
        assert not result.ok
        assert result.message
        assert len(vault.books) == 0

    def test_ids_continue_after_seed(self, vault: BooksVault) -> None:
        vault.load_sample_data()
        added = vault.submit_book(_form()).book
        assert added is not None
        assert added.id == "book_0011"
