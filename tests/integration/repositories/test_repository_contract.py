"""
Repository Contract Tests.

Any repository implementation MUST pass these tests.
This ensures backends are interchangeable.

To add a new backend:
1. Implement the ItemRepository interface
2. Add a test class that inherits RepositoryContractTests
3. Provide a `repo` fixture that returns your implementation
"""

import pytest
from abc import ABC

from models import Item
from repositories import (
    InvalidItemIdError,
    ItemNotFoundError,
    NotFoundError,
    StorageError,
)


class RepositoryContractTests(ABC):
    """
    Contract tests that any repository must pass.

    Subclass this and provide a `repo` fixture.
    """

    # === Insert / get_all ===

    def test_get_all_empty(self, repo):
        assert repo.get_all() == []

    def test_insert_and_get_all(self, repo):
        stored = repo.insert(Item(name="shirt", category="fashion", image_name="a.jpg"))

        items = repo.get_all()

        assert len(items) == 1
        assert items[0].name == "shirt"
        assert items[0].category == "fashion"
        assert items[0].image_name == "a.jpg"
        assert items[0].id == stored.id

    def test_insert_assigns_distinct_ids(self, repo, sample_items):
        ids = [repo.insert(item).id for item in sample_items]

        assert len(set(ids)) == len(ids)
        assert all(i >= 0 for i in ids)

    def test_get_all_preserves_insertion_order(self, repo, sample_items):
        for item in sample_items:
            repo.insert(item)

        names = [i.name for i in repo.get_all()]
        assert names == ["apple", "pineapple", "banana"]

    def test_reads_return_fresh_records(self, repo):
        repo.insert(Item(name="shirt", category="fashion"))

        first = repo.get_all()[0]
        second = repo.get_all()[0]

        assert first == second
        assert first is not second

    # === get_by_id ===

    def test_get_by_id_after_each_insert(self, repo, sample_items):
        for item in sample_items:
            stored = repo.insert(item)
            loaded = repo.get_by_id(stored.id)
            assert loaded == stored

    def test_get_by_id_accepts_string(self, repo):
        stored = repo.insert(Item(name="shirt", category="fashion"))

        loaded = repo.get_by_id(str(stored.id))

        assert loaded.name == "shirt"

    def test_get_by_id_unknown(self, repo):
        repo.insert(Item(name="shirt", category="fashion"))

        with pytest.raises(ItemNotFoundError) as exc:
            repo.get_by_id(999)

        assert exc.value.item_id == 999

    def test_get_by_id_negative_is_not_found(self, repo):
        repo.insert(Item(name="shirt", category="fashion"))

        with pytest.raises(NotFoundError):
            repo.get_by_id("-1")

    def test_get_by_id_empty_store(self, repo):
        with pytest.raises(ItemNotFoundError):
            repo.get_by_id(0)

    def test_get_by_id_non_numeric(self, repo):
        with pytest.raises(InvalidItemIdError):
            repo.get_by_id("shirt")

    def test_get_by_id_oversized_string(self, repo):
        repo.insert(Item(name="shirt", category="fashion"))

        with pytest.raises((InvalidItemIdError, ItemNotFoundError)):
            repo.get_by_id("9" * 5000)

    def test_not_found_is_not_storage_error(self, repo):
        with pytest.raises(ItemNotFoundError) as exc:
            repo.get_by_id(5)
        assert not isinstance(exc.value, StorageError)

    def test_whitespace_values_round_trip(self, repo):
        stored = repo.insert(Item(name=" ", category="  "))

        assert repo.get_by_id(stored.id) == stored
        assert repo.get_all() == [stored]

    # === search_by_name ===

    def test_search_substring(self, repo, sample_items):
        for item in sample_items:
            repo.insert(item)

        names = {i.name for i in repo.search_by_name("apple")}

        assert names == {"apple", "pineapple"}

    def test_search_empty_keyword_matches_all(self, repo, sample_items):
        for item in sample_items:
            repo.insert(item)

        assert len(repo.search_by_name("")) == 3

    def test_search_no_matches(self, repo, sample_items):
        for item in sample_items:
            repo.insert(item)

        assert repo.search_by_name("cherry") == []

    def test_search_is_case_sensitive(self, repo):
        repo.insert(Item(name="Apple", category="fruit"))
        repo.insert(Item(name="apple", category="fruit"))

        names = [i.name for i in repo.search_by_name("App")]

        assert names == ["Apple"]

    def test_search_empty_store(self, repo):
        assert repo.search_by_name("apple") == []

    # === Lifecycle ===

    def test_close_twice(self, repo):
        repo.close()
        repo.close()

    def test_use_after_close(self, repo):
        repo.close()

        with pytest.raises(StorageError):
            repo.get_all()

    def test_context_manager_closes(self, repo):
        with repo as r:
            r.insert(Item(name="shirt", category="fashion"))

        with pytest.raises(StorageError):
            repo.insert(Item(name="cap", category="fashion"))


class TestJsonBackendContract(RepositoryContractTests):
    """Test JSON backend passes contract."""

    @pytest.fixture
    def repo(self, data_dir):
        """Provide JSON repository with temp directory."""
        from repositories.json_backend import JsonItemRepository
        repo = JsonItemRepository(data_dir / "items.json")
        yield repo
        repo.close()


class TestSqliteBackendContract(RepositoryContractTests):
    """Test SQLite backend passes contract."""

    @pytest.fixture
    def repo(self, data_dir):
        """Provide SQLite repository with temp database."""
        from repositories.sqlite_backend import SqliteItemRepository
        repo = SqliteItemRepository(data_dir / "mercari.sqlite3")
        yield repo
        repo.close()
