"""Tests for ClasspathService."""
from unittest.mock import MagicMock, Mock, call

import pytest

from classpaths.core.config import ClasspathConfig
from classpaths.core.exceptions import (
    ConflictError,
    DependencyError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from classpaths.core.service import ClasspathService
from classpaths.core.store import ClasspathRecord, MemoryStore


def add_paths(service, *paths):
    return {path: service.add(ClasspathRecord(path=path)).id for path in paths}


class TestAdd:
    """Test suite for ClasspathService.add."""

    def test_add_assigns_id_and_timestamps(self, service):
        record = service.add(ClasspathRecord(path="infra", create_by="alice"))

        assert record.id is not None
        assert record.create_at > 0
        assert record.update_at == record.create_at
        assert service.get(record.id).create_by == "alice"

    def test_add_rejects_space(self, service):
        with pytest.raises(ValidationError):
            service.add(ClasspathRecord(path="team a"))

        assert service.total() == 0

    def test_add_rejects_dangerous_note(self, service):
        with pytest.raises(ValidationError):
            service.add(ClasspathRecord(path="team", note="<b>"))

    def test_add_duplicate(self, service):
        service.add(ClasspathRecord(path="infra"))

        with pytest.raises(ConflictError, match="infra already exists"):
            service.add(ClasspathRecord(path="infra"))

    def test_add_does_not_insert_on_conflict(self):
        store = Mock()
        store.count.return_value = 1
        service = ClasspathService(store)

        with pytest.raises(ConflictError):
            service.add(ClasspathRecord(path="infra"))

        store.count.assert_called_once_with(path="infra")
        store.insert.assert_not_called()


class TestUpdate:
    """Test suite for ClasspathService.update."""

    def test_update_note(self, service):
        record = service.add(ClasspathRecord(path="infra", note="old"))
        record.note = "new"

        service.update(record, "note")

        assert service.get(record.id).note == "new"

    def test_update_only_named_fields(self, service):
        record = service.add(ClasspathRecord(path="infra", note="old"))
        record.note = "new"
        record.path = "other"

        service.update(record, "note")

        stored = service.get(record.id)
        assert stored.path == "infra"
        assert stored.note == "new"

    def test_update_revalidates(self, service):
        record = service.add(ClasspathRecord(path="infra"))
        record.path = "in fra"

        with pytest.raises(ValidationError):
            service.update(record, "path")

    def test_update_unknown_field(self, service):
        record = service.add(ClasspathRecord(path="infra"))

        with pytest.raises(ValidationError):
            service.update(record, "create_at")

    def test_update_path_conflict(self, service):
        ids = add_paths(service, "a", "b")
        record = service.get(ids["b"])
        record.path = "a"

        with pytest.raises(ConflictError):
            service.update(record, "path")

    def test_update_same_path_is_not_conflict(self, service):
        record = service.add(ClasspathRecord(path="a"))

        service.update(record, "path")

    def test_update_storage_error_propagates(self):
        store = Mock()
        store.update.side_effect = StorageError()
        service = ClasspathService(store)

        with pytest.raises(StorageError):
            service.update(ClasspathRecord(id=1, path="a"), "note")


class TestDelete:
    """Test suite for ClasspathService.delete."""

    @pytest.fixture
    def mock_store(self):
        store = Mock()
        store.count_resources.return_value = 0
        store.count_collect_rules.return_value = 0
        return store

    def test_delete_clear(self, mock_store):
        ClasspathService(mock_store).delete(5)

        mock_store.delete.assert_called_once_with(5)

    def test_delete_accepts_record(self, mock_store):
        ClasspathService(mock_store).delete(ClasspathRecord(id=5, path="a"))

        mock_store.delete.assert_called_once_with(5)

    def test_delete_blocked_by_resources(self, mock_store):
        mock_store.count_resources.return_value = 2

        with pytest.raises(DependencyError) as exc_info:
            ClasspathService(mock_store).delete(5)

        assert exc_info.value.dependency == "resources"
        assert "resources" in str(exc_info.value)
        mock_store.delete.assert_not_called()

    def test_delete_blocked_by_collect_rules(self, mock_store):
        mock_store.count_collect_rules.return_value = 1

        with pytest.raises(DependencyError) as exc_info:
            ClasspathService(mock_store).delete(5)

        assert exc_info.value.dependency == "collect_rules"
        mock_store.delete.assert_not_called()

    def test_delete_uses_separate_linker(self, mock_store):
        linker = Mock()
        linker.count_resources.return_value = 1

        with pytest.raises(DependencyError):
            ClasspathService(mock_store, linker=linker).delete(5)

        linker.count_resources.assert_called_once_with(5)
        mock_store.count_resources.assert_not_called()

    def test_delete_removes_record_and_favorites(self, service):
        record = service.add(ClasspathRecord(path="a"))
        service.add_favorite(record.id, "alice")

        service.delete(record)

        assert service.get(record.id) is None
        assert service.favorites("alice") == []


class TestQueries:
    """Test suite for list, tree and children queries."""

    def test_empty_results(self, service):
        assert service.list() == []
        assert service.list_all() == []
        assert service.get_tree() == []
        assert service.get_direct_children("a") == []
        assert service.get_tree("nothing") == []

    def test_list_pages_by_config(self):
        service = ClasspathService(MemoryStore(), config=ClasspathConfig(page_size=2))
        add_paths(service, "c", "a", "b")

        assert [r.path for r in service.list()] == ["a", "b"]
        assert [r.path for r in service.list(offset=2)] == ["c"]
        assert [r.path for r in service.list(limit=10)] == ["a", "b", "c"]

    def test_list_query(self, service):
        add_paths(service, "infra", "infraweb", "db")

        assert [r.path for r in service.list("web")] == ["infraweb"]
        assert service.total("infra") == 2
        assert service.total() == 3

    def test_get_tree(self, service):
        add_paths(service, "infraweb-api", "infradb", "infra", "infraweb")

        roots = service.get_tree()

        assert len(roots) == 1
        assert roots[0].path == "infra"
        assert [c.path for c in roots[0]] == ["db", "web"]
        assert [c.path for c in roots[0].children[1]] == ["-api"]

    def test_get_tree_with_query(self, service):
        add_paths(service, "infra", "infraweb", "infraweb-api", "db")

        roots = service.get_tree("web")

        assert [r.path for r in roots] == ["infraweb"]
        assert [c.path for c in roots[0]] == ["-api"]

    def test_get_direct_children(self, service):
        add_paths(service, "a", "ab", "abc", "ax", "b")

        children = service.get_direct_children("a")

        assert [c.path for c in children] == ["b", "x"]

    def test_get_and_require(self, service):
        record = service.add(ClasspathRecord(path="a"))

        assert service.get_by_path("a").id == record.id
        assert service.require(record.id).path == "a"
        with pytest.raises(NotFoundError):
            service.require(record.id + 100)


class TestResources:
    """Test suite for resource binding."""

    def test_attach_strips_idents(self, service):
        record = service.add(ClasspathRecord(path="a"))

        service.attach_resources(record.id, [" host-1 ", "host-2\n"])

        assert service.resources(record.id) == ["host-1", "host-2"]

    def test_attach_stops_at_first_failure(self):
        linker = MagicMock()
        linker.attach_resource.side_effect = [None, StorageError(), None]
        service = ClasspathService(Mock(), linker=linker)

        with pytest.raises(StorageError):
            service.attach_resources(1, ["h1", "h2", "h3"])

        assert linker.attach_resource.call_args_list == [call(1, "h1"), call(1, "h2")]

    def test_attach_blank_ident_stops(self):
        linker = MagicMock()
        service = ClasspathService(Mock(), linker=linker)

        with pytest.raises(ValidationError):
            service.attach_resources(1, ["h1", "  ", "h3"])

        linker.attach_resource.assert_called_once_with(1, "h1")

    def test_detach(self, service):
        record = service.add(ClasspathRecord(path="a"))
        service.attach_resources(record.id, ["h1", "h2"])

        service.detach_resources(record.id, [" h1"])

        assert service.resources(record.id) == ["h2"]

    def test_bound_classpath_cannot_be_deleted(self, service):
        record = service.add(ClasspathRecord(path="a"))
        service.attach_resources(record.id, ["h1"])

        with pytest.raises(DependencyError):
            service.delete(record.id)

        assert service.get(record.id) is not None


class TestFavorites:
    """Test suite for favorites."""

    def test_add_and_list(self, service):
        ids = add_paths(service, "b", "a")
        service.add_favorite(ids["b"], "alice")
        service.add_favorite(ids["a"], "alice")

        assert [r.path for r in service.favorites("alice")] == ["a", "b"]

    def test_add_unknown_classpath(self, service):
        with pytest.raises(NotFoundError):
            service.add_favorite(999, "alice")

    def test_remove(self, service):
        ids = add_paths(service, "a")
        service.add_favorite(ids["a"], "alice")

        service.remove_favorite(ids["a"], "alice")

        assert service.favorites("alice") == []
