"""Tests for ClasspathRecord."""
from unittest.mock import patch

from classpaths.core.store import ClasspathRecord


class TestClasspathRecord:
    """Test suite for ClasspathRecord."""

    def test_defaults(self):
        record = ClasspathRecord(path="infra")

        assert record.id is None
        assert record.note == ""
        assert record.preset == 0
        assert record.create_at == 0

    def test_is_descendant_of(self):
        parent = ClasspathRecord(path="infra")

        assert ClasspathRecord(path="infraweb").is_descendant_of(parent) is True
        assert ClasspathRecord(path="infra").is_descendant_of(parent) is False
        assert ClasspathRecord(path="infr").is_descendant_of(parent) is False

    def test_stamp_created(self):
        record = ClasspathRecord(path="infra")

        with patch("classpaths.core.store.models.time.time", return_value=1700000000.5):
            record.stamp_created()

        assert record.create_at == 1700000000
        assert record.update_at == 1700000000

    def test_stamp_updated_sets_actor(self):
        record = ClasspathRecord(path="infra", update_by="root")

        record.stamp_updated("alice", ts=42)

        assert record.update_at == 42
        assert record.update_by == "alice"

    def test_stamp_updated_keeps_actor(self):
        record = ClasspathRecord(path="infra", update_by="root")

        record.stamp_updated(ts=42)

        assert record.update_by == "root"

    def test_to_dict_round_trip(self):
        record = ClasspathRecord(
            id=7, path="infra", note="n", preset=1,
            create_at=1, create_by="a", update_at=2, update_by="b"
        )

        data = record.to_dict()

        assert data['path'] == "infra"
        assert set(data) == set(ClasspathRecord.COLUMNS)
        assert ClasspathRecord.from_dict(data) == record

    def test_from_dict_fills_nulls(self):
        data = dict.fromkeys(ClasspathRecord.COLUMNS)
        data.update(id=1, path="infra")

        record = ClasspathRecord.from_dict(data)

        assert record.note == ""
        assert record.preset == 0
        assert record.update_by == ""
