"""Pytest fixtures for classpaths tests."""
import pytest

from classpaths.core.store import ClasspathRecord, MemoryStore, SQLiteStore
from classpaths.core.service import ClasspathService


def _make_records(*paths):
    """Builds sorted records with ids assigned in sorted order."""
    return [
        ClasspathRecord(id=i, path=path, note=f"note {path}")
        for i, path in enumerate(sorted(paths), 1)
    ]


@pytest.fixture
def make_records():
    """Returns a factory building sorted records from paths."""
    return _make_records


@pytest.fixture
def infra_records():
    """Returns the infra family used in tree scenarios."""
    return _make_records("infra", "infraweb", "infraweb-api", "infradb")


@pytest.fixture
def memory_store():
    with MemoryStore() as store:
        yield store


@pytest.fixture
def sqlite_store(tmp_path):
    with SQLiteStore(tmp_path / "classpath.db") as store:
        yield store


@pytest.fixture(params=["memory", "sqlite"])
def store(request, tmp_path):
    """Runs a test against every store implementation."""
    if request.param == "memory":
        backend = MemoryStore()
    else:
        backend = SQLiteStore(tmp_path / "classpath.db")
    yield backend
    backend.close()


@pytest.fixture
def service(store):
    return ClasspathService(store)
