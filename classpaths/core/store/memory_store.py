"""
In-memory classpath storage implementation.

Provides non-persistent storage for testing and temporary use.
"""
import copy
import threading
from typing import Dict, List, Optional, Sequence, Iterable, Set, Tuple

from .protocols import PathStore, ResourceLinker
from .models import ClasspathRecord
from ..exceptions import ConflictError, DependencyError, ValidationError


class MemoryStore(PathStore, ResourceLinker):
    """
    In-memory classpath storage.

    Mirrors SQLiteStore semantics: literal case-sensitive matching,
    path uniqueness, ordering by path. Records are copied on the way in
    and out so callers never share state with the store.

    Useful for:
    - Unit testing
    - Temporary hierarchies

    Example:
        >>> store = MemoryStore()
        >>> store.insert(ClasspathRecord(path="infra"))
        1
    """

    def __init__(self):
        """Initialize memory storage."""
        self._lock = threading.Lock()
        self._records: Dict[int, ClasspathRecord] = {}
        self._favorites: Set[Tuple[int, str]] = set()
        self._resources: Set[Tuple[int, str]] = set()
        self._collect_rules: Dict[int, int] = {}
        self._next_id = 1

    def _sorted(self) -> List[ClasspathRecord]:
        return sorted(self._records.values(), key=lambda r: r.path)

    def insert(self, record: ClasspathRecord) -> int:
        with self._lock:
            if any(r.path == record.path for r in self._records.values()):
                raise ConflictError(f"Classpath {record.path} already exists")
            stored = copy.copy(record)
            stored.id = self._next_id
            self._next_id += 1
            self._records[stored.id] = stored
            return stored.id

    def count(self, path: Optional[str] = None, query: Optional[str] = None) -> int:
        with self._lock:
            return sum(
                1 for r in self._records.values()
                if (path is None or r.path == path) and (not query or query in r.path)
            )

    def find(
        self,
        query: Optional[str] = None,
        prefix: Optional[str] = None,
        limit: Optional[int] = None,
        offset: int = 0
    ) -> List[ClasspathRecord]:
        with self._lock:
            matched = [
                copy.copy(r) for r in self._sorted()
                if (not query or query in r.path)
                and (prefix is None or r.path.startswith(prefix))
            ]
        end = None if limit is None else offset + limit
        return matched[offset:end]

    def get(self, id: Optional[int] = None, path: Optional[str] = None) -> Optional[ClasspathRecord]:
        if id is None and path is None:
            raise ValueError("id or path required")
        with self._lock:
            for record in self._records.values():
                if (id is not None and record.id == id) or (id is None and record.path == path):
                    return copy.copy(record)
        return None

    def update(self, record: ClasspathRecord, fields: Sequence[str]) -> None:
        for name in fields:
            if name not in ClasspathRecord.UPDATABLE:
                raise ValidationError(f"Classpath field {name} cannot be updated")

        with self._lock:
            stored = self._records.get(record.id)
            if stored is None:
                return
            if 'path' in fields and any(
                r.path == record.path and r.id != record.id for r in self._records.values()
            ):
                raise ConflictError(f"Classpath {record.path} already exists")
            for name in fields:
                setattr(stored, name, getattr(record, name))

    def delete(self, classpath_id: int) -> None:
        with self._lock:
            if any(cid == classpath_id for cid, _ in self._resources):
                raise DependencyError(
                    "There are still resources under the classpath",
                    dependency='resources'
                )
            if self._collect_rules.get(classpath_id, 0):
                raise DependencyError(
                    "There are still collect rules under the classpath",
                    dependency='collect_rules'
                )
            self._favorites = {f for f in self._favorites if f[0] != classpath_id}
            self._records.pop(classpath_id, None)

    def add_favorite(self, classpath_id: int, username: str) -> None:
        with self._lock:
            self._favorites.add((classpath_id, username))

    def remove_favorite(self, classpath_id: int, username: str) -> None:
        with self._lock:
            self._favorites.discard((classpath_id, username))

    def favorites(self, username: str) -> List[ClasspathRecord]:
        with self._lock:
            ids = {cid for cid, user in self._favorites if user == username}
            return [copy.copy(r) for r in self._sorted() if r.id in ids]

    def count_resources(self, classpath_id: int) -> int:
        with self._lock:
            return sum(1 for cid, _ in self._resources if cid == classpath_id)

    def count_collect_rules(self, classpath_id: int) -> int:
        with self._lock:
            return self._collect_rules.get(classpath_id, 0)

    def add_collect_rule(self, classpath_id: int, name: str, type: str = '') -> int:
        """Register a collection rule under a classpath."""
        with self._lock:
            self._collect_rules[classpath_id] = self._collect_rules.get(classpath_id, 0) + 1
            return self._collect_rules[classpath_id]

    def attach_resource(self, classpath_id: int, ident: str) -> None:
        with self._lock:
            self._resources.add((classpath_id, ident))

    def detach_resources(self, classpath_id: int, idents: Iterable[str]) -> None:
        with self._lock:
            for ident in idents:
                self._resources.discard((classpath_id, ident))

    def resources(self, classpath_id: int) -> List[str]:
        with self._lock:
            return sorted(ident for cid, ident in self._resources if cid == classpath_id)

    def close(self) -> None:
        """Close storage (no-op for memory storage)."""
        pass

    def __enter__(self) -> 'MemoryStore':
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
