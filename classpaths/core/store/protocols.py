"""
Store protocols.

Defines the interfaces the classpath service depends on.
Implementations are injected by the process bootstrap.
"""
from typing import Protocol, Optional, List, Sequence, Iterable, runtime_checkable
from .models import ClasspathRecord


@runtime_checkable
class PathStore(Protocol):
    """
    Protocol for classpath record storage.

    All listing methods return records ordered ascending by path.
    Backend failures are raised as StorageError.
    """

    def insert(self, record: ClasspathRecord) -> int:
        """
        Insert a record.

        Returns:
            The id assigned to the new record
        """
        ...

    def count(self, path: Optional[str] = None, query: Optional[str] = None) -> int:
        """
        Count records matching an exact path or containing a substring.

        With neither argument, counts every record.
        """
        ...

    def find(
        self,
        query: Optional[str] = None,
        prefix: Optional[str] = None,
        limit: Optional[int] = None,
        offset: int = 0
    ) -> List[ClasspathRecord]:
        """
        Select records ordered by path.

        Args:
            query: Literal substring the path must contain
            prefix: Literal prefix the path must start with
            limit: Maximum number of records (None for all)
            offset: Number of records to skip
        """
        ...

    def get(self, id: Optional[int] = None, path: Optional[str] = None) -> Optional[ClasspathRecord]:
        """Get a single record by id or by exact path."""
        ...

    def update(self, record: ClasspathRecord, fields: Sequence[str]) -> None:
        """Update the named fields of the record with record.id."""
        ...

    def delete(self, classpath_id: int) -> None:
        """
        Delete a record and its favorites in one transaction.

        Nothing is removed if any statement fails.
        """
        ...

    def add_favorite(self, classpath_id: int, username: str) -> None:
        ...

    def remove_favorite(self, classpath_id: int, username: str) -> None:
        ...

    def favorites(self, username: str) -> List[ClasspathRecord]:
        ...

    def close(self) -> None:
        """Close storage connection and release resources."""
        ...


@runtime_checkable
class ResourceLinker(Protocol):
    """
    Protocol for the resource and collection rule collaborators.

    Only counting and linking are needed by the classpath core.
    """

    def count_resources(self, classpath_id: int) -> int:
        ...

    def count_collect_rules(self, classpath_id: int) -> int:
        ...

    def attach_resource(self, classpath_id: int, ident: str) -> None:
        """Bind one resource identifier to a classpath."""
        ...

    def detach_resources(self, classpath_id: int, idents: Iterable[str]) -> None:
        """Unbind resource identifiers from a classpath."""
        ...

    def resources(self, classpath_id: int) -> List[str]:
        """Identifiers bound to a classpath, sorted."""
        ...
