"""Classpath service: validation, dependency checks and tree queries."""
from typing import Iterable, List, Optional, Union

from ..config import ClasspathConfig
from ..exceptions import ConflictError, DependencyError, NotFoundError, ValidationError
from ..hierarchy import ClasspathNode, TreeBuilder
from ..logging import get_logger
from ..store import ClasspathRecord, PathStore, ResourceLinker
from ..validation import clean_ident, validate_record

logger = get_logger(__name__)


class ClasspathService:
    """
    Single entry point for classpath operations.

    Responsibilities:
    - Validate paths and notes before writing
    - Keep paths unique
    - Refuse to delete classpaths that still have resources or collect rules
    - Rebuild trees from the store on every request

    The store is injected; its lifecycle belongs to the caller.
    """

    def __init__(
        self,
        store: PathStore,
        linker: Optional[ResourceLinker] = None,
        config: Optional[ClasspathConfig] = None,
        builder: Optional[TreeBuilder] = None
    ):
        self.config = config or ClasspathConfig()
        self.store = store
        self.linker = linker if linker is not None else store
        self.builder = builder or TreeBuilder(strict=self.config.strict_order)

    # =========================================================================
    # Writes
    # =========================================================================

    def add(self, record: ClasspathRecord) -> ClasspathRecord:
        """
        Validates and inserts a new classpath.

        Returns:
            The record, with id and timestamps set

        Raises:
            ValidationError: Bad characters in path or note
            ConflictError: Path already exists
        """
        validate_record(record)

        if self.store.count(path=record.path) > 0:
            raise ConflictError(f"Classpath {record.path} already exists")

        record.stamp_created()
        record.id = self.store.insert(record)
        logger.info(f"Classpath added: {record.path} (id={record.id})")
        return record

    def update(self, record: ClasspathRecord, *fields: str) -> None:
        """
        Updates only the named fields of an existing classpath.

        Raises:
            ValidationError: Bad characters, or a field that cannot be updated
            ConflictError: New path belongs to another classpath
        """
        validate_record(record)
        for name in fields:
            if name not in ClasspathRecord.UPDATABLE:
                raise ValidationError(f"Classpath field {name} cannot be updated")

        if 'path' in fields:
            existing = self.store.get(path=record.path)
            if existing is not None and existing.id != record.id:
                raise ConflictError(f"Classpath {record.path} already exists")

        self.store.update(record, fields)
        logger.debug(f"Classpath {record.id} updated: {', '.join(fields)}")

    def delete(self, target: Union[ClasspathRecord, int]) -> None:
        """
        Deletes a classpath and its favorites.

        Resources and collect rules must be removed first; they are never
        cascaded.

        Raises:
            DependencyError: Resources or collect rules still reference it
        """
        classpath_id = target.id if isinstance(target, ClasspathRecord) else target

        if self.linker.count_resources(classpath_id) > 0:
            raise DependencyError(
                "There are still resources under the classpath",
                dependency='resources'
            )

        if self.linker.count_collect_rules(classpath_id) > 0:
            raise DependencyError(
                "There are still collect rules under the classpath",
                dependency='collect_rules'
            )

        self.store.delete(classpath_id)
        logger.info(f"Classpath deleted: id={classpath_id}")

    # =========================================================================
    # Reads
    # =========================================================================

    def get(self, classpath_id: int) -> Optional[ClasspathRecord]:
        return self.store.get(id=classpath_id)

    def get_by_path(self, path: str) -> Optional[ClasspathRecord]:
        return self.store.get(path=path)

    def require(self, classpath_id: int) -> ClasspathRecord:
        """Gets a classpath or raises NotFoundError."""
        record = self.get(classpath_id)
        if record is None:
            raise NotFoundError(f"No such classpath: {classpath_id}")
        return record

    def total(self, query: str = '') -> int:
        return self.store.count(query=query or None)

    def list(
        self,
        query: str = '',
        limit: Optional[int] = None,
        offset: int = 0
    ) -> List[ClasspathRecord]:
        """Lists classpaths whose path contains query, ordered by path."""
        if limit is None:
            limit = self.config.page_size
        return self.store.find(query=query or None, limit=limit, offset=offset)

    def list_all(self) -> List[ClasspathRecord]:
        return self.store.find()

    def get_tree(self, query: str = '') -> List[ClasspathNode]:
        """
        Builds the classpath forest.

        Args:
            query: Only include classpaths whose path contains this

        Returns:
            Root nodes; empty list when nothing matches
        """
        records = self.store.find(query=query or None)
        logger.debug(f"Building classpath tree from {len(records)} records")
        return self.builder.build(records)

    def get_direct_children(self, path: str) -> List[ClasspathRecord]:
        """Immediate children of path, each carrying only its own suffix."""
        records = self.store.find(prefix=path)
        return self.builder.direct_children(records, path)

    # =========================================================================
    # Resources
    # =========================================================================

    def attach_resources(self, classpath_id: int, idents: Iterable[str]) -> None:
        """
        Binds resources one by one.

        Stops at the first identifier that fails; identifiers after it
        are not attempted.
        """
        for ident in idents:
            self.linker.attach_resource(classpath_id, clean_ident(ident))

    def detach_resources(self, classpath_id: int, idents: Iterable[str]) -> None:
        self.linker.detach_resources(classpath_id, [ident.strip() for ident in idents])

    def resources(self, classpath_id: int) -> List[str]:
        return self.linker.resources(classpath_id)

    # =========================================================================
    # Favorites
    # =========================================================================

    def add_favorite(self, classpath_id: int, username: str) -> None:
        self.require(classpath_id)
        self.store.add_favorite(classpath_id, username)

    def remove_favorite(self, classpath_id: int, username: str) -> None:
        self.store.remove_favorite(classpath_id, username)

    def favorites(self, username: str) -> List[ClasspathRecord]:
        return self.store.favorites(username)
