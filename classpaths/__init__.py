"""
classpaths - Prefix-encoded classpath hierarchies.

Usage:
    >>> from classpaths import ClasspathService, ClasspathRecord, SQLiteStore
    >>> 
    >>> with SQLiteStore("classpath.db") as store:
    ...     service = ClasspathService(store)
    ...     service.add(ClasspathRecord(path="infra"))
    ...     service.add(ClasspathRecord(path="infraweb"))
    ...     for node in service.get_tree():
    ...         print(node.path, [c.path for c in node])
"""
from .core import (
    ClasspathConfig,
    ClasspathException,
    ValidationError,
    ConflictError,
    DependencyError,
    StorageError,
    NotFoundError,
    HierarchyOrderError,
    ClasspathRecord,
    PathStore,
    ResourceLinker,
    SQLiteStore,
    MemoryStore,
    ClasspathNode,
    TreeBuilder,
    PathResolver,
    ClasspathService,
)
from .core.logging import get_logger, setup_logging

__version__ = '1.0.0'

__all__ = [
    'ClasspathConfig',
    'ClasspathException',
    'ValidationError',
    'ConflictError',
    'DependencyError',
    'StorageError',
    'NotFoundError',
    'HierarchyOrderError',
    'ClasspathRecord',
    'PathStore',
    'ResourceLinker',
    'SQLiteStore',
    'MemoryStore',
    'ClasspathNode',
    'TreeBuilder',
    'PathResolver',
    'ClasspathService',
    'get_logger',
    'setup_logging',
]
