"""Classpath core: storage, hierarchy and service."""
from .config import ClasspathConfig
from .exceptions import (
    ClasspathException,
    ValidationError,
    ConflictError,
    DependencyError,
    StorageError,
    NotFoundError,
    HierarchyOrderError,
)
from .store import ClasspathRecord, PathStore, ResourceLinker, SQLiteStore, MemoryStore
from .hierarchy import ClasspathNode, TreeBuilder, PathResolver
from .service import ClasspathService

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
]
