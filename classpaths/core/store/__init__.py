"""
Classpath storage module.

Provides the record store and resource linker used by the service.
"""
from .protocols import PathStore, ResourceLinker
from .models import ClasspathRecord
from .sqlite_store import SQLiteStore
from .memory_store import MemoryStore

__all__ = [
    'PathStore',
    'ResourceLinker',
    'ClasspathRecord',
    'SQLiteStore',
    'MemoryStore',
]
