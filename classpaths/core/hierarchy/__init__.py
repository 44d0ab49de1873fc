"""Hierarchy management."""
from .models import ClasspathNode
from .tree_builder import TreeBuilder
from .path_resolver import PathResolver

__all__ = [
    'ClasspathNode',
    'TreeBuilder',
    'PathResolver',
]
