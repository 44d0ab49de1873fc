"""Classpath service."""
from .classpath_service import ClasspathService

__all__ = [
    'ClasspathService',
]
