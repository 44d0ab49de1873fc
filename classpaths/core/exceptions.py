"""
Custom exceptions for classpath operations.

Validation, conflict and dependency errors carry a message the caller can
act on. Storage errors never leak backend detail; the store logs it.
"""
from typing import Optional


class ClasspathException(Exception):
    """Base exception for all classpath errors."""
    
    def __init__(self, message: str, error_code: Optional[int] = None) -> None:
        """
        Initialize the exception.
        
        Args:
            message: Error message
            error_code: Numeric error code (if available)
        """
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class ValidationError(ClasspathException):
    """Raised when a path or note contains forbidden characters."""
    pass


class ConflictError(ClasspathException):
    """Raised when a classpath with the same path already exists."""
    pass


class DependencyError(ClasspathException):
    """Raised when a classpath cannot be deleted because something uses it."""
    
    def __init__(
        self,
        message: str,
        dependency: Optional[str] = None,
        error_code: Optional[int] = None
    ) -> None:
        """
        Initialize the exception.
        
        Args:
            message: Error message
            dependency: Name of the blocking dependency ("resources", "collect_rules")
            error_code: Numeric error code (if available)
        """
        self.dependency = dependency
        super().__init__(message, error_code)


class StorageError(ClasspathException):
    """Raised when the underlying store fails."""
    
    MESSAGE = 'internal server error'
    
    def __init__(self, error_code: Optional[int] = None) -> None:
        super().__init__(self.MESSAGE, error_code)


class NotFoundError(ClasspathException):
    """Raised when a classpath does not exist."""
    pass


class HierarchyOrderError(ClasspathException, ValueError):
    """Raised when tree input is not strictly ordered by path."""
    
    def __init__(self, previous: str, current: str) -> None:
        self.previous = previous
        self.current = current
        if previous == current:
            message = f"Duplicate classpath path {current!r}"
        else:
            message = f"Classpath paths out of order: {previous!r} before {current!r}"
        super().__init__(message)
