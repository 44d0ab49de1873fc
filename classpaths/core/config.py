"""
Classpath configuration module.

Centralizes the options shared by the store, the tree builder and the CLI.
"""
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

DB_ENV_VAR = 'CLASSPATH_DB'
MEMORY_DB = ':memory:'


def default_db_path() -> Path:
    """Default database location: ~/.config/classpath/classpath.db"""
    return Path.home() / ".config" / "classpath" / "classpath.db"


@dataclass
class ClasspathConfig:
    """
    Complete classpath configuration.
    
    Attributes:
        db_path: SQLite database file, or ':memory:'
        page_size: Default limit for paginated listings
        strict_order: Reject unsorted or duplicate input when building trees
        log_level: Level applied by setup_logging()
    """
    db_path: Union[str, Path] = MEMORY_DB
    page_size: int = 20
    strict_order: bool = True
    log_level: int = logging.WARNING
    
    @classmethod
    def default(cls) -> 'ClasspathConfig':
        """Create configuration backed by the default database file."""
        return cls(db_path=default_db_path())
    
    @classmethod
    def from_env(cls, db_path: Optional[Union[str, Path]] = None, **kwargs) -> 'ClasspathConfig':
        """
        Create configuration, resolving the database path.
        
        Precedence: explicit argument, CLASSPATH_DB, default file.
        """
        resolved = db_path or os.environ.get(DB_ENV_VAR) or default_db_path()
        return cls(db_path=resolved, **kwargs)
    
    @property
    def is_memory(self) -> bool:
        """True when nothing outlives the process."""
        return str(self.db_path) == MEMORY_DB
