"""
Classpath data models.

Contains data classes for persisted classpath rows.
"""
import time
from dataclasses import dataclass, asdict
from typing import Any, ClassVar, Dict, Mapping, Optional, Tuple


def now() -> int:
    """Current unix time in seconds."""
    return int(time.time())


@dataclass
class ClasspathRecord:
    """
    A persisted classpath.
    
    The path is both the unique name and the hierarchy encoding: a record
    is a descendant of another when its path starts with the other's path.
    
    Attributes:
        path: Unique hierarchical path
        note: Free-text annotation
        preset: 1 for system-provided entries, 0 for user-created
        id: Surrogate key assigned by the store
        create_at: Creation time (unix seconds)
        create_by: Creating actor
        update_at: Last update time (unix seconds)
        update_by: Last updating actor
    """
    path: str
    note: str = ''
    preset: int = 0
    id: Optional[int] = None
    create_at: int = 0
    create_by: str = ''
    update_at: int = 0
    update_by: str = ''
    
    COLUMNS: ClassVar[Tuple[str, ...]] = (
        'id', 'path', 'note', 'preset',
        'create_at', 'create_by', 'update_at', 'update_by',
    )
    UPDATABLE: ClassVar[Tuple[str, ...]] = (
        'path', 'note', 'preset', 'update_at', 'update_by',
    )
    
    def is_descendant_of(self, other: 'ClasspathRecord') -> bool:
        return self.path != other.path and self.path.startswith(other.path)
    
    def stamp_created(self, ts: Optional[int] = None) -> None:
        """Set create_at and update_at to ts (default: now)."""
        ts = now() if ts is None else ts
        self.create_at = ts
        self.update_at = ts
    
    def stamp_updated(self, actor: str = '', ts: Optional[int] = None) -> None:
        self.update_at = now() if ts is None else ts
        if actor:
            self.update_by = actor
    
    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary for serialization.
        
        Returns:
            Dictionary representation
        """
        return asdict(self)
    
    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'ClasspathRecord':
        """
        Create from dictionary or sqlite3.Row.
        
        Args:
            data: Mapping with classpath columns
            
        Returns:
            ClasspathRecord instance
        """
        return cls(
            id=data['id'],
            path=data['path'],
            note=data['note'] or '',
            preset=data['preset'] or 0,
            create_at=data['create_at'] or 0,
            create_by=data['create_by'] or '',
            update_at=data['update_at'] or 0,
            update_by=data['update_by'] or '',
        )
