"""Tree node produced by the hierarchy builder."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..store.models import ClasspathRecord


@dataclass
class ClasspathNode:
    """
    A classpath in a reconstructed tree.
    
    ``path`` holds only the suffix left after stripping the paths of all
    ancestors; concatenating suffixes from the root down gives the full
    path back. Nodes are built per query and never persisted.
    
        >>> for child in node:
        ...     print(child.path)
    """
    id: Optional[int]
    path: str
    note: str = ''
    preset: int = 0
    children: List[ClasspathNode] = field(default_factory=list, repr=False)
    
    @classmethod
    def from_record(cls, record: ClasspathRecord, suffix: str) -> ClasspathNode:
        return cls(
            id=record.id,
            path=suffix,
            note=record.note,
            preset=record.preset,
        )
    
    @property
    def is_leaf(self) -> bool:
        return not self.children
    
    @property
    def last_child(self) -> Optional[ClasspathNode]:
        return self.children[-1] if self.children else None
    
    def __iter__(self) -> Iterator[ClasspathNode]:
        return iter(self.children)
    
    def __len__(self) -> int:
        return len(self.children)
    
    def to_dict(self) -> Dict[str, Any]:
        """Converts node and its subtree to a dictionary."""
        return {
            'id': self.id,
            'path': self.path,
            'note': self.note,
            'preset': self.preset,
            'children': [child.to_dict() for child in self.children],
        }
