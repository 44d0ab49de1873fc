"""
Tree builder for prefix-encoded classpaths.

A classpath is a descendant of another when its path starts with the
other's path; there is no separator and no parent pointer. Both builders
here rely on input sorted ascending by path: all paths sharing a prefix
then form one contiguous run, so only the most recently added node at
each level can be the parent of the next record.
"""
from dataclasses import replace
from typing import Iterable, List, Optional

from .models import ClasspathNode
from ..exceptions import HierarchyOrderError
from ..store.models import ClasspathRecord


class TreeBuilder:
    """
    Builds classpath trees from path-ordered records.
    
    Pure and reentrant: no state is kept between calls.
    
    Args:
        strict: Raise HierarchyOrderError on unsorted or duplicate paths
            instead of producing a mis-nested tree.
    """
    
    def __init__(self, strict: bool = True):
        self.strict = strict
    
    def build(self, records: Iterable[ClasspathRecord]) -> List[ClasspathNode]:
        """
        Builds a forest from records sorted ascending by path.
        
        Returns:
            Root nodes, in input order
        """
        root = ClasspathNode(id=None, path='')
        previous: Optional[str] = None
        
        for record in records:
            if self.strict:
                self._check_order(previous, record.path)
                previous = record.path
            self._insert(root, record)
        
        return root.children
    
    def direct_children(
        self,
        records: Iterable[ClasspathRecord],
        prefix: str
    ) -> List[ClasspathRecord]:
        """
        Selects the immediate children of prefix.
        
        Args:
            records: Result of a prefix query, sorted ascending by path.
                The record for prefix itself, if present, comes first.
            prefix: Path whose children are wanted
        
        Returns:
            Copies of the child records with path set to the suffix
            relative to prefix. Deeper descendants are left out. Empty
            when fewer than two records were found.
        """
        records = list(records)
        if self.strict:
            previous: Optional[str] = None
            for record in records:
                self._check_order(previous, record.path)
                previous = record.path
        
        if len(records) < 2:
            return []
        
        if records[0].path == prefix:
            records = records[1:]
        
        children: List[ClasspathRecord] = []
        current: Optional[ClasspathRecord] = None
        for record in records:
            if not record.path.startswith(prefix):
                continue
            if current is not None and record.is_descendant_of(current):
                continue
            current = record
            children.append(replace(record, path=record.path[len(prefix):]))
        
        return children
    
    @staticmethod
    def _insert(root: ClasspathNode, record: ClasspathRecord) -> None:
        """Walks down the last child at each level and appends the record."""
        node = root
        remaining = record.path
        
        while node.children:
            last = node.last_child
            if not remaining.startswith(last.path):
                break
            remaining = remaining[len(last.path):]
            node = last
        
        node.children.append(ClasspathNode.from_record(record, remaining))
    
    @staticmethod
    def _check_order(previous: Optional[str], current: str) -> None:
        if previous is not None and previous >= current:
            raise HierarchyOrderError(previous, current)
