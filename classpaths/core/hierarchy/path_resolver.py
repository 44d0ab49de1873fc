"""Path resolution for classpath trees."""
from typing import Iterator, List, Optional, Sequence, Tuple

from .models import ClasspathNode


class PathResolver:
    """Maps between full paths and suffix-encoded tree nodes."""
    
    @staticmethod
    def walk(roots: Sequence[ClasspathNode], base: str = '') -> Iterator[Tuple[str, ClasspathNode]]:
        """Yields (full path, node) pairs in pre-order."""
        for node in roots:
            full_path = base + node.path
            yield full_path, node
            yield from PathResolver.walk(node.children, full_path)
    
    @staticmethod
    def full_paths(roots: Sequence[ClasspathNode]) -> List[str]:
        """Flattens a forest back into full paths."""
        return [path for path, _ in PathResolver.walk(roots)]
    
    @staticmethod
    def resolve(roots: Sequence[ClasspathNode], path: str) -> Optional[ClasspathNode]:
        """Finds the node whose full path equals path."""
        remaining = path
        level = roots
        
        while remaining:
            for node in reversed(level):
                if node.path and remaining.startswith(node.path):
                    remaining = remaining[len(node.path):]
                    if not remaining:
                        return node
                    level = node.children
                    break
            else:
                return None
        
        return None
