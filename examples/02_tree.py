"""
Tree navigation - Rebuild the hierarchy from flat paths
"""
from classpaths import ClasspathService, ClasspathRecord, MemoryStore, PathResolver


def show(nodes, depth=0):
    for node in nodes:
        print("  " * depth + node.path)
        show(node.children, depth + 1)


def main():
    service = ClasspathService(MemoryStore())
    for path in ("infra", "infraweb", "infraweb-api", "infradb", "office"):
        service.add(ClasspathRecord(path=path))
    
    # Suffixes only: infra / db, web / -api
    roots = service.get_tree()
    show(roots)
    
    # Full paths back from the tree
    print(PathResolver.full_paths(roots))
    
    # Immediate children only, deeper levels elided
    for child in service.get_direct_children("infra"):
        print(f"infra + {child.path}")
    
    # Subtree lookup by full path
    web = PathResolver.resolve(roots, "infraweb")
    print([child.path for child in web])


if __name__ == "__main__":
    main()
