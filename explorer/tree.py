"""
Category Tree Builder: flat (component, category path) pairs and doc-page
paths become a navigable tree.

    tree = build_category_tree(registry.components(), registry.doc_paths())
    tree.children["Forms"].children["Inputs"].components   # ["TextInput"]

Every node's full_path is its parent's full_path plus its own segment.
Doc-only paths still get nodes so their pages stay reachable.
The tree is rebuilt on every call; nothing is cached.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional


@dataclass
class CategoryTreeNode:
    """A category/folder. Children are kept in lexicographic order."""
    children: Dict[str, "CategoryTreeNode"] = field(default_factory=dict)
    components: List[str] = field(default_factory=list)
    full_path: str = ""
    has_doc: bool = False

    def child_path(self, segment: str) -> str:
        return f"{self.full_path}/{segment}" if self.full_path else segment

    def _child(self, segment: str, doc_paths) -> "CategoryTreeNode":
        child = self.children.get(segment)
        if child is None:
            path = self.child_path(segment)
            child = CategoryTreeNode(full_path=path, has_doc=path in doc_paths)
            self.children[segment] = child
            self.children = dict(sorted(self.children.items()))
        return child

    def insert(self, segments: List[str], component_name: str, doc_paths=frozenset()) -> None:
        """Add a component at the node reached by `segments`."""
        node = self
        for segment in segments:
            node = node._child(segment, doc_paths)
        node.components.append(component_name)

    def insert_doc_path(self, segments: List[str], doc_paths=frozenset()) -> None:
        """Ensure the node for a doc path exists and mark it. Adds no component."""
        node = self
        for segment in segments:
            node = node._child(segment, doc_paths)
        node.has_doc = True

    def component_count(self) -> int:
        """Components in this node and all descendants. Computed on demand."""
        return len(self.components) + sum(c.component_count() for c in self.children.values())

    def find(self, path: str) -> Optional["CategoryTreeNode"]:
        node = self
        for segment in split_path(path):
            node = node.children.get(segment)
            if node is None:
                return None
        return node

    def walk(self) -> Iterator["CategoryTreeNode"]:
        """Depth-first, children in name order, starting with this node."""
        yield self
        for child in self.children.values():
            yield from child.walk()


def split_path(path: str) -> List[str]:
    """Split a category path on '/', dropping empty segments."""
    return [s for s in path.split("/") if s]


def build_category_tree(components: Iterable, doc_paths: Iterable[str] = ()) -> CategoryTreeNode:
    """Build a fresh tree.

    `components` yields objects with `name` and `category` attributes
    (ComponentInfo) or (name, category) pairs.
    """
    doc_paths = list(doc_paths)
    doc_set = frozenset(doc_paths)
    root = CategoryTreeNode()

    # 1. Insert components
    for component in components:
        if isinstance(component, tuple):
            name, category = component
        else:
            name, category = component.name, component.category
        root.insert(split_path(category), name, doc_set)

    # 2. Ensure nodes exist for every doc path, even without components
    for path in doc_paths:
        segments = split_path(path)
        if segments:
            root.insert_doc_path(segments, doc_set)

    return root
