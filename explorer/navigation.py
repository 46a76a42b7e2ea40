"""
Navigation/Selection state for the catalog sidebar.

    nav = Navigator(registry)
    nav.set_search("button")          # tree() now only holds matching components
    nav.select_component("Button")    # StorySelection("Button", 0)
    nav.select_story("Button", 2)     # StorySelection("Button", 2)
    nav.select_doc("Examples")        # DocPageSelection("Examples")

Selection is None (nothing selected), a StorySelection, or a
DocPageSelection. Every transition is immediate. Changing the search query
never touches the selection; it changes which components the tree is
rebuilt from. Expand/collapse is separate per-path UI state.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Union

from reaktiv import Computed, Signal

from catalog.registry import ComponentInfo, ComponentRegistry
from explorer.docs import component_doc_path
from explorer.tree import CategoryTreeNode, build_category_tree


@dataclass(frozen=True)
class StorySelection:
    component_name: str
    story_index: int = 0


@dataclass(frozen=True)
class DocPageSelection:
    path: str


Selection = Union[StorySelection, DocPageSelection]


def search_components(components: Iterable[ComponentInfo], query: str) -> List[ComponentInfo]:
    """Components whose name or category contains `query`, case-insensitively."""
    query = query.lower()
    return [
        c for c in components
        if query in c.name.lower() or query in c.category.lower()
    ]


class Navigator:
    """Reactive selection, search and expand/collapse state over a registry."""

    def __init__(self, registry: ComponentRegistry):
        self.registry = registry
        self.selected: Signal = Signal(None)
        self.search_query: Signal = Signal("")
        self._expanded: Dict[str, Signal] = {}

        self.visible_components = Computed(
            lambda: search_components(self.registry.components(), self.search_query())
        )
        self.tree = Computed(
            lambda: build_category_tree(self.visible_components(), self.registry.doc_paths())
        )

    # ── Transitions ───────────────────────────────────────────────

    @property
    def selection(self) -> Optional[Selection]:
        return self.selected()

    def select_component(self, name: str) -> Selection:
        """Selecting a component node auto-selects its first story."""
        return self._set(StorySelection(name, 0))

    def select_story(self, name: str, index: int) -> Selection:
        return self._set(StorySelection(name, index))

    def select_doc(self, path: str) -> Selection:
        return self._set(DocPageSelection(path))

    def select_component_docs(self, name: str) -> Selection:
        return self._set(DocPageSelection(component_doc_path(name)))

    def select_node(self, node: CategoryTreeNode) -> Optional[Selection]:
        """Select a tree node: its doc page if it has one, else its first component."""
        if node.has_doc:
            return self.select_doc(node.full_path)
        if node.components:
            return self.select_component(node.components[0])
        return None

    def clear(self) -> None:
        self.selected.set(None)

    def _set(self, selection: Selection) -> Selection:
        self.selected.set(selection)
        return selection

    # ── Search ────────────────────────────────────────────────────

    def set_search(self, query: str) -> None:
        self.search_query.set(query)

    # ── Expand / collapse ─────────────────────────────────────────

    def _expanded_signal(self, path: str) -> Signal:
        if path not in self._expanded:
            self._expanded[path] = Signal(True)
        return self._expanded[path]

    def is_expanded(self, path: str) -> bool:
        return self._expanded_signal(path)()

    def set_expanded(self, path: str, expanded: bool) -> None:
        self._expanded_signal(path).set(expanded)

    def toggle(self, path: str) -> bool:
        sig = self._expanded_signal(path)
        sig.set(not sig())
        return sig()

    # ── Sidebar helpers ───────────────────────────────────────────

    def story_titles(self, name: str) -> List[str]:
        """Titles of a component's stories, [] when it is not registered."""
        registration = self.registry.find(name)
        if registration is None:
            return []
        return [s.title for s in registration.get_stories()]

    def has_component_docs(self, name: str) -> bool:
        registration = self.registry.find(name)
        return registration is not None and bool(registration.description.strip())

    def is_active(self, name: str) -> bool:
        """A component node is expanded while one of its stories or its docs is selected."""
        selection = self.selected()
        if isinstance(selection, StorySelection):
            return selection.component_name == name
        if isinstance(selection, DocPageSelection):
            return selection.path == component_doc_path(name)
        return False
