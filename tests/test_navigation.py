"""
Tests for Navigation/Selection state.

Covers:
- Selection transitions (component, story, doc, component docs, tree nodes)
- Search filtering of the tree without touching the selection
- Expand/collapse state
- Sidebar helpers over the example library
"""

import pytest

from catalog.registry import ComponentInfo
from example_library import bootstrap
from explorer.navigation import (
    DocPageSelection, Navigator, StorySelection, search_components,
)


@pytest.fixture
def nav():
    return Navigator(bootstrap())


# ===========================================================================
# Selection
# ===========================================================================

class TestSelection:

    def test_starts_empty(self, nav):
        assert nav.selection is None

    def test_select_component_picks_first_story(self, nav):
        assert nav.select_component("Button") == StorySelection("Button", 0)
        assert nav.selection == StorySelection("Button", 0)

    def test_select_story(self, nav):
        nav.select_story("Button", 2)
        assert nav.selection == StorySelection("Button", 2)

    def test_select_doc(self, nav):
        nav.select_story("Button", 1)
        nav.select_doc("Examples")
        assert nav.selection == DocPageSelection("Examples")

    def test_select_component_docs(self, nav):
        nav.select_component_docs("Button")
        assert nav.selection == DocPageSelection("__component__/Button")

    def test_select_node_prefers_doc(self, nav):
        examples = nav.tree().children["Examples"]
        assert nav.select_node(examples) == DocPageSelection("Examples")

    def test_select_node_without_doc_picks_first_component(self, nav):
        buttons = nav.tree().find("Forms/Buttons")
        assert nav.select_node(buttons) == StorySelection("Button", 0)

    def test_select_empty_node_keeps_selection(self, nav):
        nav.select_component("Toggle")
        guides = nav.tree().children["Guides"]
        assert not guides.has_doc
        assert nav.select_node(guides) is None
        assert nav.selection == StorySelection("Toggle", 0)

    def test_clear(self, nav):
        nav.select_component("Button")
        nav.clear()
        assert nav.selection is None

    def test_is_active(self, nav):
        nav.select_story("Button", 1)
        assert nav.is_active("Button")
        assert not nav.is_active("Counter")
        nav.select_component_docs("Counter")
        assert nav.is_active("Counter")
        nav.select_doc("Examples")
        assert not nav.is_active("Counter")


# ===========================================================================
# Search
# ===========================================================================

class TestSearch:

    def test_search_components_matches_name_or_category(self):
        components = [ComponentInfo("Button", "Forms"), ComponentInfo("Card", "Layout")]
        assert search_components(components, "BUT") == [components[0]]
        assert search_components(components, "layout") == [components[1]]
        assert search_components(components, "") == components

    def test_search_filters_tree(self, nav):
        nav.set_search("toggle")
        tree = nav.tree()
        assert tree.component_count() == 1
        assert tree.find("Forms/Inputs").components == ["Toggle"]
        assert tree.find("Forms/Buttons") is None

    def test_search_by_category(self, nav):
        nav.set_search("buttons")
        assert nav.tree().find("Forms/Buttons").components == ["Button", "Counter"]

    def test_search_keeps_doc_nodes(self, nav):
        nav.set_search("zzz")
        tree = nav.tree()
        assert tree.component_count() == 0
        assert tree.find("Guides/Design Tokens").has_doc

    def test_search_does_not_touch_selection(self, nav):
        nav.select_story("Button", 2)
        nav.set_search("toggle")
        assert nav.selection == StorySelection("Button", 2)

    def test_clearing_search_restores_tree(self, nav):
        total = nav.tree().component_count()
        nav.set_search("card")
        assert nav.tree().component_count() == 1
        nav.set_search("")
        assert nav.tree().component_count() == total


# ===========================================================================
# Expand / collapse
# ===========================================================================

class TestExpand:

    def test_expanded_by_default(self, nav):
        assert nav.is_expanded("Forms")

    def test_toggle(self, nav):
        assert nav.toggle("Forms") is False
        assert not nav.is_expanded("Forms")
        assert nav.toggle("Forms") is True

    def test_paths_independent(self, nav):
        nav.set_expanded("Forms", False)
        assert nav.is_expanded("Forms/Inputs")


# ===========================================================================
# Sidebar helpers
# ===========================================================================

class TestHelpers:

    def test_story_titles(self, nav):
        assert nav.story_titles("Button") == ["Default", "Secondary", "Disabled", "On Dark"]
        assert nav.story_titles("Ghost") == []

    def test_has_component_docs(self, nav):
        assert nav.has_component_docs("Button")
        assert not nav.has_component_docs("Counter")
        assert not nav.has_component_docs("Ghost")
