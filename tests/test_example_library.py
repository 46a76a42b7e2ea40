"""
End-to-end tests over the bundled example library.

Covers:
- Bootstrap registers every component and doc page
- Every story of every component survives encode -> decode unchanged
- Doc pages render embedded stories and inline failures
- Decorated stories render with the first decorator outermost
"""

import pytest

from catalog.schema import FieldKind
from example_library import COMPONENT_MODULES, bootstrap
from example_library.buttons import button_stories, counter_stories
from example_library.cards import card_stories
from example_library.inputs import text_input_stories, toggle_stories
from explorer.docs import render_doc_page, resolve_story_page
from explorer.preview import render_story
from explorer.props_editor import PropsEditor
from explorer.tree import build_category_tree


STORY_SOURCES = {
    "Button": button_stories,
    "Counter": counter_stories,
    "ExampleCard": card_stories,
    "TextInput": text_input_stories,
    "Toggle": toggle_stories,
}


@pytest.fixture(scope="module")
def registry():
    return bootstrap()


class TestBootstrap:

    def test_all_components_registered(self, registry):
        assert sorted(r.name for r in registry) == sorted(STORY_SOURCES)

    def test_doc_pages_registered(self, registry):
        assert registry.doc_paths() == ["Examples", "Forms", "Guides/Design Tokens"]

    def test_modules_listed(self):
        assert [m.__name__ for m in COMPONENT_MODULES] == [
            "example_library.buttons", "example_library.cards", "example_library.inputs",
        ]

    def test_tree(self, registry):
        tree = build_category_tree(registry.components(), registry.doc_paths())
        assert list(tree.children) == ["Examples", "Forms", "Guides"]
        assert tree.find("Forms").component_count() == 4
        assert tree.find("Forms").has_doc
        assert tree.find("Guides/Design Tokens").component_count() == 0


class TestRoundTrip:

    @pytest.mark.parametrize("name", sorted(STORY_SOURCES))
    def test_every_story_round_trips(self, registry, name):
        registration = registry.find(name)
        schema = registration.get_schema()
        typed = STORY_SOURCES[name]()
        defaults = typed[0].props
        for story, info in zip(typed, registration.get_stories()):
            assert info.props_json, story.title
            decoded = schema.decode(info.props_json, defaults=defaults)
            for f in schema:
                if f.kind is FieldKind.OPAQUE:
                    assert getattr(decoded, f.name) is getattr(defaults, f.name)
                else:
                    assert getattr(decoded, f.name) == getattr(story.props, f.name), (
                        f"{name}/{story.title}.{f.name}"
                    )

    def test_every_story_renders(self, registry):
        for registration in registry:
            for info in registration.get_stories():
                assert render_story(registration.render, info, info.props_json)


class TestPages:

    def test_getting_started_embeds_cards(self, registry):
        page = render_doc_page(registry, "Examples")
        assert page.count('<article class="card">') == 2
        assert "Release notes" in page

    def test_forms_page_reports_missing_story(self, registry):
        page = render_doc_page(registry, "Forms")
        assert 'value="hello"' in page
        assert "Story &#x27;Missing&#x27; not found in component TextInput" in page

    def test_orphan_page_renders(self, registry):
        assert "Design tokens" in render_doc_page(registry, "Guides/Design Tokens")

    def test_component_docs_page(self, registry):
        page = render_doc_page(registry, "__component__/Button")
        assert page.startswith("A clickable button.")
        assert "Click me" in page


class TestDecoratedStory:

    def test_on_dark_wraps_padding_outside(self, registry):
        resolved = resolve_story_page(registry, "Button", 3)
        assert resolved.story.title == "On Dark"
        out = render_story(resolved.render, resolved.story, resolved.story.props_json)
        assert out.startswith('<div style="padding: 20px;"><div style="background: #333;')
        assert "Inverted" in out


class TestEditedRender:

    @pytest.fixture
    def card_editor(self, registry):
        resolved = resolve_story_page(registry, "ExampleCard", 1)
        return resolved, PropsEditor(resolved.schema, resolved.story.props_json)

    def test_edit_reaches_render(self, card_editor):
        resolved, editor = card_editor
        editor.edit("title", "Edited title")
        assert "Edited title" in resolved.render(editor.text)

    def test_malformed_nested_edit_falls_back_to_first_story(self, card_editor):
        resolved, editor = card_editor
        editor.edit("author", '{"__type__": "Decimal", "value": "abc"}')
        out = resolved.render(editor.text)
        assert "<h3>Hello</h3>" in out
        first = card_stories()[0].props
        assert editor.decoded(defaults=first) is first
