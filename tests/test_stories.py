"""
Tests for the Story Catalog.

Covers:
- Story builders (with_decorator / with_decorators)
- Decorator ordering (first decorator is outermost)
- StoryInfo equality (decorators compared by identity)
- Serialization through the schema, with unserializable props
- Title helpers
"""

import pytest
from dataclasses import dataclass
from typing import Any

from catalog.schema import derive_schema
from catalog.stories import (
    Story, StoryInfo, apply_decorators, duplicate_titles, find_story, story_titles,
    to_story_infos,
)


@dataclass
class LabelProps:
    label: str
    payload: Any = None


def d1(output):
    return f"d1({output})"


def d2(output):
    return f"d2({output})"


def d3(output):
    return f"d3({output})"


# ===========================================================================
# Decorators
# ===========================================================================

class TestDecorators:

    def test_first_decorator_is_outermost(self):
        assert apply_decorators("R", [d1, d2, d3]) == "d1(d2(d3(R)))"

    def test_no_decorators_is_identity(self):
        assert apply_decorators("R", []) == "R"

    def test_builders_append_in_order(self):
        story = Story("A", LabelProps("x")).with_decorator(d1).with_decorators([d2, d3])
        assert story.decorators == (d1, d2, d3)

    def test_builders_do_not_mutate(self):
        base = Story("A", LabelProps("x"))
        base.with_decorator(d1)
        assert base.decorators == ()


# ===========================================================================
# StoryInfo
# ===========================================================================

class TestStoryInfo:

    def test_equal_when_same_decorator_objects(self):
        a = StoryInfo("A", None, "{}", (d1, d2))
        b = StoryInfo("A", None, "{}", (d1, d2))
        assert a == b

    def test_decorators_compared_by_identity(self):
        a = StoryInfo("A", None, "{}", (lambda o: o,))
        b = StoryInfo("A", None, "{}", (lambda o: o,))
        assert a != b

    def test_decorator_count_matters(self):
        assert StoryInfo("A", None, "{}", (d1,)) != StoryInfo("A", None, "{}", (d1, d1))

    def test_other_fields_matter(self):
        assert StoryInfo("A", None, "{}") != StoryInfo("B", None, "{}")
        assert StoryInfo("A", "x", "{}") != StoryInfo("A", None, "{}")

    def test_repr_hides_decorators(self):
        text = repr(StoryInfo("A", None, "{}", (d1, d2)))
        assert "[2 decorators]" in text
        assert "d1" not in text


# ===========================================================================
# Serialization
# ===========================================================================

class TestToStoryInfos:

    def test_props_serialized(self):
        infos = to_story_infos(
            [Story("A", LabelProps("hello"), description="first")],
            derive_schema(LabelProps),
        )
        assert infos[0].title == "A"
        assert infos[0].description == "first"
        assert '"label": "hello"' in infos[0].props_json

    def test_decorators_carried(self):
        infos = to_story_infos(
            [Story("A", LabelProps("x")).with_decorators([d1, d2])],
            derive_schema(LabelProps),
        )
        assert infos[0].decorators == (d1, d2)

    def test_unserializable_props_give_empty_buffer(self):
        infos = to_story_infos(
            [Story("Bad", LabelProps("x", payload=object())), Story("Good", LabelProps("y"))],
            derive_schema(LabelProps),
        )
        assert infos[0].props_json == ""
        assert infos[1].props_json != ""


# ===========================================================================
# Title helpers
# ===========================================================================

class TestTitles:

    @pytest.fixture
    def stories(self):
        return [
            Story("A", LabelProps("1")),
            Story("B", LabelProps("2")),
            Story("A", LabelProps("3")),
        ]

    def test_story_titles(self, stories):
        assert story_titles(stories) == ["A", "B", "A"]

    def test_duplicate_titles(self, stories):
        assert duplicate_titles(stories) == ["A"]

    def test_find_story_returns_first_match(self, stories):
        index, story = find_story(stories, "A")
        assert index == 0
        assert story.props.label == "1"

    def test_find_story_is_exact(self, stories):
        assert find_story(stories, "a") is None
