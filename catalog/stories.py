"""
Story Catalog: named example configurations of a component's props.

Component authors write typed Story records:

    def button_stories():
        return [
            Story("Default", ButtonProps(label="Click me")),
            Story("Disabled", ButtonProps(label="Nope", disabled=True),
                  description="A button that cannot be clicked")
                .with_decorator(with_padding),
        ]

The registry turns them into type-erased StoryInfo records whose props are
the serialized props buffer.

Decorators wrap the rendered output. The first decorator in the list is the
outermost wrapper: [d1, d2, d3] applied to R gives d1(d2(d3(R))).
"""

import logging
from collections import Counter
from dataclasses import dataclass, field, replace
from typing import Any, Callable, List, Optional


logger = logging.getLogger(__name__)

Decorator = Callable[[Any], Any]


@dataclass(frozen=True)
class Story:
    """A typed story: title, props instance, optional description and decorators."""
    title: str
    props: Any
    description: Optional[str] = None
    decorators: tuple = ()

    def with_decorator(self, decorator: Decorator) -> "Story":
        return replace(self, decorators=self.decorators + (decorator,))

    def with_decorators(self, decorators) -> "Story":
        return replace(self, decorators=self.decorators + tuple(decorators))


@dataclass(frozen=True, eq=False)
class StoryInfo:
    """Runtime story with serialized props."""
    title: str
    description: Optional[str]
    props_json: str
    decorators: tuple = field(default=())

    def __eq__(self, other):
        if not isinstance(other, StoryInfo):
            return NotImplemented
        return (
            self.title == other.title
            and self.description == other.description
            and self.props_json == other.props_json
            and len(self.decorators) == len(other.decorators)
            and all(a is b for a, b in zip(self.decorators, other.decorators))
        )

    def __hash__(self):
        return hash((self.title, self.description, self.props_json, len(self.decorators)))

    def __repr__(self):
        return (
            f"StoryInfo(title={self.title!r}, description={self.description!r}, "
            f"props_json={self.props_json!r}, decorators=[{len(self.decorators)} decorators])"
        )


def apply_decorators(output, decorators):
    """Wrap `output` so the first decorator ends up outermost."""
    for decorator in reversed(list(decorators)):
        output = decorator(output)
    return output


def to_story_infos(stories, schema) -> List[StoryInfo]:
    """Serialize typed stories through the schema's shadow structure.

    A story whose props cannot be encoded gets an empty buffer; rendering
    it falls back to the first story's props.
    """
    infos = []
    for story in stories:
        try:
            props_json = schema.encode(story.props)
        except (TypeError, ValueError) as e:
            logger.debug("Story %r props not serializable: %s", story.title, e)
            props_json = ""
        infos.append(StoryInfo(
            title=story.title,
            description=story.description,
            props_json=props_json,
            decorators=tuple(story.decorators),
        ))
    return infos


def story_titles(stories) -> List[str]:
    return [s.title for s in stories]


def duplicate_titles(stories) -> List[str]:
    """Titles used by more than one story, in first-seen order."""
    counts = Counter(s.title for s in stories)
    seen = []
    for s in stories:
        if counts[s.title] > 1 and s.title not in seen:
            seen.append(s.title)
    return seen


def find_story(stories, title: str):
    """Return (index, story) of the first story titled exactly `title`, or None."""
    for index, story in enumerate(stories):
        if story.title == title:
            return index, story
    return None
