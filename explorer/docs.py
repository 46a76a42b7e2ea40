"""
Doc Embedding Resolver.

parse_doc_content() splits rendered documentation HTML into an ordered list
of parts: plain HTML chunks and story embeds. The scan is a plain substring
search for the marker produced by catalog.embeds; no HTML parser involved.

resolve_embedded_story() turns an embed into the component, story, render
function and schema it points at. Failures are exceptions the page
renderer converts into inline placeholder text.
"""

import html
import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Union

from catalog.embeds import MARKER_CLOSE, MARKER_OPEN
from catalog.registry import ComponentRegistry
from catalog.schema import Schema
from catalog.stories import StoryInfo, find_story
from explorer.preview import render_story


logger = logging.getLogger(__name__)

COMPONENT_DOC_PREFIX = "__component__/"


# ---------------------------------------------------------------------------
# Parts
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class HtmlPart:
    text: str


@dataclass(frozen=True)
class StoryEmbed:
    story_path: str
    story_name: str


DocPart = Union[HtmlPart, StoryEmbed]


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class EmbedResolutionError(Exception):
    """Base for every way an embed or story reference can fail to resolve."""

    def placeholder(self) -> str:
        return str(self)


class InvalidPath(EmbedResolutionError):
    def __init__(self, story_path):
        self.story_path = story_path
        super().__init__(f"Invalid story path: {story_path}")


class ComponentNotFound(EmbedResolutionError):
    def __init__(self, component_name):
        self.component_name = component_name
        super().__init__(f"Component not found: {component_name}")


class StoryNotFound(EmbedResolutionError):
    def __init__(self, component_name, story_name=None, story_index=None):
        self.component_name = component_name
        self.story_name = story_name
        self.story_index = story_index
        which = f"'{story_name}'" if story_name is not None else f"#{story_index}"
        super().__init__(f"Story {which} not found in component {component_name}")


class DocNotFound(Exception):
    def __init__(self, path):
        self.path = path
        super().__init__(f"Documentation not found: {path}")


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def extract_attr(element: str, attr_name: str) -> Optional[str]:
    """Value of `attr_name="..."` inside an element string, or None."""
    pattern = f'{attr_name}="'
    start = element.find(pattern)
    if start == -1:
        return None
    value_start = start + len(pattern)
    end = element.find('"', value_start)
    if end == -1:
        return None
    return html.unescape(element[value_start:end])


def parse_doc_content(content: str) -> List[DocPart]:
    """Split documentation HTML into HtmlPart / StoryEmbed parts.

    A marker missing either data attribute is dropped without output.
    A marker with no closing tag ends the scan; the rest is kept as HTML.
    """
    parts: List[DocPart] = []
    remaining = content

    while True:
        start = remaining.find(MARKER_OPEN)
        if start == -1:
            break
        end = remaining.find(MARKER_CLOSE, start)
        if end == -1:
            break

        if start > 0:
            parts.append(HtmlPart(remaining[:start]))

        element = remaining[start:end + len(MARKER_CLOSE)]
        story_path = extract_attr(element, "data-story-path")
        story_name = extract_attr(element, "data-story-name")
        if story_path is not None and story_name is not None:
            parts.append(StoryEmbed(story_path=story_path, story_name=story_name))
        else:
            logger.debug("Dropping malformed story embed marker: %r", element)

        remaining = remaining[end + len(MARKER_CLOSE):]

    if remaining:
        parts.append(HtmlPart(remaining))
    return parts


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ResolvedStory:
    """Ready-to-render data for a story reference."""
    component_name: str
    story_index: int
    story: StoryInfo
    render: Callable[[str], Any]
    schema: Schema


def resolve_embedded_story(registry: ComponentRegistry, story_path: str,
                           story_name: str) -> ResolvedStory:
    """Resolve "Category/.../Component/Story" plus the bare story title.

    The component is the second-to-last path segment; the story is the first
    one whose title equals `story_name` exactly.
    """
    segments = story_path.split("/")
    if len(segments) < 2:
        raise InvalidPath(story_path)

    component_name = segments[-2]
    registration = registry.find(component_name)
    if registration is None:
        raise ComponentNotFound(component_name)

    match = find_story(registration.get_stories(), story_name)
    if match is None:
        raise StoryNotFound(component_name, story_name=story_name)
    story_index, story = match

    return ResolvedStory(
        component_name=component_name,
        story_index=story_index,
        story=story,
        render=registration.render,
        schema=registration.get_schema(),
    )


def resolve_story_page(registry: ComponentRegistry, component_name: str,
                       story_index: int) -> ResolvedStory:
    """Resolve a direct (component, index) selection."""
    registration = registry.find(component_name)
    if registration is None:
        raise ComponentNotFound(component_name)
    stories = registration.get_stories()
    if not 0 <= story_index < len(stories):
        raise StoryNotFound(component_name, story_index=story_index)
    return ResolvedStory(
        component_name=component_name,
        story_index=story_index,
        story=stories[story_index],
        render=registration.render,
        schema=registration.get_schema(),
    )


def component_doc_path(component_name: str) -> str:
    return f"{COMPONENT_DOC_PREFIX}{component_name}"


def resolve_doc_page(registry: ComponentRegistry, path: str) -> List[DocPart]:
    """Parts of a registered doc page or of a component's description page.

    Raises DocNotFound when nothing lives at `path`.
    """
    if path.startswith(COMPONENT_DOC_PREFIX):
        registration = registry.find(path[len(COMPONENT_DOC_PREFIX):])
        if registration is None or not registration.description:
            raise DocNotFound(path)
        return parse_doc_content(registration.description)

    doc = registry.find_doc(path)
    if doc is None:
        raise DocNotFound(path)
    return parse_doc_content(doc.content_html)


# ---------------------------------------------------------------------------
# Page rendering
# ---------------------------------------------------------------------------

def placeholder(message: str) -> str:
    return f'<div class="error">{html.escape(message)}</div>'


def render_doc_page(registry: ComponentRegistry, path: str,
                    render_embed: Optional[Callable[[ResolvedStory], str]] = None) -> str:
    """Assemble a doc page. Every failure becomes inline placeholder markup.

    `render_embed` turns a resolved story into markup; the default renders
    the story's own props buffer.
    """
    try:
        parts = resolve_doc_page(registry, path)
    except DocNotFound as e:
        return placeholder(str(e))

    if render_embed is None:
        render_embed = _render_story_default

    chunks = []
    for part in parts:
        if isinstance(part, HtmlPart):
            chunks.append(part.text)
            continue
        try:
            resolved = resolve_embedded_story(registry, part.story_path, part.story_name)
        except EmbedResolutionError as e:
            chunks.append(placeholder(e.placeholder()))
            continue
        chunks.append(render_embed(resolved))
    return "".join(chunks)


def _render_story_default(resolved: ResolvedStory) -> str:
    return str(render_story(resolved.render, resolved.story, resolved.story.props_json))
