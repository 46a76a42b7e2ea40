"""Cards: nested dataclass props, lists and a render slot."""

import html
from dataclasses import dataclass, field
from typing import List, Optional

from catalog import Element, Story, storybook


@dataclass
class Author:
    name: str
    handle: Optional[str] = None


@dataclass
class ExampleCardProps:
    title: str
    author: Author
    tags: List[str] = field(default_factory=list,
                            metadata={"description": "Labels rendered as chips"})
    rating: float = 0.0
    children: Element = field(default_factory=Element)


def card_stories():
    body = Element("<p>Body copy</p>")
    return [
        Story("Default", ExampleCardProps(
            title="Hello", author=Author("Ada"), children=body)),
        Story("Tagged", ExampleCardProps(
            title="Release notes", author=Author("Grace", "@grace"),
            tags=["news", "v2"], rating=4.5, children=body),
            description="A card with tags and a rating"),
    ]


@storybook(tag="Examples", stories=card_stories)
def ExampleCard(props: ExampleCardProps) -> str:
    """A card with a title, an author line and free-form content."""
    chips = "".join(f'<span class="chip">{html.escape(t)}</span>' for t in props.tags)
    return (
        f'<article class="card"><h3>{html.escape(props.title)}</h3>'
        f"<small>{html.escape(props.author.name)}</small>{chips}"
        f"{props.children}</article>"
    )
