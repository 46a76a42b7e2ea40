"""
Story embed markers.

Documentation source embeds a live story with a line of the form

    @[story:Category/Component/Story Name]

Before the source is handed to a markdown converter, each such line is
replaced by a block-level marker the converter passes through untouched:

    <div class="storybook-embed" data-story-path="Category/Component/Story Name"
         data-story-name="Story Name"></div>
"""

import html

EMBED_PREFIX = "@[story:"
EMBED_SUFFIX = "]"
MARKER_OPEN = '<div class="storybook-embed"'
MARKER_CLOSE = "</div>"


def embed_marker(story_path: str, story_name: str = None) -> str:
    """Build the marker for a story path. Name defaults to the last segment."""
    if story_name is None:
        story_name = story_path.rsplit("/", 1)[-1]
    path_attr = html.escape(story_path, quote=True)
    name_attr = html.escape(story_name, quote=True)
    return (
        f'{MARKER_OPEN} data-story-path="{path_attr}" '
        f'data-story-name="{name_attr}">{MARKER_CLOSE}'
    )


def preprocess_story_embeds(source: str) -> str:
    """Replace every `@[story:...]` line with an embed marker line."""
    lines = []
    for line in source.splitlines():
        trimmed = line.strip()
        if trimmed.startswith(EMBED_PREFIX) and trimmed.endswith(EMBED_SUFFIX):
            full_path = trimmed[len(EMBED_PREFIX):-len(EMBED_SUFFIX)]
            lines.append(embed_marker(full_path))
        else:
            lines.append(line)
    return "".join(line + "\n" for line in lines)
