"""
Catalog explorer: category tree, doc embedding, navigation, props editing
and live preview on top of a ComponentRegistry.
"""

from explorer.tree import CategoryTreeNode, build_category_tree
from explorer.docs import (
    HtmlPart, StoryEmbed, ResolvedStory, parse_doc_content, resolve_embedded_story,
    resolve_story_page, resolve_doc_page, render_doc_page,
    InvalidPath, ComponentNotFound, StoryNotFound, DocNotFound,
)
from explorer.navigation import Navigator, StorySelection, DocPageSelection, search_components
from explorer.props_editor import PropsEditor, coerce_input
from explorer.preview import PreviewCapture, UiSettings, ViewportSize, render_story
