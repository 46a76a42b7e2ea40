#!/usr/bin/env python3
"""
Catalog Demo
============

Walks the example library the way the explorer UI would:
1. Bootstraps the registry from the example library
2. Prints the category tree (optionally filtered by a search query)
3. Renders a documentation page with its embedded stories
4. Edits a story's props through the props editor and re-renders it

Usage:  python3 demo_catalog.py [--search QUERY] [--doc PATH] [--env-file .env]
"""

import argparse
import logging

from catalog import StorybookConfig
from example_library import bootstrap
from explorer.docs import render_doc_page, resolve_story_page
from explorer.navigation import Navigator
from explorer.preview import render_story
from explorer.props_editor import PropsEditor


def print_tree(nav, node, depth=0):
    for name, child in node.children.items():
        doc = "  [doc]" if child.has_doc else ""
        print(f"{'  ' * depth}{name}/ ({child.component_count()}){doc}")
        print_tree(nav, child, depth + 1)
    for component in node.components:
        print(f"{'  ' * depth}• {component}")
        for i, title in enumerate(nav.story_titles(component)):
            print(f"{'  ' * (depth + 1)}{i}: {title}")


def main(search="", doc_path="Examples", env_file=None):
    config = StorybookConfig.from_env(env_file)
    logging.basicConfig(level=config.log_level)

    registry = bootstrap(config)
    nav = Navigator(registry)
    nav.set_search(search)

    print("=" * 64)
    print(f"  {config.title or 'Storybook'}: {len(registry)} components")
    print("=" * 64)
    print_tree(nav, nav.tree())

    # ── Doc page with embedded stories ─────────────────────────────
    nav.select_doc(doc_path)
    print(f"\n── {doc_path} " + "─" * 40)
    print(render_doc_page(registry, doc_path))

    # ── Props editor round-trip ────────────────────────────────────
    nav.select_component("Button")
    selection = nav.selection
    resolved = resolve_story_page(registry, selection.component_name, selection.story_index)
    editor = PropsEditor(resolved.schema, resolved.story.props_json)
    editor.edit("label", "Edited label")
    editor.edit("disabled", "true")
    print("\n── Button props " + "─" * 40)
    print(editor.text)
    print(render_story(resolved.render, resolved.story, editor.text))


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Browse the example component catalog")
    parser.add_argument("--search", default="")
    parser.add_argument("--doc", default="Examples")
    parser.add_argument("--env-file", default=None)
    args = parser.parse_args()
    main(search=args.search, doc_path=args.doc, env_file=args.env_file)
