"""
Example component library: buttons, cards, inputs and a few doc pages.

bootstrap() is the single startup step that builds the registry.
"""

from catalog import build_registry, collect
from example_library import buttons, cards, inputs
from example_library.guides import guide_pages


COMPONENT_MODULES = (buttons, cards, inputs)


def bootstrap(config=None):
    """Build the registry of every component and doc page in the library."""
    return build_registry(
        components=collect(*COMPONENT_MODULES),
        docs=guide_pages(),
        config=config,
    )
