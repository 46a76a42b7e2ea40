"""
Component Registry: append-only catalog of components and doc pages.

Components are declared with the @storybook decorator, which only attaches
a ComponentRegistration to the function. Nothing is registered at import
time; the application builds its registry in one explicit bootstrap step:

    from example_library import buttons, cards

    registry = build_registry(
        components=collect(buttons, cards),
        docs=[storydoc("Examples", GETTING_STARTED_HTML)],
    )

Readers only ever see fully built entries: every append publishes a new
immutable snapshot.
"""

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, get_type_hints

from catalog.embeds import preprocess_story_embeds
from catalog.schema import DecodeFailure, Schema, derive_schema
from catalog.stories import StoryInfo, duplicate_titles, to_story_infos


logger = logging.getLogger(__name__)


class RegistryError(Exception):
    """Raised when a component or doc registration is invalid."""


@dataclass(frozen=True)
class ComponentRegistration:
    """Everything the explorer needs to know about one component."""
    name: str
    tag: str
    description: str
    get_stories: Callable[[], List[StoryInfo]]
    render: Callable[[str], Any]
    get_schema: Callable[[], Schema]

    @property
    def category(self) -> str:
        return self.tag

    def __repr__(self):
        return (
            f"ComponentRegistration(name={self.name!r}, tag={self.tag!r}, "
            f"description={self.description!r})"
        )


@dataclass(frozen=True)
class DocRegistration:
    """A documentation page placed at a tree path."""
    path: str
    content_html: str


@dataclass(frozen=True)
class ComponentInfo:
    """Flat (name, category) view of a registration."""
    name: str
    category: str


# ---------------------------------------------------------------------------
# Declaration
# ---------------------------------------------------------------------------

def _props_type_of(component) -> type:
    """The props dataclass is the annotation of the component's first parameter."""
    params = list(inspect.signature(component).parameters.values())
    if len(params) != 1:
        raise RegistryError(
            f"Component '{component.__name__}' must take exactly one props "
            f"argument, got {len(params)}"
        )
    try:
        hints = get_type_hints(component)
    except Exception:
        hints = getattr(component, "__annotations__", {})
    props_type = hints.get(params[0].name)
    if props_type is None:
        raise RegistryError(
            f"Component '{component.__name__}': props argument "
            f"'{params[0].name}' needs a dataclass annotation"
        )
    return props_type


def make_registration(component, stories, tag: str = "", name: Optional[str] = None,
                      description: Optional[str] = None,
                      props_type: Optional[type] = None) -> ComponentRegistration:
    """Package a component function and its stories accessor.

    `stories` is a zero-argument callable returning typed Story records.
    The first story's props are the defaults used for opaque fields and
    for any props buffer that fails to decode.
    """
    props_type = props_type or _props_type_of(component)
    try:
        derive_schema(props_type)
    except TypeError as e:
        raise RegistryError(f"Component '{name or component.__name__}': {e}")

    component_name = name or component.__name__
    if description is None:
        description = inspect.getdoc(component) or ""
    description_html = preprocess_story_embeds(description) if description else ""

    def get_schema() -> Schema:
        return derive_schema(props_type)

    def get_stories() -> List[StoryInfo]:
        return to_story_infos(stories(), derive_schema(props_type))

    def render(props_json: str):
        story_list = stories()
        if not story_list:
            raise RegistryError(f"Component '{component_name}' has no stories")
        default_props = story_list[0].props
        try:
            props = derive_schema(props_type).decode(props_json, defaults=default_props)
        except DecodeFailure as e:
            logger.debug("Falling back to first story of %s: %s", component_name, e)
            props = default_props
        return component(props)

    return ComponentRegistration(
        name=component_name,
        tag=tag,
        description=description_html,
        get_stories=get_stories,
        render=render,
        get_schema=get_schema,
    )


def storybook(tag: str = "", stories=None, name: Optional[str] = None,
              description: Optional[str] = None):
    """Mark a component function for inclusion in the storybook.

        @storybook(tag="Forms/Inputs", stories=text_input_stories)
        def TextInput(props: TextInputProps) -> str:
            ...

    The function is returned unchanged with a `__storybook__` attribute.
    """
    if stories is None:
        raise RegistryError("storybook() requires a stories accessor")

    def decorator(component):
        component.__storybook__ = make_registration(
            component, stories, tag=tag, name=name, description=description,
        )
        return component

    return decorator


def storydoc(path: str, source: str) -> DocRegistration:
    """Declare a documentation page. `@[story:...]` lines become embed markers."""
    return DocRegistration(path=path, content_html=preprocess_story_embeds(source))


def collect(*modules) -> List[ComponentRegistration]:
    """Gather every @storybook registration defined in the given modules."""
    found = []
    for module in modules:
        for value in vars(module).values():
            registration = getattr(value, "__storybook__", None)
            if isinstance(registration, ComponentRegistration) and registration not in found:
                found.append(registration)
    return found


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

class ComponentRegistry:
    """
    Append-only collection of component and doc registrations.

    Names are unique. There is no removal API. enumerate() returns the
    snapshot current at the time of the call.
    """

    def __init__(self, strict_titles: bool = False):
        self._strict_titles = strict_titles
        self._components: tuple = ()
        self._by_name: dict = {}
        self._docs: tuple = ()
        self._docs_by_path: dict = {}

    # ── Writes ────────────────────────────────────────────────────

    def register(self, entry) -> ComponentRegistration:
        """Append a registration (or a @storybook-decorated function).

        Raises RegistryError if:
        - the entry carries no registration
        - the name is empty or already registered
        - the category path has an empty segment
        - the stories accessor returns no stories
        - strict titles are on and two stories share a title
        """
        registration = entry
        if not isinstance(entry, ComponentRegistration):
            registration = getattr(entry, "__storybook__", None)
            if not isinstance(registration, ComponentRegistration):
                raise RegistryError(f"{entry!r} is not a storybook component")

        name = registration.name
        if not name:
            raise RegistryError("Component name must not be empty")
        if name in self._by_name:
            raise RegistryError(f"Component '{name}' is already registered")
        if registration.tag and any(not s for s in registration.tag.split("/")):
            raise RegistryError(
                f"Component '{name}': category path '{registration.tag}' "
                f"has an empty segment"
            )

        stories = registration.get_stories()
        if not stories:
            raise RegistryError(f"Component '{name}' must define at least one story")
        duplicates = duplicate_titles(stories)
        if duplicates:
            if self._strict_titles:
                raise RegistryError(
                    f"Component '{name}': duplicate story titles {duplicates}"
                )
            logger.warning("Component %s has duplicate story titles %s", name, duplicates)

        # Publish new snapshots only once the entry is complete
        self._by_name = {**self._by_name, name: registration}
        self._components = self._components + (registration,)
        logger.info("Registered component %s under '%s'", name, registration.tag)
        return registration

    def add_doc(self, doc: DocRegistration) -> DocRegistration:
        """Append a doc page. Raises RegistryError on a duplicate or empty path."""
        if not doc.path or any(not s for s in doc.path.split("/")):
            raise RegistryError(f"Doc path '{doc.path}' has an empty segment")
        if doc.path in self._docs_by_path:
            raise RegistryError(f"Doc page '{doc.path}' is already registered")
        self._docs_by_path = {**self._docs_by_path, doc.path: doc}
        self._docs = self._docs + (doc,)
        logger.info("Registered doc page %s", doc.path)
        return doc

    # ── Reads ─────────────────────────────────────────────────────

    def enumerate(self) -> tuple:
        """Snapshot of all component registrations."""
        return self._components

    def find(self, name: str) -> Optional[ComponentRegistration]:
        """Exact, case-sensitive lookup. None when not found."""
        return self._by_name.get(name)

    def has(self, name: str) -> bool:
        return name in self._by_name

    def components(self) -> List[ComponentInfo]:
        return [ComponentInfo(r.name, r.tag) for r in self._components]

    def docs(self) -> tuple:
        return self._docs

    def find_doc(self, path: str) -> Optional[DocRegistration]:
        return self._docs_by_path.get(path)

    def doc_paths(self) -> List[str]:
        return [d.path for d in self._docs]

    def __len__(self):
        return len(self._components)

    def __iter__(self):
        return iter(self._components)

    def __contains__(self, name):
        return name in self._by_name


def build_registry(components=(), docs=(), config=None) -> ComponentRegistry:
    """Bootstrap a registry from explicit lists of components and doc pages."""
    strict = bool(config.strict_titles) if config is not None else False
    registry = ComponentRegistry(strict_titles=strict)
    for component in components:
        registry.register(component)
    for doc in docs:
        registry.add_doc(doc)
    return registry
