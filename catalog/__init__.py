"""
Component catalog: bindable cells, schema derivation, stories, and the
append-only component registry.
"""

from catalog.cells import Cell, ReadCell, WriteCell, ReadOnlyCell, EventHandler, Callback, Element, Attribute
from catalog.schema import Schema, SchemaField, TypeTag, FieldKind, DecodeFailure, derive_schema
from catalog.stories import Story, StoryInfo, apply_decorators
from catalog.registry import (
    ComponentRegistry, ComponentRegistration, ComponentInfo, DocRegistration, RegistryError,
    storybook, storydoc, collect, build_registry,
)
from catalog.config import StorybookConfig
