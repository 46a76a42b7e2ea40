"""
Bindable value cells and opaque handles for component props.

A Cell wraps a reaktiv Signal and carries a capability tag:

    count: Cell[int]          read-write, editable via its inner type
    label: ReadCell[str]      read capability, editable via its inner type
    sink:  WriteCell[bool]    write capability, editable via its inner type
    total: ReadOnlyCell[int]  read-only by contract, never editable

Opaque handles (EventHandler, Callback, Element, Attribute) stand in for
values that cannot be serialized into the props editor.
"""

from enum import Enum
from typing import Any, Callable, Generic, Optional, TypeVar

from reaktiv import Signal


T = TypeVar("T")
A = TypeVar("A")
R = TypeVar("R")


class Capability(str, Enum):
    """What a holder of the cell may do with its value."""
    READ = "read"
    WRITE = "write"
    READ_WRITE = "read-write"


# ---------------------------------------------------------------------------
# Cells
# ---------------------------------------------------------------------------

class Cell(Generic[T]):
    """A reactive value cell. Reading inside a Computed/Effect tracks it."""

    capability: Capability = Capability.READ_WRITE

    def __init__(self, value: T):
        self._signal = Signal(value)

    def get(self) -> T:
        return self._signal()

    def set(self, value: T) -> None:
        self._signal.set(value)

    def __call__(self) -> T:
        return self._signal()

    @property
    def signal(self) -> Signal:
        return self._signal

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.get() == other.get()

    __hash__ = None

    def __repr__(self):
        return f"{self.__class__.__name__}({self.get()!r})"


class ReadCell(Cell[T]):
    capability = Capability.READ


class WriteCell(Cell[T]):
    capability = Capability.WRITE


class ReadOnlyCell(Cell[T]):
    """A cell the component must only observe. Never editable."""

    capability = Capability.READ

    def set(self, value: T) -> None:
        raise TypeError(f"{self.__class__.__name__} cannot be written")


EDITABLE_CELLS = (Cell, ReadCell, WriteCell)


# ---------------------------------------------------------------------------
# Opaque handles
# ---------------------------------------------------------------------------

class EventHandler(Generic[T]):
    """Wraps a callable invoked with an event payload."""

    def __init__(self, fn: Optional[Callable[[T], Any]] = None):
        self.fn = fn

    def __call__(self, event: T = None):
        if self.fn is not None:
            return self.fn(event)
        return None

    def __eq__(self, other):
        if not isinstance(other, EventHandler):
            return NotImplemented
        return self.fn is other.fn

    def __hash__(self):
        return hash(id(self.fn))


class Callback(Generic[A, R]):
    """Wraps a callable returning a value to the component."""

    def __init__(self, fn: Callable[[A], R]):
        self.fn = fn

    def __call__(self, arg: A) -> R:
        return self.fn(arg)

    def __eq__(self, other):
        if not isinstance(other, Callback):
            return NotImplemented
        return self.fn is other.fn

    def __hash__(self):
        return hash(id(self.fn))


class Element:
    """A pre-rendered output slot (children, icons, etc.)."""

    def __init__(self, markup: Any = ""):
        self.markup = markup

    def __eq__(self, other):
        if not isinstance(other, Element):
            return NotImplemented
        return self.markup == other.markup

    def __hash__(self):
        return hash(("Element", str(self.markup)))

    def __str__(self):
        return str(self.markup)

    def __repr__(self):
        return f"Element({self.markup!r})"


class Attribute:
    """A miscellaneous name/value attribute spread onto the rendered root."""

    def __init__(self, name: str, value: Any):
        self.name = name
        self.value = value

    def __eq__(self, other):
        if not isinstance(other, Attribute):
            return NotImplemented
        return (self.name, self.value) == (other.name, other.value)

    def __hash__(self):
        return hash((self.name, str(self.value)))

    def __repr__(self):
        return f"Attribute({self.name!r}, {self.value!r})"
