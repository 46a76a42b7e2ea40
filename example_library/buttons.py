"""Buttons: a plain button and a counter bound to a Cell."""

import html
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from catalog import Cell, Element, EventHandler, ReadOnlyCell, Story, storybook


class ButtonVariant(str, Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"
    DANGER = "danger"


@dataclass
class ButtonProps:
    label: str = field(metadata={"description": "Text shown on the button"})
    variant: ButtonVariant = ButtonVariant.PRIMARY
    disabled: bool = False
    on_click: EventHandler[str] = field(default_factory=EventHandler)
    icon: Optional[Element] = None


def with_padding(story):
    return f'<div style="padding: 20px;">{story}</div>'


def with_dark_background(story):
    return f'<div style="background: #333; color: white;">{story}</div>'


_CLICK = EventHandler(lambda event: event)


def button_stories():
    return [
        Story("Default", ButtonProps(label="Click me", on_click=_CLICK)),
        Story("Secondary", ButtonProps(label="Cancel", variant=ButtonVariant.SECONDARY,
                                       on_click=_CLICK)),
        Story("Disabled", ButtonProps(label="Can't click", disabled=True, on_click=_CLICK),
              description="A disabled button that cannot be clicked"),
        Story("On Dark", ButtonProps(label="Inverted", on_click=_CLICK))
            .with_decorators([with_padding, with_dark_background]),
    ]


@storybook(tag="Forms/Buttons", stories=button_stories)
def Button(props: ButtonProps) -> str:
    """A clickable button.

    @[story:Forms/Buttons/Button/Default]
    """
    icon = f"{props.icon} " if props.icon is not None else ""
    disabled = " disabled" if props.disabled else ""
    return (
        f'<button class="btn btn-{props.variant.value}"{disabled}>'
        f"{icon}{html.escape(props.label)}</button>"
    )


@dataclass
class CounterProps:
    count: Cell[int]
    step: int = 1
    total: ReadOnlyCell[int] = field(default_factory=lambda: ReadOnlyCell(0))


def counter_stories():
    return [
        Story("Zero", CounterProps(count=Cell(0))),
        Story("Ten by Two", CounterProps(count=Cell(10), step=2)),
    ]


@storybook(tag="Forms/Buttons", stories=counter_stories)
def Counter(props: CounterProps) -> str:
    return (
        f'<div class="counter"><span>{props.count.get()}</span>'
        f"<button>+{props.step}</button></div>"
    )
