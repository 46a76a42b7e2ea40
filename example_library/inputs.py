"""Form inputs bound to reactive cells."""

import html
from dataclasses import dataclass, field
from typing import List, Literal, Optional

from catalog import Attribute, Callback, Cell, EventHandler, ReadCell, Story, storybook


@dataclass
class TextInputProps:
    value: Cell[str]
    placeholder: Optional[str] = None
    max_length: Optional[int] = None
    size: Literal["sm", "md", "lg"] = "md"
    on_input: Optional[EventHandler[str]] = None
    attributes: List[Attribute] = field(default_factory=list)


def text_input_stories():
    return [
        Story("Empty", TextInputProps(value=Cell(""), placeholder="Type here")),
        Story("Filled", TextInputProps(value=Cell("hello"), max_length=20, size="lg")),
    ]


@storybook(tag="Forms/Inputs", stories=text_input_stories)
def TextInput(props: TextInputProps) -> str:
    attrs = "".join(f' {a.name}="{html.escape(str(a.value))}"' for a in props.attributes)
    placeholder = f' placeholder="{html.escape(props.placeholder)}"' if props.placeholder else ""
    return (
        f'<input class="input-{props.size}" value="{html.escape(props.value.get())}"'
        f"{placeholder}{attrs}>"
    )


@dataclass
class ToggleProps:
    checked: ReadCell[bool]
    label: str = ""
    validate: Callback[bool, bool] = field(default_factory=lambda: Callback(bool))


def toggle_stories():
    return [
        Story("Off", ToggleProps(checked=ReadCell(False), label="Notifications")),
        Story("On", ToggleProps(checked=ReadCell(True), label="Notifications")),
    ]


@storybook(tag="Forms/Inputs", stories=toggle_stories)
def Toggle(props: ToggleProps) -> str:
    state = "on" if props.checked.get() else "off"
    return f'<label class="toggle toggle-{state}">{html.escape(props.label)}</label>'
