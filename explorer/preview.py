"""
Live preview: decorated story rendering and preview-document assembly.

The host renders a story into a hidden target element. PreviewCapture reads
that element's markup after each re-render (whenever the props buffer
changes) and rebuilds the preview document from it. The read is a
best-effort side effect: a missing target is skipped and retried on the
next reactive cycle.
"""

import asyncio
import logging
from enum import Enum
from typing import Callable, Optional

from reaktiv import Computed, Effect, Signal

from catalog.config import DEFAULT_HIGHLIGHT_DELAY_MS, StorybookConfig
from catalog.stories import apply_decorators


logger = logging.getLogger(__name__)

DARK_BACKGROUND = "#1e1e1e"
LIGHT_BACKGROUND = "#ffffff"


def render_story(render: Callable, story, props_json: str):
    """Render a story from a props buffer and wrap it in its decorators."""
    return apply_decorators(render(props_json), story.decorators)


# ---------------------------------------------------------------------------
# UI settings
# ---------------------------------------------------------------------------

class ViewportSize(str, Enum):
    FULL_WIDTH = "full"
    SMALL_MOBILE = "375"
    LARGE_MOBILE = "428"
    TABLET = "768"

    @property
    def width(self) -> str:
        return "100%" if self is ViewportSize.FULL_WIDTH else f"{self.value}px"

    @property
    def label(self) -> str:
        return _VIEWPORT_LABELS[self]

    @classmethod
    def from_value(cls, value: str) -> "ViewportSize":
        try:
            return cls(value)
        except ValueError:
            return cls.FULL_WIDTH


_VIEWPORT_LABELS = {
    ViewportSize.FULL_WIDTH: "Full Width",
    ViewportSize.SMALL_MOBILE: "Small Mobile (375px)",
    ViewportSize.LARGE_MOBILE: "Large Mobile (428px)",
    ViewportSize.TABLET: "Tablet (768px)",
}


class UiSettings:
    """Application-wide preview settings as reaktiv Signals."""

    def __init__(self):
        self.dark_theme = Signal(False)
        self.grid_enabled = Signal(False)
        self.outline_enabled = Signal(False)
        self.dark_preview_background = Signal(False)
        self.zoom_level = Signal(100)
        self.viewport = Signal(ViewportSize.FULL_WIDTH)


# ---------------------------------------------------------------------------
# Preview document
# ---------------------------------------------------------------------------

def make_container_id(prefix: str, component_name: str, story_index: int) -> str:
    """Unique id of the hidden element a story renders into."""
    safe = component_name.replace(" ", "-").replace("::", "-").replace(".", "-")
    return f"{prefix}-{safe}-story-{story_index}"


def build_css_links(config: StorybookConfig) -> str:
    return "\n    ".join(
        f'<link rel="stylesheet" href="{url}">' for url in config.component_css
    )


def build_outline_css(enabled: bool) -> str:
    return "* { outline: 1px solid rgba(255, 0, 0, 0.3) !important; }" if enabled else ""


def build_grid_css(enabled: bool) -> str:
    if not enabled:
        return ""
    return (
        "body { "
        "background-size: 100px 100px, 100px 100px, 20px 20px, 20px 20px; "
        "background-position: 0 0, 0 0, 0 0, 0 0; "
        "background-blend-mode: difference; "
        "background-image: "
        "linear-gradient(rgba(130,130,130,0.5) 1px, transparent 1px), "
        "linear-gradient(90deg, rgba(130,130,130,0.5) 1px, transparent 1px), "
        "linear-gradient(rgba(130,130,130,0.25) 1px, transparent 1px), "
        "linear-gradient(90deg, rgba(130,130,130,0.25) 1px, transparent 1px); "
        "}"
    )


def build_zoom_css(zoom_level: int) -> str:
    if zoom_level == 100:
        return ""
    return f"body {{ zoom: {zoom_level / 100}; }}"


def build_srcdoc(css_links: str, outline_css: str, grid_css: str, zoom_css: str,
                 body_html: str, background_color: str) -> str:
    """Full HTML document for the isolated preview frame."""
    return f"""<!DOCTYPE html>
<html>
<head>
    {css_links}
    <style>
        body {{ margin: 0; padding: 16px; background: {background_color}; }}
        {outline_css}
        {grid_css}
        {zoom_css}
    </style>
</head>
<body>
    {body_html}
</body>
</html>"""


# ---------------------------------------------------------------------------
# Capture
# ---------------------------------------------------------------------------

class PreviewCapture:
    """
    Re-captures a hidden render target whenever the props buffer changes.

    Usage:
        capture = PreviewCapture(editor.buffer, container_id, lookup=dom.inner_html)
        capture.srcdoc()        # current preview document
        capture.dispose()

    `lookup(container_id)` returns the element's markup, or None when the
    element is not present yet.
    """

    def __init__(self, props_buffer: Signal, container_id: str,
                 lookup: Callable[[str], Optional[str]],
                 settings: Optional[UiSettings] = None,
                 config: Optional[StorybookConfig] = None):
        self.container_id = container_id
        self.settings = settings or UiSettings()
        self.config = config or StorybookConfig()
        self.captured = Signal("")
        self._buffer = props_buffer
        self._lookup = lookup
        self._css_links = build_css_links(self.config)
        self.srcdoc = Computed(self._build)
        self._effect = Effect(self._capture)
        _tick()

    def _capture(self):
        self._buffer()  # re-run after every props change
        markup = self._lookup(self.container_id)
        if markup is None:
            logger.debug("Render target %s not present yet", self.container_id)
            return
        self.captured.set(markup)

    def _build(self) -> str:
        s = self.settings
        background = DARK_BACKGROUND if s.dark_preview_background() else LIGHT_BACKGROUND
        return build_srcdoc(
            self._css_links,
            build_outline_css(s.outline_enabled()),
            build_grid_css(s.grid_enabled()),
            build_zoom_css(s.zoom_level()),
            self.captured(),
            background,
        )

    def refresh(self) -> None:
        """Flush pending reactive effects."""
        _tick()

    def dispose(self) -> None:
        self._effect.dispose()


def schedule_highlight(callback: Callable[[], None],
                       delay_ms: int = DEFAULT_HIGHLIGHT_DELAY_MS,
                       loop: Optional[asyncio.AbstractEventLoop] = None) -> asyncio.TimerHandle:
    """Run the syntax-highlight reapply pass after a short delay, without blocking.

    Defaults to the running loop. Outside one, the callback is queued on the
    preview loop and fires once that loop runs past the delay (see _tick).
    """
    if loop is None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = preview_loop()
    return loop.call_later(delay_ms / 1000, callback)


_loop = None


def preview_loop() -> asyncio.AbstractEventLoop:
    """The module-owned loop used when no event loop is running."""
    global _loop
    if _loop is None or _loop.is_closed():
        _loop = asyncio.new_event_loop()
    return _loop


def _tick():
    """Process pending effects by running the event loop briefly."""
    try:
        asyncio.get_running_loop()
        return
    except RuntimeError:
        pass
    preview_loop().run_until_complete(asyncio.sleep(0))
