"""
Storybook configuration.

    config = (StorybookConfig()
              .with_title("My Component Library")
              .with_css("/assets/components.css"))

or from the environment (a .env file is honoured):

    STORYBOOK_TITLE="My Library"
    STORYBOOK_CSS="/a.css,/b.css"
    STORYBOOK_STRICT_TITLES=true
    STORYBOOK_LOG_LEVEL=DEBUG
    STORYBOOK_HIGHLIGHT_DELAY_MS=100
"""

import os
from dataclasses import dataclass, field, replace
from typing import List, Optional

from dotenv import load_dotenv


DEFAULT_HIGHLIGHT_DELAY_MS = 100


@dataclass(frozen=True)
class StorybookConfig:
    """Settings read once at startup and shared read-only afterwards."""

    # CSS URLs injected into every preview document
    component_css: List[str] = field(default_factory=list)
    title: Optional[str] = None
    # Reject components whose stories share a title
    strict_titles: bool = False
    log_level: str = "WARNING"
    highlight_delay_ms: int = DEFAULT_HIGHLIGHT_DELAY_MS

    def with_css(self, url: str) -> "StorybookConfig":
        return replace(self, component_css=[*self.component_css, url])

    def with_title(self, title: str) -> "StorybookConfig":
        return replace(self, title=title)

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "StorybookConfig":
        load_dotenv(dotenv_path)
        css = os.getenv("STORYBOOK_CSS", "")
        return cls(
            component_css=[c.strip() for c in css.split(",") if c.strip()],
            title=os.getenv("STORYBOOK_TITLE") or None,
            strict_titles=os.getenv("STORYBOOK_STRICT_TITLES", "false").lower() == "true",
            log_level=os.getenv("STORYBOOK_LOG_LEVEL", "WARNING").upper(),
            highlight_delay_ms=int(
                os.getenv("STORYBOOK_HIGHLIGHT_DELAY_MS", str(DEFAULT_HIGHLIGHT_DELAY_MS))
            ),
        )

    def to_dict(self) -> dict:
        return {
            "component_css": list(self.component_css),
            "title": self.title,
            "strict_titles": self.strict_titles,
            "log_level": self.log_level,
            "highlight_delay_ms": self.highlight_delay_ms,
        }
