# SPDX-License-Identifier: Apache-2.0
"""Layout configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from reportlab.lib.pagesizes import A4

from pdf_footnotes.core.errors import InvalidConfigurationError

FONT_PATH_ENV = "PDF_FOOTNOTES_FONT_PATH"


@dataclass
class TextStyle:
    """Font settings for one kind of text."""

    name: str
    font_name: str = "Helvetica"
    font_size: float = 10.0
    rise: float = 0.0  # Baseline offset in points (superscript > 0)


def _default_body() -> TextStyle:
    return TextStyle(name="body", font_size=10.0)


def _default_footnotenum() -> TextStyle:
    return TextStyle(name="footnotenum", font_size=6.5, rise=3.5)


def _default_footnote() -> TextStyle:
    return TextStyle(name="footnote", font_size=8.0)


@dataclass
class LayoutConfig:
    """Page and text box configuration for the footnote writer."""

    page_width: float = A4[0]
    page_height: float = A4[1]
    margin_left: float = 56.0
    margin_right: float = 56.0
    margin_top: float = 56.0
    margin_bottom: float = 56.0

    # Width of a wrapped line; None uses the full width between margins
    cell_width: float | None = None
    line_height_factor: float = 1.2
    footnote_gap: float = 12.0  # Space above the footnotes section

    body: TextStyle = field(default_factory=_default_body)
    footnotenum: TextStyle = field(default_factory=_default_footnotenum)
    footnote: TextStyle = field(default_factory=_default_footnote)

    # TrueType font registered with reportlab and used for every style
    font_path: Path | None = None
    # Ceil every measured width to a whole point
    round_up_widths: bool = False

    @classmethod
    def from_env(cls, **overrides: object) -> LayoutConfig:
        """Create a config, taking the font path from the environment if unset."""
        config = cls(**overrides)  # type: ignore[arg-type]
        if config.font_path is None:
            env_path = os.environ.get(FONT_PATH_ENV, "")
            if env_path:
                config.font_path = Path(env_path)
        return config

    @property
    def content_width(self) -> float:
        """Width between the left and right margins."""
        return self.page_width - self.margin_left - self.margin_right

    @property
    def effective_cell_width(self) -> float:
        """Cell width used for wrapping."""
        if self.cell_width is None:
            return self.content_width
        return self.cell_width

    def style(self, name: str) -> TextStyle:
        """Look up a style by name.

        Raises:
            KeyError: If the style is unknown.
        """
        styles = {s.name: s for s in (self.body, self.footnotenum, self.footnote)}
        return styles[name]

    def line_height(self, style: TextStyle) -> float:
        """Line advance for a style in points."""
        return style.font_size * self.line_height_factor

    def validate(self) -> None:
        """Check that the page can hold a text cell.

        Raises:
            InvalidConfigurationError: If any dimension is unusable.
        """
        if self.content_width <= 0:
            raise InvalidConfigurationError(
                "Margins leave no room for content "
                f"(page width {self.page_width}, content width {self.content_width})",
                stage="config",
            )
        if self.effective_cell_width <= 0:
            raise InvalidConfigurationError(
                f"Cell width must be positive, got {self.effective_cell_width}",
                stage="config",
            )
        if self.effective_cell_width > self.content_width:
            raise InvalidConfigurationError(
                f"Cell width {self.effective_cell_width} exceeds content width "
                f"{self.content_width}",
                stage="config",
            )
        if self.page_height - self.margin_top - self.margin_bottom <= 0:
            raise InvalidConfigurationError(
                "Margins leave no vertical room for content",
                stage="config",
            )
        for style in (self.body, self.footnotenum, self.footnote):
            if style.font_size <= 0:
                raise InvalidConfigurationError(
                    f"Font size of style '{style.name}' must be positive",
                    stage="config",
                )
        if self.line_height_factor <= 0:
            raise InvalidConfigurationError(
                f"Line height factor must be positive, got {self.line_height_factor}",
                stage="config",
            )
