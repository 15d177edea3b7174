# SPDX-License-Identifier: Apache-2.0
"""Footnote elements of a report.

A footnote has two visible parts:
- The reference number flowed into the running text (``num_text``)
- The numbered entry printed in the footnotes section (``body_text``)

Identical footnotes share one number; the registry assigns numbers in order of
first appearance.
"""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass
from typing import Iterator

from .errors import LayoutError
from .line_wrap import HARD_BREAK, LayoutResult, LineWrapCalculator, WidthMeasurer

logger = logging.getLogger(__name__)

PAGE_NUMBER_PLACEHOLDER = "#PAGENUM#"
TITLE_OPEN = "«"
TITLE_CLOSE = "»"


def split_title_spans(line: str, underlined: bool = False) -> tuple[list[tuple[str, bool]], bool]:
    """Split a line on title markers.

    Args:
        line: Line that may contain « and » markers.
        underlined: Whether the line starts inside a title.

    Returns:
        Tuple of ((segment, underlined) pairs without the markers, underline
        state at the end of the line).
    """
    spans: list[tuple[str, bool]] = []
    segment = ""
    for char in line:
        if char in (TITLE_OPEN, TITLE_CLOSE):
            if segment:
                spans.append((segment, underlined))
                segment = ""
            underlined = char == TITLE_OPEN
        else:
            segment += char
    if segment:
        spans.append((segment, underlined))
    return spans, underlined


def strip_title_markers(text: str) -> str:
    """Remove « and » markers from text."""
    return text.replace(TITLE_OPEN, "").replace(TITLE_CLOSE, "")


@dataclass
class Footnote:
    """A footnote reference and its entry text."""

    text: str = ""
    style_name: str = "footnote"
    num: int | None = None
    num_text: str = ""
    link: str | None = None
    wrap_width_remaining: float = 0.0
    wrap_width_cell: float = 0.0

    def add_text(self, text: str) -> None:
        """Append text to the footnote entry.

        Line break tags become hard breaks and HTML entities are decoded.
        """
        text = text.strip("\r\n\t")
        text = text.replace("<br>", HARD_BREAK).replace("<br/>", HARD_BREAK)
        text = text.replace("&nbsp;", " ")
        self.text += html.unescape(text)

    def set_num(self, num: int) -> None:
        """Assign the footnote number."""
        self.num = num
        self.num_text = f"{num} "

    def set_wrap_width(self, remaining: float, cell: float) -> float:
        """Set the widths used to wrap the reference number.

        A reference that already spans several lines starts on a fresh line.

        Returns:
            The remaining width that will be used.
        """
        self.wrap_width_cell = cell
        if HARD_BREAK in self.num_text:
            self.wrap_width_remaining = cell
        else:
            self.wrap_width_remaining = remaining
        return self.wrap_width_remaining

    def body_text(self, page_number: int) -> str:
        """Entry text with its number prefix and the page number resolved."""
        if self.num is None:
            raise LayoutError("Footnote has no number", stage="footnote")
        text = self.text.replace(PAGE_NUMBER_PLACEHOLDER, str(page_number))
        return f"{self.num}. {text}"

    def get_width(
        self,
        measure: WidthMeasurer,
        registry: FootnoteRegistry | None = None,
        calculator: LineWrapCalculator | None = None,
    ) -> LayoutResult:
        """Wrap the reference number into the current text box.

        The footnote is numbered through the registry first if needed. The
        wrapped reference replaces ``num_text``.

        Args:
            measure: Measurer for the footnote number style.
            registry: Registry used to number the footnote.
            calculator: Line wrap calculator (shared default if None).

        Returns:
            Layout of the reference number.

        Raises:
            LayoutError: If the footnote has no number and no registry is given.
            InvalidConfigurationError: If the wrap widths are unusable.
        """
        if self.num is None and registry is not None:
            registry.check_footnote(self)
        if self.num is None:
            raise LayoutError("Footnote has no number", stage="footnote")

        calculator = calculator or LineWrapCalculator()
        result = calculator.compute_width(
            self.num_text,
            self.wrap_width_remaining,
            self.wrap_width_cell,
            measure,
        )
        self.num_text = result.text
        return result


class FootnoteRegistry:
    """Numbered footnotes of one document."""

    def __init__(self) -> None:
        self._footnotes: list[Footnote] = []

    def check_footnote(self, footnote: Footnote) -> Footnote:
        """Number a footnote, reusing the number of an identical one.

        Args:
            footnote: Footnote to number.

        Returns:
            The registered footnote carrying the entry (the existing one for
            a duplicate, otherwise ``footnote`` itself).
        """
        for existing in self._footnotes:
            if existing.text == footnote.text and existing.num is not None:
                footnote.set_num(existing.num)
                footnote.link = existing.link
                logger.debug("Footnote reuses number %d", existing.num)
                return existing

        num = len(self._footnotes) + 1
        footnote.set_num(num)
        footnote.link = f"footnote-{num}"
        self._footnotes.append(footnote)
        return footnote

    def __iter__(self) -> Iterator[Footnote]:
        return iter(self._footnotes)

    def __len__(self) -> int:
        return len(self._footnotes)
