# SPDX-License-Identifier: Apache-2.0
"""PDF writer for text with numbered footnotes.

Running text and footnote references are drawn as one text box: each element
starts where the previous one ended, and the line wrap calculator receives the
width left on that line. The numbered footnote entries follow the text, with
links from every reference to its entry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path

from reportlab.pdfgen import canvas

from pdf_footnotes.config import LayoutConfig, TextStyle
from pdf_footnotes.core.footnote import (
    Footnote,
    FootnoteRegistry,
    split_title_spans,
    strip_title_markers,
)
from pdf_footnotes.core.line_wrap import LineWrapCalculator, WidthMeasurer
from pdf_footnotes.core.measure import ReportLabMeasurer, register_truetype_font, rounded_up

logger = logging.getLogger(__name__)


@dataclass
class _Element:
    """Inline element of the running text."""

    text: str
    footnote: Footnote | None = None


@dataclass
class _Cursor:
    """Drawing position; y is the baseline of the current line."""

    x: float
    y: float
    line_height: float = 0.0  # Tallest style drawn on the current line


class FootnoteDocumentWriter:
    """Lay out running text with footnote references and render it with reportlab."""

    def __init__(
        self,
        config: LayoutConfig | None = None,
        calculator: LineWrapCalculator | None = None,
    ) -> None:
        """Initialize FootnoteDocumentWriter.

        Args:
            config: Page and style configuration. If None, uses defaults.
            calculator: Line wrap calculator. If None, a new one is created.

        Raises:
            InvalidConfigurationError: If the configuration is unusable.
            FileNotFoundError: If the configured font file does not exist.
        """
        self._config = config or LayoutConfig()
        self._config.validate()
        self._calculator = calculator or LineWrapCalculator()
        self._registry = FootnoteRegistry()
        self._elements: list[_Element] = []

        self._font_override: str | None = None
        if self._config.font_path is not None:
            self._font_override = register_truetype_font(self._config.font_path)

    @property
    def registry(self) -> FootnoteRegistry:
        """Footnotes referenced so far."""
        return self._registry

    def add_text(self, text: str) -> None:
        """Append running text."""
        self._elements.append(_Element(text=text))

    def add_footnote(self, text: str) -> Footnote:
        """Append a footnote reference and register its entry.

        Args:
            text: Entry text. « and » mark an underlined title; #PAGENUM#
                becomes the page the entry is printed on.

        Returns:
            The footnote placed in the running text.
        """
        footnote = Footnote()
        footnote.add_text(text)
        self._registry.check_footnote(footnote)
        self._elements.append(_Element(text="", footnote=footnote))
        return footnote

    def font_name(self, style: TextStyle) -> str:
        """Font used to draw a style."""
        return self._font_override or style.font_name

    def measurer(self, style: TextStyle) -> WidthMeasurer:
        """Width measurer for a style."""
        measure: WidthMeasurer = ReportLabMeasurer(self.font_name(style), style.font_size)
        if self._config.round_up_widths:
            measure = rounded_up(measure)
        return measure

    def render(self) -> bytes:
        """Render all elements and footnote entries.

        Returns:
            bytes: The generated PDF.
        """
        config = self._config
        buffer = BytesIO()
        pdf = canvas.Canvas(buffer, pagesize=(config.page_width, config.page_height))

        line_height = config.line_height(config.body)
        cursor = _Cursor(
            x=config.margin_left,
            y=config.page_height - config.margin_top - line_height,
        )

        for element in self._elements:
            self._draw_element(pdf, cursor, element)

        if len(self._registry):
            self._draw_footnotes(pdf, cursor)
        elif not self._elements:
            # Empty document still gets one blank page
            pdf.showPage()

        page_count = pdf.getPageNumber()
        pdf.save()

        logger.info(
            "Rendered PDF: %d pages, %d elements, %d footnotes",
            page_count,
            len(self._elements),
            len(self._registry),
        )
        return buffer.getvalue()

    def write(self, path: Path | str) -> Path:
        """Render and write the PDF to a file."""
        output_path = Path(path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(self.render())
        logger.info("Wrote %s", output_path)
        return output_path

    def _draw_element(
        self,
        pdf: canvas.Canvas,
        cursor: _Cursor,
        element: _Element,
    ) -> None:
        config = self._config
        cell_width = config.effective_cell_width
        footnote = element.footnote
        style = config.footnotenum if footnote is not None else config.body
        measure = self.measurer(style)
        line_height = config.line_height(style)

        remaining = max(0.0, cell_width - (cursor.x - config.margin_left))
        if footnote is not None:
            footnote.set_wrap_width(remaining, cell_width)
            result = footnote.get_width(measure, calculator=self._calculator)
        else:
            result = self._calculator.compute_width(element.text, remaining, cell_width, measure)

        for index, line in enumerate(result.lines):
            if index > 0:
                self._new_line(pdf, cursor, line_height)
            if not line:
                continue

            # Trailing spaces separate this element from the next one
            width = measure(line)
            pdf.setFont(self.font_name(style), style.font_size)
            pdf.drawString(cursor.x, cursor.y + style.rise, line)
            cursor.line_height = max(cursor.line_height, line_height)
            if footnote is not None and footnote.link:
                top = cursor.y + style.rise + style.font_size
                pdf.linkRect(
                    "",
                    footnote.link,
                    (cursor.x, cursor.y + style.rise, cursor.x + width, top),
                    thickness=0,
                )
            cursor.x += width

    def _draw_footnotes(self, pdf: canvas.Canvas, cursor: _Cursor) -> None:
        config = self._config
        style = config.footnote
        line_height = config.line_height(style)
        cell_width = config.effective_cell_width
        measure = self.measurer(style)

        def marker_free(text: str) -> float:
            return measure(strip_title_markers(text))

        # Separator rule above the entries
        cursor.y -= config.footnote_gap
        self._new_line(pdf, cursor, line_height)
        pdf.setLineWidth(0.5)
        rule_y = cursor.y + line_height
        pdf.line(config.margin_left, rule_y, config.margin_left + cell_width / 3, rule_y)

        for number, footnote in enumerate(self._registry):
            if number > 0:
                self._new_line(pdf, cursor, line_height)
            if footnote.link:
                pdf.bookmarkHorizontal(footnote.link, config.margin_left, cursor.y + line_height)

            text = footnote.body_text(pdf.getPageNumber())
            result = self._calculator.compute_width(text, cell_width, cell_width, marker_free)

            underlined = False
            for index, line in enumerate(result.lines):
                if index > 0:
                    self._new_line(pdf, cursor, line_height)
                spans, underlined = split_title_spans(line, underlined)
                self._draw_spans(pdf, cursor, spans, style, measure)

    def _draw_spans(
        self,
        pdf: canvas.Canvas,
        cursor: _Cursor,
        spans: list[tuple[str, bool]],
        style: TextStyle,
        measure: WidthMeasurer,
    ) -> None:
        pdf.setFont(self.font_name(style), style.font_size)
        x = cursor.x
        for segment, underlined in spans:
            width = measure(segment)
            pdf.drawString(x, cursor.y, segment)
            cursor.line_height = max(cursor.line_height, self._config.line_height(style))
            if underlined:
                pdf.line(x, cursor.y - 1, x + width, cursor.y - 1)
            x += width

    def _new_line(self, pdf: canvas.Canvas, cursor: _Cursor, line_height: float) -> None:
        config = self._config
        cursor.x = config.margin_left
        # The tallest text on the finished line sets the advance
        cursor.y -= max(cursor.line_height, line_height)
        cursor.line_height = 0.0
        if cursor.y < config.margin_bottom:
            pdf.showPage()
            cursor.y = config.page_height - config.margin_top - line_height
