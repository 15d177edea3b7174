# SPDX-License-Identifier: Apache-2.0
"""Tests for FootnoteDocumentWriter."""

from __future__ import annotations

from io import BytesIO
from pathlib import Path

import pypdfium2 as pdfium  # type: ignore[import-untyped]
import pytest
from reportlab.pdfgen import canvas

from pdf_footnotes.config import LayoutConfig, TextStyle
from pdf_footnotes.core.errors import InvalidConfigurationError
from pdf_footnotes.output.footnote_writer import FootnoteDocumentWriter, _Cursor


def _page_texts(pdf_bytes: bytes) -> list[str]:
    pdf = pdfium.PdfDocument(pdf_bytes)
    try:
        texts = []
        for index in range(len(pdf)):
            textpage = pdf[index].get_textpage()
            texts.append(textpage.get_text_range())
        return texts
    finally:
        pdf.close()


@pytest.fixture
def writer() -> FootnoteDocumentWriter:
    """Create a writer with a 300pt cell."""
    return FootnoteDocumentWriter(LayoutConfig(cell_width=300.0))


class TestFootnoteDocumentWriter:
    """Tests for FootnoteDocumentWriter."""

    def test_render_returns_pdf(self, writer: FootnoteDocumentWriter) -> None:
        """Rendering produces a one-page PDF."""
        writer.add_text("John Smith was born in Leeds.")
        pdf_bytes = writer.render()
        assert pdf_bytes.startswith(b"%PDF")
        assert len(_page_texts(pdf_bytes)) == 1

    def test_empty_document_has_one_page(self, writer: FootnoteDocumentWriter) -> None:
        """A document without content is a single blank page."""
        assert len(_page_texts(writer.render())) == 1

    def test_footnote_entries_rendered(self, writer: FootnoteDocumentWriter) -> None:
        """Footnote entries are printed with their numbers."""
        writer.add_text("John Smith was born in Leeds")
        writer.add_footnote("Parish register, «Baptisms 1850»")
        writer.add_text(" and buried in York")
        writer.add_footnote("Burial index, page #PAGENUM#")
        text = "".join(_page_texts(writer.render()))
        assert "1. Parish register, Baptisms 1850" in text
        assert "2. Burial index, page 1" in text
        assert "born in Leeds" in text

    def test_duplicate_footnotes_share_entry(self, writer: FootnoteDocumentWriter) -> None:
        """Identical footnotes are numbered once."""
        first = writer.add_footnote("Census 1881")
        writer.add_text("and again")
        second = writer.add_footnote("Census 1881")
        assert first.num == second.num == 1
        assert len(writer.registry) == 1

    def test_long_text_breaks_pages(self, writer: FootnoteDocumentWriter) -> None:
        """Text longer than a page continues on new pages."""
        writer.add_text("baptism " * 3000)
        writer.add_footnote("Leeds parish registers")
        texts = _page_texts(writer.render())
        assert len(texts) > 1
        assert "1. Leeds parish registers" in texts[-1]

    def test_elements_carry_remaining_width(self, writer: FootnoteDocumentWriter) -> None:
        """A footnote reference after text continues on the same line."""
        writer.add_text("Born 1850")
        footnote = writer.add_footnote("Parish register")
        writer.render()
        assert footnote.num_text == "1 "

    def test_reference_wraps_at_end_of_line(self) -> None:
        """A reference that does not fit the line moves to the next one."""
        writer = FootnoteDocumentWriter(LayoutConfig(cell_width=60.0))
        writer.add_text("Leeds Leeds")
        footnote = writer.add_footnote("Parish register")
        writer.render()
        assert footnote.num_text == "\n1 "

    def test_write_creates_file(self, writer: FootnoteDocumentWriter, tmp_path: Path) -> None:
        """write() stores the rendered PDF."""
        writer.add_text("Married 1872")
        output = writer.write(tmp_path / "out" / "report.pdf")
        assert output.exists()
        assert output.read_bytes().startswith(b"%PDF")

    def test_round_up_widths(self) -> None:
        """Rounded measurers report whole points."""
        config = LayoutConfig(round_up_widths=True)
        writer = FootnoteDocumentWriter(config)
        measure = writer.measurer(config.body)
        assert measure("Leeds") == int(measure("Leeds"))

    def test_cell_wider_than_page_rejected(self) -> None:
        """A cell that does not fit between the margins is rejected."""
        with pytest.raises(InvalidConfigurationError):
            FootnoteDocumentWriter(LayoutConfig(cell_width=2000.0))

    def test_missing_font_file(self, tmp_path: Path) -> None:
        """A configured font file must exist."""
        with pytest.raises(FileNotFoundError):
            FootnoteDocumentWriter(LayoutConfig(font_path=tmp_path / "missing.ttf"))


class TestLineAdvance:
    """Line advance follows the tallest text on a line."""

    def test_new_line_uses_tallest_height(self) -> None:
        """A taller style drawn on the line sets the advance."""
        config = LayoutConfig(cell_width=300.0)
        writer = FootnoteDocumentWriter(config)
        pdf = canvas.Canvas(BytesIO())
        cursor = _Cursor(x=100.0, y=500.0, line_height=24.0)
        writer._new_line(pdf, cursor, config.line_height(config.body))
        assert cursor.y == pytest.approx(476.0)
        assert cursor.x == config.margin_left
        assert cursor.line_height == 0.0

    def test_large_reference_raises_line_advance(self) -> None:
        """A reference set larger than the body pushes the next line down."""
        config = LayoutConfig(
            cell_width=60.0,
            footnotenum=TextStyle(name="footnotenum", font_size=20.0),
        )
        writer = FootnoteDocumentWriter(config)
        writer.add_text("Leeds")
        writer.add_footnote("Parish register")
        writer.add_text("Leeds Leeds Leeds")

        pdf = canvas.Canvas(BytesIO())
        start_y = 500.0
        cursor = _Cursor(x=config.margin_left, y=start_y)
        for element in writer._elements:
            writer._draw_element(pdf, cursor, element)

        # First break leaves the line holding the 20pt reference, second a body line
        expected = config.line_height(config.footnotenum) + config.line_height(config.body)
        assert cursor.y == pytest.approx(start_y - expected)
