# SPDX-License-Identifier: Apache-2.0
"""Tests for footnotes and the footnote registry."""

from __future__ import annotations

import pytest

from pdf_footnotes.core.errors import LayoutError
from pdf_footnotes.core.footnote import (
    Footnote,
    FootnoteRegistry,
    split_title_spans,
    strip_title_markers,
)


def three_points(text: str) -> float:
    return 3.0 * len(text)


class TestFootnote:
    """Tests for Footnote."""

    def test_add_text_converts_markup(self) -> None:
        """Break tags and entities become plain text."""
        footnote = Footnote()
        footnote.add_text("\tParish register<br>St&nbsp;Mary &amp; St John\n")
        assert footnote.text == "Parish register\nSt Mary & St John"

    def test_add_text_appends(self) -> None:
        """Text from several calls is concatenated."""
        footnote = Footnote()
        footnote.add_text("Census ")
        footnote.add_text("1881")
        assert footnote.text == "Census 1881"

    def test_set_num(self) -> None:
        """The reference text is the number followed by a space."""
        footnote = Footnote(text="Census 1881")
        footnote.set_num(4)
        assert footnote.num == 4
        assert footnote.num_text == "4 "

    def test_body_text_resolves_page_number(self) -> None:
        """#PAGENUM# is replaced and the number prefixed."""
        footnote = Footnote(text="See page #PAGENUM#")
        footnote.set_num(2)
        assert footnote.body_text(7) == "2. See page 7"

    def test_body_text_requires_number(self) -> None:
        """An unnumbered footnote has no entry text."""
        with pytest.raises(LayoutError):
            Footnote(text="Census 1881").body_text(1)

    def test_set_wrap_width(self) -> None:
        """The remaining width is used on a single-line reference."""
        footnote = Footnote(text="Census 1881")
        footnote.set_num(1)
        assert footnote.set_wrap_width(12, 30) == 12
        assert footnote.wrap_width_cell == 30

    def test_set_wrap_width_multiline_reference(self) -> None:
        """A reference already spanning lines starts with the full cell."""
        footnote = Footnote(text="Census 1881", num_text="\n1 ")
        assert footnote.set_wrap_width(12, 30) == 30

    def test_get_width_fits(self) -> None:
        """A reference that fits stays on the current line."""
        footnote = Footnote(text="Census 1881")
        footnote.set_num(12)
        footnote.set_wrap_width(30, 30)
        result = footnote.get_width(three_points)
        assert result.line_feed_count == 0
        assert result.final_line_width == 9.0
        assert footnote.num_text == "12 "

    def test_get_width_wraps_to_next_line(self) -> None:
        """A reference that does not fit moves to the next line."""
        footnote = Footnote(text="Census 1881")
        footnote.set_num(12)
        footnote.set_wrap_width(3, 30)
        result = footnote.get_width(three_points)
        assert result.line_feed_count == 1
        assert result.final_line_width == 9.0
        assert footnote.num_text == "\n12 "

    def test_get_width_numbers_through_registry(self) -> None:
        """An unnumbered footnote is numbered by the registry."""
        registry = FootnoteRegistry()
        footnote = Footnote(text="Census 1881")
        footnote.set_wrap_width(30, 30)
        footnote.get_width(three_points, registry=registry)
        assert footnote.num == 1
        assert len(registry) == 1

    def test_get_width_without_number(self) -> None:
        """Without a number or registry the reference cannot be laid out."""
        footnote = Footnote(text="Census 1881")
        footnote.set_wrap_width(30, 30)
        with pytest.raises(LayoutError) as exc_info:
            footnote.get_width(three_points)
        assert exc_info.value.stage == "footnote"


class TestFootnoteRegistry:
    """Tests for FootnoteRegistry."""

    def test_numbers_in_order(self) -> None:
        """Footnotes are numbered by first appearance."""
        registry = FootnoteRegistry()
        first = Footnote(text="Baptism")
        second = Footnote(text="Burial")
        registry.check_footnote(first)
        registry.check_footnote(second)
        assert [f.num for f in registry] == [1, 2]
        assert second.link == "footnote-2"

    def test_duplicate_reuses_number(self) -> None:
        """An identical footnote shares the existing number and link."""
        registry = FootnoteRegistry()
        original = Footnote(text="Baptism")
        registry.check_footnote(original)
        registry.check_footnote(Footnote(text="Burial"))
        duplicate = Footnote(text="Baptism")
        entry = registry.check_footnote(duplicate)
        assert entry is original
        assert duplicate.num == 1
        assert duplicate.link == original.link
        assert len(registry) == 2

    def test_new_footnote_is_its_own_entry(self) -> None:
        """A new footnote is returned as the registered entry."""
        registry = FootnoteRegistry()
        footnote = Footnote(text="Baptism")
        assert registry.check_footnote(footnote) is footnote


class TestTitleSpans:
    """Tests for title marker helpers."""

    def test_split_title_spans(self) -> None:
        """The title segment is underlined."""
        spans, underlined = split_title_spans("1. «Leeds Parish», p. 4")
        assert spans == [("1. ", False), ("Leeds Parish", True), (", p. 4", False)]
        assert underlined is False

    def test_title_across_lines(self) -> None:
        """Underline state carries over to the next line."""
        spans, underlined = split_title_spans("1. «Leeds ")
        assert spans == [("1. ", False), ("Leeds ", True)]
        assert underlined is True
        spans, underlined = split_title_spans("Parish», p. 4", underlined)
        assert spans == [("Parish", True), (", p. 4", False)]
        assert underlined is False

    def test_strip_title_markers(self) -> None:
        """Markers are removed from measured text."""
        assert strip_title_markers("«Leeds Parish»") == "Leeds Parish"
