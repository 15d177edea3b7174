# SPDX-License-Identifier: Apache-2.0
"""Width measurers for line wrapping.

A measurer maps a string to its rendered width in points for one font and
size. Three sources are provided:
- reportlab font metrics (standard fonts and registered TrueType fonts)
- PDFium glyph widths via FPDFFont_GetGlyphWidth
- A metric-free estimate for quick layout previews
"""

from __future__ import annotations

import ctypes
import math
from pathlib import Path

import pypdfium2 as pdfium  # type: ignore[import-untyped]
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

from .errors import InvalidConfigurationError
from .line_wrap import WidthMeasurer


def _is_cjk_char(char: str) -> bool:
    """Check if a character is CJK (Chinese, Japanese, Korean)."""
    code = ord(char)
    return (
        0x4E00 <= code <= 0x9FFF  # CJK Unified Ideographs
        or 0x3040 <= code <= 0x309F  # Hiragana
        or 0x30A0 <= code <= 0x30FF  # Katakana
        or 0x3400 <= code <= 0x4DBF  # CJK Extension A
        or 0xAC00 <= code <= 0xD7AF  # Hangul Syllables
        or 0x3000 <= code <= 0x303F  # CJK Punctuation
        or 0xFF00 <= code <= 0xFFEF  # Fullwidth Forms
    )


def _check_font_size(font_size: float) -> float:
    if font_size <= 0:
        raise InvalidConfigurationError(
            f"Font size must be positive, got {font_size}",
            stage="measure",
        )
    return float(font_size)


def register_truetype_font(font_path: Path | str, font_name: str | None = None) -> str:
    """Register a TrueType font with reportlab.

    Args:
        font_path: Path to a .ttf file.
        font_name: Name to register under. Defaults to the file stem.

    Returns:
        The registered font name, usable with ReportLabMeasurer and the canvas.

    Raises:
        FileNotFoundError: If the font file does not exist.
    """
    path = Path(font_path)
    if not path.exists():
        raise FileNotFoundError(f"Font file not found: {path}")

    name = font_name or path.stem
    if name not in pdfmetrics.getRegisteredFontNames():
        pdfmetrics.registerFont(TTFont(name, str(path)))
    return name


class ReportLabMeasurer:
    """Measure text with reportlab font metrics."""

    def __init__(self, font_name: str = "Helvetica", font_size: float = 10.0) -> None:
        """Initialize ReportLabMeasurer.

        Args:
            font_name: Standard PDF font or a font registered with reportlab.
            font_size: Font size in points.
        """
        self.font_name = font_name
        self.font_size = _check_font_size(font_size)

    def __call__(self, text: str) -> float:
        if not text:
            return 0.0
        return float(pdfmetrics.stringWidth(text, self.font_name, self.font_size))


class PdfiumMeasurer:
    """Measure text with PDFium glyph widths.

    The font handle must stay valid for the lifetime of the measurer, i.e. the
    PdfDocument it was loaded into must not be closed.
    """

    def __init__(self, font_handle: ctypes.c_void_p, font_size: float = 10.0) -> None:
        self._font_handle = font_handle
        self.font_size = _check_font_size(font_size)

    @classmethod
    def standard_font(
        cls,
        pdf: pdfium.PdfDocument,
        font_name: str = "Helvetica",
        font_size: float = 10.0,
    ) -> PdfiumMeasurer:
        """Create a measurer for one of the 14 standard PDF fonts.

        Args:
            pdf: Document the font is loaded into.
            font_name: Standard font name (e.g., "Helvetica", "Times-Roman").
            font_size: Font size in points.

        Raises:
            InvalidConfigurationError: If PDFium cannot load the font.
        """
        font_handle = pdfium.raw.FPDFText_LoadStandardFont(
            pdf.raw, font_name.encode("utf-8")
        )
        if not font_handle:
            raise InvalidConfigurationError(
                f"Unknown standard font: {font_name}",
                stage="measure",
            )
        return cls(font_handle, font_size)

    def __call__(self, text: str) -> float:
        if not text:
            return 0.0

        total_width = 0.0
        width_out = ctypes.c_float()

        for char in text:
            result = pdfium.raw.FPDFFont_GetGlyphWidth(
                self._font_handle,
                ord(char),
                ctypes.c_float(self.font_size),
                ctypes.byref(width_out),
            )
            if result:
                total_width += width_out.value

        return total_width


class EstimatedMeasurer:
    """Estimate text width without font metrics."""

    def __init__(
        self,
        font_size: float = 10.0,
        latin_ratio: float = 0.55,
        cjk_ratio: float = 0.9,
    ) -> None:
        """Initialize EstimatedMeasurer.

        Args:
            font_size: Font size in points.
            latin_ratio: Width of a non-CJK character relative to font size.
            cjk_ratio: Width of a CJK character relative to font size.
        """
        self.font_size = _check_font_size(font_size)
        self._latin_ratio = latin_ratio
        self._cjk_ratio = cjk_ratio

    def __call__(self, text: str) -> float:
        width = 0.0
        for char in text:
            ratio = self._cjk_ratio if _is_cjk_char(char) else self._latin_ratio
            width += self.font_size * ratio
        return width


def rounded_up(measure: WidthMeasurer) -> WidthMeasurer:
    """Wrap a measurer so every width is rounded up to a whole point."""

    def _measure(text: str) -> float:
        return float(math.ceil(measure(text)))

    return _measure
