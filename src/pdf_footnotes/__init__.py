# SPDX-License-Identifier: Apache-2.0
"""Fixed-width text and footnote layout for PDF reports."""

from pdf_footnotes.config import LayoutConfig, TextStyle
from pdf_footnotes.core import (
    Footnote,
    FootnoteRegistry,
    InvalidConfigurationError,
    LayoutError,
    LayoutResult,
    LineWrapCalculator,
    compute_width,
)

__version__ = "0.1.0"

__all__ = [
    "Footnote",
    "FootnoteRegistry",
    "InvalidConfigurationError",
    "LayoutConfig",
    "LayoutError",
    "LayoutResult",
    "LineWrapCalculator",
    "TextStyle",
    "compute_width",
]
