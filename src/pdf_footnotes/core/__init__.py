# SPDX-License-Identifier: Apache-2.0
"""Core layout modules."""

from .errors import InvalidConfigurationError, LayoutError
from .footnote import Footnote, FootnoteRegistry
from .line_wrap import LayoutResult, LineWrapCalculator, WidthMeasurer, compute_width
from .measure import EstimatedMeasurer, PdfiumMeasurer, ReportLabMeasurer, rounded_up

__all__ = [
    "EstimatedMeasurer",
    "Footnote",
    "FootnoteRegistry",
    "InvalidConfigurationError",
    "LayoutError",
    "LayoutResult",
    "LineWrapCalculator",
    "PdfiumMeasurer",
    "ReportLabMeasurer",
    "WidthMeasurer",
    "compute_width",
    "rounded_up",
]
