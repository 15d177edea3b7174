# SPDX-License-Identifier: Apache-2.0
"""PDF output modules."""

from .footnote_writer import FootnoteDocumentWriter

__all__ = ["FootnoteDocumentWriter"]
