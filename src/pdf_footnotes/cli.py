# SPDX-License-Identifier: Apache-2.0
"""
PDF Footnotes - CLI Tool

Wraps text into a fixed-width cell the way the PDF report writer does, and
optionally renders it with numbered footnotes.

Usage:
    wrap-footnotes <input.txt> [options]

Examples:
    wrap-footnotes notes.txt                          # Wrap into a 300pt cell
    wrap-footnotes notes.txt -w 200 -r 80             # Start 120pt into the line
    wrap-footnotes notes.txt --measure estimate       # No font metrics
    wrap-footnotes notes.txt --pdf ./output/notes.pdf # Render with footnotes
    cat notes.txt | wrap-footnotes -
"""

from __future__ import annotations

import argparse
import logging
import re
import sys
from pathlib import Path
from typing import NoReturn

from pdf_footnotes.config import LayoutConfig, TextStyle
from pdf_footnotes.core.errors import InvalidConfigurationError
from pdf_footnotes.core.line_wrap import WidthMeasurer, compute_width
from pdf_footnotes.core.measure import EstimatedMeasurer, ReportLabMeasurer, rounded_up
from pdf_footnotes.output.footnote_writer import FootnoteDocumentWriter

logger = logging.getLogger(__name__)

DEFAULT_CELL_WIDTH = 300.0

# Inline footnote syntax: "text[^footnote text] more text"
FOOTNOTE_MARKER = re.compile(r"\[\^(.+?)\]", re.DOTALL)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed argument Namespace.
    """
    parser = argparse.ArgumentParser(
        prog="wrap-footnotes",
        description="Wrap text into a fixed-width PDF cell",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s notes.txt                       # Reportlab metrics, 300pt cell
  %(prog)s notes.txt -w 200 -r 80          # 80pt left on the current line
  %(prog)s notes.txt --font Times-Roman -s 12
  %(prog)s notes.txt --pdf out.pdf         # [^text] markers become footnotes

Environment Variables:
  PDF_FOOTNOTES_FONT_PATH  TrueType font used for PDF output
""",
    )

    parser.add_argument(
        "input",
        help="Path to a text file, or - to read stdin",
    )

    layout_group = parser.add_argument_group("Layout options")
    layout_group.add_argument(
        "-w",
        "--cell-width",
        type=float,
        default=DEFAULT_CELL_WIDTH,
        help=f"Cell width in points (default: {DEFAULT_CELL_WIDTH:g})",
    )
    layout_group.add_argument(
        "-r",
        "--remaining-width",
        type=float,
        help="Width left on the current line (default: cell width)",
    )

    font_group = parser.add_argument_group("Font options")
    font_group.add_argument(
        "-f",
        "--font",
        default="Helvetica",
        help="Standard PDF font name (default: Helvetica)",
    )
    font_group.add_argument(
        "-s",
        "--font-size",
        type=float,
        default=10.0,
        help="Font size in points (default: 10)",
    )
    font_group.add_argument(
        "--measure",
        default="reportlab",
        choices=["reportlab", "estimate"],
        help="Width measurement (default: reportlab)",
    )
    font_group.add_argument(
        "--round-up",
        action="store_true",
        help="Round every measured width up to a whole point",
    )

    parser.add_argument(
        "--pdf",
        type=Path,
        help="Render the text with footnotes to this PDF file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    return parser.parse_args(argv)


def create_measurer(args: argparse.Namespace) -> WidthMeasurer:
    """Create the width measurer selected on the command line.

    Raises:
        InvalidConfigurationError: If the font size is not positive.
    """
    measure: WidthMeasurer
    if args.measure == "estimate":
        measure = EstimatedMeasurer(font_size=args.font_size)
    else:
        measure = ReportLabMeasurer(font_name=args.font, font_size=args.font_size)
    if args.round_up:
        measure = rounded_up(measure)
    return measure


def read_input(source: str) -> str | None:
    """Read input text from a file or stdin.

    Returns:
        The text, or None if the file does not exist.
    """
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.is_file():
        return None
    return path.read_text(encoding="utf-8")


def split_footnote_markers(text: str) -> list[tuple[str, bool]]:
    """Split text into (chunk, is_footnote) pairs at [^...] markers."""
    parts: list[tuple[str, bool]] = []
    position = 0
    for match in FOOTNOTE_MARKER.finditer(text):
        if match.start() > position:
            parts.append((text[position : match.start()], False))
        parts.append((match.group(1), True))
        position = match.end()
    if position < len(text):
        parts.append((text[position:], False))
    return parts


def render_pdf(text: str, args: argparse.Namespace) -> Path:
    """Render text with footnotes to the --pdf path.

    Raises:
        InvalidConfigurationError: If the layout cannot hold the cell.
    """
    config = LayoutConfig.from_env(
        cell_width=args.cell_width,
        round_up_widths=args.round_up,
        body=TextStyle(name="body", font_name=args.font, font_size=args.font_size),
    )
    writer = FootnoteDocumentWriter(config)
    for chunk, is_footnote in split_footnote_markers(text):
        if is_footnote:
            writer.add_footnote(chunk)
        else:
            writer.add_text(chunk)
    return writer.write(args.pdf)


def run(args: argparse.Namespace) -> int:
    """Wrap the input text and print the result.

    Args:
        args: Command line arguments.

    Returns:
        Exit code (0: success, 1: failure).
    """
    text = read_input(args.input)
    if text is None:
        print(f"Error: File not found: {args.input}", file=sys.stderr)
        return 1
    text = text.rstrip("\n")

    remaining = args.remaining_width
    if remaining is None:
        remaining = args.cell_width

    try:
        measure = create_measurer(args)
        result = compute_width(text, remaining, args.cell_width, measure)
    except InvalidConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logger.debug("Wrapped %d characters into %d lines", len(text), result.line_count)

    print(result.text)
    print()
    print(f"lines={result.line_count}")
    print(f"breaks={result.line_feed_count}")
    print(f"last_width={result.final_line_width:.2f}")

    if args.pdf:
        try:
            pdf_path = render_pdf(text, args)
        except (InvalidConfigurationError, FileNotFoundError) as e:
            print(f"Error: PDF rendering failed: {e}", file=sys.stderr)
            return 1
        print(f"pdf={pdf_path}")

    return 0


def main() -> NoReturn:
    """Main entry point."""
    args = parse_args()

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=log_level, format="%(levelname)s: %(message)s")

    sys.exit(run(args))


if __name__ == "__main__":
    main()
