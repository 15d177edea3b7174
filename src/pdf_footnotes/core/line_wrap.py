# SPDX-License-Identifier: Apache-2.0
"""Greedy line wrapping for fixed-width PDF cells.

This module computes how text flows into a cell whose first line may already
be partly occupied by earlier content:
- The remaining width of the current line only applies to the first logical line
- Every following line (wrapped or after a hard break) gets the full cell width
- Words are never split; a word wider than the cell sits alone on its line

Widths come from a caller-supplied measurer, so the calculator performs no
text shaping. Wrapping happens at single spaces only, which is exact for
whitespace-segmented scripts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from .errors import InvalidConfigurationError

HARD_BREAK = "\n"
WORD_SEPARATOR = " "

WidthMeasurer = Callable[[str], float]


@dataclass(frozen=True)
class LayoutResult:
    """Result of wrapping one text block."""

    final_line_width: float
    line_feed_count: int
    text: str

    @property
    def line_count(self) -> int:
        """Number of visual lines the text occupies."""
        if not self.text:
            return 0
        return self.line_feed_count + 1

    @property
    def lines(self) -> list[str]:
        """Output lines in drawing order."""
        if not self.text:
            return []
        return self.text.split(HARD_BREAK)


class LineWrapCalculator:
    """Wrap text into a cell, carrying the remaining width of the current line."""

    def compute_width(
        self,
        text: str,
        remaining_width: float,
        cell_width: float,
        measure: WidthMeasurer,
    ) -> LayoutResult:
        """Split text into lines that fit a cell and measure the last line.

        Args:
            text: Text to lay out. May contain hard breaks.
            remaining_width: Width left on the current line before the text starts.
            cell_width: Full width of a line once a break occurs.
            measure: Returns the rendered width of a string in points.

        Returns:
            LayoutResult with the rewritten text, its break count and the
            width of the final line.

        Raises:
            InvalidConfigurationError: If cell_width is not positive or
                remaining_width is negative.
        """
        self._validate(remaining_width, cell_width)

        if not text:
            return LayoutResult(final_line_width=0.0, line_feed_count=0, text="")

        # Fits on the current line as is
        if HARD_BREAK not in text:
            width = float(measure(text))
            if width < remaining_width:
                return LayoutResult(final_line_width=width, line_feed_count=0, text=text)

        output_lines: list[str] = []
        last_width = 0.0
        budget = remaining_width
        for logical_line in text.split(HARD_BREAK):
            wrapped, last_width = self._wrap_line(logical_line, budget, cell_width, measure)
            output_lines.extend(wrapped)
            budget = cell_width

        new_text = HARD_BREAK.join(output_lines)
        return LayoutResult(
            final_line_width=last_width,
            line_feed_count=new_text.count(HARD_BREAK),
            text=new_text,
        )

    def _wrap_line(
        self,
        line: str,
        budget: float,
        cell_width: float,
        measure: WidthMeasurer,
    ) -> tuple[list[str], float]:
        """Wrap a single logical line.

        Args:
            line: Line without hard breaks.
            budget: Width available for the first output line.
            cell_width: Width available for every following output line.
            measure: Width measurer.

        Returns:
            Tuple of (output lines, width of the last output line).
        """
        width = float(measure(line))
        if width < budget:
            return [line], width

        lines: list[str] = []
        current: list[str] = []

        for word in line.split(WORD_SEPARATOR):
            candidate = WORD_SEPARATOR.join([*current, word])
            # Empty words come from repeated separators and never force a break
            if self._fit_width(candidate, measure) <= budget or not word:
                current.append(word)
                continue

            # A fresh cell keeps its first word even when it overflows
            if current or budget < cell_width:
                closed = WORD_SEPARATOR.join(current)
                if current:
                    closed += WORD_SEPARATOR
                lines.append(closed)
                budget = cell_width
                current = [word]
            else:
                current.append(word)

        last_line = WORD_SEPARATOR.join(current)
        lines.append(last_line)
        return lines, float(measure(last_line))

    @staticmethod
    def _fit_width(line: str, measure: WidthMeasurer) -> float:
        # Trailing separators do not count against the budget
        return float(measure(line.rstrip(WORD_SEPARATOR)))

    @staticmethod
    def _validate(remaining_width: float, cell_width: float) -> None:
        if cell_width <= 0:
            raise InvalidConfigurationError(
                f"Cell width must be positive, got {cell_width}",
                stage="line_wrap",
            )
        if remaining_width < 0:
            raise InvalidConfigurationError(
                f"Remaining width must not be negative, got {remaining_width}",
                stage="line_wrap",
            )


_default_calculator = LineWrapCalculator()


def compute_width(
    text: str,
    remaining_width: float,
    cell_width: float,
    measure: WidthMeasurer,
) -> LayoutResult:
    """Wrap text with a shared LineWrapCalculator.

    See LineWrapCalculator.compute_width for arguments.
    """
    return _default_calculator.compute_width(text, remaining_width, cell_width, measure)
