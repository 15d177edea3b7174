# SPDX-License-Identifier: Apache-2.0
"""Layout error definitions."""

from __future__ import annotations


class LayoutError(Exception):
    """Base exception for layout errors."""

    def __init__(
        self,
        message: str,
        stage: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.stage = stage
        self.cause = cause


class InvalidConfigurationError(LayoutError):
    """Layout parameters that cannot be laid out (e.g. a zero-width cell)."""
