"""
Exception hierarchy for ipheatmap.

Configuration problems are raised before any input is read; parse and
domain failures carry enough context (line number, token, bounds) to be
acted on.
"""

from __future__ import annotations

from typing import Optional


class HeatmapError(Exception):
    """Base exception for all ipheatmap errors."""


class ConfigurationError(HeatmapError, ValueError):
    """Raised when a configured parameter is missing or invalid."""

    def __init__(self, parameter: str, reason: str):
        self.parameter = parameter
        self.reason = reason
        super().__init__(f"Invalid {parameter}: {reason}")


class CurveError(HeatmapError, ValueError):
    """Raised when a curve distance, order or address is out of range."""


class InputParseError(HeatmapError):
    """Raised on a malformed address token; aborts the run."""

    def __init__(self, line_number: int, token: str, reason: Optional[str] = None):
        self.line_number = line_number
        self.token = token
        message = f"Invalid IP address on line {line_number}: {token}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class DomainError(HeatmapError, ValueError):
    """Raised when colour scaling bounds collapse (max <= min)."""

    def __init__(self, min_value: float, max_value: float):
        self.min_value = min_value
        self.max_value = max_value
        super().__init__(
            f"Max value must be greater than min value (min={min_value}, max={max_value})"
        )


class ReportValidationError(HeatmapError):
    """Raised when a render report does not conform to its schema."""
