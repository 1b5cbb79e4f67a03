"""
Colour scaling domains.

A domain maps an accumulated cell value onto [0, 1]; values at or below the
minimum carry no colour at all.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Optional

import numpy as np

from .errors import ConfigurationError, DomainError


class DomainType(Enum):
    LINEAR = "linear"
    LOGARITHMIC = "logarithmic"

    @classmethod
    def parse(cls, name) -> "DomainType":
        if isinstance(name, cls):
            return name
        key = str(name).strip().lower()
        if key == "log":
            return cls.LOGARITHMIC
        for member in cls:
            if member.value == key:
                return member
        raise ConfigurationError(
            "curve", f"{name!r}. Use 'linear' or 'logarithmic'"
        )

    def __str__(self) -> str:
        return self.value


class ScaleDomain:
    """(kind, min, max) mapping from cell values to normalised intensity."""

    def __init__(self, domain_type: DomainType, min_value: float, max_value: float):
        if max_value <= min_value:
            raise DomainError(min_value, max_value)
        self.domain_type = domain_type
        self.min_value = float(min_value)
        self.max_value = float(max_value)

    def __repr__(self) -> str:
        return (
            f"ScaleDomain({self.domain_type}, min={self.min_value}, "
            f"max={self.max_value})"
        )

    def scale(self, value: float) -> Optional[float]:
        if self.domain_type is DomainType.LOGARITHMIC:
            return self.scale_logarithmic(value)
        return self.scale_linear(value)

    def scale_linear(self, value: float) -> Optional[float]:
        if value <= self.min_value:
            return None
        if value >= self.max_value:
            return 1.0
        return (value - self.min_value) / (self.max_value - self.min_value)

    def scale_logarithmic(self, value: float) -> Optional[float]:
        """
        log1p-style scaling: ln(offset + 1) / ln(range + 1).

        The minimum need not be positive, and values just above it map near
        zero rather than to negative infinity.
        """
        if value <= self.min_value:
            return None
        if value >= self.max_value:
            return 1.0
        offset = value - self.min_value
        span = self.max_value - self.min_value
        return math.log1p(offset) / math.log1p(span)

    def scale_array(self, values) -> np.ndarray:
        """
        Vectorised scale(); no-value cells come back as NaN.
        """
        values = np.asarray(values, dtype=float)
        span = self.max_value - self.min_value
        offset = np.clip(values - self.min_value, 0.0, span)
        if self.domain_type is DomainType.LOGARITHMIC:
            scaled = np.log1p(offset) / math.log1p(span)
        else:
            scaled = offset / span
        scaled = np.where(values >= self.max_value, 1.0, scaled)
        return np.where(values <= self.min_value, np.nan, scaled)
