"""
Value modes.

Each mode fixes, once per session, the fill value of an empty buffer and
how a raw input weight becomes the value written to a cell.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np

from .errors import ConfigurationError

# Categorical cells below zero are treated as never painted.
CATEGORICAL_SENTINEL = -1


class ValueMode(Enum):
    CATEGORICAL = "categorical"
    RAW = "raw"
    SCALED = "scaled"

    @classmethod
    def parse(cls, name) -> "ValueMode":
        if isinstance(name, cls):
            return name
        key = str(name).strip().lower()
        for member in cls:
            if member.value == key:
                return member
        raise ConfigurationError(
            "value mode", f"{name!r}. Use 'categorical', 'raw', or 'scaled'"
        )

    def __str__(self) -> str:
        return self.value

    @property
    def policy(self) -> "ModePolicy":
        return _POLICIES[self]


@dataclass(frozen=True)
class ModePolicy:
    mode: ValueMode
    fill: int
    continuous: bool

    def address_weight(self, value: int, ips_per_pixel: int) -> int:
        return value

    def range_weights(self, value: int, overlaps: np.ndarray, ips_per_pixel: int) -> np.ndarray:
        return np.full(overlaps.shape, value, dtype=np.int64)


class ScaledPolicy(ModePolicy):
    """
    Normalises weights by pixel density.

    Truncation toward zero is deliberate: at fine granularity a small weight
    legitimately contributes nothing.
    """

    def address_weight(self, value: int, ips_per_pixel: int) -> int:
        return int(value / ips_per_pixel)

    def range_weights(self, value: int, overlaps: np.ndarray, ips_per_pixel: int) -> np.ndarray:
        weights = float(value) * overlaps.astype(float) / float(ips_per_pixel)
        return np.trunc(weights).astype(np.int64)


_POLICIES = {
    ValueMode.CATEGORICAL: ModePolicy(ValueMode.CATEGORICAL, fill=CATEGORICAL_SENTINEL, continuous=False),
    ValueMode.RAW: ModePolicy(ValueMode.RAW, fill=0, continuous=True),
    ValueMode.SCALED: ScaledPolicy(ValueMode.SCALED, fill=0, continuous=True),
}
