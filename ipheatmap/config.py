"""
Session configuration.

Everything is validated when the config is built, before any input is read.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Optional

from .colour import get_gradient
from .errors import ConfigurationError
from .ingest import check_separator
from .modes import ValueMode
from .projection import ADDRESS_BITS, image_size_for_bpp
from .scale import DomainType

# Finer granularity would allocate buffers far beyond what fits in memory.
MIN_BITS_PER_PIXEL = 8
MAX_BITS_PER_PIXEL = 24
DEFAULT_BITS_PER_PIXEL = 8


@dataclass(frozen=True)
class HeatmapConfig:
    bits_per_pixel: int = DEFAULT_BITS_PER_PIXEL
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    domain: DomainType = DomainType.LINEAR
    accumulate: bool = False
    value_mode: ValueMode = ValueMode.SCALED
    colour_scale: str = "magma"
    separator: Optional[str] = None

    def __post_init__(self):
        bpp = self.bits_per_pixel
        if bpp < MIN_BITS_PER_PIXEL:
            raise ConfigurationError(
                "bits_per_pixel",
                f"must be at least {MIN_BITS_PER_PIXEL} (got {bpp}). "
                "Each pixel represents 2^bits_per_pixel IPs.",
            )
        if bpp > MAX_BITS_PER_PIXEL:
            raise ConfigurationError(
                "bits_per_pixel", f"cannot exceed {MAX_BITS_PER_PIXEL} (got {bpp})"
            )
        if bpp % 2 != 0:
            raise ConfigurationError("bits_per_pixel", f"must be even (got {bpp})")

        if (
            self.min_value is not None
            and self.max_value is not None
            and self.max_value <= self.min_value
        ):
            raise ConfigurationError(
                "min/max value",
                f"max value must be greater than min value "
                f"(min={self.min_value}, max={self.max_value})",
            )

        # frozen: normalise names through object.__setattr__
        object.__setattr__(self, "domain", DomainType.parse(self.domain))
        object.__setattr__(self, "value_mode", ValueMode.parse(self.value_mode))
        object.__setattr__(self, "colour_scale", get_gradient(self.colour_scale).name)
        check_separator(self.separator)

    @property
    def image_size(self) -> int:
        return image_size_for_bpp(self.bits_per_pixel, ADDRESS_BITS)

    def to_dict(self) -> dict:
        return {
            "bits_per_pixel": self.bits_per_pixel,
            "min_value": self.min_value,
            "max_value": self.max_value,
            "curve": str(self.domain),
            "accumulate": self.accumulate,
            "value_mode": str(self.value_mode),
            "colour_scale": self.colour_scale,
        }

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "HeatmapConfig":
        """
        Builds a config from parsed `render` arguments.

        The deprecated -A/-B bounds force a logarithmic curve and fill in
        min/max when --min-value/--max-value are not given.
        """
        domain = args.curve
        min_value = args.min_value
        max_value = args.max_value
        if args.log_min is not None or args.log_max is not None:
            domain = DomainType.LOGARITHMIC
            if min_value is None:
                min_value = args.log_min
            if max_value is None:
                max_value = args.log_max

        return cls(
            bits_per_pixel=args.bits_per_pixel,
            min_value=min_value,
            max_value=max_value,
            domain=domain,
            accumulate=args.accumulate,
            value_mode=args.value_mode,
            colour_scale=args.colour_scale,
            separator=args.separator,
        )
