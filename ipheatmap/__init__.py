"""
ipheatmap — Hilbert curve heatmaps of the IPv4 address space

Each address or CIDR range is projected onto a pixel of a square image
through a Hilbert curve, so numerically close addresses stay close on
screen. Per-pixel weights are accumulated, scaled into a colour domain
and written out as an RGBA image.
"""

from .hilbert import d2xy, d2xy_array
from .projection import ADDRESS_BITS, AddressProjector, image_size_for_bpp
from .modes import CATEGORICAL_SENTINEL, ValueMode
from .scale import DomainType, ScaleDomain
from .colour import CATEGORICAL_PALETTE, Colouriser, Gradient, get_gradient
from .config import HeatmapConfig
from .heatmap import Heatmap
from .report import build_report, validate_report
from .errors import (
    HeatmapError,
    ConfigurationError,
    CurveError,
    InputParseError,
    DomainError,
    ReportValidationError,
)

version = "0.1.0"

__all__ = [
    "d2xy",
    "d2xy_array",
    "ADDRESS_BITS",
    "AddressProjector",
    "image_size_for_bpp",
    "CATEGORICAL_SENTINEL",
    "ValueMode",
    "DomainType",
    "ScaleDomain",
    "CATEGORICAL_PALETTE",
    "Colouriser",
    "Gradient",
    "get_gradient",
    "HeatmapConfig",
    "Heatmap",
    "build_report",
    "validate_report",
    "HeatmapError",
    "ConfigurationError",
    "CurveError",
    "InputParseError",
    "DomainError",
    "ReportValidationError",
    "version",
]
