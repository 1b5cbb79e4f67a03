"""
Colouring of finished buffers.

The gradient and palette are owned by a Colouriser instance handed to the
heatmap, rather than looked up from module state at render time.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

import matplotlib
import numpy as np

from .errors import ConfigurationError

# ColorBrewer2 "Accent"; categories wrap modulo its length.
CATEGORICAL_PALETTE: Tuple[Tuple[int, int, int], ...] = (
    (127, 201, 127),
    (190, 174, 212),
    (253, 192, 134),
    (255, 255, 153),
    (56, 108, 176),
    (240, 2, 127),
    (191, 91, 23),
    (102, 102, 102),
)

GRADIENTS = ("magma", "inferno", "plasma", "viridis", "cividis", "turbo", "cool")
_ALIASES = {"accessible": "cividis"}


class Gradient:
    """Continuous colour scale backed by a matplotlib colormap."""

    def __init__(self, name: str):
        self.name = name
        self._cmap = matplotlib.colormaps[name]

    def __repr__(self) -> str:
        return f"Gradient({self.name!r})"

    def __call__(self, values) -> np.ndarray:
        """Evaluates values in [0, 1]; returns uint8 RGB with a trailing axis of 3."""
        rgba = self._cmap(np.clip(np.asarray(values, dtype=float), 0.0, 1.0))
        return np.round(np.asarray(rgba)[..., :3] * 255.0).astype(np.uint8)


def get_gradient(name: str) -> Gradient:
    key = str(name).strip().lower()
    key = _ALIASES.get(key, key)
    if key not in GRADIENTS:
        supported = ", ".join(GRADIENTS + tuple(_ALIASES))
        raise ConfigurationError("colour scale", f"{name!r}. Supported: {supported}")
    return Gradient(key)


class Colouriser:
    def __init__(
        self,
        gradient: Gradient,
        palette: Optional[Sequence[Tuple[int, int, int]]] = None,
    ):
        self.gradient = gradient
        if palette is None:
            palette = CATEGORICAL_PALETTE
        self.palette = np.asarray(palette, dtype=np.uint8)
        if self.palette.ndim != 2 or self.palette.shape[1] != 3 or not len(self.palette):
            raise ConfigurationError("palette", "must be a non-empty list of RGB triples")

    def categorical(self, cells: np.ndarray) -> np.ndarray:
        """
        Cells below zero are transparent; the rest index the palette modulo
        its size and are opaque.
        """
        cells = np.asarray(cells)
        out = np.zeros(cells.shape + (4,), dtype=np.uint8)
        present = cells >= 0
        index = cells[present] % len(self.palette)
        out[present, :3] = self.palette[index]
        out[present, 3] = 255
        return out

    def continuous(self, scaled: np.ndarray) -> np.ndarray:
        """Colours normalised values; NaN (no value) stays transparent."""
        scaled = np.asarray(scaled, dtype=float)
        out = np.zeros(scaled.shape + (4,), dtype=np.uint8)
        present = ~np.isnan(scaled)
        if np.any(present):
            out[present, :3] = self.gradient(scaled[present])
            out[present, 3] = 255
        return out
