"""
Hilbert curve heatmap of the IPv4 address space.

Records are painted one at a time into a dense side x side buffer; once
input is exhausted the colour domain is computed over the whole buffer and
every cell is coloured in a single pass.
"""

from __future__ import annotations

import ipaddress
import logging
from typing import Any, Dict, Iterable, Optional, TextIO, Union

import numpy as np
from PIL import Image

from .colour import Colouriser, get_gradient
from .config import HeatmapConfig
from .errors import CurveError
from .ingest import ADDRESS, Record, is_blank, parse_record
from .hilbert import d2xy_array
from .projection import AddressProjector
from .scale import ScaleDomain

logger = logging.getLogger(__name__)

AddressLike = Union[int, str, ipaddress.IPv4Address]
NetworkLike = Union[str, ipaddress.IPv4Network]

RANGE_BLOCK_PIXELS = 1 << 16


class Heatmap:
    def __init__(
        self,
        config: Optional[HeatmapConfig] = None,
        colouriser: Optional[Colouriser] = None,
    ):
        self.config = config or HeatmapConfig()
        self.projector = AddressProjector(self.config.bits_per_pixel)
        self.policy = self.config.value_mode.policy
        self.colouriser = colouriser or Colouriser(get_gradient(self.config.colour_scale))

        size = self.projector.side
        self.buffer = np.full((size, size), self.policy.fill, dtype=np.int64)
        self.painted = np.zeros((size, size), dtype=bool)
        self.records_painted = 0
        self.records_skipped = 0

        self._write = self._add if self.config.accumulate else self._overwrite

    def __repr__(self) -> str:
        return (
            f"Heatmap(size={self.image_size}, mode={self.config.value_mode}, "
            f"accumulate={self.config.accumulate})"
        )

    @property
    def image_size(self) -> int:
        return self.projector.side

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def _add(self, ys, xs, weights) -> None:
        # a single write never repeats a pixel, so fancy-index += is safe
        self.buffer[ys, xs] += weights
        self.painted[ys, xs] = True

    def _overwrite(self, ys, xs, weights) -> None:
        self.buffer[ys, xs] = weights
        self.painted[ys, xs] = True

    def paint_address(self, address: AddressLike, value: int = 1) -> None:
        address = int(ipaddress.IPv4Address(address))
        weight = self.policy.address_weight(value, self.projector.ips_per_pixel)
        x, y = self.projector.pixel(address)
        self._write(y, x, weight)

    def paint_range(self, first: int, last: int, value: int = 1) -> None:
        """
        Paints every pixel touched by the inclusive range [first, last].

        In scaled mode each pixel receives the share of the weight matching
        the fraction of its addresses the range covers. Wide ranges are
        painted RANGE_BLOCK_PIXELS pixels at a time to bound peak memory.
        """
        if first > last:
            raise CurveError(f"range start {first} is after range end {last}")
        bpp = self.projector.bits_per_pixel
        start = first
        while start <= last:
            # blocks end on a pixel boundary, so no pixel is split
            end = min(last, (((start >> bpp) + RANGE_BLOCK_PIXELS) << bpp) - 1)
            distances, counts = self.projector.overlaps(start, end)
            weights = self.policy.range_weights(value, counts, self.projector.ips_per_pixel)
            xs, ys = d2xy_array(distances, self.projector.order)
            self._write(ys, xs, weights)
            start = end + 1

    def paint_network(self, network: NetworkLike, value: int = 1) -> None:
        network = ipaddress.IPv4Network(network, strict=False)
        self.paint_range(
            int(network.network_address), int(network.broadcast_address), value
        )

    def paint_record(self, record: Record) -> None:
        if record.kind == ADDRESS:
            self.paint_address(record.first, record.value)
        else:
            self.paint_range(record.first, record.last, record.value)
        self.records_painted += 1

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def process_lines(self, lines: Iterable[str]) -> None:
        separator = self.config.separator
        for line_number, line in enumerate(lines, start=1):
            if is_blank(line, separator):
                continue
            record = parse_record(line, line_number, separator)
            if record is None:
                self.records_skipped += 1
                continue
            self.paint_record(record)
        logger.debug(
            "Processed input: %d records painted, %d skipped",
            self.records_painted,
            self.records_skipped,
        )

    def process_text(self, text: str) -> None:
        self.process_lines(text.splitlines())

    def process_file(self, handle: TextIO) -> None:
        self.process_lines(handle)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def calculate_domain(self) -> ScaleDomain:
        """
        Builds the colour domain; bounds not configured come from the buffer.

        Raises DomainError when the bounds collapse, e.g. a buffer holding a
        single distinct value with no explicit bounds.
        """
        min_value = self.config.min_value
        if min_value is None:
            min_value = float(self.buffer.min())
        max_value = self.config.max_value
        if max_value is None:
            max_value = float(self.buffer.max())

        logger.debug(
            "Colour scaling: curve=%s, min=%s, max=%s",
            self.config.domain,
            min_value,
            max_value,
        )
        return ScaleDomain(self.config.domain, min_value, max_value)

    def rgba(self) -> np.ndarray:
        """Returns the coloured image as a (size, size, 4) uint8 array."""
        if not self.policy.continuous:
            return self.colouriser.categorical(self.buffer)
        domain = self.calculate_domain()
        return self.colouriser.continuous(domain.scale_array(self.buffer))

    def create_image(self) -> Image.Image:
        return Image.fromarray(self.rgba())

    def save(self, path: str) -> None:
        self.create_image().save(path)
        logger.info("Saved %dx%d heatmap to %s", self.image_size, self.image_size, path)

    def stats(self) -> Dict[str, Any]:
        return {
            "image_size": int(self.image_size),
            "order": int(self.projector.order),
            "ips_per_pixel": int(self.projector.ips_per_pixel),
            "painted_pixels": int(np.sum(self.painted)),
            "buffer_min": int(self.buffer.min()),
            "buffer_max": int(self.buffer.max()),
            "records_painted": int(self.records_painted),
            "records_skipped": int(self.records_skipped),
        }
