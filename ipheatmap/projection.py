"""
Address-to-pixel projection.

Each pixel covers 2**bits_per_pixel consecutive addresses; the pixel's
curve distance is the address with those low bits discarded.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np

from .errors import ConfigurationError, CurveError
from .hilbert import d2xy

ADDRESS_BITS = 32


def _validate_bits_per_pixel(bits_per_pixel: int, address_bits: int) -> None:
    if bits_per_pixel < 0 or bits_per_pixel > address_bits:
        raise ConfigurationError(
            "bits_per_pixel",
            f"must be in [0, {address_bits}] (got {bits_per_pixel})",
        )
    if (address_bits - bits_per_pixel) % 2 != 0:
        raise ConfigurationError(
            "bits_per_pixel",
            f"{address_bits} - bits_per_pixel must be even (got {bits_per_pixel})",
        )


def image_size_for_bpp(bits_per_pixel: int, address_bits: int = ADDRESS_BITS) -> int:
    """
    Returns the side length of the square image for a granularity.

    There are 2**(address_bits - bits_per_pixel) pixels laid out on a
    2**order square, order being half that exponent.
    """
    _validate_bits_per_pixel(bits_per_pixel, address_bits)
    return 1 << ((address_bits - bits_per_pixel) // 2)


class AddressProjector:
    """Maps addresses to curve distances and pixel coordinates."""

    def __init__(self, bits_per_pixel: int, address_bits: int = ADDRESS_BITS):
        _validate_bits_per_pixel(bits_per_pixel, address_bits)
        self.bits_per_pixel = bits_per_pixel
        self.address_bits = address_bits
        self.order = (address_bits - bits_per_pixel) // 2
        self.side = 1 << self.order
        self.ips_per_pixel = 1 << bits_per_pixel
        self.pixel_count = self.side * self.side

    def __repr__(self) -> str:
        return (
            f"AddressProjector(bits_per_pixel={self.bits_per_pixel}, "
            f"address_bits={self.address_bits})"
        )

    def _check_address(self, address: int) -> None:
        if address < 0 or address >> self.address_bits:
            raise CurveError(
                f"address {address} outside the {self.address_bits}-bit space"
            )

    def distance(self, address: int) -> int:
        self._check_address(address)
        return address >> self.bits_per_pixel

    def pixel(self, address: int) -> Tuple[int, int]:
        return d2xy(self.distance(address), self.order)

    def first_address(self, distance: int) -> int:
        """Returns the first address covered by the pixel at `distance`."""
        if distance < 0 or distance >= self.pixel_count:
            raise CurveError(
                f"distance {distance} out of range for order {self.order}"
            )
        return distance << self.bits_per_pixel

    def pixel_range(self, distance: int) -> Tuple[int, int]:
        """Inclusive address range covered by the pixel at `distance`."""
        first = self.first_address(distance)
        return first, first + self.ips_per_pixel - 1

    def overlaps(self, first: int, last: int) -> Tuple[np.ndarray, np.ndarray]:
        """
        Distributes the inclusive range [first, last] over the pixels it touches.

        Returns (distances, counts): each touched pixel distance and how many
        addresses of the range fall inside it. Work is proportional to the
        number of pixels touched, not the number of addresses.
        """
        if first > last:
            raise CurveError(f"range start {first} is after range end {last}")
        self._check_address(first)
        self._check_address(last)

        bpp = self.bits_per_pixel
        distances = np.arange(first >> bpp, (last >> bpp) + 1, dtype=np.int64)
        pixel_first = distances << bpp
        pixel_last = pixel_first + (self.ips_per_pixel - 1)
        counts = np.minimum(pixel_last, last) - np.maximum(pixel_first, first) + 1
        touched = counts > 0
        return distances[touched], counts[touched]
