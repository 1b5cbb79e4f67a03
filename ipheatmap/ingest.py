"""
Input record parsing.

One record per line: `<address-or-range> [value]`, fields separated by
commas or whitespace. A malformed range is skipped with a warning; a
malformed plain address aborts the run.
"""

from __future__ import annotations

import ipaddress
import logging
import re
from dataclasses import dataclass
from typing import List, Optional

from .errors import ConfigurationError, InputParseError

logger = logging.getLogger(__name__)

DEFAULT_VALUE = 1
_INT32_MIN = -(1 << 31)
_INT32_MAX = (1 << 31) - 1
_INT_RE = re.compile(r"[+-]?[0-9]+")
_FIELD_SPLIT = re.compile(r"[,\s]")
_PREFIX_RE = re.compile(r"[0-9]+")

ADDRESS = "address"
RANGE = "range"


@dataclass(frozen=True)
class Record:
    kind: str
    first: int
    last: int
    value: int
    token: str
    line_number: int


def _split_fields(line: str, separator: Optional[str]) -> List[str]:
    if separator is None:
        parts = _FIELD_SPLIT.split(line)
    else:
        parts = line.split(separator)
    return [part.strip() for part in parts if part.strip()]


def _parse_value(text: Optional[str]) -> int:
    if text is None or not _INT_RE.fullmatch(text):
        return DEFAULT_VALUE
    value = int(text)
    if value < _INT32_MIN or value > _INT32_MAX:
        return DEFAULT_VALUE
    return value


def _parse_address(token: str, line_number: int) -> int:
    if token.isascii() and token.isdigit():
        value = int(token)
        if value >> 32:
            raise InputParseError(line_number, token, "integer exceeds 32 bits")
        return value
    try:
        return int(ipaddress.IPv4Address(token))
    except ValueError as exc:
        raise InputParseError(line_number, token) from exc


def check_separator(separator: Optional[str]) -> Optional[str]:
    if separator is not None and len(separator) != 1:
        raise ConfigurationError("separator", f"must be a single character (got {separator!r})")
    return separator


def parse_record(line: str, line_number: int, separator: Optional[str] = None) -> Optional[Record]:
    """
    Parses one input line.

    Returns None for blank lines and for ranges that fail to parse (a
    warning is logged). Raises InputParseError for a bad plain address.
    """
    parts = _split_fields(line, separator)
    if not parts:
        return None

    token = parts[0]
    value = _parse_value(parts[1] if len(parts) > 1 else None)

    if "/" in token:
        try:
            prefix = token.split("/", 1)[1]
            # netmask and hostmask forms are not range literals
            if not _PREFIX_RE.fullmatch(prefix):
                raise ValueError(f"invalid prefix length {prefix!r}")
            network = ipaddress.IPv4Network(token, strict=False)
        except ValueError as exc:
            logger.warning(
                "Failed to parse CIDR on line %d: %s - %s", line_number, token, exc
            )
            return None
        return Record(
            RANGE,
            int(network.network_address),
            int(network.broadcast_address),
            value,
            token,
            line_number,
        )

    address = _parse_address(token, line_number)
    return Record(ADDRESS, address, address, value, token, line_number)


def is_blank(line: str, separator: Optional[str] = None) -> bool:
    return not _split_fields(line, separator)
