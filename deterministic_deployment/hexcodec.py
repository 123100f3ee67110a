"""Conversions between hex strings, integers and raw bytes."""
from __future__ import annotations

import re

from .errors import MalformedHex

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]*")


def strip_hex_prefix(value: str) -> str:
    """Drop a leading ``0x``/``0X`` if present."""

    if value[:2] in ("0x", "0X"):
        return value[2:]
    return value


def add_hex_prefix(value: str) -> str:
    return value if value[:2] in ("0x", "0X") else f"0x{value}"


def bytes_from_hex(value: str) -> bytes:
    """Decode an unprefixed hex string into bytes.

    Odd-length input is treated as if it carried a leading ``0`` nibble, so
    ``"abc"`` decodes exactly like ``"0abc"``.

    Raises
    ------
    MalformedHex
        If ``value`` is not a string or contains a non-hex character.
    """

    if not isinstance(value, str):
        raise MalformedHex(f"Expected a hex string, got {type(value).__name__}")
    if _HEX_DIGITS.fullmatch(value) is None:
        offender = next(char for char in value if char not in "0123456789abcdefABCDEF")
        raise MalformedHex(f"Invalid hex character {offender!r} in {value!r}")
    normalised = f"0{value}" if len(value) % 2 else value
    return bytes.fromhex(normalised)


def hex_from_bytes(value: bytes) -> str:
    return bytes(value).hex()


def hex_from_number(value: int) -> str:
    """Return the minimal byte-aligned hex form of a non-negative integer.

    ``0`` is rendered as ``"00"``; no other value carries a leading zero byte.
    """

    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedHex(f"Expected an integer, got {type(value).__name__}")
    if value < 0:
        raise MalformedHex(f"Cannot hex-encode negative value {value}")
    digits = format(value, "x")
    return f"0{digits}" if len(digits) % 2 else digits


def bytes_from_number(value: int) -> bytes:
    return bytes_from_hex(hex_from_number(value))


__all__ = [
    "add_hex_prefix",
    "bytes_from_hex",
    "bytes_from_number",
    "hex_from_bytes",
    "hex_from_number",
    "strip_hex_prefix",
]
