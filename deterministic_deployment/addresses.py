"""Contract address derivation for ``CREATE`` deployments.

The address of a contract created by a plain transaction depends only on the
sender and the sender's nonce::

    keccak256(rlp([sender, nonce]))[12:]

Chain id, gas price and gas limit are not part of the preimage, which is what
makes the derived address identical on every chain.
"""
from __future__ import annotations

import logging
from typing import Union

import rlp
from eth_utils import keccak, to_checksum_address

from .errors import InvalidAddress, InvalidNonce, MalformedHex
from .hexcodec import bytes_from_hex, strip_hex_prefix

_LOGGER = logging.getLogger(__name__)

ADDRESS_LENGTH = 20
# EIP-2681 caps account nonces below 2**64 - 1.
MAX_NONCE = 2**64 - 1

AddressLike = Union[str, bytes, bytearray]


def address_bytes(value: AddressLike) -> bytes:
    """Normalise a hex or raw address into exactly 20 bytes."""

    if isinstance(value, (bytes, bytearray)):
        raw = bytes(value)
    elif isinstance(value, str):
        text = strip_hex_prefix(value.strip())
        try:
            raw = bytes_from_hex(text)
        except MalformedHex as exc:
            raise InvalidAddress(f"Address {value!r} is not valid hex") from exc
        if len(text) != ADDRESS_LENGTH * 2:
            raise InvalidAddress(f"Address {value!r} must have {ADDRESS_LENGTH * 2} hex digits, got {len(text)}")
    else:
        raise InvalidAddress(f"Unsupported address type {type(value).__name__}")

    if len(raw) != ADDRESS_LENGTH:
        raise InvalidAddress(f"Address must be {ADDRESS_LENGTH} bytes, got {len(raw)}")
    return raw


def _validate_nonce(nonce: int) -> int:
    if isinstance(nonce, bool) or not isinstance(nonce, int):
        raise InvalidNonce(f"Nonce must be an integer, got {type(nonce).__name__}")
    if nonce < 0:
        raise InvalidNonce(f"Nonce must be non-negative, got {nonce}")
    if nonce >= MAX_NONCE:
        raise InvalidNonce(f"Nonce {nonce} exceeds the maximum account nonce {MAX_NONCE - 1}")
    return nonce


def derive_contract_address(sender_address: AddressLike, nonce: int) -> str:
    """Return the checksum address of the contract ``sender_address`` creates at ``nonce``."""

    sender = address_bytes(sender_address)
    nonce = _validate_nonce(nonce)
    # rlp encodes the integer big-endian and minimal, with 0 as the empty string.
    preimage = rlp.encode([sender, nonce])
    address = to_checksum_address(keccak(preimage)[-ADDRESS_LENGTH:])
    _LOGGER.debug("Derived contract address %s for sender %s at nonce %d", address, to_checksum_address(sender), nonce)
    return address


__all__ = [
    "ADDRESS_LENGTH",
    "MAX_NONCE",
    "AddressLike",
    "address_bytes",
    "derive_contract_address",
]
