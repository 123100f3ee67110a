"""Assembly of the contract-creation transaction record."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Union

from .addresses import MAX_NONCE
from .errors import InvalidNonce, InvalidTransaction
from .hexcodec import bytes_from_hex, strip_hex_prefix

DEFAULT_NONCE = 0
DEFAULT_GAS_PRICE = 100 * 10**9
# Measured usage of the proxy deployment is 59159 gas. The headroom keeps the
# transaction valid if opcodes are repriced in a later fork.
DEFAULT_GAS_LIMIT = 100_000

_OVERRIDE_ALIASES = {
    "gas_price": ("gas_price", "gasPrice"),
    "gas_limit": ("gas_limit", "gasLimit"),
    "nonce": ("nonce",),
}


@dataclass(frozen=True)
class TransactionOverrides:
    """Caller supplied replacements for the default transaction fields."""

    gas_price: Optional[int] = None
    gas_limit: Optional[int] = None
    nonce: Optional[int] = None

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "TransactionOverrides":
        """Build overrides from a mapping such as parsed CLI arguments."""

        resolved: Dict[str, Optional[int]] = {}
        for name, aliases in _OVERRIDE_ALIASES.items():
            resolved[name] = next((values[key] for key in aliases if values.get(key) is not None), None)
        return cls(**resolved)


@dataclass(frozen=True)
class UnsignedTransaction:
    """A legacy contract-creation transaction, before signing."""

    nonce: int
    gas_price: int
    gas_limit: int
    chain_id: int
    data: bytes = field(repr=False)
    value: int = 0

    def as_dict(self) -> Dict[str, Any]:
        """Return the transaction in the shape ``eth_account`` signs.

        There is no ``to`` key: an empty recipient marks a contract creation.
        """

        return {
            "nonce": self.nonce,
            "gasPrice": self.gas_price,
            "gas": self.gas_limit,
            "value": self.value,
            "data": self.data,
            "chainId": self.chain_id,
        }

    def describe(self) -> Dict[str, Any]:
        """JSON-friendly summary used in logs and CLI output."""

        return {
            "nonce": self.nonce,
            "gasPrice": self.gas_price,
            "gasLimit": self.gas_limit,
            "value": self.value,
            "dataLength": len(self.data),
            "chainId": self.chain_id,
        }


def _unsigned(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidTransaction(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0:
        raise InvalidTransaction(f"{name} must be non-negative, got {value}")
    return value


def _coerce_bytecode(bytecode: Union[bytes, bytearray, str]) -> bytes:
    if isinstance(bytecode, (bytes, bytearray)):
        return bytes(bytecode)
    if isinstance(bytecode, str):
        return bytes_from_hex(strip_hex_prefix(bytecode.strip()))
    raise InvalidTransaction(f"Bytecode must be bytes or a hex string, got {type(bytecode).__name__}")


def build_transaction(
    bytecode: Union[bytes, bytearray, str],
    chain_id: int,
    overrides: Union[TransactionOverrides, Mapping[str, Any], None] = None,
) -> UnsignedTransaction:
    """Assemble the deployment transaction for ``chain_id``.

    Each default (nonce 0, 100 gwei, 100000 gas) applies only when the
    matching override is ``None``; an explicit ``0`` is a real override.
    """

    if overrides is None:
        overrides = TransactionOverrides()
    elif not isinstance(overrides, TransactionOverrides):
        overrides = TransactionOverrides.from_mapping(overrides)

    nonce = DEFAULT_NONCE if overrides.nonce is None else overrides.nonce
    try:
        nonce = _unsigned("nonce", nonce)
    except InvalidTransaction as exc:
        raise InvalidNonce(str(exc.args[0])) from exc
    if nonce >= MAX_NONCE:
        raise InvalidNonce(f"Nonce {nonce} exceeds the maximum account nonce {MAX_NONCE - 1}")

    gas_price = DEFAULT_GAS_PRICE if overrides.gas_price is None else overrides.gas_price
    gas_limit = DEFAULT_GAS_LIMIT if overrides.gas_limit is None else overrides.gas_limit

    return UnsignedTransaction(
        nonce=nonce,
        gas_price=_unsigned("gasPrice", gas_price),
        gas_limit=_unsigned("gasLimit", gas_limit),
        chain_id=_unsigned("chainId", chain_id),
        data=_coerce_bytecode(bytecode),
        value=0,
    )


__all__ = [
    "DEFAULT_GAS_LIMIT",
    "DEFAULT_GAS_PRICE",
    "DEFAULT_NONCE",
    "TransactionOverrides",
    "UnsignedTransaction",
    "build_transaction",
]
