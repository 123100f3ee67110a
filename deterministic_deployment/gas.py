"""Advisory gas estimation for the deployment payload.

Nothing here feeds the signing pipeline; it only helps pick ``--gas-price``
and ``--gas-limit`` values for a given chain.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Union

from web3 import Web3

from .errors import ProviderError
from .hexcodec import add_hex_prefix, hex_from_bytes

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class GasEstimate:
    chain_id: int
    gas: int
    gas_price: int

    @property
    def gas_price_gwei(self) -> Decimal:
        return Decimal(Web3.from_wei(self.gas_price, "gwei"))

    def as_dict(self) -> Dict[str, Any]:
        return {
            "chainId": self.chain_id,
            "estimate": str(self.gas),
            "gasPrice": str(self.gas_price),
            "gasPriceGwei": str(self.gas_price_gwei),
        }


def connect(rpc_url: str, timeout: float = 10.0) -> Web3:
    """Return a connected ``Web3`` instance for ``rpc_url``."""

    web3 = Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": timeout}))
    if not web3.is_connected():
        raise ProviderError(f"Web3 not connected to {rpc_url}")
    return web3


def estimate_deployment(web3: Web3, bytecode: Union[bytes, str]) -> GasEstimate:
    """Ask the node how much gas deploying ``bytecode`` costs and what gas costs now."""

    if isinstance(bytecode, (bytes, bytearray)):
        data = add_hex_prefix(hex_from_bytes(bytecode))
    else:
        data = add_hex_prefix(bytecode)

    try:
        chain_id = int(web3.eth.chain_id)
        gas = int(web3.eth.estimate_gas({"data": data}))
        gas_price = int(web3.eth.gas_price)
    except Exception as exc:
        raise ProviderError(f"Gas estimation failed: {exc}") from exc

    estimate = GasEstimate(chain_id=chain_id, gas=gas, gas_price=gas_price)
    _LOGGER.info(
        "Chain %d: deployment estimate %d gas at %s gwei",
        estimate.chain_id,
        estimate.gas,
        estimate.gas_price_gwei,
    )
    return estimate


__all__ = ["GasEstimate", "connect", "estimate_deployment"]
