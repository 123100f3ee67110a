"""Explicit configuration objects resolved once at the process boundary."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from .errors import ConfigurationError

DEFAULT_ACCOUNT_PATH = "m/44'/60'/0'/0/0"
DEFAULT_ARTIFACTS_DIR = Path("artifacts")
DEFAULT_COMPILER_OUTPUT = DEFAULT_ARTIFACTS_DIR / "compiler-output.json"


@dataclass(frozen=True)
class SignerConfig:
    """Secret material for the signer.

    Only one of ``mnemonic`` and ``private_key`` is used; the mnemonic wins when
    both are present.
    """

    mnemonic: Optional[str] = field(default=None, repr=False)
    private_key: Optional[str] = field(default=None, repr=False)
    account_path: str = DEFAULT_ACCOUNT_PATH

    @property
    def has_credential(self) -> bool:
        return bool((self.mnemonic or "").strip() or (self.private_key or "").strip())


@dataclass(frozen=True)
class ProviderConfig:
    rpc_url: str


def _get_env() -> Mapping[str, str]:
    """Expose ``os.environ`` after loading ``.env`` to simplify testing."""

    load_dotenv()
    return os.environ


def load_signer_config(env: Mapping[str, str] | None = None) -> SignerConfig:
    """Resolve the signer secret from ``env``.

    ``MNEMONIC`` is read first, then ``PK`` or ``PRIVATE_KEY``. ``MNEMONIC_PATH``
    optionally overrides the HD derivation path. Missing secrets are not an
    error here; the signer reports them when it is constructed.
    """

    if env is None:
        env = _get_env()

    return SignerConfig(
        mnemonic=env.get("MNEMONIC") or None,
        private_key=env.get("PK") or env.get("PRIVATE_KEY") or None,
        account_path=env.get("MNEMONIC_PATH") or DEFAULT_ACCOUNT_PATH,
    )


def load_provider_config(env: Mapping[str, str] | None = None, rpc_url: Optional[str] = None) -> ProviderConfig:
    if env is None:
        env = _get_env()

    resolved = rpc_url or env.get("RPC") or env.get("RPC_URL")
    if not resolved:
        raise ConfigurationError("Set RPC (or RPC_URL) or pass --rpc to query a chain provider.")
    return ProviderConfig(rpc_url=resolved)


__all__ = [
    "DEFAULT_ACCOUNT_PATH",
    "DEFAULT_ARTIFACTS_DIR",
    "DEFAULT_COMPILER_OUTPUT",
    "ProviderConfig",
    "SignerConfig",
    "load_provider_config",
    "load_signer_config",
]
