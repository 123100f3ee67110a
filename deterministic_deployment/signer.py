"""Offline signing of the deployment transaction.

The signer accepts exactly one secret, either a BIP-39 mnemonic or a raw
private key, and produces EIP-155 legacy transactions signed with RFC 6979
deterministic ECDSA. Signing the same transaction with the same secret always
yields the same bytes.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional, Union

from eth_account import Account
from eth_utils import to_checksum_address, to_hex

from .config import DEFAULT_ACCOUNT_PATH, SignerConfig
from .errors import InvalidCredential, MissingCredential, SigningFailure
from .hexcodec import add_hex_prefix
from .transactions import UnsignedTransaction

if TYPE_CHECKING:  # pragma: no cover - typing only
    from eth_account.signers.local import LocalAccount
else:  # pragma: no cover - runtime alias
    LocalAccount = Any  # type: ignore[assignment]

_LOGGER = logging.getLogger(__name__)

Account.enable_unaudited_hdwallet_features()


@dataclass(frozen=True)
class MnemonicCredential:
    phrase: str = field(repr=False)
    account_path: str = DEFAULT_ACCOUNT_PATH

    kind = "mnemonic"

    def to_account(self) -> LocalAccount:
        return Account.from_mnemonic(self.phrase.strip(), account_path=self.account_path)


@dataclass(frozen=True)
class PrivateKeyCredential:
    key: str = field(repr=False)

    kind = "private-key"

    def to_account(self) -> LocalAccount:
        return Account.from_key(add_hex_prefix(self.key.strip()))


Credential = Union[MnemonicCredential, PrivateKeyCredential]


def credential_from_config(config: SignerConfig) -> Credential:
    """Pick the credential variant for ``config``.

    A non-empty mnemonic takes precedence over a private key.

    Raises
    ------
    MissingCredential
        If neither secret is present. Nothing cryptographic has happened yet.
    """

    if config.mnemonic and config.mnemonic.strip():
        return MnemonicCredential(config.mnemonic, config.account_path)
    if config.private_key and config.private_key.strip():
        return PrivateKeyCredential(config.private_key)
    raise MissingCredential("Set MNEMONIC or PK (raw private key) before signing.")


@dataclass(frozen=True)
class SignedTransaction:
    """An :class:`UnsignedTransaction` together with its signature and encoding."""

    transaction: UnsignedTransaction
    v: int
    r: int
    s: int
    raw: bytes = field(repr=False)
    hash: bytes = field(repr=False)

    @property
    def raw_hex(self) -> str:
        return to_hex(self.raw)

    @property
    def hash_hex(self) -> str:
        return to_hex(self.hash)


class Signer:
    """Signs deployment transactions for a single credential."""

    def __init__(self, credential: Credential) -> None:
        self._credential: Optional[Credential] = credential

    @classmethod
    def from_config(cls, config: SignerConfig) -> "Signer":
        return cls(credential_from_config(config))

    @property
    def credential_kind(self) -> str:
        return self._require_credential().kind

    def _require_credential(self) -> Credential:
        if self._credential is None:
            raise MissingCredential("Signer has been closed; its credential is no longer available.")
        return self._credential

    def _account(self) -> LocalAccount:
        credential = self._require_credential()
        try:
            return credential.to_account()
        except Exception:
            # The message may quote the secret, so it is not forwarded.
            raise InvalidCredential(f"Could not derive an account from the configured {credential.kind}") from None

    def get_address(self) -> str:
        """Return the checksum address controlled by the credential."""

        return to_checksum_address(self._account().address)

    def sign(self, tx: UnsignedTransaction) -> SignedTransaction:
        """Sign ``tx`` and return its canonical RLP encoding."""

        account = self._account()
        try:
            signed = account.sign_transaction(tx.as_dict())
        except Exception as exc:
            raise SigningFailure(f"Could not sign transaction {tx.describe()}: {exc}") from exc

        result = SignedTransaction(
            transaction=tx,
            v=signed.v,
            r=signed.r,
            s=signed.s,
            raw=bytes(signed.raw_transaction),
            hash=bytes(signed.hash),
        )
        _LOGGER.info("Signed deployment transaction %s for chain %d", result.hash_hex, tx.chain_id)
        return result

    def close(self) -> None:
        """Release the credential. Further use raises :class:`MissingCredential`."""

        self._credential = None

    def __enter__(self) -> "Signer":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()


def recover_signer(raw_transaction: Union[bytes, str]) -> str:
    """Recover the sender of a signed legacy transaction."""

    try:
        return to_checksum_address(Account.recover_transaction(raw_transaction))
    except Exception as exc:
        raise SigningFailure(f"Could not recover the signer of the transaction: {exc}") from exc


__all__ = [
    "Credential",
    "MnemonicCredential",
    "PrivateKeyCredential",
    "SignedTransaction",
    "Signer",
    "credential_from_config",
    "recover_signer",
]
