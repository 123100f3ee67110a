"""Persistence and verification of deployment artifacts.

Layout under the artifacts directory::

    bytecode.txt                 raw creation bytecode, hex without prefix
    <chainId>/deployment.json    gas parameters, signer, signed tx, address

Files are written through a temporary file and renamed into place, so a
failure never leaves a truncated artifact behind. Writing the same artifact
twice produces byte-identical files.
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import rlp

from .addresses import derive_contract_address
from .errors import DeploymentError, MalformedHex, StorageFailure
from .hexcodec import bytes_from_hex, strip_hex_prefix
from .signer import recover_signer

_LOGGER = logging.getLogger(__name__)

BYTECODE_FILENAME = "bytecode.txt"
DEPLOYMENT_FILENAME = "deployment.json"

PathLike = Union[str, Path]


@dataclass(frozen=True)
class DeploymentArtifact:
    """The persisted record for one (chain id, nonce) deployment."""

    gas_price: int
    gas_limit: int
    signer_address: str
    transaction: str
    contract_address: str

    def as_dict(self) -> Dict[str, Any]:
        return {
            "gasPrice": self.gas_price,
            "gasLimit": self.gas_limit,
            "signerAddress": self.signer_address,
            "transaction": self.transaction,
            "address": self.contract_address,
        }

    def to_json(self) -> str:
        return json.dumps(self.as_dict(), indent="\t") + "\n"

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "DeploymentArtifact":
        try:
            return cls(
                gas_price=int(payload["gasPrice"]),
                gas_limit=int(payload["gasLimit"]),
                signer_address=str(payload["signerAddress"]),
                transaction=str(payload["transaction"]),
                contract_address=str(payload["address"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise StorageFailure(f"Malformed deployment record: {exc!r}") from exc


def deployment_path(directory: PathLike, chain_id: int) -> Path:
    return Path(directory) / str(chain_id) / DEPLOYMENT_FILENAME


def bytecode_path(directory: PathLike) -> Path:
    return Path(directory) / BYTECODE_FILENAME


def _atomic_write(path: Path, contents: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handle = tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            newline="",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        )
        try:
            with handle:
                handle.write(contents)
            os.replace(handle.name, path)
        except BaseException:
            Path(handle.name).unlink(missing_ok=True)
            raise
    except OSError as exc:
        raise StorageFailure(f"Could not write {path}: {exc}", path=str(path)) from exc


def write_bytecode(directory: PathLike, bytecode_hex: str) -> Path:
    """Write the creation bytecode as unprefixed hex."""

    path = bytecode_path(directory)
    _atomic_write(path, strip_hex_prefix(bytecode_hex))
    _LOGGER.info("Wrote bytecode to %s", path)
    return path


def write_deployment_artifact(directory: PathLike, chain_id: int, artifact: DeploymentArtifact) -> Path:
    path = deployment_path(directory, chain_id)
    _atomic_write(path, artifact.to_json())
    _LOGGER.info("Wrote deployment record for chain %d to %s", chain_id, path)
    return path


def load_deployment_artifact(path: PathLike) -> DeploymentArtifact:
    """Read a ``deployment.json`` record back into a :class:`DeploymentArtifact`."""

    record_path = Path(path)
    try:
        payload = json.loads(record_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise StorageFailure(f"Could not read {record_path}: {exc}", path=str(record_path)) from exc
    except json.JSONDecodeError as exc:
        raise StorageFailure(f"{record_path} is not valid JSON: {exc}", path=str(record_path)) from exc
    if not isinstance(payload, Mapping):
        raise StorageFailure(f"{record_path} must contain a JSON object", path=str(record_path))
    return DeploymentArtifact.from_dict(payload)


@dataclass
class VerificationReport:
    """Outcome of re-deriving an artifact's claims from its signed transaction."""

    recovered_signer: Optional[str] = None
    derived_address: Optional[str] = None
    nonce: Optional[int] = None
    chain_id: Optional[int] = None
    problems: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.problems


def _decode_legacy_transaction(raw: bytes) -> Dict[str, Any]:
    fields = rlp.decode(raw)
    if not isinstance(fields, list) or len(fields) != 9:
        raise ValueError("not a signed legacy transaction")
    nonce, gas_price, gas, to, value, data, v, _r, _s = fields

    def as_int(item: bytes) -> int:
        return int.from_bytes(item, "big")

    v_value = as_int(v)
    return {
        "nonce": as_int(nonce),
        "gasPrice": as_int(gas_price),
        "gas": as_int(gas),
        "to": bytes(to),
        "value": as_int(value),
        "data": bytes(data),
        "chainId": (v_value - 35) // 2 if v_value >= 35 else None,
    }


def verify_artifact(artifact: DeploymentArtifact, bytecode: Optional[bytes] = None) -> VerificationReport:
    """Check an artifact against its own signed transaction.

    Mismatches are collected in the report rather than raised, so a single
    run lists everything that disagrees.
    """

    report = VerificationReport()
    try:
        raw = bytes_from_hex(strip_hex_prefix(artifact.transaction))
        decoded = _decode_legacy_transaction(raw)
    except (MalformedHex, rlp.DecodingError, TypeError, ValueError) as exc:
        report.problems.append(f"transaction cannot be decoded: {exc}")
        return report

    report.nonce = decoded["nonce"]
    report.chain_id = decoded["chainId"]
    if decoded["to"]:
        report.problems.append("transaction is not a contract creation")
    if decoded["value"] != 0:
        report.problems.append(f"transaction transfers value {decoded['value']}")
    if decoded["gasPrice"] != artifact.gas_price:
        report.problems.append(f"gasPrice {artifact.gas_price} does not match transaction {decoded['gasPrice']}")
    if decoded["gas"] != artifact.gas_limit:
        report.problems.append(f"gasLimit {artifact.gas_limit} does not match transaction {decoded['gas']}")
    if bytecode is not None and decoded["data"] != bytes(bytecode):
        report.problems.append("transaction payload does not match the bytecode")

    try:
        report.recovered_signer = recover_signer(raw)
        report.derived_address = derive_contract_address(report.recovered_signer, decoded["nonce"])
    except DeploymentError as exc:
        report.problems.append(str(exc))
        return report

    if report.recovered_signer.lower() != artifact.signer_address.lower():
        report.problems.append(
            f"signerAddress {artifact.signer_address} does not match recovered signer {report.recovered_signer}"
        )
    if report.derived_address.lower() != artifact.contract_address.lower():
        report.problems.append(
            f"address {artifact.contract_address} does not match derived address {report.derived_address}"
        )
    return report


__all__ = [
    "BYTECODE_FILENAME",
    "DEPLOYMENT_FILENAME",
    "DeploymentArtifact",
    "VerificationReport",
    "bytecode_path",
    "deployment_path",
    "load_deployment_artifact",
    "verify_artifact",
    "write_bytecode",
    "write_deployment_artifact",
]
