"""Deterministic, offline signing of a fixed contract deployment."""
from __future__ import annotations

from .addresses import address_bytes, derive_contract_address
from .artifacts import (
    DeploymentArtifact,
    VerificationReport,
    load_deployment_artifact,
    verify_artifact,
    write_bytecode,
    write_deployment_artifact,
)
from .compiler import CompiledContract, load_compiler_output, select_contract
from .config import SignerConfig, load_signer_config
from .errors import (
    CompilerOutputError,
    ConfigurationError,
    DeploymentError,
    InvalidAddress,
    InvalidCredential,
    InvalidNonce,
    InvalidTransaction,
    MalformedHex,
    MissingCredential,
    ProviderError,
    SigningFailure,
    StorageFailure,
)
from .hexcodec import bytes_from_hex, bytes_from_number, hex_from_bytes, hex_from_number
from .pipeline import prepare_deployment, run_deployment
from .signer import MnemonicCredential, PrivateKeyCredential, SignedTransaction, Signer, credential_from_config
from .transactions import TransactionOverrides, UnsignedTransaction, build_transaction

__all__ = [
    "CompiledContract",
    "CompilerOutputError",
    "ConfigurationError",
    "DeploymentArtifact",
    "DeploymentError",
    "InvalidAddress",
    "InvalidCredential",
    "InvalidNonce",
    "InvalidTransaction",
    "MalformedHex",
    "MissingCredential",
    "MnemonicCredential",
    "PrivateKeyCredential",
    "ProviderError",
    "SignedTransaction",
    "Signer",
    "SignerConfig",
    "SigningFailure",
    "StorageFailure",
    "TransactionOverrides",
    "UnsignedTransaction",
    "VerificationReport",
    "address_bytes",
    "build_transaction",
    "bytes_from_hex",
    "bytes_from_number",
    "credential_from_config",
    "derive_contract_address",
    "hex_from_bytes",
    "hex_from_number",
    "load_compiler_output",
    "load_deployment_artifact",
    "load_signer_config",
    "prepare_deployment",
    "run_deployment",
    "select_contract",
    "verify_artifact",
    "write_bytecode",
    "write_deployment_artifact",
]
