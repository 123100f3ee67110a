"""The sequential sign-and-persist pipeline.

Everything that can fail for a non-I/O reason happens in
:func:`prepare_deployment`; storage is touched only once a complete artifact
exists.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Union

from .addresses import derive_contract_address
from .artifacts import DeploymentArtifact, write_bytecode, write_deployment_artifact
from .compiler import CompiledContract
from .signer import Signer
from .transactions import TransactionOverrides, build_transaction

_LOGGER = logging.getLogger(__name__)


def prepare_deployment(
    bytecode: Union[bytes, str],
    chain_id: int,
    signer: Signer,
    overrides: Union[TransactionOverrides, Mapping[str, Any], None] = None,
) -> DeploymentArtifact:
    """Assemble, sign and derive the deployment for ``chain_id``."""

    tx = build_transaction(bytecode, chain_id, overrides)
    _LOGGER.debug("Assembled transaction %s", tx.describe())

    signed = signer.sign(tx)
    signer_address = signer.get_address()
    contract_address = derive_contract_address(signer_address, tx.nonce)
    _LOGGER.info("Signer %s deploys to %s at nonce %d", signer_address, contract_address, tx.nonce)

    return DeploymentArtifact(
        gas_price=tx.gas_price,
        gas_limit=tx.gas_limit,
        signer_address=signer_address,
        transaction=signed.raw_hex,
        contract_address=contract_address,
    )


def run_deployment(
    contract: CompiledContract,
    chain_id: int,
    signer: Signer,
    artifacts_dir: Union[str, Path],
    overrides: Union[TransactionOverrides, Mapping[str, Any], None] = None,
) -> DeploymentArtifact:
    """Prepare the deployment for ``contract`` and persist it under ``artifacts_dir``."""

    artifact = prepare_deployment(contract.bytecode, chain_id, signer, overrides)
    write_bytecode(artifacts_dir, contract.bytecode_hex)
    write_deployment_artifact(artifacts_dir, chain_id, artifact)
    return artifact


__all__ = ["prepare_deployment", "run_deployment"]
