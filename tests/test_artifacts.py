import json
from dataclasses import replace
from pathlib import Path

import pytest

from deterministic_deployment.artifacts import (
    DeploymentArtifact,
    bytecode_path,
    deployment_path,
    load_deployment_artifact,
    verify_artifact,
    write_bytecode,
    write_deployment_artifact,
)
from deterministic_deployment.errors import StorageFailure
from deterministic_deployment.pipeline import prepare_deployment

from .vectors import DEV_ADDRESS, DEV_CREATE_ADDRESSES, PROXY_BYTECODE

SAMPLE = DeploymentArtifact(
    gas_price=100000000000,
    gas_limit=100000,
    signer_address="0x3fAB184622Dc19b6109349B94811493BF2a45362",
    transaction="0xf8a58085174876e800830186a08080b853604580600e600039806000f350fe",
    contract_address="0x4e59b44847b379578588920cA78FbF26c0B4956C",
)


def test_deployment_record_layout():
    assert SAMPLE.to_json() == (
        "{\n"
        '\t"gasPrice": 100000000000,\n'
        '\t"gasLimit": 100000,\n'
        '\t"signerAddress": "0x3fAB184622Dc19b6109349B94811493BF2a45362",\n'
        '\t"transaction": "0xf8a58085174876e800830186a08080b853604580600e600039806000f350fe",\n'
        '\t"address": "0x4e59b44847b379578588920cA78FbF26c0B4956C"\n'
        "}\n"
    )


def test_write_and_load_round_trip(tmp_path: Path):
    path = write_deployment_artifact(tmp_path, 1, SAMPLE)
    assert path == deployment_path(tmp_path, 1) == tmp_path / "1" / "deployment.json"
    assert load_deployment_artifact(path) == SAMPLE


def test_rewriting_is_byte_identical(tmp_path: Path):
    path = write_deployment_artifact(tmp_path, 137, SAMPLE)
    first = path.read_bytes()
    write_deployment_artifact(tmp_path, 137, SAMPLE)
    assert path.read_bytes() == first
    assert sorted(p.name for p in path.parent.iterdir()) == ["deployment.json"]


def test_write_bytecode_strips_prefix(tmp_path: Path):
    path = write_bytecode(tmp_path, "0x" + PROXY_BYTECODE)
    assert path == bytecode_path(tmp_path)
    assert path.read_text(encoding="utf-8") == PROXY_BYTECODE


def test_unwritable_location_raises_storage_failure(tmp_path: Path):
    blocker = tmp_path / "blocked"
    blocker.write_text("not a directory", encoding="utf-8")
    with pytest.raises(StorageFailure) as excinfo:
        write_deployment_artifact(blocker, 1, SAMPLE)
    assert excinfo.value.stage == "storage"
    assert excinfo.value.__cause__ is not None


def test_load_rejects_missing_and_malformed_records(tmp_path: Path):
    with pytest.raises(StorageFailure):
        load_deployment_artifact(tmp_path / "missing.json")

    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"gasPrice": 1}), encoding="utf-8")
    with pytest.raises(StorageFailure):
        load_deployment_artifact(bad)


def test_verify_accepts_a_freshly_signed_artifact(signer):
    artifact = prepare_deployment(PROXY_BYTECODE, 1, signer)
    report = verify_artifact(artifact, bytes.fromhex(PROXY_BYTECODE))
    assert report.ok, report.problems
    assert report.recovered_signer == DEV_ADDRESS
    assert report.derived_address == DEV_CREATE_ADDRESSES[0]
    assert report.chain_id == 1
    assert report.nonce == 0


def test_verify_reports_every_mismatch(signer):
    artifact = prepare_deployment(PROXY_BYTECODE, 1, signer)
    tampered = replace(
        artifact,
        gas_price=1,
        gas_limit=2,
        signer_address="0x" + "11" * 20,
        contract_address="0x" + "22" * 20,
    )
    report = verify_artifact(tampered, b"\x00")
    assert not report.ok
    assert len(report.problems) == 5


def test_verify_reports_undecodable_transactions():
    report = verify_artifact(replace(SAMPLE, transaction="0xzz"))
    assert not report.ok
    assert report.problems[0].startswith("transaction cannot be decoded")
