"""Shared fixtures for the deterministic deployment tests."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import pytest

from deterministic_deployment.config import SignerConfig
from deterministic_deployment.signer import PrivateKeyCredential, Signer

from .vectors import DEV_PRIVATE_KEY, PROXY_BYTECODE


@pytest.fixture
def signer() -> Signer:
    return Signer(PrivateKeyCredential(DEV_PRIVATE_KEY))


@pytest.fixture
def signer_config() -> SignerConfig:
    return SignerConfig(private_key=DEV_PRIVATE_KEY)


@pytest.fixture
def compiler_output() -> Dict[str, Any]:
    return {
        "contracts": {
            "deterministic-deployment-proxy.yul": {
                "Proxy": {
                    "evm": {"bytecode": {"object": PROXY_BYTECODE}},
                    "metadata": "{}",
                }
            }
        },
        "sources": {"deterministic-deployment-proxy.yul": {"id": 0}},
    }


@pytest.fixture
def compiler_output_file(tmp_path: Path, compiler_output: Dict[str, Any]) -> Path:
    path = tmp_path / "compiler-output.json"
    path.write_text(json.dumps(compiler_output), encoding="utf-8")
    return path
