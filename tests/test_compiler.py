import json
from pathlib import Path

import pytest

from deterministic_deployment.compiler import (
    PROXY_CONTRACT_NAME,
    PROXY_SOURCE_UNIT,
    load_compiler_output,
    select_contract,
)
from deterministic_deployment.errors import CompilerOutputError

from .vectors import PROXY_BYTECODE


def test_selects_the_proxy_by_default(compiler_output_file: Path):
    contract = select_contract(load_compiler_output(compiler_output_file))
    assert (contract.source_unit, contract.name) == (PROXY_SOURCE_UNIT, PROXY_CONTRACT_NAME)
    assert contract.bytecode_hex == PROXY_BYTECODE
    assert contract.bytecode == bytes.fromhex(PROXY_BYTECODE)
    assert contract.metadata == {"metadata": "{}"}


def test_accepts_prefixed_bytecode(compiler_output):
    compiler_output["contracts"][PROXY_SOURCE_UNIT][PROXY_CONTRACT_NAME]["evm"]["bytecode"]["object"] = (
        "0x" + PROXY_BYTECODE.upper()
    )
    assert select_contract(compiler_output).bytecode_hex == PROXY_BYTECODE


@pytest.mark.parametrize(
    "kwargs",
    [{"source_unit": "missing.yul"}, {"contract_name": "Missing"}],
)
def test_missing_contract(compiler_output, kwargs):
    with pytest.raises(CompilerOutputError):
        select_contract(compiler_output, **kwargs)


@pytest.mark.parametrize("bytecode", ["", "0x", "xyz"])
def test_unusable_bytecode(compiler_output, bytecode):
    compiler_output["contracts"][PROXY_SOURCE_UNIT][PROXY_CONTRACT_NAME]["evm"]["bytecode"]["object"] = bytecode
    with pytest.raises(CompilerOutputError):
        select_contract(compiler_output)


def test_compiler_errors_are_surfaced(compiler_output):
    compiler_output["errors"] = [
        {"severity": "warning", "message": "unused"},
        {"severity": "error", "formattedMessage": "ParserError: bad token"},
    ]
    with pytest.raises(CompilerOutputError, match="ParserError: bad token"):
        select_contract(compiler_output)


def test_missing_and_invalid_output_files(tmp_path: Path):
    with pytest.raises(CompilerOutputError):
        load_compiler_output(tmp_path / "absent.json")

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(CompilerOutputError):
        load_compiler_output(broken)

    listing = tmp_path / "list.json"
    listing.write_text(json.dumps([1, 2]), encoding="utf-8")
    with pytest.raises(CompilerOutputError):
        load_compiler_output(listing)
