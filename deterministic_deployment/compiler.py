"""Reading the compiler's standard-JSON output.

Compilation itself happens elsewhere; this module only picks the deployment
payload out of the output file the compiler leaves behind.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Union

from .errors import CompilerOutputError, MalformedHex
from .hexcodec import bytes_from_hex, strip_hex_prefix

_LOGGER = logging.getLogger(__name__)

PROXY_SOURCE_UNIT = "deterministic-deployment-proxy.yul"
PROXY_CONTRACT_NAME = "Proxy"


@dataclass(frozen=True)
class CompiledContract:
    """Creation bytecode and metadata for one compiled contract."""

    source_unit: str
    name: str
    bytecode_hex: str
    metadata: Mapping[str, Any] = field(default_factory=dict, repr=False)

    @property
    def bytecode(self) -> bytes:
        return bytes_from_hex(self.bytecode_hex)


def load_compiler_output(path: Union[str, Path]) -> Dict[str, Any]:
    """Load a compiler standard-JSON output document from ``path``."""

    output_path = Path(path)
    try:
        payload = json.loads(output_path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise CompilerOutputError(f"Compiler output {output_path} does not exist") from exc
    except OSError as exc:
        raise CompilerOutputError(f"Could not read compiler output {output_path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise CompilerOutputError(f"Compiler output {output_path} is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise CompilerOutputError(f"Compiler output {output_path} must be a JSON object")
    return payload


def _fatal_errors(output: Mapping[str, Any]) -> List[str]:
    messages: List[str] = []
    for entry in output.get("errors") or []:
        if not isinstance(entry, Mapping) or entry.get("severity") != "error":
            continue
        messages.append(str(entry.get("formattedMessage") or entry.get("message") or entry))
    return messages


def select_contract(
    output: Mapping[str, Any],
    source_unit: str = PROXY_SOURCE_UNIT,
    contract_name: str = PROXY_CONTRACT_NAME,
) -> CompiledContract:
    """Return ``contracts[source_unit][contract_name]`` from compiler output.

    Raises
    ------
    CompilerOutputError
        If the compiler reported errors, the contract is missing, or its
        ``evm.bytecode.object`` is empty or not hex.
    """

    errors = _fatal_errors(output)
    if errors:
        raise CompilerOutputError("Compilation failed: " + "; ".join(errors))

    contracts = output.get("contracts")
    if not isinstance(contracts, Mapping):
        raise CompilerOutputError("Compiler output has no 'contracts' section")
    unit = contracts.get(source_unit)
    if not isinstance(unit, Mapping):
        raise CompilerOutputError(f"Source unit {source_unit!r} not found in compiler output")
    contract = unit.get(contract_name)
    if not isinstance(contract, Mapping):
        raise CompilerOutputError(f"Contract {contract_name!r} not found in {source_unit!r}")

    try:
        bytecode_hex = contract["evm"]["bytecode"]["object"]
    except (KeyError, TypeError) as exc:
        raise CompilerOutputError(f"{source_unit}:{contract_name} has no evm.bytecode.object") from exc
    if not isinstance(bytecode_hex, str) or not strip_hex_prefix(bytecode_hex):
        raise CompilerOutputError(f"{source_unit}:{contract_name} has empty bytecode")

    bytecode_hex = strip_hex_prefix(bytecode_hex).lower()
    try:
        bytes_from_hex(bytecode_hex)
    except MalformedHex as exc:
        raise CompilerOutputError(f"{source_unit}:{contract_name} bytecode is not hex: {exc}") from exc

    metadata = {key: value for key, value in contract.items() if key != "evm"}
    _LOGGER.debug("Selected %s:%s (%d bytes)", source_unit, contract_name, len(bytecode_hex) // 2)
    return CompiledContract(
        source_unit=source_unit,
        name=contract_name,
        bytecode_hex=bytecode_hex,
        metadata=metadata,
    )


__all__ = [
    "PROXY_CONTRACT_NAME",
    "PROXY_SOURCE_UNIT",
    "CompiledContract",
    "load_compiler_output",
    "select_contract",
]
