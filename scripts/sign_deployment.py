#!/usr/bin/env python3
"""Sign the deployment proxy transaction for one chain and write its artifacts.

Example usage::

    PK=0x... python scripts/sign_deployment.py 1 --gas-price 20000000000

The transaction is signed offline and never broadcast. The secret is read
from ``MNEMONIC`` or ``PK`` (a ``.env`` file is honoured).
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from deterministic_deployment.artifacts import verify_artifact
from deterministic_deployment.compiler import (
    PROXY_CONTRACT_NAME,
    PROXY_SOURCE_UNIT,
    load_compiler_output,
    select_contract,
)
from deterministic_deployment.config import (
    DEFAULT_ARTIFACTS_DIR,
    DEFAULT_COMPILER_OUTPUT,
    SignerConfig,
    load_signer_config,
)
from deterministic_deployment.errors import DeploymentError
from deterministic_deployment.pipeline import run_deployment
from deterministic_deployment.signer import Signer
from deterministic_deployment.transactions import TransactionOverrides


def _unsigned_int(value: str) -> int:
    try:
        parsed = int(value, 0)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"{value!r} is not an integer") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError(f"{value!r} must be non-negative")
    return parsed


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Sign the deterministic deployment transaction for a chain.")
    parser.add_argument("chain_id", type=_unsigned_int, help="Target chain identifier")
    parser.add_argument("--gas-price", "--gasPrice", dest="gas_price", type=_unsigned_int, default=None,
                        help="Gas price in wei (default: 100 gwei)")
    parser.add_argument("--gas-limit", "--gasLimit", dest="gas_limit", type=_unsigned_int, default=None,
                        help="Gas limit (default: 100000)")
    parser.add_argument("--nonce", type=_unsigned_int, default=None, help="Signer nonce (default: 0)")
    parser.add_argument(
        "--compiler-output",
        type=Path,
        default=DEFAULT_COMPILER_OUTPUT,
        help="Compiler standard-JSON output holding the proxy bytecode",
    )
    parser.add_argument("--source-unit", default=PROXY_SOURCE_UNIT, help="Source unit to take the contract from")
    parser.add_argument("--contract", default=PROXY_CONTRACT_NAME, help="Contract name within the source unit")
    parser.add_argument("--artifacts-dir", type=Path, default=DEFAULT_ARTIFACTS_DIR, help="Where artifacts are written")
    parser.add_argument("--verify", action="store_true", help="Re-check the written artifact after signing")
    parser.add_argument("--log-level", default="INFO", help="Logging verbosity (DEBUG, INFO, WARNING)")
    return parser.parse_args(argv)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(message)s",
    )


def main(argv: Optional[Sequence[str]] = None, config: Optional[SignerConfig] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level)

    if config is None:
        config = load_signer_config()
    overrides = TransactionOverrides(gas_price=args.gas_price, gas_limit=args.gas_limit, nonce=args.nonce)

    try:
        contract = select_contract(load_compiler_output(args.compiler_output), args.source_unit, args.contract)
        with Signer.from_config(config) as signer:
            artifact = run_deployment(contract, args.chain_id, signer, args.artifacts_dir, overrides)
    except DeploymentError as exc:
        logging.error("Deployment signing failed: %s", exc)
        print(f"[❌] {exc}", file=sys.stderr)
        return 1

    if args.verify:
        report = verify_artifact(artifact, contract.bytecode)
        if not report.ok:
            for problem in report.problems:
                logging.error("Verification: %s", problem)
            return 1
        logging.info("Verified artifact for chain %d", args.chain_id)

    print(json.dumps(artifact.as_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
