#!/usr/bin/env python3
"""Query a node for the gas the deployment proxy needs and the current gas price."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

from deterministic_deployment.compiler import load_compiler_output, select_contract
from deterministic_deployment.config import DEFAULT_COMPILER_OUTPUT, load_provider_config
from deterministic_deployment.errors import DeploymentError
from deterministic_deployment.gas import connect, estimate_deployment


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--rpc", default=None, help="JSON-RPC endpoint (defaults to the RPC environment variable)")
    parser.add_argument("--compiler-output", type=Path, default=DEFAULT_COMPILER_OUTPUT)
    parser.add_argument("--json", action="store_true", help="Emit the estimate as JSON")
    parser.add_argument("--log-level", default="WARNING", help="Logging verbosity (DEBUG, INFO, WARNING)")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None, web3: Any = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s | %(levelname)s | %(message)s",
    )

    try:
        contract = select_contract(load_compiler_output(args.compiler_output))
        if web3 is None:
            web3 = connect(load_provider_config(rpc_url=args.rpc).rpc_url)
        estimate = estimate_deployment(web3, contract.bytecode)
    except DeploymentError as exc:
        print(f"[❌] {exc}", file=sys.stderr)
        return 1

    if args.json:
        json.dump(estimate.as_dict(), sys.stdout, indent=2)
        sys.stdout.write("\n")
    else:
        print(f"Chain ID:  {estimate.chain_id}")
        print(f"Estimate:  {estimate.gas}")
        print(f"Gas price: {estimate.gas_price} wei ({estimate.gas_price_gwei} gwei)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
