"""
zkcall command line
===================

Usage:
    zkcall encode --proof proof.json --public public.json
    zkcall deploy --contract Groth16Verifier
    zkcall verify --contract ECDSAGroth16Verifier --address 0x... \\
        --proof proof-ecdsa.json --public public-ecdsa.json

Settings come from the environment / `.env` (see zkcall.config);
command line flags take precedence.
"""

import argparse
import asyncio
import sys
from collections.abc import Sequence

from zkcall import __version__
from zkcall.blockchain import ContractClient, ContractClientError, create_contract_client
from zkcall.config import Settings, get_settings
from zkcall.logging import bind_context, clear_context, get_logger, setup_logging
from zkcall.workflows import deploy_verifier, submit_proof_files
from zkcall.zk import CalldataError, DocumentError, encode_calldata, load_proof, load_public_signals

logger = get_logger(__name__)


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    verifier = settings.verifier

    parser = argparse.ArgumentParser(
        prog="zkcall",
        description="Encode Groth16 proofs for on-chain verifiers and submit them",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    commands = parser.add_subparsers(dest="command", required=True)

    def add_document_args(sub: argparse.ArgumentParser) -> None:
        sub.add_argument("--proof", default=str(verifier.proof_path),
                         help=f"Proof JSON (default: {verifier.proof_path})")
        sub.add_argument("--public", default=str(verifier.public_path),
                         help=f"Public signals JSON (default: {verifier.public_path})")
        sub.add_argument("--strict", action="store_true", default=verifier.strict_field_check,
                         help="Reject values outside the BN254 fields")

    encode = commands.add_parser("encode", help="Print verifyProof calldata as JSON")
    add_document_args(encode)

    deploy = commands.add_parser("deploy", help="Deploy a verifier contract")
    deploy.add_argument("--contract", default=verifier.contract_name,
                        help=f"Contract name (default: {verifier.contract_name})")

    verify = commands.add_parser("verify", help="Submit a proof to a deployed verifier")
    verify.add_argument("--contract", default=verifier.contract_name,
                        help=f"Contract name (default: {verifier.contract_name})")
    verify.add_argument("--address", default=verifier.address,
                        required=not verifier.address,
                        help="Deployed verifier address")
    add_document_args(verify)

    return parser


async def run_command(
    args: argparse.Namespace,
    settings: Settings,
    client: ContractClient | None = None,
) -> int:
    """Execute a parsed command; returns the process exit status."""
    if args.command == "encode":
        calldata = encode_calldata(
            load_proof(args.proof),
            load_public_signals(args.public),
            strict=args.strict,
        )
        print(calldata.to_json())
        return 0

    client = client or create_contract_client(settings)
    bind_context(network=settings.network.name, contract=args.contract)
    try:
        async with client:
            if args.command == "deploy":
                receipt = await deploy_verifier(client, args.contract)
                print(f"{args.contract} deployed to: {receipt.address}")
                return 0

            confirmation = await submit_proof_files(
                client,
                args.contract,
                args.address,
                proof_path=args.proof,
                public_path=args.public,
                strict=args.strict,
            )
            print(f"Proof verification transaction confirmed! TX Hash: {confirmation.tx_hash}")
            return 0
    finally:
        clear_context()


def main(argv: Sequence[str] | None = None) -> int:
    settings = get_settings()
    setup_logging(settings.log_level.value, json_logs=settings.json_logs)

    args = build_parser(settings).parse_args(argv)

    try:
        return asyncio.run(run_command(args, settings))
    except (CalldataError, DocumentError, ContractClientError) as e:
        logger.error("command_failed", command=args.command, error=str(e))
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
