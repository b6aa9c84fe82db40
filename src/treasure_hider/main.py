"""
treasure-hider CLI entry point.

Parses command-line arguments and dispatches to subcommands.

Usage:
    treasure-hider bury --provider URL --address ADDR --sell-token-address ADDR \\
        --buy-token-address ADDR --buy-amount N --app-data HEX --duration SECS \\
        --start-time TS --d0 HEX --d1 HEX --num-decoys N [--swarm CAC | --ipfs CID | --emit-proof]
    treasure-hider dig --provider URL --address ADDR ... --receiver ADDR \\
        --zk-proof-file proof.json --merkle-node HEX [--merkle-node HEX ...] --salt HEX
    treasure-hider prepare
    treasure-hider generate-params --address ADDR

Environment Variables (a .env file is loaded):
    TREASURE_RPC_URL            Default for --provider
    TREASURE_LOOT_HANDLER       Loot order handler contract address
    TREASURE_COMPOSABLE_COW     ComposableCoW contract address
    TREASURE_RPC_TIMEOUT        JSON-RPC timeout in seconds
    TREASURE_LOG_LEVEL          Log level (default: INFO)
"""

from __future__ import annotations

import argparse
import getpass
import json
import logging
import os
import sys
import traceback
from typing import Sequence

from dotenv import load_dotenv
from eth_utils import is_address, to_checksum_address

from . import __version__
from .commands import BuryOptions, DigOptions, bury, dig
from .config import ENV_PREFIX, HiderConfig, load_config
from .errors import (
    InvalidArgumentError,
    ProofNotFoundError,
    ProofVerificationError,
    TreasureHiderError,
)
from .loot import LootParams, compute_receiver_hash, compute_secret_digest, digest_to_bytes32
from .rpc import RpcClient

logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_INVALID_ARGUMENT = 2
EXIT_VERIFICATION_FAILED = 3


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the CLI. Logs go to stderr, results to stdout."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


def parse_address(value: str) -> str:
    if not is_address(value):
        raise argparse.ArgumentTypeError(f"{value} must be a valid ethereum address")
    return to_checksum_address(value)


def parse_uint(value: str) -> int:
    try:
        parsed = int(value, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value} must be a number")
    if parsed < 0:
        raise argparse.ArgumentTypeError(f"{value} must not be negative")
    return parsed


def _add_loot_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--provider",
        type=str,
        default=os.getenv(f"{ENV_PREFIX}RPC_URL"),
        help=f"The url of the ethereum provider (default: ${ENV_PREFIX}RPC_URL)",
    )
    parser.add_argument(
        "--address",
        type=parse_address,
        required=True,
        help="The address of the treasure chest",
    )
    parser.add_argument(
        "--sell-token-address",
        type=parse_address,
        required=True,
        help="The address of the token to sell",
    )
    parser.add_argument(
        "--buy-token-address",
        type=parse_address,
        required=True,
        help="The address of the token to buy",
    )
    parser.add_argument(
        "--buy-amount",
        type=parse_uint,
        required=True,
        help="The amount of the token to buy",
    )
    parser.add_argument("--app-data", type=str, required=True, help="The app data (bytes32)")
    parser.add_argument(
        "--duration",
        type=parse_uint,
        required=True,
        help="The duration of the hunt in seconds",
    )
    parser.add_argument(
        "--start-time",
        type=parse_uint,
        required=True,
        help="The start time of the hunt (unix timestamp)",
    )
    parser.add_argument(
        "--d0", type=str, required=True, help="The first component of the secret's digest"
    )
    parser.add_argument(
        "--d1", type=str, required=True, help="The second component of the secret's digest"
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="treasure-hider",
        description="Hide and find loot conditional orders on ComposableCoW.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--loot-handler",
        type=parse_address,
        default=None,
        help=f"Loot order handler contract (default: ${ENV_PREFIX}LOOT_HANDLER)",
    )
    parser.add_argument(
        "--composable-cow",
        type=parse_address,
        default=None,
        help="ComposableCoW contract (default: canonical deployment)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on error",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- bury command ---
    bury_parser = subparsers.add_parser(
        "bury",
        help="Bury treasure",
        description="Hide the loot order among decoys and output the setRoot transaction.",
    )
    _add_loot_arguments(bury_parser)
    bury_parser.add_argument(
        "--num-decoys",
        type=parse_uint,
        required=True,
        help="The number of orders in the tree, the loot order included",
    )
    bury_parser.add_argument(
        "--salt",
        type=str,
        default=None,
        help="Salt for the loot order (default: freshly random)",
    )
    bury_parser.add_argument(
        "--swarm", type=str, default=None, help="The swarm CAC that contains the proof JSON"
    )
    bury_parser.add_argument(
        "--ipfs", type=str, default=None, help="The IPFS CID that contains the proof JSON"
    )
    bury_parser.add_argument(
        "--emit-proof", action="store_true", default=False, help="Emit the proof on-chain"
    )
    bury_parser.add_argument(
        "--dump-tree",
        type=str,
        default=None,
        help="Write the full Merkle tree (standard-v1 JSON) to this path",
    )
    bury_parser.set_defaults(func=bury_cmd)

    # --- dig command ---
    dig_parser = subparsers.add_parser(
        "dig",
        help="Dig towards the treasure",
        description="Output the getTradeableOrderWithSignature staticcall for the loot order.",
    )
    _add_loot_arguments(dig_parser)
    dig_parser.add_argument(
        "--receiver", type=parse_address, required=True, help="The address of the receiver"
    )
    dig_parser.add_argument(
        "--zk-proof-file", type=str, required=True, help="The proof.json file from zokrates"
    )
    dig_parser.add_argument(
        "--merkle-node",
        dest="merkle_nodes",
        action="extend",
        nargs="+",
        default=None,
        help="The merkle node(s) to use for the proof, in order (none for a single-order tree)",
    )
    dig_parser.add_argument(
        "--salt", type=str, required=True, help="The salt the conditional order was created with"
    )
    dig_parser.set_defaults(func=dig_cmd)

    # --- prepare command ---
    prepare_parser = subparsers.add_parser(
        "prepare",
        help="Prepare a secret phrase for use in a zk proof",
        description=(
            "Prompt for the secret phrases and print the digest parts. "
            "Phrases are hashed without a trailing newline, so digests differ "
            "from tools that hash the line as typed."
        ),
    )
    prepare_parser.set_defaults(func=prepare_cmd)

    # --- generate-params command ---
    params_parser = subparsers.add_parser(
        "generate-params",
        help="Generate the parameters for a zk proof",
        description=(
            "Prompt for the secret phrases and bind them to a receiver address. "
            "Phrases are hashed without a trailing newline, so digests differ "
            "from tools that hash the line as typed."
        ),
    )
    params_parser.add_argument(
        "--address", type=parse_address, required=True, help="The receiver address"
    )
    params_parser.set_defaults(func=generate_params_cmd)

    return parser


def _loot_params(args: argparse.Namespace) -> LootParams:
    return LootParams(
        address=args.address,
        sell_token_address=args.sell_token_address,
        buy_token_address=args.buy_token_address,
        buy_amount=args.buy_amount,
        app_data=args.app_data,
        start_time=args.start_time,
        duration=args.duration,
        d0=args.d0,
        d1=args.d1,
        salt=args.salt,
    )


def _rpc_client(args: argparse.Namespace, config: HiderConfig) -> RpcClient:
    if not args.provider:
        raise InvalidArgumentError(
            f"No provider given. Pass --provider or set {ENV_PREFIX}RPC_URL."
        )
    return RpcClient(args.provider, timeout=config.rpc_timeout)


def bury_cmd(args: argparse.Namespace, config: HiderConfig) -> int:
    """Handle bury command."""
    options = BuryOptions(
        loot=_loot_params(args),
        num_decoys=args.num_decoys,
        swarm=args.swarm,
        ipfs=args.ipfs,
        emit_proof=args.emit_proof,
    )

    with _rpc_client(args, config) as rpc:
        result = bury(options, rpc, config)

    if args.dump_tree:
        with open(args.dump_tree, "w") as f:
            json.dump(result.tree.dump(), f, indent=2)
        logger.info("Merkle tree written to %s", args.dump_tree)

    print(json.dumps(result.to_dict(), indent=2))
    return EXIT_SUCCESS


def dig_cmd(args: argparse.Namespace, config: HiderConfig) -> int:
    """Handle dig command."""
    options = DigOptions(
        loot=_loot_params(args),
        receiver=args.receiver,
        zk_proof_file=args.zk_proof_file,
        merkle_nodes=args.merkle_nodes or [],
    )

    with _rpc_client(args, config) as rpc:
        result = dig(options, rpc, config)

    print(json.dumps(result.to_dict(), indent=2))
    return EXIT_SUCCESS


def _read_phrases() -> tuple[bytes, bytes]:
    previous = getpass.getpass("Previous secret phrase (enter if none): ")
    current = getpass.getpass("Current secret phrase: ")
    if not current:
        raise InvalidArgumentError("The current secret phrase must not be empty")
    return current.encode(), previous.encode()


def prepare_cmd(args: argparse.Namespace, config: HiderConfig) -> int:
    """Handle prepare command."""
    current, previous = _read_phrases()
    digest = compute_secret_digest(current, previous)

    print(
        json.dumps(
            {
                "previous": {"pa": str(digest.pa), "pb": str(digest.pb)},
                "current": {"a": str(digest.a), "b": str(digest.b)},
                "digest": {
                    "d0": str(digest.d0),
                    "d1": str(digest.d1),
                    "d0Bytes32": digest_to_bytes32(digest.d0),
                    "d1Bytes32": digest_to_bytes32(digest.d1),
                },
            },
            indent=2,
        )
    )
    return EXIT_SUCCESS


def generate_params_cmd(args: argparse.Namespace, config: HiderConfig) -> int:
    """Handle generate-params command."""
    current, previous = _read_phrases()
    digest = compute_secret_digest(current, previous)
    receiver, c0, c1 = compute_receiver_hash(args.address, digest.a, digest.b)

    print(
        json.dumps(
            {
                "receiver": str(receiver),
                "current": {"a": str(digest.a), "b": str(digest.b)},
                "digest": {"d0": str(digest.d0), "d1": str(digest.d1)},
                "combined": {"c0": str(c0), "c1": str(c1)},
            },
            indent=2,
        )
    )
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=runtime or network error, 2=invalid arguments,
        3=proof not found or not verified)
    """
    load_dotenv()

    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_INVALID_ARGUMENT

    try:
        config = load_config(
            composable_cow=args.composable_cow,
            loot_handler=args.loot_handler,
            log_level=args.log_level,
        )
    except TreasureHiderError as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_INVALID_ARGUMENT

    setup_logging(level=config.log_level)

    try:
        return args.func(args, config)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except InvalidArgumentError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INVALID_ARGUMENT
    except (ProofNotFoundError, ProofVerificationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VERIFICATION_FAILED
    except Exception as e:
        if args.debug:
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
