"""
Merkle commitment CLI entry point.

Build a Merkle tree over data blocks, print inclusion proofs, and check them.

Usage::

    python -m merkle_commit build a.txt b.txt c.txt
    python -m merkle_commit build --lines records.txt
    python -m merkle_commit show --chunk-size 1024 image.bin
    python -m merkle_commit prove --index 2 a.txt b.txt c.txt > proof.json
    python -m merkle_commit prove --block c.txt a.txt b.txt c.txt > proof.json
    python -m merkle_commit verify --proof proof.json --root <hex> c.txt

Commands:
    build    Print the root digest, leaf count and depth
    show     Draw the tree
    prove    Print the JSON inclusion proof for one leaf, by index or by block;
             exit status 1 if the block is not in the tree
    verify   Check a JSON proof for a block; exit status 0 if valid, 1 if not

Block options (build, show, prove):
    --lines         Every line is a block
    --chunk-size N  Every N bytes is a block
    (default)       Every file is a block; '-' reads stdin
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from merkle_commit.blocks import STDIN_MARKER, read_blocks, read_source
from merkle_commit.merkle import MerkleTree, render_tree, verify_proof
from merkle_commit.metrics import generate_metrics
from merkle_commit.types import MerkleError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_ERROR = 2

LOG_HANDLER_NAME = "merkle-commit"
"""Name of the stderr handler `setup_logging` installs on the root logger."""


class ColoredFormatter(logging.Formatter):
    """Logging formatter with ANSI colors for better readability."""

    # ANSI color codes
    GREY = "\x1b[38;5;244m"
    BLUE = "\x1b[38;5;39m"
    GREEN = "\x1b[38;5;40m"
    YELLOW = "\x1b[38;5;220m"
    RED = "\x1b[38;5;196m"
    BOLD_RED = "\x1b[38;5;196;1m"
    CYAN = "\x1b[38;5;51m"
    RESET = "\x1b[0m"

    LEVEL_COLORS = {
        logging.DEBUG: GREY,
        logging.INFO: GREEN,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: BOLD_RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors."""
        color = self.LEVEL_COLORS.get(record.levelno, self.RESET)

        timestamp = self.formatTime(record, self.datefmt)
        colored_time = f"{self.CYAN}{timestamp}{self.RESET}"
        levelname = f"{color}{record.levelname:8}{self.RESET}"
        name = f"{self.BLUE}{record.name}{self.RESET}"

        return f"{colored_time} {levelname} {name}: {record.getMessage()}"


def setup_logging(verbose: bool = False, no_color: bool = False) -> None:
    """Configure logging to stderr with optional colors."""
    level = logging.DEBUG if verbose else logging.INFO

    handler = logging.StreamHandler()
    handler.setLevel(level)

    if no_color:
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        formatter = ColoredFormatter(datefmt="%Y-%m-%d %H:%M:%S")

    handler.setFormatter(formatter)
    handler.set_name(LOG_HANDLER_NAME)

    root = logging.getLogger()
    root.setLevel(level)

    # Replace the handler of an earlier call instead of stacking a second one.
    for existing in list(root.handlers):
        if existing.get_name() == LOG_HANDLER_NAME:
            root.removeHandler(existing)
    root.addHandler(handler)


def _load_tree(args: argparse.Namespace) -> MerkleTree:
    """Read the blocks named on the command line and build their tree."""
    blocks = read_blocks(args.sources, chunk_size=args.chunk_size, lines=args.lines)
    logger.debug("Loaded %d blocks from %d sources", len(blocks), len(args.sources))
    return MerkleTree.build(blocks, workers=args.workers)


def cmd_build(args: argparse.Namespace) -> int:
    """Print the root, leaf count and depth of the tree."""
    tree = _load_tree(args)
    print(f"root: {tree.root().hex()}")
    print(f"leaves: {tree.leaf_count()}")
    print(f"depth: {tree.depth()}")
    return EXIT_OK


def cmd_show(args: argparse.Namespace) -> int:
    """Draw the tree."""
    tree = _load_tree(args)
    print(render_tree(tree))
    return EXIT_OK


def cmd_prove(args: argparse.Namespace) -> int:
    """Print the JSON inclusion proof for one leaf, chosen by index or by content."""
    if args.block == STDIN_MARKER and STDIN_MARKER in args.sources:
        raise ValueError("stdin cannot supply both the blocks and the --block to prove")

    tree = _load_tree(args)

    if args.block is None:
        index = args.index
    else:
        index = tree.index_of(read_source(args.block))
        if index is None:
            logger.warning(
                "Block %s is not in the tree of %d leaves", args.block, tree.leaf_count()
            )
            return EXIT_INVALID

    proof = tree.proof(index)
    logger.info(
        "Proof for leaf %d of %d against root %s",
        index,
        tree.leaf_count(),
        tree.root().hex(),
    )
    print(proof.to_json(indent=2))
    return EXIT_OK


def cmd_verify(args: argparse.Namespace) -> int:
    """Check a JSON proof for a block against a trusted root."""
    if args.proof == STDIN_MARKER and args.block == STDIN_MARKER:
        raise ValueError("stdin cannot supply both the proof and the block")

    proof_text = read_source(args.proof)
    leaf = read_source(args.block)

    if verify_proof(proof_text, leaf, bytes.fromhex(args.root), leaf_count=args.leaf_count):
        print("valid")
        return EXIT_OK

    print("invalid")
    return EXIT_INVALID


def _add_block_arguments(parser: argparse.ArgumentParser) -> None:
    """Arguments shared by the commands that build a tree."""
    parser.add_argument(
        "sources",
        nargs="+",
        help="Files to read blocks from, in order ('-' for stdin)",
    )
    split = parser.add_mutually_exclusive_group()
    split.add_argument(
        "--lines",
        action="store_true",
        help="Treat every line as a block",
    )
    split.add_argument(
        "--chunk-size",
        type=int,
        default=None,
        help="Cut every source into blocks of this many bytes",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Threads used to hash wide levels (default: MERKLE_BUILD_WORKERS or 1)",
    )


def _hex_digest(value: str) -> str:
    """argparse type for a hex-encoded digest."""
    try:
        bytes.fromhex(value.removeprefix("0x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a hex string: {value!r}") from None
    return value.removeprefix("0x")


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for all commands."""
    parser = argparse.ArgumentParser(
        prog="merkle-commit",
        description="Merkle commitments and inclusion proofs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored logging output",
    )
    parser.add_argument(
        "--metrics",
        action="store_true",
        help="Print Prometheus metrics to stderr when done",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    build = commands.add_parser("build", help="Print the root digest, leaf count and depth")
    _add_block_arguments(build)
    build.set_defaults(handler=cmd_build)

    show = commands.add_parser("show", help="Draw the tree")
    _add_block_arguments(show)
    show.set_defaults(handler=cmd_show)

    prove = commands.add_parser("prove", help="Print the JSON inclusion proof for one leaf")
    target = prove.add_mutually_exclusive_group(required=True)
    target.add_argument("--index", type=int, help="Leaf index, 0 is leftmost")
    target.add_argument(
        "--block",
        default=None,
        help="File holding the block to prove ('-' for stdin); exit status 1 if absent",
    )
    _add_block_arguments(prove)
    prove.set_defaults(handler=cmd_prove)

    verify = commands.add_parser("verify", help="Check a JSON proof for a block")
    verify.add_argument("--proof", required=True, help="Proof JSON file ('-' for stdin)")
    verify.add_argument(
        "--root",
        required=True,
        type=_hex_digest,
        help="Trusted root digest (hex)",
    )
    verify.add_argument(
        "--leaf-count",
        type=int,
        default=None,
        help="Number of leaves in the committed tree, if known",
    )
    verify.add_argument("block", help="File holding the claimed block ('-' for stdin)")
    verify.set_defaults(handler=cmd_verify)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose, args.no_color)

    try:
        status = args.handler(args)
    except (MerkleError, OSError, ValueError) as e:
        logger.error("%s", e)
        status = EXIT_ERROR

    if args.metrics:
        sys.stderr.write(generate_metrics().decode())

    return status


if __name__ == "__main__":
    sys.exit(main())
