"""
Command-line inspector: decode a bencoded file, print the tree, and check
that re-encoding it gives back the same bytes.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from . import config
from ._decoder import decode
from ._encoder import encode
from ._exceptions import BencodeDecodeError
from ._pretty import format_value

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_MISMATCH = 1
EXIT_ERROR = 2


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format=config.LOG_FORMAT,
        datefmt=config.LOG_DATE_FORMAT,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bencoding",
        description="Decode a bencoded file and verify it re-encodes byte for byte.",
    )
    parser.add_argument("path", type=Path, help="file to inspect, e.g. a .torrent")
    parser.add_argument(
        "--show-encoded",
        action="store_true",
        help="print the re-encoded bytes",
    )
    parser.add_argument(
        "--no-verify",
        dest="verify",
        action="store_false",
        help="skip the round-trip comparison",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        metavar="N",
        help=f"maximum container nesting (default: {config.MAX_DEPTH})",
    )
    parser.add_argument(
        "--strict-keys",
        action="store_true",
        help="reject dictionaries with duplicate keys",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser


def run(args: argparse.Namespace) -> int:
    try:
        raw = args.path.read_bytes()
    except OSError as exc:
        logger.error("cannot read %s: %s", args.path, exc)
        return EXIT_ERROR
    logger.debug("read %d bytes from %s", len(raw), args.path)

    try:
        value = decode(raw, max_depth=args.max_depth, reject_duplicate_keys=args.strict_keys or None)
    except BencodeDecodeError as exc:
        logger.error("%s is not valid bencode: %s", args.path, exc)
        return EXIT_ERROR

    print(format_value(value))

    encoded = encode(value)
    if args.show_encoded:
        print(repr(encoded))

    if not args.verify:
        return EXIT_OK
    if encoded != raw:
        logger.warning("%s is not in canonical form: re-encoding differs (%d vs %d bytes)", args.path, len(encoded), len(raw))
        return EXIT_MISMATCH
    logger.info("round trip OK (%d bytes)", len(raw))
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
