"""
mfc-extract-keys: extract keys from raw MIFARE Classic dump files and convert
them to the mfocGUI or Proxmark key format.

Usage:
    mfc-extract-keys [-hmpv] [-o DIR] <input_file>

Examples:
    mfc-extract-keys -m mycard.mfd        # a<uid>.dump + b<uid>.dump
    mfc-extract-keys -p mycard.mfd        # <uid>.bin
    mfc-extract-keys -mp -o keys/ my.mfd  # both formats into keys/
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from mfckeys import config
from mfckeys.errors import KeyExtractError, UsageError
from mfckeys.rfid.key_table import render_key_table
from mfckeys.rfid.key_writer import OutputFormat
from mfckeys.service import extract_key_files

logger = logging.getLogger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting with status 2."""

    def error(self, message):
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="mfc-extract-keys",
        description="Extract keys from a raw MIFARE Classic 1K/4K dump "
                    "and convert them to mfocGUI or Proxmark key files.",
        epilog="Example: mfc-extract-keys -m mycard.mfd",
    )
    parser.add_argument(
        "-m", "--mfoc", action="store_true",
        help="convert a raw dump to the mfocGUI key format",
    )
    parser.add_argument(
        "-p", "--proxmark", action="store_true",
        help="convert a raw dump to the proxmark key format",
    )
    parser.add_argument(
        "-v", "--version", action="version", version=config.VERSION,
        help="print the version and exit",
    )
    parser.add_argument(
        "-o", "--output-dir", default=str(config.OUTPUT_DIR),
        help="directory for the key files (default: %(default)s)",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true",
        help="do not print the key table",
    )
    parser.add_argument("input_file", nargs="?", help="raw .mfd dump (1024 or 4096 bytes)")
    return parser


def selected_formats(args: argparse.Namespace) -> list[OutputFormat]:
    formats = []
    if args.mfoc:
        formats.append(OutputFormat.MFOC_DUMP)
    if args.proxmark:
        formats.append(OutputFormat.PROXMARK_BIN)
    return formats


def parse_args(parser: argparse.ArgumentParser,
               argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    args = parser.parse_args(argv)
    if not selected_formats(args):
        raise UsageError("one of -m/--mfoc or -p/--proxmark is required")
    if not args.input_file:
        raise UsageError("the input_file argument is required")
    return args


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main entry point.

    Args:
        argv: Command line arguments (defaults to sys.argv).

    Returns:
        Exit code (0 for success, 1 for any failure).
    """
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    parser = build_parser()

    try:
        args = parse_args(parser, argv)
    except UsageError as e:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: {e}", file=sys.stderr)
        return 1

    try:
        card, written = extract_key_files(
            args.input_file, selected_formats(args), args.output_dir
        )
    except KeyExtractError as e:
        logger.debug("Extraction from %s failed", args.input_file, exc_info=True)
        print(e, file=sys.stderr)
        return 1

    if not args.quiet:
        print(render_key_table(card))
        print()
    for path in written:
        print(f"Wrote keys to: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
