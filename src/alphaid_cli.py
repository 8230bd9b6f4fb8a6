#!/usr/bin/env python3
#-*- coding: utf-8 -*-
#
# AlphaId: Short Obfuscated Integer Identifiers
# Copyright (C) 2025 Peter J. Marko
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
#
# Filename: src/alphaid_cli.py

"""
Command-Line Interface for Encoding and Decoding AlphaIds.

Encodes integers into short IDs or decodes IDs back into integers using the
codec settings from `config.ini` (section `[AlphaId]`), any `ALPHAID_*`
environment overrides, and finally the flags given on the command line.

Results are printed to standard output, one per line and in input order, so
the command can be used from shell scripts. Items that fail (a malformed
number, an unknown symbol, an overflow) are reported on standard error and the
command exits with status 1 after processing the remaining items.

Options go before the command; everything after the command is a value.
IDs may start with a symbol such as '-', so the values are always passed to
the command after an implicit `--`; writing the `--` yourself also works. With
no values on the command line, values are read from standard input, one per
line.

Usage:
    alphaid encode 0 1 730087
    alphaid --width u32 decode 90F7qb
    alphaid --pad 2 decode -b
    alphaid --pad 2 decode -- -b
    alphaid --pad 6 --alphabet ABCDEFGHIJKLMNOPQRSTUVWXYZ encode 42
    cut -d, -f1 ids.csv | alphaid encode
"""

import argparse
import logging
import sys
from pathlib import Path

from colorama import Fore, init

# Ensure the src directory is in the Python path
sys.path.append(str(Path(__file__).resolve().parent))
from alphabet_config import ConfigurationError, IntegerWidth  # noqa: E402
from alphaid import AlphaIdError, decode, encode  # noqa: E402
from config_loader import APP_CONFIG, load_alphabet_config  # noqa: E402

# Initialize colorama
init(autoreset=True)

logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')

COMMANDS = ("encode", "decode")
OPTIONS_WITH_VALUES = ("--alphabet", "--pad", "--width")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Encode integers to short IDs and decode them back.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument("--alphabet", type=str, default=None,
                        help="Symbol set to use (defaults to config.ini).")
    parser.add_argument("--pad", type=int, default=None,
                        help="Minimum length of encoded IDs (defaults to config.ini).")
    parser.add_argument("--width", type=str, default=None,
                        choices=[w.name.lower() for w in IntegerWidth],
                        help="Unsigned integer width (defaults to config.ini).")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")

    subparsers = parser.add_subparsers(dest="command", required=True)
    encode_parser = subparsers.add_parser("encode", help="Encode integers into IDs.")
    encode_parser.add_argument("values", nargs="*", help="Non-negative integers to encode (default: stdin).")
    decode_parser = subparsers.add_parser("decode", help="Decode IDs into integers.")
    decode_parser.add_argument("values", nargs="*", help="Encoded IDs to decode (default: stdin).")
    return parser


def separate_values(argv: list) -> list:
    """
    Inserts '--' after the command so values such as '-b' are not read as options.
    """
    argv = list(argv)
    i = 0
    while i < len(argv):
        token = argv[i]
        if token in COMMANDS:
            if i + 1 < len(argv) and argv[i + 1] not in ("--", "-h", "--help"):
                argv.insert(i + 1, "--")
            break
        if token == "--":
            break
        i += 2 if token in OPTIONS_WITH_VALUES else 1
    return argv


def run_command(command: str, values: list, config) -> tuple[list, list]:
    """
    Encodes or decodes each value.

    Returns:
        tuple: (results, failures) where results holds the successful outputs
        in order and failures holds (value, error message) pairs.
    """
    results = []
    failures = []
    for value in values:
        try:
            if command == "encode":
                results.append(encode(config, int(value)))
            else:
                results.append(str(decode(config, value)))
        except (AlphaIdError, ValueError) as e:
            failures.append((value, str(e)))
    return results, failures


def main(argv=None):
    """Parses arguments, builds the codec configuration and runs the command."""
    if argv is None:
        argv = sys.argv[1:]
    args = _build_parser().parse_args(separate_values(argv))
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        config = load_alphabet_config(APP_CONFIG, alphabet=args.alphabet, pad=args.pad, width=args.width)
    except ConfigurationError as e:
        print(f"{Fore.RED}ERROR: Invalid codec configuration: {e}", file=sys.stderr)
        sys.exit(2)

    logging.debug(f"Using base {config.base}, pad {config.pad}, width {config.width.name.lower()}.")

    values = args.values or [line.strip() for line in sys.stdin if line.strip()]
    results, failures = run_command(args.command, values, config)
    for result in results:
        print(result)
    for value, message in failures:
        print(f"{Fore.RED}ERROR: Could not {args.command} '{value}': {message}", file=sys.stderr)

    if failures:
        sys.exit(1)


if __name__ == "__main__":
    main()

# === End of src/alphaid_cli.py ===
