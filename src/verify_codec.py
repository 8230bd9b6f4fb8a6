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
# Filename: src/verify_codec.py

"""
Round-trip verifier for an AlphaId configuration.

Sweeps a range of integers and checks that `decode(encode(n)) == n` for every
sampled value. With `--full` it walks the entire range of the configured
integer width, which is practical for u16 (and, given patience, u32 with a
stride). The sweep always includes the width's maximum value, the edge most
likely to expose an overflow in the rotation step.

A mismatch or an unexpected codec error counts as a failure. The script
prints the first few failures and exits with status 1 if there are any.

Usage:
    python src/verify_codec.py --width u16 --pad 4 --full
    python src/verify_codec.py --width u32 --pad 4 --full --step 9973
    python src/verify_codec.py --start 0 --stop 1000000
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable

from colorama import Fore, init
from tqdm import tqdm

# Ensure the src directory is in the Python path
sys.path.append(str(Path(__file__).resolve().parent))
from alphabet_config import AlphabetConfig, ConfigurationError  # noqa: E402
from alphaid import AlphaIdError, decode, encode  # noqa: E402
from config_loader import APP_CONFIG, load_alphabet_config  # noqa: E402

# Initialize colorama
init(autoreset=True)

logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')

MAX_REPORTED_FAILURES = 10


def sweep_values(config: AlphabetConfig, start: int, stop: int, step: int = 1) -> Iterable[int]:
    """Yields start, start+step, ... below stop, then the width maximum if it is in range."""
    stop = min(stop, config.max_value + 1)
    yield from range(start, stop, step)
    last = config.max_value
    if start <= last < stop and (last - start) % step:
        yield last


def verify_round_trip(config: AlphabetConfig, values: Iterable[int], total: int | None = None,
                      show_progress: bool = True) -> tuple[int, list]:
    """
    Checks decode(encode(n)) == n for each value.

    Returns:
        tuple: (number of values checked, list of (value, encoded, problem)).
    """
    checked = 0
    failures = []
    for value in tqdm(values, total=total, desc="Verifying", ncols=80, disable=not show_progress):
        checked += 1
        encoded = None
        try:
            encoded = encode(config, value)
            decoded = decode(config, encoded)
        except AlphaIdError as e:
            failures.append((value, encoded, f"{type(e).__name__}: {e}"))
            continue
        if decoded != value:
            failures.append((value, encoded, f"decoded to {decoded}"))
        elif len(encoded) < config.pad:
            failures.append((value, encoded, f"shorter than pad {config.pad}"))
    return checked, failures


def main():
    """Parses arguments, runs the sweep and reports the result."""
    parser = argparse.ArgumentParser(
        description="Verify that an AlphaId configuration round-trips.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument("--start", type=int, default=0, help="First value to check.")
    parser.add_argument("--stop", type=int, default=100000, help="Stop before this value.")
    parser.add_argument("--step", type=int, default=1, help="Distance between checked values.")
    parser.add_argument("--full", action="store_true", help="Sweep the whole range of the integer width.")
    parser.add_argument("--alphabet", type=str, default=None, help="Override the configured alphabet.")
    parser.add_argument("--pad", type=int, default=None, help="Override the configured pad.")
    parser.add_argument("--width", type=str, default=None, help="Override the configured integer width.")
    parser.add_argument("--quiet", action="store_true", help="Hide the progress bar.")
    args = parser.parse_args()

    if args.start < 0 or args.step < 1:
        logging.error("--start must be non-negative and --step must be at least 1.")
        sys.exit(1)

    try:
        config = load_alphabet_config(APP_CONFIG, alphabet=args.alphabet, pad=args.pad, width=args.width)
    except ConfigurationError as e:
        logging.error(f"Invalid codec configuration: {e}")
        sys.exit(1)

    stop = config.max_value + 1 if args.full else args.stop
    values = sweep_values(config, args.start, stop, args.step)
    total = len(range(args.start, min(stop, config.max_value + 1), args.step))

    print(f"\nVerifying base {config.base}, pad {config.pad}, width {config.width.name.lower()} "
          f"over [{args.start}, {stop}) step {args.step}...")
    checked, failures = verify_round_trip(config, values, total=total, show_progress=not args.quiet)

    if failures:
        print(f"\n{Fore.RED}FAILURE: {len(failures)} of {checked} values did not round-trip.")
        for value, encoded, problem in failures[:MAX_REPORTED_FAILURES]:
            print(f"{Fore.RED}  {value} -> {encoded!r}: {problem}")
        sys.exit(1)

    print(f"\n{Fore.GREEN}SUCCESS: {checked} values round-tripped.\n")


if __name__ == "__main__":
    main()

# === End of src/verify_codec.py ===
