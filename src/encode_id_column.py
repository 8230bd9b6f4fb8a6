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
# Filename: src/encode_id_column.py

"""
Batch-encode (or decode) an ID column of a delimited data file.

This script is the bulk counterpart of `alphaid_cli.py`. It is typically used
to replace raw sequential database IDs in an export with their short public
form before the file leaves the system, or to recover the integer IDs from a
file that only carries the short form.

Its primary functions are:
1.  Reads the input file with pandas, keeping every column as text so IDs are
    never reformatted (no float conversion, no lost leading symbols).
2.  Encodes each value of `--column` with the configured AlphaId codec (or
    decodes it with `--decode`) and stores the result in `--output-column`.
3.  Leaves the output cell empty for any row that cannot be converted, logs a
    warning for it, and reports the total number of failures.
4.  Backs up an existing output file before `--force` overwrites it.

Usage:
    python src/encode_id_column.py data/users.csv data/users_public.csv --column id
    python src/encode_id_column.py public.tsv restored.tsv --column public_id --decode --delimiter '\t'
"""

import argparse
import logging
import os
import sys
from pathlib import Path

import pandas as pd
from colorama import Fore, init
from tqdm import tqdm

# Ensure the src directory is in the Python path
sys.path.append(str(Path(__file__).resolve().parent))
from alphabet_config import AlphabetConfig, ConfigurationError  # noqa: E402
from alphaid import AlphaIdError, decode, encode  # noqa: E402
from config_loader import APP_CONFIG, load_alphabet_config  # noqa: E402
from utils.file_utils import backup_and_remove  # noqa: E402

# Initialize colorama
init(autoreset=True)

# --- Setup Logging ---
logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')


def convert_column(df: pd.DataFrame, column: str, output_column: str,
                   config: AlphabetConfig, decode_mode: bool = False,
                   show_progress: bool = True) -> int:
    """
    Converts one column of a DataFrame in place.

    Args:
        df (pd.DataFrame): Data read with dtype=str.
        column (str): The column holding the values to convert.
        output_column (str): The column that receives the converted values.
        config (AlphabetConfig): Codec settings.
        decode_mode (bool): Decode IDs to integers instead of encoding.
        show_progress (bool): Display a tqdm progress bar.

    Returns:
        int: The number of rows that could not be converted.
    """
    if column not in df.columns:
        raise KeyError(column)

    converted = []
    failures = 0
    for row_number, raw in enumerate(tqdm(df[column], desc="Decoding IDs" if decode_mode else "Encoding IDs",
                                          ncols=80, disable=not show_progress), start=1):
        if pd.isna(raw) or str(raw).strip() == "":
            converted.append("")
            continue
        value = str(raw).strip()
        try:
            converted.append(str(decode(config, value)) if decode_mode else encode(config, int(value)))
        except (AlphaIdError, ValueError) as e:
            tqdm.write(f"{Fore.YELLOW}WARNING: Row {row_number}: could not convert '{value}': {e}")
            converted.append("")
            failures += 1

    df[output_column] = converted
    return failures


def main():
    """Reads the input file, converts the ID column and writes the output file."""
    parser = argparse.ArgumentParser(
        description="Encode or decode an ID column of a CSV/TSV file.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument("input_file", type=str, help="Path to the input file.")
    parser.add_argument("output_file", type=str, help="Path to the output file.")
    parser.add_argument("--column", type=str, default="id", help="Name of the column to convert.")
    parser.add_argument("--output-column", type=str, default=None,
                        help="Name of the result column (defaults to '<column>_encoded' or '<column>_decoded').")
    parser.add_argument("--decode", action="store_true", help="Decode IDs back into integers.")
    parser.add_argument("--delimiter", type=str, default=",", help="Field delimiter ('\\t' for tab).")
    parser.add_argument("--alphabet", type=str, default=None, help="Override the configured alphabet.")
    parser.add_argument("--pad", type=int, default=None, help="Override the configured pad.")
    parser.add_argument("--width", type=str, default=None, help="Override the configured integer width.")
    parser.add_argument("--sandbox-path", type=str, help="Path to the sandbox directory for testing.")
    parser.add_argument("--force", action="store_true", help="Overwrite the output file if it exists.")
    parser.add_argument("--quiet", action="store_true", help="Hide the progress bar.")
    args = parser.parse_args()

    if args.sandbox_path:
        os.environ["PROJECT_SANDBOX_PATH"] = args.sandbox_path

    delimiter = "\t" if args.delimiter in ("\\t", "tab") else args.delimiter
    input_path = Path(args.input_file)
    output_path = Path(args.output_file)
    output_column = args.output_column or f"{args.column}_{'decoded' if args.decode else 'encoded'}"

    if not input_path.exists():
        logging.error(f"Input file not found: {input_path}")
        sys.exit(1)

    if output_path.exists() and not args.force:
        print(f"\n{Fore.YELLOW}WARNING: The output file at '{output_path}' already exists.")
        print(f"{Fore.YELLOW}If you decide to go ahead, a backup of the existing file will be created.{Fore.RESET}")
        confirm = input("Do you wish to proceed? (Y/N): ").lower().strip()
        if confirm != 'y':
            print(f"\n{Fore.YELLOW}Operation cancelled by user.{Fore.RESET}\n")
            sys.exit(0)

    try:
        config = load_alphabet_config(APP_CONFIG, alphabet=args.alphabet, pad=args.pad, width=args.width)
    except ConfigurationError as e:
        logging.error(f"Invalid codec configuration: {e}")
        sys.exit(1)

    try:
        df = pd.read_csv(input_path, sep=delimiter, dtype=str, keep_default_na=False)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        logging.error(f"Could not read {input_path}: {e}")
        sys.exit(1)

    print(f"\nReading IDs from: {input_path}")
    try:
        failures = convert_column(df, args.column, output_column, config,
                                  decode_mode=args.decode, show_progress=not args.quiet)
    except KeyError:
        logging.error(f"Column '{args.column}' not found in {input_path}. "
                      f"Available columns: {', '.join(df.columns)}")
        sys.exit(1)

    # The previous output is only moved aside once there is a replacement for it.
    backup_and_remove(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(output_path, sep=delimiter, index=False)

    print(f"{Fore.CYAN}Wrote {len(df)} rows to: {output_path}{Fore.RESET}")
    if failures:
        print(f"\n{Fore.RED}FAILURE: {failures} of {len(df)} rows could not be converted.")
        sys.exit(1)
    print(f"\n{Fore.GREEN}SUCCESS: All {len(df)} rows converted into column '{output_column}'.\n")


if __name__ == "__main__":
    main()

# === End of src/encode_id_column.py ===
