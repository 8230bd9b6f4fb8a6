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
# Filename: src/utils/file_utils.py

"""
Provides shared file helpers for the AlphaId batch tools.
"""
import logging
import os
import shutil
import sys
from datetime import datetime
from pathlib import Path

from colorama import Fore

# Ensure the src directory is in the Python path for nested imports
sys.path.append(str(Path(__file__).resolve().parents[1]))
from config_loader import get_path, PROJECT_ROOT  # noqa: E402


def backup_and_remove(output_path: Path) -> Path | None:
    """
    Moves an existing output file into `data/backup/` under a timestamped name.

    Called before a forced re-run so a previous batch of encoded IDs is never
    silently lost.

    Args:
        output_path (Path): The file about to be overwritten.

    Returns:
        Path | None: Where the backup was written, or None if there was nothing
        to back up.
    """
    if not output_path.exists():
        return None

    try:
        backup_dir = Path(get_path('data/backup'))
        backup_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        backup_path = backup_dir / f"{output_path.stem}.{timestamp}{output_path.suffix}.bak"
        shutil.copy2(output_path, backup_path)
        output_path.unlink()
        logging.info(f"{Fore.CYAN}Backed up '{output_path.name}' to "
                     f"'{os.path.relpath(backup_path, PROJECT_ROOT)}'{Fore.RESET}")
        return backup_path
    except OSError as e:
        logging.error(f"{Fore.RED}Failed to back up {output_path.name}: {e}")
        sys.exit(1)

# === End of src/utils/file_utils.py ===
