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
# Filename: tests/conftest.py

import sys
import os

import pytest

# Add the project root and the 'src' directory to the Python path so tests can
# import modules like 'alphaid' and 'config_loader' directly.
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
src_path = os.path.join(project_root, 'src')

for path in (project_root, src_path):
    if path not in sys.path:
        sys.path.insert(0, path)


@pytest.fixture(autouse=True)
def clear_codec_env(monkeypatch):
    """Keeps ALPHAID_* variables from the developer's shell out of the tests."""
    for name in ("ALPHAID_ALPHABET", "ALPHAID_PAD", "ALPHAID_WIDTH"):
        monkeypatch.delenv(name, raising=False)

# === End of tests/conftest.py ===
