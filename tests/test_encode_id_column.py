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
# Filename: tests/test_encode_id_column.py

"""
Unit tests for the batch column converter (src/encode_id_column.py).

The tests write small CSV/TSV files to a temporary directory, run the script's
main() with patched command-line arguments, and read the output back with
pandas to check the converted column.
"""
from configparser import ConfigParser
from pathlib import Path
from unittest.mock import patch

import pandas as pd
import pytest

import encode_id_column
from alphabet_config import build_configuration


@pytest.fixture(autouse=True)
def sandbox(tmp_path, monkeypatch):
    """Isolates backups and codec settings from the real project."""
    monkeypatch.setenv("PROJECT_SANDBOX_PATH", str(tmp_path))
    with patch("encode_id_column.APP_CONFIG", ConfigParser()):
        yield tmp_path


@pytest.fixture
def mock_input_file(tmp_path: Path) -> tuple[Path, Path]:
    """Creates a temporary input file and an output path for testing."""
    input_path = tmp_path / "users.csv"
    output_path = tmp_path / "out" / "users_public.csv"
    input_path.write_text("id,name\n0,Ada\n1,Grace\n64,Edsger\n730087,Barbara\n")
    return input_path, output_path


def run_script(*args):
    with patch("sys.argv", ["encode_id_column.py", *args, "--quiet"]):
        encode_id_column.main()


def test_encode_column(mock_input_file):
    input_path, output_path = mock_input_file

    run_script(str(input_path), str(output_path), "--column", "id")

    df = pd.read_csv(output_path, dtype=str)
    assert list(df.columns) == ["id", "name", "id_encoded"]
    assert list(df["id_encoded"][:3]) == ["a", "b", "ab"]
    assert list(df["name"]) == ["Ada", "Grace", "Edsger", "Barbara"]


def test_decode_column_tab_delimited(tmp_path):
    input_path = tmp_path / "public.tsv"
    output_path = tmp_path / "restored.tsv"
    input_path.write_text("public_id\tnote\naaab\tx\nbaab\ty\n")

    run_script(str(input_path), str(output_path), "--column", "public_id", "--decode",
               "--delimiter", "\\t", "--pad", "4", "--output-column", "id")

    df = pd.read_csv(output_path, sep="\t", dtype=str)
    assert list(df["id"]) == ["0", "1"]


def test_unconvertible_rows_reported(tmp_path, capsys):
    input_path = tmp_path / "ids.csv"
    output_path = tmp_path / "ids_out.csv"
    input_path.write_text("id,tag\n5,a\nnot-a-number,b\n,c\n-3,d\n")

    with pytest.raises(SystemExit) as e:
        run_script(str(input_path), str(output_path))

    assert e.value.code == 1
    df = pd.read_csv(output_path, dtype=str, keep_default_na=False)
    assert list(df["id_encoded"]) == ["f", "", "", ""]
    assert "FAILURE: 2 of 4 rows" in capsys.readouterr().out


def test_missing_column_exits(mock_input_file, caplog):
    input_path, output_path = mock_input_file

    with pytest.raises(SystemExit) as e:
        run_script(str(input_path), str(output_path), "--column", "user_id")

    assert e.value.code == 1
    assert "Column 'user_id' not found" in caplog.text
    assert not output_path.exists()


def test_missing_input_file_exits(tmp_path, caplog):
    with pytest.raises(SystemExit) as e:
        run_script(str(tmp_path / "nope.csv"), str(tmp_path / "out.csv"))
    assert e.value.code == 1
    assert "Input file not found" in caplog.text


def test_force_backs_up_existing_output(mock_input_file, sandbox):
    input_path, output_path = mock_input_file
    output_path.parent.mkdir(parents=True)
    output_path.write_text("stale\n")

    run_script(str(input_path), str(output_path), "--force")

    backups = list((sandbox / "data" / "backup").iterdir())
    assert len(backups) == 1
    assert backups[0].read_text() == "stale\n"
    assert "id_encoded" in output_path.read_text()


def test_existing_output_cancelled_without_force(mock_input_file):
    input_path, output_path = mock_input_file
    output_path.parent.mkdir(parents=True)
    output_path.write_text("keep me\n")

    with patch("builtins.input", return_value="n"):
        with pytest.raises(SystemExit) as e:
            run_script(str(input_path), str(output_path))

    assert e.value.code == 0
    assert output_path.read_text() == "keep me\n"


def test_failed_run_leaves_existing_output_untouched(mock_input_file, sandbox):
    input_path, output_path = mock_input_file
    output_path.parent.mkdir(parents=True)
    output_path.write_text("previous\n")

    with pytest.raises(SystemExit) as e:
        run_script(str(input_path), str(output_path), "--column", "nope", "--force")

    assert e.value.code == 1
    assert output_path.read_text() == "previous\n"
    assert not (sandbox / "data" / "backup").exists()


def test_convert_column_in_memory():
    df = pd.DataFrame({"id": ["0", "63", ""]})
    failures = encode_id_column.convert_column(df, "id", "public", build_configuration(pad=2),
                                               show_progress=False)
    assert failures == 0
    assert list(df["public"]) == ["ab", "_b", ""]


def test_convert_column_missing_column_raises():
    df = pd.DataFrame({"id": ["0"]})
    with pytest.raises(KeyError):
        encode_id_column.convert_column(df, "other", "out", build_configuration(), show_progress=False)

# === End of tests/test_encode_id_column.py ===
