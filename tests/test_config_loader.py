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
# Filename: tests/test_config_loader.py

import pytest
from configparser import ConfigParser

from alphabet_config import DEFAULT_ALPHABET, ConfigurationError, IntegerWidth
from config_loader import get_codec_settings, get_config_value, get_path, load_alphabet_config

# A valid config content for happy path testing
VALID_CONFIG_CONTENT = """
[AlphaId]
alphabet = ABCDEFGHIJKLMNOPQRSTUVWXYZ#;
pad = 4 ; minimum length
width = u32

[General]
verbose = yes
ratio = 0.5
"""


@pytest.fixture
def mock_config_file(tmp_path):
    """A fixture to create a temporary config file for testing."""
    def _create_file(content):
        config_path = tmp_path / "config.ini"
        config_path.write_text(content)
        config = ConfigParser(interpolation=None)
        config.read(config_path)
        return config
    return _create_file


def test_get_config_value_happy_path(mock_config_file):
    """
    Tests the get_config_value helper with correct types.
    """
    config = mock_config_file(VALID_CONFIG_CONTENT)

    pad = get_config_value(config, 'AlphaId', 'pad', value_type=int)
    assert pad == 4
    assert isinstance(pad, int)

    assert get_config_value(config, 'AlphaId', 'width') == 'u32'
    assert get_config_value(config, 'General', 'verbose', value_type=bool) is True
    assert get_config_value(config, 'General', 'ratio', value_type=float) == 0.5


def test_get_config_value_comment_stripping(mock_config_file):
    """Inline comments are stripped unless the value itself may contain them."""
    config = mock_config_file(VALID_CONFIG_CONTENT)

    assert get_config_value(config, 'AlphaId', 'alphabet') == 'ABCDEFGHIJKLMNOPQRSTUVWXYZ'
    raw = get_config_value(config, 'AlphaId', 'alphabet', strip_comments=False)
    assert raw == 'ABCDEFGHIJKLMNOPQRSTUVWXYZ#;'


def test_get_config_value_fallback(mock_config_file):
    """
    Tests that the fallback mechanism works for missing keys and sections.
    """
    config = mock_config_file("[AlphaId]\npad = 2")

    assert get_config_value(config, 'AlphaId', 'missing_key', fallback=123) == 123
    assert get_config_value(config, 'MissingSection', 'pad') is None


def test_get_config_value_invalid_type(mock_config_file):
    """
    Tests that the fallback is returned for values that cannot be converted.
    """
    config = mock_config_file("[AlphaId]\npad = not_a_number")

    assert get_config_value(config, 'AlphaId', 'pad', value_type=int) is None
    assert get_config_value(config, 'AlphaId', 'pad', value_type=int, fallback=1) == 1


def test_get_codec_settings_defaults():
    settings = get_codec_settings(ConfigParser())
    assert settings == {'alphabet': DEFAULT_ALPHABET, 'pad': 1, 'width': 'u128'}


def test_get_codec_settings_from_file(mock_config_file):
    settings = get_codec_settings(mock_config_file(VALID_CONFIG_CONTENT))
    assert settings == {'alphabet': 'ABCDEFGHIJKLMNOPQRSTUVWXYZ#;', 'pad': 4, 'width': 'u32'}


def test_get_codec_settings_environment_overrides(mock_config_file, monkeypatch):
    monkeypatch.setenv('ALPHAID_ALPHABET', 'abcdefghijklmnopqrstuvwxyz')
    monkeypatch.setenv('ALPHAID_PAD', '6')
    monkeypatch.setenv('ALPHAID_WIDTH', 'u16')

    settings = get_codec_settings(mock_config_file(VALID_CONFIG_CONTENT))
    assert settings == {'alphabet': 'abcdefghijklmnopqrstuvwxyz', 'pad': 6, 'width': 'u16'}


def test_get_codec_settings_ignores_malformed_env_pad(monkeypatch, caplog):
    monkeypatch.setenv('ALPHAID_PAD', 'three')
    settings = get_codec_settings(ConfigParser())
    assert settings['pad'] == 1
    assert "Ignoring non-integer ALPHAID_PAD" in caplog.text


def test_load_alphabet_config(mock_config_file):
    config = load_alphabet_config(mock_config_file(VALID_CONFIG_CONTENT))
    assert config.base == 28
    assert config.pad == 4
    assert config.width is IntegerWidth.U32


def test_load_alphabet_config_keyword_overrides(mock_config_file):
    config = load_alphabet_config(mock_config_file(VALID_CONFIG_CONTENT), pad=2, width=None)
    assert config.pad == 2
    assert config.width is IntegerWidth.U32


def test_load_alphabet_config_invalid_settings(mock_config_file):
    with pytest.raises(ConfigurationError):
        load_alphabet_config(mock_config_file("[AlphaId]\nalphabet = abc"))


def test_get_path_uses_sandbox(monkeypatch, tmp_path):
    monkeypatch.setenv('PROJECT_SANDBOX_PATH', str(tmp_path))
    assert get_path('data/backup') == str(tmp_path / 'data/backup')

# === End of tests/test_config_loader.py ===
