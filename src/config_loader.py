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
# Filename: src/config_loader.py

"""
Universal Configuration Loader (config_loader.py)

This module provides a centralized system for loading project settings. It is
imported by every script that needs to know which alphabet, pad and integer
width the AlphaId codec should use.

Key Features:
-   **Loads `config.ini`**: Parses the main configuration file into a global
    `APP_CONFIG` object, automatically finding it relative to the project root.
-   **Loads `.env`**: Loads environment variables from a `.env` file at the
    project root, so deployments can override codec settings without editing
    `config.ini`.
-   **Safe Value Retrieval**: The `get_config_value()` helper provides typed
    access to config values, with fallbacks, type conversion (str, int, float,
    bool), and optional stripping of inline comments.
-   **Codec Settings**: `get_codec_settings()` merges the `[AlphaId]` section
    with the `ALPHAID_ALPHABET`, `ALPHAID_PAD` and `ALPHAID_WIDTH` environment
    variables; `load_alphabet_config()` turns them into an `AlphabetConfig`.

Global Objects Provided:
-   `PROJECT_ROOT`: An absolute path to the project's root directory.
-   `APP_CONFIG`: A `configparser.ConfigParser` instance holding all data from
    `config.ini`.
-   `ENV_LOADED`: A boolean indicating if a `.env` file was successfully loaded.

Usage by other scripts:
    from config_loader import APP_CONFIG, load_alphabet_config

    config = load_alphabet_config(APP_CONFIG)
"""

import configparser
import os
import logging
import pathlib
from dotenv import load_dotenv # For .env loading

from alphabet_config import DEFAULT_ALPHABET, DEFAULT_PAD, AlphabetConfig, build_configuration

CONFIG_FILENAME = "config.ini"
DOTENV_FILENAME = ".env"
CODEC_SECTION = "AlphaId"

# Setup a basic logger for this module if not already configured by the calling script
logger = logging.getLogger(__name__)
if not logger.hasHandlers():
    handler = logging.StreamHandler()
    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)

def get_project_root() -> str:
    """Determines the project root by searching upwards for pyproject.toml."""
    current_path = pathlib.Path(__file__).resolve()
    while current_path != current_path.parent:
        if (current_path / "pyproject.toml").exists():
            return str(current_path)
        current_path = current_path.parent
    raise FileNotFoundError("Could not find project root (containing pyproject.toml).")

PROJECT_ROOT = get_project_root()

def load_app_config():
    # Alphabets may legitimately contain '%', so interpolation stays off.
    config = configparser.ConfigParser(interpolation=None)

    # An override path is used for sandboxed testing.
    override_path = os.getenv('PROJECT_CONFIG_OVERRIDE')
    if override_path and os.path.exists(override_path):
        config_path = override_path
        logger.debug(f"Using override config from env var: {config_path}")
    else:
        config_path = os.path.join(PROJECT_ROOT, CONFIG_FILENAME)

    if os.path.exists(config_path):
        try:
            # 'utf-8-sig' tolerates files saved with a BOM.
            config.read(config_path, encoding='utf-8-sig')
            logger.debug(f"Successfully loaded configuration from: {config_path}")
        except configparser.Error as e:
            logger.error(f"Error parsing configuration file {config_path}: {e}")
    else:
        logger.warning(f"{CONFIG_FILENAME} not found at project root: {config_path}. Using fallbacks.")

    return config

def load_env_vars():
    """Loads environment variables from .env file located at the project root."""
    dotenv_path = os.path.join(PROJECT_ROOT, DOTENV_FILENAME)
    if os.path.exists(dotenv_path):
        if load_dotenv(dotenv_path):
            logger.debug(f"Successfully loaded .env file from: {dotenv_path}")
            return True
        else:
            logger.warning(f"Found .env file at {dotenv_path}, but it may be empty or failed to load.")
            return False
    else:
        logger.debug(f".env file not found at {dotenv_path}. Codec overrides must be set as environment variables.")
        return False

def get_config_value(config: configparser.ConfigParser, section: str, key: str,
                     fallback=None, value_type=str, strip_comments=True):
    """
    Helper to get a typed value from a configparser.ConfigParser object,
    with a fallback, type conversion, and stripping of common inline comments.

    Args:
        config (configparser.ConfigParser): The loaded config object.
        section (str): The section name in the INI file.
        key (str): The key name in the section.
        fallback: The value to return if the key is missing or conversion fails.
        value_type (type): The expected type (str, int, float, bool).
        strip_comments (bool): Strip text after ';' or '#'. Disable for values
            such as alphabets where those characters are data.

    Returns:
        The configured value converted to value_type, or the fallback.
    """
    if not config.has_section(section) or not config.has_option(section, key):
        return fallback

    raw_value = config.get(section, key)
    cleaned_value = raw_value
    if strip_comments:
        for comment_char in [';', '#']:
            if comment_char in cleaned_value:
                cleaned_value = cleaned_value.split(comment_char, 1)[0].strip()

    if value_type == str:
        if cleaned_value.lower() == 'none':
            return None
        return cleaned_value
    elif value_type == int:
        try:
            return int(cleaned_value)
        except ValueError:
            logger.warning(f"Config: Error converting [{section}]/{key} value '{raw_value}' "
                           f"(cleaned: '{cleaned_value}') to int. Using fallback: {fallback}")
            return fallback
    elif value_type == float:
        try:
            return float(cleaned_value)
        except ValueError:
            logger.warning(f"Config: Error converting [{section}]/{key} value '{raw_value}' "
                           f"(cleaned: '{cleaned_value}') to float. Using fallback: {fallback}")
            return fallback
    elif value_type == bool:
        try:
            return config.getboolean(section, key)
        except ValueError:
            logger.warning(f"Config: Error converting [{section}]/{key} value '{raw_value}' "
                           f"to bool. Using fallback: {fallback}")
            return fallback
    else:
        logger.error(f"Config: Unsupported value_type '{value_type.__name__}' for key '{key}'. Using fallback.")
        return fallback

def get_codec_settings(config: configparser.ConfigParser) -> dict:
    """
    Resolves the codec settings, giving environment variables priority over
    the [AlphaId] section of config.ini.

    Returns:
        dict: Keys 'alphabet' (str), 'pad' (int) and 'width' (str).
    """
    settings = {
        'alphabet': get_config_value(config, CODEC_SECTION, 'alphabet',
                                     fallback=DEFAULT_ALPHABET, strip_comments=False),
        'pad': get_config_value(config, CODEC_SECTION, 'pad', fallback=DEFAULT_PAD, value_type=int),
        'width': get_config_value(config, CODEC_SECTION, 'width', fallback='u128'),
    }

    env_alphabet = os.getenv('ALPHAID_ALPHABET')
    if env_alphabet:
        settings['alphabet'] = env_alphabet
    env_pad = os.getenv('ALPHAID_PAD')
    if env_pad:
        try:
            settings['pad'] = int(env_pad)
        except ValueError:
            logger.warning(f"Ignoring non-integer ALPHAID_PAD value '{env_pad}'.")
    env_width = os.getenv('ALPHAID_WIDTH')
    if env_width:
        settings['width'] = env_width

    if settings['alphabet'] is None:
        settings['alphabet'] = DEFAULT_ALPHABET
    return settings

def load_alphabet_config(config: configparser.ConfigParser, **overrides) -> AlphabetConfig:
    """
    Builds an AlphabetConfig from the resolved codec settings.

    Keyword overrides ('alphabet', 'pad', 'width') that are not None replace
    the configured values, which lets command-line flags win over config.ini.

    Raises:
        ConfigurationError: If the resulting settings are invalid.
    """
    settings = get_codec_settings(config)
    settings.update({k: v for k, v in overrides.items() if v is not None})
    return build_configuration(alphabet=settings['alphabet'], pad=settings['pad'], width=settings['width'])

def get_path(relative_path: str) -> str:
    """
    Resolves a path relative to the sandbox or project root.

    Checks for a PROJECT_SANDBOX_PATH environment variable. If set, it treats
    that path as the root for all file operations. Otherwise, it defaults to
    the main PROJECT_ROOT.

    Args:
        relative_path (str): The path relative to the project root
                             (e.g., 'data/backup').

    Returns:
        str: The absolute path to the resource.
    """
    sandbox_path = os.getenv('PROJECT_SANDBOX_PATH')
    if sandbox_path:
        return os.path.join(sandbox_path, relative_path)
    return os.path.join(PROJECT_ROOT, relative_path)

# Global config object, loaded once
APP_CONFIG = load_app_config()
ENV_LOADED = load_env_vars() # Load .env once globally as well

# === End of src/config_loader.py ===
