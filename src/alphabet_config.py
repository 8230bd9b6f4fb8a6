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
# Filename: src/alphabet_config.py

"""
Alphabet configuration for the AlphaId codec.

An `AlphabetConfig` bundles everything the encoder and decoder need to agree
on: the ordered symbol set (whose order defines the digit values), the minimum
output length (`pad`), and the width of the unsigned integer type that IDs
are drawn from. The derived constants (`base`, `symbol_index`, `max_value`,
`max_exponent`) are computed once at build time.

Configurations are built through `Builder`, which validates eagerly and raises
`ConfigurationError` for settings that can only come from a programming
mistake (too few symbols, duplicates, a zero pad). Once built, a configuration
is frozen and can be shared by any number of callers.

Usage:
    from alphabet_config import Builder, IntegerWidth

    config = Builder(IntegerWidth.U32).with_pad(4).build()
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Union

logger = logging.getLogger(__name__)

# Digit order matters: 'a' is 0, '_' is 63.
DEFAULT_ALPHABET = "abcdefghijklmnopqrstuvwxyz0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ-_"
DEFAULT_PAD = 1
MIN_ALPHABET_EXCLUSIVE = 16

SymbolsLike = Union[str, bytes, bytearray]


class ConfigurationError(ValueError):
    """Raised when a codec configuration is invalid."""
    pass


class IntegerWidth(Enum):
    """Unsigned integer widths an ID may be drawn from."""
    U16 = 16
    U32 = 32
    U64 = 64
    U128 = 128

    @property
    def bits(self) -> int:
        return self.value

    @property
    def max_value(self) -> int:
        return (1 << self.value) - 1

    @classmethod
    def parse(cls, value) -> "IntegerWidth":
        """
        Accepts an IntegerWidth, a bit count (32) or a name ('u32', 'U32').
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                pass
        elif isinstance(value, str):
            name = value.strip().upper()
            if name.isdigit():
                name = f"U{name}"
            if name in cls.__members__:
                return cls[name]
        valid = ", ".join(member.name.lower() for member in cls)
        raise ConfigurationError(f"Unsupported integer width '{value}'. Expected one of: {valid}.")


def _normalize_symbols(symbols: SymbolsLike) -> str:
    # Bytes map one-to-one onto code points 0-255.
    if isinstance(symbols, (bytes, bytearray)):
        return bytes(symbols).decode("latin-1")
    if isinstance(symbols, str):
        return symbols
    raise ConfigurationError(f"Alphabet must be str or bytes, not {type(symbols).__name__}.")


def compute_max_exponent(base: int, max_value: int) -> int:
    """Returns the largest k such that base**k <= max_value."""
    exponent = 0
    power = base
    while power <= max_value:
        power *= base
        exponent += 1
    return exponent


@dataclass(frozen=True)
class AlphabetConfig:
    """Immutable, validated settings shared by encode and decode."""
    symbols: str
    pad: int
    width: IntegerWidth
    symbol_index: Mapping[str, int] = field(repr=False, compare=False)
    base: int = field(repr=False)
    max_exponent: int = field(repr=False)

    @property
    def max_value(self) -> int:
        return self.width.max_value

    @classmethod
    def default(cls, width: IntegerWidth = IntegerWidth.U128) -> "AlphabetConfig":
        return Builder(width).build()


class Builder:
    """
    Collects alphabet, pad and width settings and produces an AlphabetConfig.

    Each setter validates its argument immediately and returns the builder so
    calls can be chained. `build()` performs the checks that need the complete
    alphabet (duplicates) and computes the derived constants.
    """

    def __init__(self, width: Union[IntegerWidth, str, int] = IntegerWidth.U128):
        self._symbols: Optional[str] = None
        self._pad: Optional[int] = None
        self._width = IntegerWidth.parse(width)

    def with_alphabet(self, symbols: SymbolsLike) -> "Builder":
        """
        Replaces the default 64-symbol alphabet.

        Raises:
            ConfigurationError: If the alphabet has 16 symbols or fewer.
        """
        normalized = _normalize_symbols(symbols)
        if len(normalized) <= MIN_ALPHABET_EXCLUSIVE:
            raise ConfigurationError(
                f"Alphabet must contain more than {MIN_ALPHABET_EXCLUSIVE} symbols (got {len(normalized)})."
            )
        self._symbols = normalized
        return self

    def with_pad(self, pad: int) -> "Builder":
        """
        Sets the minimum length of encoded output.

        Raises:
            ConfigurationError: If pad is not a positive integer.
        """
        if isinstance(pad, bool) or not isinstance(pad, int) or pad < 1:
            raise ConfigurationError(f"Pad must be a positive integer (got {pad!r}).")
        self._pad = pad
        return self

    def with_width(self, width: Union[IntegerWidth, str, int]) -> "Builder":
        self._width = IntegerWidth.parse(width)
        return self

    def build(self) -> AlphabetConfig:
        """
        Finalizes the configuration.

        Raises:
            ConfigurationError: If the alphabet contains duplicate symbols.
        """
        symbols = self._symbols if self._symbols is not None else DEFAULT_ALPHABET
        pad = self._pad if self._pad is not None else DEFAULT_PAD

        index = {symbol: position for position, symbol in enumerate(symbols)}
        if len(index) != len(symbols):
            duplicates = sorted({s for s in symbols if symbols.count(s) > 1})
            raise ConfigurationError(f"Duplicate symbols are not allowed in the alphabet: {duplicates!r}")

        base = len(symbols)
        max_exponent = compute_max_exponent(base, self._width.max_value)
        logger.debug(f"Built alphabet config: base={base}, pad={pad}, width={self._width.name}, "
                     f"max_exponent={max_exponent}")

        return AlphabetConfig(
            symbols=symbols,
            pad=pad,
            width=self._width,
            symbol_index=MappingProxyType(index),
            base=base,
            max_exponent=max_exponent,
        )


def build_configuration(alphabet: Optional[SymbolsLike] = None, pad: Optional[int] = None,
                        width: Union[IntegerWidth, str, int] = IntegerWidth.U128) -> AlphabetConfig:
    """Functional shortcut for Builder: unset arguments keep their defaults."""
    builder = Builder(width)
    if alphabet is not None:
        builder.with_alphabet(alphabet)
    if pad is not None:
        builder.with_pad(pad)
    return builder.build()

# === End of src/alphabet_config.py ===
