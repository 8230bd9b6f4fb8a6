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
# Filename: src/alphaid.py

"""
Encode integers as short, YouTube-like identifiers and decode them back.

The codec is a little-endian positional numeral system over the configured
alphabet with one twist: when a minimum length (`pad`) is configured, the
digit at position `pad` is rotated by one. Every padded ID therefore has
exactly `pad` or more symbols, and small consecutive numbers no longer share
a visibly identical tail of filler symbols.

    >>> config = build_configuration(width=IntegerWidth.U32)
    >>> encode(config, 1350997667)
    '90F7qb'
    >>> decode(config, '90F7qb')
    1350997667
    >>> encode(build_configuration(pad=2), 0)
    'ab'

Both functions are pure; a single `AlphabetConfig` can be reused everywhere.
Decoding untrusted input never crashes: unknown symbols raise
`UnexpectedCharError` and values beyond the configured integer width raise
`NumberOverflowError`, both subclasses of `AlphaIdError`.
"""

from typing import Optional, Union

from alphabet_config import (AlphabetConfig, Builder, ConfigurationError,  # noqa: F401
                             IntegerWidth, build_configuration)

EncodedLike = Union[str, bytes, bytearray]


class AlphaIdError(Exception):
    """Base class for runtime encode/decode failures."""
    pass


class UnexpectedCharError(AlphaIdError):
    """Raised when an encoded ID contains a symbol outside the alphabet."""

    def __init__(self, char: str, position: int):
        super().__init__(f"Unexpected character {char!r} at position {position}.")
        self.char = char
        self.position = position


class NumberOverflowError(AlphaIdError, OverflowError):
    """Raised when a value does not fit in the configured integer width."""
    pass


def encode(config: AlphabetConfig, number: int) -> str:
    """
    Encodes a non-negative integer, least-significant symbol first.

    Raises:
        ValueError: If number is not a non-negative integer.
        NumberOverflowError: If number exceeds the configured width.
    """
    if isinstance(number, bool) or not isinstance(number, int) or number < 0:
        raise ValueError("Input must be a non-negative integer.")
    max_value = config.max_value
    if number > max_value:
        raise NumberOverflowError(f"{number} does not fit in {config.width.name}.")

    symbols = config.symbols
    base = config.base
    pad = config.pad

    encoded = []
    value = number
    position = 0
    while True:
        position += 1
        if pad > 1 and position == pad:
            if value == max_value:
                raise NumberOverflowError(f"Rotating {number} at position {pad} overflows {config.width.name}.")
            value += 1

        if value == 0:
            if position <= pad:
                encoded.append(symbols[0])
                continue
            break

        value, digit = divmod(value, base)
        encoded.append(symbols[digit])

    return "".join(encoded)


def _symbol_values(config: AlphabetConfig, encoded: EncodedLike) -> list:
    if isinstance(encoded, (bytes, bytearray)):
        encoded = bytes(encoded).decode("latin-1")
    index = config.symbol_index
    values = []
    for position, char in enumerate(encoded):
        value = index.get(char)
        if value is None:
            raise UnexpectedCharError(char, position)
        values.append(value)
    return values


def _positional_value(config: AlphabetConfig, exponent: int, digit: int) -> int:
    # Division before multiplication: base**exponent * digit must stay in range.
    if exponent > config.max_exponent:
        raise NumberOverflowError(f"Digit position {exponent} exceeds {config.width.name}.")
    power = config.base ** exponent
    if config.max_value // power < digit:
        raise NumberOverflowError(f"Digit at position {exponent} exceeds {config.width.name}.")
    return power * digit


def _checked_add(config: AlphabetConfig, total: int, amount: int) -> int:
    if config.max_value - total < amount:
        raise NumberOverflowError(f"Decoded value exceeds {config.width.name}.")
    return total + amount


def decode(config: AlphabetConfig, encoded: EncodedLike) -> int:
    """
    Decodes an ID produced by `encode` with the same configuration.

    Every symbol is resolved before any arithmetic, so an unknown symbol is
    reported even when the same input would also overflow.

    Raises:
        UnexpectedCharError: On the first symbol not in the alphabet.
        NumberOverflowError: If the value exceeds the configured width.
    """
    digits = _symbol_values(config, encoded)
    base = config.base
    pad = config.pad

    number = 0
    unpad = pad > 1
    prev = 0
    for position, raw in enumerate(digits):
        digit = raw
        if unpad and position + 1 >= pad:
            # Past the rotation point every filler digit was a borrow of base - 1.
            if position >= pad:
                borrow = _positional_value(config, position - 1, base - 1 - prev)
                number = _checked_add(config, number, borrow)
            if digit:
                unpad = False
                digit -= 1

        prev = raw
        if not digit:
            continue

        number = _checked_add(config, number, _positional_value(config, position, digit))

    return number


class AlphaId:
    """
    An encoder/decoder bound to one configuration.

    Example:
        alphaid = AlphaId.new(IntegerWidth.U32)
        alphaid.encode(1)            # 'b'
        AlphaId(AlphaId.builder().with_pad(2).build()).encode(0)   # 'ab'
    """

    def __init__(self, config: Optional[AlphabetConfig] = None):
        self.config = config if config is not None else AlphabetConfig.default()

    @classmethod
    def new(cls, width: Union[IntegerWidth, str, int] = IntegerWidth.U128) -> "AlphaId":
        return cls(Builder(width).build())

    @staticmethod
    def builder(width: Union[IntegerWidth, str, int] = IntegerWidth.U128) -> Builder:
        return Builder(width)

    def encode(self, number: int) -> str:
        return encode(self.config, number)

    def decode(self, encoded: EncodedLike) -> int:
        return decode(self.config, encoded)

    def __repr__(self):
        return f"AlphaId({self.config!r})"

# === End of src/alphaid.py ===
