# Copyright 2026 ACP Builder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Value-type rules shared by all platform variants.

Every function is pure.  Rules that depend on the resources of the target
hardware (pins, interrupts, serial ports) take the :class:`Platform` record
as their first argument.
"""

from __future__ import annotations

import re

from acpbuilder.platform.registry import Platform

# ###############
# Public Interface
# ###############


def size_of(datatype: str) -> int:
    """Return the size of *datatype* in bytes, or 0 if the type has no storage size."""
    return _SIZES.get(datatype, 0)


def eeprom_wrapper_type(datatype: str, offset: int, cached: bool, array_length: int = -1) -> str | None:
    """Return the C++ type wrapping an EEPROM item of *datatype* stored at *offset*.

    Args:
        datatype: Element type of the item.
        offset: Offset of the item in EEPROM.
        cached: Whether the wrapper keeps a copy of the value in SRAM.
        array_length: Number of elements for arrays, negative for scalars.

    Returns:
        The wrapper type, or None if the type cannot be stored in EEPROM.
    """
    if size_of(datatype) == 0:
        return None
    if array_length >= 0:
        wrapper = "EEPROMCachedArray" if cached else "EEPROMArray"
        return f"acp::{wrapper}<{datatype}, {array_length}, {offset}>"
    wrapper = "EEPROMCachedVar" if cached else "EEPROMVar"
    return f"acp::{wrapper}<{datatype}, {offset}>"


def check_value(platform: Platform, datatype: str, value: str | None) -> bool:
    """Return True if *value* is a valid literal of *datatype* on *platform*.

    An absent value is never valid.  Unknown types reject every value.
    Enumerations accept any non-blank token; membership is left to the
    restriction of the property.
    """
    if value is None:
        return False

    if datatype == "bool":
        return value.lower() in ("true", "false")

    if datatype == "char":
        return _check_char(value)

    if datatype in _UNSIGNED_MAX:
        number = _parse_integer(value)
        return number is not None and 0 <= number <= _UNSIGNED_MAX[datatype]

    if datatype in _SIGNED_RANGE:
        number = _parse_integer(value)
        low, high = _SIGNED_RANGE[datatype]
        return number is not None and low <= number <= high

    if datatype in ("float", "double"):
        return _FLOAT_RE.match(value) is not None

    if datatype in ("string", "f-string"):
        return True

    if datatype == "analog-pin":
        return _check_analog_pin(platform, value)

    if datatype == "digital-pin":
        return _check_index(value, platform.digital_pins)

    if datatype == "pin":
        return _check_analog_pin(platform, value) or _check_index(value, platform.digital_pins)

    if datatype == "interrupt":
        return _check_index(value, platform.interrupts)

    if datatype == "hardware-serial":
        return _check_hardware_serial(platform, value)

    if datatype == "enumeration":
        return bool(value.strip())

    return False


def escape_value(datatype: str, value: str | None) -> str | None:
    """Render *value* as a C/C++ literal of *datatype*.

    Returns:
        The literal, or None if the type is unknown or the value is absent
        for a type that has no null literal.
    """
    if datatype == "string":
        return "NULL" if value is None else f'"{_escape_string(value)}"'

    if datatype == "f-string":
        return "NULL" if value is None else f'F("{_escape_string(value)}")'

    if value is None:
        return None

    if datatype == "bool":
        return value.lower()

    if datatype == "char":
        character = value.strip() or " "
        if character == "'":
            character = "\\'"
        return f"'{character}'"

    if datatype in _LITERAL_SUFFIXES:
        return value + _LITERAL_SUFFIXES[datatype]

    if datatype in _VERBATIM_TYPES:
        return value

    return None


# ################
# Implementation
# ################

_SIZES: dict[str, int] = {
    "bool": 1,
    "byte": 1,
    "char": 1,
    "unsigned char": 1,
    "signed char": 1,
    "word": 2,
    "int": 2,
    "unsigned int": 2,
    "signed int": 2,
    "long": 4,
    "unsigned long": 4,
    "signed long": 4,
    "float": 4,
    "double": 4,
}

_UNSIGNED_MAX: dict[str, int] = {
    "byte": 255,
    "unsigned char": 255,
    "word": 65535,
    "unsigned int": 65535,
    "unsigned long": 4294967295,
}

_SIGNED_RANGE: dict[str, tuple[int, int]] = {
    "signed char": (-128, 127),
    "int": (-32768, 32767),
    "signed int": (-32768, 32767),
    "long": (-2147483648, 2147483647),
    "signed long": (-2147483648, 2147483647),
}

_LITERAL_SUFFIXES: dict[str, str] = {
    "unsigned int": "u",
    "unsigned long": "ul",
    "long": "l",
    "signed long": "l",
}

_VERBATIM_TYPES: frozenset[str] = frozenset(
    {
        "byte",
        "word",
        "unsigned char",
        "signed char",
        "int",
        "signed int",
        "float",
        "double",
        "pin",
        "digital-pin",
        "analog-pin",
        "interrupt",
        "hardware-serial",
        "enumeration",
    }
)

_INTEGER_RE = re.compile(r"^[+-]?[0-9]+\Z")
_FLOAT_RE = re.compile(r"^[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?\Z")
_ANALOG_PIN_RE = re.compile(r"^A([0-9]+)\Z")
_HEX_DIGITS_RE = re.compile(r"^[0-9A-Fa-f]+\Z")
_OCTAL_DIGITS_RE = re.compile(r"^[0-7]+\Z")
_SIMPLE_ESCAPES = "\\'\"?abfnrtv"


def _parse_integer(value: str) -> int | None:
    if _INTEGER_RE.match(value) is None:
        return None
    return int(value)


def _check_index(value: str, count: int) -> bool:
    number = _parse_integer(value)
    return number is not None and 0 <= number < count


def _check_analog_pin(platform: Platform, value: str) -> bool:
    match = _ANALOG_PIN_RE.match(value)
    return match is not None and int(match.group(1)) < platform.analog_pins


def _check_hardware_serial(platform: Platform, value: str) -> bool:
    if platform.hardware_serials <= 0:
        return False
    if value == "Serial":
        return True
    return any(value == f"Serial{index}" for index in range(1, platform.hardware_serials))


def _check_char(value: str) -> bool:
    """Check a character literal without quotes (``a``, ``\\n``, ``\\x41``, ``\\101``)."""
    value = value.strip() or " "
    if not value.startswith("\\"):
        return len(value) == 1

    escape = value[1:]
    if len(escape) == 1 and escape in _SIMPLE_ESCAPES:
        return True

    if escape.startswith("x"):
        digits, pattern, base = escape[1:], _HEX_DIGITS_RE, 16
    else:
        digits, pattern, base = escape, _OCTAL_DIGITS_RE, 8
    if pattern.match(digits) is None:
        return False
    return int(digits, base) <= 255


def _escape_string(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')
