# Copyright 2026 ACP Builder Contributors
# SPDX-License-Identifier: Apache-2.0

"""EEPROM layout allocation and versioning.

The first four bytes of EEPROM hold the layout version; items are placed
after it in declaration order.  On start-up the generated code compares the
stored version with the compiled one and, on mismatch, writes the initial
values of all items and stores the new version.

Layout version directives:

* ``random``: a new random value on every compile, so every upload resets
  the stored values.
* ``hash`` or empty: a hash of the item declarations, which changes when
  the name, type, or order of an item changes.
* a decimal number: used as given (absolute value).
"""

from __future__ import annotations

import hashlib
import logging
import random
import re
from dataclasses import dataclass, field

from acpbuilder.errors import CompilationError
from acpbuilder.model.project import EepromItem
from acpbuilder.platform.registry import Platform
from acpbuilder.platform.rules import check_value, eeprom_wrapper_type, escape_value, size_of

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

VERSION_SIZE = 4
EEPROM_HEADER_INCLUDE = "acp/eeprom_vars.h"


@dataclass(frozen=True)
class EepromLayout:
    """Offsets of EEPROM items and the number of bytes used.

    Attributes:
        offsets: Offset of each item, parallel to the declared items.
        usage: Offset past the last item, or 0 if no items are declared.
    """

    offsets: list[int]
    usage: int


@dataclass
class EepromCode:
    """Lines of C++ code managing the EEPROM items of a project."""

    usage: int = 0
    version: int | None = None
    includes: list[str] = field(default_factory=list)
    definitions: list[str] = field(default_factory=list)
    externs: list[str] = field(default_factory=list)
    initialization: list[str] = field(default_factory=list)
    setup: list[str] = field(default_factory=list)


def allocate_layout(items: list[EepromItem]) -> EepromLayout:
    """Assign an offset to every item.

    Raises:
        CompilationError: If an item has a type that cannot be stored.
    """
    offsets: list[int] = []
    offset = VERSION_SIZE
    for item in items:
        size = size_of(item.type)
        if size == 0:
            raise CompilationError(
                f"Type '{item.type}' of EEPROM item '{item.name}' is not supported as a type of an eeprom variable."
            )
        offsets.append(offset)
        offset += size * item.array_length if item.is_array else size
        logger.debug(f"EEPROM item {item.name} allocated at offset {offsets[-1]}")

    return EepromLayout(offsets=offsets, usage=offset if items else 0)


def compute_layout_version(directive: str | None, declarations: list[str]) -> int:
    """Return the layout version selected by *directive*.

    Args:
        directive: ``random``, ``hash``, an empty string/None, or a decimal
            number.
        declarations: Generated declaration lines of all items, hashed in
            hash mode.

    Raises:
        CompilationError: If *directive* is none of the accepted forms or the
            number does not fit into 32 bits.
    """
    directive = (directive or "").strip()
    if directive == "random":
        return random.randrange(_RANDOM_VERSION_LIMIT)

    if directive in ("", "hash"):
        digest = hashlib.sha1("".join(declarations).encode("utf-8")).digest()
        return int.from_bytes(digest[:4], "big") & 0x7FFFFFFF

    if _DECIMAL_RE.match(directive) is None:
        raise CompilationError(f"Invalid layout version of eeprom memory: '{directive}'.")
    version = abs(int(directive))
    if version > 0xFFFFFFFF:
        raise CompilationError(f"Layout version of eeprom memory {directive} does not fit into 32 bits.")
    return version


def generate_eeprom_code(
    items: list[EepromItem],
    platform: Platform,
    private_namespace: str,
    directive: str | None,
) -> EepromCode:
    """Render declarations and start-up code for the EEPROM *items*.

    No management code is produced when no items are declared.

    Raises:
        CompilationError: If an item type cannot be stored or an initial value
            is invalid.
    """
    layout = allocate_layout(items)
    code = EepromCode(usage=layout.usage)
    if not items:
        return code

    code.includes.append(f"#include <{EEPROM_HEADER_INCLUDE}>")
    for item, offset in zip(items, layout.offsets):
        wrapper = eeprom_wrapper_type(item.type, offset, item.cached, item.array_length)
        declaration = f"{wrapper} {item.name};"
        code.definitions.append(declaration)
        code.externs.append(f"extern {declaration}")

        if item.value:
            if not check_value(platform, item.type, item.value):
                raise CompilationError(
                    f"The value '{item.value}' is not valid initialization value for the eeprom item '{item.name}'."
                )
            literal = escape_value(item.type, item.value)
            method = "fill" if item.is_array else "setValue"
            code.initialization.append(f"{item.name}.{method}({literal});")

    code.version = compute_layout_version(directive, code.definitions)
    logger.debug(f"EEPROM layout uses {code.usage} bytes, version {code.version}")

    code.setup.append("// Initialize eeprom variables")
    code.setup.append("eeprom_busy_wait();")
    code.setup.extend(f"{item.name}.init();" for item in items)
    code.setup.append("// Set default value of eeprom variables (if necessary)")
    code.setup.append(f"if (!{private_namespace}::checkEepromVersion({code.version})) {{")
    code.setup.append(f"  {private_namespace}::initializeEepromVars();")
    code.setup.append(f"  {private_namespace}::writeEepromVersion({code.version});")
    code.setup.append("}")
    return code


# ################
# Implementation
# ################

_RANDOM_VERSION_LIMIT = 1 << 24
_DECIMAL_RE = re.compile(r"^[+-]?[0-9]+\Z")
