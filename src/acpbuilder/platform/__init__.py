# Copyright 2026 ACP Builder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Target hardware platforms and their value-type rules."""

from acpbuilder.platform.registry import PLATFORMS, Platform, get_platform
from acpbuilder.platform.rules import check_value, eeprom_wrapper_type, escape_value, size_of

__all__ = [
    "PLATFORMS",
    "Platform",
    "get_platform",
    "check_value",
    "eeprom_wrapper_type",
    "escape_value",
    "size_of",
]
