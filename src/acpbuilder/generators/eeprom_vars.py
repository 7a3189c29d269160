# Copyright 2026 ACP Builder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Generator of the EEPROM support header and source.

Both files are written only if the project declares EEPROM items, which is
known once the project code generator has prepared its output.
"""

from __future__ import annotations

import logging

from acpbuilder.compiler.context import CompilationContext
from acpbuilder.compiler.eeprom import EEPROM_HEADER_INCLUDE
from acpbuilder.compiler.pipeline import ContentGenerator
from acpbuilder.compiler.templates import render_to_file
from acpbuilder.generators import project_code

logger = logging.getLogger(__name__)

NAME = "eeprom-vars"
EEPROM_SOURCE_FILE = "eeprom_vars.cpp"


def prepare(context: CompilationContext, output: dict[str, str]) -> None:
    output["privateNamespace"] = context.state.private_namespace
    output["acpEepromHeaderFile"] = EEPROM_HEADER_INCLUDE


def generate(context: CompilationContext, output: dict[str, str]) -> None:
    if context.state.eeprom_usage == 0:
        logger.debug("No EEPROM items declared, skipping EEPROM support files")
        return
    render_to_file("acp_eeprom_vars.h", context.settings.include_dir / EEPROM_HEADER_INCLUDE, output)
    render_to_file("acp_eeprom_vars.cpp", context.settings.source_dir / EEPROM_SOURCE_FILE, output)


GENERATOR = ContentGenerator(name=NAME, prepare=prepare, generate=generate, depends_on=(project_code.NAME,))
