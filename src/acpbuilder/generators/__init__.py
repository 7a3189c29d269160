# Copyright 2026 ACP Builder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Content generators producing the files of the generated library."""

from acpbuilder.compiler.pipeline import ContentGenerator
from acpbuilder.generators import (
    core_header,
    eeprom_vars,
    example,
    library_properties,
    project_code,
    project_header,
)


def default_generators() -> list[ContentGenerator]:
    """Return the generators run by every compilation."""
    return [
        project_code.GENERATOR,
        project_header.GENERATOR,
        core_header.GENERATOR,
        eeprom_vars.GENERATOR,
        example.GENERATOR,
        library_properties.GENERATOR,
    ]


__all__ = ["default_generators"]
