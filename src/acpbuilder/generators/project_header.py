# Copyright 2026 ACP Builder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Generator of ``src/<libraryName>.h``, the header included by user sketches.

It declares the view objects of all components and the EEPROM items, and
includes the headers of imported libraries.
"""

from __future__ import annotations

from acpbuilder.compiler.context import CompilationContext
from acpbuilder.compiler.eeprom import EEPROM_HEADER_INCLUDE
from acpbuilder.compiler.pipeline import ContentGenerator
from acpbuilder.compiler.templates import merge_lines, render_to_file
from acpbuilder.errors import CompilationError
from acpbuilder.generators import project_code
from acpbuilder.generators._common import instance_replacements, module_include, render_class_type, unique
from acpbuilder.model.modules import Library

NAME = "project-header"


def prepare(context: CompilationContext, output: dict[str, str]) -> None:
    includes: list[str] = []
    view_externs: list[str] = []

    for component in context.project.components:
        component_type = context.component_type_of(component)
        view = component_type.view
        if view is None:
            continue
        includes.extend(module_include(component_type.name, include) for include in view.includes)
        try:
            class_type = render_class_type(view, instance_replacements(context, component, component_type))
            if not class_type:
                raise CompilationError("Class type is empty.")
        except CompilationError as exc:
            raise CompilationError(f"Class type for view of component {component.name} is invalid.") from exc
        view_externs.append(f"extern {class_type} {component.name};")

    for name in context.project.library_imports:
        library = context.modules.get(name)
        if not isinstance(library, Library):
            raise CompilationError(f"Library {name} imported by program is not a library module.")
        includes.extend(module_include(library.name, include) for include in library.includes)

    externs = context.state.eeprom_externs
    if externs:
        includes.append(f"#include <{EEPROM_HEADER_INCLUDE}>")

    output["includes"] = merge_lines(unique(includes))
    output["views"] = merge_lines(view_externs)
    output["eepromUsage"] = str(context.state.eeprom_usage)
    output["eepromVars"] = merge_lines(externs)


def generate(context: CompilationContext, output: dict[str, str]) -> None:
    render_to_file("acp_project.h", context.settings.project_header_file, output)


GENERATOR = ContentGenerator(name=NAME, prepare=prepare, generate=generate, depends_on=(project_code.NAME,))
