# Copyright 2026 ACP Builder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Generator of the example sketch shipped with the library.

The sketch includes the library, lists the objects available to user code,
and provides empty stubs of all event handlers referenced by the project.
"""

from __future__ import annotations

from acpbuilder.compiler.context import CompilationContext
from acpbuilder.compiler.pipeline import ContentGenerator
from acpbuilder.compiler.templates import merge_lines, render_to_file
from acpbuilder.generators import project_code
from acpbuilder.generators._common import description_lines, unique

NAME = "example"
SEPARATOR_LINE = "//" + "-" * 70
PROGRAM_EVENTS = ("OnStart", "OnLoop")


def prepare(context: CompilationContext, output: dict[str, str]) -> None:
    includes = [f"#include <{context.settings.library_name}.h>"]
    for module in context.modules.values():
        includes.extend(f"#include <{include}>" for include in module.required_platform_includes)
    if context.state.eeprom_usage > 0:
        includes.append("#include <EEPROM.h>")

    callbacks: list[str] = []
    _program_callbacks(context, callbacks)
    _component_callbacks(context, callbacks)

    summary = unique(_object_summary(context))
    if summary:
        summary = [SEPARATOR_LINE, "// Summary of available objects:", *summary, SEPARATOR_LINE]

    output["includes"] = merge_lines(unique(includes))
    output["objectSummary"] = merge_lines(summary)
    output["callbacks"] = merge_lines(callbacks)


def generate(context: CompilationContext, output: dict[str, str]) -> None:
    render_to_file("example.ino", context.settings.example_file, output)


GENERATOR = ContentGenerator(name=NAME, prepare=prepare, generate=generate, depends_on=(project_code.NAME,))


def _callback_stub(title: str, header: str) -> list[str]:
    return [
        SEPARATOR_LINE,
        f"// Event callback for {title}",
        header + " {",
        "  // TODO Auto-generated callback stub",
        "}",
        "",
    ]


def _program_callbacks(context: CompilationContext, callbacks: list[str]) -> None:
    events = context.project.program_events
    for event in PROGRAM_EVENTS:
        if event in events:
            callbacks.extend(_callback_stub(f"Program.{event}", f"void {events[event]}()"))


def _component_callbacks(context: CompilationContext, callbacks: list[str]) -> None:
    for component in context.project.components:
        component_type = context.component_type_of(component)
        for name, event in component_type.events.items():
            handler = component.events.get(name)
            if event.binding is None or handler is None:
                continue
            callbacks.extend(_callback_stub(f"{component.name}.{name}", event.handler_header(handler, True)))


def _object_summary(context: CompilationContext) -> list[str]:
    lines: list[str] = []
    for component in context.project.components:
        if context.component_type_of(component).view is None:
            continue
        lines.append(f"// {component.name} ({component.type})")
        lines.extend(description_lines(component.description))

    for item in context.project.eeprom_items:
        if item.is_array:
            lines.append(f"// {item.name} (eeprom array of type {item.type} with length {item.array_length})")
        else:
            lines.append(f"// {item.name} (eeprom variable of type {item.type})")
        lines.extend(description_lines(item.description))
    return lines
