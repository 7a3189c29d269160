# Copyright 2026 ACP Builder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Generator of ``src/sources/core.cpp``, the heart of the generated library.

The prepare step walks all components and produces:

* private controller objects with the setup code binding their properties,
  events, method wrappers and views,
* public view objects,
* looper handlers and the looper table (array strategy),
* EEPROM item definitions and their start-up code,
* program event calls and the watchdog handling.

It also publishes the EEPROM usage, EEPROM externs and autogenerated
properties to the shared state for the generators that depend on it.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from acpbuilder.compiler.context import CompilationContext
from acpbuilder.compiler.eeprom import generate_eeprom_code
from acpbuilder.compiler.pipeline import ContentGenerator
from acpbuilder.compiler.settings import LooperStrategy
from acpbuilder.compiler.templates import load_template, merge_lines, render_to_file, substitute
from acpbuilder.errors import CompilationError
from acpbuilder.generators._common import (
    BASIC_INDENT,
    instance_replacements,
    module_include,
    render_declaration,
    render_method_call,
    unique,
)
from acpbuilder.model.entities import Instance
from acpbuilder.model.modules import ComponentType
from acpbuilder.model.project import Component
from acpbuilder.platform.rules import escape_value

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

NAME = "project-code"
CORE_SOURCE_FILE = "core.cpp"
LOOPER_HANDLER_PREFIX = "looper_handler_"


def prepare(context: CompilationContext, output: dict[str, str]) -> None:
    state = context.state
    state.autogenerated_properties.clear()
    code = _Code(namespace=state.private_namespace)

    eeprom = generate_eeprom_code(
        context.project.eeprom_items,
        context.platform,
        state.private_namespace,
        context.project.eeprom_layout_version,
    )
    code.includes.extend(eeprom.includes)
    code.setup.extend(eeprom.setup)
    state.eeprom_usage = eeprom.usage
    state.eeprom_externs = list(eeprom.externs)

    _generate_component_objects(context, code)

    loopers_section = ""
    if context.settings.looper_strategy is LooperStrategy.ARRAY:
        loopers_section = _generate_array_loopers(code)

    _generate_program_events(context, code)
    _setup_watchdog(context, code)

    output["includes"] = merge_lines(unique(code.includes))
    output["handlers"] = merge_lines([f"extern {handler};" for handler in unique(code.handlers)])
    output["publicObjects"] = merge_lines(code.public_objects)
    output["privateNamespace"] = state.private_namespace
    output["privateObjects"] = merge_lines(code.private_objects, BASIC_INDENT)
    output["loopersSection"] = loopers_section
    output["methodWrappersSection"] = merge_lines(code.method_wrappers)
    output["eepromVars"] = merge_lines(eeprom.definitions)
    output["eepromVarsInitialization"] = merge_lines(eeprom.initialization, BASIC_INDENT * 2)
    output["setup"] = merge_lines(code.setup, BASIC_INDENT)
    output["loop"] = merge_lines(code.loop, BASIC_INDENT)


def generate(context: CompilationContext, output: dict[str, str]) -> None:
    render_to_file("acp_core.cpp", context.settings.source_dir / CORE_SOURCE_FILE, output)


GENERATOR = ContentGenerator(name=NAME, prepare=prepare, generate=generate)


# ################
# Implementation
# ################

_INTEGER_RE = re.compile(r"^[+-]?[0-9]+\Z")


@dataclass
class _LooperRecord:
    controller: str
    method: str
    interval: int
    initial_delay: int


@dataclass
class _Code:
    """Code fragments collected while walking the project."""

    namespace: str
    handlers: list[str] = field(default_factory=list)
    includes: list[str] = field(default_factory=list)
    public_objects: list[str] = field(default_factory=list)
    private_objects: list[str] = field(default_factory=list)
    setup: list[str] = field(default_factory=list)
    loop: list[str] = field(default_factory=list)
    loopers: list[_LooperRecord] = field(default_factory=list)
    method_wrappers: list[str] = field(default_factory=list)
    controller_count: int = 0
    wrapper_count: int = 0


def _generate_component_objects(context: CompilationContext, code: _Code) -> None:
    for component in context.project.components:
        component_type = context.component_type_of(component)
        if component_type.controller is not None:
            _generate_controller(context, code, component, component_type, component_type.controller)

        view = component_type.view
        if view is not None:
            code.includes.extend(module_include(component_type.name, include) for include in view.includes)
            replacements = instance_replacements(context, component, component_type)
            code.public_objects.append(render_declaration(view, component.name, replacements))


def _generate_controller(
    context: CompilationContext,
    code: _Code,
    component: Component,
    component_type: ComponentType,
    controller: Instance,
) -> None:
    code.includes.extend(module_include(component_type.name, include) for include in controller.includes)

    controller_name = f"controller_{code.controller_count}"
    full_name = f"{code.namespace}::{controller_name}"
    code.controller_count += 1
    autogenerated = context.state.autogenerated_properties.setdefault(component.name, {})
    autogenerated["controller"] = full_name

    code.setup.append(f"// Controller for {component.name}")
    setup_size = len(code.setup)

    for looper in component_type.loopers:
        if looper.id_binding is not None:
            code.setup.append(looper.id_binding.command(full_name, str(len(code.loopers))))
        try:
            interval = _read_int_or_property(looper.interval, component, component_type, -1)
        except CompilationError as exc:
            raise CompilationError(f"Invalid value of interval of looper of the component '{component.name}'.") from exc
        try:
            initial_delay = max(_read_int_or_property(looper.initial_delay, component, component_type, -1), 0)
        except CompilationError as exc:
            raise CompilationError(
                f"Invalid value of initial delay of looper of the component '{component.name}'."
            ) from exc
        code.loopers.append(_LooperRecord(full_name, looper.method, interval, initial_delay))

    for name, property_type in component_type.properties.items():
        if property_type.binding is None:
            continue
        value = property_type.effective_value(component.properties.get(name))
        escaped = escape_value(property_type.type, value)
        if escaped is None:
            raise CompilationError(f"Invalid or undefined value of property {name} of component {component.name}.")
        code.setup.append(property_type.binding.command(full_name, escaped))

    for name, event in component_type.events.items():
        if event.binding is None:
            continue
        handler = component.events.get(name)
        if handler is not None:
            code.setup.append(event.binding.command(full_name, handler))
            code.handlers.append(event.handler_header(handler, False))
        else:
            code.setup.append(event.binding.command(full_name, "NULL"))

    for wrapper in component_type.method_wrappers:
        wrapper_name = f"method_wrapper_{code.wrapper_count}"
        code.wrapper_count += 1

        invocation = wrapper.invocation(f"{full_name}.{wrapper.method}")
        code.method_wrappers.append(wrapper.header(wrapper_name) + " {")
        if wrapper.returns_value():
            code.method_wrappers.append(f"{BASIC_INDENT}return {invocation};")
        else:
            code.method_wrappers.append(f"{BASIC_INDENT}{invocation};")
        code.method_wrappers.append("}")
        code.method_wrappers.append("")

        if wrapper.autogenerated_property:
            autogenerated[wrapper.autogenerated_property] = f"{code.namespace}::{wrapper_name}"
        if wrapper.binding is not None:
            code.setup.append(wrapper.binding.command(full_name, wrapper_name))

    if component_type.view is not None and component_type.view_binding is not None:
        code.setup.append(component_type.view_binding.command(full_name, component.name))

    replacements = instance_replacements(context, component, component_type)
    if controller.init_method is not None:
        code.setup.append(render_method_call(controller.init_method, full_name, replacements))
    if controller.loop_method is not None:
        code.loop.append(render_method_call(controller.loop_method, full_name, replacements))

    if len(code.setup) == setup_size:
        code.setup.pop()

    code.private_objects.append(f"// Controller for {component.name}")
    code.private_objects.append(render_declaration(controller, controller_name, replacements))
    logger.debug(f"Controller {full_name} generated for component {component.name}")


def _generate_array_loopers(code: _Code) -> str:
    """Render the looper handlers and tables, or an empty string without loopers."""
    records = code.loopers
    if not records:
        return ""

    handlers: list[str] = []
    for index, record in enumerate(records):
        if index:
            handlers.append("")
        handlers.append(f"unsigned long {LOOPER_HANDLER_PREFIX}{index}() {{")
        if record.interval >= 0:
            handlers.append(f"{BASIC_INDENT}{record.controller}.{record.method}();")
            handlers.append(f"{BASIC_INDENT}return {record.interval};")
        else:
            handlers.append(f"{BASIC_INDENT}return {record.controller}.{record.method}();")
        handlers.append("}")

    entries = [
        f"{{{record.initial_delay}, ENABLED, {LOOPER_HANDLER_PREFIX}{index}}}" for index, record in enumerate(records)
    ]
    loopers_init = [entry + "," for entry in entries[:-1]] + entries[-1:]

    by_delay = sorted(range(len(records)), key=lambda index: records[index].initial_delay)
    pq_init = "{" + ", ".join(f"loopers + {index}" for index in by_delay) + "}"

    section = substitute(
        load_template("acp_core_loopers_array.cpp"),
        {
            "privateNamespace": code.namespace,
            "numberOfLoopers": str(len(records)),
            "looperHandlers": merge_lines(handlers),
            "loopersInit": merge_lines(loopers_init, BASIC_INDENT),
            "pqInit": pq_init,
        },
    )

    code.loop.append("// Process loopers")
    code.loop.append(f"{code.namespace}::processLoopers();")
    return section


def _generate_program_events(context: CompilationContext, code: _Code) -> None:
    events = context.project.program_events
    if "OnStart" in events:
        handler = events["OnStart"]
        code.setup.append("// Call of the OnStart event")
        code.setup.append(f"{handler}();")
        code.handlers.append(f"void {handler}()")

    if "OnLoop" in events:
        handler = events["OnLoop"]
        code.loop.append("// Call of the OnLoop event")
        code.loop.append(f"{handler}();")
        code.handlers.append(f"void {handler}()")


def _setup_watchdog(context: CompilationContext, code: _Code) -> None:
    level = context.project.watchdog_level
    if level < 0:
        return
    level = min(level, context.platform.max_watchdog_level)
    code.includes.append("#include <avr/wdt.h>")
    code.setup.insert(0, "wdt_disable();")
    code.setup.append(f"wdt_enable({level});")
    code.loop.insert(0, "wdt_reset();")


def _read_int_or_property(value: str, component: Component, component_type: ComponentType, unset: int) -> int:
    """Resolve a looper timing given as an integer literal or a property name."""
    value = value.strip()
    if not value:
        return unset
    if _INTEGER_RE.match(value):
        return int(value)

    property_type = component_type.properties.get(value)
    if property_type is None:
        raise CompilationError(f"Undefined property '{value}'.")

    effective = property_type.effective_value(component.properties.get(value))
    if effective is None or not effective.strip():
        return unset
    if not _INTEGER_RE.match(effective.strip()):
        raise CompilationError(f"The value of property '{value}' cannot be converted to an integer value.")
    return int(effective.strip())
