# Copyright 2026 ACP Builder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Rendering helpers shared by the content generators."""

from __future__ import annotations

from collections.abc import Iterable

from acpbuilder.compiler.context import CompilationContext
from acpbuilder.compiler.templates import merge_slashes, substitute
from acpbuilder.model.entities import Instance, MethodCall
from acpbuilder.model.modules import ComponentType, module_path
from acpbuilder.model.project import Component
from acpbuilder.platform.rules import escape_value

BASIC_INDENT = "  "


def unique(lines: Iterable[str]) -> list[str]:
    """Return *lines* without duplicates, keeping the first occurrence."""
    return list(dict.fromkeys(lines))


def module_include(module_name: str, include: str) -> str:
    """Return the ``#include`` line of a header shipped with a module."""
    return merge_slashes(f"#include <{module_path(module_name)}/{include}>")


def instance_replacements(
    context: CompilationContext, component: Component, component_type: ComponentType
) -> dict[str, str]:
    """Return the values available to instance templates of *component*.

    These are the escaped effective values of all declared properties,
    overlaid by the component's autogenerated properties.
    """
    replacements: dict[str, str] = {}
    for name, property_type in component_type.properties.items():
        escaped = escape_value(property_type.type, property_type.effective_value(component.properties.get(name)))
        if escaped is not None:
            replacements[name] = escaped
    replacements.update(context.state.autogenerated_properties.get(component.name, {}))
    return replacements


def render_class_type(instance: Instance, replacements: dict[str, str]) -> str:
    return substitute(instance.class_type, replacements).strip()


def render_constructor(instance: Instance, replacements: dict[str, str]) -> str:
    """Return the parenthesized constructor arguments, or an empty string."""
    arguments = substitute(instance.constructor_args, replacements).strip()
    return f"({arguments})" if arguments else ""


def render_declaration(instance: Instance, object_name: str, replacements: dict[str, str]) -> str:
    """Return the definition of an object created from *instance*."""
    return f"{render_class_type(instance, replacements)} {object_name}{render_constructor(instance, replacements)};"


def render_method_call(call: MethodCall, object_name: str, replacements: dict[str, str]) -> str:
    arguments = substitute(call.arguments, replacements).strip()
    return f"{object_name}.{call.method}({arguments});"


def description_lines(description: str) -> list[str]:
    """Return the non-blank lines of *description* as summary comment lines."""
    return [f"//   {line.strip()}" for line in description.strip().splitlines() if line.strip()]
