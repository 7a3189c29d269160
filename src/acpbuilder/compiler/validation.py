# Copyright 2026 ACP Builder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Checks of a project against the contracts of its modules.

All checks fail fast with :class:`CompilationError` on the first violation.
"""

from __future__ import annotations

from acpbuilder.errors import CompilationError
from acpbuilder.model.modules import ComponentType, Library, Module
from acpbuilder.model.project import Component, Project
from acpbuilder.platform.registry import Platform
from acpbuilder.platform.rules import check_value

# ###############
# Public Interface
# ###############


def check_component_names(components: list[Component]) -> None:
    """Raise if two components share a name."""
    names: set[str] = set()
    for component in components:
        if component.name in names:
            raise CompilationError(f"Duplicated component name: {component.name}")
        names.add(component.name)


def check_component(component: Component, modules: dict[str, Module], platform: Platform) -> ComponentType:
    """Validate *component* against its component type.

    Every declared property must have an effective value accepted by the
    platform and by the property's restriction.  Properties and events set
    on the component must be declared by the type.

    Returns:
        The component type of *component*.

    Raises:
        CompilationError: On the first violation.
    """
    component_type = modules.get(component.type)
    if not isinstance(component_type, ComponentType):
        raise CompilationError(f"Invalid component type ({component.type}) of component {component.name}.")

    for name, property_type in component_type.properties.items():
        value = property_type.effective_value(component.properties.get(name))
        if not (check_value(platform, property_type.type, value) and property_type.check_restrictions(value)):
            raise CompilationError(f"Invalid or undefined value of property '{name}' of component '{component.name}'.")

    for name in component.properties:
        if name not in component_type.properties:
            raise CompilationError(f"Property '{name}' is not supported in component '{component.name}'.")

    for name in component.events:
        if name not in component_type.events:
            raise CompilationError(f"Event '{name}' is not supported in component '{component.name}'.")

    return component_type


def check_library_imports(project: Project, modules: dict[str, Module]) -> None:
    """Raise if a library imported by the program is not a library module."""
    for name in project.library_imports:
        if not isinstance(modules.get(name), Library):
            raise CompilationError(f"Library {name} imported by program is not a library module.")


def check_project(project: Project, modules: dict[str, Module], platform: Platform) -> None:
    """Run all component and import checks on a resolved project."""
    for component in project.components:
        check_component(component, modules, platform)
    check_library_imports(project, modules)
