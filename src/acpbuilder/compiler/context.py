# Copyright 2026 ACP Builder Contributors
# SPDX-License-Identifier: Apache-2.0

"""State threaded through one compilation."""

from __future__ import annotations

from dataclasses import dataclass, field

from acpbuilder.compiler.settings import CompilationSettings
from acpbuilder.errors import CompilationError
from acpbuilder.model.modules import ComponentType, Module
from acpbuilder.model.project import Component, Project
from acpbuilder.platform.registry import Platform

# ###############
# Public Interface
# ###############

PRIVATE_NAMESPACE = "acp_private"


@dataclass
class SharedState:
    """Values passed between content generators.

    Attributes:
        private_namespace: C++ namespace of non-public generated objects.
            Set by the compiler, read by the project code and EEPROM
            generators.
        eeprom_usage: Number of EEPROM bytes in use, 0 if no items are
            declared.  Written by the project code generator during prepare.
        eeprom_externs: ``extern`` declarations of EEPROM items for the
            project header.  Written by the project code generator.
        autogenerated_properties: Per component name, the properties
            produced during code generation (controller name, method
            wrapper names).  Cleared by the project code generator before
            it populates the map.
    """

    private_namespace: str = PRIVATE_NAMESPACE
    eeprom_usage: int = 0
    eeprom_externs: list[str] = field(default_factory=list)
    autogenerated_properties: dict[str, dict[str, str]] = field(default_factory=dict)


@dataclass
class CompilationContext:
    """Everything a content generator can see.

    The settings, project, platform, and modules are read-only once the
    pipeline starts; only *state* is mutated.
    """

    settings: CompilationSettings
    project: Project
    platform: Platform
    modules: dict[str, Module] = field(default_factory=dict)
    state: SharedState = field(default_factory=SharedState)

    def component_type_of(self, component: Component) -> ComponentType:
        """Return the resolved type of *component*.

        Raises:
            CompilationError: If the type is not a resolved component type.
        """
        module = self.modules.get(component.type)
        if not isinstance(module, ComponentType):
            raise CompilationError(f"Invalid component type ({component.type}) of component {component.name}.")
        return module
