# Copyright 2026 ACP Builder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Semantic model for ACP modules and projects."""

from acpbuilder.model.entities import (
    Binding,
    BindingKind,
    Event,
    Instance,
    Looper,
    MethodCall,
    MethodWrapper,
    Parameter,
    PropertyType,
    ValueKind,
)
from acpbuilder.model.modules import (
    COMPONENT_TYPE_TAG,
    LIBRARY_TAG,
    ComponentType,
    Library,
    Module,
    module_path,
)
from acpbuilder.model.project import DEFAULT_PLATFORM, Component, EepromItem, Project

__all__ = [
    # Component type building blocks
    "Binding",
    "BindingKind",
    "Event",
    "Instance",
    "Looper",
    "MethodCall",
    "MethodWrapper",
    "Parameter",
    "PropertyType",
    "ValueKind",
    # Modules
    "COMPONENT_TYPE_TAG",
    "LIBRARY_TAG",
    "ComponentType",
    "Library",
    "Module",
    "module_path",
    # Project
    "DEFAULT_PLATFORM",
    "Component",
    "EepromItem",
    "Project",
]
