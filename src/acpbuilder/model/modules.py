# Copyright 2026 ACP Builder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Module descriptions: component types and libraries."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel
from pydantic import Field as _Field

from acpbuilder.errors import ConfigurationError
from acpbuilder.model.entities import Binding, Event, Instance, Looper, MethodWrapper, PropertyType

# ###############
# Public Interface
# ###############

COMPONENT_TYPE_TAG = "component-type"
LIBRARY_TAG = "library"


class ComponentType(BaseModel):
    """A module describing a reusable component.

    Attributes:
        name: Dotted module name (``acp.basic.led``).
        directory: Directory holding the module description and assets.
        required_modules: Names of modules this module depends on.
        required_platform_includes: Headers of platform (Arduino) libraries
            required by the module.
        view: Object exposed to user code, if any.
        controller: Object driving the component internally, if any.
        view_binding: Binding of the view object into the controller.
        properties: Declared properties, in declaration order.
        events: Declared events, in declaration order.
        loopers: Periodically invoked controller methods.
        method_wrappers: Generated forwarding functions.
    """

    kind: Literal["component-type"] = "component-type"
    name: str
    directory: Path | None = None
    required_modules: list[str] = _Field(default_factory=list)
    required_platform_includes: list[str] = _Field(default_factory=list)
    view: Instance | None = None
    controller: Instance | None = None
    view_binding: Binding | None = None
    properties: dict[str, PropertyType] = _Field(default_factory=dict)
    events: dict[str, Event] = _Field(default_factory=dict)
    loopers: list[Looper] = _Field(default_factory=list)
    method_wrappers: list[MethodWrapper] = _Field(default_factory=list)

    def check_structure(self) -> None:
        """Verify the internal consistency of the description.

        Raises:
            ConfigurationError: If the view binding lacks a view or controller,
                a view declares init/loop methods, or a looper timing refers
                to neither an integer nor a declared property.
        """
        if self.view_binding is not None and (self.view is None or self.controller is None):
            raise ConfigurationError("View binding can be defined only if the component has a controller and a view.")

        if self.view is not None:
            if self.view.init_method is not None:
                raise ConfigurationError("Init method for views is not allowed.")
            if self.view.loop_method is not None:
                raise ConfigurationError("Loop method for views is not allowed.")

        for looper in self.loopers:
            if not self._is_timing_reference(looper.interval):
                raise ConfigurationError(
                    f"Interval of looper with method {looper.method} does not contain an integer value "
                    "or property name."
                )
            if not self._is_timing_reference(looper.initial_delay):
                raise ConfigurationError(
                    f"Initial delay of looper with method {looper.method} does not contain an integer value "
                    "or property name."
                )

    def _is_timing_reference(self, value: str) -> bool:
        value = value.strip()
        return not value or _INTEGER_RE.match(value) is not None or value in self.properties


class Library(BaseModel):
    """A module bundling headers that can be imported by the program."""

    kind: Literal["library"] = "library"
    name: str
    directory: Path | None = None
    required_modules: list[str] = _Field(default_factory=list)
    required_platform_includes: list[str] = _Field(default_factory=list)
    includes: list[str] = _Field(default_factory=list)


# The `kind` discriminator of a module mirrors the root tag of the description file.
Module = Annotated[ComponentType | Library, _Field(discriminator="kind")]


def module_path(module_name: str) -> str:
    """Return the relative path (``a/b/c``) corresponding to a dotted module name."""
    return module_name.replace(".", "/")


# ################
# Implementation
# ################

_INTEGER_RE = re.compile(r"^[+-]?[0-9]+\Z")
