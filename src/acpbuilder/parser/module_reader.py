# Copyright 2026 ACP Builder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Reader for module description files (``description.xml``).

The root tag of the document selects the kind of module: ``component-type``
or ``library``.  Both share a ``dependencies`` block and a ``name``
attribute; the remaining content is read by a kind-specific function
selected from a dispatch table.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any
from xml.etree.ElementTree import Element

from acpbuilder.errors import ConfigurationError
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
from acpbuilder.model.modules import COMPONENT_TYPE_TAG, LIBRARY_TAG, ComponentType, Library, Module
from acpbuilder.parser.elements import child, children, load_root, parse_root, simple_value, text_of

# ###############
# Public Interface
# ###############

DESCRIPTION_FILE = "description.xml"


def read_module(path: Path) -> Module:
    """Load a module description from *path*.

    The directory containing the file becomes the module's directory.

    Raises:
        ConfigurationError: If the file cannot be read or describes an
            invalid module.
    """
    root = load_root(path, "module description")
    try:
        return _parse_root(root, path.parent)
    except ConfigurationError as exc:
        raise ConfigurationError(f"Loading of description of a module from file '{path}' failed.") from exc


def parse_module(text: str, directory: Path | None = None) -> Module:
    """Parse the XML text of a module description.

    Args:
        text: Content of a ``description.xml`` file.
        directory: Directory of the module, if known.

    Returns:
        A :class:`ComponentType` or :class:`Library`.

    Raises:
        ConfigurationError: If the description is invalid.
    """
    return _parse_root(parse_root(text, "module description"), directory)


def parse_binding(element: Element) -> Binding:
    """Read a binding: ``<binding type="attribute|method">target</binding>``."""
    code = (element.get("type") or "").strip()
    try:
        kind = BindingKind(code.lower())
    except ValueError:
        raise ConfigurationError(f"Unknown binding type: '{code}'") from None

    target = text_of(element).strip()
    if not target:
        raise ConfigurationError("Binding target cannot be empty.")
    return Binding(kind=kind, target=target)


# ################
# Implementation
# ################


def _parse_root(root: Element, directory: Path | None) -> Module:
    parse_fn = _MODULE_PARSERS.get(root.tag)
    if parse_fn is None:
        raise ConfigurationError(f"Unknown module type '{root.tag}' (root element of the module description).")
    common = _parse_common(root)
    common["directory"] = directory
    return parse_fn(root, common)


def _parse_common(root: Element) -> dict[str, Any]:
    """Read the name and dependencies shared by all module kinds."""
    required_modules: list[str] = []
    platform_includes: list[str] = []

    dependencies = child(root, "dependencies")
    if dependencies is not None:
        for module_element in children(dependencies, "module"):
            dependency = text_of(module_element).strip()
            if dependency:
                required_modules.append(dependency)

        for library_element in children(dependencies, "arduino-library"):
            includes = (library_element.get("include") or "").strip()
            if not includes:
                includes = text_of(library_element).strip() + ".h"
            for include in includes.split(","):
                include = include.strip()
                if include:
                    platform_includes.append(include)

    name = (root.get("name") or "").strip()
    if not name:
        raise ConfigurationError("Name of the module cannot be empty.")

    return {
        "name": name,
        "required_modules": required_modules,
        "required_platform_includes": platform_includes,
    }


def _parse_component_type(root: Element, common: dict[str, Any]) -> ComponentType:
    view_elements = children(root, "view")
    if len(view_elements) > 1:
        raise ConfigurationError("Component can expose at most one view instance.")
    view = None
    if view_elements:
        try:
            view = _parse_instance(view_elements[0])
        except ConfigurationError as exc:
            raise ConfigurationError("View description contains errors.") from exc

    controller_elements = children(root, "controller")
    if len(controller_elements) > 1:
        raise ConfigurationError("Component can have at most one controller instance.")
    controller = None
    view_binding = None
    if controller_elements:
        try:
            controller = _parse_instance(controller_elements[0])
            binding_element = child(controller_elements[0], "view-binding")
            if binding_element is not None:
                view_binding = parse_binding(binding_element)
        except ConfigurationError as exc:
            raise ConfigurationError("Controller description contains errors.") from exc

    component_type = ComponentType(
        **common,
        view=view,
        controller=controller,
        view_binding=view_binding,
        properties=_parse_properties(root),
        events=_parse_events(root),
        loopers=_parse_loopers(root),
        method_wrappers=_parse_method_wrappers(root),
    )
    component_type.check_structure()
    return component_type


def _parse_library(root: Element, common: dict[str, Any]) -> Library:
    includes: list[str] = []
    includes_element = child(root, "includes")
    if includes_element is not None:
        for include_element in children(includes_element, "include"):
            include = text_of(include_element).strip()
            if include:
                includes.append(include)
    return Library(**common, includes=includes)


_MODULE_PARSERS: dict[str, Callable[[Element, dict[str, Any]], Module]] = {
    COMPONENT_TYPE_TAG: _parse_component_type,
    LIBRARY_TAG: _parse_library,
}


def _parse_instance(element: Element) -> Instance:
    includes: list[str] = []
    includes_element = child(element, "includes")
    if includes_element is not None:
        for include_element in children(includes_element, "include"):
            include = text_of(include_element).strip()
            if include:
                includes.append(include)

    class_type = simple_value(element, "class").strip()
    if not class_type:
        raise ConfigurationError("Class of the instance cannot be empty.")

    return Instance(
        includes=includes,
        class_type=class_type,
        constructor_args=simple_value(element, "constructor").strip(),
        init_method=_parse_method_call(element, "init"),
        loop_method=_parse_method_call(element, "loop"),
    )


def _parse_method_call(element: Element, name: str) -> MethodCall | None:
    call_element = child(element, name)
    if call_element is None:
        return None
    method = text_of(call_element).strip()
    if not method:
        raise ConfigurationError(f"Method of the {name} call cannot be empty.")
    return MethodCall(method=method, arguments=(call_element.get("args") or "").strip())


def _parse_properties(root: Element) -> dict[str, PropertyType]:
    properties: dict[str, PropertyType] = {}
    properties_element = child(root, "properties")
    if properties_element is None:
        return properties

    for property_element in children(properties_element, "property"):
        name = simple_value(property_element, "name").strip()
        if not name:
            raise ConfigurationError("Each component property must have a non-empty name.")
        if name in properties:
            raise ConfigurationError(f"Duplicated property name ({name}).")
        try:
            properties[name] = _parse_property(property_element, name)
        except ConfigurationError as exc:
            raise ConfigurationError(f"Description of property {name} contains errors.") from exc
    return properties


def _parse_property(element: Element, name: str) -> PropertyType:
    datatype = simple_value(element, "type").strip()
    if not datatype:
        raise ConfigurationError(f"Type of property {name} cannot be empty.")

    value = None
    value_kind = None
    value_element = child(element, "value")
    if value_element is not None:
        value = text_of(value_element).strip()
        code = (value_element.get("type") or "").strip() or ValueKind.DEFAULT.value
        try:
            value_kind = ValueKind(code.lower())
        except ValueError:
            raise ConfigurationError(f"Unknown value type of property {name}: {code}") from None

    binding = None
    binding_element = child(element, "binding")
    if binding_element is not None:
        try:
            binding = parse_binding(binding_element)
        except ConfigurationError as exc:
            raise ConfigurationError(f"Binding of property {name} contains errors.") from exc

    return PropertyType(
        type=datatype,
        value=value,
        value_kind=value_kind,
        binding=binding,
        description=simple_value(element, "description").strip(),
    )


def _parse_parameters(element: Element, owner: str) -> list[Parameter]:
    parameters: list[Parameter] = []
    parameters_element = child(element, "parameters")
    if parameters_element is None:
        return parameters
    for parameter_element in children(parameters_element, "parameter"):
        datatype = text_of(parameter_element).strip()
        if not datatype:
            raise ConfigurationError(f"Empty parameter type in {owner}.")
        parameters.append(Parameter(type=datatype, name=(parameter_element.get("name") or "").strip()))
    return parameters


def _parse_result_type(element: Element) -> str | None:
    result_element = child(element, "result")
    if result_element is None:
        return None
    return text_of(result_element).strip() or None


def _parse_events(root: Element) -> dict[str, Event]:
    events: dict[str, Event] = {}
    events_element = child(root, "events")
    if events_element is None:
        return events

    for event_element in children(events_element, "event"):
        name = simple_value(event_element, "name").strip()
        if not name:
            raise ConfigurationError("Each component event must have a non-empty name.")
        if name in events:
            raise ConfigurationError(f"Duplicated event name ({name}).")
        try:
            binding = None
            binding_element = child(event_element, "binding")
            if binding_element is not None:
                binding = parse_binding(binding_element)
            events[name] = Event(
                parameters=_parse_parameters(event_element, f"event {name}"),
                result_type=_parse_result_type(event_element),
                binding=binding,
                description=simple_value(event_element, "description").strip(),
            )
        except ConfigurationError as exc:
            raise ConfigurationError(f"Description of event {name} contains errors.") from exc
    return events


def _parse_loopers(root: Element) -> list[Looper]:
    loopers: list[Looper] = []
    loopers_element = child(root, "loopers")
    if loopers_element is None:
        return loopers

    for looper_element in children(loopers_element, "looper"):
        try:
            method = simple_value(looper_element, "method").strip()
            if not method:
                raise ConfigurationError("Looper must have a looper method.")
            id_binding = None
            binding_element = child(looper_element, "id-binding")
            if binding_element is not None:
                try:
                    id_binding = parse_binding(binding_element)
                except ConfigurationError as exc:
                    raise ConfigurationError(
                        f"Looper with method {method} contains error in the id-binding."
                    ) from exc
            loopers.append(
                Looper(
                    method=method,
                    interval=simple_value(looper_element, "interval").strip(),
                    initial_delay=simple_value(looper_element, "initial-delay").strip(),
                    id_binding=id_binding,
                )
            )
        except ConfigurationError as exc:
            raise ConfigurationError("Looper description contains errors.") from exc
    return loopers


def _parse_method_wrappers(root: Element) -> list[MethodWrapper]:
    wrappers: list[MethodWrapper] = []
    wrappers_element = child(root, "method-wrappers")
    if wrappers_element is None:
        return wrappers

    for wrapper_element in children(wrappers_element, "wrapper"):
        try:
            method = simple_value(wrapper_element, "method").strip()
            if not method:
                raise ConfigurationError("Method wrapper must name the wrapped method.")
            binding = None
            binding_element = child(wrapper_element, "binding")
            if binding_element is not None:
                binding = parse_binding(binding_element)
            wrappers.append(
                MethodWrapper(
                    method=method,
                    autogenerated_property=simple_value(wrapper_element, "property").strip() or None,
                    binding=binding,
                    parameters=_parse_parameters(wrapper_element, f"wrapper of method {method}"),
                    result_type=_parse_result_type(wrapper_element),
                )
            )
        except ConfigurationError as exc:
            raise ConfigurationError("Description of a method wrapper contains errors.") from exc
    return wrappers
