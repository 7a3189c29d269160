# Copyright 2026 ACP Builder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Reader for project description files."""

from __future__ import annotations

from pathlib import Path
from xml.etree.ElementTree import Element

from acpbuilder.errors import ConfigurationError
from acpbuilder.model.project import Component, EepromItem, Project
from acpbuilder.parser.elements import (
    attribute_or_child,
    child,
    children,
    load_root,
    parse_root,
    simple_value,
    text_of,
)

# ###############
# Public Interface
# ###############


def read_project(path: Path) -> Project:
    """Load a project description from *path*.

    Raises:
        ConfigurationError: If the file cannot be read or the description is
            invalid.  The underlying problem is chained as the cause.
    """
    try:
        return _parse_root(load_root(path, "project description"))
    except ConfigurationError as exc:
        raise ConfigurationError(f"Loading of project configuration from '{path}' failed.") from exc


def parse_project(text: str) -> Project:
    """Parse the XML text of a project description.

    Raises:
        ConfigurationError: If the description is invalid.
    """
    return _parse_root(parse_root(text, "project description"))


# ################
# Implementation
# ################


def _parse_root(root: Element) -> Project:
    if root.tag != "project":
        raise ConfigurationError("Root element of a project configuration must be an element with name 'project'.")

    watchdog_level, program_events, library_imports = _parse_program(child(root, "program"))
    layout_version, eeprom_items = _parse_eeprom(child(root, "eeprom"))

    components: list[Component] = []
    components_element = child(root, "components")
    if components_element is not None:
        for component_element in children(components_element, "component"):
            components.append(_parse_component(component_element))

    return Project(
        platform_name=(root.get("platform") or "").strip(),
        watchdog_level=watchdog_level,
        components=components,
        library_imports=library_imports,
        program_events=program_events,
        eeprom_items=eeprom_items,
        eeprom_layout_version=layout_version,
    )


def _parse_program(element: Element | None) -> tuple[int, dict[str, str], list[str]]:
    events: dict[str, str] = {}
    imports: list[str] = []
    if element is None:
        return -1, events, imports

    watchdog_level = -1
    raw_level = element.get("watchdog-level")
    if raw_level is not None:
        try:
            watchdog_level = int(raw_level.strip())
        except ValueError:
            raise ConfigurationError("Watchdog level must be a non-negative integer.") from None
        if watchdog_level < 0:
            raise ConfigurationError("Watchdog level must be a non-negative integer.")

    events_element = child(element, "events")
    if events_element is not None:
        for event_element in children(events_element, "event"):
            name = (event_element.get("name") or "").strip()
            handler = text_of(event_element).strip()
            if not name:
                raise ConfigurationError("Program contains event with empty name.")
            if not handler:
                raise ConfigurationError(f"Program event {name} is not set to any function or procedure.")
            events[name] = handler

    imports_element = child(element, "imports")
    if imports_element is not None:
        for library_element in children(imports_element, "library"):
            module_name = text_of(library_element).strip()
            if not module_name:
                raise ConfigurationError("Program contains an empty import of a library module.")
            imports.append(module_name)

    return watchdog_level, events, imports


def _parse_eeprom(element: Element | None) -> tuple[str | None, list[EepromItem]]:
    if element is None:
        return None, []

    items: list[EepromItem] = []
    for item_element in element:
        if item_element.tag in ("variable", "array"):
            items.append(_parse_eeprom_item(item_element))
    return element.get("layout-version"), items


def _parse_eeprom_item(element: Element) -> EepromItem:
    name = simple_value(element, "name").strip()
    try:
        array_length = -1
        if element.tag == "array":
            try:
                array_length = int((element.get("length") or "").strip())
            except ValueError:
                raise ConfigurationError("Length of array must be a nonnegative integer.") from None
            if array_length < 0:
                raise ConfigurationError("Length of array must be a nonnegative integer.")

        if not name:
            raise ConfigurationError("Name of an EEPROM item cannot be empty.")
        datatype = simple_value(element, "type").strip()
        if not datatype:
            raise ConfigurationError("Type of an EEPROM item cannot be empty.")

        return EepromItem(
            name=name,
            type=datatype,
            value=simple_value(element, "value").strip() or None,
            description=simple_value(element, "description").strip(),
            cached=element.get("cached") == "true",
            array_length=array_length,
        )
    except ConfigurationError as exc:
        raise ConfigurationError(f"Configuration of EEPROM item {name} contains errors.") from exc


def _parse_component(element: Element) -> Component:
    name = attribute_or_child(element, "name")
    try:
        if not name:
            raise ConfigurationError("Name of a component cannot be empty.")
        component_type = attribute_or_child(element, "type")
        if not component_type:
            raise ConfigurationError("Type of a component cannot be empty.")

        return Component(
            type=component_type,
            name=name,
            description=simple_value(element, "description").strip(),
            properties=_parse_named_values(child(element, "properties"), "property"),
            events=_parse_named_values(child(element, "events"), "event"),
        )
    except ConfigurationError as exc:
        raise ConfigurationError(f"Configuration of component {name} contains errors.") from exc


def _parse_named_values(element: Element | None, tag: str) -> dict[str, str]:
    """Read ``<tag name="...">value</tag>`` children into a dict."""
    values: dict[str, str] = {}
    if element is None:
        return values
    for item in children(element, tag):
        name = (item.get("name") or "").strip()
        if not name:
            raise ConfigurationError(f"Each {tag} must have a non-empty name.")
        if name in values:
            raise ConfigurationError(f"Duplicated {tag} {name}.")
        values[name] = text_of(item).strip()
    return values
