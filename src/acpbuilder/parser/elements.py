# Copyright 2026 ACP Builder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Helpers for reading description files with ElementTree."""

from __future__ import annotations

from pathlib import Path
from xml.etree import ElementTree

from acpbuilder.errors import ConfigurationError

# ###############
# Public Interface
# ###############


def load_root(path: Path, what: str) -> ElementTree.Element:
    """Read *path* and return the root element of the XML document.

    Args:
        path: File to read.
        what: Human-readable description of the file used in error messages.

    Raises:
        ConfigurationError: If the file cannot be read or is not well-formed.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Cannot read {what} '{path}': {exc}") from exc
    return parse_root(text, f"{what} '{path}'")


def parse_root(text: str, source_label: str) -> ElementTree.Element:
    """Parse XML *text* and return its root element."""
    try:
        return ElementTree.fromstring(text)
    except ElementTree.ParseError as exc:
        raise ConfigurationError(f"Invalid XML in {source_label}: {exc}") from exc


def child(element: ElementTree.Element, name: str) -> ElementTree.Element | None:
    """Return the first direct child of *element* named *name*."""
    return element.find(name)


def children(element: ElementTree.Element, name: str) -> list[ElementTree.Element]:
    """Return all direct children of *element* named *name*, in document order."""
    return element.findall(name)


def text_of(element: ElementTree.Element) -> str:
    """Return the concatenated text content of *element* and its descendants."""
    return "".join(element.itertext())


def simple_value(element: ElementTree.Element, name: str, default: str = "") -> str:
    """Return the text of the child named *name*, or *default* if there is none."""
    found = child(element, name)
    if found is None:
        return default
    return text_of(found)


def attribute_or_child(element: ElementTree.Element, name: str) -> str:
    """Return attribute *name* of *element*, falling back to the child element of that name."""
    value = element.get(name)
    if value is not None:
        return value.strip()
    return simple_value(element, name).strip()
