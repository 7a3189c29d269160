# Copyright 2026 ACP Builder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Project configuration: components, program settings, and EEPROM items."""

from __future__ import annotations

from pydantic import BaseModel
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############

DEFAULT_PLATFORM = "Arduino"


class Component(BaseModel):
    """A configured instance of a component type."""

    type: str
    name: str
    description: str = ""
    properties: dict[str, str] = _Field(default_factory=dict)
    events: dict[str, str] = _Field(default_factory=dict)


class EepromItem(BaseModel):
    """A variable or array persisted in EEPROM.

    A negative *array_length* marks a scalar variable.
    """

    name: str
    type: str
    value: str | None = None
    description: str = ""
    cached: bool = False
    array_length: int = -1

    @property
    def is_array(self) -> bool:
        return self.array_length >= 0


class Project(BaseModel):
    """Top-level model of a parsed project description."""

    platform_name: str = ""
    watchdog_level: int = -1
    components: list[Component] = _Field(default_factory=list)
    library_imports: list[str] = _Field(default_factory=list)
    program_events: dict[str, str] = _Field(default_factory=dict)
    eeprom_items: list[EepromItem] = _Field(default_factory=list)
    eeprom_layout_version: str | None = None

    @property
    def effective_platform_name(self) -> str:
        """Return the platform name, falling back to the generic Arduino platform."""
        name = self.platform_name.strip()
        return name if name else DEFAULT_PLATFORM
