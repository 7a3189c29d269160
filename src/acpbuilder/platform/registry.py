# Copyright 2026 ACP Builder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Registry of supported hardware platforms.

Platform variants share one rule set (see :mod:`acpbuilder.platform.rules`)
and differ only in the resources they provide, so each variant is a plain
data record looked up by name.
"""

from __future__ import annotations

from dataclasses import dataclass

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class Platform:
    """Resources of a hardware platform.

    Attributes:
        name: Name used in project descriptions (``ArduinoMega``).
        digital_pins: Number of digital pins (valid pins are ``0..n-1``).
        analog_pins: Number of analog input pins (``A0..A(n-1)``).
        interrupts: Number of external interrupts.
        hardware_serials: Number of hardware serial ports (``Serial``,
            ``Serial1``, ...).
        max_watchdog_level: Highest watchdog timeout level accepted by
            ``wdt_enable``.
    """

    name: str
    digital_pins: int = 0
    analog_pins: int = 0
    interrupts: int = 0
    hardware_serials: int = 1
    max_watchdog_level: int = 9


PLATFORMS: dict[str, Platform] = {
    "Arduino": Platform(name="Arduino"),
    "ArduinoUno": Platform(name="ArduinoUno", digital_pins=14, analog_pins=6, interrupts=2),
    "ArduinoNano": Platform(name="ArduinoNano", digital_pins=14, analog_pins=6, interrupts=2),
    "ArduinoMega": Platform(name="ArduinoMega", digital_pins=54, analog_pins=16, interrupts=6, hardware_serials=4),
}


def get_platform(name: str | None) -> Platform | None:
    """Return the platform registered under *name*, or None if it is unknown."""
    if name is None:
        return None
    return PLATFORMS.get(name.strip())
