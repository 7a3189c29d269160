# Copyright 2026 ACP Builder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Transitive loading of the modules referenced by a project.

Module names are dotted (``acp.basic.led``); the default loader maps each
segment to a nested directory below the modules root and reads the
``description.xml`` found there.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from pathlib import Path

from acpbuilder.errors import CompilationError, ConfigurationError
from acpbuilder.model.modules import Module, module_path
from acpbuilder.parser.module_reader import DESCRIPTION_FILE, read_module

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

ModuleLoader = Callable[[str], Module]


def resolve_modules(names: Iterable[str], load_module: ModuleLoader) -> dict[str, Module]:
    """Load the modules named in *names* together with everything they require.

    Every module is loaded at most once, however often it is referenced.

    Args:
        names: Names of directly referenced modules.
        load_module: Callable returning the module for a name.

    Returns:
        The transitive closure of required modules keyed by name, in the
        order they were loaded.

    Raises:
        CompilationError: If a name is empty, a module cannot be loaded, or a
            loaded module declares a different name than requested.
    """
    result: dict[str, Module] = {}
    missing = _unique(names)
    while missing:
        loaded: list[Module] = []
        for name in missing:
            if name in result:
                continue
            module = _load_checked(name, load_module)
            result[name] = module
            loaded.append(module)
            logger.debug(f"Loaded module {name}")

        missing = _unique(
            required for module in loaded for required in module.required_modules if required not in result
        )
    return result


def directory_module_loader(modules_dir: Path) -> ModuleLoader:
    """Return a loader reading module descriptions below *modules_dir*."""

    def _load(name: str) -> Module:
        module_dir = modules_dir / module_path(name)
        if not module_dir.is_dir():
            raise CompilationError(f"Unavailable module {name}")
        return read_module(module_dir / DESCRIPTION_FILE)

    return _load


# ################
# Implementation
# ################


def _unique(names: Iterable[str]) -> list[str]:
    seen: dict[str, None] = {}
    for name in names:
        seen.setdefault(name.strip(), None)
    return list(seen)


def _load_checked(name: str, load_module: ModuleLoader) -> Module:
    if not name:
        raise CompilationError("Module name cannot be empty.")
    try:
        module = load_module(name)
    except (CompilationError, ConfigurationError) as exc:
        raise CompilationError(f"Invalid description file of module {name}") from exc
    if module.name != name:
        raise CompilationError(f"Invalid name of module in module description: {name} (declared {module.name})")
    return module
