# Copyright 2026 ACP Builder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Export of the static headers and sources shipped with modules."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from acpbuilder.compiler.settings import CompilationSettings
from acpbuilder.errors import CompilationError
from acpbuilder.model.modules import Module, module_path

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

INCLUDE_SUBDIR = "include"
SOURCE_SUBDIR = "src"


def export_module_assets(module: Module, settings: CompilationSettings) -> None:
    """Copy the ``include`` and ``src`` trees of *module* into the library.

    Headers are mirrored under ``src/<module/path>``.  Sources are mirrored
    under ``src/sources/<module/path>``, or flattened into ``src/sources``
    when *settings.merge_sources* is set.

    Raises:
        CompilationError: If a file cannot be copied.
    """
    if module.directory is None:
        return

    include_dir = module.directory / INCLUDE_SUBDIR
    if include_dir.is_dir():
        _copy_tree(include_dir, settings.include_dir / module_path(module.name))

    source_dir = module.directory / SOURCE_SUBDIR
    if source_dir.is_dir():
        if settings.merge_sources:
            _copy_tree_merged(source_dir, settings.source_dir, merged_prefix(module.name))
        else:
            _copy_tree(source_dir, settings.source_dir / module_path(module.name))


def merged_prefix(module_name: str) -> str:
    """Return the file-name prefix of module sources in merge mode.

    Examples:
        >>> merged_prefix("acp.basic_io.led")
        'acp_basic__io_led_'
    """
    return _underscore_escape(module_name).replace(".", "_") + "_"


# ################
# Implementation
# ################


def _underscore_escape(name: str) -> str:
    return name.replace("_", "__")


def _copy_tree(source: Path, destination: Path) -> None:
    try:
        shutil.copytree(source, destination, dirs_exist_ok=True)
    except (OSError, shutil.Error) as exc:
        raise CompilationError(f"Directory {source} cannot be copied to {destination}.") from exc
    logger.debug(f"Copied {source} to {destination}")


def _copy_tree_merged(source: Path, destination: Path, prefix: str) -> None:
    try:
        destination.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise CompilationError(f"Directory {destination} does not exist or cannot be created.") from exc

    for entry in sorted(source.iterdir()):
        if entry.is_dir():
            _copy_tree_merged(entry, destination, prefix + _underscore_escape(entry.name) + "_")
        elif entry.is_file():
            target = destination / (prefix + _underscore_escape(entry.name))
            try:
                shutil.copyfile(entry, target)
            except OSError as exc:
                raise CompilationError(f"File {entry} cannot be copied to {target}.") from exc
            logger.debug(f"Copied {entry} to {target}")
