# Copyright 2026 ACP Builder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Compilation of a project into an Arduino library.

A compile runs these steps, aborting on the first error:

1. Load the project description.
2. Select the target platform (``Arduino`` when none is named).
3. Check that component names are unique.
4. Resolve the modules used by components and library imports, together
   with everything they require.
5. Validate every component against its type and every library import.
6. Create the output directories and export the static module assets.
7. Run the content generators.
"""

from __future__ import annotations

import logging
from pathlib import Path

from acpbuilder.compiler.assets import export_module_assets
from acpbuilder.compiler.context import CompilationContext
from acpbuilder.compiler.pipeline import ContentGenerator, run_generators
from acpbuilder.compiler.resolver import ModuleLoader, directory_module_loader, resolve_modules
from acpbuilder.compiler.settings import CompilationSettings
from acpbuilder.compiler.validation import check_component_names, check_project
from acpbuilder.errors import CompilationError, ConfigurationError
from acpbuilder.generators import default_generators
from acpbuilder.model.project import Project
from acpbuilder.parser.project_reader import read_project
from acpbuilder.platform.registry import get_platform

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


def compile_project(
    settings: CompilationSettings,
    modules_dir: Path,
    generators: list[ContentGenerator] | None = None,
) -> CompilationContext:
    """Compile the project named in *settings* into an Arduino library.

    Args:
        settings: Compilation settings.
        modules_dir: Root directory of the module tree.
        generators: Content generators to run; the default set when omitted.

    Returns:
        The context of the finished compilation.

    Raises:
        CompilationError: On any failure; the underlying error is chained.
    """
    logger.info(f"Compiling {settings.project_file} into library '{settings.library_name}'")
    context = load_context(settings, directory_module_loader(modules_dir))

    _prepare_output_directories(settings)
    for module in context.modules.values():
        export_module_assets(module, settings)

    run_generators(default_generators() if generators is None else generators, context)
    logger.info(f"Library written to {settings.library_dir}")
    return context


def load_context(settings: CompilationSettings, load_module: ModuleLoader) -> CompilationContext:
    """Load, resolve, and validate a project without writing anything.

    Raises:
        CompilationError: If the project is invalid.
    """
    project = _load_project(settings.project_file)

    platform_name = project.effective_platform_name
    platform = get_platform(platform_name)
    if platform is None:
        raise CompilationError(f"Unsupported hardware platform '{platform_name}'.")
    logger.debug(f"Target platform: {platform.name}")

    check_component_names(project.components)

    required = [component.type for component in project.components] + list(project.library_imports)
    modules = resolve_modules(required, load_module)
    logger.debug(f"Resolved {len(modules)} module(s)")

    check_project(project, modules, platform)
    return CompilationContext(settings=settings, project=project, platform=platform, modules=modules)


# ################
# Implementation
# ################


def _load_project(project_file: Path) -> Project:
    try:
        return read_project(project_file)
    except ConfigurationError as exc:
        raise CompilationError("Project configuration contains errors.") from exc


def _prepare_output_directories(settings: CompilationSettings) -> None:
    for directory in (settings.include_dir, settings.source_dir):
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise CompilationError(f"Output directory {directory} cannot be created.") from exc
