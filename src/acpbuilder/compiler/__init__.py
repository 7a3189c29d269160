# Copyright 2026 ACP Builder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Compiler of ACP projects: module resolution, validation, and the generator pipeline.

The compile driver lives in :mod:`acpbuilder.compiler.build`.
"""

from acpbuilder.compiler.context import PRIVATE_NAMESPACE, CompilationContext, SharedState
from acpbuilder.compiler.eeprom import allocate_layout, compute_layout_version
from acpbuilder.compiler.pipeline import ContentGenerator, order_generators, run_generators
from acpbuilder.compiler.resolver import directory_module_loader, resolve_modules
from acpbuilder.compiler.settings import CompilationSettings, LooperStrategy
from acpbuilder.compiler.templates import substitute

__all__ = [
    "PRIVATE_NAMESPACE",
    "CompilationContext",
    "SharedState",
    "allocate_layout",
    "compute_layout_version",
    "ContentGenerator",
    "order_generators",
    "run_generators",
    "directory_module_loader",
    "resolve_modules",
    "CompilationSettings",
    "LooperStrategy",
    "substitute",
]
