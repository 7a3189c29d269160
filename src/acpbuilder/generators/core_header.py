# Copyright 2026 ACP Builder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Generator of ``src/acp/core.h``, included by every module of the library."""

from __future__ import annotations

from acpbuilder.compiler.context import CompilationContext
from acpbuilder.compiler.pipeline import ContentGenerator
from acpbuilder.compiler.templates import render_to_file

NAME = "core-header"
CORE_HEADER_FILE = "acp/core.h"


def prepare(context: CompilationContext, output: dict[str, str]) -> None:
    output["debugMode"] = "1" if context.settings.debug_mode else "0"


def generate(context: CompilationContext, output: dict[str, str]) -> None:
    render_to_file("acp_core.h", context.settings.include_dir / CORE_HEADER_FILE, output)


GENERATOR = ContentGenerator(name=NAME, prepare=prepare, generate=generate)
