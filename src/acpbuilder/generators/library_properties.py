# Copyright 2026 ACP Builder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Generator of the ``library.properties`` metadata read by the Arduino IDE."""

from __future__ import annotations

from acpbuilder.compiler.context import CompilationContext
from acpbuilder.compiler.pipeline import ContentGenerator
from acpbuilder.compiler.templates import render_to_file

NAME = "library-properties"
PROPERTIES_FILE = "library.properties"


def prepare(context: CompilationContext, output: dict[str, str]) -> None:
    output["libraryName"] = context.settings.library_name


def generate(context: CompilationContext, output: dict[str, str]) -> None:
    render_to_file("library.properties", context.settings.library_dir / PROPERTIES_FILE, output)


GENERATOR = ContentGenerator(name=NAME, prepare=prepare, generate=generate)
