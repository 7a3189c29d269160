# Copyright 2026 ACP Builder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Dependency-ordered, two-phase execution of content generators.

Each generator prepares a private map of template values and later renders
its output from that map.  All ``prepare`` steps run before any
``generate`` step, so values a generator publishes to the shared state
during prepare are final by the time any file is written.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from acpbuilder.compiler.context import CompilationContext
from acpbuilder.errors import CompilationError

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

PrepareFn = Callable[[CompilationContext, dict[str, str]], None]
GenerateFn = Callable[[CompilationContext, dict[str, str]], None]


@dataclass(frozen=True)
class ContentGenerator:
    """A stage of the pipeline producing one kind of output.

    Attributes:
        name: Unique name of the generator.
        prepare: Fills the generator's output map and may update the shared
            state of the context.
        generate: Renders the output map into files.
        depends_on: Names of generators whose prepare step must run first.
    """

    name: str
    prepare: PrepareFn
    generate: GenerateFn
    depends_on: tuple[str, ...] = field(default=())


def order_generators(generators: list[ContentGenerator]) -> list[ContentGenerator]:
    """Return *generators* ordered so that dependencies come first.

    Generators without mutual dependencies keep their relative order.

    Raises:
        CompilationError: If a dependency is unknown or the dependencies form
            a cycle.
    """
    by_name: dict[str, ContentGenerator] = {}
    for generator in generators:
        if generator.name in by_name:
            raise CompilationError(f"Duplicated content generator: {generator.name}")
        by_name[generator.name] = generator

    ordered: list[ContentGenerator] = []
    done: set[str] = set()
    on_path: list[str] = []

    def _visit(generator: ContentGenerator) -> None:
        if generator.name in done:
            return
        if generator.name in on_path:
            cycle = on_path[on_path.index(generator.name) :] + [generator.name]
            raise CompilationError(f"Circular dependency of content generators: {' -> '.join(cycle)}")
        on_path.append(generator.name)
        for dependency in generator.depends_on:
            if dependency not in by_name:
                raise CompilationError(
                    f"Content generator {generator.name} depends on unknown generator {dependency}."
                )
            _visit(by_name[dependency])
        on_path.pop()
        done.add(generator.name)
        ordered.append(generator)

    for generator in generators:
        _visit(generator)
    return ordered


def run_generators(generators: list[ContentGenerator], context: CompilationContext) -> None:
    """Order *generators*, run every prepare step, then every generate step.

    Nothing is prepared or generated if the order cannot be established.
    """
    ordered = order_generators(generators)
    logger.debug(f"Generator order: {', '.join(g.name for g in ordered)}")

    outputs: dict[str, dict[str, str]] = {}
    for generator in ordered:
        output: dict[str, str] = {}
        generator.prepare(context, output)
        outputs[generator.name] = output

    for generator in ordered:
        generator.generate(context, outputs[generator.name])
