# Copyright 2026 ACP Builder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Settings of a single compilation and the output layout they imply."""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, field_validator

# ###############
# Public Interface
# ###############


class LooperStrategy(Enum):
    """How loopers are scheduled by the generated code."""

    ARRAY = "array"


class CompilationSettings(BaseModel):
    """Inputs of :func:`acpbuilder.compiler.compile_project`.

    Attributes:
        project_file: Path to the project description.
        output_root: Directory in which the library directory is created.
        library_name: Name of the generated Arduino library.  Only letters,
            digits, and spaces are allowed.
        merge_sources: Flatten module sources into a single directory.
        debug_mode: Enable the debug flag of the generated core header.
        looper_strategy: Scheduling strategy of loopers.
    """

    project_file: Path
    output_root: Path
    library_name: str
    merge_sources: bool = False
    debug_mode: bool = False
    looper_strategy: LooperStrategy = LooperStrategy.ARRAY

    @field_validator("library_name")
    @classmethod
    def _check_library_name(cls, value: str) -> str:
        if not _LIBRARY_NAME_RE.match(value):
            raise ValueError(f"Library name '{value}' must contain only letters, digits, and spaces.")
        return value

    @property
    def library_dir(self) -> Path:
        return self.output_root / self.library_name

    @property
    def include_dir(self) -> Path:
        """Directory of public headers (``src``)."""
        return self.library_dir / "src"

    @property
    def source_dir(self) -> Path:
        """Directory of compiled sources (``src/sources``)."""
        return self.include_dir / "sources"

    @property
    def project_header_file(self) -> Path:
        return self.include_dir / f"{self.library_name}.h"

    @property
    def example_file(self) -> Path:
        sketch = f"{self.library_name}Skeleton"
        return self.library_dir / "examples" / sketch / f"{sketch}.ino"


# ################
# Implementation
# ################

_LIBRARY_NAME_RE = re.compile(r"^[A-Za-z0-9 ]+\Z")
