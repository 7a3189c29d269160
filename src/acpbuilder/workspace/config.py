# Copyright 2026 ACP Builder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for the build configuration file (``acp-build.yaml``).

Example::

    project: project.xml
    modules: modules
    library-name: MyProject
    output: build
    merge-sources: false
    debug: false
    looper-strategy: array
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml
from pydantic import ValidationError

from acpbuilder.compiler.settings import CompilationSettings, LooperStrategy
from acpbuilder.errors import ACPError

# ###############
# Public Interface
# ###############

BUILD_CONFIG_NAME = "acp-build.yaml"


class BuildConfigError(ACPError):
    """Raised when a build configuration file is invalid or cannot be loaded."""


@dataclass
class BuildConfig:
    """The parsed build configuration.

    Paths are absolute, resolved against the directory of the file.

    Attributes:
        project_file: Project description to compile.
        modules_dir: Root of the module tree.
        library_name: Name of the generated library.
        output_dir: Directory receiving the library directory.
        merge_sources: Flatten module sources into one directory.
        debug: Enable the debug flag of the generated code.
        looper_strategy: Scheduling strategy of loopers.
    """

    project_file: Path
    modules_dir: Path
    library_name: str
    output_dir: Path
    merge_sources: bool = False
    debug: bool = False
    looper_strategy: LooperStrategy = LooperStrategy.ARRAY

    def to_settings(self) -> CompilationSettings:
        """Return the compilation settings described by this configuration.

        Raises:
            BuildConfigError: If the library name is not valid.
        """
        try:
            return CompilationSettings(
                project_file=self.project_file,
                output_root=self.output_dir,
                library_name=self.library_name,
                merge_sources=self.merge_sources,
                debug_mode=self.debug,
                looper_strategy=self.looper_strategy,
            )
        except ValidationError as exc:
            raise BuildConfigError(f"Invalid build settings: {exc}") from exc


def load_build_config(path: Path) -> BuildConfig:
    """Load and parse a build configuration file.

    Args:
        path: Path to the ``acp-build.yaml`` file.

    Raises:
        BuildConfigError: If the file cannot be read or the configuration is
            invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise BuildConfigError(f"Build config file not found: {path}") from None
    except OSError as exc:
        raise BuildConfigError(f"Cannot read build config file: {exc}") from exc

    return parse_build_config(text, base_dir=path.parent.resolve(), source_label=str(path))


def parse_build_config(text: str, base_dir: Path, source_label: str = "<string>") -> BuildConfig:
    """Parse build configuration YAML text.

    Relative paths are resolved against *base_dir*.

    Raises:
        BuildConfigError: If the YAML is invalid or required fields are missing.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise BuildConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if not isinstance(data, dict):
        raise BuildConfigError(f"{source_label}: build config must be a YAML mapping")

    strategy_code = _optional_string(data, "looper-strategy", LooperStrategy.ARRAY.value, source_label)
    try:
        looper_strategy = LooperStrategy(strategy_code)
    except ValueError:
        raise BuildConfigError(f"{source_label}: unknown looper strategy '{strategy_code}'") from None

    return BuildConfig(
        project_file=base_dir / _require_string(data, "project", source_label),
        modules_dir=base_dir / _require_string(data, "modules", source_label),
        library_name=_require_string(data, "library-name", source_label),
        output_dir=base_dir / _optional_string(data, "output", "build", source_label),
        merge_sources=_optional_bool(data, "merge-sources", source_label),
        debug=_optional_bool(data, "debug", source_label),
        looper_strategy=looper_strategy,
    )


def default_config_text(library_name: str) -> str:
    """Return the content of a starter ``acp-build.yaml``."""
    return yaml.safe_dump(
        {
            "project": "project.xml",
            "modules": "modules",
            "library-name": library_name,
            "output": "build",
            "merge-sources": False,
            "debug": False,
        },
        sort_keys=False,
    )


# ################
# Implementation
# ################


def _require_string(mapping: dict[str, object], key: str, source_label: str) -> str:
    """Extract a required string field from a mapping, raising BuildConfigError if missing."""
    if key not in mapping:
        raise BuildConfigError(f"{source_label}: missing required field '{key}'")
    value = mapping[key]
    if not isinstance(value, str) or not value.strip():
        raise BuildConfigError(f"{source_label}: '{key}' must be a non-empty string")
    return value.strip()


def _optional_string(mapping: dict[str, object], key: str, default: str, source_label: str) -> str:
    if key not in mapping:
        return default
    return _require_string(mapping, key, source_label)


def _optional_bool(mapping: dict[str, object], key: str, source_label: str) -> bool:
    value = mapping.get(key, False)
    if not isinstance(value, bool):
        raise BuildConfigError(f"{source_label}: '{key}' must be true or false")
    return value
