# Copyright 2026 ACP Builder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the build configuration parser."""

from pathlib import Path

import pytest

from acpbuilder.compiler.settings import LooperStrategy
from acpbuilder.workspace.config import (
    BuildConfigError,
    default_config_text,
    load_build_config,
    parse_build_config,
)

# ###############
# Normal Cases
# ###############


def test_parse_full_config(tmp_path: Path) -> None:
    """All fields are read and paths are resolved against the base directory."""
    text = """\
project: project.xml
modules: lib/modules
library-name: Garden Lights
output: out
merge-sources: true
debug: true
looper-strategy: array
"""
    config = parse_build_config(text, base_dir=tmp_path)

    assert config.project_file == tmp_path / "project.xml"
    assert config.modules_dir == tmp_path / "lib" / "modules"
    assert config.library_name == "Garden Lights"
    assert config.output_dir == tmp_path / "out"
    assert config.merge_sources is True
    assert config.debug is True
    assert config.looper_strategy is LooperStrategy.ARRAY


def test_parse_minimal_config_uses_defaults(tmp_path: Path) -> None:
    config = parse_build_config("project: p.xml\nmodules: m\nlibrary-name: Demo\n", base_dir=tmp_path)

    assert config.output_dir == tmp_path / "build"
    assert config.merge_sources is False
    assert config.debug is False


def test_to_settings(tmp_path: Path) -> None:
    config = parse_build_config("project: p.xml\nmodules: m\nlibrary-name: Demo\ndebug: true\n", base_dir=tmp_path)

    settings = config.to_settings()

    assert settings.project_file == tmp_path / "p.xml"
    assert settings.library_dir == tmp_path / "build" / "Demo"
    assert settings.debug_mode is True


def test_default_config_round_trips(tmp_path: Path) -> None:
    """The starter configuration is accepted by the parser."""
    config = parse_build_config(default_config_text("Demo"), base_dir=tmp_path)

    assert config.library_name == "Demo"
    assert config.project_file == tmp_path / "project.xml"


def test_load_from_file(tmp_path: Path) -> None:
    config_file = tmp_path / "acp-build.yaml"
    config_file.write_text("project: p.xml\nmodules: m\nlibrary-name: Demo\n", encoding="utf-8")

    assert load_build_config(config_file).modules_dir == tmp_path.resolve() / "m"


# ###############
# Error Cases
# ###############


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(BuildConfigError, match="not found"):
        load_build_config(tmp_path / "acp-build.yaml")


@pytest.mark.parametrize(
    ("text", "message"),
    [
        ("project: [unclosed", "Invalid YAML"),
        ("- a\n- b\n", "must be a YAML mapping"),
        ("modules: m\nlibrary-name: Demo\n", "missing required field 'project'"),
        ("project: ''\nmodules: m\nlibrary-name: Demo\n", "'project' must be a non-empty string"),
        ("project: p\nmodules: m\nlibrary-name: Demo\ndebug: yes please\n", "'debug' must be true or false"),
        ("project: p\nmodules: m\nlibrary-name: Demo\nlooper-strategy: heap\n", "unknown looper strategy 'heap'"),
    ],
)
def test_invalid_config(tmp_path: Path, text: str, message: str) -> None:
    with pytest.raises(BuildConfigError, match=message):
        parse_build_config(text, base_dir=tmp_path)


def test_invalid_library_name(tmp_path: Path) -> None:
    config = parse_build_config("project: p\nmodules: m\nlibrary-name: my-lib\n", base_dir=tmp_path)

    with pytest.raises(BuildConfigError, match="Invalid build settings"):
        config.to_settings()
