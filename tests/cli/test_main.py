# Copyright 2026 ACP Builder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the ACP builder CLI entry point."""

import sys
from pathlib import Path

import pytest

from acpbuilder.cli.main import main

# ###############
# Helpers
# ###############

COUNTER_TYPE = """\
<component-type name="acp.counter">
  <controller>
    <class>CounterController</class>
  </controller>
  <properties>
    <property>
      <name>Limit</name>
      <type>int</type>
      <binding type="attribute">limit</binding>
    </property>
  </properties>
</component-type>
"""

PROJECT = """\
<project>
  <components>
    <component type="acp.counter" name="counter">
      <properties><property name="Limit">{limit}</property></properties>
    </component>
  </components>
</project>
"""


def _run(monkeypatch: pytest.MonkeyPatch, *args: str) -> int:
    monkeypatch.setattr(sys, "argv", ["acpbuilder", *args])
    with pytest.raises(SystemExit) as exc_info:
        main()
    return exc_info.value.code


def _write_project(directory: Path, limit: str = "42") -> None:
    module_dir = directory / "modules" / "acp" / "counter"
    module_dir.mkdir(parents=True)
    (module_dir / "description.xml").write_text(COUNTER_TYPE, encoding="utf-8")
    (directory / "project.xml").write_text(PROJECT.format(limit=limit), encoding="utf-8")
    (directory / "acp-build.yaml").write_text(
        "project: project.xml\nmodules: modules\nlibrary-name: Demo\noutput: build\n", encoding="utf-8"
    )


# ###############
# Public Interface
# ###############


def test_main_no_args_prints_help_and_exits(monkeypatch: pytest.MonkeyPatch) -> None:
    """main() with no subcommand prints help and exits with code 0."""
    assert _run(monkeypatch) == 0


# -------- init tests --------


def test_init_creates_build_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """init writes a starter acp-build.yaml."""
    project_dir = tmp_path / "garden_lights"
    project_dir.mkdir()

    assert _run(monkeypatch, "init", str(project_dir)) == 0

    content = (project_dir / "acp-build.yaml").read_text(encoding="utf-8")
    assert "library-name: gardenlights" in content
    assert "project: project.xml" in content


def test_init_with_library_name(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    assert _run(monkeypatch, "init", str(tmp_path), "--library-name", "Lights") == 0
    assert "library-name: Lights" in (tmp_path / "acp-build.yaml").read_text(encoding="utf-8")


def test_init_default_directory_uses_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    assert _run(monkeypatch, "init") == 0
    assert (tmp_path / "acp-build.yaml").exists()


def test_init_fails_if_config_exists(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    (tmp_path / "acp-build.yaml").write_text("project: p.xml\n", encoding="utf-8")

    assert _run(monkeypatch, "init", str(tmp_path)) == 1
    assert "already exists" in capsys.readouterr().err


def test_init_fails_for_missing_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    assert _run(monkeypatch, "init", str(tmp_path / "missing")) == 1


# -------- check tests --------


def test_check_valid_project(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    _write_project(tmp_path)

    assert _run(monkeypatch, "check", str(tmp_path)) == 0
    assert "Project 'project.xml' is valid: 1 component(s), 1 module(s)." in capsys.readouterr().out
    assert not (tmp_path / "build").exists()


def test_check_invalid_property_value(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    _write_project(tmp_path, limit="many")

    assert _run(monkeypatch, "check", str(tmp_path)) == 1
    assert "Invalid or undefined value of property 'Limit' of component 'counter'." in capsys.readouterr().err


def test_check_without_config(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    assert _run(monkeypatch, "check", str(tmp_path)) == 1
    assert "no acp-build.yaml found" in capsys.readouterr().err


# -------- build tests --------


def test_build_generates_library(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    _write_project(tmp_path)

    assert _run(monkeypatch, "build", str(tmp_path), "--debug") == 0

    library = tmp_path / "build" / "Demo"
    assert "Generated library 'Demo'" in capsys.readouterr().out
    core = (library / "src" / "sources" / "core.cpp").read_text(encoding="utf-8")
    assert "  acp_private::controller_0.limit = 42;" in core.splitlines()
    assert "#define ACP_DEBUG 1" in (library / "src" / "acp" / "core.h").read_text(encoding="utf-8")


def test_build_output_override(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _write_project(tmp_path)
    output = tmp_path / "elsewhere"

    assert _run(monkeypatch, "build", str(tmp_path), "--output", str(output)) == 0
    assert (output / "Demo" / "library.properties").is_file()
    assert not (tmp_path / "build").exists()


def test_build_reports_error_chain(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    _write_project(tmp_path)
    (tmp_path / "project.xml").write_text("<program/>", encoding="utf-8")

    assert _run(monkeypatch, "build", str(tmp_path)) == 1
    err = capsys.readouterr().err
    assert err.startswith("Error: Project configuration contains errors.")
    assert "Root element of a project configuration must be an element with name 'project'." in err
