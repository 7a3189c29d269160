# Copyright 2026 ACP Builder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the header, example, and metadata generators."""

from pathlib import Path

import pytest

from acpbuilder.compiler.build import load_context
from acpbuilder.compiler.context import CompilationContext
from acpbuilder.compiler.pipeline import order_generators
from acpbuilder.compiler.settings import CompilationSettings
from acpbuilder.errors import CompilationError
from acpbuilder.generators import (
    core_header,
    default_generators,
    eeprom_vars,
    example,
    library_properties,
    project_code,
    project_header,
)
from acpbuilder.model import Module
from acpbuilder.parser import parse_module

# ###############
# Helpers
# ###############

BUTTON_TYPE = """\
<component-type name="acp.button">
  <dependencies>
    <arduino-library>Servo</arduino-library>
  </dependencies>
  <view>
    <includes><include>Button.h</include></includes>
    <class>$ViewClass</class>
    <constructor>$Pin</constructor>
  </view>
  <controller>
    <class>ButtonController</class>
    <view-binding type="method">attachView</view-binding>
  </controller>
  <properties>
    <property>
      <name>Pin</name>
      <type>digital-pin</type>
    </property>
    <property>
      <name>ViewClass</name>
      <type>enumeration</type>
      <value>Button</value>
    </property>
  </properties>
  <events>
    <event>
      <name>OnPress</name>
      <binding type="method">onPress</binding>
      <parameters><parameter name="count">int</parameter></parameters>
    </event>
  </events>
</component-type>
"""

UTILS_LIBRARY = """\
<library name="acp.utils">
  <includes><include>Utils.h</include></includes>
</library>
"""

PROJECT = """\
<project platform="ArduinoUno">
  <program>
    <events><event name="OnStart">start</event></events>
    <imports><library>acp.utils</library></imports>
  </program>
  <eeprom>
    <variable>
      <name>counter</name>
      <type>int</type>
      <description>Number of presses</description>
    </variable>
  </eeprom>
  <components>
    <component type="acp.button" name="button">
      <description>Main button</description>
      <properties><property name="Pin">2</property></properties>
      <events><event name="OnPress">pressed</event></events>
    </component>
  </components>
</project>
"""


def _context(tmp_path: Path, project_text: str = PROJECT, **options: bool) -> CompilationContext:
    modules: dict[str, Module] = {}
    for description in (BUTTON_TYPE, UTILS_LIBRARY):
        module = parse_module(description)
        modules[module.name] = module

    tmp_path.mkdir(parents=True, exist_ok=True)
    project_file = tmp_path / "project.xml"
    project_file.write_text(project_text, encoding="utf-8")
    settings = CompilationSettings(
        project_file=project_file, output_root=tmp_path / "out", library_name="Demo", **options
    )
    context = load_context(settings, modules.__getitem__)
    project_code.prepare(context, {})
    return context


def _prepare(generator_module, context: CompilationContext) -> dict[str, str]:
    output: dict[str, str] = {}
    generator_module.prepare(context, output)
    return output


# ###############
# Normal Cases
# ###############


def test_default_generators_order() -> None:
    names = [generator.name for generator in order_generators(default_generators())]

    assert names == ["project-code", "project-header", "core-header", "eeprom-vars", "example", "library-properties"]


def test_project_header(tmp_path: Path) -> None:
    output = _prepare(project_header, _context(tmp_path))

    assert output["includes"].splitlines() == [
        "#include <acp/button/Button.h>",
        "#include <acp/utils/Utils.h>",
        "#include <acp/eeprom_vars.h>",
    ]
    assert output["views"] == "extern Button button;"
    assert output["eepromUsage"] == "6"
    assert output["eepromVars"] == "extern acp::EEPROMVar<int, 4> counter;"


def test_example_sketch(tmp_path: Path) -> None:
    output = _prepare(example, _context(tmp_path))

    assert output["includes"].splitlines() == ["#include <Demo.h>", "#include <Servo.h>", "#include <EEPROM.h>"]
    assert output["objectSummary"].splitlines() == [
        example.SEPARATOR_LINE,
        "// Summary of available objects:",
        "// button (acp.button)",
        "//   Main button",
        "// counter (eeprom variable of type int)",
        "//   Number of presses",
        example.SEPARATOR_LINE,
    ]
    callbacks = output["callbacks"].splitlines()
    assert "// Event callback for Program.OnStart" in callbacks
    assert "void start() {" in callbacks
    assert "// Event callback for button.OnPress" in callbacks
    assert "void pressed(int count) {" in callbacks


def test_example_without_objects(tmp_path: Path) -> None:
    output = _prepare(example, _context(tmp_path, "<project/>"))

    assert output["includes"] == "#include <Demo.h>"
    assert output["objectSummary"] == ""
    assert output["callbacks"] == ""


def test_core_header_and_library_properties(tmp_path: Path) -> None:
    assert _prepare(core_header, _context(tmp_path / "a"))["debugMode"] == "0"
    assert _prepare(core_header, _context(tmp_path / "b", debug_mode=True))["debugMode"] == "1"
    assert _prepare(library_properties, _context(tmp_path / "c")) == {"libraryName": "Demo"}


def test_eeprom_files_skipped_without_items(tmp_path: Path) -> None:
    context = _context(tmp_path, "<project/>")
    output = _prepare(eeprom_vars, context)

    eeprom_vars.generate(context, output)

    assert output == {"privateNamespace": "acp_private", "acpEepromHeaderFile": "acp/eeprom_vars.h"}
    assert not context.settings.library_dir.exists()


def test_eeprom_files_written_with_items(tmp_path: Path) -> None:
    context = _context(tmp_path)

    eeprom_vars.generate(context, _prepare(eeprom_vars, context))

    header = (context.settings.include_dir / "acp" / "eeprom_vars.h").read_text(encoding="utf-8")
    assert "$" not in header
    assert (context.settings.source_dir / "eeprom_vars.cpp").is_file()


# ###############
# Error Cases
# ###############


def test_empty_view_class_is_fatal(tmp_path: Path) -> None:
    context = _context(tmp_path)
    context.modules["acp.button"].view.class_type = "$Unknown"

    with pytest.raises(CompilationError, match="Class type for view of component button is invalid."):
        _prepare(project_header, context)



def test_import_of_non_library_is_fatal(tmp_path: Path) -> None:
    context = _context(tmp_path)
    context.modules["acp.utils"] = context.modules["acp.button"]

    with pytest.raises(CompilationError, match="Library acp.utils imported by program is not a library module."):
        _prepare(project_header, context)
