# Copyright 2026 ACP Builder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the module description reader."""

from pathlib import Path

import pytest

from acpbuilder.errors import ConfigurationError
from acpbuilder.model import BindingKind, ComponentType, Library, ValueKind
from acpbuilder.parser import parse_module, read_module

# ###############
# Helpers
# ###############

BLINKER = """\
<component-type name="acp.blinker">
  <dependencies>
    <module>acp.core.timer</module>
    <arduino-library>Servo</arduino-library>
    <arduino-library include="Wire.h, SPI.h"/>
  </dependencies>
  <view>
    <includes><include>Blinker.h</include></includes>
    <class>Blinker</class>
  </view>
  <controller>
    <includes><include>BlinkerController.h</include></includes>
    <class>BlinkerController</class>
    <constructor>$Pin</constructor>
    <init args="$Period">begin</init>
    <loop>update</loop>
    <view-binding type="method">attachView</view-binding>
  </controller>
  <properties>
    <property>
      <name>Pin</name>
      <type>digital-pin</type>
      <binding type="attribute">pin</binding>
    </property>
    <property>
      <name>Period</name>
      <type>unsigned long</type>
      <value type="fixed">500</value>
      <description>Blink period</description>
    </property>
    <property>
      <name>Mode</name>
      <type>byte</type>
      <value>1</value>
    </property>
  </properties>
  <events>
    <event>
      <name>OnBlink</name>
      <binding type="attribute">onBlink</binding>
      <parameters><parameter name="count">int</parameter></parameters>
      <result>bool</result>
    </event>
  </events>
  <loopers>
    <looper>
      <method>tick</method>
      <interval>Period</interval>
      <id-binding type="attribute">looperId</id-binding>
    </looper>
  </loopers>
  <method-wrappers>
    <wrapper>
      <method>toggle</method>
      <property>ToggleFunction</property>
      <binding type="method">setToggle</binding>
    </wrapper>
  </method-wrappers>
</component-type>
"""


def _parse_component_type(text: str) -> ComponentType:
    module = parse_module(text)
    assert isinstance(module, ComponentType)
    return module


# ###############
# Component types
# ###############


def test_parse_component_type_dependencies() -> None:
    module = _parse_component_type(BLINKER)

    assert module.name == "acp.blinker"
    assert module.required_modules == ["acp.core.timer"]
    assert module.required_platform_includes == ["Servo.h", "Wire.h", "SPI.h"]


def test_parse_instances() -> None:
    module = _parse_component_type(BLINKER)

    assert module.view is not None
    assert module.view.class_type == "Blinker"
    assert module.view.includes == ["Blinker.h"]
    assert module.controller is not None
    assert module.controller.constructor_args == "$Pin"
    assert module.controller.init_method is not None
    assert module.controller.init_method.method == "begin"
    assert module.controller.init_method.arguments == "$Period"
    assert module.controller.loop_method is not None
    assert module.controller.loop_method.method == "update"
    assert module.view_binding is not None
    assert module.view_binding.kind is BindingKind.METHOD


def test_parse_properties_keep_declaration_order() -> None:
    module = _parse_component_type(BLINKER)

    assert list(module.properties) == ["Pin", "Period", "Mode"]
    assert module.properties["Pin"].binding is not None
    assert module.properties["Pin"].binding.target == "pin"
    assert module.properties["Period"].value == "500"
    assert module.properties["Period"].value_kind is ValueKind.FIXED
    assert module.properties["Period"].description == "Blink period"
    assert module.properties["Mode"].value_kind is ValueKind.DEFAULT


def test_parse_events_loopers_and_wrappers() -> None:
    module = _parse_component_type(BLINKER)

    event = module.events["OnBlink"]
    assert event.handler_header("handler", True) == "bool handler(int count)"

    assert len(module.loopers) == 1
    looper = module.loopers[0]
    assert (looper.method, looper.interval, looper.initial_delay) == ("tick", "Period", "")
    assert looper.id_binding is not None

    assert len(module.method_wrappers) == 1
    wrapper = module.method_wrappers[0]
    assert wrapper.method == "toggle"
    assert wrapper.autogenerated_property == "ToggleFunction"


def test_read_module_sets_directory(tmp_path: Path) -> None:
    description = tmp_path / "description.xml"
    description.write_text(BLINKER, encoding="utf-8")

    module = read_module(description)

    assert module.directory == tmp_path


# ###############
# Libraries
# ###############


def test_parse_library() -> None:
    module = parse_module(
        '<library name="acp.utils"><includes><include>utils.h</include><include>math.h</include></includes></library>'
    )

    assert isinstance(module, Library)
    assert module.includes == ["utils.h", "math.h"]


# ###############
# Error Cases
# ###############


def test_unknown_root_tag_is_rejected() -> None:
    with pytest.raises(ConfigurationError, match="Unknown module type"):
        parse_module('<board name="x"/>')


def test_missing_name_is_rejected() -> None:
    with pytest.raises(ConfigurationError, match="Name of the module"):
        parse_module("<library/>")


def test_malformed_xml_is_rejected() -> None:
    with pytest.raises(ConfigurationError, match="Invalid XML"):
        parse_module("<library name='x'>")


def test_unknown_binding_type_is_chained() -> None:
    text = """\
<component-type name="acp.x">
  <properties>
    <property><name>P</name><type>int</type><binding type="wire">p</binding></property>
  </properties>
</component-type>
"""
    with pytest.raises(ConfigurationError, match="Description of property P") as exc_info:
        parse_module(text)
    assert "Unknown binding type" in str(exc_info.value.__cause__.__cause__)


def test_duplicated_property_is_rejected() -> None:
    text = """\
<component-type name="acp.x">
  <properties>
    <property><name>P</name><type>int</type></property>
    <property><name>P</name><type>byte</type></property>
  </properties>
</component-type>
"""
    with pytest.raises(ConfigurationError, match="Duplicated property name"):
        parse_module(text)


def test_two_views_are_rejected() -> None:
    text = '<component-type name="acp.x"><view><class>A</class></view><view><class>B</class></view></component-type>'
    with pytest.raises(ConfigurationError, match="at most one view"):
        parse_module(text)


def test_view_without_class_is_rejected() -> None:
    with pytest.raises(ConfigurationError, match="View description contains errors"):
        parse_module('<component-type name="acp.x"><view/></component-type>')


def test_looper_with_undeclared_interval_property_is_rejected() -> None:
    text = """\
<component-type name="acp.x">
  <controller><class>C</class></controller>
  <loopers><looper><method>tick</method><interval>Missing</interval></looper></loopers>
</component-type>
"""
    with pytest.raises(ConfigurationError, match="Interval of looper"):
        parse_module(text)
