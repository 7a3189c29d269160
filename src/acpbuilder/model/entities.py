# Copyright 2026 ACP Builder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Building blocks of component type descriptions (bindings, properties, events, etc.)."""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum

from pydantic import BaseModel
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class BindingKind(Enum):
    """How a value is wired into a controller."""

    ATTRIBUTE = "attribute"
    METHOD = "method"


class Binding(BaseModel):
    """A rule wiring a computed value into a controller object."""

    kind: BindingKind
    target: str

    def command(self, object_name: str, value: str) -> str:
        """Return the statement that binds *value* to *object_name*.

        ``ATTRIBUTE`` bindings render an assignment, ``METHOD`` bindings a call.
        """
        if self.kind is BindingKind.METHOD:
            return f"{object_name}.{self.target}({value});"
        return f"{object_name}.{self.target} = {value};"


class ValueKind(Enum):
    """Meaning of a predefined property value."""

    FIXED = "fixed"
    DEFAULT = "default"


class PropertyType(BaseModel):
    """Declaration of a component property.

    Attributes:
        type: Name of the platform value type (``int``, ``digital-pin``, ...).
        value: Predefined value, interpreted according to *value_kind*.
        value_kind: Whether the predefined value is fixed or only a default.
        binding: How the effective value is passed to the controller.
        restriction: Optional predicate over the effective value.  Properties
            without a restriction accept every value that passes the
            platform check.
    """

    type: str
    value: str | None = None
    value_kind: ValueKind | None = None
    binding: Binding | None = None
    description: str = ""
    restriction: Callable[[str | None], bool] | None = _Field(default=None, exclude=True)

    def effective_value(self, configured: str | None) -> str | None:
        """Return the value of the property after applying predefined values."""
        if self.value_kind is ValueKind.FIXED:
            return self.value
        if configured is None and self.value_kind is ValueKind.DEFAULT:
            return self.value
        return configured

    def check_restrictions(self, value: str | None) -> bool:
        """Return True if *value* satisfies the restriction of this property."""
        if self.restriction is None:
            return True
        return self.restriction(value)


class Parameter(BaseModel):
    """A typed parameter of an event handler or a wrapped method."""

    type: str
    name: str = ""


def render_signature(
    result_type: str | None,
    function_name: str,
    parameters: list[Parameter],
    with_parameter_names: bool,
) -> str:
    """Render a C function header such as ``void onPress(int count)``."""
    result = result_type.strip() if result_type and result_type.strip() else "void"
    rendered: list[str] = []
    for parameter in parameters:
        if with_parameter_names and parameter.name:
            rendered.append(f"{parameter.type.strip()} {parameter.name}")
        else:
            rendered.append(parameter.type.strip())
    return f"{result} {function_name}({', '.join(rendered)})"


class Event(BaseModel):
    """An event exposed by a component type."""

    parameters: list[Parameter] = _Field(default_factory=list)
    result_type: str | None = None
    binding: Binding | None = None
    description: str = ""

    def handler_header(self, handler_name: str, with_parameter_names: bool) -> str:
        """Return the header of a user-defined handler of this event."""
        return render_signature(self.result_type, handler_name, self.parameters, with_parameter_names)


class Looper(BaseModel):
    """A controller method invoked periodically.

    *interval* and *initial_delay* hold an integer literal, the name of a
    property of the component type, or an empty string (unset).  A looper
    without an interval is expected to return the delay until its next call.
    """

    method: str
    interval: str = ""
    initial_delay: str = ""
    id_binding: Binding | None = None


class MethodWrapper(BaseModel):
    """A generated plain function forwarding to a controller method."""

    method: str
    autogenerated_property: str | None = None
    binding: Binding | None = None
    parameters: list[Parameter] = _Field(default_factory=list)
    result_type: str | None = None

    def returns_value(self) -> bool:
        """Return True if the wrapped method returns a value."""
        return bool(self.result_type and self.result_type.strip() and self.result_type.strip() != "void")

    def header(self, function_name: str) -> str:
        """Return the header of the wrapping function."""
        named = [
            Parameter(type=p.type, name=p.name or f"arg{index}") for index, p in enumerate(self.parameters)
        ]
        return render_signature(self.result_type, function_name, named, True)

    def invocation(self, callee: str) -> str:
        """Return the call forwarding the wrapper's arguments to *callee*."""
        arguments = [p.name or f"arg{index}" for index, p in enumerate(self.parameters)]
        return f"{callee}({', '.join(arguments)})"


class MethodCall(BaseModel):
    """An init or loop invocation of a controller.

    *arguments* is a template rendered against the component's property
    values before the call is emitted.
    """

    method: str
    arguments: str = ""


class Instance(BaseModel):
    """Descriptor of a generated view or controller object.

    *class_type* and *constructor_args* are templates using the ``$name``
    placeholder syntax; placeholders refer to component properties or
    autogenerated properties.
    """

    includes: list[str] = _Field(default_factory=list)
    class_type: str
    constructor_args: str = ""
    init_method: MethodCall | None = None
    loop_method: MethodCall | None = None
