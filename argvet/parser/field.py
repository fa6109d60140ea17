# Argvet CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the normalized field model consumed by the tokenizer and validator.

Declared options and positional arguments arrive as pydantic-compatible type
annotations. `argvet.parser.schema` resolves each of them exactly once into the
closed set of records defined here, so the parsing core never re-inspects the
original annotation.

Contents:
- `FieldKind`: primitive kind of a field (string, number, boolean).
- `StringType`, `NumberType`, `BooleanType`, `EnumType`, `ArrayType`: the closed
  `FieldType` union produced by the schema adapter.
- `OptionField`: a named option (`--name`, optional `-alias`).
- `PositionalField`: a positional argument.
- `CommandModel`: the field model of one subcommand.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class FieldKind(Enum):
    """Primitive kind of a declared field."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class StringType:
    pass


@dataclass(frozen=True)
class NumberType:
    """`integer` is True when every accepted value must be an `int`."""

    integer: bool = False


@dataclass(frozen=True)
class BooleanType:
    pass


@dataclass(frozen=True)
class EnumType:
    values: tuple[str, ...]


@dataclass(frozen=True)
class ArrayType:
    element: StringType | NumberType


FieldType = Union[StringType, NumberType, BooleanType, EnumType, ArrayType]


def kind_of(field_type: FieldType) -> FieldKind:
    """Return the primitive kind of a resolved field type."""
    if isinstance(field_type, ArrayType):
        return kind_of(field_type.element)
    if isinstance(field_type, NumberType):
        return FieldKind.NUMBER
    if isinstance(field_type, BooleanType):
        return FieldKind.BOOLEAN
    return FieldKind.STRING


def is_integer(field_type: FieldType) -> bool:
    if isinstance(field_type, ArrayType):
        return is_integer(field_type.element)
    return isinstance(field_type, NumberType) and field_type.integer


def enum_values_of(field_type: FieldType) -> tuple[str, ...] | None:
    """Return the allowed values of an enum type, else None."""
    if isinstance(field_type, EnumType):
        return field_type.values
    return None


@dataclass(frozen=True)
class OptionField:
    """
    A declared option.

    Attributes:
        name (str): Long name, matched as `--name`.
        kind (FieldKind): Primitive kind of the value.
        alias (str | None): Short name, matched as `-alias`.
        arg_name (str | None): Placeholder shown in help instead of `<string>`.
        description (str | None): Help text.
        required (bool): True when there is no default and the type is not optional.
        default (Any): Default value, None when absent.
        enum_values (tuple[str, ...] | None): Allowed values for enum options.
        is_array (bool): True when the option collects a list of values.
        integer (bool): True for `int` options; integer literals keep full precision.
    """

    name: str
    kind: FieldKind = FieldKind.STRING
    alias: str | None = None
    arg_name: str | None = None
    description: str | None = None
    required: bool = True
    default: Any = None
    enum_values: tuple[str, ...] | None = None
    is_array: bool = False
    integer: bool = False

    @property
    def needs_value(self) -> bool:
        """Boolean options never take a value token."""
        return self.kind is not FieldKind.BOOLEAN


@dataclass(frozen=True)
class PositionalField:
    """
    A declared positional argument.

    Boolean positional fields are rejected by the schema adapter. Only the last
    declared positional field may be an array; it absorbs every remaining
    positional token.
    """

    name: str
    kind: FieldKind = FieldKind.STRING
    description: str | None = None
    required: bool = True
    default: Any = None
    enum_values: tuple[str, ...] | None = None
    is_array: bool = False
    integer: bool = False


@dataclass(frozen=True)
class CommandModel:
    """Resolved field model of a single subcommand."""

    name: str
    description: str | None = None
    options: tuple[OptionField, ...] = ()
    positional_fields: tuple[PositionalField, ...] = ()
