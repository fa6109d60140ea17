# Argvet CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Adapter between pydantic-compatible type annotations and the argvet field model.

The adapter runs at declaration time. It reads from each annotation only what the
parsing core needs (primitive kind, optionality, default value, enum variants,
description) and produces an `OptionField` or `PositionalField`. Annotations that
cannot be expressed as string, number, boolean, enum of strings, or array of
strings/numbers are rejected with `DeclarationError`.

After the core has produced a typed value for every field, `SchemaValidator`
runs the original annotations through pydantic `TypeAdapter`s so that integer
checks, enum membership, `Field` constraints and custom validators apply.

Supported annotations:
    str, int, float, bool
    Literal["a", "b"], Enum subclasses with str values
    list[str], list[int], list[float]
    X | None, Optional[X], unions of the same kind
    Annotated[X, Field(default=..., description=..., ...)]
"""
from __future__ import annotations

import types
from enum import Enum
from typing import Annotated, Any, Literal, Mapping, Sequence, Union, get_args, get_origin

from pydantic import TypeAdapter, ValidationError
from pydantic.fields import FieldInfo
from pydantic_core import PydanticUndefined

from argvet.exceptions import DeclarationError, ParseError
from argvet.parser.declaration import Option, Positional
from argvet.parser.field import (
    ArrayType,
    BooleanType,
    EnumType,
    FieldKind,
    FieldType,
    NumberType,
    OptionField,
    PositionalField,
    StringType,
    enum_values_of,
    is_integer,
    kind_of,
)
from argvet.utils import uniq


def _type_name(annotation: Any) -> str:
    return getattr(annotation, "__name__", None) or repr(annotation)


def _is_union(annotation: Any) -> bool:
    return isinstance(annotation, types.UnionType) or get_origin(annotation) is Union


def _strip_annotated(annotation: Any) -> tuple[Any, list[FieldInfo]]:
    field_infos: list[FieldInfo] = []
    while get_origin(annotation) is Annotated:
        base, *metadata = get_args(annotation)
        field_infos.extend(item for item in metadata if isinstance(item, FieldInfo))
        annotation = base
    return annotation, field_infos


def _field_info_default(field_info: FieldInfo) -> Any:
    if field_info.default is not PydanticUndefined:
        return field_info.default
    if field_info.default_factory is not None:
        return field_info.default_factory()  # type: ignore[call-arg]
    return None


class _Resolved:
    """Intermediate result of walking an annotation."""

    def __init__(self) -> None:
        self.optional: bool = False
        self.default: Any = None
        self.description: str | None = None

    def absorb(self, field_infos: list[FieldInfo]) -> None:
        for field_info in field_infos:
            if self.default is None:
                self.default = _field_info_default(field_info)
            if self.description is None and field_info.description:
                self.description = field_info.description


def _resolve_enum(annotation: Any) -> EnumType:
    values = tuple(member.value for member in annotation)
    if not values or not all(isinstance(value, str) for value in values):
        raise DeclarationError(f"Unsupported type: {_type_name(annotation)}")
    return EnumType(values)


def _resolve_element(annotation: Any) -> StringType | NumberType:
    annotation, _ = _strip_annotated(annotation)
    if annotation is str:
        return StringType()
    if annotation in (int, float):
        return NumberType(integer=annotation is int)
    raise DeclarationError(f"Unsupported type: Array of {_type_name(annotation)}")


def _resolve_union(members: Sequence[Any]) -> FieldType:
    field_types = uniq(_resolve_type(member, _Resolved()) for member in members)
    if len(field_types) == 1:
        return field_types[0]
    kinds = uniq(kind_of(field_type) for field_type in field_types)
    if len(kinds) != 1 or any(isinstance(ft, ArrayType) for ft in field_types):
        raise DeclarationError("Union types are not same")
    if kinds[0] is FieldKind.NUMBER:
        return NumberType(integer=all(is_integer(ft) for ft in field_types))
    if kinds[0] is FieldKind.BOOLEAN:
        return BooleanType()
    return StringType()


def _resolve_type(annotation: Any, resolved: _Resolved) -> FieldType:
    annotation, field_infos = _strip_annotated(annotation)
    resolved.absorb(field_infos)

    if _is_union(annotation):
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(members) != len(get_args(annotation)):
            resolved.optional = True
        if len(members) == 1:
            return _resolve_type(members[0], resolved)
        return _resolve_union(members)

    origin = get_origin(annotation)
    if origin is Literal:
        values = get_args(annotation)
        if not all(isinstance(value, str) for value in values):
            raise DeclarationError(f"Unsupported type: Literal{list(values)}")
        return EnumType(tuple(values))
    if origin is list:
        args = get_args(annotation)
        if len(args) != 1:
            raise DeclarationError(f"Unsupported type: {annotation!r}")
        return ArrayType(_resolve_element(args[0]))

    if annotation is str:
        return StringType()
    if annotation is bool:
        return BooleanType()
    if annotation in (int, float):
        return NumberType(integer=annotation is int)
    if isinstance(annotation, type) and issubclass(annotation, Enum):
        return _resolve_enum(annotation)
    raise DeclarationError(f"Unsupported type: {_type_name(annotation)}")


def _normalize_default(default: Any) -> Any:
    """Accept primitives or homogeneous lists of strings/numbers, like the help text expects."""
    if isinstance(default, Enum):
        default = default.value
    if default is None or isinstance(default, (str, int, float, bool)):
        return default
    if isinstance(default, (list, tuple)):
        items = list(default)
        if not items:
            return items
        if any(isinstance(item, bool) for item in items) or not all(
            isinstance(item, (str, int, float)) for item in items
        ):
            raise DeclarationError(f"Unsupported default value: {default!r}")
        if len(uniq(isinstance(item, str) for item in items)) > 1:
            raise DeclarationError(f"Unsupported default value: {default!r}")
        return items
    raise DeclarationError(f"Unsupported default value: {default!r}")


def resolve_annotation(
    annotation: Any, default: Any = None, description: str | None = None
) -> tuple[FieldType, bool, Any, str | None]:
    """
    Resolve a type annotation.

    Returns:
        tuple: (field type, required, default, description). Explicit `default` and
        `description` arguments take precedence over `Field(...)` metadata.
    """
    resolved = _Resolved()
    resolved.default = default
    resolved.description = description
    field_type = _resolve_type(annotation, resolved)
    resolved_default = _normalize_default(resolved.default)
    required = not resolved.optional and resolved_default is None
    return field_type, required, resolved_default, resolved.description


def resolve_option(
    name: str, option: Option, allow_array_options: bool = True
) -> OptionField:
    field_type, required, default, description = resolve_annotation(
        option.type, option.default, option.description
    )
    if isinstance(field_type, ArrayType) and not allow_array_options:
        raise DeclarationError("Unsupported type (options): list")
    return OptionField(
        name=name,
        kind=kind_of(field_type),
        alias=option.alias,
        arg_name=option.arg_name,
        description=description,
        required=required,
        default=default,
        enum_values=enum_values_of(field_type),
        is_array=isinstance(field_type, ArrayType),
        integer=is_integer(field_type),
    )


def resolve_positional(positional: Positional) -> PositionalField:
    field_type, required, default, description = resolve_annotation(
        positional.type, positional.default, positional.description
    )
    if isinstance(field_type, BooleanType):
        raise DeclarationError("Unsupported type (positional arguments): bool")
    return PositionalField(
        name=positional.name,
        kind=kind_of(field_type),
        description=description,
        required=required,
        default=default,
        enum_values=enum_values_of(field_type),
        is_array=isinstance(field_type, ArrayType),
        integer=is_integer(field_type),
    )


def resolve_fields(
    options: Mapping[str, Option],
    positional_args: Sequence[Positional],
    allow_array_options: bool = True,
) -> tuple[tuple[OptionField, ...], tuple[PositionalField, ...]]:
    """Resolve every declaration into the closed field model."""
    option_fields = tuple(
        resolve_option(name, option, allow_array_options)
        for name, option in options.items()
    )
    positional_fields = tuple(resolve_positional(arg) for arg in positional_args)
    for field in positional_fields[:-1]:
        if field.is_array:
            raise DeclarationError(
                f"Array positional argument must be the last one: {field.name}"
            )
    return option_fields, positional_fields


class SchemaValidator:
    """Validates parsed values against the declared annotations with pydantic."""

    def __init__(
        self, options: Mapping[str, Option], positional_args: Sequence[Positional]
    ) -> None:
        self._adapters: dict[str, TypeAdapter] = {
            name: TypeAdapter(option.type) for name, option in options.items()
        }
        for positional in positional_args:
            self._adapters[positional.name] = TypeAdapter(positional.type)

    def validate(self, parsed: Mapping[str, Any]) -> dict[str, Any]:
        """
        Validate each value in order.

        Raises:
            ParseError: For the first value pydantic rejects, formatted as
                `<message>: <field><location>`.
        """
        result: dict[str, Any] = {}
        for name, value in parsed.items():
            adapter = self._adapters.get(name)
            if adapter is None:
                result[name] = value
                continue
            try:
                result[name] = adapter.validate_python(value)
            except ValidationError as error:
                first = error.errors()[0]
                location = "".join(str(part) for part in first["loc"])
                raise ParseError(
                    f"{first['msg']}: {name}{location}", nested_error=error
                ) from error
        return result
