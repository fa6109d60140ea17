# Argvet CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Value coercion and structural validation for tokenized arguments.

Turns raw `Candidate` / `PositionalCandidate` records into typed values, applies
the duplicate, required and default rules and returns the option and positional
mappings in declared-field order.
"""
from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass
from typing import Any, Sequence

from argvet.exceptions import ParseError
from argvet.logger import Trace, noop_trace
from argvet.parser.field import FieldKind, OptionField, PositionalField
from argvet.parser.tokenizer import Tokenized, is_integer_literal, is_numeric
from argvet.utils import find_duplicate_values


@dataclass(frozen=True)
class ValidatedFields:
    options: dict[str, Any]
    positional_args: dict[str, Any]

    def merged(self) -> dict[str, Any]:
        return {**self.options, **self.positional_args}


def coerce_scalar(
    kind: FieldKind, value: str, integer: bool = False
) -> str | int | float:
    """
    Convert one raw token to the field kind.

    Integer literals for `int` fields become `int` so no precision is lost; other
    numeric literals are parsed as floats.

    Raises:
        ValueError: If a number is expected and `value` is not a numeric literal.
    """
    if kind is FieldKind.NUMBER:
        if not is_numeric(value):
            raise ValueError(f"{value!r} is not a number")
        if integer and is_integer_literal(value):
            return int(value)
        return float(value)
    return value


def coerce_candidate_value(
    option: OptionField, value: str | list[str] | None, is_negative: bool = False
) -> Any:
    """
    Coerce a raw option value.

    Boolean options never carry a value: bare flags become True and `--no-` flags
    become False.

    Raises:
        ValueError: If the value is missing, unexpected or not of the option's kind.
    """
    if option.kind is FieldKind.BOOLEAN:
        if value is not None:
            raise ValueError(f"Boolean option '{option.name}' takes no value")
        return not is_negative
    if value is None:
        raise ValueError(f"Option '{option.name}' needs a value")
    if isinstance(value, list):
        return [coerce_scalar(option.kind, item, option.integer) for item in value]
    return coerce_scalar(option.kind, value, option.integer)


def coerce_positional_value(
    positional: PositionalField, value: str | list[str] | None
) -> Any:
    if value is None:
        raise ValueError(f"Positional argument '{positional.name}' needs a value")
    if positional.is_array:
        if not isinstance(value, list):
            raise ValueError(f"Positional argument '{positional.name}' expects a list")
        return [
            coerce_scalar(positional.kind, item, positional.integer) for item in value
        ]
    if isinstance(value, list):
        raise ValueError(f"Positional argument '{positional.name}' expects one value")
    return coerce_scalar(positional.kind, value, positional.integer)


def _resolve_missing(field: OptionField | PositionalField, message: str) -> Any:
    if field.default is not None:
        return deepcopy(field.default)
    if field.required:
        raise ParseError(f"{message}: {field.name}")
    return None


def validate(
    tokenized: Tokenized,
    options: Sequence[OptionField],
    positional_fields: Sequence[PositionalField],
    trace: Trace = noop_trace,
) -> ValidatedFields:
    """
    Coerce candidates and resolve required and default values.

    Raises:
        ParseError: On an invalid value, a repeated non-array option or a missing
            required field.
    """
    option_map = {option.name: option for option in options}
    option_values: list[tuple[str, Any]] = []
    for candidate in tokenized.candidates:
        option = option_map[candidate.name]
        try:
            value = coerce_candidate_value(
                option, candidate.value, candidate.is_negative
            )
        except ValueError as error:
            raise ParseError(
                f"Invalid option value. {option.kind} is expected: {candidate.name}"
            ) from error
        option_values.append((candidate.name, value))

    positional_map = {positional.name: positional for positional in positional_fields}
    positional_values: dict[str, Any] = {}
    for positional_candidate in tokenized.positional_candidates:
        name = positional_candidate.name
        try:
            positional_values[name] = coerce_positional_value(
                positional_map[name], positional_candidate.value
            )
        except ValueError as error:
            raise ParseError(f"Invalid positional argument value: {name}") from error

    trace(
        "validate.values",
        {"options": option_values, "positional_args": positional_values},
    )

    duplicates = find_duplicate_values(
        name for name, _ in option_values if not option_map[name].is_array
    )
    if duplicates:
        raise ParseError(f"Duplicated option: {', '.join(duplicates)}")

    collected: dict[str, Any] = {}
    for name, value in option_values:
        if option_map[name].is_array and name in collected:
            collected[name] = collected[name] + value
        else:
            collected[name] = value

    option_result = {
        option.name: (
            collected[option.name]
            if option.name in collected
            else _resolve_missing(option, "Required option is missing")
        )
        for option in options
    }
    positional_result = {
        positional.name: (
            positional_values[positional.name]
            if positional.name in positional_values
            else _resolve_missing(positional, "Required argument is missing")
        )
        for positional in positional_fields
    }
    return ValidatedFields(options=option_result, positional_args=positional_result)


def validate_for_command(
    tokenized: Tokenized,
    options: Sequence[OptionField],
    positional_fields: Sequence[PositionalField],
    command_name: str,
    trace: Trace = noop_trace,
) -> ValidatedFields:
    """Same as `validate()`, tagging any `ParseError` with the command name."""
    try:
        return validate(tokenized, options, positional_fields, trace)
    except ParseError as error:
        error.command_name = command_name
        raise
