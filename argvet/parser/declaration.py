# Argvet CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Declaration records for options and positional arguments, and the checks that run
when they are attached to a parser or command.

`Option` and `Positional` hold a pydantic-compatible type annotation plus CLI
metadata. They are resolved into `OptionField` / `PositionalField` records by
`argvet.parser.schema`.

Example:
    options = {
        "env": Option(Literal["dev", "prod"], alias="e", description="Target"),
        "dry_run": Option(bool, default=False),
    }
    args = [Positional("paths", list[str])]
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Any, Mapping, Sequence

from pydantic import StringConstraints, TypeAdapter, ValidationError

from argvet.exceptions import DeclarationError
from argvet.utils import find_duplicate_values

NAME_PATTERN = r"^[A-Za-z0-9_]+[A-Za-z0-9_-]*$"
ALIAS_PATTERN = r"^[A-Za-z0-9_]+$"

_name_adapter = TypeAdapter(
    Annotated[str, StringConstraints(pattern=NAME_PATTERN, max_length=256)]
)
_alias_adapter = TypeAdapter(
    Annotated[str, StringConstraints(pattern=ALIAS_PATTERN, max_length=10)]
)


@dataclass(frozen=True)
class Option:
    """
    Declares a named option.

    Attributes:
        type (Any): Type annotation of the value (e.g. `str`, `int | None`,
            `Literal["a", "b"]`, `list[str]`, `Annotated[int, Field(ge=0)]`).
        alias (str | None): Short name used as `-alias`.
        description (str | None): Help text. Falls back to the `Field` description.
        arg_name (str | None): Value placeholder shown in help.
        default (Any): Default value. Falls back to the `Field` default.
    """

    type: Any
    alias: str | None = None
    description: str | None = None
    arg_name: str | None = None
    default: Any = None


@dataclass(frozen=True)
class Positional:
    """Declares a positional argument."""

    name: str
    type: Any
    description: str | None = None
    default: Any = None


def _is_valid(adapter: TypeAdapter, value: Any) -> bool:
    try:
        adapter.validate_python(value)
    except ValidationError:
        return False
    return True


def validate_option_declaration(name: str, option: Option) -> None:
    if not _is_valid(_name_adapter, name):
        raise DeclarationError(
            f"Invalid option name. Supported pattern is /{NAME_PATTERN}/: {name}"
        )
    if option.alias is not None and not _is_valid(_alias_adapter, option.alias):
        raise DeclarationError(
            f"Invalid option alias. Supported pattern is /{ALIAS_PATTERN}/: {option.alias}"
        )


def validate_positional_declaration(positional: Positional) -> None:
    if not _is_valid(_name_adapter, positional.name):
        raise DeclarationError(
            "Invalid positional argument name. "
            f"Supported pattern is /{NAME_PATTERN}/: {positional.name}"
        )


def validate_command_name(name: str) -> None:
    if not isinstance(name, str) or not _is_valid(_name_adapter, name):
        raise DeclarationError(
            f"Invalid command name. Supported pattern is /{NAME_PATTERN}/: {name}"
        )


def validate_declarations(
    options: Mapping[str, Option], positional_args: Sequence[Positional]
) -> None:
    """
    Check names, aliases and uniqueness of a set of declarations.

    Raises:
        DeclarationError: On the first invalid or conflicting declaration.
    """
    for name, option in options.items():
        if not isinstance(option, Option):
            raise DeclarationError(f"Option '{name}' must be declared with Option()")
        validate_option_declaration(name, option)
    duplicate_aliases = find_duplicate_values(
        option.alias for option in options.values() if option.alias is not None
    )
    if duplicate_aliases:
        raise DeclarationError(
            f"Duplicated option alias: {', '.join(duplicate_aliases)}"
        )

    for positional in positional_args:
        if not isinstance(positional, Positional):
            raise DeclarationError(
                f"Positional argument must be declared with Positional(): {positional!r}"
            )
        validate_positional_declaration(positional)
    duplicate_names = find_duplicate_values(
        positional.name for positional in positional_args
    )
    if duplicate_names:
        raise DeclarationError(
            f"Duplicated positional argument name: {', '.join(duplicate_names)}"
        )

    for positional in positional_args:
        if positional.name in options:
            raise DeclarationError(
                f"Duplicated option name with positional argument name: {positional.name}"
            )
