# Argvet CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Plain-text help rendering for parsers, commands and multi-command parsers.

Layout:

    Usage: <name> [options] <required> [optional] [array ...]

    <description>

    Arguments:
      <name>  <description> (choices: "a", "b") (default: <json>)  [required]

    Options:
      -h, --help     Show help
      -V, --version  Show version
      -a, --name <string>  <description>  [required]
"""
from __future__ import annotations

import json
from typing import Sequence

from argvet.parser.field import CommandModel, FieldKind, OptionField, PositionalField

INDENT = 2
SECTION_SEPARATOR = "\n\n"


def get_builtin_options(version: str | None = None) -> list[OptionField]:
    help_option = OptionField(
        name="help",
        kind=FieldKind.BOOLEAN,
        alias="h",
        description="Show help",
        required=False,
    )
    if version is None:
        return [help_option]
    version_option = OptionField(
        name="version",
        kind=FieldKind.BOOLEAN,
        alias="V",
        description="Show version",
        required=False,
    )
    return [help_option, version_option]


def pad_table(rows: list[list[str]]) -> list[list[str]]:
    """Left-justify every cell to the widest cell of its column."""
    if not rows:
        return rows
    widths = [max(len(row[col]) for row in rows) for col in range(len(rows[0]))]
    return [[cell.ljust(widths[col]) for col, cell in enumerate(row)] for row in rows]


def table_to_text(rows: list[list[str]]) -> str:
    return "\n".join("".join(cells) for cells in rows)


def _join_non_empty(parts: Sequence[str], separator: str = " ") -> str:
    return separator.join(part for part in parts if part)


def generate_usage(
    script_name: str,
    positional_fields: Sequence[PositionalField],
    command_name: str | None = None,
) -> str:
    parts = []
    for positional in positional_fields:
        inner = f"{positional.name} ..." if positional.is_array else positional.name
        parts.append(f"<{inner}>" if positional.required else f"[{inner}]")
    command_part = f"{command_name} " if command_name is not None else ""
    return f"Usage: {script_name} {command_part}[options] {' '.join(parts)}"


def generate_command_usage(script_name: str) -> str:
    return f"Usage: {script_name} [options] <command>"


def _default_text(field: OptionField | PositionalField) -> str:
    if field.default is None:
        return ""
    return f"(default: {json.dumps(field.default)})"


def _choices_text(field: OptionField | PositionalField) -> str:
    if field.enum_values is None:
        return ""
    return f"(choices: {', '.join(json.dumps(value) for value in field.enum_values)})"


def _description_text(field: OptionField | PositionalField) -> str:
    return (
        _join_non_empty(
            [field.description or "", _choices_text(field), _default_text(field)]
        )
        + "  "
    )


def _name_and_arg_text(option: OptionField) -> str:
    if option.kind is FieldKind.BOOLEAN:
        return f"--{option.name}"
    placeholder = option.arg_name or str(option.kind)
    suffix = " ..." if option.is_array else ""
    return f"--{option.name} <{placeholder}>{suffix}"


def generate_options_text(options: Sequence[OptionField], indent: int = INDENT) -> str:
    rows = [
        [
            " " * indent,
            f"-{option.alias}, " if option.alias is not None else "",
            f"{_name_and_arg_text(option)}  ",
            _description_text(option),
            "[required]" if option.required else "",
        ]
        for option in options
    ]
    return f"Options:\n{table_to_text(pad_table(rows))}"


def generate_positional_text(
    positional_fields: Sequence[PositionalField], indent: int = INDENT
) -> str:
    if not positional_fields:
        return ""
    rows = [
        [
            " " * indent,
            f"{positional.name}  ",
            _description_text(positional),
            "[required]" if positional.required else "",
        ]
        for positional in positional_fields
    ]
    return f"Arguments:\n{table_to_text(pad_table(rows))}"


def generate_commands_text(
    commands: Sequence[CommandModel], indent: int = INDENT
) -> str:
    rows = [
        [" " * indent, f"{command.name}  ", command.description or ""]
        for command in commands
    ]
    return f"Commands:\n{table_to_text(pad_table(rows))}"


def generate_global_help(
    options: Sequence[OptionField],
    positional_fields: Sequence[PositionalField],
    name: str,
    description: str | None = None,
    version: str | None = None,
) -> str:
    sections = [
        generate_usage(name, positional_fields),
        description or "",
        generate_positional_text(positional_fields),
        generate_options_text(get_builtin_options(version) + list(options)),
    ]
    return f"{_join_non_empty(sections, SECTION_SEPARATOR)}\n"


def generate_command_help(
    command: CommandModel, name: str, version: str | None = None
) -> str:
    sections = [
        generate_usage(name, command.positional_fields, command.name),
        command.description or "",
        generate_positional_text(command.positional_fields),
        generate_options_text(get_builtin_options(version) + list(command.options)),
    ]
    return f"{_join_non_empty(sections, SECTION_SEPARATOR)}\n"


def generate_global_command_help(
    commands: Sequence[CommandModel],
    name: str,
    description: str | None = None,
    version: str | None = None,
) -> str:
    sections = [
        generate_command_usage(name),
        description or "",
        generate_commands_text(commands),
        generate_options_text(get_builtin_options(version)),
    ]
    return f"{_join_non_empty(sections, SECTION_SEPARATOR)}\n"
