# Argvet CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Result assembly for single parsers and multi-command parsers.

Runs the whole pipeline for one argument list:

    tokenize -> validate (coercion, duplicates, defaults) -> pydantic schema
    -> custom validation hook -> ParseResult

Only `ParseError` is turned into a `ParseResultError`; any other exception
propagates to the caller.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Sequence, Union

from argvet.exceptions import ParseError
from argvet.logger import Trace, noop_trace
from argvet.parser.field import CommandModel, OptionField, PositionalField
from argvet.parser.help import generate_command_help, generate_global_command_help
from argvet.parser.result import (
    ParseResult,
    ParseResultError,
    ParseResultHelp,
    ParseResultMatch,
    ParseResultVersion,
)
from argvet.parser.schema import SchemaValidator
from argvet.parser.tokenizer import tokenize, tokenize_multi_command
from argvet.parser.validator import validate, validate_for_command

ValidationCallback = Callable[[dict[str, Any]], Union[bool, str, None]]


@dataclass(frozen=True)
class CompiledCommand:
    """Everything needed to parse the arguments of one subcommand."""

    model: CommandModel
    schema: SchemaValidator
    action: Callable[[dict[str, Any]], Any]
    validation: ValidationCallback | None = None

    @property
    def name(self) -> str:
        return self.model.name


def run_validation(
    validation: ValidationCallback | None, parsed: Mapping[str, Any]
) -> None:
    """
    Run a custom validation callback.

    The callback passes by returning True (or None). A returned string becomes the
    error message; False and any raised exception are failures as well.

    Raises:
        ParseError: If the callback rejects the parsed values.
    """
    if validation is None:
        return
    try:
        outcome = validation(dict(parsed))
    except Exception as error:
        raise ParseError(str(error), nested_error=error) from error
    if outcome is True or outcome is None:
        return
    if isinstance(outcome, str):
        raise ParseError(outcome)
    raise ParseError("Validation failed")


def parse_single(
    args: Sequence[str],
    option_fields: Sequence[OptionField],
    positional_fields: Sequence[PositionalField],
    schema: SchemaValidator,
    help_text: str,
    validation: ValidationCallback | None = None,
    trace: Trace = noop_trace,
) -> ParseResult:
    try:
        tokenized = tokenize(args, option_fields, positional_fields, trace)
        if tokenized.is_help:
            return ParseResultHelp(help=help_text)
        if tokenized.is_version:
            return ParseResultVersion(help=help_text)
        validated = validate(tokenized, option_fields, positional_fields, trace)
        parsed = schema.validate(validated.merged())
        run_validation(validation, parsed)
    except ParseError as error:
        trace("parse.error", {"message": error.message})
        return ParseResultError(error=error, help=help_text)
    trace("parse.match", {"parsed": parsed})
    return ParseResultMatch(parsed=parsed, help=help_text)


def parse_multi(
    args: Sequence[str],
    commands: Sequence[CompiledCommand],
    name: str,
    description: str | None = None,
    version: str | None = None,
    trace: Trace = noop_trace,
) -> ParseResult:
    by_name = {command.name: command for command in commands}

    def help_for(command_name: str | None) -> str:
        selected = by_name.get(command_name) if command_name is not None else None
        if selected is None:
            return generate_global_command_help(
                [command.model for command in commands], name, description, version
            )
        return generate_command_help(selected.model, name, version)

    try:
        tokenized = tokenize_multi_command(
            args, [command.model for command in commands], trace
        )
        if tokenized.is_help:
            return ParseResultHelp(
                help=help_for(tokenized.command_name),
                command_name=tokenized.command_name,
            )
        if tokenized.is_version:
            return ParseResultVersion(help=help_for(tokenized.command_name))
        selected = by_name[tokenized.command_name]  # type: ignore[index]
        validated = validate_for_command(
            tokenized,
            selected.model.options,
            selected.model.positional_fields,
            selected.name,
            trace,
        )
        try:
            parsed = selected.schema.validate(validated.merged())
            run_validation(selected.validation, parsed)
        except ParseError as error:
            error.command_name = selected.name
            raise
    except ParseError as error:
        trace(
            "parse.error", {"message": error.message, "command": error.command_name}
        )
        return ParseResultError(
            error=error,
            help=help_for(error.command_name),
            command_name=error.command_name,
        )
    trace("parse.match", {"parsed": parsed, "command": selected.name})
    return ParseResultMatch(
        parsed=parsed, help=help_for(selected.name), command_name=selected.name
    )
