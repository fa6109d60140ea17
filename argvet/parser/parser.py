# Argvet CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `Parser`, the builder for a single-command argument parser.

A `Parser` wraps an immutable `ParserConfig`. Every builder method returns a new
`Parser`, so a partially configured parser can be reused or branched safely:

    base = parser().name("deploy").version("1.0.0")
    cli = base.options(
        {
            "env": Option(Literal["dev", "prod"], alias="e", description="Target"),
            "dry_run": Option(bool, default=False),
        }
    ).args([Positional("paths", list[str])])

    parsed = cli.parse()        # exits on --help, --version or errors
    result = cli.safe_parse([]) # never exits, returns a ParseResult

Declarations are checked and resolved when they are attached, so mistakes raise
`DeclarationError` from the builder call itself.
"""
from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Mapping, Sequence

from argvet.console import console
from argvet.exceptions import DeclarationError
from argvet.logger import Trace, noop_trace
from argvet.parser.assembly import ValidationCallback, parse_single
from argvet.parser.command import Command
from argvet.parser.command_parser import CommandParser, CommandParserConfig
from argvet.parser.declaration import Option, Positional, validate_declarations
from argvet.parser.help import generate_global_help
from argvet.parser.result import ParseResult
from argvet.parser.schema import SchemaValidator, resolve_fields
from argvet.utils import exit_with_result, get_script_name

Handler = Callable[[ParseResult], None]


@dataclass(frozen=True)
class ParserConfig:
    name: str | None = None
    version: str | None = None
    description: str | None = None
    options: Mapping[str, Option] = field(default_factory=dict)
    positional_args: tuple[Positional, ...] = ()
    validation: ValidationCallback | None = None
    handler: Handler | None = None
    trace: Trace = noop_trace
    allow_array_options: bool = True


class Parser:
    """
    Builder and entry point for a parser without subcommands.

    Attributes:
        config (ParserConfig): The immutable configuration of this parser.
    """

    def __init__(self, config: ParserConfig | None = None) -> None:
        self.config = config or ParserConfig()
        validate_declarations(self.config.options, self.config.positional_args)
        self.option_fields, self.positional_fields = resolve_fields(
            self.config.options,
            self.config.positional_args,
            self.config.allow_array_options,
        )
        self.schema = SchemaValidator(self.config.options, self.config.positional_args)

    def _replace(self, **changes: Any) -> Parser:
        return Parser(replace(self.config, **changes))

    def name(self, name: str) -> Parser:
        return self._replace(name=name)

    def version(self, version: str) -> Parser:
        return self._replace(version=version)

    def description(self, description: str) -> Parser:
        return self._replace(description=description)

    def options(self, options: Mapping[str, Option]) -> Parser:
        return self._replace(options=dict(options))

    def args(self, positional_args: Sequence[Positional]) -> Parser:
        return self._replace(positional_args=tuple(positional_args))

    def validation(self, validation: ValidationCallback) -> Parser:
        """Set a callback that runs after all values are validated."""
        return self._replace(validation=validation)

    def handler(self, handler: Handler) -> Parser:
        """Set a callback that receives every `ParseResult` from `parse()`."""
        return self._replace(handler=handler)

    def trace(self, trace: Trace) -> Parser:
        return self._replace(trace=trace)

    def array_options(self, allow: bool = True) -> Parser:
        """Allow or forbid options declared with a `list[...]` type."""
        return self._replace(allow_array_options=allow)

    @property
    def script_name(self) -> str:
        return self.config.name if self.config.name is not None else get_script_name()

    def get_help(self) -> str:
        return generate_global_help(
            self.option_fields,
            self.positional_fields,
            self.script_name,
            self.config.description,
            self.config.version,
        )

    def show_help(self) -> None:
        console.print(self.get_help(), markup=False, highlight=False, soft_wrap=True)

    def safe_parse(self, args: Sequence[str] | None = None) -> ParseResult:
        """Parse `args` (default: `sys.argv[1:]`) without printing or exiting."""
        argv = list(args) if args is not None else sys.argv[1:]
        return parse_single(
            argv,
            self.option_fields,
            self.positional_fields,
            self.schema,
            self.get_help(),
            self.config.validation,
            self.config.trace,
        )

    def parse(self, args: Sequence[str] | None = None) -> dict[str, Any]:
        """
        Parse `args` and return the parsed values.

        The handler, when set, receives the result first. Help and version are
        printed to stdout with exit code 0; errors are printed to stderr with the
        help text and exit code 1.
        """
        result = self.safe_parse(args)
        if self.config.handler is not None:
            self.config.handler(result)
        if result.type != "match":
            exit_with_result(result, self.config.version)
        return result.parsed

    def subcommand(self, command: Command) -> CommandParser:
        """
        Turn this parser into a `CommandParser` with `command` as its first command.

        Raises:
            DeclarationError: If options or positional arguments were already declared.
        """
        if self.config.options:
            raise DeclarationError("Cannot add subcommand to parser with options().")
        if self.config.positional_args:
            raise DeclarationError("Cannot add subcommand to parser with args().")
        return CommandParser(
            CommandParserConfig(
                name=self.config.name,
                version=self.config.version,
                description=self.config.description,
                handler=self.config.handler,
                trace=self.config.trace,
                allow_array_options=self.config.allow_array_options,
            )
        ).subcommand(command)

    def __repr__(self) -> str:
        return (
            f"Parser(name={self.config.name!r}, options={list(self.config.options)}, "
            f"args={[arg.name for arg in self.config.positional_args]})"
        )


def parser() -> Parser:
    return Parser()
