# Argvet CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `CommandParser`, a parser that dispatches to one of several subcommands.

A `CommandParser` is usually created from `parser().subcommand(...)`:

    cli = (
        parser()
        .name("tool")
        .version("2.1.0")
        .subcommand(command("build").args([Positional("target", str)]).action(build))
        .subcommand(command("clean").action(clean))
    )
    cli.parse()  # runs the selected action with the parsed values

Global `--help`/`--version` are recognized before the command name; after the
command name, `--help` shows command-scoped help.
"""
from __future__ import annotations

import sys
from dataclasses import dataclass, replace
from typing import Any, Callable, Sequence

from argvet.console import console
from argvet.exceptions import DeclarationError
from argvet.logger import Trace, noop_trace
from argvet.parser.assembly import CompiledCommand, parse_multi
from argvet.parser.command import Command
from argvet.parser.help import generate_command_help, generate_global_command_help
from argvet.parser.result import ParseResult
from argvet.utils import exit_with_result, get_script_name


@dataclass(frozen=True)
class CommandParserConfig:
    name: str | None = None
    version: str | None = None
    description: str | None = None
    handler: Callable[[ParseResult], None] | None = None
    trace: Trace = noop_trace
    allow_array_options: bool = True
    commands: tuple[Command, ...] = ()


class CommandParser:
    """
    Builder and entry point for a parser with subcommands.

    Every command is compiled when it is attached, so a command without an action,
    or with a list option while array options are off, raises `DeclarationError`
    from `subcommand()`.
    """

    def __init__(self, config: CommandParserConfig | None = None) -> None:
        self.config = config or CommandParserConfig()
        self.compiled: tuple[CompiledCommand, ...] = tuple(
            command.compile(self.config.allow_array_options)
            for command in self.config.commands
        )

    def _replace(self, **changes: Any) -> CommandParser:
        return CommandParser(replace(self.config, **changes))

    def name(self, name: str) -> CommandParser:
        return self._replace(name=name)

    def version(self, version: str) -> CommandParser:
        return self._replace(version=version)

    def description(self, description: str) -> CommandParser:
        return self._replace(description=description)

    def handler(self, handler: Callable[[ParseResult], None]) -> CommandParser:
        return self._replace(handler=handler)

    def trace(self, trace: Trace) -> CommandParser:
        return self._replace(trace=trace)

    def array_options(self, allow: bool = True) -> CommandParser:
        """Allow or forbid options declared with a `list[...]` type in every command."""
        return self._replace(allow_array_options=allow)

    def subcommand(self, command: Command) -> CommandParser:
        """
        Add a subcommand.

        Raises:
            DeclarationError: If a command with the same name already exists, the
                command has no action or it declares a forbidden list option.
        """
        if any(existing.name == command.name for existing in self.config.commands):
            raise DeclarationError(f"Duplicated command name: {command.name}")
        return self._replace(commands=self.config.commands + (command,))

    @property
    def script_name(self) -> str:
        return self.config.name if self.config.name is not None else get_script_name()

    @property
    def command_names(self) -> list[str]:
        return [command.name for command in self.compiled]

    def _find(self, command_name: str) -> CompiledCommand:
        for compiled in self.compiled:
            if compiled.name == command_name:
                return compiled
        raise DeclarationError(f"Unknown command: {command_name}")

    def get_help(self, command_name: str | None = None) -> str:
        """Return the global help, or the help of `command_name` when given."""
        if command_name is None:
            return generate_global_command_help(
                [compiled.model for compiled in self.compiled],
                self.script_name,
                self.config.description,
                self.config.version,
            )
        return generate_command_help(
            self._find(command_name).model, self.script_name, self.config.version
        )

    def show_help(self, command_name: str | None = None) -> None:
        console.print(
            self.get_help(command_name), markup=False, highlight=False, soft_wrap=True
        )

    def safe_parse(self, args: Sequence[str] | None = None) -> ParseResult:
        """Parse `args` (default: `sys.argv[1:]`) without printing or exiting."""
        argv = list(args) if args is not None else sys.argv[1:]
        return parse_multi(
            argv,
            self.compiled,
            self.script_name,
            self.config.description,
            self.config.version,
            self.config.trace,
        )

    def parse(self, args: Sequence[str] | None = None) -> Any:
        """
        Parse `args`, run the selected command's action and return its result.

        Help, version and errors are printed and end the process like `Parser.parse()`.
        """
        result = self.safe_parse(args)
        if self.config.handler is not None:
            self.config.handler(result)
        if result.type != "match":
            exit_with_result(result, self.config.version)
        return self._find(result.command_name).action(result.parsed)  # type: ignore[arg-type]

    def __repr__(self) -> str:
        return f"CommandParser(name={self.config.name!r}, commands={self.command_names})"
