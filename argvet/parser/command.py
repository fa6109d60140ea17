# Argvet CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `Command`, the builder for one subcommand of a `CommandParser`.

    deploy = (
        command("deploy")
        .description("Deploy the service")
        .options({"env": Option(Literal["dev", "prod"], alias="e")})
        .args([Positional("tag", str)])
        .action(lambda parsed: run_deploy(**parsed))
    )

Like `Parser`, every builder method returns a new `Command`.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Mapping, Sequence

from argvet.exceptions import DeclarationError
from argvet.parser.assembly import CompiledCommand, ValidationCallback
from argvet.parser.declaration import (
    Option,
    Positional,
    validate_command_name,
    validate_declarations,
)
from argvet.parser.field import CommandModel
from argvet.parser.schema import SchemaValidator, resolve_fields

Action = Callable[[dict[str, Any]], Any]


@dataclass(frozen=True)
class CommandConfig:
    name: str
    description: str | None = None
    options: Mapping[str, Option] = field(default_factory=dict)
    positional_args: tuple[Positional, ...] = ()
    validation: ValidationCallback | None = None
    action: Action | None = None


class Command:
    """
    Builder for a subcommand.

    Attributes:
        config (CommandConfig): The immutable configuration of this command.
    """

    def __init__(self, config: CommandConfig) -> None:
        validate_command_name(config.name)
        validate_declarations(config.options, config.positional_args)
        self.config = config
        self.option_fields, self.positional_fields = resolve_fields(
            config.options, config.positional_args
        )

    def _replace(self, **changes: Any) -> Command:
        return Command(replace(self.config, **changes))

    @property
    def name(self) -> str:
        return self.config.name

    def description(self, description: str) -> Command:
        return self._replace(description=description)

    def options(self, options: Mapping[str, Option]) -> Command:
        return self._replace(options=dict(options))

    def args(self, positional_args: Sequence[Positional]) -> Command:
        return self._replace(positional_args=tuple(positional_args))

    def validation(self, validation: ValidationCallback) -> Command:
        return self._replace(validation=validation)

    def action(self, action: Action) -> Command:
        """Set the callable that receives the parsed values of this command."""
        return self._replace(action=action)

    def to_model(self) -> CommandModel:
        return CommandModel(
            name=self.config.name,
            description=self.config.description,
            options=self.option_fields,
            positional_fields=self.positional_fields,
        )

    def compile(self, allow_array_options: bool = True) -> CompiledCommand:
        """
        Freeze this command for parsing.

        Raises:
            DeclarationError: If no action was set, or an option takes a list while
                `allow_array_options` is off.
        """
        if self.config.action is None:
            raise DeclarationError(f"action is required for command: {self.name}")
        if not allow_array_options and any(
            option.is_array for option in self.option_fields
        ):
            raise DeclarationError("Unsupported type (options): list")
        return CompiledCommand(
            model=self.to_model(),
            schema=SchemaValidator(self.config.options, self.config.positional_args),
            action=self.config.action,
            validation=self.config.validation,
        )

    def __repr__(self) -> str:
        return f"Command(name={self.name!r})"


def command(name: str) -> Command:
    return Command(CommandConfig(name=name))
