# Argvet CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Declarative parser loader for argvet.

A parser can be described in YAML or TOML instead of Python:

    name: deploy
    version: "1.0.0"
    description: Deploy the service
    options:
      - name: env
        type: enum
        choices: [dev, prod]
        alias: e
      - name: replicas
        type: integer
        default: 1
    args:
      - name: paths
        type: array
        items: string

or, for a multi-command parser:

    name: tool
    commands:
      - name: build
        action: my_package.cli.build
        args:
          - name: target
            type: string
"""
from __future__ import annotations

import importlib
from pathlib import Path
from typing import Any, Literal, Optional

import toml
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from argvet.exceptions import DeclarationError
from argvet.logger import logger, logging_trace
from argvet.parser.command import Command, command
from argvet.parser.command_parser import CommandParser
from argvet.parser.declaration import Option, Positional
from argvet.parser.parser import Parser, parser
from argvet.utils import find_duplicate_values

FieldTypeName = Literal["string", "number", "integer", "boolean", "enum", "array"]
ItemTypeName = Literal["string", "number", "integer"]

_SCALAR_TYPES: dict[str, Any] = {
    "string": str,
    "number": float,
    "integer": int,
    "boolean": bool,
}


def import_action(dotted_path: str) -> Any:
    """Dynamically imports a callable from a dotted path like 'my.module.func'."""
    module_path, _, attr = dotted_path.rpartition(".")
    if not module_path:
        raise DeclarationError(f"Invalid action path: {dotted_path}")
    try:
        module = importlib.import_module(module_path)
    except ModuleNotFoundError as error:
        logger.error("Failed to import module '%s': %s", module_path, error)
        raise DeclarationError(
            f"Could not import '{dotted_path}': {error}. Ensure the module is "
            "installed and discoverable via PYTHONPATH."
        ) from error
    try:
        action = getattr(module, attr)
    except AttributeError as error:
        logger.error(
            "Module '%s' does not have attribute '%s': %s", module_path, attr, error
        )
        raise DeclarationError(
            f"Module '{module_path}' has no attribute '{attr}'"
        ) from error
    if not callable(action):
        raise DeclarationError(f"Action is not callable: {dotted_path}")
    return action


class RawField(BaseModel):
    """Raw option or positional argument entry."""

    name: str
    type: FieldTypeName = "string"
    items: ItemTypeName = "string"
    choices: list[str] | None = None
    default: Any = None
    optional: bool = False
    description: str | None = None

    @model_validator(mode="after")
    def validate_choices(self) -> RawField:
        if self.type == "enum" and not self.choices:
            raise ValueError(f"enum field '{self.name}' needs a non-empty 'choices' list")
        return self

    def to_annotation(self) -> Any:
        if self.type == "enum":
            annotation: Any = Literal[tuple(self.choices or ())]  # type: ignore[valid-type]
        elif self.type == "array":
            annotation = list[_SCALAR_TYPES[self.items]]  # type: ignore[index]
        else:
            annotation = _SCALAR_TYPES[self.type]
        if self.optional:
            return Optional[annotation]
        return annotation


class RawOption(RawField):
    alias: str | None = None
    arg_name: str | None = None

    def to_option(self) -> Option:
        return Option(
            self.to_annotation(),
            alias=self.alias,
            description=self.description,
            arg_name=self.arg_name,
            default=self.default,
        )


class RawArgument(RawField):
    def to_positional(self) -> Positional:
        return Positional(
            self.name,
            self.to_annotation(),
            description=self.description,
            default=self.default,
        )


class RawCommand(BaseModel):
    """Raw subcommand entry."""

    name: str
    action: str
    description: str | None = None
    options: list[RawOption] = Field(default_factory=list)
    args: list[RawArgument] = Field(default_factory=list)

    def to_command(self) -> Command:
        sub = (
            command(self.name)
            .options({entry.name: entry.to_option() for entry in self.options})
            .args([entry.to_positional() for entry in self.args])
            .action(import_action(self.action))
        )
        if self.description is not None:
            sub = sub.description(self.description)
        return sub


class ArgvetConfig(BaseModel):
    """Argvet declaration file model."""

    name: str | None = None
    version: str | None = None
    description: str | None = None
    debug: bool = False
    allow_array_options: bool = True
    options: list[RawOption] = Field(default_factory=list)
    args: list[RawArgument] = Field(default_factory=list)
    commands: list[RawCommand] = Field(default_factory=list)

    @field_validator("version", mode="before")
    @classmethod
    def coerce_version(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @model_validator(mode="after")
    def validate_layout(self) -> ArgvetConfig:
        if self.commands and (self.options or self.args):
            raise ValueError("'commands' cannot be combined with 'options' or 'args'")
        option_groups = [self.options] + [raw.options for raw in self.commands]
        for group in option_groups:
            duplicates = find_duplicate_values(entry.name for entry in group)
            if duplicates:
                raise ValueError(f"Duplicated option name: {', '.join(duplicates)}")
        return self

    def to_parser(self) -> Parser | CommandParser:
        cli = parser().array_options(self.allow_array_options)
        if self.name is not None:
            cli = cli.name(self.name)
        if self.version is not None:
            cli = cli.version(self.version)
        if self.description is not None:
            cli = cli.description(self.description)
        if self.debug:
            cli = cli.trace(logging_trace)

        if not self.commands:
            return cli.options(
                {entry.name: entry.to_option() for entry in self.options}
            ).args([entry.to_positional() for entry in self.args])

        first, *rest = [raw_command.to_command() for raw_command in self.commands]
        command_parser = cli.subcommand(first)
        for sub in rest:
            command_parser = command_parser.subcommand(sub)
        return command_parser


def loader(file_path: Path | str) -> Parser | CommandParser:
    """
    Load a parser declaration from a YAML or TOML file.

    Args:
        file_path (Path | str): Path to the declaration file.

    Returns:
        Parser | CommandParser: A `CommandParser` when the file declares `commands`,
        otherwise a `Parser`.

    Raises:
        FileNotFoundError: If the file does not exist.
        DeclarationError: If the file format is unsupported or its content is invalid.
    """
    if isinstance(file_path, (str, Path)):
        path = Path(file_path)
    else:
        raise TypeError("file_path must be a string or Path object.")

    if not path.is_file():
        raise FileNotFoundError(f"No such config file: {file_path}")

    suffix = path.suffix
    with path.open("r", encoding="UTF-8") as config_file:
        try:
            if suffix in (".yaml", ".yml"):
                raw_config = yaml.safe_load(config_file)
            elif suffix == ".toml":
                raw_config = toml.load(config_file)
            else:
                raise DeclarationError(f"Unsupported config format: {suffix}")
        except (yaml.YAMLError, toml.TomlDecodeError) as error:
            raise DeclarationError(f"Could not parse {path}: {error}") from error

    if not isinstance(raw_config, dict):
        raise DeclarationError(
            "Configuration file must contain a mapping.\n"
            "Example:\n"
            "name: 'my-cli'\n"
            "options:\n"
            "  - name: 'verbose'\n"
            "    type: 'boolean'"
        )

    try:
        config = ArgvetConfig.model_validate(raw_config)
    except ValidationError as error:
        raise DeclarationError(f"Invalid config file {path}: {error}") from error
    logger.debug("Loaded declaration file '%s'", path)
    return config.to_parser()
