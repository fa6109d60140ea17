# Argvet CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by argvet.

Two families of errors exist:

- Declaration errors are programmer mistakes found while a parser or command
  is being assembled (bad names, duplicate fields, unsupported types, a command
  without an action). They are raised immediately and are never turned into a
  parse result.
- Parse errors are caused by the argument list a user typed. They are caught by
  the parser and reported as the `error` variant of `ParseResult`, together with
  the help text of the active command.

Exception Hierarchy:
- ArgvetError
    ├── DeclarationError
    └── ParseError
"""
from __future__ import annotations


class ArgvetError(Exception):
    """Base exception for argvet."""


class DeclarationError(ArgvetError):
    """Exception raised when options, arguments or commands are declared incorrectly."""


class ParseError(ArgvetError):
    """
    Exception raised when the argument list cannot be parsed or validated.

    Attributes:
        message (str): Human-readable description of the failure.
        nested_error (Exception | None): Underlying error, e.g. a pydantic
            `ValidationError` raised by the schema stage.
        command_name (str | None): Name of the subcommand that was selected when
            the failure happened, used to pick command-scoped help.
    """

    def __init__(
        self,
        message: str,
        nested_error: Exception | None = None,
        command_name: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.nested_error = nested_error
        self.command_name = command_name
