# Argvet CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Outcome of a single parse call.

`safe_parse()` always returns one of these variants and never exits the process:

- `ParseResultMatch`: parsed field values, keyed in declared order
- `ParseResultHelp`: `-h/--help` was given
- `ParseResultVersion`: `-V/--version` was given
- `ParseResultError`: a `ParseError` stopped tokenization or validation

Every variant carries the help text for the active command (or the global help).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Literal, Union

from argvet.exceptions import ParseError


@dataclass(frozen=True)
class ParseResultMatch:
    type: ClassVar[Literal["match"]] = "match"
    exit_code: ClassVar[int] = 0

    parsed: dict[str, Any] = field(default_factory=dict)
    help: str = ""
    command_name: str | None = None


@dataclass(frozen=True)
class ParseResultHelp:
    type: ClassVar[Literal["help"]] = "help"
    exit_code: ClassVar[int] = 0

    help: str = ""
    command_name: str | None = None


@dataclass(frozen=True)
class ParseResultVersion:
    type: ClassVar[Literal["version"]] = "version"
    exit_code: ClassVar[int] = 0

    help: str = ""


@dataclass(frozen=True)
class ParseResultError:
    type: ClassVar[Literal["error"]] = "error"
    exit_code: ClassVar[int] = 1

    error: ParseError
    help: str = ""
    command_name: str | None = None


ParseResult = Union[ParseResultMatch, ParseResultHelp, ParseResultVersion, ParseResultError]
