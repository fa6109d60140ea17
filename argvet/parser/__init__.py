"""
Argvet CLI Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .command import Command, command
from .command_parser import CommandParser
from .declaration import Option, Positional
from .parser import Parser, parser
from .result import (
    ParseResult,
    ParseResultError,
    ParseResultHelp,
    ParseResultMatch,
    ParseResultVersion,
)

__all__ = [
    "Command",
    "CommandParser",
    "Option",
    "Parser",
    "ParseResult",
    "ParseResultError",
    "ParseResultHelp",
    "ParseResultMatch",
    "ParseResultVersion",
    "Positional",
    "command",
    "parser",
]
