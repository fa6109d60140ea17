"""
Argvet CLI Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging

from .exceptions import ArgvetError, DeclarationError, ParseError
from .parser import (
    Command,
    CommandParser,
    Option,
    Parser,
    ParseResult,
    Positional,
    command,
    parser,
)

logger = logging.getLogger("argvet")


__all__ = [
    "ArgvetError",
    "Command",
    "CommandParser",
    "DeclarationError",
    "Option",
    "ParseError",
    "Parser",
    "ParseResult",
    "Positional",
    "command",
    "parser",
]
