# Argvet CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Tokenizer for argvet.

Walks a flat list of argument strings against the resolved field model and decides
which tokens belong to which declared field. The output is a list of raw option
candidates and positional candidates; values are not coerced here.

Handled syntax:
- `--name value`, `--name=value`, `--name=` (empty value)
- `--no-name` for boolean options
- `-a value`, `-a10` (inline value), `-abc` (clustered boolean aliases)
- multi-character aliases matched before clustering (`-ab` for alias `ab`)
- `--opt v1 v2 ...` for array options (stops at the next option-like token or `--`)
- `--` ends option parsing; everything after it is positional
- `-h/--help` and `-V/--version` stop the traversal immediately
- negative numbers (`-1.5`) are treated as positional values, not options

`tokenize_multi_command()` runs a restricted search for the subcommand name first,
then tokenizes the remaining arguments against the selected command.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Sequence

from argvet.exceptions import ParseError
from argvet.logger import Trace, noop_trace
from argvet.parser.field import CommandModel, OptionField, PositionalField

DOUBLE_DASH = "--"
HELP_FLAGS = ("-h", "--help")
VERSION_FLAGS = ("-V", "--version")

_NUMERIC_PATTERN = re.compile(
    r"^\s*[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)\s*$", re.ASCII
)
_INTEGER_PATTERN = re.compile(r"^\s*[+-]?\d+\s*$", re.ASCII)
_NEGATION_PATTERN = re.compile(r"^--no-(?P<name>.+)$")


@dataclass(frozen=True)
class Candidate:
    """A raw option value; `value` is None for boolean flags."""

    name: str
    value: str | list[str] | None = None
    is_negative: bool = False


@dataclass(frozen=True)
class PositionalCandidate:
    name: str
    value: str | list[str]


@dataclass(frozen=True)
class Tokenized:
    candidates: tuple[Candidate, ...] = ()
    positional_candidates: tuple[PositionalCandidate, ...] = ()
    is_help: bool = False
    is_version: bool = False


@dataclass(frozen=True)
class CommandTokenized(Tokenized):
    command_name: str | None = None


@dataclass
class TokenizerState:
    index: int = 0
    candidates: list[Candidate] = field(default_factory=list)
    positional_candidates: list[PositionalCandidate] = field(default_factory=list)
    has_double_dash: bool = False
    is_help: bool = False
    is_version: bool = False

    def as_dict(self) -> dict:
        return {
            "index": self.index,
            "candidates": [c.name for c in self.candidates],
            "positional_candidates": [c.name for c in self.positional_candidates],
            "has_double_dash": self.has_double_dash,
            "is_help": self.is_help,
            "is_version": self.is_version,
        }


def is_numeric(text: str) -> bool:
    """
    True for ASCII decimal literals (optionally signed, with exponent) and Infinity.

    Hex literals such as `0x10`, `nan` and blank strings are not numbers.
    """
    return bool(_NUMERIC_PATTERN.match(text))


def is_integer_literal(text: str) -> bool:
    return bool(_INTEGER_PATTERN.match(text))


def find_option(
    options: Sequence[OptionField], prefixed_name: str
) -> tuple[OptionField, bool] | None:
    """
    Look up an option by `--name`, `-alias` or `--no-name`.

    Returns:
        tuple[OptionField, bool] | None: The option and whether it was negated.
    """
    for option in options:
        if prefixed_name == f"--{option.name}":
            return option, False
        if option.alias is not None and prefixed_name == f"-{option.alias}":
            return option, False
    match = _NEGATION_PATTERN.match(prefixed_name)
    if match is None:
        return None
    for option in options:
        if option.name == match.group("name"):
            return option, True
    return None


def likes_option_arg(arg: str, options: Sequence[OptionField]) -> bool:
    if arg == DOUBLE_DASH:
        return False
    normalized = arg.split("=")[0]
    if normalized.startswith("--"):
        return True
    if any(
        option.alias is not None and normalized == f"-{option.alias}"
        for option in options
    ):
        return True
    if not normalized.startswith("-"):
        return False
    return not is_numeric(normalized[1:])


def _strip_prefix(prefixed_name: str) -> str:
    return prefixed_name.lstrip("-")


def _check_option_arg(
    option: OptionField, is_negative: bool, has_value: bool, is_forced: bool
) -> None:
    if option.needs_value and not has_value:
        raise ParseError(f"Option '{option.name}' needs value: {option.name}")
    if is_forced and not option.needs_value:
        raise ParseError(
            f"Boolean option '{option.name}' does not need value: {option.name}"
        )
    if is_negative and option.needs_value:
        raise ParseError(
            f"Non boolean option '{option.name}' does not accept --no- prefix: "
            f"{option.name}"
        )


def _take_values(
    args: Sequence[str], start: int, options: Sequence[OptionField], option: OptionField
) -> list[str]:
    """Collect the value tokens that follow an option."""
    if not option.is_array:
        if start < len(args) and not likes_option_arg(args[start], options):
            return [args[start]]
        return []
    values: list[str] = []
    for arg in args[start:]:
        if arg == DOUBLE_DASH or likes_option_arg(arg, options):
            break
        values.append(arg)
    return values


def _make_candidate(
    option: OptionField, values: list[str], is_negative: bool = False
) -> Candidate:
    if not option.needs_value:
        return Candidate(option.name, None, is_negative)
    if option.is_array:
        return Candidate(option.name, list(values), is_negative)
    return Candidate(option.name, values[0], is_negative)


def _parse_long_option(
    args: Sequence[str], index: int, options: Sequence[OptionField]
) -> tuple[list[Candidate], int]:
    arg = args[index]
    prefixed_name, separator, forced_value = arg.partition("=")
    found = find_option(options, prefixed_name)
    if found is None:
        raise ParseError(f"Invalid option: {_strip_prefix(prefixed_name)}")
    option, is_negative = found

    if separator:
        _check_option_arg(option, is_negative, has_value=True, is_forced=True)
        value: str | list[str] = [forced_value] if option.is_array else forced_value
        return [Candidate(option.name, value, is_negative)], 1

    values = _take_values(args, index + 1, options, option) if option.needs_value else []
    _check_option_arg(option, is_negative, has_value=bool(values), is_forced=False)
    return [_make_candidate(option, values, is_negative)], 1 + len(values)


def _parse_short_cluster(
    args: Sequence[str], index: int, options: Sequence[OptionField]
) -> tuple[list[Candidate], int]:
    """
    Expand `-abc` into single-character aliases.

    -abc      => -a -b -c
    -abc 10   => -a -b -c 10 (when c takes a value)
    -a10      => -a 10 (when a takes a value)
    -ab10     => rejected
    """
    text = args[index][1:]
    if not text:
        raise ParseError(f"Invalid option: {args[index]}")
    candidates: list[Candidate] = []
    for position, char in enumerate(text):
        found = find_option(options, f"-{char}")
        if found is None:
            raise ParseError(f"Invalid option: {char}")
        option, _ = found
        if not option.needs_value:
            candidates.append(Candidate(option.name))
            continue
        is_last = position == len(text) - 1
        if is_last:
            values = _take_values(args, index + 1, options, option)
            if values:
                candidates.append(_make_candidate(option, values))
                return candidates, 1 + len(values)
        elif position == 0:
            candidates.append(_make_candidate(option, [text[1:]]))
            return candidates, 1
        raise ParseError(f"Option '{option.name}' needs value: {option.name}")
    return candidates, 1


def _parse_short_option(
    args: Sequence[str], index: int, options: Sequence[OptionField]
) -> tuple[list[Candidate], int]:
    arg = args[index]
    if "=" in arg:
        raise ParseError(f"Invalid option: {arg}")
    found = find_option(options, arg)
    if found is None:
        return _parse_short_cluster(args, index, options)
    option, _ = found
    values = _take_values(args, index + 1, options, option) if option.needs_value else []
    _check_option_arg(option, False, has_value=bool(values), is_forced=False)
    return [_make_candidate(option, values)], 1 + len(values)


def parse_option_arg(
    args: Sequence[str], index: int, options: Sequence[OptionField]
) -> tuple[list[Candidate], int]:
    """
    Parse the option token at `args[index]`.

    Returns:
        tuple[list[Candidate], int]: The candidates and the number of tokens consumed.
    """
    if args[index].startswith("--"):
        return _parse_long_option(args, index, options)
    return _parse_short_option(args, index, options)


def pick_positional_args(
    targets: Sequence[str], options: Sequence[OptionField], has_double_dash: bool
) -> tuple[list[str], int, bool]:
    """
    Pick the contiguous run of positional tokens at the head of `targets`.

    A `--` inside the run is dropped and everything after it joins the run.

    Returns:
        tuple[list[str], int, bool]: The tokens, the number consumed and whether a
        `--` was consumed.
    """
    if has_double_dash:
        return list(targets), len(targets), False
    picked: list[str] = []
    for position, arg in enumerate(targets):
        if arg == DOUBLE_DASH:
            picked.extend(targets[position + 1 :])
            return picked, len(targets), True
        if likes_option_arg(arg, options):
            return picked, position, False
        picked.append(arg)
    return picked, len(targets), False


def parse_positional_args(
    args: Sequence[str], positional_fields: Sequence[PositionalField]
) -> list[PositionalCandidate]:
    candidates: list[PositionalCandidate] = []
    for position, arg in enumerate(args):
        if position >= len(positional_fields):
            raise ParseError("Too many positional arguments")
        positional = positional_fields[position]
        if positional.is_array:
            candidates.append(PositionalCandidate(positional.name, list(args[position:])))
            break
        candidates.append(PositionalCandidate(positional.name, arg))
    return candidates


def _handle_positional(
    state: TokenizerState,
    args: Sequence[str],
    options: Sequence[OptionField],
    positional_fields: Sequence[PositionalField],
) -> None:
    if state.positional_candidates:
        raise ParseError("Positional arguments specified twice")
    picked, shift, saw_double_dash = pick_positional_args(
        args[state.index :], options, state.has_double_dash
    )
    state.positional_candidates = parse_positional_args(picked, positional_fields)
    state.has_double_dash = state.has_double_dash or saw_double_dash
    state.index += shift


def tokenize(
    args: Sequence[str],
    options: Sequence[OptionField],
    positional_fields: Sequence[PositionalField],
    trace: Trace = noop_trace,
) -> Tokenized:
    """
    Split `args` into option and positional candidates.

    Raises:
        ParseError: On unknown options, malformed clusters, missing option values,
            surplus positional tokens or split positional runs.
    """
    state = TokenizerState()
    while state.index < len(args):
        trace("tokenize.state", state.as_dict())
        arg = args[state.index]
        if state.has_double_dash:
            _handle_positional(state, args, options, positional_fields)
        elif arg == DOUBLE_DASH:
            state.has_double_dash = True
            state.index += 1
        elif arg in HELP_FLAGS:
            state.is_help = True
            break
        elif arg in VERSION_FLAGS:
            state.is_version = True
            break
        elif likes_option_arg(arg, options):
            candidates, shift = parse_option_arg(args, state.index, options)
            state.candidates.extend(candidates)
            state.index += shift
        else:
            _handle_positional(state, args, options, positional_fields)
    trace("tokenize.done", state.as_dict())
    return Tokenized(
        candidates=tuple(state.candidates),
        positional_candidates=(
            ()
            if state.is_help or state.is_version
            else tuple(state.positional_candidates)
        ),
        is_help=state.is_help,
        is_version=state.is_version,
    )


@dataclass
class CommandSearchState:
    index: int = 0
    is_help: bool = False
    is_version: bool = False
    command_name: str | None = None


def search_command(
    args: Sequence[str], command_names: Sequence[str], trace: Trace = noop_trace
) -> CommandSearchState:
    """
    Find the subcommand name, honoring global `--help` and `--version`.

    `--help <command>` selects command-scoped help. Any other token is rejected.
    """
    state = CommandSearchState()
    while state.index < len(args):
        trace("search_command.state", vars(state).copy())
        arg = args[state.index]
        if arg in HELP_FLAGS:
            state.is_help = True
            following = (
                args[state.index + 1] if state.index + 1 < len(args) else None
            )
            if following is None:
                break
            if following in command_names:
                state.command_name = following
                break
            state.index += 1
        elif arg in VERSION_FLAGS:
            state.is_version = True
            break
        elif arg in command_names:
            state.command_name = arg
            state.index += 1
            break
        else:
            raise ParseError(f"Unknown argument: {arg}")
    return state


def tokenize_multi_command(
    args: Sequence[str], commands: Sequence[CommandModel], trace: Trace = noop_trace
) -> CommandTokenized:
    """
    Select a subcommand and tokenize the rest of `args` against it.

    Raises:
        ParseError: With `command_name` set when the failure happened inside the
            selected command's arguments.
    """
    if not args:
        raise ParseError("No command specified")
    search = search_command(args, [command.name for command in commands], trace)
    if search.is_help or search.is_version:
        return CommandTokenized(
            is_help=search.is_help,
            is_version=search.is_version,
            command_name=search.command_name,
        )
    selected = next(
        (command for command in commands if command.name == search.command_name),
        None,
    )
    if selected is None:
        raise ParseError("No command specified")
    try:
        tokenized = tokenize(
            args[search.index :], selected.options, selected.positional_fields, trace
        )
    except ParseError as error:
        error.command_name = selected.name
        raise
    return CommandTokenized(
        candidates=tokenized.candidates,
        positional_candidates=tokenized.positional_candidates,
        is_help=tokenized.is_help,
        is_version=tokenized.is_version,
        command_name=selected.name,
    )
