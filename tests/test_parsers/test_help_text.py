from typing import Literal

from argvet.parser.field import CommandModel, FieldKind, OptionField, PositionalField
from argvet.parser.help import (
    generate_command_help,
    generate_global_command_help,
    generate_global_help,
    generate_options_text,
    generate_usage,
    pad_table,
)
from argvet.parser.parser import parser
from argvet.parser.declaration import Option, Positional


def test_pad_table():
    assert pad_table([["a", "bb"], ["ccc", "d"]]) == [["a  ", "bb"], ["ccc", "d "]]
    assert pad_table([]) == []


def test_generate_usage():
    fields = [
        PositionalField("src"),
        PositionalField("dest", required=False),
        PositionalField("rest", required=False, is_array=True),
    ]
    assert generate_usage("cp", fields) == "Usage: cp [options] <src> [dest] [rest ...]"
    assert generate_usage("tool", [], "build") == "Usage: tool build [options] "


def test_generate_options_text_builtin_only():
    text = generate_options_text([OptionField("help", FieldKind.BOOLEAN, alias="h", description="Show help", required=False)])
    assert text == "Options:\n  -h, --help  Show help  "


def test_generate_global_help_layout():
    options = [OptionField("opt1", FieldKind.STRING, description="a string option")]
    fields = [PositionalField("count", FieldKind.NUMBER, description="how many")]
    help_text = generate_global_help(options, fields, "prog", "Demo program")
    assert help_text == (
        "Usage: prog [options] <count>\n"
        "\n"
        "Demo program\n"
        "\n"
        "Arguments:\n"
        "  count  how many  [required]\n"
        "\n"
        "Options:\n"
        "  -h, --help           Show help                  \n"
        "      --opt1 <string>  a string option  [required]\n"
    )


def test_generate_help_choices_default_and_version():
    options = [
        OptionField(
            "mode",
            FieldKind.STRING,
            alias="m",
            arg_name="MODE",
            required=False,
            default="fast",
            enum_values=("fast", "slow"),
        )
    ]
    lines = generate_global_help(options, [], "prog", version="1.0.0").splitlines()
    assert lines[3].startswith("  -h, --help ")
    assert lines[4].startswith("  -V, --version")
    assert "Show version" in lines[4]
    assert lines[5].startswith("  -m, --mode <MODE>")
    assert '(choices: "fast", "slow") (default: "fast")' in lines[5]


def test_generate_global_help_without_version_or_description():
    help_text = generate_global_help([], [], "prog")
    assert help_text == "Usage: prog [options] \n\nOptions:\n  -h, --help  Show help  \n"


def test_generate_global_command_help():
    commands = [
        CommandModel("build", description="Build it"),
        CommandModel("clean"),
    ]
    help_text = generate_global_command_help(commands, "tool", "A tool", "2.0")
    assert help_text.splitlines()[:7] == [
        "Usage: tool [options] <command>",
        "",
        "A tool",
        "",
        "Commands:",
        "  build  Build it",
        "  clean" + " " * 10,
    ]
    assert "-V, --version" in help_text


def test_generate_command_help():
    command = CommandModel(
        "build",
        description="Build it",
        options=(OptionField("fast", FieldKind.BOOLEAN, required=False, default=False),),
        positional_fields=(PositionalField("target"),),
    )
    help_text = generate_command_help(command, "tool")
    lines = help_text.splitlines()
    assert lines[0] == "Usage: tool build [options] <target>"
    assert lines[2] == "Build it"
    assert "--fast" in help_text
    assert "(default: false)" in help_text


def test_array_option_placeholder():
    help_text = (
        parser()
        .name("prog")
        .options({"tags": Option(list[str], alias="t"), "mode": Option(Literal["x", "y"])})
        .args([Positional("files", list[str])])
        .get_help()
    )
    assert "-t, --tags <string> ..." in help_text
    assert "--mode <string>" in help_text
    assert "Usage: prog [options] <files ...>" in help_text
