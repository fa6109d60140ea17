import pytest

from argvet import CommandParser, DeclarationError, Option, Positional, command, parser
from argvet.parser.result import ParseResultError, ParseResultHelp, ParseResultMatch


def build_cli(calls=None):
    calls = calls if calls is not None else []
    build = (
        command("build")
        .description("Build a target")
        .options({"release": Option(bool, alias="r", default=False)})
        .args([Positional("target", str)])
        .action(lambda parsed: calls.append(("build", parsed)) or "built")
    )
    clean = (
        command("clean")
        .options({"all": Option(bool, default=False), "depth": Option(int, default=1)})
        .validation(lambda parsed: parsed["depth"] > 0 or "depth must be positive")
        .action(lambda parsed: calls.append(("clean", parsed)))
    )
    return parser().name("tool").version("2.0.0").description("A tool").subcommand(build).subcommand(clean)


def test_subcommand_returns_command_parser():
    assert isinstance(build_cli(), CommandParser)
    assert build_cli().command_names == ["build", "clean"]


def test_parse_runs_action():
    calls = []
    cli = build_cli(calls)
    assert cli.parse(["build", "-r", "app"]) == "built"
    assert calls == [("build", {"release": True, "target": "app"})]


def test_safe_parse_match_has_command_name():
    result = build_cli().safe_parse(["clean", "--all"])
    assert isinstance(result, ParseResultMatch)
    assert result.command_name == "clean"
    assert result.parsed == {"all": True, "depth": 1}
    assert result.help.startswith("Usage: tool clean [options]")


def test_no_command_specified():
    result = build_cli().safe_parse([])
    assert isinstance(result, ParseResultError)
    assert result.error.message == "No command specified"
    assert result.help.startswith("Usage: tool [options] <command>")


def test_unknown_argument():
    result = build_cli().safe_parse(["--release", "build"])
    assert result.error.message == "Unknown argument: --release"
    assert result.command_name is None


def test_error_inside_command_uses_command_help():
    result = build_cli().safe_parse(["build"])
    assert result.error.message == "Required argument is missing: target"
    assert result.command_name == "build"
    assert result.help.startswith("Usage: tool build [options] <target>")


def test_schema_error_inside_command_is_tagged():
    result = build_cli().safe_parse(["clean", "--depth", "1.5"])
    assert result.type == "error"
    assert result.command_name == "clean"


def test_command_validation_hook():
    result = build_cli().safe_parse(["clean", "--depth", "0"])
    assert result.error.message == "depth must be positive"
    assert result.command_name == "clean"


def test_global_and_command_help():
    global_help = build_cli().safe_parse(["--help"])
    assert isinstance(global_help, ParseResultHelp)
    assert global_help.command_name is None
    assert "Commands:" in global_help.help

    command_help = build_cli().safe_parse(["-h", "build"])
    assert command_help.command_name == "build"
    assert command_help.help.startswith("Usage: tool build")

    after_command = build_cli().safe_parse(["build", "--help"])
    assert after_command.command_name == "build"


def test_get_help():
    cli = build_cli()
    assert cli.get_help().splitlines()[0] == "Usage: tool [options] <command>"
    assert "Build a target" in cli.get_help()
    assert cli.get_help("build").splitlines()[0] == "Usage: tool build [options] <target>"
    with pytest.raises(DeclarationError):
        cli.get_help("deploy")


def test_show_help(capsys):
    build_cli().show_help("clean")
    assert "Usage: tool clean [options]" in capsys.readouterr().out


def test_parse_version_exits(capsys):
    with pytest.raises(SystemExit) as excinfo:
        build_cli().parse(["--version"])
    assert excinfo.value.code == 0
    assert capsys.readouterr().out.strip() == "2.0.0"


def test_parse_error_exits_with_command_help(capsys):
    with pytest.raises(SystemExit) as excinfo:
        build_cli().parse(["build", "--bogus"])
    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert "Invalid option: bogus" in captured.err
    assert "Usage: tool build [options] <target>" in captured.err


def test_duplicated_command_name():
    with pytest.raises(DeclarationError) as excinfo:
        build_cli().subcommand(command("build").action(print))
    assert str(excinfo.value) == "Duplicated command name: build"


def test_command_without_action():
    with pytest.raises(DeclarationError):
        parser().subcommand(command("build"))


def test_parser_with_options_cannot_have_subcommands():
    with pytest.raises(DeclarationError):
        parser().options({"x": Option(str)}).subcommand(command("build").action(print))
    with pytest.raises(DeclarationError):
        parser().args([Positional("x", str)]).subcommand(command("build").action(print))


def test_command_builders_are_immutable():
    base = command("build")
    described = base.description("Build")
    assert base.config.description is None
    assert described.config.description == "Build"
    assert described.name == "build"


def test_array_options_setting_applies_to_commands():
    tagged = command("build").options({"tags": Option(list[str])}).action(lambda p: p)
    with pytest.raises(DeclarationError) as excinfo:
        parser().array_options(False).subcommand(tagged)
    assert str(excinfo.value) == "Unsupported type (options): list"

    cli = parser().subcommand(tagged)
    assert cli.safe_parse(["build", "--tags", "a", "b"]).parsed == {"tags": ["a", "b"]}
    with pytest.raises(DeclarationError):
        cli.array_options(False)
