from argvet import Option, Positional, command, parser


def build(parsed: dict) -> str:
    return f"Building {parsed['target']} ({'release' if parsed['release'] else 'debug'})"


def clean(parsed: dict) -> str:
    return "Cleaning " + ", ".join(parsed["paths"] or ["everything"])


cli = (
    parser()
    .name("tool")
    .version("2.1.0")
    .description("Build helper")
    .subcommand(
        command("build")
        .description("Build a target")
        .options({"release": Option(bool, alias="r", default=False)})
        .args([Positional("target", str, description="Target to build")])
        .action(build)
    )
    .subcommand(
        command("clean")
        .description("Remove build output")
        .args([Positional("paths", list[str] | None)])
        .action(clean)
    )
)

if __name__ == "__main__":
    print(cli.parse())
