"""
Argvet CLI Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import json
import os
import sys
from pathlib import Path
from typing import Any

from argvet.config import loader
from argvet.console import console, error_console
from argvet.exceptions import DeclarationError
from argvet.parser import Parser
from argvet.utils import setup_logging


def find_argvet_config() -> Path | None:
    candidates = [
        Path(os.environ["ARGVET_CONFIG"]) if os.environ.get("ARGVET_CONFIG") else None,
        Path.cwd() / "argvet.yaml",
        Path.cwd() / "argvet.yml",
        Path.cwd() / "argvet.toml",
    ]
    return next((p for p in candidates if p is not None and p.is_file()), None)


def bootstrap() -> Path | None:
    config_path = find_argvet_config()
    if config_path and str(config_path.parent) not in sys.path:
        sys.path.insert(0, str(config_path.parent))
    return config_path


def main(args: list[str] | None = None) -> Any:
    setup_logging()
    config_path = bootstrap()
    if config_path is None:
        error_console.print(
            "No declaration file found. Set ARGVET_CONFIG or create argvet.yaml / "
            "argvet.toml in the working directory.",
            markup=False,
            highlight=False,
        )
        sys.exit(1)
    try:
        cli = loader(config_path)
    except DeclarationError as error:
        error_console.print(f"{config_path}: {error}", markup=False, highlight=False)
        sys.exit(1)

    argv = args if args is not None else sys.argv[1:]
    if isinstance(cli, Parser):
        parsed = cli.parse(argv)
        console.print(
            json.dumps(parsed, default=str), markup=False, highlight=False, soft_wrap=True
        )
        return parsed
    return cli.parse(argv)


if __name__ == "__main__":
    main()
