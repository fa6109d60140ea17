import json
import logging

import pytest
from rich.logging import RichHandler

from argvet.exceptions import ParseError
from argvet.parser.result import ParseResultError, ParseResultHelp, ParseResultVersion
from argvet.utils import (
    exit_with_result,
    find_duplicate_values,
    get_script_name,
    setup_logging,
    uniq,
)


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_uniq_keeps_first_seen_order():
    assert uniq(["b", "a", "b", "c", "a"]) == ["b", "a", "c"]


def test_find_duplicate_values():
    assert find_duplicate_values(["a", "b", "a", "c", "b", "a"]) == ["a", "b"]
    assert find_duplicate_values([]) == []


def test_get_script_name(monkeypatch):
    monkeypatch.setattr("sys.argv", ["/usr/local/bin/tool"])
    assert get_script_name() == "tool"
    monkeypatch.setattr("sys.argv", [])
    assert get_script_name() == "program"


def test_exit_with_help(capsys):
    with pytest.raises(SystemExit) as excinfo:
        exit_with_result(ParseResultHelp(help="Usage: prog [options] [value]"))
    assert excinfo.value.code == 0
    assert "Usage: prog [options] [value]" in capsys.readouterr().out


def test_exit_with_version(capsys):
    with pytest.raises(SystemExit) as excinfo:
        exit_with_result(ParseResultVersion(help="Usage"), "3.1.4")
    assert excinfo.value.code == 0
    assert capsys.readouterr().out.strip() == "3.1.4"


def test_exit_with_error(capsys):
    with pytest.raises(SystemExit) as excinfo:
        exit_with_result(ParseResultError(error=ParseError("boom"), help="Usage: prog"))
    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith("boom\n")
    assert "Usage: prog" in captured.err


def test_setup_logging_cli_mode():
    setup_logging(mode="cli")
    handlers = logging.getLogger().handlers
    assert len(handlers) == 1
    assert isinstance(handlers[0], RichHandler)
    assert handlers[0].level == logging.WARNING


def test_setup_logging_json_mode_from_env(monkeypatch, capsys):
    monkeypatch.setenv("ARGVET_LOG_MODE", "json")
    setup_logging()
    handler = logging.getLogger().handlers[0]
    assert not isinstance(handler, RichHandler)
    logging.getLogger("argvet").warning("hello")
    record = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
    assert record["message"] == "hello"
    assert record["name"] == "argvet"


def test_setup_logging_file_handler(tmp_path):
    log_file = tmp_path / "argvet.log"
    setup_logging(mode="cli", log_filename=str(log_file), json_log_to_file=True)
    logging.getLogger("argvet").debug("to file")
    for handler in logging.getLogger().handlers:
        handler.flush()
    lines = log_file.read_text(encoding="UTF-8").splitlines()
    assert json.loads(lines[-1])["message"] == "to file"


def test_setup_logging_invalid_mode():
    with pytest.raises(ValueError):
        setup_logging(mode="xml")
