import pytest

from argvet.exceptions import DeclarationError
from argvet.parser.declaration import (
    Option,
    Positional,
    validate_command_name,
    validate_declarations,
)


def test_valid_declarations_pass():
    validate_declarations(
        {"opt-1": Option(str, alias="o"), "_flag": Option(bool, alias="f1")},
        [Positional("pos_1", str)],
    )


@pytest.mark.parametrize("name", ["-opt", "op t", "", "a" * 257, "über"])
def test_invalid_option_name(name):
    with pytest.raises(DeclarationError) as excinfo:
        validate_declarations({name: Option(str)}, [])
    assert str(excinfo.value).startswith("Invalid option name.")


@pytest.mark.parametrize("alias", ["a-b", "", "abcdefghijk", "-a"])
def test_invalid_option_alias(alias):
    with pytest.raises(DeclarationError) as excinfo:
        validate_declarations({"opt": Option(str, alias=alias)}, [])
    assert str(excinfo.value).startswith("Invalid option alias.")


def test_invalid_positional_name():
    with pytest.raises(DeclarationError) as excinfo:
        validate_declarations({}, [Positional("bad name", str)])
    assert str(excinfo.value).startswith("Invalid positional argument name.")


def test_duplicated_alias():
    with pytest.raises(DeclarationError) as excinfo:
        validate_declarations(
            {"one": Option(str, alias="x"), "two": Option(str, alias="x")}, []
        )
    assert str(excinfo.value) == "Duplicated option alias: x"


def test_duplicated_positional_name():
    with pytest.raises(DeclarationError) as excinfo:
        validate_declarations({}, [Positional("pos", str), Positional("pos", int)])
    assert str(excinfo.value) == "Duplicated positional argument name: pos"


def test_option_and_positional_name_collision():
    with pytest.raises(DeclarationError) as excinfo:
        validate_declarations({"name": Option(str)}, [Positional("name", str)])
    assert (
        str(excinfo.value)
        == "Duplicated option name with positional argument name: name"
    )


def test_declarations_must_use_records():
    with pytest.raises(DeclarationError):
        validate_declarations({"opt": str}, [])
    with pytest.raises(DeclarationError):
        validate_declarations({}, [("pos", str)])


def test_command_name():
    validate_command_name("build-all")
    with pytest.raises(DeclarationError):
        validate_command_name("--build")
