from datetime import datetime
from enum import Enum
from typing import Annotated, Literal, Optional, Union

import pytest
from pydantic import Field, ValidationError

from argvet.exceptions import DeclarationError, ParseError
from argvet.parser.declaration import Option, Positional
from argvet.parser.field import (
    ArrayType,
    BooleanType,
    EnumType,
    FieldKind,
    NumberType,
    StringType,
)
from argvet.parser.schema import (
    SchemaValidator,
    resolve_annotation,
    resolve_fields,
    resolve_option,
    resolve_positional,
)


class Color(Enum):
    RED = "red"
    BLUE = "blue"


class Level(Enum):
    LOW = 1
    HIGH = 2


@pytest.mark.parametrize(
    "annotation, expected_type, required",
    [
        (str, StringType(), True),
        (int, NumberType(integer=True), True),
        (float, NumberType(), True),
        (bool, BooleanType(), True),
        (Literal["a", "b"], EnumType(("a", "b")), True),
        (Color, EnumType(("red", "blue")), True),
        (list[str], ArrayType(StringType()), True),
        (list[int], ArrayType(NumberType(integer=True)), True),
        (str | None, StringType(), False),
        (Optional[int], NumberType(integer=True), False),
        (Union[int, float], NumberType(), True),
        (Literal["a"] | Literal["b"], StringType(), True),
        (Annotated[int, Field(ge=0)], NumberType(integer=True), True),
        (Annotated[str | None, Field(description="x")], StringType(), False),
    ],
)
def test_resolve_annotation(annotation, expected_type, required):
    field_type, is_required, _, _ = resolve_annotation(annotation)
    assert field_type == expected_type
    assert is_required is required


@pytest.mark.parametrize(
    "annotation",
    [
        datetime,
        dict,
        list[bool],
        list,
        Literal[1, 2],
        Level,
        Union[int, str],
        Union[list[str], str],
    ],
)
def test_resolve_annotation_unsupported(annotation):
    with pytest.raises(DeclarationError):
        resolve_annotation(annotation)


def test_resolve_annotation_reads_field_metadata():
    _, required, default, description = resolve_annotation(
        Annotated[int, Field(default=3, description="How many")]
    )
    assert required is False
    assert default == 3
    assert description == "How many"


def test_resolve_annotation_explicit_values_win():
    _, _, default, description = resolve_annotation(
        Annotated[int, Field(default=3, description="How many")], 5, "Count"
    )
    assert default == 5
    assert description == "Count"


def test_resolve_annotation_default_factory():
    _, required, default, _ = resolve_annotation(
        Annotated[list[str], Field(default_factory=lambda: ["x"])]
    )
    assert required is False
    assert default == ["x"]


@pytest.mark.parametrize("default", [{"a": 1}, [1, "a"], [True], object()])
def test_resolve_annotation_unsupported_default(default):
    with pytest.raises(DeclarationError) as excinfo:
        resolve_annotation(str, default)
    assert "Unsupported default value" in str(excinfo.value)


def test_resolve_annotation_enum_default_is_normalized():
    _, _, default, _ = resolve_annotation(Color, Color.BLUE)
    assert default == "blue"


def test_resolve_option():
    field = resolve_option(
        "mode", Option(Literal["fast", "slow"], alias="m", arg_name="MODE", default="fast")
    )
    assert field.name == "mode"
    assert field.kind is FieldKind.STRING
    assert field.alias == "m"
    assert field.arg_name == "MODE"
    assert field.enum_values == ("fast", "slow")
    assert field.required is False
    assert field.default == "fast"
    assert field.needs_value


def test_resolve_option_array_can_be_disabled():
    assert resolve_option("tags", Option(list[str])).is_array
    with pytest.raises(DeclarationError) as excinfo:
        resolve_option("tags", Option(list[str]), allow_array_options=False)
    assert str(excinfo.value) == "Unsupported type (options): list"


def test_resolved_fields_mark_integer_numbers():
    assert resolve_option("count", Option(int)).integer
    assert not resolve_option("ratio", Option(float)).integer
    assert resolve_positional(Positional("ids", list[int])).integer


def test_resolve_positional_rejects_boolean():
    with pytest.raises(DeclarationError) as excinfo:
        resolve_positional(Positional("flag", bool))
    assert str(excinfo.value) == "Unsupported type (positional arguments): bool"


def test_resolve_fields_array_positional_must_be_last():
    with pytest.raises(DeclarationError):
        resolve_fields({}, [Positional("files", list[str]), Positional("dest", str)])
    _, positional_fields = resolve_fields(
        {}, [Positional("dest", str), Positional("files", list[str])]
    )
    assert positional_fields[-1].is_array


def test_schema_validator_converts_values():
    validator = SchemaValidator(
        {"count": Option(int), "color": Option(Color), "ratio": Option(float | None)},
        [Positional("paths", list[str])],
    )
    parsed = validator.validate(
        {"count": 3.0, "color": "red", "ratio": None, "paths": ["a", "b"]}
    )
    assert parsed == {"count": 3, "color": Color.RED, "ratio": None, "paths": ["a", "b"]}
    assert isinstance(parsed["count"], int)


def test_schema_validator_reports_first_error():
    validator = SchemaValidator({"mode": Option(Literal["a", "b"])}, [])
    with pytest.raises(ParseError) as excinfo:
        validator.validate({"mode": "c"})
    assert excinfo.value.message == "Input should be 'a' or 'b': mode"
    assert isinstance(excinfo.value.nested_error, ValidationError)


def test_schema_validator_reports_array_location():
    validator = SchemaValidator({}, [Positional("pos", list[int])])
    with pytest.raises(ParseError) as excinfo:
        validator.validate({"pos": [1.5]})
    assert excinfo.value.message.endswith(": pos0")


def test_schema_validator_applies_field_constraints():
    validator = SchemaValidator({"count": Option(Annotated[int, Field(ge=1)])}, [])
    with pytest.raises(ParseError) as excinfo:
        validator.validate({"count": 0.0})
    assert excinfo.value.message == "Input should be greater than or equal to 1: count"
