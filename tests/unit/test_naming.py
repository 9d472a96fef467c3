"""Tests for naming helpers."""

import pytest

from autocodable.codegen.core.naming import (
    NameSanitizer,
    NamingCase,
    group_enum_name,
    is_identifier,
    normalize_marker,
    to_camel_case,
    to_pascal_case,
    to_snake_case,
)
from autocodable.codegen.core.schema import Direction
from autocodable.codegen.languages.python.naming import (
    attribute_name,
    codec_function_name,
    create_python_sanitizer,
)
from autocodable.codegen.languages.swift.naming import escape_identifier


@pytest.mark.parametrize(
    "name, expected",
    [
        ("userName", "user_name"),
        ("UserProfile", "user_profile"),
        ("HTTPResponse", "http_response"),
        ("user-name", "user_name"),
        ("already_snake", "already_snake"),
    ],
)
def test_to_snake_case(name, expected):
    assert to_snake_case(name) == expected


def test_case_conversions():
    assert to_camel_case("user_name") == "userName"
    assert to_pascal_case("user_name") == "UserName"


def test_group_enum_name():
    assert group_enum_name("qux") == "QuxCodingKeys"
    assert group_enum_name("firstName") == "FirstNameCodingKeys"


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Conditional", "conditional"),
        ("@ValueTransform", "value_transform"),
        ("decoded_value", "decoded_value"),
        ("accessControl", "access_control"),
    ],
)
def test_normalize_marker(name, expected):
    assert normalize_marker(name) == expected


def test_is_identifier():
    assert is_identifier("bar_1")
    assert not is_identifier("1bar")
    assert not is_identifier("")
    assert not is_identifier(None)


def test_sanitizer_suffixes_reserved_words():
    sanitizer = NameSanitizer({"class"})

    assert sanitizer.sanitize_name("Class") == "class_"
    assert sanitizer.sanitize_name("user name", NamingCase.PASCAL_CASE) == "UserName"


def test_python_codec_function_names():
    sanitizer = create_python_sanitizer()

    assert codec_function_name(sanitizer, "UserProfile", Direction.ENCODE, True) == (
        "encode_user_profile"
    )
    assert codec_function_name(sanitizer, "UserProfile", Direction.DECODE, False) == (
        "_decode_user_profile"
    )


def test_python_attribute_name():
    assert attribute_name("class") == "class_"
    assert attribute_name("firstName") == "firstName"


def test_swift_escape_identifier():
    assert escape_identifier("default") == "`default`"
    assert escape_identifier("bar") == "bar"
