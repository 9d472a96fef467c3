"""Tests for the Python code generator."""

import pytest

from autocodable.codegen.core.config import load_config
from autocodable.codegen.core.extractor import extract_all, extract_codable_type
from autocodable.codegen.core.generator import generate_code
from autocodable.codegen.core.schema import AccessControl, CodableType, Direction
from autocodable.codegen.languages.python import PythonGenerator, create_python_generator

USER_ENCODE = '''\
def _encode_user(value: User, encoder: Encoder) -> None:
    container = encoder.container()
    names_container = container.nested_container("names")
    container.encode(value.identifier, "id")
    names_container.encode(value.first, "first_name")
    names_container.encode_if_present(value.last, "last_name")
    container.encode_if_present(value.nickname, "nickname")
    container.encode(Avatar.from_value(value.avatar), "avatar_url")'''

USER_DECODE = '''\
def _decode_user(decoder: Decoder) -> User:
    container = decoder.container()
    names_container = container.nested_container("names")
    return User(
        identifier=container.decode("id", field_type(User, "identifier")),
        first=names_container.decode("first_name", field_type(User, "first")),
        last=names_container.decode_if_present("last_name", field_type(User, "last")),
        nickname=container.decode_if_present("nickname", field_type(User, "nickname")),
        avatar=container.decode("avatar_url", Avatar).value(),
    )'''


def _generator(**language_config):
    return create_python_generator(**language_config)


class TestKeyed:
    def test_single_type_output(self, user_declaration):
        code = _generator().generate_single_type(extract_codable_type(user_declaration))

        assert code == f"{USER_ENCODE}\n\n\n{USER_DECODE}"

    def test_module_output(self, user_declaration):
        result = generate_code(_generator(), extract_all([user_declaration]))

        assert result.success
        assert result.code == (
            "# Generated by autocodable. Do not edit.\n"
            "from __future__ import annotations\n"
            "\n"
            "from autocodable.runtime import (\n"
            "    Decoder,\n"
            "    Encoder,\n"
            "    field_type,\n"
            "    register_codec,\n"
            ")\n"
            "\n"
            "\n"
            f"{USER_ENCODE}\n"
            "\n"
            "\n"
            f"{USER_DECODE}\n"
            "\n"
            "\n"
            "register_codec(User, encode=_encode_user, decode=_decode_user)\n"
        )

    def test_conditional_transform(self, make_declaration, coding_keys):
        codable_type = extract_codable_type(
            make_declaration(
                "Profile",
                coding_keys(
                    {
                        "name": "avatar",
                        "attributes": [
                            "Conditional",
                            {"name": "ValueTransform", "argument": "Avatar.self"},
                        ],
                    }
                ),
            )
        )

        code = _generator().generate_single_type(codable_type)

        assert (
            'container.encode_if_present(transform_from_value(Avatar, value.avatar), "avatar")'
            in code
        )
        assert 'avatar=transform_value(container.decode_if_present("avatar", Avatar)),' in code

    def test_direction_specific_transforms(self, make_declaration, coding_keys):
        codable_type = extract_codable_type(
            make_declaration(
                "Event",
                coding_keys(
                    {"name": "at", "attributes": [{"name": "EncodedValue", "argument": "Timestamp"}]}
                ),
            )
        )

        code = _generator().generate_single_type(codable_type)

        assert 'container.encode(Timestamp.from_value(value.at), "at")' in code
        assert 'at=container.decode("at", field_type(Event, "at")),' in code

    def test_empty_schema_decodes_to_bare_initializer(self, make_declaration, coding_keys):
        code = _generator().generate_single_type(
            extract_codable_type(make_declaration("Marker", coding_keys()))
        )

        assert code.endswith("    container = decoder.container()\n    return Marker()")

    def test_keyword_fields_use_trailing_underscore(self, make_declaration, coding_keys):
        codable_type = extract_codable_type(make_declaration("Course", coding_keys("class")))
        generator = _generator()

        code = generator.generate_single_type(codable_type)
        warnings = generator.validate_types([codable_type])

        assert 'container.encode(value.class_, "class")' in code
        assert 'class_=container.decode("class", field_type(Course, "class_")),' in code
        assert "Field Course.class is read from attribute 'class_'" in warnings


class TestSingleValue:
    def test_output(self, make_declaration):
        codable_type = extract_codable_type(
            make_declaration("Celsius", container='singleValue("degrees")')
        )

        assert _generator().generate_single_type(codable_type) == (
            "def _encode_celsius(value: Celsius, encoder: Encoder) -> None:\n"
            "    container = encoder.single_value_container()\n"
            "    container.encode(value.degrees)\n"
            "\n"
            "\n"
            "def _decode_celsius(decoder: Decoder) -> Celsius:\n"
            "    container = decoder.single_value_container()\n"
            '    return Celsius(degrees=container.decode(field_type(Celsius, "degrees")))'
        )


class TestEnum:
    def test_output(self, membership_declaration):
        code = _generator().generate_single_type(extract_codable_type(membership_declaration))

        assert code == (
            "def _encode_membership(value: Membership, encoder: Encoder) -> None:\n"
            "    container = encoder.single_value_container()\n"
            "    if value is Membership.premium:\n"
            '        container.encode("user_premium")\n'
            "    elif value is Membership.gold:\n"
            '        container.encode("user_gold")\n'
            "    else:\n"
            "        raise EncodingError.invalid_value(value, container.coding_path, "
            '"Not a case of Membership")\n'
            "\n"
            "\n"
            "def _decode_membership(decoder: Decoder) -> Membership:\n"
            "    container = decoder.single_value_container()\n"
            "    string_value = container.decode(str)\n"
            '    if string_value == "user_premium":\n'
            "        return Membership.premium\n"
            '    if string_value == "user_gold":\n'
            "        return Membership.gold\n"
            '    raise DataCorruptedError.in_container(container, f"Invalid value: {string_value}")'
        )

    def test_runtime_imports(self, membership_declaration):
        result = generate_code(_generator(), extract_all([membership_declaration]))

        assert "    DataCorruptedError,\n    Decoder,\n    Encoder,\n    EncodingError,\n" in (
            result.code
        )
        assert "field_type" not in result.code


class TestModuleOptions:
    def test_public_types_are_exported(self, user_declaration):
        types = extract_all([user_declaration], {"access_control": "public"})

        code = _generator().generate(types)

        assert '__all__ = [\n    "decode_user",\n    "encode_user",\n]' in code
        assert "def encode_user(value: User, encoder: Encoder) -> None:" in code
        assert "register_codec(User, encode=encode_user, decode=decode_user)" in code

    def test_internal_types_are_not_exported(self, user_declaration):
        assert "__all__" not in _generator().generate(extract_all([user_declaration]))

    def test_type_module_import(self, user_declaration, membership_declaration):
        code = _generator(type_module="app.models").generate(
            extract_all([user_declaration, membership_declaration])
        )

        assert "from app.models import Avatar, Membership, User\n" in code

    def test_runtime_module(self, user_declaration):
        code = _generator(runtime_module="vendored.codable").generate(
            extract_all([user_declaration])
        )

        assert "from vendored.codable import (\n" in code

    def test_one_direction(self, user_declaration):
        types = extract_all([user_declaration], {"directions": "decode"})

        code = _generator().generate(types)

        assert "_encode_user" not in code
        assert "register_codec(User, decode=_decode_user)" in code
        assert "    Encoder,\n" not in code

    def test_without_registration(self, user_declaration):
        code = _generator(register_codecs=False).generate(extract_all([user_declaration]))

        assert "register_codec" not in code

    def test_without_type_hints(self, user_declaration):
        code = _generator(emit_type_hints=False).generate(extract_all([user_declaration]))

        assert "from __future__" not in code
        assert "def _encode_user(value, encoder):" in code
        assert "def _decode_user(decoder):" in code
        assert "    Encoder,\n" not in code

    def test_docstrings(self, user_declaration):
        code = _generator(emit_docstrings=True).generate_single_type(
            extract_codable_type(user_declaration)
        )

        assert '    """Encode User into a keyed container."""\n' in code
        assert '    """Decode User from a keyed container."""\n' in code

    def test_no_header(self, user_declaration):
        config = load_config("python", custom_config={"add_comments": False})

        code = PythonGenerator(config).generate(extract_all([user_declaration]))

        assert code.startswith("from __future__ import annotations\n")

    def test_indent_size(self, user_declaration):
        config = load_config("python", custom_config={"indent_size": 2})

        result = generate_code(PythonGenerator(config), extract_all([user_declaration]))

        assert '\n  container.encode(value.identifier, "id")\n' in result.code
        assert '\n    identifier=container.decode("id", field_type(User, "identifier")),\n' in (
            result.code
        )

    def test_output_is_deterministic(self, user_declaration, membership_declaration):
        types = extract_all([user_declaration, membership_declaration])

        assert _generator().generate(types) == _generator().generate(types)


def test_function_name_collisions_are_reported(make_declaration, coding_keys):
    types = extract_all(
        [
            make_declaration("UserProfile", coding_keys("a")),
            make_declaration("User_Profile", coding_keys("a")),
        ]
    )

    warnings = _generator().validate_types(types)

    assert any("both generate function '_encode_user_profile'" in w for w in warnings)


def test_function_name():
    generator = _generator()
    public = CodableType(type_name="HTTPResponse", access_control=AccessControl.PUBLIC)

    assert generator.function_name(public, Direction.DECODE) == "decode_http_response"


def test_language_properties():
    generator = _generator()

    assert generator.language_name == "python"
    assert generator.file_extension == ".py"
    assert generator.template_exists("keyed_encode.py.j2")


@pytest.mark.parametrize("language_config", [{}, {"emit_type_hints": False}])
def test_generated_module_compiles(user_declaration, membership_declaration, language_config):
    code = _generator(**language_config).generate(
        extract_all([user_declaration, membership_declaration])
    )

    compile(code, "<generated>", "exec")
