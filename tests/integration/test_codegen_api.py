"""End-to-end tests of the public generation API."""

import json

import pytest

from autocodable import generate_from_declarations, load_declarations, quick_generate
from autocodable.codegen import GeneratorError
from autocodable.codegen.core.extractor import OnlyApplicableToExtensionError
from autocodable.codegen.registry import RegistryError

USER_JSON = {
    "declarations": [
        {
            "type_name": "User",
            "options": {"accessControl": "public"},
            "enums": [
                {
                    "name": "CodingKeys",
                    "inherits": ["String", "CodingKey"],
                    "cases": [
                        {"name": "identifier", "raw_value": "id"},
                        "names",
                        {"name": "nickname", "attributes": ["Conditional"]},
                    ],
                    "enums": [
                        {
                            "name": "NamesCodingKeys",
                            "inherits": ["String", "CodingKey"],
                            "cases": [{"name": "first", "raw_value": "first_name"}],
                        }
                    ],
                }
            ],
        }
    ]
}


@pytest.mark.parametrize("language", ["python", "py", "swift"])
def test_generate_from_json(language):
    result = generate_from_declarations(USER_JSON, language)

    assert result.success
    assert result.metadata["types"] == ["User"]
    assert result.metadata["has_groups"]


def test_same_input_same_output():
    first = generate_from_declarations(USER_JSON, "swift")
    second = generate_from_declarations(json.loads(json.dumps(USER_JSON)), "swift")

    assert first.code == second.code


def test_swift_output():
    code = generate_from_declarations(USER_JSON, "swift").code

    assert "public func encode(to encoder: Encoder) throws {" in code
    assert "        var namesContainer = container.nestedContainer(" in code
    assert "            identifier: container.decode(for: .identifier)," in code


def test_options_override_declaration_options():
    code = generate_from_declarations(
        USER_JSON, "python", options={"access_control": "internal", "directions": "encode"}
    ).code

    assert "def _encode_user(" in code
    assert "decode_user" not in code


def test_declaration_errors_become_failed_results():
    result = generate_from_declarations({"type_name": "Foo", "kind": "class"}, "python")

    assert not result.success
    assert isinstance(result.exception, OnlyApplicableToExtensionError)

    malformed = generate_from_declarations([{"enums": []}], "python")
    assert not malformed.success


def test_unknown_language():
    with pytest.raises(RegistryError):
        generate_from_declarations(USER_JSON, "cobol")


def test_quick_generate():
    code = quick_generate(json.dumps(USER_JSON), "python", directions="decode")

    assert "def decode_user(decoder: Decoder) -> User:" in code
    assert "encode_user" not in code


def test_quick_generate_raises():
    with pytest.raises(GeneratorError, match="Code generation failed"):
        quick_generate({"type_name": "Foo"}, "python")


def test_load_then_generate(tmp_path):
    path = tmp_path / "user.json"
    path.write_text(json.dumps(USER_JSON), encoding="utf-8")

    _, declarations = load_declarations(file_path=path)
    result = generate_from_declarations(declarations, "python")

    assert result.success
    assert 'names_container = container.nested_container("names")' in result.code
