"""Tests for the command line interface."""

import io
import json

import pytest

from autocodable import __version__
from autocodable.cli import main


@pytest.fixture
def declaration_file(tmp_path):
    path = tmp_path / "temperature.json"
    path.write_text(
        json.dumps(
            [
                {
                    "type_name": "Temperature",
                    "options": {"container": "singleValue(\"degrees\")"},
                },
                {
                    "type_name": "Unit",
                    "options": {"container": "singleValueForEnum"},
                    "enums": [
                        {
                            "name": "CodingKeys",
                            "inherits": ["String", "CodingKey"],
                            "cases": ["celsius", "fahrenheit"],
                        }
                    ],
                },
            ]
        ),
        encoding="utf-8",
    )
    return path


def test_plain_python_output(declaration_file, capsys):
    assert main(["generate", "-l", "python", "--plain", str(declaration_file)]) == 0

    out = capsys.readouterr().out
    assert out.startswith("# Generated by autocodable. Do not edit.\n")
    assert "def _encode_temperature(value: Temperature, encoder: Encoder) -> None:" in out
    assert "register_codec(Unit, encode=_encode_unit, decode=_decode_unit)" in out


def test_output_file(declaration_file, tmp_path, capsys):
    output = tmp_path / "Codecs.swift"

    code = main(
        [
            "generate",
            "-l",
            "swift",
            "--access-control",
            "public",
            "-o",
            str(output),
            str(declaration_file),
        ]
    )

    assert code == 0
    written = output.read_text(encoding="utf-8")
    assert "extension Temperature {\n    public func encode(to encoder: Encoder) throws {" in written
    assert "Generated" in capsys.readouterr().out


def test_stdin_input(declaration_file, monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(declaration_file.read_text()))

    assert main(["generate", "-l", "py", "--stdin", "--plain", "--directions", "decode"]) == 0

    out = capsys.readouterr().out
    assert "def _decode_unit(decoder: Decoder) -> Unit:" in out
    assert "_encode_unit" not in out


def test_python_flags(declaration_file, capsys):
    code = main(
        [
            "generate",
            "-l",
            "python",
            "--plain",
            "--no-comments",
            "--no-register",
            "--indent-size",
            "2",
            "--type-module",
            "app.models",
            str(declaration_file),
        ]
    )

    out = capsys.readouterr().out
    assert code == 0
    assert out.startswith("from __future__ import annotations\n")
    assert "from app.models import Temperature, Unit\n" in out
    assert "register_codec" not in out
    assert "\n  container = encoder.single_value_container()\n" in out


def test_config_file(declaration_file, tmp_path, capsys):
    config = tmp_path / "codegen.json"
    config.write_text(json.dumps({"language_config": {"emit_type_hints": False}}))

    args = ["generate", "-l", "python", "--plain", "--config", str(config), str(declaration_file)]

    assert main(args) == 0

    assert "def _encode_unit(value, encoder):" in capsys.readouterr().out


def test_highlighted_output(declaration_file, capsys):
    assert main(["generate", "-l", "swift", "--verbose", str(declaration_file)]) == 0

    out = capsys.readouterr().out
    assert "singleValueContainer" in out
    assert "Generation Metadata" in out


def test_invalid_declaration(tmp_path, capsys):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"type_name": "Foo", "kind": "struct"}))

    assert main(["generate", "-l", "python", "--plain", str(path)]) == 1
    assert "Invalid declaration" in capsys.readouterr().err


def test_invalid_container_option(declaration_file, capsys):
    args = ["generate", "-l", "python", "--container", "unkeyed", str(declaration_file)]

    assert main(args) == 1
    assert "Unsupported container value" in capsys.readouterr().out


def test_missing_file(tmp_path, capsys):
    assert main(["generate", "-l", "python", str(tmp_path / "nope.json")]) == 1
    assert "Failed to load input" in capsys.readouterr().out


def test_invalid_json_on_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("{"))

    assert main(["generate", "-l", "python", "--stdin"]) == 1
    assert "Invalid JSON input" in capsys.readouterr().out


def test_unknown_language(declaration_file, capsys):
    assert main(["generate", "-l", "cobol", str(declaration_file)]) == 1
    assert "No generator registered for language: cobol" in capsys.readouterr().out


def test_languages(capsys):
    assert main(["languages"]) == 0

    out = capsys.readouterr().out
    assert "python" in out
    assert "swift" in out


def test_info(capsys):
    assert main(["info", "py"]) == 0

    out = capsys.readouterr().out
    assert "PythonGenerator" in out
    assert "runtime_module" in out


def test_info_unknown_language(capsys):
    assert main(["info", "cobol"]) == 1


def test_no_command_prints_help(capsys):
    assert main([]) == 1
    assert "usage: autocodable" in capsys.readouterr().out


def test_version(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])

    assert excinfo.value.code == 0
    assert __version__ in capsys.readouterr().out
