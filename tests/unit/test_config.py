"""Tests for configuration loading."""

import json

import pytest

from autocodable.codegen.core.config import (
    ConfigError,
    ConfigManager,
    GeneratorConfig,
    load_config,
)
from autocodable.codegen.languages.python.config import (
    PythonConfig,
    get_default_python_config,
    get_python_reserved_words,
    get_standalone_python_config,
)
from autocodable.codegen.languages.swift.config import (
    SwiftConfig,
    get_standalone_swift_config,
    get_swift_reserved_words,
)


def test_python_defaults():
    config = load_config("python")

    assert config.indent_size == 4
    assert config.add_comments
    assert config.language_config["runtime_module"] == "autocodable.runtime"
    assert config.language_config["register_codecs"] is True


def test_custom_language_config_merges_key_by_key():
    config = load_config("python", custom_config={"language_config": {"type_module": "app.models"}})

    assert config.language_config["type_module"] == "app.models"
    assert config.language_config["runtime_module"] == "autocodable.runtime"


def test_unknown_top_level_keys_become_language_settings():
    config = load_config("swift", custom_config={"wrap_in_extension": False, "indent_size": 2})

    assert config.indent_size == 2
    assert config.language_config["wrap_in_extension"] is False


def test_defaults_are_not_shared_between_loads():
    first = load_config("python")
    first.language_config["type_module"] = "changed"

    assert load_config("python").language_config["type_module"] is None


def test_config_file_then_custom_config(tmp_path):
    path = tmp_path / "codegen.json"
    path.write_text(json.dumps({"indent_size": 2, "language_config": {"type_module": "a"}}))

    config = load_config(
        "python", custom_config={"language_config": {"type_module": "b"}}, config_file=path
    )

    assert config.indent_size == 2
    assert config.language_config["type_module"] == "b"


@pytest.mark.parametrize(
    "name, content",
    [
        ("missing.json", None),
        ("codegen.yaml", "{}"),
        ("broken.json", "{not json"),
        ("list.json", "[1, 2]"),
    ],
)
def test_bad_config_files(tmp_path, name, content):
    path = tmp_path / name
    if content is not None:
        path.write_text(content)

    with pytest.raises(ConfigError):
        load_config("python", config_file=path)


def test_save_config_round_trip(tmp_path):
    manager = ConfigManager()
    path = tmp_path / "saved.json"

    manager.save_config(GeneratorConfig(indent_size=2), path)

    assert json.loads(path.read_text())["indent_size"] == 2


def test_validate_config():
    manager = ConfigManager()
    config = GeneratorConfig(indent_size=0, language_config={"type_module": "my-app.models"})

    warnings = manager.validate_config(config, "python")

    assert "Invalid indent_size: 0" in warnings
    assert any("type_module" in w for w in warnings)


def test_language_configs():
    python = PythonConfig(runtime_module=None, register_codecs=False)
    assert python.runtime_module == "autocodable.runtime"
    assert python.register_codecs is False
    assert get_standalone_python_config("app.models").type_module == "app.models"

    swift = SwiftConfig()
    assert swift.imports == []
    assert swift.wrap_in_extension
    assert not swift.emit_decode_helper
    assert get_standalone_swift_config().imports == ["Foundation"]


def test_reserved_words():
    assert "lambda" in get_python_reserved_words()
    assert "extension" in get_swift_reserved_words()
    assert get_default_python_config().type_module is None
