"""Pytest marker auto-assignment by folder, and shared declaration fixtures."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from autocodable.codegen.core.declaration import RawDeclaration, declaration_from_dict
from autocodable.logging_config import ROOT_LOGGER_NAME, get_logger

logger = get_logger(__name__)


def _mark_tests_by_directory(
    config: pytest.Config,
    items: list[pytest.Item],
    marker: str,
) -> None:
    """Mark collected tests located under tests/<marker>/."""
    target_dir = (Path(config.rootpath) / "tests" / marker).resolve()

    for item in items:
        try:
            path = Path(str(item.fspath)).resolve()
        except OSError:
            logger.warning(
                "Could not resolve path for test item %s; skipping %s marker assignment",
                item.name,
                marker,
            )
            continue

        if path == target_dir or target_dir in path.parents:
            item.add_marker(getattr(pytest.mark, marker))


def pytest_collection_modifyitems(
    config: pytest.Config,
    items: list[pytest.Item],
) -> None:
    """Apply directory-based markers to test items."""
    _mark_tests_by_directory(config, items, "unit")
    _mark_tests_by_directory(config, items, "integration")


@pytest.fixture(autouse=True)
def _package_logs_reach_caplog():
    """Undo the CLI handler setup so caplog sees package records."""
    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    propagate, level = package_logger.propagate, package_logger.level
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)
    yield
    package_logger.propagate = propagate
    package_logger.setLevel(level)


def _coding_keys(*cases, enums=(), name="CodingKeys") -> dict:
    """Coding-key enum in declaration JSON form."""
    return {
        "name": name,
        "inherits": ["String", "CodingKey"],
        "cases": list(cases),
        "enums": list(enums),
    }


def _declaration(type_name: str, *enums, **options) -> RawDeclaration:
    """Extension declaration with the given enums and options."""
    return declaration_from_dict(
        {"type_name": type_name, "enums": list(enums), "options": options}
    )


@pytest.fixture
def coding_keys():
    """Factory of coding-key enums in declaration JSON form."""
    return _coding_keys


@pytest.fixture
def make_declaration():
    """Factory of extension declarations."""
    return _declaration


@pytest.fixture
def user_declaration() -> RawDeclaration:
    """Record with a renamed key, a nested group, a conditional and a transform."""
    return declaration_from_dict(
        {
            "type_name": "User",
            "enums": [
                _coding_keys(
                    {"name": "identifier", "raw_value": "id"},
                    "names",
                    {"name": "nickname", "attributes": ["Conditional"]},
                    {
                        "name": "avatar",
                        "raw_value": "avatar_url",
                        "attributes": [{"name": "ValueTransform", "argument": "Avatar.self"}],
                    },
                    enums=[
                        _coding_keys(
                            {"name": "first", "raw_value": "first_name"},
                            {"name": "last", "raw_value": "last_name", "attributes": ["Conditional"]},
                            name="NamesCodingKeys",
                        )
                    ],
                )
            ],
        }
    )


@pytest.fixture
def membership_declaration() -> RawDeclaration:
    """Enum tagged by raw values."""
    return _declaration(
        "Membership",
        _coding_keys(
            {"name": "premium", "raw_value": "user_premium"},
            {"name": "gold", "raw_value": "user_gold"},
        ),
        container="single_value_for_enum",
    )
