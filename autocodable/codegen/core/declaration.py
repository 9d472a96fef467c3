"""
Raw declaration model.

A raw declaration is the typed, JSON-friendly description of the block a
codec is generated for: the augmented type, its nested enumerations, their
cases and the markers attached to each case. It is what a host front end
hands to the extractor.

Example::

    {
        "type_name": "User",
        "kind": "extension",
        "options": {"container": "keyed"},
        "enums": [{
            "name": "CodingKeys",
            "inherits": ["String", "CodingKey"],
            "cases": [
                {"name": "identifier", "raw_value": "id"},
                {"name": "names"},
                {"name": "nickname", "attributes": ["Conditional"]},
                {"name": "avatarUrl", "raw_value": "avatar_url",
                 "attributes": [{"name": "DecodedValue", "argument": "Avatar"}]}
            ],
            "enums": [{
                "name": "NamesCodingKeys",
                "inherits": ["String", "CodingKey"],
                "cases": [{"name": "firstName", "raw_value": "first_name"}]
            }]
        }]
    }
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .naming import CODING_KEY_TAG, normalize_marker


class DeclarationError(ValueError):
    """Raised when a raw declaration is malformed."""

    pass


@dataclass(frozen=True)
class RawAttribute:
    """A marker attached to an enum case, with an optional type argument."""

    name: str
    argument: Optional[str] = None

    @property
    def marker(self) -> str:
        return normalize_marker(self.name)


@dataclass(frozen=True)
class RawCase:
    """One case of a coding-key enumeration."""

    name: str
    raw_value: Optional[str] = None
    attributes: Tuple[RawAttribute, ...] = ()

    def attribute(self, marker: str) -> Optional[RawAttribute]:
        """First attribute whose normalized name is ``marker``."""
        for attribute in self.attributes:
            if attribute.marker == marker:
                return attribute
        return None

    def has_attribute(self, marker: str) -> bool:
        return self.attribute(marker) is not None


@dataclass(frozen=True)
class RawEnum:
    """An enumeration nested in a declaration."""

    name: str
    inherits: Tuple[str, ...] = ()
    cases: Tuple[RawCase, ...] = ()
    enums: Tuple["RawEnum", ...] = ()

    @property
    def is_coding_keys(self) -> bool:
        return CODING_KEY_TAG in self.inherits

    def find_enum(self, name: Optional[str] = None) -> Optional["RawEnum"]:
        """First nested coding-key enum, optionally restricted to ``name``."""
        return find_coding_keys(self.enums, name)


@dataclass(frozen=True)
class RawDeclaration:
    """The declaration block a codec is generated for."""

    type_name: str
    kind: str = "extension"
    type_kind: str = "struct"
    enums: Tuple[RawEnum, ...] = ()
    options: Mapping[str, Any] = field(default_factory=dict)

    @property
    def is_extension(self) -> bool:
        return self.kind == "extension"

    def coding_keys(self) -> Optional[RawEnum]:
        """The enumeration tagged as the coding-key type, if any."""
        return find_coding_keys(self.enums)


def find_coding_keys(
    enums: Tuple[RawEnum, ...], name: Optional[str] = None
) -> Optional[RawEnum]:
    for enum in enums:
        if enum.is_coding_keys and (name is None or enum.name == name):
            return enum
    return None


def _require_str(data: Mapping[str, Any], key: str, where: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value:
        raise DeclarationError(f"{where}: '{key}' must be a non-empty string")
    return value


def _optional_str(data: Mapping[str, Any], key: str, where: str) -> Optional[str]:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise DeclarationError(f"{where}: '{key}' must be a string")
    return value


def _list_of(data: Mapping[str, Any], key: str, where: str) -> List[Any]:
    value = data.get(key, [])
    if not isinstance(value, list):
        raise DeclarationError(f"{where}: '{key}' must be a list")
    return value


def attribute_from_value(value: Any, where: str) -> RawAttribute:
    """Build an attribute from ``"Conditional"`` or ``{"name": .., "argument": ..}``."""
    if isinstance(value, str):
        if not value.strip():
            raise DeclarationError(f"{where}: empty attribute name")
        return RawAttribute(value.strip())
    if isinstance(value, Mapping):
        return RawAttribute(
            name=_require_str(value, "name", where),
            argument=_optional_str(value, "argument", where),
        )
    raise DeclarationError(f"{where}: attribute must be a string or an object")


def case_from_value(value: Any, where: str) -> RawCase:
    if isinstance(value, str):
        return RawCase(name=value)
    if not isinstance(value, Mapping):
        raise DeclarationError(f"{where}: case must be a string or an object")

    name = _require_str(value, "name", where)
    where = f"{where} '{name}'"
    return RawCase(
        name=name,
        raw_value=_optional_str(value, "raw_value", where),
        attributes=tuple(
            attribute_from_value(item, where)
            for item in _list_of(value, "attributes", where)
        ),
    )


def enum_from_dict(data: Any, where: str = "enum") -> RawEnum:
    if not isinstance(data, Mapping):
        raise DeclarationError(f"{where}: enum must be an object")

    name = _require_str(data, "name", where)
    where = f"enum '{name}'"
    inherits = _list_of(data, "inherits", where)
    if not all(isinstance(item, str) for item in inherits):
        raise DeclarationError(f"{where}: 'inherits' must list type names")

    return RawEnum(
        name=name,
        inherits=tuple(inherits),
        cases=tuple(
            case_from_value(item, f"{where} case")
            for item in _list_of(data, "cases", where)
        ),
        enums=tuple(enum_from_dict(item, where) for item in _list_of(data, "enums", where)),
    )


def declaration_from_dict(data: Any) -> RawDeclaration:
    """
    Build a raw declaration from parsed JSON.

    Args:
        data: Mapping in the shape shown in the module docstring

    Returns:
        RawDeclaration

    Raises:
        DeclarationError: If a required entry is missing or has the wrong type
    """
    if not isinstance(data, Mapping):
        raise DeclarationError("declaration must be an object")

    type_name = _require_str(data, "type_name", "declaration")
    where = f"declaration '{type_name}'"
    options = data.get("options") or {}
    if not isinstance(options, Mapping):
        raise DeclarationError(f"{where}: 'options' must be an object")

    return RawDeclaration(
        type_name=type_name,
        kind=_optional_str(data, "kind", where) or "extension",
        type_kind=_optional_str(data, "type_kind", where) or "struct",
        enums=tuple(enum_from_dict(item, where) for item in _list_of(data, "enums", where)),
        options=dict(options),
    )


def declarations_from_data(data: Any) -> List[RawDeclaration]:
    """Accept one declaration, a list, or ``{"declarations": [...]}``."""
    if isinstance(data, Mapping) and "declarations" in data:
        data = data["declarations"]
    if isinstance(data, list):
        return [declaration_from_dict(item) for item in data]
    return [declaration_from_dict(data)]
