"""
Naming utilities for safe code generation.

Handles case conversion, the coding-key naming conventions, and keyword
conflicts in the target languages.
"""

import re
from typing import Dict, Optional, Set
from enum import Enum

# Suffix of nested coding-key enumerations, e.g. ``names`` -> ``NamesCodingKeys``
CODING_KEYS_SUFFIX = "CodingKeys"

# Capability tag that marks an enumeration as a coding-key enumeration
CODING_KEY_TAG = "CodingKey"

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class NamingCase(Enum):
    """Different naming case styles."""

    SNAKE_CASE = "snake"  # user_name
    CAMEL_CASE = "camel"  # userName
    PASCAL_CASE = "pascal"  # UserName
    SCREAMING_SNAKE = "screaming_snake"  # USER_NAME


def capitalize_first(name: str) -> str:
    """Uppercase the first character only (``firstName`` -> ``FirstName``)."""
    return name[:1].upper() + name[1:]


def group_enum_name(field_name: str) -> str:
    """Conventional name of the nested enumeration grouping ``field_name``."""
    return f"{capitalize_first(field_name)}{CODING_KEYS_SUFFIX}"


def to_snake_case(name: str) -> str:
    """Convert to snake_case."""
    name = name.replace("-", "_")
    name = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    name = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", name)
    name = re.sub(r"_+", "_", name.lower())
    return name.strip("_")


def to_camel_case(name: str) -> str:
    """Convert to camelCase."""
    parts = to_snake_case(name).split("_")
    return parts[0] + "".join(part.capitalize() for part in parts[1:])


def to_pascal_case(name: str) -> str:
    """Convert to PascalCase."""
    return "".join(part.capitalize() for part in to_snake_case(name).split("_") if part)


def normalize_marker(name: str) -> str:
    """Normalize a marker name so ``@DecodedValue`` matches ``decoded_value``."""
    return to_snake_case(name.strip().lstrip("@"))


def is_identifier(name: Optional[str]) -> bool:
    """Check that ``name`` is a plain ASCII identifier."""
    return bool(name) and bool(_IDENTIFIER_RE.match(name))


class NameSanitizer:
    """Handles name sanitization and case conversion."""

    def __init__(self, reserved_words: Set[str] = None, builtin_types: Set[str] = None):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Set of language reserved words
            builtin_types: Set of builtin names that might conflict
        """
        self.reserved_words = reserved_words or set()
        self.builtin_types = builtin_types or set()
        self._name_cache: Dict[str, str] = {}

    def sanitize_name(
        self, name: str, target_case: NamingCase = NamingCase.SNAKE_CASE, suffix: str = "_"
    ) -> str:
        """
        Sanitize a name for safe use in the target language.

        Args:
            name: Original name to sanitize
            target_case: Desired case style
            suffix: Suffix appended on keyword conflicts

        Returns:
            Sanitized name safe for use
        """
        cache_key = f"{name}_{target_case.value}_{suffix}"
        if cache_key in self._name_cache:
            return self._name_cache[cache_key]

        cleaned = self._clean_basic(name)
        converted = self._convert_case(cleaned, target_case)
        if converted in self.reserved_words or converted in self.builtin_types:
            converted = f"{converted}{suffix}"

        self._name_cache[cache_key] = converted
        return converted

    def is_reserved(self, name: str) -> bool:
        return name in self.reserved_words

    def _clean_basic(self, name: str) -> str:
        """Basic name cleanup - remove invalid characters."""
        cleaned = re.sub(r"[^a-zA-Z0-9_-]", "_", name)
        cleaned = cleaned.strip("_-")

        if cleaned and cleaned[0].isdigit():
            cleaned = f"_{cleaned}"

        if not cleaned:
            cleaned = "value"

        return cleaned

    def _convert_case(self, name: str, target_case: NamingCase) -> str:
        """Convert name to target case style."""
        if target_case == NamingCase.SNAKE_CASE:
            return to_snake_case(name)
        elif target_case == NamingCase.CAMEL_CASE:
            return to_camel_case(name)
        elif target_case == NamingCase.PASCAL_CASE:
            return to_pascal_case(name)
        elif target_case == NamingCase.SCREAMING_SNAKE:
            return to_snake_case(name).upper()
        return name
