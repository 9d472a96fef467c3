"""
Python-specific naming utilities and sanitization.

Handles Python reserved words and the names of generated codec functions.
"""

from ...core.naming import NameSanitizer, NamingCase
from ...core.schema import Direction


# Python reserved keywords
PYTHON_RESERVED_WORDS = {
    "False",
    "None",
    "True",
    "and",
    "as",
    "assert",
    "async",
    "await",
    "break",
    "class",
    "continue",
    "def",
    "del",
    "elif",
    "else",
    "except",
    "finally",
    "for",
    "from",
    "global",
    "if",
    "import",
    "in",
    "is",
    "lambda",
    "nonlocal",
    "not",
    "or",
    "pass",
    "raise",
    "return",
    "try",
    "while",
    "with",
    "yield",
}


def create_python_sanitizer() -> NameSanitizer:
    """Create a name sanitizer configured for Python."""
    return NameSanitizer(PYTHON_RESERVED_WORDS)


def attribute_name(local_name: str) -> str:
    """Attribute (and initializer keyword) a local field name is read from.

    Keywords take a trailing underscore, the usual spelling of such
    attributes (``class`` -> ``class_``). Other names are kept verbatim.
    """
    if local_name in PYTHON_RESERVED_WORDS:
        return f"{local_name}_"
    return local_name


def codec_function_name(
    sanitizer: NameSanitizer, type_name: str, direction: Direction, is_public: bool
) -> str:
    """
    Name of a generated codec function.

    Args:
        sanitizer: Python name sanitizer
        type_name: Name of the codable type
        direction: Encode or decode
        is_public: Public functions have no leading underscore

    Returns:
        e.g. ``encode_user_profile`` or ``_decode_user_profile``
    """
    base = sanitizer.sanitize_name(type_name, NamingCase.SNAKE_CASE)
    name = f"{direction.value}_{base}"
    return name if is_public else f"_{name}"
