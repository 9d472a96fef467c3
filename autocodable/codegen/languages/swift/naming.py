"""
Swift-specific naming utilities.

Handles identifiers that collide with Swift keywords.
"""

# Keywords that cannot be used as a bare expression
SWIFT_RESERVED_WORDS = {
    "Any",
    "Self",
    "as",
    "associatedtype",
    "break",
    "case",
    "catch",
    "class",
    "continue",
    "default",
    "defer",
    "deinit",
    "do",
    "else",
    "enum",
    "extension",
    "fallthrough",
    "false",
    "fileprivate",
    "for",
    "func",
    "guard",
    "if",
    "import",
    "in",
    "init",
    "inout",
    "internal",
    "is",
    "let",
    "nil",
    "operator",
    "private",
    "protocol",
    "public",
    "repeat",
    "rethrows",
    "return",
    "self",
    "static",
    "struct",
    "subscript",
    "super",
    "switch",
    "throw",
    "throws",
    "true",
    "try",
    "typealias",
    "var",
    "where",
    "while",
}


def escape_identifier(name: str) -> str:
    """Backtick-quote ``name`` when it is a Swift keyword."""
    if name in SWIFT_RESERVED_WORDS:
        return f"`{name}`"
    return name
