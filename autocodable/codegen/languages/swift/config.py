"""
Swift-specific configuration.

The defaults reproduce the members the ``@AutoEncodable`` and
``@AutoDecodable`` attributes expand to.
"""

from typing import List

from .naming import SWIFT_RESERVED_WORDS


class SwiftConfig:
    """Swift-specific configuration."""

    def __init__(self, **kwargs):
        """Initialize Swift configuration."""
        # Modules imported at the top of the generated file
        self.imports: List[str] = list(kwargs.get("imports") or [])

        # Wrap the members of each type in ``extension <Type> { ... }``
        self.wrap_in_extension = bool(kwargs.get("wrap_in_extension", True))

        # Emit the KeyedDecodingContainer.decode(for:) helper the decoders call
        self.emit_decode_helper = bool(kwargs.get("emit_decode_helper", False))


def get_swift_reserved_words() -> set:
    """Get Swift reserved words."""
    return SWIFT_RESERVED_WORDS


def get_standalone_swift_config() -> SwiftConfig:
    """Configuration for a file that compiles without the AutoCodable module."""
    return SwiftConfig(imports=["Foundation"], emit_decode_helper=True)
