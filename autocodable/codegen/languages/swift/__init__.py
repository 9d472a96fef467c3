"""
Swift code generator module.

Generates the encode(to:) / init(from:) members of Codable extensions.
"""

from .generator import SwiftGenerator, create_swift_generator
from .naming import SWIFT_RESERVED_WORDS, escape_identifier
from .config import SwiftConfig, get_standalone_swift_config, get_swift_reserved_words

__all__ = [
    # Generator
    "SwiftGenerator",
    "create_swift_generator",
    # Naming
    "SWIFT_RESERVED_WORDS",
    "escape_identifier",
    # Configuration
    "SwiftConfig",
    "get_standalone_swift_config",
    "get_swift_reserved_words",
]
