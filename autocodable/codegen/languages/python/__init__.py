"""
Python code generator module.

Generates encode/decode functions that run against autocodable.runtime.
"""

from .generator import PythonGenerator, create_python_generator
from .naming import (
    PYTHON_RESERVED_WORDS,
    attribute_name,
    codec_function_name,
    create_python_sanitizer,
)
from .config import (
    PythonConfig,
    get_default_python_config,
    get_python_reserved_words,
    get_standalone_python_config,
)

__all__ = [
    # Generator
    "PythonGenerator",
    "create_python_generator",
    # Naming
    "PYTHON_RESERVED_WORDS",
    "attribute_name",
    "codec_function_name",
    "create_python_sanitizer",
    # Configuration
    "PythonConfig",
    "get_default_python_config",
    "get_python_reserved_words",
    "get_standalone_python_config",
]
