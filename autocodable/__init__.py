"""
autocodable: declarative encode/decode code generation.

Generates encoder and decoder routines for record and enum types from
their coding-key declarations, plus the runtime container library the
generated Python code runs against.
"""

__version__ = "0.1.0"

from .codegen import generate_from_declarations, quick_generate
from .utils import load_declarations

__all__ = ["__version__", "generate_from_declarations", "load_declarations", "quick_generate"]
