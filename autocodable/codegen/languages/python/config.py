"""
Python-specific configuration.

Controls where generated modules import the runtime and the user types
from, and whether they register themselves with the runtime.
"""

from typing import Set

from .naming import PYTHON_RESERVED_WORDS

DEFAULT_RUNTIME_MODULE = "autocodable.runtime"


class PythonConfig:
    """Python-specific configuration."""

    def __init__(self, **kwargs):
        """Initialize Python configuration."""
        # Module providing Encoder, Decoder and the coding errors
        self.runtime_module = kwargs.get("runtime_module") or DEFAULT_RUNTIME_MODULE

        # Module the codable and adapter types are imported from; when unset
        # the generated module expects them to be in scope already
        self.type_module = kwargs.get("type_module") or None

        # Emit register_codec(...) calls at the end of the module
        self.register_codecs = bool(kwargs.get("register_codecs", True))

        # Annotate generated functions
        self.emit_type_hints = bool(kwargs.get("emit_type_hints", True))

        # One-line docstring on every generated function
        self.emit_docstrings = bool(kwargs.get("emit_docstrings", False))


def get_python_reserved_words() -> Set[str]:
    """Get Python reserved words."""
    return PYTHON_RESERVED_WORDS


def get_default_python_config() -> PythonConfig:
    """Configuration used when nothing is overridden."""
    return PythonConfig()


def get_standalone_python_config(type_module: str) -> PythonConfig:
    """Configuration for a module that imports its types from ``type_module``."""
    return PythonConfig(type_module=type_module, register_codecs=True)
