"""
Language-specific code generators.

This module contains generators for different target languages.
"""

from .python import PythonGenerator, create_python_generator
from .swift import SwiftGenerator, create_swift_generator

__all__ = [
    "PythonGenerator",
    "create_python_generator",
    "SwiftGenerator",
    "create_swift_generator",
]
