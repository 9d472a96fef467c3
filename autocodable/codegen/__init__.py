"""
autocodable code generation module.

Generates encode/decode routines in various languages from raw declarations.
"""

from typing import Any, Dict, Mapping, Optional, Sequence, Union

from .registry import GeneratorRegistry, get_generator, get_registry, list_supported_languages
from .core.generator import CodeGenerator, GeneratorError, GenerationResult, generate_code
from .core.declaration import DeclarationError, RawDeclaration, declarations_from_data
from .core.extractor import extract_all
from .core.schema import CodableType
from .core.strategy import SchemaError
from .core.config import GeneratorConfig, ConfigManager, load_config


# Convenience functions
def generate_from_declarations(
    declarations: Union[Sequence[Union[RawDeclaration, Mapping[str, Any]]], Mapping[str, Any]],
    language: str = "python",
    config: Optional[Union[GeneratorConfig, Dict[str, Any], str]] = None,
    options: Optional[Mapping[str, Any]] = None,
) -> GenerationResult:
    """
    Generate code from raw declarations.

    Args:
        declarations: RawDeclaration objects, or parsed JSON in any shape
            accepted by ``declarations_from_data``
        language: Target language name or alias
        config: Generator configuration object, dict or path
        options: Coding options applied over each declaration's own options

    Returns:
        GenerationResult with generated code
    """
    try:
        if isinstance(declarations, Mapping) or not all(
            isinstance(d, RawDeclaration) for d in declarations
        ):
            declarations = declarations_from_data(
                declarations if isinstance(declarations, Mapping) else list(declarations)
            )
        types = extract_all(list(declarations), options)
    except (DeclarationError, SchemaError) as e:
        return GenerationResult.error(str(e), exception=e)

    generator = get_generator(language, config)
    return generate_code(generator, types)


def quick_generate(data: Any, language: str = "python", **options) -> str:
    """
    Quick code generation from declaration JSON.

    Args:
        data: Declaration JSON (dict/list/str)
        language: Target language
        **options: Coding options (container, access_control, directions)

    Returns:
        Generated code string

    Raises:
        GeneratorError: If extraction or generation fails
    """
    if isinstance(data, str):
        import json

        data = json.loads(data)

    result = generate_from_declarations(data, language, options=options or None)

    if result.success:
        return result.code
    raise GeneratorError(f"Code generation failed: {result.error_message}") from result.exception


# Export main interfaces
__all__ = [
    "GeneratorRegistry",
    "CodeGenerator",
    "CodableType",
    "GenerationResult",
    "GeneratorConfig",
    "GeneratorError",
    "ConfigManager",
    "generate_code",
    "generate_from_declarations",
    "quick_generate",
    "get_generator",
    "get_registry",
    "list_supported_languages",
    "load_config",
]
