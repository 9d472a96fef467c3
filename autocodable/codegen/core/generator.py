"""
Base generator interface for all code generation targets.

Defines the contract that all language generators must implement.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Any, Optional, Sequence
from pathlib import Path

from .config import GeneratorConfig
from .plan import CodecPlan, build_codec_plan
from .schema import CodableType, ContainerKind, Direction
from .templates import TemplateEngine, create_template_engine
from ...logging_config import get_logger

logger = get_logger(__name__)

# Indentation unit the bundled templates are written with
TEMPLATE_INDENT = 4


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    # Naming style of nested container variables
    container_style = "snake"

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or GeneratorConfig()
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        template_dir = self.get_template_directory()
        self._template_engine = create_template_engine(template_dir)

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'python', 'swift')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.py')."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Returns:
            Path to template directory or None for in-memory templates
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    @abstractmethod
    def generate(self, types: Sequence[CodableType]) -> str:
        """
        Generate the codec source for every type.

        Args:
            types: Extracted codable types, in output order

        Returns:
            Generated code as a string
        """
        pass

    @abstractmethod
    def generate_single_type(self, codable_type: CodableType) -> str:
        """
        Generate the encode and/or decode procedure of one type.

        Args:
            codable_type: Extracted type to generate for

        Returns:
            Generated code for this type only
        """
        pass

    def build_plans(self, codable_type: CodableType) -> Dict[Direction, CodecPlan]:
        """Build one plan per requested direction from the same schema walk."""
        return {
            direction: build_codec_plan(codable_type, direction, self.container_style)
            for direction in (Direction.ENCODE, Direction.DECODE)
            if codable_type.generates(direction)
        }

    def validate_types(self, types: Sequence[CodableType]) -> List[str]:
        """
        Validate extracted types for non-fatal issues.

        Args:
            types: Types to validate

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []
        seen = set()

        for codable_type in types:
            if codable_type.type_name in seen:
                warnings.append(
                    f"Type '{codable_type.type_name}' is declared more than once"
                )
            seen.add(codable_type.type_name)

            for enum_name in codable_type.ignored_enums:
                warnings.append(
                    f"Nested enum {codable_type.type_name}.{enum_name} is not "
                    "used as a field group and was ignored"
                )

            schema = codable_type.schema
            kind = codable_type.strategy.kind
            if schema is None:
                continue
            if not schema.fields and kind != ContainerKind.SINGLE_VALUE:
                warnings.append(f"Type '{codable_type.type_name}' has no coding keys")
            if kind == ContainerKind.SINGLE_VALUE_FOR_ENUM and schema.groups:
                warnings.append(
                    f"Groups of enum '{codable_type.type_name}' are ignored by "
                    "the single value container"
                )

        return warnings

    def format_code(self, code: str) -> str:
        """
        Apply basic formatting to generated code.

        Args:
            code: Raw generated code

        Returns:
            Formatted code ending with a single newline
        """
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = self._reindent(line.rstrip())
            if not stripped:
                blank_count += 1
                if blank_count <= 2:  # Allow max 2 consecutive blank lines
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines).strip("\n") + "\n"

    def _reindent(self, line: str) -> str:
        """Rewrite the 4-space indentation of templates to ``indent_size``."""
        size = self.config.indent_size
        if size == TEMPLATE_INDENT:
            return line
        body = line.lstrip(" ")
        levels, rest = divmod(len(line) - len(body), TEMPLATE_INDENT)
        return " " * (levels * size + rest) + body

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template with context."""
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return self.template_engine.template_exists(template_name)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self, code: str, warnings: List[str] = None, metadata: Dict[str, Any] = None
    ):
        """
        Initialize generation result.

        Args:
            code: Generated code
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message = None
        self.exception = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(code="")
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(
    generator: CodeGenerator, types: Sequence[CodableType]
) -> GenerationResult:
    """
    Generate code using the specified generator with error handling.

    Args:
        generator: Code generator instance
        types: Extracted types to generate codecs for

    Returns:
        GenerationResult with code, warnings, and metadata
    """
    try:
        warnings = generator.validate_types(types)
        for warning in warnings:
            logger.warning(warning)

        code = generator.generate(types)
        formatted_code = generator.format_code(code)

        metadata = {
            "language": generator.language_name,
            "file_extension": generator.file_extension,
            "type_count": len(types),
            "types": [t.type_name for t in types],
            "strategies": {t.type_name: str(t.strategy) for t in types},
            "field_count": sum(
                len(t.schema.flattened_fields()) for t in types if t.schema
            ),
            "has_groups": any(t.schema and t.schema.groups for t in types),
        }
        logger.debug(
            "Generated %s code for %d type(s)", generator.language_name, len(types)
        )

        return GenerationResult(formatted_code, warnings, metadata)

    except Exception as e:
        logger.error("Code generation failed: %s", e)
        return GenerationResult.error(f"Code generation failed: {str(e)}", exception=e)
