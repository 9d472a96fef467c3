"""
Core code generation components.

Provides the schema model, the extractor and the base classes used by all
language generators.
"""

from .generator import CodeGenerator, GeneratorError, GenerationResult, generate_code
from .schema import (
    AccessControl,
    CodableType,
    ContainerKind,
    Direction,
    Field,
    Schema,
    Strategy,
    TransformRef,
)
from .declaration import (
    DeclarationError,
    RawAttribute,
    RawCase,
    RawDeclaration,
    RawEnum,
    declaration_from_dict,
    declarations_from_data,
)
from .strategy import (
    CodingOptions,
    SchemaError,
    UnsupportedOptionError,
    resolve_options,
    select_strategy,
)
from .extractor import (
    DuplicateFieldError,
    DuplicateKeyError,
    InvalidMarkerError,
    MissingCodingKeysError,
    MissingGroupError,
    OnlyApplicableToExtensionError,
    extract_all,
    extract_codable_type,
)
from .plan import CodecPlan, ContainerStep, FieldStep, SchemaVisitor, build_codec_plan, walk_schema
from .naming import NameSanitizer, NamingCase
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GeneratorError",
    "GenerationResult",
    "generate_code",
    # Schema model
    "AccessControl",
    "CodableType",
    "ContainerKind",
    "Direction",
    "Field",
    "Schema",
    "Strategy",
    "TransformRef",
    # Raw declarations
    "DeclarationError",
    "RawAttribute",
    "RawCase",
    "RawDeclaration",
    "RawEnum",
    "declaration_from_dict",
    "declarations_from_data",
    # Strategy selection
    "CodingOptions",
    "SchemaError",
    "UnsupportedOptionError",
    "resolve_options",
    "select_strategy",
    # Extraction
    "DuplicateFieldError",
    "DuplicateKeyError",
    "InvalidMarkerError",
    "MissingCodingKeysError",
    "MissingGroupError",
    "OnlyApplicableToExtensionError",
    "extract_all",
    "extract_codable_type",
    # Codec plans
    "CodecPlan",
    "ContainerStep",
    "FieldStep",
    "SchemaVisitor",
    "build_codec_plan",
    "walk_schema",
    # Naming utilities - language-agnostic
    "NameSanitizer",
    "NamingCase",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system - language-agnostic
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
