"""
Python code generator implementation.

Generates module-level ``encode_<type>`` / ``decode_<type>`` functions that
run against the container runtime, using templates.
"""

from typing import Any, Dict, List, Sequence, Set
from pathlib import Path

from ...core.config import GeneratorConfig
from ...core.generator import CodeGenerator
from ...core.plan import CodecPlan
from ...core.schema import CodableType, ContainerKind, Direction
from .config import PythonConfig
from .naming import attribute_name, codec_function_name, create_python_sanitizer
from ....logging_config import get_logger

logger = get_logger(__name__)

_TEMPLATES = {
    (ContainerKind.KEYED, Direction.ENCODE): "keyed_encode.py.j2",
    (ContainerKind.KEYED, Direction.DECODE): "keyed_decode.py.j2",
    (ContainerKind.SINGLE_VALUE, Direction.ENCODE): "single_value_encode.py.j2",
    (ContainerKind.SINGLE_VALUE, Direction.DECODE): "single_value_decode.py.j2",
    (ContainerKind.SINGLE_VALUE_FOR_ENUM, Direction.ENCODE): "enum_encode.py.j2",
    (ContainerKind.SINGLE_VALUE_FOR_ENUM, Direction.DECODE): "enum_decode.py.j2",
}

_DOCSTRINGS = {
    (ContainerKind.KEYED, Direction.ENCODE): "Encode {type_name} into a keyed container.",
    (ContainerKind.KEYED, Direction.DECODE): "Decode {type_name} from a keyed container.",
    (ContainerKind.SINGLE_VALUE, Direction.ENCODE): "Encode {type_name} as its {binding} value.",
    (ContainerKind.SINGLE_VALUE, Direction.DECODE): "Decode {type_name} from its {binding} value.",
    (ContainerKind.SINGLE_VALUE_FOR_ENUM, Direction.ENCODE): "Encode {type_name} as its string tag.",
    (ContainerKind.SINGLE_VALUE_FOR_ENUM, Direction.DECODE): "Decode {type_name} from its string tag.",
}


class PythonGenerator(CodeGenerator):
    """Code generator for Python codec functions."""

    def __init__(self, config: GeneratorConfig = None):
        """Initialize Python generator with configuration."""
        super().__init__(config)

        # Initialize naming
        self.sanitizer = create_python_sanitizer()

        # Initialize Python-specific configuration
        self.python_config = PythonConfig(**self.config.language_config)

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "python"

    @property
    def file_extension(self) -> str:
        """Return Python file extension."""
        return ".py"

    def get_template_directory(self) -> Path:
        """Return the Python templates directory."""
        return Path(__file__).parent / "templates"

    def generate(self, types: Sequence[CodableType]) -> str:
        """Generate a complete Python module for all types."""
        blocks = []
        exports = []
        registrations = []
        runtime_imports: Set[str] = set()
        type_imports: Set[str] = set()

        for codable_type in types:
            plans = self.build_plans(codable_type)
            blocks.append(self._render_plans(codable_type, plans))

            names = {
                direction: self.function_name(codable_type, direction)
                for direction in plans
            }
            if codable_type.is_public:
                exports.extend(names.values())
            if self.python_config.register_codecs and names:
                registrations.append(
                    {
                        "type_name": codable_type.type_name,
                        "encode": names.get(Direction.ENCODE),
                        "decode": names.get(Direction.DECODE),
                    }
                )

            runtime_imports.update(self._runtime_names(plans))
            type_imports.update(self._type_names(codable_type, plans))

        if registrations:
            runtime_imports.add("register_codec")

        context = {
            "header": self.config.header if self.config.add_comments else None,
            "type_hints": self.python_config.emit_type_hints,
            "runtime_module": self.python_config.runtime_module,
            "runtime_imports": sorted(runtime_imports),
            "type_module": self.python_config.type_module,
            "type_imports": sorted(type_imports) if self.python_config.type_module else [],
            "exports": sorted(exports),
            "blocks": blocks,
            "registrations": registrations,
        }
        return self.render_template("module.py.j2", context)

    def generate_single_type(self, codable_type: CodableType) -> str:
        """Generate the codec functions of one type, without imports."""
        return self._render_plans(codable_type, self.build_plans(codable_type))

    def function_name(self, codable_type: CodableType, direction: Direction) -> str:
        """Name of the generated function for ``direction``."""
        return codec_function_name(
            self.sanitizer, codable_type.type_name, direction, codable_type.is_public
        )

    def _render_plans(
        self, codable_type: CodableType, plans: Dict[Direction, CodecPlan]
    ) -> str:
        functions = []
        for direction, plan in plans.items():
            template_name = _TEMPLATES[(plan.kind, direction)]
            context = self._function_context(codable_type, plan)
            functions.append(self.render_template(template_name, context).rstrip())
        return "\n\n\n".join(functions)

    def _function_context(
        self, codable_type: CodableType, plan: CodecPlan
    ) -> Dict[str, Any]:
        """Template context of one generated function."""
        type_name = codable_type.type_name
        name = self.function_name(codable_type, plan.direction)
        binding = attribute_name(plan.binding_name) if plan.binding_name else None

        docstring = None
        if self.python_config.emit_docstrings:
            docstring = _DOCSTRINGS[(plan.kind, plan.direction)].format(
                type_name=type_name, binding=binding
            )

        return {
            "type_name": type_name,
            "signature": self._signature(name, type_name, plan.direction),
            "docstring": docstring,
            "binding": binding,
            "containers": [
                {"variable": c.variable, "parent": c.parent, "key": c.key}
                for c in plan.nested_containers
            ],
            "steps": [
                {
                    "container": step.container.variable,
                    "key": step.key,
                    "attribute": attribute_name(step.local_name),
                    "transform": str(step.transform) if step.transform else None,
                    "conditional": step.conditional,
                }
                for step in plan.steps
            ],
            "cases": [
                {"key": case.key, "attribute": attribute_name(case.local_name)}
                for case in plan.cases
            ],
        }

    def _signature(self, name: str, type_name: str, direction: Direction) -> str:
        hints = self.python_config.emit_type_hints
        if direction == Direction.ENCODE:
            if hints:
                return f"{name}(value: {type_name}, encoder: Encoder) -> None"
            return f"{name}(value, encoder)"
        if hints:
            return f"{name}(decoder: Decoder) -> {type_name}"
        return f"{name}(decoder)"

    def _runtime_names(self, plans: Dict[Direction, CodecPlan]) -> Set[str]:
        """Runtime names referenced by the functions rendered from ``plans``."""
        names = set()
        for direction, plan in plans.items():
            if self.python_config.emit_type_hints:
                names.add("Encoder" if direction == Direction.ENCODE else "Decoder")

            if plan.kind == ContainerKind.SINGLE_VALUE_FOR_ENUM:
                names.add(
                    "EncodingError" if direction == Direction.ENCODE else "DataCorruptedError"
                )
                continue

            if direction == Direction.DECODE and plan.kind == ContainerKind.SINGLE_VALUE:
                names.add("field_type")

            for step in plan.steps:
                if step.transform is None:
                    if direction == Direction.DECODE:
                        names.add("field_type")
                elif step.conditional:
                    names.add(
                        "transform_from_value"
                        if direction == Direction.ENCODE
                        else "transform_value"
                    )
        return names

    def _type_names(
        self, codable_type: CodableType, plans: Dict[Direction, CodecPlan]
    ) -> Set[str]:
        """Top-level names of the user and adapter types the functions use."""
        names = {codable_type.type_name.split(".")[0]}
        for plan in plans.values():
            names.update(ref.type_name.split(".")[0] for ref in plan.transforms())
        return names

    def validate_types(self, types: Sequence[CodableType]) -> List[str]:
        """Validate types for Python generation."""
        warnings = super().validate_types(types)

        seen_functions: Dict[str, str] = {}
        for codable_type in types:
            fields = codable_type.schema.flattened_fields() if codable_type.schema else []
            for f in fields:
                if attribute_name(f.local_name) != f.local_name:
                    warnings.append(
                        f"Field {codable_type.type_name}.{f.local_name} is read "
                        f"from attribute '{attribute_name(f.local_name)}'"
                    )

            for direction in codable_type.directions:
                name = self.function_name(codable_type, direction)
                other = seen_functions.get(name)
                if other is not None and other != codable_type.type_name:
                    warnings.append(
                        f"Types '{other}' and '{codable_type.type_name}' both "
                        f"generate function '{name}'"
                    )
                seen_functions[name] = codable_type.type_name

        if not self.python_config.type_module:
            logger.debug("No type_module set; generated code expects types in scope")

        return warnings


# Factory functions
def create_python_generator(config: GeneratorConfig = None, **language_config) -> PythonGenerator:
    """Create a Python generator, optionally overriding language settings."""
    if config is None:
        from ...core.config import load_config

        config = load_config("python", custom_config={"language_config": language_config})
    elif language_config:
        config.language_config.update(language_config)

    return PythonGenerator(config)
