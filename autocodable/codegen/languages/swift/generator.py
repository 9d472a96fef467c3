"""
Swift code generator implementation.

Generates the ``encode(to:)`` and ``init(from:)`` members of a Codable
extension, in the same shape the ``@AutoEncodable`` / ``@AutoDecodable``
attributes expand to.
"""

from typing import Any, Dict, List, Sequence
from pathlib import Path

from ...core.config import GeneratorConfig
from ...core.generator import CodeGenerator
from ...core.plan import CodecPlan
from ...core.schema import CodableType, ContainerKind, Direction
from .config import SwiftConfig
from .naming import escape_identifier

_TEMPLATES = {
    (ContainerKind.KEYED, Direction.ENCODE): "keyed_encode.swift.j2",
    (ContainerKind.KEYED, Direction.DECODE): "keyed_decode.swift.j2",
    (ContainerKind.SINGLE_VALUE, Direction.ENCODE): "single_value_encode.swift.j2",
    (ContainerKind.SINGLE_VALUE, Direction.DECODE): "single_value_decode.swift.j2",
    (ContainerKind.SINGLE_VALUE_FOR_ENUM, Direction.ENCODE): "enum_encode.swift.j2",
    (ContainerKind.SINGLE_VALUE_FOR_ENUM, Direction.DECODE): "enum_decode.swift.j2",
}


class SwiftGenerator(CodeGenerator):
    """Code generator for Swift Codable members."""

    # quxContainer, not qux_container
    container_style = "camel"

    def __init__(self, config: GeneratorConfig = None):
        """Initialize Swift generator with configuration."""
        super().__init__(config)
        self.swift_config = SwiftConfig(**self.config.language_config)

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "swift"

    @property
    def file_extension(self) -> str:
        """Return Swift file extension."""
        return ".swift"

    def get_template_directory(self) -> Path:
        """Return the Swift templates directory."""
        return Path(__file__).parent / "templates"

    def generate(self, types: Sequence[CodableType]) -> str:
        """Generate a Swift file holding the members of every type."""
        blocks = [self.generate_single_type(codable_type) for codable_type in types]

        context = {
            "header": self.config.header if self.config.add_comments else None,
            "imports": self.swift_config.imports,
            "blocks": blocks,
            "decode_helper": self.swift_config.emit_decode_helper,
        }
        return self.render_template("module.swift.j2", context)

    def generate_single_type(self, codable_type: CodableType) -> str:
        """Generate the members of one type, wrapped in an extension if configured."""
        members = self.generate_members(codable_type)
        if not self.swift_config.wrap_in_extension:
            return "\n\n".join(members)

        context = {
            "type_name": codable_type.type_name,
            "members": members,
        }
        return self.render_template("extension.swift.j2", context).rstrip()

    def generate_members(self, codable_type: CodableType) -> List[str]:
        """Render one member per requested direction, encode first."""
        members = []
        for direction, plan in self.build_plans(codable_type).items():
            template_name = _TEMPLATES[(plan.kind, direction)]
            context = self._member_context(codable_type, plan)
            members.append(self.render_template(template_name, context).rstrip())
        return members

    def _member_context(self, codable_type: CodableType, plan: CodecPlan) -> Dict[str, Any]:
        if plan.root is not None:
            keys_name = plan.root.keys_name
        elif codable_type.schema is not None:
            keys_name = codable_type.schema.name
        else:
            keys_name = None

        return {
            "modifier": "public " if plan.is_public else "",
            "keys_name": keys_name,
            "binding": plan.binding_name,
            "containers": [
                {
                    "variable": c.variable,
                    "parent": c.parent,
                    "keys_name": c.keys_name,
                    "label": c.local_name,
                }
                for c in plan.nested_containers
            ],
            "steps": [
                {
                    "container": step.container.variable,
                    "label": step.local_name,
                    "reference": escape_identifier(step.local_name),
                    "transform": str(step.transform) if step.transform else None,
                    "conditional": step.conditional,
                }
                for step in plan.steps
            ],
            "cases": [{"label": case.local_name} for case in plan.cases],
        }


def create_swift_generator(config: GeneratorConfig = None, **language_config) -> SwiftGenerator:
    """Create a Swift generator, optionally overriding language settings."""
    if config is None:
        from ...core.config import load_config

        config = load_config("swift", custom_config={"language_config": language_config})
    elif language_config:
        config.language_config.update(language_config)

    return SwiftGenerator(config)
