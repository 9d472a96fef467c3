"""
Codec plans.

Encode and decode are rendered from plans produced by one traversal,
:func:`walk_schema`. The walk fixes the container layout and the field
order once; a plan only adds the direction-specific transform of each
field. Two plans built from the same schema therefore always open the same
containers and visit the same fields in the same order.
"""

from dataclasses import dataclass
from typing import List, Optional, Set, Tuple

from .naming import to_snake_case
from .schema import CodableType, ContainerKind, Direction, Field, Schema, TransformRef

ROOT_CONTAINER = "container"


@dataclass(frozen=True)
class ContainerStep:
    """A keyed container opened by the generated procedure."""

    variable: str  # e.g. "container", "names_container"
    keys_name: str  # coding-key enum the container is keyed by
    key: Optional[str] = None  # key in the parent container, None for the root
    local_name: Optional[str] = None  # grouping field that opens it
    parent: Optional[str] = None  # variable of the parent container

    @property
    def is_root(self) -> bool:
        return self.parent is None


@dataclass(frozen=True)
class FieldStep:
    """One leaf field read or written against a container."""

    field: Field
    container: ContainerStep
    transform: Optional[TransformRef] = None

    @property
    def key(self) -> str:
        return self.field.key

    @property
    def local_name(self) -> str:
        return self.field.local_name

    @property
    def conditional(self) -> bool:
        return self.field.is_conditional


@dataclass(frozen=True)
class CodecPlan:
    """Everything a renderer needs for one procedure of one type."""

    type_name: str
    direction: Direction
    kind: ContainerKind
    is_public: bool
    containers: Tuple[ContainerStep, ...] = ()
    steps: Tuple[FieldStep, ...] = ()
    cases: Tuple[Field, ...] = ()
    binding_name: Optional[str] = None

    @property
    def root(self) -> Optional[ContainerStep]:
        return self.containers[0] if self.containers else None

    @property
    def nested_containers(self) -> Tuple[ContainerStep, ...]:
        return self.containers[1:]

    def arguments(self) -> List[str]:
        """Aggregate initializer arguments, in wire order."""
        if self.kind == ContainerKind.SINGLE_VALUE:
            return [self.binding_name]
        return [step.local_name for step in self.steps]

    def transforms(self) -> List[TransformRef]:
        """Adapter types referenced by this plan, first use first."""
        seen = []
        for step in self.steps:
            if step.transform and step.transform not in seen:
                seen.append(step.transform)
        return seen


class SchemaVisitor:
    """Callbacks of :func:`walk_schema`."""

    def open_container(self, step: ContainerStep) -> None:
        pass

    def visit_field(self, field: Field, container: ContainerStep) -> None:
        pass


def container_variable(local_name: str, style: str = "snake", index: int = 1) -> str:
    """Variable holding the nested container of a grouping field."""
    if style == "camel":
        base = f"{local_name}Container"
        return base if index == 1 else f"{base}{index}"
    base = f"{to_snake_case(local_name)}_{ROOT_CONTAINER}"
    return base if index == 1 else f"{base}_{index}"


def _unique_variable(local_name: str, style: str, taken: Set[str]) -> str:
    index = 1
    variable = container_variable(local_name, style)
    while variable in taken:
        index += 1
        variable = container_variable(local_name, style, index)
    taken.add(variable)
    return variable


def walk_schema(schema: Schema, visitor: SchemaVisitor, style: str = "snake") -> None:
    """
    Walk a keyed schema.

    Reports the root container, then every group container in declaration
    order (all opens come before any field), then every leaf field in
    flattened order together with the container it belongs to.
    """
    root = ContainerStep(variable=ROOT_CONTAINER, keys_name=schema.name)
    visitor.open_container(root)

    # Distinct grouping fields may share a snake_case spelling (fooBar, foo_bar)
    taken = {root.variable}
    taken.update(leaf.local_name for leaf, _ in schema.iter_flattened())
    group_containers = {}
    for group_field, group in schema.groups:
        step = ContainerStep(
            variable=_unique_variable(group_field.local_name, style, taken),
            keys_name=f"{schema.name}.{group.name}",
            key=group_field.key,
            local_name=group_field.local_name,
            parent=root.variable,
        )
        group_containers[group_field.local_name] = step
        visitor.open_container(step)

    for leaf, grouping_field in schema.iter_flattened():
        container = (
            group_containers[grouping_field.local_name] if grouping_field else root
        )
        visitor.visit_field(leaf, container)


class _PlanBuilder(SchemaVisitor):
    def __init__(self, direction: Direction):
        self.direction = direction
        self.containers: List[ContainerStep] = []
        self.steps: List[FieldStep] = []

    def open_container(self, step: ContainerStep) -> None:
        self.containers.append(step)

    def visit_field(self, field: Field, container: ContainerStep) -> None:
        self.steps.append(
            FieldStep(
                field=field,
                container=container,
                transform=field.transform_for(self.direction),
            )
        )


def build_codec_plan(
    codable_type: CodableType, direction: Direction, style: str = "snake"
) -> CodecPlan:
    """
    Build the plan of one procedure.

    Args:
        codable_type: Extracted type
        direction: Encode or decode
        style: Naming style of nested container variables ("snake" or "camel")

    Returns:
        Frozen CodecPlan
    """
    kind = codable_type.strategy.kind
    base = dict(
        type_name=codable_type.type_name,
        direction=direction,
        kind=kind,
        is_public=codable_type.is_public,
    )

    if kind == ContainerKind.SINGLE_VALUE:
        return CodecPlan(binding_name=codable_type.strategy.binding_name, **base)

    if kind == ContainerKind.SINGLE_VALUE_FOR_ENUM:
        return CodecPlan(cases=tuple(codable_type.cases()), **base)

    builder = _PlanBuilder(direction)
    walk_schema(codable_type.schema, builder, style)
    return CodecPlan(
        containers=tuple(builder.containers), steps=tuple(builder.steps), **base
    )
