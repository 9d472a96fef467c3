"""
Core schema representation for code generation.

The extractor turns a raw declaration into these objects; generators only
ever read them. Every class here is frozen, so a schema cannot change
between the encode and the decode pass.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple
from enum import Enum


class AccessControl(Enum):
    """Visibility of the generated procedures."""

    INTERNAL = "internal"
    PUBLIC = "public"


class ContainerKind(Enum):
    """Top-level container shape of a codable type."""

    KEYED = "keyed"
    SINGLE_VALUE = "single_value"
    SINGLE_VALUE_FOR_ENUM = "single_value_for_enum"


class Direction(Enum):
    """Which generated procedure a pass is building."""

    ENCODE = "encode"
    DECODE = "decode"


@dataclass(frozen=True)
class TransformRef:
    """Reference to a caller-defined value-transform adapter type."""

    type_name: str

    def __str__(self) -> str:
        return self.type_name


@dataclass(frozen=True)
class Field:
    """One schema entry."""

    key: str  # external name
    local_name: str  # in-memory binding name
    is_conditional: bool = False
    value_transform: Optional[TransformRef] = None

    # Direction-specific adapters override value_transform
    encode_transform: Optional[TransformRef] = None
    decode_transform: Optional[TransformRef] = None

    # Sub-schema this field opens a nested container for
    group: Optional["Schema"] = None

    @property
    def is_group(self) -> bool:
        return self.group is not None

    def transform_for(self, direction: Direction) -> Optional[TransformRef]:
        """Return the adapter used for ``direction``, if any."""
        if direction == Direction.ENCODE and self.encode_transform:
            return self.encode_transform
        if direction == Direction.DECODE and self.decode_transform:
            return self.decode_transform
        return self.value_transform

    @property
    def has_transform(self) -> bool:
        return bool(
            self.value_transform or self.encode_transform or self.decode_transform
        )


@dataclass(frozen=True)
class Schema:
    """Ordered field list of one coding-key enumeration."""

    name: str
    fields: Tuple[Field, ...] = ()

    @property
    def keys(self) -> List[str]:
        return [f.key for f in self.fields]

    @property
    def groups(self) -> List[Tuple[Field, "Schema"]]:
        """Grouping fields with their sub-schemas, in declaration order."""
        return [(f, f.group) for f in self.fields if f.group is not None]

    def get_field(self, local_name: str) -> Optional[Field]:
        """Get a top-level field by local name."""
        for f in self.fields:
            if f.local_name == local_name:
                return f
        return None

    def iter_flattened(self) -> Iterator[Tuple[Field, Optional[Field]]]:
        """Yield ``(leaf, grouping_field)`` pairs with groups expanded in place."""
        for f in self.fields:
            if f.group is not None:
                for child, parent in f.group.iter_flattened():
                    yield child, parent or f
            else:
                yield f, None

    def flattened_fields(self) -> List[Field]:
        """Leaf fields in wire order, groups expanded at their position."""
        return [leaf for leaf, _ in self.iter_flattened()]

    def depth(self) -> int:
        """Nesting depth, 1 for a schema without groups."""
        child_depths = [group.depth() for _, group in self.groups]
        return 1 + max(child_depths, default=0)


@dataclass(frozen=True)
class Strategy:
    """Container strategy chosen for one type."""

    kind: ContainerKind = ContainerKind.KEYED
    binding_name: Optional[str] = None

    @classmethod
    def keyed(cls) -> "Strategy":
        return cls(ContainerKind.KEYED)

    @classmethod
    def single_value(cls, binding_name: str) -> "Strategy":
        return cls(ContainerKind.SINGLE_VALUE, binding_name)

    @classmethod
    def single_value_for_enum(cls) -> "Strategy":
        return cls(ContainerKind.SINGLE_VALUE_FOR_ENUM)

    @property
    def requires_coding_keys(self) -> bool:
        return self.kind != ContainerKind.SINGLE_VALUE

    def __str__(self) -> str:
        if self.kind == ContainerKind.SINGLE_VALUE:
            return f"single_value({self.binding_name})"
        return self.kind.value


@dataclass(frozen=True)
class CodableType:
    """Everything a generator needs to emit the codec of one type."""

    type_name: str
    strategy: Strategy = field(default_factory=Strategy.keyed)
    access_control: AccessControl = AccessControl.INTERNAL
    schema: Optional[Schema] = None
    directions: Tuple[Direction, ...] = (Direction.ENCODE, Direction.DECODE)
    ignored_enums: Tuple[str, ...] = ()

    @property
    def is_public(self) -> bool:
        return self.access_control == AccessControl.PUBLIC

    def generates(self, direction: Direction) -> bool:
        return direction in self.directions

    def cases(self) -> List[Field]:
        """Schema fields read as enum variants (``key`` is the raw tag)."""
        if self.schema is None:
            return []
        return list(self.schema.fields)
