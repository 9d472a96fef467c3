"""
Schema extraction.

Turns a :class:`RawDeclaration` into a :class:`CodableType`: locates the
coding-key enumeration, reads keys and markers of every case, and attaches
field groups. Extraction is a pure function of the declaration and the
options; nothing is cached between calls.
"""

from typing import Any, List, Mapping, Optional, Set, Tuple

from .declaration import RawCase, RawDeclaration, RawEnum
from .naming import group_enum_name, is_identifier
from .schema import CodableType, ContainerKind, Field, Schema, TransformRef
from .strategy import CodingOptions, SchemaError, resolve_options
from ...logging_config import get_logger

logger = get_logger(__name__)

CONDITIONAL = "conditional"
VALUE_TRANSFORM = "value_transform"
ENCODED_VALUE = "encoded_value"
DECODED_VALUE = "decoded_value"
GROUP = "group"

KNOWN_MARKERS = {CONDITIONAL, VALUE_TRANSFORM, ENCODED_VALUE, DECODED_VALUE, GROUP}


class OnlyApplicableToExtensionError(SchemaError):
    """The declaration defines a new type instead of augmenting one."""

    def __init__(self, type_name: str, kind: str):
        self.type_name = type_name
        self.kind = kind
        super().__init__(
            f"Codecs can be generated only for extensions; '{type_name}' is "
            f"declared as {kind}"
        )


class MissingCodingKeysError(SchemaError):
    """The strategy needs a coding-key enumeration and there is none."""

    def __init__(self, type_name: str):
        self.type_name = type_name
        super().__init__(
            f"'{type_name}' requires a CodingKey enum when the keyed or single "
            "value for enum container is used"
        )


class MissingGroupError(SchemaError):
    """A case names a group enumeration that does not exist."""

    pass


class InvalidMarkerError(SchemaError):
    """A marker is malformed or not allowed on its case."""

    pass


class DuplicateKeyError(SchemaError):
    """Two cases of one schema level share an external key."""

    pass


class DuplicateFieldError(SchemaError):
    """Two leaf fields share a local name."""

    pass


def _transform(case: RawCase, marker: str, where: str) -> Optional[TransformRef]:
    attribute = case.attribute(marker)
    if attribute is None:
        return None
    argument = (attribute.argument or "").strip()
    if argument.endswith(".self"):
        argument = argument[: -len(".self")]
    if not argument:
        raise InvalidMarkerError(
            f"{where}.{case.name}: '{attribute.name}' needs a type argument"
        )
    return TransformRef(argument)


class SchemaExtractor:
    """Extracts the schema of one declaration."""

    def __init__(self, declaration: RawDeclaration, options: CodingOptions):
        self.declaration = declaration
        self.options = options
        self.ignored_enums: List[str] = []

    @property
    def type_name(self) -> str:
        return self.declaration.type_name

    def extract(self) -> CodableType:
        """Build the codable type; raises a :class:`SchemaError` on bad input."""
        strategy = self.options.strategy
        coding_keys = self.declaration.coding_keys()

        if coding_keys is None:
            if strategy.requires_coding_keys:
                raise MissingCodingKeysError(self.type_name)
            schema = None
        elif strategy.kind == ContainerKind.SINGLE_VALUE:
            logger.debug(
                "%s: single value container ignores %s", self.type_name, coding_keys.name
            )
            schema = None
        elif strategy.kind == ContainerKind.SINGLE_VALUE_FOR_ENUM:
            schema = self._extract_cases(coding_keys)
        else:
            schema = self._extract_level(coding_keys, self.type_name, nested=False)
            self._check_unique_leaves(schema)

        logger.debug(
            "Extracted %s with %s container (%d fields)",
            self.type_name,
            strategy,
            len(schema.flattened_fields()) if schema else 0,
        )
        return CodableType(
            type_name=self.type_name,
            strategy=strategy,
            access_control=self.options.access_control,
            schema=schema,
            directions=self.options.directions,
            ignored_enums=tuple(self.ignored_enums),
        )

    def _extract_cases(self, enum: RawEnum) -> Schema:
        """Flat variant list; markers and nested enums play no part."""
        where = f"{self.type_name}.{enum.name}"
        for case in enum.cases:
            if not is_identifier(case.name):
                raise SchemaError(f"{where}: invalid case name '{case.name}'")
        fields = [
            Field(key=case.raw_value or case.name, local_name=case.name)
            for case in enum.cases
        ]
        self._check_unique_keys(fields, where)
        self._check_unique_leaves(Schema(enum.name, tuple(fields)))
        self.ignored_enums.extend(f"{enum.name}.{nested.name}" for nested in enum.enums)
        return Schema(name=enum.name, fields=tuple(fields))

    def _extract_level(self, enum: RawEnum, where: str, nested: bool) -> Schema:
        where = f"{where}.{enum.name}"
        claimed: Set[str] = set()
        fields = []

        for case in enum.cases:
            if not is_identifier(case.name):
                raise SchemaError(f"{where}: invalid case name '{case.name}'")
            for attribute in case.attributes:
                if attribute.marker not in KNOWN_MARKERS:
                    logger.warning(
                        "%s.%s: unknown marker '%s' ignored", where, case.name, attribute.name
                    )

            group_enum = self._group_enum(enum, case, where, nested)
            if group_enum is not None:
                claimed.add(group_enum.name)
                fields.append(self._group_field(case, group_enum, where))
            else:
                fields.append(self._leaf_field(case, where))

        self._check_unique_keys(fields, where)

        prefix = f"{enum.name}." if nested else ""
        for nested_enum in enum.enums:
            if nested_enum.name not in claimed:
                logger.warning("%s: nested enum %s ignored", where, nested_enum.name)
                self.ignored_enums.append(f"{prefix}{nested_enum.name}")

        return Schema(name=enum.name, fields=tuple(fields))

    def _group_enum(
        self, enum: RawEnum, case: RawCase, where: str, nested: bool
    ) -> Optional[RawEnum]:
        explicit = case.attribute(GROUP)
        if explicit is not None:
            if nested:
                raise InvalidMarkerError(
                    f"{where}.{case.name}: groups cannot be nested more than one level"
                )
            if not explicit.argument:
                raise InvalidMarkerError(
                    f"{where}.{case.name}: '{explicit.name}' needs an enum name"
                )
            group_enum = enum.find_enum(explicit.argument)
            if group_enum is None:
                raise MissingGroupError(
                    f"{where}.{case.name}: group enum '{explicit.argument}' not "
                    "found or not tagged CodingKey"
                )
            return group_enum

        if nested:
            return None
        return enum.find_enum(group_enum_name(case.name))

    def _group_field(self, case: RawCase, group_enum: RawEnum, where: str) -> Field:
        for marker in (CONDITIONAL, VALUE_TRANSFORM, ENCODED_VALUE, DECODED_VALUE):
            if case.has_attribute(marker):
                raise InvalidMarkerError(
                    f"{where}.{case.name}: grouping field cannot be marked '{marker}'"
                )
        group = self._extract_level(group_enum, where, nested=True)
        return Field(
            key=case.raw_value or case.name,
            local_name=case.name,
            group=group,
        )

    def _leaf_field(self, case: RawCase, where: str) -> Field:
        return Field(
            key=case.raw_value or case.name,
            local_name=case.name,
            is_conditional=case.has_attribute(CONDITIONAL),
            value_transform=_transform(case, VALUE_TRANSFORM, where),
            encode_transform=_transform(case, ENCODED_VALUE, where),
            decode_transform=_transform(case, DECODED_VALUE, where),
        )

    def _check_unique_keys(self, fields: List[Field], where: str) -> None:
        seen = set()
        for f in fields:
            if f.key in seen:
                raise DuplicateKeyError(f"{where}: duplicate key '{f.key}'")
            seen.add(f.key)

    def _check_unique_leaves(self, schema: Schema) -> None:
        seen = set()
        for f in schema.flattened_fields():
            if f.local_name in seen:
                raise DuplicateFieldError(
                    f"{self.type_name}: field '{f.local_name}' is declared more than once"
                )
            seen.add(f.local_name)


def extract_codable_type(
    declaration: RawDeclaration, options: Optional[Mapping[str, Any]] = None
) -> CodableType:
    """
    Extract the codable type of one declaration.

    Args:
        declaration: Raw declaration block
        options: Option overrides applied over ``declaration.options``

    Returns:
        CodableType ready for the generators

    Raises:
        OnlyApplicableToExtensionError: If the declaration is not an extension
        SchemaError: For any other structural problem
    """
    if not declaration.is_extension:
        raise OnlyApplicableToExtensionError(declaration.type_name, declaration.kind)

    coding_options = resolve_options(declaration.options, options)
    return SchemaExtractor(declaration, coding_options).extract()


def extract_all(
    declarations: List[RawDeclaration], options: Optional[Mapping[str, Any]] = None
) -> Tuple[CodableType, ...]:
    """Extract every declaration with the same option overrides."""
    return tuple(extract_codable_type(d, options) for d in declarations)
