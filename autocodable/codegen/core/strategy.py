"""
Container strategy selection.

Reads the per-type configuration (``container``, ``accessControl`` and
``directions``) and resolves it into immutable options. Selection is pure:
the same mapping always resolves to the same options.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Tuple

from .generator import GeneratorError
from .naming import is_identifier, normalize_marker
from .schema import AccessControl, CodableType, ContainerKind, Direction, Strategy

_SINGLE_VALUE_CALL = re.compile(
    r"""^\.?single_?value\(\s*["']?(?P<name>[^"')\s]*)["']?\s*\)$""", re.IGNORECASE
)

_OPTION_NAMES = {"access_control", "container", "directions"}

_DIRECTIONS = {
    "both": (Direction.ENCODE, Direction.DECODE),
    "encode": (Direction.ENCODE,),
    "decode": (Direction.DECODE,),
}


class SchemaError(GeneratorError):
    """Structural error found while turning a declaration into a schema."""

    pass


class UnsupportedOptionError(SchemaError):
    """An option carries a value no strategy understands."""

    def __init__(self, option: str, value: Any, hint: str = ""):
        self.option = option
        self.value = value
        message = f"Unsupported {option} value: {value!r}"
        if hint:
            message = f"{message} ({hint})"
        super().__init__(message)


@dataclass(frozen=True)
class CodingOptions:
    """Resolved per-type generation options."""

    access_control: AccessControl = AccessControl.INTERNAL
    strategy: Strategy = field(default_factory=Strategy.keyed)
    directions: Tuple[Direction, ...] = (Direction.ENCODE, Direction.DECODE)


def _normalized(options: Optional[Mapping[str, Any]]) -> dict:
    return {
        normalize_marker(str(key)): value
        for key, value in (options or {}).items()
        if value is not None
    }


def _single_value(binding: Any) -> Strategy:
    if not isinstance(binding, str) or not is_identifier(binding):
        raise UnsupportedOptionError(
            "container", binding, "single value binding must be an identifier"
        )
    return Strategy.single_value(binding)


def parse_container(value: Any) -> Strategy:
    """
    Parse a ``container`` option.

    Accepted forms: ``"keyed"``, ``".keyed"``, ``"singleValueForEnum"``,
    ``"single_value_for_enum"``, ``'singleValue("bar")'``,
    ``"single_value(bar)"`` and ``{"single_value": "bar"}``.

    Raises:
        UnsupportedOptionError: For anything else
    """
    if value is None:
        return Strategy.keyed()

    if isinstance(value, Mapping):
        if len(value) == 1:
            key, binding = next(iter(value.items()))
            if normalize_marker(str(key)) == "single_value":
                return _single_value(binding)
        raise UnsupportedOptionError("container", value)

    if not isinstance(value, str):
        raise UnsupportedOptionError("container", value)

    text = value.strip()
    match = _SINGLE_VALUE_CALL.match(text)
    if match:
        return _single_value(match.group("name"))

    kind = normalize_marker(text.lstrip("."))
    if kind == "keyed":
        return Strategy.keyed()
    if kind == "single_value_for_enum":
        return Strategy.single_value_for_enum()
    raise UnsupportedOptionError(
        "container", value, "expected keyed, single_value(name) or single_value_for_enum"
    )


def parse_access_control(value: Any) -> AccessControl:
    """Parse ``internal`` / ``public`` (a leading dot is accepted)."""
    if value is None:
        return AccessControl.INTERNAL
    if isinstance(value, AccessControl):
        return value
    try:
        return AccessControl(str(value).strip().lstrip(".").lower())
    except ValueError:
        raise UnsupportedOptionError(
            "accessControl", value, "expected internal or public"
        ) from None


def parse_directions(value: Any) -> Tuple[Direction, ...]:
    """Parse ``both`` / ``encode`` / ``decode``."""
    if value is None:
        return _DIRECTIONS["both"]
    directions = _DIRECTIONS.get(str(value).strip().lower())
    if directions is None:
        raise UnsupportedOptionError("directions", value, "expected both, encode or decode")
    return directions


def resolve_options(
    options: Optional[Mapping[str, Any]] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> CodingOptions:
    """
    Resolve options, letting ``overrides`` win over ``options``.

    Both camelCase and snake_case option names are read.
    """
    merged = _normalized(options)
    merged.update(_normalized(overrides))

    unknown = sorted(set(merged) - _OPTION_NAMES)
    if unknown:
        raise UnsupportedOptionError("option", unknown[0], "unknown option name")

    if isinstance(merged.get("container"), Strategy):
        strategy = merged["container"]
    else:
        strategy = parse_container(merged.get("container"))

    return CodingOptions(
        access_control=parse_access_control(merged.get("access_control")),
        strategy=strategy,
        directions=parse_directions(merged.get("directions")),
    )


def select_strategy(codable_type: CodableType) -> ContainerKind:
    """Container shape the generators dispatch on."""
    return codable_type.strategy.kind
