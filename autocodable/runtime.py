"""Runtime container library used by generated Python codecs.

Generated ``encode_*`` functions write into an :class:`Encoder` through keyed
and single-value containers; generated ``decode_*`` functions read a JSON-like
tree (dicts, lists, strings, numbers, booleans and ``None``) back through a
:class:`Decoder`. Errors carry the coding path of the value that failed and
always propagate to the caller.
"""

from __future__ import annotations

import collections.abc
import inspect
import json
import types
import typing
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Any, Callable, Dict, Mapping, Optional, Protocol, Tuple, TypeVar

from .logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

CodingPath = Tuple[str, ...]

_PRIMITIVES = (str, int, float, bool)


def _format_path(coding_path: CodingPath) -> str:
    return ".".join(coding_path) if coding_path else "<root>"


class CodingError(Exception):
    """Base class of every encode/decode failure."""

    def __init__(self, debug_description: str, coding_path: CodingPath = ()):
        self.debug_description = debug_description
        self.coding_path = tuple(coding_path)
        super().__init__(f"{debug_description} (at {_format_path(self.coding_path)})")


class EncodingError(CodingError):
    """A value cannot be represented."""

    @classmethod
    def invalid_value(
        cls, value: Any, coding_path: CodingPath, debug_description: Optional[str] = None
    ) -> "EncodingError":
        error = cls(debug_description or f"Cannot encode {value!r}", coding_path)
        error.value = value
        return error


class DecodingError(CodingError):
    """The external representation does not match what is expected."""

    pass


class KeyNotFoundError(DecodingError):
    """A required key is missing."""

    def __init__(self, key: str, coding_path: CodingPath = ()):
        self.key = key
        super().__init__(f"No value associated with key '{key}'", coding_path)


class ValueNotFoundError(DecodingError):
    """A required value is null."""

    def __init__(self, expected: Any, coding_path: CodingPath = ()):
        self.expected = expected
        super().__init__(f"Expected {_type_name(expected)} but found null", coding_path)


class TypeMismatchError(DecodingError):
    """A value has the wrong shape."""

    def __init__(self, expected: Any, actual: Any, coding_path: CodingPath = ()):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Expected {_type_name(expected)} but found {type(actual).__name__}",
            coding_path,
        )


class DataCorruptedError(DecodingError):
    """A value has the right shape but an unrecognized content."""

    @classmethod
    def in_container(cls, container: Any, debug_description: str) -> "DataCorruptedError":
        """Error located at ``container``'s coding path."""
        return cls(debug_description, container.coding_path)


def _type_name(type_: Any) -> str:
    return getattr(type_, "__name__", None) or str(type_)


class EncodableValue(Protocol):
    """Adapter built from a field's logical value before it is written."""

    @classmethod
    def from_value(cls, value: Any) -> "EncodableValue": ...


class DecodableValue(Protocol):
    """Adapter read from the representation and converted to the logical value."""

    def value(self) -> Any: ...


@dataclass(frozen=True)
class Codec:
    """Encode/decode functions registered for one type."""

    encode: Optional[Callable[[Any, "Encoder"], None]] = None
    decode: Optional[Callable[["Decoder"], Any]] = None


_CODECS: Dict[type, Codec] = {}


def register_codec(
    cls: type,
    encode: Optional[Callable[[Any, "Encoder"], None]] = None,
    decode: Optional[Callable[["Decoder"], Any]] = None,
) -> None:
    """Register generated (or hand-written) codec functions for ``cls``.

    Registering only one direction keeps the other one already registered.
    """
    existing = _CODECS.get(cls, Codec())
    _CODECS[cls] = Codec(
        encode=encode or existing.encode,
        decode=decode or existing.decode,
    )
    logger.debug("Registered codec for %s", cls.__qualname__)


def unregister_codec(cls: type) -> None:
    _CODECS.pop(cls, None)


def codec_for(cls: type) -> Optional[Codec]:
    """Codec registered for ``cls`` or, for encoding, one of its bases."""
    for base in getattr(cls, "__mro__", (cls,)):
        codec = _CODECS.get(base)
        if codec is not None:
            return codec
    return None


@lru_cache(maxsize=None)
def _type_hints(cls: type) -> Dict[str, Any]:
    try:
        return typing.get_type_hints(cls)
    except NameError:
        # Unresolvable forward references decode as raw values
        return dict(getattr(cls, "__annotations__", {}))


def field_type(cls: type, name: str) -> Any:
    """Annotated type of field ``name`` of ``cls``, or ``None`` when unknown."""
    return _type_hints(cls).get(name)


def transform_from_value(adapter: Callable[..., Any], value: Any) -> Any:
    """``adapter.from_value(value)``, passing ``None`` through."""
    if value is None:
        return None
    return adapter.from_value(value)


def transform_value(adapter: Any) -> Any:
    """``adapter.value()``, passing ``None`` through."""
    if adapter is None:
        return None
    return adapter.value()


def encode_value(value: Any, coding_path: CodingPath = ()) -> Any:
    """Convert ``value`` into its JSON-like representation."""
    if value is None or type(value) in _PRIMITIVES:
        return value

    codec = codec_for(type(value))
    if codec is not None and codec.encode is not None:
        encoder = Encoder(coding_path)
        codec.encode(value, encoder)
        return encoder.value

    if isinstance(value, Enum):
        return encode_value(value.value, coding_path)
    if isinstance(value, _PRIMITIVES):
        return value
    if isinstance(value, Mapping):
        return {
            str(key): encode_value(item, coding_path + (str(key),))
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [
            encode_value(item, coding_path + (str(index),))
            for index, item in enumerate(value)
        ]
    if not isinstance(value, (bytes, bytearray)) and callable(getattr(value, "encode", None)):
        encoder = Encoder(coding_path)
        value.encode(encoder)
        return encoder.value

    raise EncodingError.invalid_value(
        value, coding_path, f"No codec registered for {type(value).__qualname__}"
    )


def _is_union(origin: Any) -> bool:
    return origin is typing.Union or origin is types.UnionType


def _has_classmethod(cls: type, name: str) -> bool:
    attribute = inspect.getattr_static(cls, name, None)
    return isinstance(attribute, (classmethod, staticmethod))


def decode_value(data: Any, type_: Any = None, coding_path: CodingPath = ()) -> Any:
    """
    Convert a JSON-like value into an instance of ``type_``.

    ``None`` and ``Any`` return ``data`` unchanged; so do string annotations
    that could not be resolved.
    """
    if type_ is None or type_ is Any or isinstance(type_, (str, typing.ForwardRef)):
        return data

    origin = typing.get_origin(type_)
    args = typing.get_args(type_)

    if _is_union(origin):
        members = [arg for arg in args if arg is not type(None)]
        if data is None:
            if len(members) < len(args):
                return None
            raise ValueNotFoundError(type_, coding_path)
        if len(members) == 1:
            return decode_value(data, members[0], coding_path)
        for member in members:
            try:
                return decode_value(data, member, coding_path)
            except DecodingError:
                continue
        raise TypeMismatchError(type_, data, coding_path)

    if data is None:
        raise ValueNotFoundError(type_, coding_path)

    if origin is not None:
        return _decode_generic(data, type_, origin, args, coding_path)

    if not isinstance(type_, type):
        return data

    codec = _CODECS.get(type_)
    if codec is not None and codec.decode is not None:
        return codec.decode(Decoder(data, coding_path))

    if issubclass(type_, Enum):
        try:
            return type_(data)
        except ValueError:
            raise DataCorruptedError(f"Invalid value: {data}", coding_path) from None

    if type_ is float and isinstance(data, int) and not isinstance(data, bool):
        return float(data)
    if type_ is int and isinstance(data, bool):
        raise TypeMismatchError(type_, data, coding_path)
    if type_ in _PRIMITIVES:
        if isinstance(data, type_):
            return data
        raise TypeMismatchError(type_, data, coding_path)

    if _has_classmethod(type_, "decode"):
        return type_.decode(Decoder(data, coding_path))
    if isinstance(data, type_):
        return data

    raise TypeMismatchError(type_, data, coding_path)


def _decode_generic(
    data: Any, type_: Any, origin: Any, args: Tuple[Any, ...], coding_path: CodingPath
) -> Any:
    if origin in (list, set, frozenset, collections.abc.Sequence, collections.abc.Set):
        if not isinstance(data, list):
            raise TypeMismatchError(list, data, coding_path)
        item_type = args[0] if args else None
        items = [
            decode_value(item, item_type, coding_path + (str(index),))
            for index, item in enumerate(data)
        ]
        return items if origin in (list, collections.abc.Sequence) else origin(items)

    if origin is tuple:
        if not isinstance(data, list):
            raise TypeMismatchError(tuple, data, coding_path)
        if len(args) == 2 and args[1] is Ellipsis:
            item_types = [args[0]] * len(data)
        else:
            item_types = list(args) or [None] * len(data)
        if len(item_types) != len(data):
            raise TypeMismatchError(type_, data, coding_path)
        return tuple(
            decode_value(item, item_type, coding_path + (str(index),))
            for index, (item, item_type) in enumerate(zip(data, item_types))
        )

    if origin in (dict, collections.abc.Mapping):
        if not isinstance(data, dict):
            raise TypeMismatchError(dict, data, coding_path)
        value_type = args[1] if len(args) == 2 else None
        return {
            key: decode_value(item, value_type, coding_path + (str(key),))
            for key, item in data.items()
        }

    if origin is typing.Literal:
        if data in args:
            return data
        raise DataCorruptedError(f"Invalid value: {data}", coding_path)

    return data


class KeyedEncodingContainer:
    """Writes keyed values into a dict."""

    def __init__(self, storage: Dict[str, Any], coding_path: CodingPath = ()):
        self._storage = storage
        self.coding_path = tuple(coding_path)

    def encode(self, value: Any, key: str) -> None:
        """Write ``value`` under ``key``; ``None`` is written as null."""
        self._storage[key] = encode_value(value, self.coding_path + (key,))

    def encode_if_present(self, value: Any, key: str) -> None:
        """Write ``value`` under ``key`` unless it is ``None``; the key is omitted then."""
        if value is not None:
            self.encode(value, key)

    def nested_container(self, key: str) -> "KeyedEncodingContainer":
        """Keyed container stored under ``key``, created on first use."""
        nested = self._storage.setdefault(key, {})
        if not isinstance(nested, dict):
            raise EncodingError.invalid_value(
                nested,
                self.coding_path + (key,),
                f"Key '{key}' already holds a value that is not a container",
            )
        return KeyedEncodingContainer(nested, self.coding_path + (key,))


class SingleValueEncodingContainer:
    """Writes exactly one value."""

    def __init__(self, encoder: "Encoder"):
        self._encoder = encoder
        self.coding_path = encoder.coding_path

    def encode(self, value: Any) -> None:
        self._encoder._set_value(encode_value(value, self.coding_path))

    def encode_nil(self) -> None:
        self._encoder._set_value(None)


_UNSET = object()


class Encoder:
    """Builds the representation of one value."""

    def __init__(self, coding_path: CodingPath = (), user_info: Optional[Mapping[str, Any]] = None):
        self.coding_path = tuple(coding_path)
        self.user_info = dict(user_info or {})
        self._value: Any = _UNSET

    @property
    def value(self) -> Any:
        """The representation written so far (``None`` if nothing was written)."""
        return None if self._value is _UNSET else self._value

    def container(self) -> KeyedEncodingContainer:
        """Top-level keyed container."""
        if self._value is _UNSET:
            self._value = {}
        elif not isinstance(self._value, dict):
            raise EncodingError.invalid_value(
                self._value, self.coding_path, "Encoder already holds a single value"
            )
        return KeyedEncodingContainer(self._value, self.coding_path)

    def single_value_container(self) -> SingleValueEncodingContainer:
        return SingleValueEncodingContainer(self)

    def _set_value(self, value: Any) -> None:
        if self._value is not _UNSET:
            raise EncodingError.invalid_value(
                value, self.coding_path, "Encoder already holds a value"
            )
        self._value = value


class KeyedDecodingContainer:
    """Reads keyed values from a dict."""

    def __init__(self, data: Mapping[str, Any], coding_path: CodingPath = ()):
        self._data = data
        self.coding_path = tuple(coding_path)

    @property
    def all_keys(self) -> list:
        return list(self._data.keys())

    def contains(self, key: str) -> bool:
        return key in self._data

    def decode(self, key: str, type_: Any = None) -> Any:
        """Read the value under ``key``; a missing key is an error."""
        if key not in self._data:
            raise KeyNotFoundError(key, self.coding_path)
        return decode_value(self._data[key], type_, self.coding_path + (key,))

    def decode_if_present(self, key: str, type_: Any = None) -> Any:
        """Read the value under ``key``; missing keys and nulls yield ``None``."""
        if self._data.get(key) is None:
            return None
        return decode_value(self._data[key], type_, self.coding_path + (key,))

    def nested_container(self, key: str) -> "KeyedDecodingContainer":
        """Keyed container stored under ``key``."""
        if key not in self._data:
            raise KeyNotFoundError(key, self.coding_path)
        nested = self._data[key]
        if not isinstance(nested, Mapping):
            raise TypeMismatchError(dict, nested, self.coding_path + (key,))
        return KeyedDecodingContainer(nested, self.coding_path + (key,))


class SingleValueDecodingContainer:
    """Reads exactly one value."""

    def __init__(self, data: Any, coding_path: CodingPath = ()):
        self._data = data
        self.coding_path = tuple(coding_path)

    def decode_nil(self) -> bool:
        return self._data is None

    def decode(self, type_: Any = None) -> Any:
        return decode_value(self._data, type_, self.coding_path)


class Decoder:
    """Reads the representation of one value."""

    def __init__(self, data: Any, coding_path: CodingPath = (), user_info: Optional[Mapping[str, Any]] = None):
        self.data = data
        self.coding_path = tuple(coding_path)
        self.user_info = dict(user_info or {})

    def container(self) -> KeyedDecodingContainer:
        """Top-level keyed container; the data must be an object."""
        if not isinstance(self.data, Mapping):
            raise TypeMismatchError(dict, self.data, self.coding_path)
        return KeyedDecodingContainer(self.data, self.coding_path)

    def single_value_container(self) -> SingleValueDecodingContainer:
        return SingleValueDecodingContainer(self.data, self.coding_path)


def encode(value: Any) -> Any:
    """Representation of ``value`` as a JSON-like tree."""
    return encode_value(value)


def decode(cls: typing.Type[T], data: Any) -> T:
    """Instance of ``cls`` read from a JSON-like tree."""
    return decode_value(data, cls)


def encode_json(value: Any, **kwargs: Any) -> str:
    """Serialize ``value`` to JSON text; keyword arguments go to :func:`json.dumps`."""
    return json.dumps(encode_value(value), **kwargs)


def decode_json(text: str | bytes, cls: typing.Type[T]) -> T:
    """Parse JSON text and decode it as ``cls``."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DataCorruptedError(f"Invalid JSON: {e}") from e
    return decode_value(data, cls)
