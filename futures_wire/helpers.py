"""Helper utilities for the futures wire layer.

This module contains the record schema machinery used by every typed record,
plus serialization, deserialization, exchange error detection and display
helpers.
"""

import json
import logging
from dataclasses import MISSING, Field, dataclass, field, fields, is_dataclass
from decimal import Decimal
from enum import Enum
from functools import lru_cache, partial
from types import NoneType, UnionType
from typing import (
    Any,
    Callable,
    TypeAlias,
    TypeVar,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

import orjson
from prettyprinter import cpprint

from futures_wire.codec import (
    JsonObject,
    JsonValue,
    decode_exact_number,
    decode_exact_number_optional,
    encode_exact_number,
    expect_bool,
    expect_int,
    expect_str,
)
from futures_wire.errors import (
    DeserializationError,
    ExchangeError,
    MissingRequiredField,
    SequenceElementError,
    SerializationError,
    UnknownEnumVariant,
)

log = logging.getLogger(__name__)


# ============================================================================
# CONSTANTS
# ============================================================================

DEFAULT_REST_URL: str = "https://fapi.binance.com"
DEFAULT_WS_URL: str = "wss://fstream.binance.com"
DEFAULT_RECV_WINDOW: int = 5000

T = TypeVar("T")
E = TypeVar("E", bound=Enum)

Decoder: TypeAlias = Callable[[JsonValue], Any]


# ============================================================================
# FIELD DECLARATION
# ============================================================================


def wire(
    key: str | None = None,
    *,
    decode: Decoder | None = None,
    default: Any = MISSING,
) -> Any:
    """Declare how a record field is bound to its wire representation.

    Args:
        key: Wire key of the field. Defaults to the camelCase form of the field name.
        decode: Decoder for the raw JSON value. Defaults to one inferred from the
            field annotation.
        default: Value used when the key is absent from the payload. Fields
            without a default are required unless their annotation allows None.

    """
    return field(default=default, metadata={"wire_key": key, "decode": decode})


def camel_case(name: str) -> str:
    """Convert a snake_case field name to its camelCase wire key."""
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


@dataclass(frozen=True)
class WireField:
    """Resolved wire binding of one record field."""

    name: str
    key: str
    decode: Decoder
    optional: bool
    default: Any


# ============================================================================
# REFLECTION UTILITIES
# ============================================================================


def _is_optional(annotation: Any) -> bool:
    return get_origin(annotation) in (Union, UnionType) and NoneType in get_args(
        annotation
    )


def _optional(decode: Decoder, value: JsonValue) -> Any:
    if value is None:
        return None
    return decode(value)


def expect_object(value: JsonValue) -> JsonObject:
    if not isinstance(value, dict):
        raise DeserializationError(f"Expected JSON object, got {value!r}")
    return value


def decoder_for(annotation: Any) -> Decoder:
    """Infer the decoder for a field annotation.

    Raises:
        TypeError: If no decoder can be inferred; declare one with ``wire(decode=...)``.

    """
    origin, args = get_origin(annotation), get_args(annotation)

    if origin in (Union, UnionType):
        members = [arg for arg in args if arg is not NoneType]
        if len(members) != 1:
            raise TypeError(f"No wire decoder for {annotation}")
        if members[0] is Decimal:
            return decode_exact_number_optional
        return partial(_optional, decoder_for(members[0]))
    if origin is list:
        return partial(decode_sequence, decoder_for(args[0]))
    if origin is dict:
        return expect_object

    if annotation is Decimal:
        return decode_exact_number
    if annotation is str:
        return expect_str
    # bool before int, bool is an int subclass
    if annotation is bool:
        return expect_bool
    if annotation is int:
        return expect_int
    if isinstance(annotation, type) and issubclass(annotation, Enum):
        return partial(decode_enum, annotation)
    if hasattr(annotation, "from_wire"):
        return annotation.from_wire
    if is_dataclass(annotation):
        return partial(decode_record, annotation)

    raise TypeError(f"No wire decoder for {annotation}")


@lru_cache(maxsize=None)
def record_schema(cls: type) -> tuple[WireField, ...]:
    """Resolve the wire binding of every field of a record class.

    The result is cached per class; records are immutable so the schema never
    changes after the class is defined.
    """
    hints = get_type_hints(cls)
    schema = []
    for f in fields(cls):
        annotation = hints[f.name]
        metadata = f.metadata
        schema.append(
            WireField(
                name=f.name,
                key=metadata.get("wire_key") or camel_case(f.name),
                decode=metadata.get("decode") or decoder_for(annotation),
                optional=_is_optional(annotation),
                default=_field_default(f),
            )
        )
    return tuple(schema)


def _field_default(f: Field) -> Any:
    if f.default_factory is not MISSING:
        return f.default_factory()
    return f.default


def _decoder_of(target: Any) -> Decoder:
    if hasattr(target, "from_wire"):
        return target.from_wire
    if isinstance(target, type) and is_dataclass(target):
        return partial(decode_record, target)
    return target


def _record_name(target: Any) -> str:
    if isinstance(target, partial):
        return _record_name(target.args[0]) if target.args else _record_name(target.func)
    # from_wire classmethods are bound to their record class
    owner = getattr(target, "__self__", None)
    if isinstance(owner, type):
        return owner.__name__
    return getattr(target, "__name__", repr(target))


# ============================================================================
# OBJECT CONSTRUCTION
# ============================================================================


def decode_enum(enum_cls: type[E], value: JsonValue) -> E:
    """Decode a wire tag into a member of a closed enumeration.

    Raises:
        UnknownEnumVariant: If the tag is not a member of the enumeration.

    """
    try:
        return enum_cls(value)
    except (ValueError, TypeError) as e:
        raise UnknownEnumVariant(enum_cls.__name__, value) from e


def decode_record(cls: type[T], data: JsonValue) -> T:
    """Decode one JSON object into a record.

    Decoding is all-or-nothing: the first field that is missing or fails its
    decoder aborts the whole record. Wire keys the record does not declare are
    ignored, so new fields added by the exchange never break decoding.

    Args:
        cls: Record dataclass declared with ``wire`` fields
        data: JSON object to decode

    Returns:
        Instance of cls

    Raises:
        MissingRequiredField: If a required key is absent
        DeserializationError: If any field value has the wrong shape

    """
    if not isinstance(data, dict):
        raise DeserializationError(
            f"Expected JSON object for {cls.__name__}, got {type(data).__name__}"
        )

    values: dict[str, Any] = {}
    for wf in record_schema(cls):
        if wf.key not in data:
            if wf.default is not MISSING:
                values[wf.name] = wf.default
            elif wf.optional:
                values[wf.name] = None
            else:
                raise MissingRequiredField(wf.key, cls.__name__)
            continue

        try:
            values[wf.name] = wf.decode(data[wf.key])
        except DeserializationError:
            raise
        except (TypeError, ValueError, ArithmeticError) as e:
            raise DeserializationError(
                f"Invalid value for {cls.__name__}.{wf.name}: {data[wf.key]!r}"
            ) from e

    return cls(**values)


def decode_sequence(element: type[T] | Callable[[JsonValue], T], data: JsonValue) -> list[T]:
    """Decode a homogeneous JSON array.

    Decoding stops at the first failing element. The raised error names the
    element index and chains the element's own error.

    Args:
        element: Record class or decoder applied to each element
        data: JSON array to decode

    Raises:
        SequenceElementError: If an element fails to decode
        DeserializationError: If data is not a JSON array

    """
    decode = _decoder_of(element)
    name = _record_name(element)
    if not isinstance(data, list):
        raise DeserializationError(
            f"Expected JSON array of {name}, got {type(data).__name__}"
        )

    result = []
    for index, item in enumerate(data):
        try:
            result.append(decode(item))
        except DeserializationError as e:
            raise SequenceElementError(index, name, e.message) from e
    return result


# ============================================================================
# ENCODING
# ============================================================================


def encode_value(value: Any) -> JsonValue:
    """Encode a decoded value back into its wire representation."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return encode_exact_number(value)
    if hasattr(value, "to_wire"):
        return value.to_wire()
    if is_dataclass(value) and not isinstance(value, type):
        return encode_record(value)
    if isinstance(value, (list, tuple)):
        return [encode_value(item) for item in value]
    if isinstance(value, dict):
        return {key: encode_value(item) for key, item in value.items()}
    return value


def encode_record(record: Any) -> JsonObject:
    """Encode a record into a JSON object keyed by wire keys.

    Fields holding None are omitted.
    """
    result: JsonObject = {}
    for wf in record_schema(type(record)):
        value = getattr(record, wf.name)
        if value is None:
            continue
        result[wf.key] = encode_value(value)
    return result


# ============================================================================
# SERIALIZATION / DESERIALIZATION
# ============================================================================


def serialize_request(request: Any) -> bytes | None:
    """Serialize a request object to JSON bytes.

    Records and Decimals are encoded to their wire form first.

    Args:
        request: Request data to serialize

    Returns:
        JSON bytes or None if request is None

    Raises:
        SerializationError: If serialization fails

    """
    if request is None:
        return None
    try:
        return orjson.dumps(encode_value(request))
    except SerializationError:
        raise
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Failed to serialize {request=}") from e


def deserialize_response(response_body: bytes | str) -> JsonValue:
    """Deserialize a JSON response body or WebSocket frame.

    Non-integer JSON numbers are parsed straight to Decimal so no literal ever
    passes through a float. orjson has no such mode, so inbound documents use
    the standard json parser; outbound encoding stays on orjson.

    Raises:
        DeserializationError: If deserialization fails

    """
    try:
        return json.loads(
            response_body, parse_float=Decimal, parse_constant=_reject_constant
        )
    except ValueError as e:
        raise DeserializationError(f"Failed to parse JSON document: {e}") from e


def _reject_constant(name: str) -> None:
    # NaN and Infinity are not JSON
    raise ValueError(f"Invalid JSON constant {name}")


def check_exchange_error(document: JsonValue) -> None:
    """Raise ExchangeError if the document is the exchange's error body.

    Error bodies look like ``{"code": -2011, "msg": "Unknown order sent."}``.
    Some mutation endpoints answer success as ``{"code": 200, "msg": "success"}``,
    so only negative codes are treated as errors.

    Raises:
        ExchangeError: If the document carries a negative error code

    """
    if not isinstance(document, dict):
        return
    code = document.get("code")
    message = document.get("msg")
    if isinstance(code, int) and not isinstance(code, bool) and code < 0:
        raise ExchangeError(code, str(message))


def decode_response(
    target: type[T] | Callable[[JsonValue], T], response_body: bytes | str
) -> T:
    """Parse a JSON document and decode it into a record.

    Args:
        target: Record class, or a decoder such as ``decode_trades``
        response_body: Raw JSON bytes handed over by the transport

    Raises:
        ExchangeError: If the document is an exchange error body
        DeserializationError: If the document cannot be decoded

    """
    document = deserialize_response(response_body)
    check_exchange_error(document)
    return _decoder_of(target)(document)


# ============================================================================
# DISPLAY UTILITIES
# ============================================================================


def print_data(response: Any) -> None:
    """Pretty-print response data in its wire form.

    Records are converted to their wire dictionaries before printing so exact
    numbers show as the strings the exchange sent.

    Args:
        response: Data to print

    """
    if is_dataclass(response) and not isinstance(response, type):
        cpprint(encode_value(response))
    else:
        cpprint(response)
