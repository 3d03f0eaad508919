"""Scalar codec for exchange wire values.

The exchange renders the same numeric field as a JSON string in one endpoint
and as a JSON number in another, and quotes some integers and booleans. Every
such tolerance lives here so record definitions only have to say which kind of
value a field holds.
"""

import math
import re
from decimal import Decimal
from typing import TypeAlias

from futures_wire.errors import (
    DeserializationError,
    MalformedNumber,
    SerializationError,
)

# ============================================================================
# TYPE ALIASES
# ============================================================================

JsonObject: TypeAlias = dict[str, "JsonValue"]
JsonArray: TypeAlias = list["JsonValue"]
JsonValue: TypeAlias = (
    None | bool | int | float | str | Decimal | JsonObject | JsonArray
)

# ============================================================================
# NUMERIC CONVERSION UTILITIES
# ============================================================================

# ASCII digits only, matched against the whole string
DECIMAL_PATTERN = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)")
INTEGER_PATTERN = re.compile(r"[0-9]+")


def decode_exact_number(value: JsonValue) -> Decimal:
    """Decode a JSON string or JSON number into an exact Decimal.

    Strings are parsed directly. Documents parsed by ``deserialize_response``
    already carry JSON numbers as Decimal. Floats built by callers go through
    their shortest round-trip text form.

    Raises:
        MalformedNumber: If the value is not a decimal literal string or a finite number.

    """
    # bool is an int subclass but never a number on the wire
    if isinstance(value, bool):
        raise MalformedNumber(value)
    if isinstance(value, str):
        if not DECIMAL_PATTERN.fullmatch(value):
            raise MalformedNumber(value)
        return Decimal(value)
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise MalformedNumber(value)
        return Decimal(repr(value))
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise MalformedNumber(value)
        return value
    raise MalformedNumber(value)


def decode_exact_number_optional(value: JsonValue) -> Decimal | None:
    """Decode like decode_exact_number, mapping JSON null to None."""
    if value is None:
        return None
    return decode_exact_number(value)


def decode_integer(value: JsonValue) -> int:
    """Decode an unsigned integer rendered either as a JSON integer or a digit string."""
    if isinstance(value, bool):
        raise MalformedNumber(value)
    if isinstance(value, int):
        if value < 0:
            raise MalformedNumber(value)
        return value
    if isinstance(value, str) and INTEGER_PATTERN.fullmatch(value):
        return int(value)
    raise MalformedNumber(value)


def decode_boolean(value: JsonValue) -> bool:
    """Decode a native JSON boolean or one of the strings ``"true"`` / ``"false"``."""
    if isinstance(value, bool):
        return value
    if value == "true":
        return True
    if value == "false":
        return False
    raise DeserializationError(f"Invalid boolean {value!r}")


def encode_exact_number(value: Decimal) -> str:
    """Encode a Decimal as fixed-point text, keeping its scale.

    ``Decimal("1E-8")`` becomes ``"0.00000001"`` and ``Decimal("1.50")`` stays
    ``"1.50"``.

    Raises:
        SerializationError: If the value is not a finite Decimal.

    """
    if not isinstance(value, Decimal):
        raise SerializationError(f"Expected Decimal, got {type(value).__name__}")
    if not value.is_finite():
        raise SerializationError(f"Cannot encode non-finite number {value}")
    return format(value, "f")


# ============================================================================
# STRICT LEAF DECODERS
# ============================================================================


def expect_str(value: JsonValue) -> str:
    if not isinstance(value, str):
        raise DeserializationError(f"Expected string, got {value!r}")
    return value


def expect_int(value: JsonValue) -> int:
    # ids, counts and timestamps are all unsigned on the wire
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise DeserializationError(f"Expected unsigned integer, got {value!r}")
    return value


def expect_bool(value: JsonValue) -> bool:
    if not isinstance(value, bool):
        raise DeserializationError(f"Expected boolean, got {value!r}")
    return value
