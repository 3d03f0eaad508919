"""Tests for the scalar codec."""

from decimal import Decimal

import pytest

from futures_wire.codec import (
    decode_boolean,
    decode_exact_number,
    decode_exact_number_optional,
    decode_integer,
    encode_exact_number,
    expect_bool,
    expect_int,
    expect_str,
)
from futures_wire.errors import (
    DeserializationError,
    MalformedNumber,
    SerializationError,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("0.00100000", Decimal("0.00100000")),
        ("-87.94400000", Decimal("-87.94400000")),
        ("+1.5", Decimal("1.5")),
        (".5", Decimal("0.5")),
        ("5.", Decimal("5")),
        ("4529764", Decimal("4529764")),
        (0, Decimal(0)),
        (2400, Decimal(2400)),
        (-3, Decimal(-3)),
        (0.1, Decimal("0.1")),
        (64999.9, Decimal("64999.9")),
        (Decimal("1.50"), Decimal("1.50")),
    ],
)
def test_decode_exact_number(value, expected):
    result = decode_exact_number(value)

    assert isinstance(result, Decimal)
    assert result == expected


def test_string_and_number_forms_decode_equal():
    assert decode_exact_number("0.001") == decode_exact_number(0.001)
    assert decode_exact_number("100") == decode_exact_number(100)


def test_float_decodes_to_its_literal_not_its_binary_value():
    # Decimal(0.1) would be 0.1000000000000000055511151231257827...
    assert str(decode_exact_number(0.1)) == "0.1"
    assert decode_exact_number(0.1) + decode_exact_number(0.2) == Decimal("0.3")


@pytest.mark.parametrize(
    "value",
    ["abc", "", "1e5", "NaN", "Infinity", "1.2.3", " 1", "1.5\n", "١٢", "1.5 ", True, False, None, [], {}, float("nan"), float("inf"), Decimal("NaN")],
)
def test_decode_exact_number_rejects(value):
    with pytest.raises(MalformedNumber) as exc_info:
        decode_exact_number(value)

    assert exc_info.value.value is value or exc_info.value.value == value
    assert isinstance(exc_info.value, DeserializationError)


def test_decode_exact_number_optional():
    assert decode_exact_number_optional(None) is None
    assert decode_exact_number_optional("0.3") == Decimal("0.3")
    assert decode_exact_number_optional(7) == Decimal(7)

    with pytest.raises(MalformedNumber):
        decode_exact_number_optional("x")


@pytest.mark.parametrize("value, expected", [(20, 20), ("20", 20), ("0", 0), (0, 0)])
def test_decode_integer(value, expected):
    assert decode_integer(value) == expected


@pytest.mark.parametrize("value", ["-1", -1, "1.5", 1.5, "", "twenty", "20\n", "٢٠", True, None])
def test_decode_integer_rejects(value):
    with pytest.raises(MalformedNumber):
        decode_integer(value)


@pytest.mark.parametrize(
    "value, expected", [(True, True), (False, False), ("true", True), ("false", False)]
)
def test_decode_boolean(value, expected):
    assert decode_boolean(value) is expected


@pytest.mark.parametrize("value", ["True", "yes", 1, 0, None, ""])
def test_decode_boolean_rejects(value):
    with pytest.raises(DeserializationError):
        decode_boolean(value)


@pytest.mark.parametrize(
    "value, expected",
    [
        (Decimal("1E-8"), "0.00000001"),
        (Decimal("1.50"), "1.50"),
        (Decimal("-0.03750000"), "-0.03750000"),
        (Decimal("1E+3"), "1000"),
        (Decimal(0), "0"),
    ],
)
def test_encode_exact_number(value, expected):
    assert encode_exact_number(value) == expected


@pytest.mark.parametrize("literal", ["0.00000001", "123456789.123456789012345678", "-42", "7.000"])
def test_encode_then_decode_is_identity(literal):
    value = Decimal(literal)

    encoded = encode_exact_number(value)

    assert decode_exact_number(encoded) == value
    assert encoded == literal


@pytest.mark.parametrize("value", [Decimal("NaN"), Decimal("Infinity"), 1.5, "1.5"])
def test_encode_exact_number_rejects(value):
    with pytest.raises(SerializationError):
        encode_exact_number(value)


def test_strict_leaf_decoders():
    assert expect_str("BTCUSDT") == "BTCUSDT"
    assert expect_int(5) == 5
    assert expect_bool(False) is False

    with pytest.raises(DeserializationError):
        expect_str(5)
    with pytest.raises(DeserializationError):
        expect_int(True)
    with pytest.raises(DeserializationError):
        expect_int("5")
    with pytest.raises(DeserializationError):
        expect_int(-5)
    with pytest.raises(DeserializationError):
        expect_bool("true")
