"""Tests for the exception hierarchy."""

import pytest

import futures_wire
from futures_wire.errors import (
    BaseError,
    DeserializationError,
    ExchangeError,
    InvalidPeriod,
    MalformedNumber,
    MissingRequiredField,
    SequenceElementError,
    SerializationError,
    TransportError,
    UnknownEnumVariant,
    UnknownEventType,
    ValidationError,
)


@pytest.mark.parametrize(
    "error",
    [
        MalformedNumber("abc"),
        UnknownEnumVariant("OrderSide", "HOLD"),
        UnknownEventType("MARGIN_CALL"),
        MissingRequiredField("symbol", "Trade"),
        SequenceElementError(2, "Trade", "Malformed number 'abc'"),
    ],
)
def test_decode_errors_are_deserialization_errors(error):
    assert isinstance(error, DeserializationError)
    assert isinstance(error, TransportError)
    assert isinstance(error, BaseError)
    assert error.message == str(error)


def test_error_messages():
    assert str(ExchangeError(-1121, "Invalid symbol.")) == "[-1121] Invalid symbol."
    assert str(SequenceElementError(1, "Trade", "boom")) == "Failed to decode Trade at index 1: boom"
    assert str(InvalidPeriod("3m")) == "Invalid period '3m'"


def test_branches_are_disjoint():
    assert issubclass(SerializationError, TransportError)
    assert not issubclass(SerializationError, DeserializationError)
    assert issubclass(InvalidPeriod, ValidationError)
    assert not issubclass(ExchangeError, TransportError)


def test_version_is_exposed():
    assert isinstance(futures_wire.get_version(), str)
    assert futures_wire.get_version() == futures_wire.__version__
