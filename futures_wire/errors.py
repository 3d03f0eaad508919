"""Exception hierarchy for the futures wire layer.

This module defines the public exception hierarchy for the entire package. All
exceptions raised by this library inherit from BaseError.

Exception Hierarchy
-------------------
BaseError
├── ExchangeError - the exchange answered with an error document
├── TransportError - bytes could not be turned into values, or back
│   ├── DeserializationError - inbound payload does not match its record shape
│   │   ├── MalformedNumber
│   │   ├── UnknownEnumVariant
│   │   ├── UnknownEventType
│   │   ├── MissingRequiredField
│   │   └── SequenceElementError
│   └── SerializationError - outbound value cannot be encoded
└── ValidationError - client-side input validation failures
    └── InvalidPeriod
"""

from typing import Any


class BaseError(Exception):
    """Base exception for all futures wire errors.

    All exceptions raised by this library inherit from this class, allowing users
    to catch all package errors with a single except clause.

    This exception should not be raised directly. Use one of the specific subclasses
    instead (ExchangeError, TransportError, ValidationError).
    """

    pass


# ============================================================================
# EXCHANGE ERROR
# ============================================================================


class ExchangeError(BaseError):
    """Exception raised when a payload is the exchange's error document.

    The exchange reports rejected requests with a body of the form
    ``{"code": -1121, "msg": "Invalid symbol."}`` instead of the expected
    resource. Decoding such a body as a record would only produce a confusing
    missing-field error, so it is surfaced as this exception instead.
    """

    code: int
    message: str

    def __init__(self, code: int, message: str):
        """Initialize an ExchangeError.

        Args:
            code: The exchange error code (negative integer).
            message: The exchange error message.

        """
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


# ============================================================================
# TRANSPORT ERROR
# ============================================================================


class TransportError(BaseError):
    """Exception raised while turning exchange bytes into values, or back.

    TransportError indicates that:
    - Valid application-level data was not produced
    - Retrying the same bytes will fail the same way

    Common causes include:
    - Malformed or truncated JSON documents
    - Payloads whose shape drifted from the documented record
    - Outbound values that have no wire representation
    """

    pass


class DeserializationError(TransportError):
    """Raised when response data cannot be deserialized/decoded."""

    def __init__(self, message: str):
        """Initialize a DeserializationError.

        Args:
            message: Description of the deserialization error.

        """
        self.message = message
        super().__init__(message)


class MalformedNumber(DeserializationError):
    """Raised when a numeric field is neither a decimal literal string nor a JSON number."""

    value: Any

    def __init__(self, value: Any):
        """Initialize a MalformedNumber error.

        Args:
            value: The offending JSON value.

        """
        self.value = value
        super().__init__(f"Malformed number {value!r}")


class UnknownEnumVariant(DeserializationError):
    """Raised when a closed enumeration receives a wire tag it does not know."""

    enum_name: str
    tag: Any

    def __init__(self, enum_name: str, tag: Any):
        """Initialize an UnknownEnumVariant error.

        Args:
            enum_name: Name of the enumeration being decoded.
            tag: The unrecognized wire tag.

        """
        self.enum_name = enum_name
        self.tag = tag
        super().__init__(f"Unknown {enum_name} variant {tag!r}")


class UnknownEventType(DeserializationError):
    """Raised when a WebSocket envelope carries an unsupported event type."""

    tag: Any

    def __init__(self, tag: Any):
        """Initialize an UnknownEventType error.

        Args:
            tag: The value of the envelope's ``e`` field.

        """
        self.tag = tag
        super().__init__(f"Unknown event type {tag!r}")


class MissingRequiredField(DeserializationError):
    """Raised when a required wire key is absent from a payload."""

    field: str
    record: str

    def __init__(self, field: str, record: str):
        """Initialize a MissingRequiredField error.

        Args:
            field: The wire key that was expected.
            record: Name of the record being decoded.

        """
        self.field = field
        self.record = record
        super().__init__(f"Missing required field {field!r} for {record}")


class SequenceElementError(DeserializationError):
    """Raised when one element of a batch response fails to decode.

    The original failure is available as ``__cause__``.
    """

    index: int
    record: str

    def __init__(self, index: int, record: str, reason: str):
        """Initialize a SequenceElementError.

        Args:
            index: Zero-based position of the failing element.
            record: Name of the record the element was decoded as.
            reason: Message of the underlying failure.

        """
        self.index = index
        self.record = record
        super().__init__(f"Failed to decode {record} at index {index}: {reason}")


class SerializationError(TransportError):
    """Raised when request data cannot be serialized/encoded."""

    def __init__(self, message: str):
        """Initialize a SerializationError.

        Args:
            message: Description of the serialization error.

        """
        self.message = message
        super().__init__(message)


# ============================================================================
# VALIDATION ERROR
# ============================================================================


class ValidationError(BaseError):
    """Exception raised for client-side input validation failures.

    This exception is raised when outbound parameters fail validation checks before
    any request is sent to the exchange.

    ValidationError indicates that:
    - No network request was attempted
    - The error is due to invalid input from the caller
    - The error can be fixed by correcting the input parameters
    """

    pass


class InvalidPeriod(ValidationError):
    """Raised when a historical query uses a period outside the allowed set."""

    period: str

    def __init__(self, period: str):
        """Initialize an InvalidPeriod error.

        Args:
            period: The rejected period token.

        """
        self.period = period
        super().__init__(f"Invalid period {period!r}")
