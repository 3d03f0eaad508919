"""Typed wire layer for the futures REST API and user-data WebSocket stream."""

from importlib.metadata import PackageNotFoundError, version

from futures_wire.codec import (
    decode_boolean,
    decode_exact_number,
    decode_exact_number_optional,
    decode_integer,
    encode_exact_number,
)
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
from futures_wire.helpers import (
    decode_record,
    decode_response,
    decode_sequence,
    deserialize_response,
    encode_record,
    print_data,
    serialize_request,
)
from futures_wire.types import (
    PERIODS,
    AccountBalance,
    AccountInformation,
    ContractType,
    ExchangeInformation,
    Filters,
    HistoryQuery,
    IndexQuery,
    Order,
    OrderBook,
    OrderType,
    Position,
    Symbol,
    Transaction,
    decode_agg_trades,
    decode_filter,
    decode_liquidation_orders,
    decode_trades,
)
from futures_wire.ws_types import WebsocketEvent, decode_websocket_event

try:
    __version__ = version("futures-wire")
except PackageNotFoundError:
    __version__ = "unknown"


def get_version() -> str:
    return __version__


__all__ = [
    "PERIODS",
    "AccountBalance",
    "AccountInformation",
    "BaseError",
    "ContractType",
    "DeserializationError",
    "ExchangeError",
    "ExchangeInformation",
    "Filters",
    "HistoryQuery",
    "IndexQuery",
    "InvalidPeriod",
    "MalformedNumber",
    "MissingRequiredField",
    "Order",
    "OrderBook",
    "OrderType",
    "Position",
    "SequenceElementError",
    "SerializationError",
    "Symbol",
    "Transaction",
    "TransportError",
    "UnknownEnumVariant",
    "UnknownEventType",
    "ValidationError",
    "WebsocketEvent",
    "decode_agg_trades",
    "decode_boolean",
    "decode_exact_number",
    "decode_exact_number_optional",
    "decode_filter",
    "decode_integer",
    "decode_liquidation_orders",
    "decode_record",
    "decode_response",
    "decode_sequence",
    "decode_trades",
    "decode_websocket_event",
    "deserialize_response",
    "encode_exact_number",
    "encode_record",
    "get_version",
    "print_data",
    "serialize_request",
]
