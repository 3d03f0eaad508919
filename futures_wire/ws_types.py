"""Type definitions for the futures user-data WebSocket stream.

Every frame is an envelope tagged by its ``e`` field. The payloads use the
exchange's compact single-character keys; each field below names its key
explicitly.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import ClassVar, TypeAlias

from futures_wire.codec import JsonObject, JsonValue
from futures_wire.errors import MissingRequiredField, UnknownEventType
from futures_wire.helpers import (
    decode_record,
    deserialize_response,
    encode_record,
    expect_object,
    wire,
)
from futures_wire.types import (
    ExecutionType,
    MarginType,
    OrderId,
    OrderSide,
    OrderStatus,
    OrderType,
    PositionSide,
    TimeInForce,
    WorkingType,
)

log = logging.getLogger(__name__)


# ============================================================================
# ENUMS
# ============================================================================


class ReasonType(Enum):
    """Reason an account update was pushed."""

    DEPOSIT = "DEPOSIT"
    WITHDRAW = "WITHDRAW"
    ORDER = "ORDER"
    FUNDING_FEE = "FUNDING_FEE"
    WITHDRAW_REJECT = "WITHDRAW_REJECT"
    ADJUSTMENT = "ADJUSTMENT"
    INSURANCE_CLEAR = "INSURANCE_CLEAR"
    ADMIN_DEPOSIT = "ADMIN_DEPOSIT"
    ADMIN_WITHDRAW = "ADMIN_WITHDRAW"
    MARGIN_TRANSFER = "MARGIN_TRANSFER"
    MARGIN_TYPE_CHANGE = "MARGIN_TYPE_CHANGE"
    ASSET_TRANSFER = "ASSET_TRANSFER"
    OPTIONS_PREMIUM_FEE = "OPTIONS_PREMIUM_FEE"
    OPTIONS_SETTLE_PROFIT = "OPTIONS_SETTLE_PROFIT"
    AUTO_EXCHANGE = "AUTO_EXCHANGE"
    COIN_SWAP_DEPOSIT = "COIN_SWAP_DEPOSIT"
    COIN_SWAP_WITHDRAW = "COIN_SWAP_WITHDRAW"


class PriceMatch(Enum):
    """Price match mode of an order.

    Numbered tags are spelled as the exchange sends them (``OPPONENT_5``), with
    an underscore before the digit.
    """

    # No price match
    NONE = "NONE"
    # Counterparty best price
    OPPONENT = "OPPONENT"
    OPPONENT_5 = "OPPONENT_5"
    OPPONENT_10 = "OPPONENT_10"
    OPPONENT_20 = "OPPONENT_20"
    # Best price on the same side of the book
    QUEUE = "QUEUE"
    QUEUE_5 = "QUEUE_5"
    QUEUE_10 = "QUEUE_10"
    QUEUE_20 = "QUEUE_20"


class SelfTradePreventionMode(Enum):
    """What happens to an order that would trade against the same account."""

    NONE = "NONE"
    EXPIRE_TAKER = "EXPIRE_TAKER"
    EXPIRE_BOTH = "EXPIRE_BOTH"
    EXPIRE_MAKER = "EXPIRE_MAKER"


# ============================================================================
# ACCOUNT UPDATE
# ============================================================================


@dataclass(frozen=True, kw_only=True)
class Balance:
    """Balance change of one asset."""

    asset: str = wire("a")
    wallet_balance: Decimal = wire("wb")
    cross_wallet_balance: Decimal = wire("cw")
    balance_change: Decimal = wire("bc")


@dataclass(frozen=True, kw_only=True)
class Position:
    """Position change pushed with an account update."""

    symbol: str = wire("s")
    position_amount: Decimal = wire("pa")
    entry_price: Decimal = wire("ep")
    breakeven_price: Decimal = wire("bep")
    accumulated_realized: Decimal = wire("cr")
    unrealized_profit: Decimal = wire("up")
    margin_type: MarginType = wire("mt")
    isolated_wallet: Decimal = wire("iw")
    position_side: PositionSide = wire("ps")


@dataclass(frozen=True, kw_only=True)
class Account:
    """Account payload of an update: why it happened and what changed."""

    reason_type: ReasonType = wire("m")
    balances: list[Balance] = wire("B")
    positions: list[Position] = wire("P")


@dataclass(frozen=True, kw_only=True)
class AccountUpdate:
    """Balance and position update."""

    event_type: ClassVar[str] = "ACCOUNT_UPDATE"

    event_time: int = wire("E")
    transaction_time: int = wire("T")
    account: Account = wire("a")

    def to_wire(self) -> JsonObject:
        return {"e": self.event_type, **encode_record(self)}


# ============================================================================
# ORDER TRADE UPDATE
# ============================================================================


@dataclass(frozen=True, kw_only=True)
class Order:
    """One order state transition.

    ``commission`` and ``commission_asset`` are only sent with trades;
    ``activation_price`` and ``callback_rate`` only for trailing stops.
    """

    symbol: str = wire("s")
    client_order_id: str = wire("c")
    side: OrderSide = wire("S")
    order_type: OrderType = wire("o")
    time_in_force: TimeInForce = wire("f")
    quantity: Decimal = wire("q")
    price: Decimal = wire("p")
    average_price: Decimal = wire("ap")
    stop_price: Decimal = wire("sp")
    execution_type: ExecutionType = wire("x")
    order_status: OrderStatus = wire("X")
    order_id: OrderId = wire("i")
    order_last_filled_quantity: Decimal = wire("l")
    order_filled_accumulated_quantity: Decimal = wire("z")
    last_filled_price: Decimal = wire("L")
    commission: Decimal | None = wire("n")
    commission_asset: str | None = wire("N")
    order_trade_time: int = wire("T")
    trade_id: int = wire("t")
    bid_notional: Decimal = wire("b")
    ask_notional: Decimal = wire("a")
    is_maker: bool = wire("m")
    is_reduce: bool = wire("R")
    working_type: WorkingType = wire("wt")
    original_order_type: OrderType = wire("ot")
    position_side: PositionSide = wire("ps")
    close_position: bool = wire("cp")
    activation_price: Decimal | None = wire("AP")
    callback_rate: Decimal | None = wire("cr")
    price_protect: bool = wire("pP")
    realized_profit: Decimal = wire("rp")
    stp_mode: SelfTradePreventionMode = wire("V")
    price_match: PriceMatch = wire("pm")
    good_till_date: int = wire("gtd")


@dataclass(frozen=True, kw_only=True)
class OrderTradeUpdate:
    """Order placement, fill, cancel or expiry."""

    event_type: ClassVar[str] = "ORDER_TRADE_UPDATE"

    event_time: int = wire("E")
    transaction_time: int = wire("T")
    order: Order = wire("o")

    def to_wire(self) -> JsonObject:
        return {"e": self.event_type, **encode_record(self)}


# ============================================================================
# ENVELOPE
# ============================================================================

WebsocketEvent: TypeAlias = AccountUpdate | OrderTradeUpdate

EVENT_TYPES: dict[str, type[AccountUpdate] | type[OrderTradeUpdate]] = {
    AccountUpdate.event_type: AccountUpdate,
    OrderTradeUpdate.event_type: OrderTradeUpdate,
}


def decode_websocket_event(frame: bytes | str | JsonValue) -> WebsocketEvent:
    """Decode a user-data stream frame into its event.

    Unlike symbol filters, an unknown event has no safe fallback and is an
    error.

    Args:
        frame: Raw frame payload, or an already parsed JSON object

    Returns:
        AccountUpdate or OrderTradeUpdate

    Raises:
        MissingRequiredField: If the envelope has no ``e`` tag
        UnknownEventType: If ``e`` names an event this package does not model
        DeserializationError: If the frame or its payload is malformed

    """
    if isinstance(frame, (bytes, str)):
        frame = deserialize_response(frame)
    envelope = expect_object(frame)

    if "e" not in envelope:
        raise MissingRequiredField("e", "WebsocketEvent")
    tag = envelope["e"]
    event_cls = EVENT_TYPES.get(tag) if isinstance(tag, str) else None
    if event_cls is None:
        raise UnknownEventType(tag)

    log.debug("Decoding %s event", tag)
    return decode_record(event_cls, envelope)
