"""Type definitions for the futures REST API.

This module contains the closed enumerations, the symbol filter union, the
REST resource records and the outbound query parameter types, organized into
logical sections for clarity.

Records are frozen dataclasses. Field names are snake_case and map to the
camelCase wire key of the same name unless the field declares a rename with
``wire("wireKey")``.
"""

import logging
from dataclasses import asdict, dataclass
from decimal import Decimal
from enum import Enum
from functools import partial
from typing import Any, ClassVar, Self, TypeAlias
from urllib.parse import urlencode

from futures_wire.codec import (
    JsonArray,
    JsonObject,
    JsonValue,
    decode_boolean,
    decode_exact_number,
    decode_integer,
    encode_exact_number,
)
from futures_wire.errors import (
    DeserializationError,
    InvalidPeriod,
    MissingRequiredField,
)
from futures_wire.helpers import (
    camel_case,
    decode_record,
    decode_sequence,
    encode_record,
    expect_object,
    wire,
)

log = logging.getLogger(__name__)

# ============================================================================
# TYPE ALIASES
# ============================================================================

# Although JsonArray is first class json and can be root, most endpoints answer with an object
Json: TypeAlias = JsonObject

OrderId: TypeAlias = int

ZERO = Decimal("0")

# Intervals accepted by the historical statistics endpoints
PERIODS: tuple[str, ...] = ("5m", "15m", "30m", "1h", "2h", "4h", "6h", "12h", "1d")


# ============================================================================
# CORE ENUMS
# ============================================================================


class OrderSide(Enum):
    """Order side."""

    BUY = "BUY"
    SELL = "SELL"


class OrderStatus(Enum):
    """Order status."""

    NEW = "NEW"
    PARTIALLY_FILLED = "PARTIALLY_FILLED"
    FILLED = "FILLED"
    CANCELED = "CANCELED"
    PENDING_CANCEL = "PENDING_CANCEL"
    REJECTED = "REJECTED"
    EXPIRED = "EXPIRED"
    EXPIRED_IN_MATCH = "EXPIRED_IN_MATCH"


class OrderType(Enum):
    """Order type."""

    LIMIT = "LIMIT"
    MARKET = "MARKET"
    STOP = "STOP"
    STOP_MARKET = "STOP_MARKET"
    TAKE_PROFIT = "TAKE_PROFIT"
    TAKE_PROFIT_MARKET = "TAKE_PROFIT_MARKET"
    TRAILING_STOP_MARKET = "TRAILING_STOP_MARKET"

    @classmethod
    def default(cls) -> "OrderType":
        """Order type assumed when an endpoint omits it: a market order."""
        return cls.MARKET


class TimeInForce(Enum):
    """Time in force."""

    GTC = "GTC"
    IOC = "IOC"
    FOK = "FOK"
    GTX = "GTX"
    GTD = "GTD"


class ExecutionType(Enum):
    """Execution type reported with an order update."""

    NEW = "NEW"
    CANCELED = "CANCELED"
    CALCULATED = "CALCULATED"
    EXPIRED = "EXPIRED"
    TRADE = "TRADE"
    AMENDMENT = "AMENDMENT"
    REPLACED = "REPLACED"
    REJECTED = "REJECTED"


class ContractType(Enum):
    """Contract type of a futures symbol.

    EMPTY is sent for delisted and placeholder symbols. It carries no trading
    meaning and is surfaced as is.
    """

    PERPETUAL = "PERPETUAL"
    CURRENT_MONTH = "CURRENT_MONTH"
    NEXT_MONTH = "NEXT_MONTH"
    CURRENT_QUARTER = "CURRENT_QUARTER"
    NEXT_QUARTER = "NEXT_QUARTER"
    CURRENT_QUARTER_DELIVERING = "CURRENT_QUARTER DELIVERING"
    PERPETUAL_DELIVERING = "PERPETUAL_DELIVERING"
    EMPTY = ""


class SymbolStatus(Enum):
    """Trading status of a symbol."""

    PRE_TRADING = "PRE_TRADING"
    TRADING = "TRADING"
    POST_TRADING = "POST_TRADING"
    END_OF_DAY = "END_OF_DAY"
    HALT = "HALT"
    AUCTION_MATCH = "AUCTION_MATCH"
    BREAK = "BREAK"
    PENDING_TRADING = "PENDING_TRADING"
    PRE_DELIVERING = "PRE_DELIVERING"
    DELIVERING = "DELIVERING"
    DELIVERED = "DELIVERED"
    PRE_SETTLE = "PRE_SETTLE"
    SETTLING = "SETTLING"
    CLOSE = "CLOSE"


class PositionSide(Enum):
    """Position side. BOTH in one-way mode, LONG/SHORT in hedge mode."""

    BOTH = "BOTH"
    LONG = "LONG"
    SHORT = "SHORT"


class WorkingType(Enum):
    """Price a stop order is triggered on."""

    MARK_PRICE = "MARK_PRICE"
    CONTRACT_PRICE = "CONTRACT_PRICE"


class MarginType(Enum):
    """Margin type of a position. Lower-case on the wire."""

    ISOLATED = "isolated"
    CROSS = "cross"


class RateLimitType(Enum):
    """Kind of request a rate limit applies to."""

    REQUEST_WEIGHT = "REQUEST_WEIGHT"
    ORDERS = "ORDERS"
    RAW_REQUESTS = "RAW_REQUESTS"


class RateLimitInterval(Enum):
    """Window unit of a rate limit."""

    SECOND = "SECOND"
    MINUTE = "MINUTE"
    DAY = "DAY"


# ============================================================================
# SYMBOL FILTER TYPES
# ============================================================================


class SymbolFilter:
    """Base of the known symbol filter variants.

    Each variant is selected on the wire by its ``filterType`` tag.
    """

    filter_type: ClassVar[str]

    def to_wire(self) -> JsonObject:
        return {"filterType": self.filter_type, **encode_record(self)}


@dataclass(frozen=True, kw_only=True)
class PriceFilter(SymbolFilter):
    """Price bounds and tick size."""

    filter_type: ClassVar[str] = "PRICE_FILTER"

    min_price: Decimal
    max_price: Decimal
    tick_size: Decimal


@dataclass(frozen=True, kw_only=True)
class LotSizeFilter(SymbolFilter):
    """Quantity bounds and step size for limit orders."""

    filter_type: ClassVar[str] = "LOT_SIZE"

    min_qty: Decimal
    max_qty: Decimal
    step_size: Decimal


@dataclass(frozen=True, kw_only=True)
class MarketLotSizeFilter(SymbolFilter):
    """Quantity bounds and step size for market orders."""

    filter_type: ClassVar[str] = "MARKET_LOT_SIZE"

    min_qty: Decimal
    max_qty: Decimal
    step_size: Decimal


@dataclass(frozen=True, kw_only=True)
class MaxNumOrdersFilter(SymbolFilter):
    """Maximum number of open orders."""

    filter_type: ClassVar[str] = "MAX_NUM_ORDERS"

    limit: int


@dataclass(frozen=True, kw_only=True)
class MaxNumAlgoOrdersFilter(SymbolFilter):
    """Maximum number of open conditional orders."""

    filter_type: ClassVar[str] = "MAX_NUM_ALGO_ORDERS"

    limit: int


@dataclass(frozen=True, kw_only=True)
class MinNotionalFilter(SymbolFilter):
    """Minimum order notional."""

    filter_type: ClassVar[str] = "MIN_NOTIONAL"

    notional: Decimal


@dataclass(frozen=True, kw_only=True)
class PercentPriceFilter(SymbolFilter):
    """Price band around the mark price."""

    filter_type: ClassVar[str] = "PERCENT_PRICE"

    multiplier_up: Decimal
    multiplier_down: Decimal
    multiplier_decimal: Decimal


@dataclass(frozen=True, kw_only=True)
class UnknownFilter:
    """A filter whose ``filterType`` this package does not know.

    The exchange adds filter kinds without notice. They decode to this variant
    so the surrounding symbol still decodes; the raw object is kept only for
    inspection.
    """

    filter_type: str
    raw: JsonObject

    def to_wire(self) -> JsonObject:
        return dict(self.raw)


Filters: TypeAlias = (
    PriceFilter
    | LotSizeFilter
    | MarketLotSizeFilter
    | MaxNumOrdersFilter
    | MaxNumAlgoOrdersFilter
    | MinNotionalFilter
    | PercentPriceFilter
    | UnknownFilter
)

FILTER_TYPES: dict[str, type[SymbolFilter]] = {
    filter_cls.filter_type: filter_cls
    for filter_cls in (
        PriceFilter,
        LotSizeFilter,
        MarketLotSizeFilter,
        MaxNumOrdersFilter,
        MaxNumAlgoOrdersFilter,
        MinNotionalFilter,
        PercentPriceFilter,
    )
}


def decode_filter(data: JsonValue) -> Filters:
    """Decode a symbol filter by its ``filterType`` tag.

    Known tags decode strictly into their variant. Unknown tags never fail and
    yield UnknownFilter.

    Raises:
        MissingRequiredField: If the object has no ``filterType``
        DeserializationError: If a known variant has malformed fields

    """
    obj = expect_object(data)
    if "filterType" not in obj:
        raise MissingRequiredField("filterType", "Filters")

    tag = obj["filterType"]
    if not isinstance(tag, str):
        raise DeserializationError(f"Invalid filterType {tag!r}")

    filter_cls = FILTER_TYPES.get(tag)
    if filter_cls is None:
        log.debug("Unrecognized filter type %s, keeping it as UnknownFilter", tag)
        return UnknownFilter(filter_type=tag, raw=obj)
    return decode_record(filter_cls, obj)


# ============================================================================
# EXCHANGE INFORMATION TYPES
# ============================================================================


@dataclass(frozen=True, kw_only=True)
class RateLimit:
    """A request rate limit."""

    rate_limit_type: RateLimitType
    interval: RateLimitInterval
    interval_num: int
    limit: int


@dataclass(frozen=True, kw_only=True)
class AssetDetail:
    """Margin asset description."""

    asset: str
    margin_available: bool
    auto_asset_exchange: Decimal


@dataclass(frozen=True, kw_only=True)
class Symbol:
    """Tradable futures contract with its precision and trading constraints."""

    symbol: str
    pair: str
    contract_type: ContractType
    delivery_date: int
    onboard_date: int
    status: SymbolStatus
    maint_margin_percent: Decimal
    required_margin_percent: Decimal
    base_asset: str
    quote_asset: str
    price_precision: int
    quantity_precision: int
    base_asset_precision: int
    quote_precision: int
    underlying_type: str
    underlying_sub_type: list[str]
    settle_plan: int
    trigger_protect: Decimal
    filters: list[Filters] = wire(decode=partial(decode_sequence, decode_filter))
    order_types: list[OrderType]
    time_in_force: list[TimeInForce]


@dataclass(frozen=True, kw_only=True)
class ExchangeInformation:
    """Exchange trading rules and symbol information."""

    timezone: str
    server_time: int
    futures_type: str
    rate_limits: list[RateLimit]
    exchange_filters: list[Filters] = wire(
        decode=partial(decode_sequence, decode_filter)
    )
    assets: list[AssetDetail]
    symbols: list[Symbol]


# ============================================================================
# MARKET DATA TYPES
# ============================================================================


@dataclass(frozen=True, kw_only=True)
class PriceLevel:
    """Single order book level, sent as a ``[price, qty]`` pair."""

    price: Decimal
    qty: Decimal

    @classmethod
    def from_wire(cls, data: JsonValue) -> Self:
        if not isinstance(data, list) or len(data) != 2:
            raise DeserializationError(f"Expected [price, qty] pair, got {data!r}")
        return cls(price=decode_exact_number(data[0]), qty=decode_exact_number(data[1]))

    def to_wire(self) -> JsonArray:
        return [encode_exact_number(self.price), encode_exact_number(self.qty)]


@dataclass(frozen=True, kw_only=True)
class OrderBook:
    """Order book depth snapshot."""

    last_update_id: int
    # Undocumented
    event_time: int = wire("E")
    # Undocumented
    trade_order_time: int = wire("T")
    bids: list[PriceLevel]
    asks: list[PriceLevel]


@dataclass(frozen=True, kw_only=True)
class PriceStats:
    """24 hour rolling window price change statistics."""

    symbol: str
    price_change: str
    price_change_percent: str
    weighted_avg_price: str
    last_price: Decimal
    open_price: Decimal
    high_price: Decimal
    low_price: Decimal
    volume: Decimal
    quote_volume: Decimal
    last_qty: Decimal
    open_time: int
    close_time: int
    first_id: int
    last_id: int
    count: int


@dataclass(frozen=True, kw_only=True)
class Trade:
    """Individual public trade."""

    id: int
    is_buyer_maker: bool
    price: Decimal
    qty: Decimal
    quote_qty: Decimal
    time: int


@dataclass(frozen=True, kw_only=True)
class AllTrades:
    """Recent trades, oldest first."""

    trades: list[Trade]

    @classmethod
    def from_wire(cls, data: JsonValue) -> Self:
        return cls(trades=decode_sequence(Trade, data))

    def to_wire(self) -> JsonArray:
        return [encode_record(trade) for trade in self.trades]


# Trade list endpoints answer with a bare array; the single variant leaves room for other shapes
Trades: TypeAlias = AllTrades


def decode_trades(data: JsonValue) -> Trades:
    return AllTrades.from_wire(data)


@dataclass(frozen=True, kw_only=True)
class AggTrade:
    """Compressed/aggregate trade."""

    time: int = wire("T")
    agg_id: int = wire("a")
    first_id: int = wire("f")
    last_id: int = wire("l")
    maker: bool = wire("m")
    price: Decimal = wire("p")
    qty: Decimal = wire("q")


@dataclass(frozen=True, kw_only=True)
class AllAggTrades:
    """Aggregate trades, oldest first."""

    agg_trades: list[AggTrade]

    @classmethod
    def from_wire(cls, data: JsonValue) -> Self:
        return cls(agg_trades=decode_sequence(AggTrade, data))

    def to_wire(self) -> JsonArray:
        return [encode_record(agg_trade) for agg_trade in self.agg_trades]


AggTrades: TypeAlias = AllAggTrades


def decode_agg_trades(data: JsonValue) -> AggTrades:
    return AllAggTrades.from_wire(data)


@dataclass(frozen=True, kw_only=True)
class MarkPrice:
    """Mark price and funding rate."""

    symbol: str
    mark_price: Decimal
    index_price: Decimal
    estimated_settle_price: Decimal
    last_funding_rate: Decimal
    next_funding_time: int
    interest_rate: Decimal
    time: int


@dataclass(frozen=True, kw_only=True)
class LiquidationOrder:
    """Forced liquidation order."""

    average_price: Decimal
    executed_qty: Decimal
    orig_qty: Decimal
    price: Decimal
    side: str
    status: str
    symbol: str
    time: int
    time_in_force: str
    order_type: str = wire("type")


@dataclass(frozen=True, kw_only=True)
class AllLiquidationOrders:
    """Liquidation orders, oldest first."""

    liquidation_orders: list[LiquidationOrder]

    @classmethod
    def from_wire(cls, data: JsonValue) -> Self:
        return cls(liquidation_orders=decode_sequence(LiquidationOrder, data))

    def to_wire(self) -> JsonArray:
        return [encode_record(order) for order in self.liquidation_orders]


LiquidationOrders: TypeAlias = AllLiquidationOrders


def decode_liquidation_orders(data: JsonValue) -> LiquidationOrders:
    return AllLiquidationOrders.from_wire(data)


@dataclass(frozen=True, kw_only=True)
class OpenInterest:
    """Present open interest of a symbol."""

    open_interest: Decimal
    symbol: str


@dataclass(frozen=True, kw_only=True)
class OpenInterestHistory:
    """Open interest statistics for one period."""

    symbol: str
    sum_open_interest: Decimal
    sum_open_interest_value: Decimal
    timestamp: int


@dataclass(frozen=True, kw_only=True)
class LongShortRatio:
    """Long/short account ratio for one period."""

    symbol: str
    long_account: Decimal
    long_short_ratio: Decimal
    short_account: Decimal
    timestamp: int


@dataclass(frozen=True, kw_only=True)
class FundingRate:
    """Funding rate history entry."""

    symbol: str
    funding_time: int
    funding_rate: Decimal


# ============================================================================
# ORDER TYPES
# ============================================================================


@dataclass(frozen=True, kw_only=True)
class Order:
    """Order as returned by the order query endpoints.

    ``stop_price``, ``activate_price`` and ``price_rate`` only apply to some
    order types and decode to zero when the key is absent.
    """

    client_order_id: str
    cum_quote: Decimal
    executed_qty: Decimal
    order_id: OrderId
    avg_price: Decimal
    orig_qty: Decimal
    price: Decimal
    side: OrderSide
    reduce_only: bool
    position_side: PositionSide
    status: OrderStatus
    stop_price: Decimal = wire(default=ZERO)
    close_position: bool
    symbol: str
    time_in_force: TimeInForce
    order_type: OrderType = wire("type")
    orig_type: OrderType
    activate_price: Decimal = wire(default=ZERO)
    price_rate: Decimal = wire(default=ZERO)
    update_time: int
    working_type: WorkingType
    price_protect: bool


@dataclass(frozen=True, kw_only=True)
class Transaction:
    """Order as returned right after it was placed.

    ``stop_price`` is always sent. The trailing stop fields ``activate_price``
    and ``price_rate`` are None unless the order is a trailing stop.
    """

    client_order_id: str
    cum_qty: Decimal
    cum_quote: Decimal
    executed_qty: Decimal
    order_id: OrderId
    avg_price: Decimal
    orig_qty: Decimal
    reduce_only: bool
    side: OrderSide
    position_side: PositionSide
    status: OrderStatus
    stop_price: Decimal
    close_position: bool
    symbol: str
    time_in_force: TimeInForce
    type_name: OrderType = wire("type")
    orig_type: OrderType
    activate_price: Decimal | None
    price_rate: Decimal | None
    update_time: int
    working_type: WorkingType
    price_protect: bool


@dataclass(frozen=True, kw_only=True)
class CanceledOrder:
    """Order as returned by the cancel endpoint.

    Classification fields are kept as the raw strings the endpoint sends.
    """

    client_order_id: str
    cum_qty: Decimal
    cum_quote: Decimal
    executed_qty: Decimal
    order_id: OrderId
    orig_qty: Decimal
    orig_type: str
    price: Decimal
    reduce_only: bool
    side: str
    position_side: str
    status: str
    stop_price: Decimal
    close_position: bool
    symbol: str
    time_in_force: str
    type_name: str = wire("type")
    activate_price: Decimal | None
    price_rate: Decimal | None
    update_time: int
    working_type: str
    price_protect: bool


# ============================================================================
# ACCOUNT TYPES
# ============================================================================


@dataclass(frozen=True, kw_only=True)
class Position:
    """Position information from the position risk endpoint."""

    entry_price: Decimal
    margin_type: MarginType
    # sent as "true"/"false" by some endpoints
    is_auto_add_margin: bool = wire(decode=decode_boolean)
    isolated_margin: Decimal
    leverage: int = wire(decode=decode_integer)
    liquidation_price: Decimal
    mark_price: Decimal
    max_notional_value: Decimal
    position_amount: Decimal = wire("positionAmt")
    symbol: str
    unrealized_profit: Decimal = wire("unRealizedProfit")
    position_side: PositionSide
    update_time: int
    notional: Decimal
    isolated_wallet: Decimal


@dataclass(frozen=True, kw_only=True)
class AccountPosition:
    """Position entry of the account information endpoint.

    Differs from Position, which comes from the position risk endpoint.
    """

    symbol: str
    initial_margin: Decimal
    maintenance_margin: Decimal = wire("maintMargin")
    unrealized_profit: Decimal
    position_initial_margin: Decimal
    open_order_initial_margin: Decimal
    leverage: int = wire(decode=decode_integer)
    isolated: bool
    entry_price: Decimal
    max_notional: Decimal
    bid_notional: Decimal
    ask_notional: Decimal
    position_side: PositionSide
    position_amount: Decimal = wire("positionAmt")
    update_time: int


@dataclass(frozen=True, kw_only=True)
class AccountAsset:
    """Per-asset balances of the account information endpoint."""

    asset: str
    wallet_balance: Decimal
    unrealized_profit: Decimal
    margin_balance: Decimal
    maint_margin: Decimal
    initial_margin: Decimal
    position_initial_margin: Decimal
    open_order_initial_margin: Decimal
    cross_wallet_balance: Decimal
    cross_unrealized_pnl: Decimal = wire("crossUnPnl")
    available_balance: Decimal
    max_withdraw_amount: Decimal
    margin_available: bool
    update_time: int


@dataclass(frozen=True, kw_only=True)
class AccountInformation:
    """Complete margin account snapshot."""

    fee_tier: int
    can_trade: bool
    can_deposit: bool
    can_withdraw: bool
    update_time: int
    multi_assets_margin: bool
    total_initial_margin: Decimal
    total_maintenance_margin: Decimal = wire("totalMaintMargin")
    total_wallet_balance: Decimal
    total_unrealized_profit: Decimal
    total_margin_balance: Decimal
    total_position_initial_margin: Decimal
    total_open_order_initial_margin: Decimal
    total_cross_wallet_balance: Decimal
    total_cross_unrealized_pnl: Decimal = wire("totalCrossUnPnl")
    available_balance: Decimal
    max_withdraw_amount: Decimal
    assets: list[AccountAsset]
    positions: list[AccountPosition]


@dataclass(frozen=True, kw_only=True)
class AccountBalance:
    """Futures account balance of one asset."""

    account_alias: str
    asset: str
    balance: Decimal
    cross_wallet_balance: Decimal
    cross_unrealized_pnl: Decimal = wire("crossUnPnl")
    available_balance: Decimal
    max_withdraw_amount: Decimal
    margin_available: bool
    update_time: int


@dataclass(frozen=True, kw_only=True)
class ChangeLeverageResponse:
    """Result of a leverage change."""

    leverage: int
    max_notional_value: Decimal
    symbol: str


@dataclass(frozen=True, kw_only=True)
class LeverageBracket:
    """One notional bracket of a symbol's leverage schedule."""

    bracket: int
    initial_leverage: int
    notional_cap: int
    notional_floor: int
    maint_margin_ratio: Decimal
    cum: Decimal


@dataclass(frozen=True, kw_only=True)
class SymbolBrackets:
    """Leverage schedule of a symbol."""

    symbol: str
    notional_coef: Decimal | None
    brackets: list[LeverageBracket]


# ============================================================================
# REST API PARAMETER TYPES
# ============================================================================


def _query_dict(params: Any) -> dict[str, Any]:
    return {
        camel_case(name): value
        for name, value in asdict(params).items()
        if value is not None
    }


@dataclass
class HistoryQuery:
    """Parameters for the historical data and statistics endpoints.

    Only ``period`` is checked here. Which of the other fields an endpoint
    requires is left to the endpoint.
    """

    symbol: str
    limit: int | None = None
    start_time: int | None = None
    end_time: int | None = None
    from_id: int | None = None
    interval: str | None = None
    period: str | None = None

    def validate(self) -> None:
        """Check the query before it is sent.

        Raises:
            InvalidPeriod: If ``period`` is set and not one of PERIODS.

        """
        if self.period is not None and self.period not in PERIODS:
            raise InvalidPeriod(self.period)

    def to_dict(self) -> dict[str, Any]:
        """Validate and convert to camelCase query parameters, dropping unset fields."""
        self.validate()
        return _query_dict(self)

    def to_query_string(self) -> str:
        return urlencode(self.to_dict())


@dataclass
class IndexQuery:
    """Parameters for the index price kline endpoints."""

    pair: str
    limit: int | None = None
    start_time: int | None = None
    end_time: int | None = None
    interval: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _query_dict(self)

    def to_query_string(self) -> str:
        return urlencode(self.to_dict())
