import logging
from decimal import Decimal

import pytest

from futures_wire.errors import (
    DeserializationError,
    MalformedNumber,
    MissingRequiredField,
    UnknownEnumVariant,
)
from futures_wire.helpers import decode_record, encode_record, encode_value
from futures_wire.types import (
    ContractType,
    ExchangeInformation,
    LotSizeFilter,
    MarketLotSizeFilter,
    MaxNumAlgoOrdersFilter,
    MaxNumOrdersFilter,
    MinNotionalFilter,
    OrderType,
    PercentPriceFilter,
    PriceFilter,
    RateLimitInterval,
    RateLimitType,
    Symbol,
    SymbolStatus,
    TimeInForce,
    UnknownFilter,
    decode_filter,
)
from tests.unit.conftest import load_json, load_json_all_cases


@pytest.mark.parametrize("test_data", load_json_all_cases("response.exchange_info"))
def test_exchange_information(test_data):
    payload, path = test_data

    info = decode_record(ExchangeInformation, payload)

    assert info.timezone == payload["timezone"]
    assert info.server_time == payload["serverTime"]
    assert info.futures_type == payload["futuresType"]

    assert len(info.rate_limits) == len(payload["rateLimits"])
    for rate_limit, payload_rate_limit in zip(info.rate_limits, payload["rateLimits"]):
        assert rate_limit.rate_limit_type == RateLimitType(payload_rate_limit["rateLimitType"])
        assert rate_limit.interval == RateLimitInterval(payload_rate_limit["interval"])
        assert rate_limit.interval_num == payload_rate_limit["intervalNum"]
        assert rate_limit.limit == payload_rate_limit["limit"]

    assert len(info.exchange_filters) == len(payload["exchangeFilters"])

    assert len(info.assets) == len(payload["assets"])
    for asset, payload_asset in zip(info.assets, payload["assets"]):
        assert asset.asset == payload_asset["asset"]
        assert asset.margin_available == payload_asset["marginAvailable"]
        assert isinstance(asset.auto_asset_exchange, Decimal)

    assert len(info.symbols) == len(payload["symbols"])
    for symbol, payload_symbol in zip(info.symbols, payload["symbols"]):
        assert symbol.symbol == payload_symbol["symbol"]
        assert symbol.pair == payload_symbol["pair"]
        assert symbol.contract_type == ContractType(payload_symbol["contractType"])
        assert symbol.status == SymbolStatus(payload_symbol["status"])
        assert symbol.delivery_date == payload_symbol["deliveryDate"]
        assert symbol.onboard_date == payload_symbol["onboardDate"]
        assert symbol.maint_margin_percent == Decimal(str(payload_symbol["maintMarginPercent"]))
        assert symbol.required_margin_percent == Decimal(str(payload_symbol["requiredMarginPercent"]))
        assert symbol.base_asset == payload_symbol["baseAsset"]
        assert symbol.quote_asset == payload_symbol["quoteAsset"]
        assert symbol.price_precision == payload_symbol["pricePrecision"]
        assert symbol.quantity_precision == payload_symbol["quantityPrecision"]
        assert symbol.underlying_sub_type == payload_symbol["underlyingSubType"]
        assert symbol.trigger_protect == Decimal(str(payload_symbol["triggerProtect"]))
        assert len(symbol.filters) == len(payload_symbol["filters"])
        assert symbol.order_types == [OrderType(tag) for tag in payload_symbol["orderTypes"]]
        assert symbol.time_in_force == [TimeInForce(tag) for tag in payload_symbol["timeInForce"]]


def test_symbol_filters_dispatch_on_filter_type():
    symbol = decode_record(ExchangeInformation, load_json("response.exchange_info", 0)).symbols[0]

    assert symbol.filters == [
        PriceFilter(min_price=Decimal("556.80"), max_price=Decimal("4529764"), tick_size=Decimal("0.10")),
        LotSizeFilter(min_qty=Decimal("0.001"), max_qty=Decimal("1000"), step_size=Decimal("0.001")),
        MarketLotSizeFilter(min_qty=Decimal("0.001"), max_qty=Decimal("120"), step_size=Decimal("0.001")),
        MaxNumOrdersFilter(limit=200),
        MaxNumAlgoOrdersFilter(limit=10),
        MinNotionalFilter(notional=Decimal("100")),
        PercentPriceFilter(
            multiplier_up=Decimal("1.0500"),
            multiplier_down=Decimal("0.9500"),
            multiplier_decimal=Decimal("4"),
        ),
        UnknownFilter(
            filter_type="POSITION_RISK_CONTROL",
            raw={"filterType": "POSITION_RISK_CONTROL", "positionControlSide": "NONE"},
        ),
    ]


def test_numeric_filter_values_accept_json_numbers():
    info = decode_record(ExchangeInformation, load_json("response.exchange_info", 1))

    price_filter, min_notional = info.symbols[0].filters
    assert price_filter.tick_size == Decimal("0.01")
    assert price_filter.max_price == Decimal(306177)
    assert min_notional.notional == Decimal(5)
    assert info.exchange_filters == [
        UnknownFilter(
            filter_type="EXCHANGE_MAX_NUM_ORDERS",
            raw={"filterType": "EXCHANGE_MAX_NUM_ORDERS", "maxNumOrders": 1000},
        )
    ]


def test_contract_type_edge_tags():
    first, second = decode_record(ExchangeInformation, load_json("response.exchange_info", 0)).symbols
    (quarterly,) = decode_record(ExchangeInformation, load_json("response.exchange_info", 1)).symbols

    assert first.contract_type is ContractType.PERPETUAL
    assert second.contract_type is ContractType.EMPTY
    assert quarterly.contract_type is ContractType.CURRENT_QUARTER_DELIVERING


def test_unknown_contract_type_is_rejected():
    payload = load_json("response.exchange_info", 0)["symbols"][0]

    with pytest.raises(UnknownEnumVariant) as exc_info:
        decode_record(Symbol, {**payload, "contractType": "NEXT_YEAR"})

    assert exc_info.value.enum_name == "ContractType"


def test_unknown_filter_is_logged_at_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger="futures_wire.types"):
        result = decode_filter({"filterType": "SOMETHING_NEW", "x": "1"})

    assert result == UnknownFilter(filter_type="SOMETHING_NEW", raw={"filterType": "SOMETHING_NEW", "x": "1"})
    assert "SOMETHING_NEW" in caplog.text


def test_known_filter_with_malformed_field_fails():
    with pytest.raises(MalformedNumber):
        decode_filter({"filterType": "PRICE_FILTER", "minPrice": "x", "maxPrice": "1", "tickSize": "1"})

    with pytest.raises(MissingRequiredField) as exc_info:
        decode_filter({"filterType": "LOT_SIZE", "minQty": "1", "maxQty": "2"})
    assert exc_info.value.field == "stepSize"


def test_filter_without_tag_fails():
    with pytest.raises(MissingRequiredField):
        decode_filter({"minPrice": "1"})
    with pytest.raises(DeserializationError):
        decode_filter({"filterType": 7})


def test_filters_encode_with_their_tag():
    symbol = decode_record(ExchangeInformation, load_json("response.exchange_info", 0)).symbols[0]
    payload = load_json("response.exchange_info", 0)["symbols"][0]

    assert encode_value(symbol.filters) == payload["filters"]
    assert encode_record(symbol)["contractType"] == "PERPETUAL"
