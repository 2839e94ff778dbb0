"""Tests for otcval.instrument.trade: TradeInfo and ResolvedSwapTrade."""

from __future__ import annotations

from datetime import date

import pytest

from conftest import USD
from otcval.core.errors import ValidationError
from otcval.core.identifiers import LEI, UTI
from otcval.core.result import Err, unwrap
from otcval.core.types import PayReceive, SwapLegType
from otcval.instrument.leg import ResolvedSwap, ResolvedSwapLeg
from otcval.instrument.trade import ResolvedSwapTrade, TradeInfo

_LEI = "529900HNOAA1KXQJUQ27"
_SWAP = ResolvedSwap(legs=(
    ResolvedSwapLeg(leg_type=SwapLegType.FIXED, pay_receive=PayReceive.PAY, currency=USD),
))


class TestTradeInfo:
    def test_empty(self) -> None:
        assert TradeInfo() == TradeInfo.EMPTY
        assert TradeInfo.EMPTY.is_empty

    def test_settlement_before_trade_rejected(self) -> None:
        with pytest.raises(TypeError):
            TradeInfo(trade_date=date(2024, 1, 10), settlement_date=date(2024, 1, 9))

    def test_identifiers(self) -> None:
        info = TradeInfo(
            trade_id=UTI(value=_LEI + "T1"),
            counterparty=LEI(value=_LEI),
            trade_date=date(2024, 1, 10),
            settlement_date=date(2024, 1, 12),
        )
        assert not info.is_empty

    def test_raw_string_id_rejected(self) -> None:
        with pytest.raises(TypeError):
            TradeInfo(trade_id="T1")  # type: ignore[arg-type]

    def test_with_attribute(self) -> None:
        info = TradeInfo.EMPTY.with_attribute("book", "RATES-EU")
        assert info.attributes["book"] == "RATES-EU"
        assert TradeInfo.EMPTY.is_empty


class TestResolvedSwapTrade:
    def test_info_defaults_to_empty(self) -> None:
        assert ResolvedSwapTrade(product=_SWAP).info == TradeInfo.EMPTY

    def test_create_none_info_is_empty(self) -> None:
        assert unwrap(ResolvedSwapTrade.create(_SWAP, None)).info is TradeInfo.EMPTY

    def test_create_missing_product(self) -> None:
        match ResolvedSwapTrade.create(None):
            case Err(ValidationError(fields=fields)):
                assert fields[0].path == "product"
            case _:
                pytest.fail("Expected ValidationError")

    def test_create_wrong_product_type_is_err(self) -> None:
        match ResolvedSwapTrade.create(_SWAP.legs[0]):  # type: ignore[arg-type]
            case Err(ValidationError(fields=fields)):
                assert fields[0].path == "product"
                assert fields[0].actual_value == "ResolvedSwapLeg"
            case _:
                pytest.fail("Expected ValidationError")

    def test_explicit_none_info_rejected(self) -> None:
        with pytest.raises(TypeError):
            ResolvedSwapTrade(product=_SWAP, info=None)  # type: ignore[arg-type]

    def test_with_changes(self) -> None:
        trade = ResolvedSwapTrade(product=_SWAP)
        assert trade.with_changes() == trade
        dated = trade.with_changes(info=TradeInfo(trade_date=date(2024, 1, 10)))
        assert dated.info.trade_date == date(2024, 1, 10)
        assert dated.product == trade.product
