"""Tests for otcval.pricing.components: built-in period and event valuation."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from conftest import EUR, EURIBOR_6M, USD, VALUATION_DATE, market_env
from otcval.core.errors import MissingMarketDataError
from otcval.core.money import CurrencyPair, Money
from otcval.core.result import Err, Ok, unwrap
from otcval.instrument.events import NotionalExchange, TerminationPayment
from otcval.instrument.periods import (
    FixedRatePaymentPeriod,
    FloatingRatePaymentPeriod,
    FxResetPaymentPeriod,
    ResetPeriod,
)
from otcval.instrument.reset import RateAveragingMethod
from otcval.oracle.environment import MarketDataEnvironment
from otcval.oracle.observable import FxObservation, RateObservation
from otcval.pricing.components import (
    FIXED_RATE_PERIOD_PRICER,
    fixed_rate_period_future_value,
    floating_period_rate,
    floating_rate_period_future_value,
    fx_reset_period_future_value,
    notional_exchange_future_value,
    termination_payment_future_value,
)
from otcval.pricing.types import ValueKind

_PAY = date(2025, 1, 15)


def _fixed(payment: date = _PAY) -> FixedRatePaymentPeriod:
    return FixedRatePaymentPeriod(
        payment_date=payment,
        start_date=payment - timedelta(days=365),
        end_date=payment,
        year_fraction=Decimal("1"),
        currency=USD,
        notional=Decimal("-1000000"),
        rate=Decimal("0.03"),
    )


def _reset(fixing: date, days: int) -> ResetPeriod:
    return ResetPeriod(
        start_date=fixing,
        end_date=fixing + timedelta(days=days),
        observation=RateObservation(
            index=EURIBOR_6M, fixing_date=fixing, effective_date=fixing,
            maturity_date=fixing + timedelta(days=182), year_fraction=Decimal("0.5"),
        ),
    )


def _floating(
    resets: tuple[ResetPeriod, ...],
    method: RateAveragingMethod = RateAveragingMethod.UNWEIGHTED,
) -> FloatingRatePaymentPeriod:
    return FloatingRatePaymentPeriod(
        payment_date=_PAY,
        start_date=resets[0].start_date,
        end_date=resets[-1].end_date,
        year_fraction=Decimal("0.5"),
        currency=EUR,
        notional=Decimal("1000000"),
        reset_periods=resets,
        averaging_method=method,
        spread=Decimal("0.001"),
        gearing=Decimal("2"),
    )


class TestFixedRatePeriod:
    def test_future_value(self) -> None:
        assert fixed_rate_period_future_value(market_env(), _fixed()) == Ok(Decimal("-30000"))

    def test_present_value_is_discounted(self) -> None:
        env = market_env()
        df = unwrap(env.discount_factor(USD, _PAY))
        pv = unwrap(FIXED_RATE_PERIOD_PRICER.present_value(env, _fixed()))
        assert pv == Decimal("-30000") * df

    def test_settled_period_is_zero(self) -> None:
        settled = _fixed(payment=VALUATION_DATE - timedelta(days=1))
        assert FIXED_RATE_PERIOD_PRICER.future_value(market_env(), settled) == Ok(Decimal("0"))
        assert FIXED_RATE_PERIOD_PRICER.present_value(market_env(), settled) == Ok(Decimal("0"))

    def test_paid_on_valuation_date_counts(self) -> None:
        period = _fixed(payment=VALUATION_DATE)
        assert FIXED_RATE_PERIOD_PRICER.present_value(market_env(), period) == Ok(Decimal("-30000"))

    def test_missing_curve_propagates(self) -> None:
        env = MarketDataEnvironment(valuation_date=VALUATION_DATE)
        match FIXED_RATE_PERIOD_PRICER.value(env, _fixed(), ValueKind.PRESENT_VALUE):
            case Err(MissingMarketDataError()):
                pass
            case other:
                raise AssertionError(f"Expected missing market data, got {other}")


class TestFloatingRatePeriod:
    def test_unweighted_average_of_fixings(self) -> None:
        d1, d2 = date(2023, 12, 1), date(2023, 12, 31)
        env = (
            market_env()
            .with_fixing(EURIBOR_6M, d1, Decimal("0.03"))
            .with_fixing(EURIBOR_6M, d2, Decimal("0.05"))
        )
        period = _floating((_reset(d1, 30), _reset(d2, 10)))
        assert floating_period_rate(env, period) == Ok(Decimal("0.04"))
        # 1m * (2 * 0.04 + 0.001) * 0.5
        assert floating_rate_period_future_value(env, period) == Ok(Decimal("40500"))

    def test_weighted_average_of_fixings(self) -> None:
        d1, d2 = date(2023, 12, 1), date(2023, 12, 31)
        env = (
            market_env()
            .with_fixing(EURIBOR_6M, d1, Decimal("0.03"))
            .with_fixing(EURIBOR_6M, d2, Decimal("0.05"))
        )
        period = _floating((_reset(d1, 30), _reset(d2, 10)), RateAveragingMethod.WEIGHTED)
        assert floating_period_rate(env, period) == Ok(Decimal("0.035"))

    def test_missing_fixing_propagates(self) -> None:
        period = _floating((_reset(date(2023, 12, 1), 30),))
        match floating_rate_period_future_value(market_env(), period):
            case Err(MissingMarketDataError(observable=obs)):
                assert "2023-12-01" in obs
            case other:
                raise AssertionError(f"Expected missing fixing, got {other}")

    def test_forward_rate_for_future_resets(self) -> None:
        period = _floating((_reset(date(2024, 7, 15), 182),))
        assert isinstance(floating_rate_period_future_value(market_env(), period), Ok)


class TestFxResetPeriod:
    def _period(self, pair: str) -> FxResetPaymentPeriod:
        return FxResetPaymentPeriod(
            payment_date=_PAY,
            start_date=date(2024, 1, 15),
            end_date=_PAY,
            year_fraction=Decimal("1"),
            currency=USD,
            notional=Decimal("1000000"),
            reference_currency=EUR,
            rate=Decimal("0.02"),
            fx_observation=FxObservation(
                pair=unwrap(CurrencyPair.parse(pair)), fixing_date=date(2024, 1, 11),
            ),
        )

    def test_converts_notional_at_fixing(self) -> None:
        pair = unwrap(CurrencyPair.parse("EUR/USD"))
        env = market_env().with_fx_fixing(pair, date(2024, 1, 11), Decimal("1.1"))
        assert fx_reset_period_future_value(env, self._period("EUR/USD")) == Ok(Decimal("22000"))

    def test_inverted_pair(self) -> None:
        pair = unwrap(CurrencyPair.parse("USD/EUR"))
        env = market_env().with_fx_fixing(pair, date(2024, 1, 11), Decimal("0.8"))
        assert fx_reset_period_future_value(env, self._period("USD/EUR")) == Ok(Decimal("25000"))

    def test_missing_fx_fixing(self) -> None:
        result = fx_reset_period_future_value(market_env(), self._period("EUR/USD"))
        assert isinstance(result, Err)
        assert isinstance(result.error, MissingMarketDataError)


class TestEvents:
    def test_notional_exchange_future_value(self) -> None:
        ev = NotionalExchange(
            payment=unwrap(Money.create(Decimal("-1000000"), "USD")), payment_date=_PAY,
        )
        assert notional_exchange_future_value(market_env(), ev) == Ok(Decimal("-1000000"))

    def test_termination_future_value(self) -> None:
        ev = TerminationPayment(
            payment=unwrap(Money.create(Decimal("-200"), "USD")),
            termination_date=_PAY, payment_date=_PAY,
        )
        assert termination_payment_future_value(market_env(), ev) == Ok(Decimal("-200"))

    def test_settled_event_is_zero(self) -> None:
        ev = NotionalExchange(
            payment=unwrap(Money.create(Decimal("500"), "USD")),
            payment_date=VALUATION_DATE - timedelta(days=30),
        )
        assert notional_exchange_future_value(market_env(), ev) == Ok(Decimal("0"))
