"""Hypothesis strategies and pytest fixtures for otcval.

Strategies are composable: periods and legs are built from primitive
decimals, dates and currency codes.
"""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

import pytest
from hypothesis import HealthCheck, settings
from hypothesis import strategies as st
from hypothesis.strategies import SearchStrategy

from otcval.core.money import Money, NonEmptyStr
from otcval.core.result import unwrap
from otcval.core.types import PayReceive, Period, SwapLegType
from otcval.instrument.events import NotionalExchange, TerminationPayment
from otcval.instrument.leg import ResolvedSwapLeg
from otcval.instrument.periods import FixedRatePaymentPeriod
from otcval.oracle.curves import DiscountCurve
from otcval.oracle.environment import MarketDataEnvironment
from otcval.oracle.observable import FloatingRateIndex, FloatingRateIndexEnum

# ---------------------------------------------------------------------------
# Hypothesis global settings
# ---------------------------------------------------------------------------

settings.register_profile(
    "ci",
    max_examples=200,
    suppress_health_check=[HealthCheck.too_slow],
    deadline=None,
)
settings.register_profile(
    "dev",
    max_examples=50,
    suppress_health_check=[HealthCheck.too_slow],
    deadline=None,
)
settings.load_profile("dev")


VALUATION_DATE = date(2024, 1, 15)
USD = NonEmptyStr("USD")
EUR = NonEmptyStr("EUR")
EURIBOR_6M = FloatingRateIndex(
    index=FloatingRateIndexEnum.EURIBOR, designated_maturity=Period(6, "M"),
)


# ===================================================================
# PRIMITIVE STRATEGIES
# ===================================================================


def finite_decimals(
    min_value: str = "-1000000",
    max_value: str = "1000000",
    places: int = 2,
) -> SearchStrategy[Decimal]:
    """Finite Decimal values, no NaN, no Infinity."""
    return st.decimals(
        min_value=Decimal(min_value),
        max_value=Decimal(max_value),
        places=places,
        allow_nan=False,
        allow_infinity=False,
    )


def rates() -> SearchStrategy[Decimal]:
    return finite_decimals(min_value="-0.01", max_value="0.10", places=4)


def future_dates(min_days: int = 1, max_days: int = 3650) -> SearchStrategy[date]:
    return st.integers(min_value=min_days, max_value=max_days).map(
        lambda n: VALUATION_DATE + timedelta(days=n)
    )


# ===================================================================
# CASH-FLOW STRATEGIES
# ===================================================================


@st.composite
def fixed_periods(draw: st.DrawFn, currency: NonEmptyStr = USD) -> FixedRatePaymentPeriod:
    """Fixed periods paying on or after the valuation date."""
    end = draw(future_dates())
    start = end - timedelta(days=draw(st.integers(min_value=1, max_value=366)))
    return FixedRatePaymentPeriod(
        payment_date=end,
        start_date=start,
        end_date=end,
        year_fraction=Decimal((end - start).days) / Decimal("360"),
        currency=currency,
        notional=draw(finite_decimals(min_value="-10000000", max_value="10000000")),
        rate=draw(rates()),
    )


@st.composite
def termination_payments(draw: st.DrawFn, currency: NonEmptyStr = USD) -> TerminationPayment:
    pay = draw(future_dates())
    return TerminationPayment(
        payment=unwrap(Money.create(draw(finite_decimals()), currency.value)),
        termination_date=pay - timedelta(days=draw(st.integers(min_value=0, max_value=5))),
        payment_date=pay,
    )


@st.composite
def notional_exchanges(draw: st.DrawFn, currency: NonEmptyStr = USD) -> NotionalExchange:
    return NotionalExchange(
        payment=unwrap(Money.create(draw(finite_decimals()), currency.value)),
        payment_date=draw(future_dates()),
    )


@st.composite
def fixed_legs(draw: st.DrawFn, max_periods: int = 6, max_events: int = 3) -> ResolvedSwapLeg:
    """USD legs of fixed periods and events, each sorted by payment date."""
    periods = draw(st.lists(fixed_periods(), max_size=max_periods))
    events = draw(st.lists(
        st.one_of(termination_payments(), notional_exchanges()), max_size=max_events,
    ))
    return ResolvedSwapLeg(
        leg_type=SwapLegType.FIXED,
        pay_receive=PayReceive.RECEIVE,
        currency=USD,
        payment_periods=tuple(sorted(periods, key=lambda p: p.payment_date)),
        payment_events=tuple(sorted(events, key=lambda e: e.payment_date)),
    )


# ===================================================================
# ENVIRONMENTS
# ===================================================================


def flat_curve(currency: str, zero_rate: Decimal) -> DiscountCurve:
    tenors = tuple(Decimal(t) for t in ("0.5", "1", "2", "5", "10", "30"))
    zeros = tuple(zero_rate for _ in tenors)
    return unwrap(DiscountCurve.from_zero_rates(currency, tenors, zeros))


def market_env(usd_rate: Decimal = Decimal("0.03")) -> MarketDataEnvironment:
    """USD and EUR discount curves, a EURIBOR 6M forward curve, EUR/USD spot."""
    return unwrap(MarketDataEnvironment.create(
        valuation_date=VALUATION_DATE,
        discount_curves={
            "USD": flat_curve("USD", usd_rate),
            "EUR": flat_curve("EUR", Decimal("0.02")),
        },
        forward_curves={EURIBOR_6M.name: flat_curve("EUR", Decimal("0.025"))},
        fx_spot={"EUR/USD": Decimal("1.10")},
    ))


@pytest.fixture
def valuation_date() -> date:
    return VALUATION_DATE


@pytest.fixture
def env() -> MarketDataEnvironment:
    return market_env()


@pytest.fixture
def unit_env() -> MarketDataEnvironment:
    """All discount factors are 1."""
    return market_env(usd_rate=Decimal("0"))
