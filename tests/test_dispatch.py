"""Tests for otcval.pricing.dispatch: registry behaviour and extension."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

import pytest

from conftest import USD, VALUATION_DATE, market_env
from otcval.core.errors import UnsupportedComponentError, ValuationFailure
from otcval.core.money import NonEmptyStr
from otcval.core.result import Err, Ok
from otcval.instrument.credit_types import CreditCouponPaymentPeriod
from otcval.instrument.periods import FixedRatePaymentPeriod, PaymentPeriod
from otcval.oracle.environment import PricingEnvironment
from otcval.pricing.components import (
    FIXED_RATE_PERIOD_PRICER,
    discounted,
    fixed_rate_period_future_value,
)
from otcval.pricing.dispatch import (
    DispatchingPricer,
    default_event_pricer,
    default_period_pricer,
)
from otcval.pricing.types import ComponentPricer, ValueKind

# ---------------------------------------------------------------------------
# A new period variant defined outside the library
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class KnownAmountPeriod:
    """Pays a fixed, known amount."""

    payment_date: date
    currency: NonEmptyStr
    amount: Decimal


def _known_amount_fv(
    env: PricingEnvironment, period: KnownAmountPeriod,
) -> Ok[Decimal] | Err[ValuationFailure]:
    return Ok(period.amount)


_KNOWN_AMOUNT_PRICER = ComponentPricer(
    present_value=discounted(_known_amount_fv), future_value=_known_amount_fv,
)

_FIXED = FixedRatePaymentPeriod(
    payment_date=date(2025, 1, 15),
    start_date=date(2024, 1, 15),
    end_date=date(2025, 1, 15),
    year_fraction=Decimal("1"),
    currency=USD,
    notional=Decimal("1000000"),
    rate=Decimal("0.03"),
)


class TestRegistration:
    def test_defaults_registered(self) -> None:
        assert FixedRatePaymentPeriod in default_period_pricer().registered_types
        assert len(default_event_pricer().registered_types) == 2

    def test_each_factory_call_is_fresh(self) -> None:
        a = default_period_pricer()
        a.register(KnownAmountPeriod, _KNOWN_AMOUNT_PRICER)
        assert KnownAmountPeriod not in default_period_pricer().registered_types

    def test_register_requires_class(self) -> None:
        with pytest.raises(TypeError):
            pricer = default_period_pricer()
            pricer.register(_FIXED, FIXED_RATE_PERIOD_PRICER)  # type: ignore[arg-type]

    def test_register_requires_component_pricer(self) -> None:
        with pytest.raises(TypeError):
            pricer = default_period_pricer()
            pricer.register(KnownAmountPeriod, _known_amount_fv)  # type: ignore[arg-type]

    def test_reregistering_replaces(self) -> None:
        pricer = default_period_pricer()
        zero = ComponentPricer(
            present_value=lambda env, c: Ok(Decimal("0")),
            future_value=lambda env, c: Ok(Decimal("0")),
        )
        pricer.register(FixedRatePaymentPeriod, zero)
        assert pricer.resolve(_FIXED) is zero
        assert pricer.present_value(market_env(), _FIXED) == Ok(Decimal("0"))

    def test_registry_is_not_a_constructor_argument(self) -> None:
        with pytest.raises(TypeError):
            DispatchingPricer(family="PaymentPeriod", _pricers={})  # type: ignore[call-arg]
        assert "_pricers" not in repr(DispatchingPricer(family="PaymentPeriod"))

    def test_new_variant_satisfies_protocol(self) -> None:
        period = KnownAmountPeriod(VALUATION_DATE, USD, Decimal("1"))
        assert isinstance(period, PaymentPeriod)


class TestDispatch:
    def test_registered_matches_direct_call(self) -> None:
        env = market_env()
        pricer = default_period_pricer()
        expected = FIXED_RATE_PERIOD_PRICER.present_value(env, _FIXED)
        assert pricer.present_value(env, _FIXED) == expected
        assert pricer.future_value(env, _FIXED) == fixed_rate_period_future_value(env, _FIXED)

    def test_value_kind_selects_function(self) -> None:
        env = market_env()
        pricer = default_period_pricer()
        assert pricer.value(env, _FIXED, ValueKind.FUTURE_VALUE) == Ok(Decimal("30000"))
        pv = pricer.value(env, _FIXED, ValueKind.PRESENT_VALUE)
        assert isinstance(pv, Ok)
        assert pv.value < Decimal("30000")

    def test_new_variant_after_registration(self) -> None:
        pricer = default_period_pricer()
        period = KnownAmountPeriod(date(2025, 1, 15), USD, Decimal("123"))
        assert isinstance(pricer.present_value(market_env(), period), Err)
        pricer.register(KnownAmountPeriod, _KNOWN_AMOUNT_PRICER)
        assert pricer.future_value(market_env(), period) == Ok(Decimal("123"))

    def test_unregistered_variant_is_err(self) -> None:
        period = KnownAmountPeriod(date(2025, 1, 15), USD, Decimal("123"))
        match default_period_pricer().present_value(market_env(), period):
            case Err(UnsupportedComponentError() as e):
                assert e.component_type == "KnownAmountPeriod"
                assert e.family == "PaymentPeriod"
                assert e.value_kind == "PRESENT_VALUE"
                assert e.code == "UNSUPPORTED_COMPONENT"
            case other:
                pytest.fail(f"Expected UnsupportedComponentError, got {other}")

    def test_credit_coupon_has_no_default_pricer(self) -> None:
        coupon = CreditCouponPaymentPeriod(
            start_date=date(2024, 3, 20), end_date=date(2024, 6, 20),
            effective_start_date=date(2024, 3, 20), effective_end_date=date(2024, 6, 20),
            payment_date=date(2024, 6, 20), notional=Decimal("1000000"), currency=USD,
            fixed_rate=Decimal("0.01"), year_fraction=Decimal("0.25"),
        )
        result = default_period_pricer().future_value(market_env(), coupon)
        assert isinstance(result, Err)
        assert isinstance(result.error, UnsupportedComponentError)

    def test_exact_class_match(self) -> None:
        pricer: DispatchingPricer[object] = DispatchingPricer(family="PaymentPeriod")
        pricer.register(int, _KNOWN_AMOUNT_PRICER)
        assert pricer.resolve(True) is None

    def test_repeated_failure_is_equal(self) -> None:
        period = KnownAmountPeriod(date(2025, 1, 15), USD, Decimal("1"))
        pricer = default_period_pricer()
        first = pricer.present_value(market_env(), period)
        second = pricer.present_value(market_env(), period)
        assert isinstance(first, Err)
        assert first == second

    def test_unsupported_variant_logs_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        period = KnownAmountPeriod(date(2025, 1, 15), USD, Decimal("1"))
        with caplog.at_level(logging.WARNING, logger="otcval.pricing.dispatch"):
            default_period_pricer().present_value(market_env(), period)
        assert "KnownAmountPeriod" in caplog.text

