"""Valuation functions for the built-in payment periods and events.

Future value is the amount paid on the payment date; present value is that
amount times the discount factor to the payment date. Flows paid before the
valuation date are settled and value to zero. Market data errors from the
environment are returned unchanged.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from decimal import Decimal, localcontext
from typing import Protocol

from otcval.core.errors import MissingMarketDataError, ValuationFailure
from otcval.core.money import DECIMAL_CONTEXT, NonEmptyStr
from otcval.core.result import Err, Ok, sequence
from otcval.instrument.events import NotionalExchange, TerminationPayment
from otcval.instrument.periods import (
    FixedRatePaymentPeriod,
    FloatingRatePaymentPeriod,
    FxResetPaymentPeriod,
)
from otcval.oracle.environment import PricingEnvironment
from otcval.pricing.types import ComponentPricer, PricerFn

_ZERO = Decimal("0")
_ONE = Decimal("1")


class _Payable(Protocol):
    @property
    def payment_date(self) -> date: ...

    @property
    def currency(self) -> NonEmptyStr: ...


def is_settled(env: PricingEnvironment, payment_date: date) -> bool:
    """True if the flow was paid before the valuation date."""
    return payment_date < env.valuation_date


def discounted[C: _Payable](future_value: PricerFn[C]) -> PricerFn[C]:
    """Build a present value function from a future value function."""

    def present_value(
        env: PricingEnvironment, component: C,
    ) -> Ok[Decimal] | Err[ValuationFailure]:
        match future_value(env, component):
            case Err(e):
                return Err(e)
            case Ok(fv):
                pass
        if is_settled(env, component.payment_date):
            return Ok(_ZERO)
        match env.discount_factor(component.currency, component.payment_date):
            case Err(e):
                return Err(e)
            case Ok(df):
                with localcontext(DECIMAL_CONTEXT):
                    return Ok(fv * df)

    return present_value


# ---------------------------------------------------------------------------
# Periods
# ---------------------------------------------------------------------------


def fixed_rate_period_future_value(
    env: PricingEnvironment, period: FixedRatePaymentPeriod,
) -> Ok[Decimal] | Err[ValuationFailure]:
    if is_settled(env, period.payment_date):
        return Ok(_ZERO)
    with localcontext(DECIMAL_CONTEXT):
        return Ok(period.notional * period.rate * period.year_fraction)


def floating_period_rate(
    env: PricingEnvironment, period: FloatingRatePaymentPeriod,
) -> Ok[Decimal] | Err[MissingMarketDataError]:
    """Observe every reset and average them with the period's method."""
    match sequence(env.forward_rate(reset.observation) for reset in period.reset_periods):
        case Err(e):
            return Err(e)
        case Ok(rates):
            weights = [reset.weight for reset in period.reset_periods]
            return Ok(period.averaging_method.average(rates, weights))


def floating_rate_period_future_value(
    env: PricingEnvironment, period: FloatingRatePaymentPeriod,
) -> Ok[Decimal] | Err[ValuationFailure]:
    if is_settled(env, period.payment_date):
        return Ok(_ZERO)
    match floating_period_rate(env, period):
        case Err(e):
            return Err(e)
        case Ok(rate):
            with localcontext(DECIMAL_CONTEXT):
                accrual_rate = period.gearing * rate + period.spread
                return Ok(period.notional * accrual_rate * period.year_fraction)


def fx_reset_period_future_value(
    env: PricingEnvironment, period: FxResetPaymentPeriod,
) -> Ok[Decimal] | Err[ValuationFailure]:
    if is_settled(env, period.payment_date):
        return Ok(_ZERO)
    match env.fx_rate(period.fx_observation):
        case Err(e):
            return Err(e)
        case Ok(observed):
            pass
    with localcontext(DECIMAL_CONTEXT):
        # Units of payment currency per unit of reference currency.
        fx = observed if period.reference_is_base else _ONE / observed
        return Ok(period.notional * fx * period.rate * period.year_fraction)


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


def notional_exchange_future_value(
    env: PricingEnvironment, event: NotionalExchange,
) -> Ok[Decimal] | Err[ValuationFailure]:
    if is_settled(env, event.payment_date):
        return Ok(_ZERO)
    return Ok(event.payment.amount)


def termination_payment_future_value(
    env: PricingEnvironment, event: TerminationPayment,
) -> Ok[Decimal] | Err[ValuationFailure]:
    if is_settled(env, event.payment_date):
        return Ok(_ZERO)
    return Ok(event.payment.amount)


def _pricer[C: _Payable](
    future_value: Callable[[PricingEnvironment, C], Ok[Decimal] | Err[ValuationFailure]],
) -> ComponentPricer[C]:
    return ComponentPricer(present_value=discounted(future_value), future_value=future_value)


FIXED_RATE_PERIOD_PRICER: ComponentPricer[FixedRatePaymentPeriod] = _pricer(
    fixed_rate_period_future_value,
)
FLOATING_RATE_PERIOD_PRICER: ComponentPricer[FloatingRatePaymentPeriod] = _pricer(
    floating_rate_period_future_value,
)
FX_RESET_PERIOD_PRICER: ComponentPricer[FxResetPaymentPeriod] = _pricer(
    fx_reset_period_future_value,
)
NOTIONAL_EXCHANGE_PRICER: ComponentPricer[NotionalExchange] = _pricer(
    notional_exchange_future_value,
)
TERMINATION_PAYMENT_PRICER: ComponentPricer[TerminationPayment] = _pricer(
    termination_payment_future_value,
)
