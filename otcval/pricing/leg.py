"""Leg and swap valuation: sums of component values.

A leg's value is the sum of its period values plus the sum of its event
values. The first component that fails aborts the leg and its error is
returned as-is; no partial sums are produced.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import Decimal, localcontext
from typing import final

from otcval.core.errors import ValuationFailure
from otcval.core.money import DECIMAL_CONTEXT
from otcval.core.result import Err, Ok
from otcval.core.types import FrozenMap
from otcval.instrument.events import PaymentEvent
from otcval.instrument.leg import ResolvedSwap, ResolvedSwapLeg
from otcval.instrument.periods import PaymentPeriod
from otcval.oracle.environment import PricingEnvironment
from otcval.pricing.dispatch import (
    DispatchingPricer,
    default_event_pricer,
    default_period_pricer,
)
from otcval.pricing.types import ValueKind

logger = logging.getLogger(__name__)

_ZERO = Decimal("0")


def _sum_values[C](
    env: PricingEnvironment,
    pricer: DispatchingPricer[C],
    components: Iterable[C],
    kind: ValueKind,
) -> Ok[Decimal] | Err[ValuationFailure]:
    total = _ZERO
    for component in components:
        match pricer.value(env, component, kind):
            case Err(e):
                return Err(e)
            case Ok(v):
                with localcontext(DECIMAL_CONTEXT):
                    total = total + v
    return Ok(total)


@final
@dataclass(frozen=True, slots=True)
class SwapLegPricer:
    """Values a resolved leg by dispatching each period and event."""

    period_pricer: DispatchingPricer[PaymentPeriod] = field(default_factory=default_period_pricer)
    event_pricer: DispatchingPricer[PaymentEvent] = field(default_factory=default_event_pricer)

    def value(
        self, env: PricingEnvironment, leg: ResolvedSwapLeg, kind: ValueKind,
    ) -> Ok[Decimal] | Err[ValuationFailure]:
        match _sum_values(env, self.period_pricer, leg.payment_periods, kind):
            case Err(e):
                return Err(e)
            case Ok(periods_total):
                pass
        match _sum_values(env, self.event_pricer, leg.payment_events, kind):
            case Err(e):
                return Err(e)
            case Ok(events_total):
                pass
        with localcontext(DECIMAL_CONTEXT):
            total = periods_total + events_total
        logger.debug(
            "%s %s leg (%d periods, %d events) %s = %s",
            leg.leg_type.value, leg.currency, len(leg.payment_periods),
            len(leg.payment_events), kind.value, total,
        )
        return Ok(total)

    def present_value(
        self, env: PricingEnvironment, leg: ResolvedSwapLeg,
    ) -> Ok[Decimal] | Err[ValuationFailure]:
        return self.value(env, leg, ValueKind.PRESENT_VALUE)

    def future_value(
        self, env: PricingEnvironment, leg: ResolvedSwapLeg,
    ) -> Ok[Decimal] | Err[ValuationFailure]:
        return self.value(env, leg, ValueKind.FUTURE_VALUE)


@final
@dataclass(frozen=True, slots=True)
class SwapPricer:
    """Values a resolved swap as one amount per leg currency."""

    leg_pricer: SwapLegPricer = field(default_factory=SwapLegPricer)

    def value(
        self, env: PricingEnvironment, swap: ResolvedSwap, kind: ValueKind,
    ) -> Ok[FrozenMap[str, Decimal]] | Err[ValuationFailure]:
        totals: dict[str, Decimal] = {}
        for leg in swap.legs:
            match self.leg_pricer.value(env, leg, kind):
                case Err(e):
                    return Err(e)
                case Ok(v):
                    ccy = leg.currency.value
                    with localcontext(DECIMAL_CONTEXT):
                        totals[ccy] = totals.get(ccy, _ZERO) + v
        return Ok(FrozenMap.create(totals).unwrap())

    def present_value(
        self, env: PricingEnvironment, swap: ResolvedSwap,
    ) -> Ok[FrozenMap[str, Decimal]] | Err[ValuationFailure]:
        return self.value(env, swap, ValueKind.PRESENT_VALUE)

    def future_value(
        self, env: PricingEnvironment, swap: ResolvedSwap,
    ) -> Ok[FrozenMap[str, Decimal]] | Err[ValuationFailure]:
        return self.value(env, swap, ValueKind.FUTURE_VALUE)


def default_leg_pricer() -> SwapLegPricer:
    return SwapLegPricer(period_pricer=default_period_pricer(), event_pricer=default_event_pricer())


def default_swap_pricer() -> SwapPricer:
    return SwapPricer(leg_pricer=default_leg_pricer())
