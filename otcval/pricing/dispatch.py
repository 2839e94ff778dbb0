"""Dispatch of cash-flow components to their registered valuation functions.

A DispatchingPricer holds one ComponentPricer per concrete component class.
New variants are supported by defining the class and registering a pricer;
the dispatcher and the leg aggregator are unchanged.

Usage at start-up::

    periods = default_period_pricer()
    periods.register(MyPeriod, ComponentPricer(present_value=pv_fn, future_value=fv_fn))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, final

from otcval.core.errors import UnsupportedComponentError, ValuationFailure
from otcval.core.result import Err, Ok
from otcval.core.types import UtcDatetime
from otcval.instrument.events import NotionalExchange, PaymentEvent, TerminationPayment
from otcval.instrument.periods import (
    FixedRatePaymentPeriod,
    FloatingRatePaymentPeriod,
    FxResetPaymentPeriod,
    PaymentPeriod,
)
from otcval.oracle.environment import PricingEnvironment
from otcval.pricing.components import (
    FIXED_RATE_PERIOD_PRICER,
    FLOATING_RATE_PERIOD_PRICER,
    FX_RESET_PERIOD_PRICER,
    NOTIONAL_EXCHANGE_PRICER,
    TERMINATION_PAYMENT_PRICER,
)
from otcval.pricing.types import ComponentPricer, ValueKind

logger = logging.getLogger(__name__)

PERIOD_FAMILY = "PaymentPeriod"
EVENT_FAMILY = "PaymentEvent"


def unsupported_component(
    component: object, family: str, kind: ValueKind,
) -> UnsupportedComponentError:
    name = type(component).__name__
    return UnsupportedComponentError(
        message=f"No {family} pricer registered for {name}",
        code="UNSUPPORTED_COMPONENT",
        timestamp=UtcDatetime.now(),
        source="pricing.dispatch.DispatchingPricer.value",
        component_type=name,
        family=family,
        value_kind=kind.value,
    )


@final
@dataclass
class DispatchingPricer[C]:
    """Registry of component pricers keyed by exact component class.

    Subclasses do not inherit their parent's pricer. Registering a class
    again replaces its pricer.
    """

    family: str
    _pricers: dict[type, ComponentPricer[Any]] = field(
        default_factory=dict, init=False, repr=False,
    )

    def register(self, variant: type, pricer: ComponentPricer[Any]) -> None:
        if not isinstance(variant, type):
            raise TypeError(f"DispatchingPricer.register: variant must be a class, got {variant!r}")
        if not isinstance(pricer, ComponentPricer):
            raise TypeError(
                "DispatchingPricer.register: pricer must be ComponentPricer, "
                f"got {type(pricer).__name__}"
            )
        if variant in self._pricers:
            logger.debug("Replacing %s pricer for %s", self.family, variant.__name__)
        self._pricers[variant] = pricer

    def resolve(self, component: C) -> ComponentPricer[Any] | None:
        """Return the pricer registered for the component's class, or None."""
        return self._pricers.get(type(component))

    @property
    def registered_types(self) -> tuple[type, ...]:
        return tuple(self._pricers)

    def value(
        self, env: PricingEnvironment, component: C, kind: ValueKind,
    ) -> Ok[Decimal] | Err[ValuationFailure]:
        pricer = self.resolve(component)
        if pricer is None:
            logger.warning(
                "No %s pricer registered for %s", self.family, type(component).__name__,
            )
            return Err(unsupported_component(component, self.family, kind))
        logger.debug(
            "Dispatching %s %s to %s", type(component).__name__, kind.value, self.family,
        )
        return pricer.value(env, component, kind)

    def present_value(
        self, env: PricingEnvironment, component: C,
    ) -> Ok[Decimal] | Err[ValuationFailure]:
        return self.value(env, component, ValueKind.PRESENT_VALUE)

    def future_value(
        self, env: PricingEnvironment, component: C,
    ) -> Ok[Decimal] | Err[ValuationFailure]:
        return self.value(env, component, ValueKind.FUTURE_VALUE)


def default_period_pricer() -> DispatchingPricer[PaymentPeriod]:
    """Fresh period dispatcher with the built-in period pricers registered."""
    pricer: DispatchingPricer[PaymentPeriod] = DispatchingPricer(family=PERIOD_FAMILY)
    pricer.register(FixedRatePaymentPeriod, FIXED_RATE_PERIOD_PRICER)
    pricer.register(FloatingRatePaymentPeriod, FLOATING_RATE_PERIOD_PRICER)
    pricer.register(FxResetPaymentPeriod, FX_RESET_PERIOD_PRICER)
    return pricer


def default_event_pricer() -> DispatchingPricer[PaymentEvent]:
    """Fresh event dispatcher with the built-in event pricers registered."""
    pricer: DispatchingPricer[PaymentEvent] = DispatchingPricer(family=EVENT_FAMILY)
    pricer.register(NotionalExchange, NOTIONAL_EXCHANGE_PRICER)
    pricer.register(TerminationPayment, TERMINATION_PAYMENT_PRICER)
    return pricer
