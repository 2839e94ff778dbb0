"""Pricing contracts: which value is wanted, and the pair of functions that
compute it for one cash-flow variant.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, final

from otcval.core.errors import ValuationFailure
from otcval.core.result import Err, Ok
from otcval.oracle.environment import PricingEnvironment


class ValueKind(Enum):
    """PRESENT_VALUE is discounted to the valuation date; FUTURE_VALUE is not."""

    PRESENT_VALUE = "PRESENT_VALUE"
    FUTURE_VALUE = "FUTURE_VALUE"


type PricerFn[C] = Callable[[PricingEnvironment, C], Ok[Decimal] | Err[ValuationFailure]]


@final
@dataclass(frozen=True, slots=True)
class ComponentPricer[C]:
    """Present-value and future-value functions for one component class."""

    present_value: PricerFn[C]
    future_value: PricerFn[C]

    def __post_init__(self) -> None:
        if not callable(self.present_value) or not callable(self.future_value):
            raise TypeError("ComponentPricer requires callable present_value and future_value")

    def function_for(self, kind: ValueKind) -> PricerFn[C]:
        if kind is ValueKind.PRESENT_VALUE:
            return self.present_value
        return self.future_value

    def value(
        self, env: PricingEnvironment, component: C, kind: ValueKind,
    ) -> Ok[Decimal] | Err[ValuationFailure]:
        return self.function_for(kind)(env, component)


type AnyComponentPricer = ComponentPricer[Any]
