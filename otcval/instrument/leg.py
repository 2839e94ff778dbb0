"""Resolved swap leg and resolved swap product."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
from datetime import date
from typing import Any, final

from otcval.core.money import NonEmptyStr
from otcval.core.types import PayReceive, SwapLegType
from otcval.instrument.events import PaymentEvent
from otcval.instrument.periods import PaymentPeriod


def _check_components(
    name: str,
    currency: NonEmptyStr,
    components: Sequence[PaymentPeriod] | Sequence[PaymentEvent],
) -> None:
    previous: date | None = None
    for i, c in enumerate(components):
        if c.currency != currency:
            raise TypeError(
                f"ResolvedSwapLeg.{name}[{i}] currency {c.currency} "
                f"must equal leg currency {currency}"
            )
        if previous is not None and c.payment_date < previous:
            raise TypeError(
                f"ResolvedSwapLeg.{name}: payment dates must be non-decreasing, but "
                f"{name}[{i - 1}]={previous} > {name}[{i}]={c.payment_date}"
            )
        previous = c.payment_date


@final
@dataclass(frozen=True, slots=True)
class ResolvedSwapLeg:
    """One leg of a swap, expanded into its payment periods and events.

    Components are signed already (negative = paid); pay_receive records the
    direction the leg was resolved with. A leg may have no periods, no events,
    or neither.
    """

    leg_type: SwapLegType
    pay_receive: PayReceive
    currency: NonEmptyStr
    payment_periods: tuple[PaymentPeriod, ...] = ()
    payment_events: tuple[PaymentEvent, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.leg_type, SwapLegType):
            raise TypeError(
                f"ResolvedSwapLeg.leg_type must be SwapLegType, got {type(self.leg_type).__name__}"
            )
        if not isinstance(self.pay_receive, PayReceive):
            raise TypeError(
                "ResolvedSwapLeg.pay_receive must be PayReceive, "
                f"got {type(self.pay_receive).__name__}"
            )
        if not isinstance(self.currency, NonEmptyStr):
            raise TypeError(
                f"ResolvedSwapLeg.currency must be NonEmptyStr, got {type(self.currency).__name__}"
            )
        if not isinstance(self.payment_periods, tuple):
            raise TypeError("ResolvedSwapLeg.payment_periods must be a tuple")
        if not isinstance(self.payment_events, tuple):
            raise TypeError("ResolvedSwapLeg.payment_events must be a tuple")
        _check_components("payment_periods", self.currency, self.payment_periods)
        _check_components("payment_events", self.currency, self.payment_events)

    @property
    def is_empty(self) -> bool:
        return not self.payment_periods and not self.payment_events

    def with_changes(self, **overrides: Any) -> ResolvedSwapLeg:
        return replace(self, **overrides)


@final
@dataclass(frozen=True, slots=True)
class ResolvedSwap:
    """A swap product: one or more resolved legs."""

    legs: tuple[ResolvedSwapLeg, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.legs, tuple) or not self.legs:
            raise TypeError("ResolvedSwap.legs must be a non-empty tuple")
        for i, leg in enumerate(self.legs):
            if not isinstance(leg, ResolvedSwapLeg):
                raise TypeError(
                    f"ResolvedSwap.legs[{i}] must be ResolvedSwapLeg, got {type(leg).__name__}"
                )

    @property
    def currencies(self) -> frozenset[NonEmptyStr]:
        return frozenset(leg.currency for leg in self.legs)

    @property
    def is_cross_currency(self) -> bool:
        return len(self.currencies) > 1

    def legs_of(self, leg_type: SwapLegType) -> tuple[ResolvedSwapLeg, ...]:
        return tuple(leg for leg in self.legs if leg.leg_type is leg_type)

    def with_changes(self, **overrides: Any) -> ResolvedSwap:
        return replace(self, **overrides)
