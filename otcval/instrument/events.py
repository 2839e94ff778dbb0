"""Resolved payment events: single known amounts paid on a date."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import Any, Protocol, final, runtime_checkable

from otcval.core.money import Money, NonEmptyStr


@runtime_checkable
class PaymentEvent(Protocol):
    """Any single payment on a date that is not an accrual period."""

    @property
    def payment_date(self) -> date: ...

    @property
    def currency(self) -> NonEmptyStr: ...


@final
@dataclass(frozen=True, slots=True)
class NotionalExchange:
    """Exchange of notional, e.g. at the start or end of a cross-currency swap."""

    payment: Money
    payment_date: date

    def __post_init__(self) -> None:
        if not isinstance(self.payment, Money):
            raise TypeError(
                f"NotionalExchange.payment must be Money, got {type(self.payment).__name__}"
            )
        if not isinstance(self.payment_date, date):
            raise TypeError(
                "NotionalExchange.payment_date must be date, "
                f"got {type(self.payment_date).__name__}"
            )

    @property
    def currency(self) -> NonEmptyStr:
        return self.payment.currency

    def with_changes(self, **overrides: Any) -> NotionalExchange:
        return replace(self, **overrides)


@final
@dataclass(frozen=True, slots=True)
class TerminationPayment:
    """Payment made when the swap is terminated early."""

    payment: Money
    termination_date: date
    payment_date: date

    def __post_init__(self) -> None:
        if not isinstance(self.payment, Money):
            raise TypeError(
                f"TerminationPayment.payment must be Money, got {type(self.payment).__name__}"
            )
        if self.termination_date > self.payment_date:
            raise TypeError(
                f"TerminationPayment: termination_date ({self.termination_date}) "
                f"must be <= payment_date ({self.payment_date})"
            )

    @property
    def currency(self) -> NonEmptyStr:
        return self.payment.currency

    def with_changes(self, **overrides: Any) -> TerminationPayment:
        return replace(self, **overrides)
