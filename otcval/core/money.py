"""Decimal context, refined string type, Money, Payment, CurrencyPair.

All valuation arithmetic runs in DECIMAL_CONTEXT: prec=28, ROUND_HALF_EVEN,
traps for InvalidOperation/DivisionByZero/Overflow.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from decimal import ROUND_HALF_EVEN as _ROUND_HALF_EVEN
from decimal import (
    Context,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    Overflow,
)
from typing import Any, final

from otcval.core.result import Err, Ok

DECIMAL_CONTEXT = Context(
    prec=28,
    rounding=_ROUND_HALF_EVEN,
    Emin=-999999,
    Emax=999999,
    capitals=1,
    clamp=0,
    flags=[],
    traps=[InvalidOperation, DivisionByZero, Overflow],
)


def is_finite_decimal(value: object) -> bool:
    return isinstance(value, Decimal) and value.is_finite()


# --- Refined types ---


@final
@dataclass(frozen=True, slots=True)
class NonEmptyStr:
    """String constrained to be non-empty."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value:
            raise TypeError("NonEmptyStr requires non-empty string")

    @staticmethod
    def parse(raw: str) -> Ok[NonEmptyStr] | Err[str]:
        if not isinstance(raw, str) or not raw:
            return Err("NonEmptyStr requires non-empty string")
        return Ok(NonEmptyStr(value=raw))

    def __str__(self) -> str:
        return self.value


VALID_CURRENCIES: frozenset[str] = frozenset({
    "USD", "EUR", "GBP", "CHF", "CAD", "AUD", "SEK", "JPY", "KRW",
    "HKD", "SGD", "NZD", "NOK", "DKK", "ZAR", "MXN", "BRL", "INR",
    "CNY", "PLN", "CZK", "HUF", "TRY", "ILS",
})


def validate_currency(code: str) -> bool:
    return code in VALID_CURRENCIES


@final
@dataclass(frozen=True, slots=True)
class Money:
    """Immutable signed monetary amount with currency."""

    amount: Decimal
    currency: NonEmptyStr

    def __post_init__(self) -> None:
        if not is_finite_decimal(self.amount):
            raise TypeError(f"Money.amount must be finite Decimal, got {self.amount!r}")
        if not isinstance(self.currency, NonEmptyStr):
            raise TypeError(
                f"Money.currency must be NonEmptyStr, got {type(self.currency).__name__}"
            )

    @staticmethod
    def create(amount: Decimal, currency: str) -> Ok[Money] | Err[str]:
        """Create Money, rejecting non-Decimal, NaN and Infinity."""
        if not isinstance(amount, Decimal):
            return Err(f"Money.amount must be Decimal, got {type(amount).__name__}")
        if not amount.is_finite():
            return Err(f"Money.amount must be finite, got {amount}")
        match NonEmptyStr.parse(currency):
            case Err(e):
                return Err(f"Money.currency: {e}")
            case Ok(c):
                return Ok(Money(amount=amount, currency=c))


@final
@dataclass(frozen=True, slots=True)
class Payment:
    """A single amount paid or received on a date. Positive = received."""

    value: Money
    payment_date: date

    def __post_init__(self) -> None:
        if not isinstance(self.value, Money):
            raise TypeError(f"Payment.value must be Money, got {type(self.value).__name__}")
        if not isinstance(self.payment_date, date):
            raise TypeError(
                f"Payment.payment_date must be date, got {type(self.payment_date).__name__}"
            )

    @property
    def amount(self) -> Decimal:
        return self.value.amount

    @property
    def currency(self) -> NonEmptyStr:
        return self.value.currency

    def with_changes(self, **overrides: Any) -> Payment:
        return replace(self, **overrides)


@final
@dataclass(frozen=True, slots=True)
class CurrencyPair:
    """Validated FX currency pair, e.g. EUR/USD: price of one base in quote."""

    base: NonEmptyStr
    quote: NonEmptyStr

    def __post_init__(self) -> None:
        if self.base.value == self.quote.value:
            raise TypeError(
                f"CurrencyPair base and quote must differ, both are '{self.base.value}'"
            )

    @staticmethod
    def parse(raw: str) -> Ok[CurrencyPair] | Err[str]:
        """Parse 'BASE/QUOTE'."""
        parts = raw.split("/")
        if len(parts) != 2:
            return Err(f"CurrencyPair must be BASE/QUOTE, got '{raw}'")
        base_str, quote_str = parts[0].strip(), parts[1].strip()
        if not validate_currency(base_str):
            return Err(f"Invalid base currency: {base_str}")
        if not validate_currency(quote_str):
            return Err(f"Invalid quote currency: {quote_str}")
        if base_str == quote_str:
            return Err(f"Base and quote must differ: {base_str}")
        return Ok(CurrencyPair(base=NonEmptyStr(base_str), quote=NonEmptyStr(quote_str)))

    @property
    def value(self) -> str:
        return f"{self.base.value}/{self.quote.value}"
