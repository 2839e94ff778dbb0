"""Resolved payment periods: one accrual period each, paid on payment_date.

All periods carry a signed notional (negative = paid) and a pre-computed
year fraction, so pricing needs no calendar or day count logic.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from typing import Any, Protocol, final, runtime_checkable

from otcval.core.money import NonEmptyStr, is_finite_decimal
from otcval.instrument.reset import RateAveragingMethod
from otcval.oracle.observable import FxObservation, RateObservation


@runtime_checkable
class PaymentPeriod(Protocol):
    """Any accrual period that results in a single payment.

    Structural: new variants need only these attributes, then a pricer
    registered for their class.
    """

    @property
    def payment_date(self) -> date: ...

    @property
    def currency(self) -> NonEmptyStr: ...


def _check_accrual(
    name: str,
    payment_date: date,
    start_date: date,
    end_date: date,
    year_fraction: Decimal,
    currency: NonEmptyStr,
    notional: Decimal,
) -> None:
    if not isinstance(payment_date, date):
        raise TypeError(f"{name}.payment_date must be date, got {type(payment_date).__name__}")
    if not isinstance(start_date, date) or not isinstance(end_date, date):
        raise TypeError(f"{name}: start_date and end_date must be dates")
    if start_date >= end_date:
        raise TypeError(f"{name}: start_date ({start_date}) must be < end_date ({end_date})")
    if not is_finite_decimal(year_fraction) or year_fraction < 0:
        raise TypeError(f"{name}.year_fraction must be Decimal >= 0, got {year_fraction!r}")
    if not isinstance(currency, NonEmptyStr):
        raise TypeError(f"{name}.currency must be NonEmptyStr, got {type(currency).__name__}")
    if not is_finite_decimal(notional):
        raise TypeError(f"{name}.notional must be finite Decimal, got {notional!r}")


# ---------------------------------------------------------------------------
# Fixed rate
# ---------------------------------------------------------------------------


@final
@dataclass(frozen=True, slots=True)
class FixedRatePaymentPeriod:
    """Accrual at a fixed rate: amount = notional * rate * year_fraction."""

    payment_date: date
    start_date: date
    end_date: date
    year_fraction: Decimal
    currency: NonEmptyStr
    notional: Decimal
    rate: Decimal

    def __post_init__(self) -> None:
        _check_accrual(
            "FixedRatePaymentPeriod", self.payment_date, self.start_date, self.end_date,
            self.year_fraction, self.currency, self.notional,
        )
        if not is_finite_decimal(self.rate):
            raise TypeError(
                f"FixedRatePaymentPeriod.rate must be finite Decimal, got {self.rate!r}"
            )

    def with_changes(self, **overrides: Any) -> FixedRatePaymentPeriod:
        return replace(self, **overrides)


# ---------------------------------------------------------------------------
# Floating rate
# ---------------------------------------------------------------------------


@final
@dataclass(frozen=True, slots=True)
class ResetPeriod:
    """One reset within an accrual period and the observation that fixes it."""

    start_date: date
    end_date: date
    observation: RateObservation

    def __post_init__(self) -> None:
        if self.start_date >= self.end_date:
            raise TypeError(
                f"ResetPeriod: start_date ({self.start_date}) must be < end_date ({self.end_date})"
            )
        if not isinstance(self.observation, RateObservation):
            raise TypeError(
                "ResetPeriod.observation must be RateObservation, "
                f"got {type(self.observation).__name__}"
            )

    @property
    def weight(self) -> Decimal:
        """Days covered; the weight used by weighted averaging."""
        return Decimal((self.end_date - self.start_date).days)


@final
@dataclass(frozen=True, slots=True)
class FloatingRatePaymentPeriod:
    """Accrual at an observed index rate.

    The rates observed for each reset period are averaged, then
    amount = notional * (gearing * rate + spread) * year_fraction.
    """

    payment_date: date
    start_date: date
    end_date: date
    year_fraction: Decimal
    currency: NonEmptyStr
    notional: Decimal
    reset_periods: tuple[ResetPeriod, ...]
    averaging_method: RateAveragingMethod = RateAveragingMethod.UNWEIGHTED
    spread: Decimal = Decimal("0")
    gearing: Decimal = Decimal("1")

    def __post_init__(self) -> None:
        _check_accrual(
            "FloatingRatePaymentPeriod", self.payment_date, self.start_date, self.end_date,
            self.year_fraction, self.currency, self.notional,
        )
        if not isinstance(self.reset_periods, tuple) or not self.reset_periods:
            raise TypeError("FloatingRatePaymentPeriod.reset_periods must be a non-empty tuple")
        for i, reset in enumerate(self.reset_periods):
            if not isinstance(reset, ResetPeriod):
                raise TypeError(
                    "FloatingRatePaymentPeriod.reset_periods must hold ResetPeriod, "
                    f"got {type(reset).__name__} at index {i}"
                )
        for i in range(1, len(self.reset_periods)):
            if self.reset_periods[i].start_date < self.reset_periods[i - 1].end_date:
                raise TypeError(
                    "FloatingRatePaymentPeriod.reset_periods must not overlap: "
                    f"reset_periods[{i}] starts {self.reset_periods[i].start_date} "
                    f"before reset_periods[{i - 1}] ends {self.reset_periods[i - 1].end_date}"
                )
        if not isinstance(self.averaging_method, RateAveragingMethod):
            raise TypeError(
                "FloatingRatePaymentPeriod.averaging_method must be RateAveragingMethod, "
                f"got {type(self.averaging_method).__name__}"
            )
        if not is_finite_decimal(self.spread):
            raise TypeError(
                f"FloatingRatePaymentPeriod.spread must be finite Decimal, got {self.spread!r}"
            )
        if not is_finite_decimal(self.gearing):
            raise TypeError(
                f"FloatingRatePaymentPeriod.gearing must be finite Decimal, got {self.gearing!r}"
            )

    def with_changes(self, **overrides: Any) -> FloatingRatePaymentPeriod:
        return replace(self, **overrides)


# ---------------------------------------------------------------------------
# FX reset
# ---------------------------------------------------------------------------


@final
@dataclass(frozen=True, slots=True)
class FxResetPaymentPeriod:
    """Fixed-rate accrual on a notional set in a reference currency.

    The notional is converted into the payment currency at the FX rate
    observed on the fixing date: amount = notional * fx * rate * year_fraction.
    The observed pair must be reference_currency against currency, in either
    orientation.
    """

    payment_date: date
    start_date: date
    end_date: date
    year_fraction: Decimal
    currency: NonEmptyStr
    notional: Decimal
    reference_currency: NonEmptyStr
    rate: Decimal
    fx_observation: FxObservation

    def __post_init__(self) -> None:
        _check_accrual(
            "FxResetPaymentPeriod", self.payment_date, self.start_date, self.end_date,
            self.year_fraction, self.currency, self.notional,
        )
        if not isinstance(self.reference_currency, NonEmptyStr):
            raise TypeError(
                "FxResetPaymentPeriod.reference_currency must be NonEmptyStr, "
                f"got {type(self.reference_currency).__name__}"
            )
        if not isinstance(self.fx_observation, FxObservation):
            raise TypeError(
                "FxResetPaymentPeriod.fx_observation must be FxObservation, "
                f"got {type(self.fx_observation).__name__}"
            )
        if self.reference_currency == self.currency:
            raise TypeError(
                "FxResetPaymentPeriod.reference_currency must differ from currency, "
                f"both are '{self.currency}'"
            )
        if not is_finite_decimal(self.rate):
            raise TypeError(f"FxResetPaymentPeriod.rate must be finite Decimal, got {self.rate!r}")
        pair = self.fx_observation.pair
        if {pair.base, pair.quote} != {self.reference_currency, self.currency}:
            raise TypeError(
                f"FxResetPaymentPeriod.fx_observation pair {pair.value} must convert "
                f"{self.reference_currency} to {self.currency}"
            )

    @property
    def reference_is_base(self) -> bool:
        return self.fx_observation.pair.base == self.reference_currency

    def with_changes(self, **overrides: Any) -> FxResetPaymentPeriod:
        return replace(self, **overrides)
