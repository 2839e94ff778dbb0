"""Resolved single-name credit default swap: coupon periods, product, trade.

All types are @final @dataclass(frozen=True, slots=True). Smart constructors
return Ok | Err for validated creation.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, final

from otcval.core.errors import FieldViolation, ValidationError, validation_error
from otcval.core.money import NonEmptyStr, Payment, is_finite_decimal
from otcval.core.result import Err, Ok
from otcval.core.types import DayCountConvention
from otcval.instrument.trade import TradeInfo, invalid_info, invalid_product, missing_product


class ProtectionSide(Enum):
    """CDS protection buyer or seller."""

    BUYER = "BUYER"
    SELLER = "SELLER"


# ---------------------------------------------------------------------------
# Coupon period
# ---------------------------------------------------------------------------


@final
@dataclass(frozen=True, slots=True)
class CreditCouponPaymentPeriod:
    """One premium period of a CDS.

    start/end are the accrual dates; effective start/end are the dates
    between which protection is in force for the period.
    """

    start_date: date
    end_date: date
    effective_start_date: date
    effective_end_date: date
    payment_date: date
    notional: Decimal
    currency: NonEmptyStr
    fixed_rate: Decimal
    year_fraction: Decimal

    def __post_init__(self) -> None:
        for name in (
            "start_date", "end_date", "effective_start_date", "effective_end_date", "payment_date",
        ):
            value = getattr(self, name)
            if not isinstance(value, date):
                raise TypeError(
                    f"CreditCouponPaymentPeriod.{name} must be date, got {type(value).__name__}"
                )
        if self.start_date >= self.end_date:
            raise TypeError(
                f"CreditCouponPaymentPeriod: start_date ({self.start_date}) "
                f"must be < end_date ({self.end_date})"
            )
        if self.effective_start_date >= self.effective_end_date:
            raise TypeError(
                "CreditCouponPaymentPeriod: effective_start_date "
                f"({self.effective_start_date}) must be < effective_end_date "
                f"({self.effective_end_date})"
            )
        if not is_finite_decimal(self.notional) or self.notional <= 0:
            raise TypeError(
                f"CreditCouponPaymentPeriod.notional must be Decimal > 0, got {self.notional!r}"
            )
        if not isinstance(self.currency, NonEmptyStr):
            raise TypeError(
                "CreditCouponPaymentPeriod.currency must be NonEmptyStr, "
                f"got {type(self.currency).__name__}"
            )
        if not is_finite_decimal(self.fixed_rate):
            raise TypeError(
                "CreditCouponPaymentPeriod.fixed_rate must be finite Decimal, "
                f"got {self.fixed_rate!r}"
            )
        if not is_finite_decimal(self.year_fraction) or self.year_fraction < 0:
            raise TypeError(
                "CreditCouponPaymentPeriod.year_fraction must be Decimal >= 0, "
                f"got {self.year_fraction!r}"
            )

    def with_changes(self, **overrides: Any) -> CreditCouponPaymentPeriod:
        return replace(self, **overrides)


# ---------------------------------------------------------------------------
# Product
# ---------------------------------------------------------------------------


@final
@dataclass(frozen=True, slots=True)
class ResolvedCds:
    """Single-name CDS expanded into its coupon periods.

    BUYER pays the premium and receives protection; SELLER the reverse.
    """

    buy_sell: ProtectionSide
    legal_entity_id: NonEmptyStr
    currency: NonEmptyStr
    notional: Decimal
    fixed_rate: Decimal
    day_count: DayCountConvention
    payment_periods: tuple[CreditCouponPaymentPeriod, ...]
    protection_start_date: date
    protection_end_date: date
    pays_accrued_on_default: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.buy_sell, ProtectionSide):
            raise TypeError(
                f"ResolvedCds.buy_sell must be ProtectionSide, got {type(self.buy_sell).__name__}"
            )
        if not isinstance(self.legal_entity_id, NonEmptyStr):
            raise TypeError(
                "ResolvedCds.legal_entity_id must be NonEmptyStr, "
                f"got {type(self.legal_entity_id).__name__}"
            )
        if not isinstance(self.currency, NonEmptyStr):
            raise TypeError(
                f"ResolvedCds.currency must be NonEmptyStr, got {type(self.currency).__name__}"
            )
        if not isinstance(self.day_count, DayCountConvention):
            raise TypeError(
                "ResolvedCds.day_count must be DayCountConvention, "
                f"got {type(self.day_count).__name__}"
            )
        for name in ("protection_start_date", "protection_end_date"):
            value = getattr(self, name)
            if not isinstance(value, date):
                raise TypeError(f"ResolvedCds.{name} must be date, got {type(value).__name__}")
        if not isinstance(self.pays_accrued_on_default, bool):
            raise TypeError(
                "ResolvedCds.pays_accrued_on_default must be bool, "
                f"got {type(self.pays_accrued_on_default).__name__}"
            )
        if not is_finite_decimal(self.notional) or self.notional <= 0:
            raise TypeError(f"ResolvedCds.notional must be Decimal > 0, got {self.notional!r}")
        if not is_finite_decimal(self.fixed_rate):
            raise TypeError(
                f"ResolvedCds.fixed_rate must be finite Decimal, got {self.fixed_rate!r}"
            )
        if self.protection_start_date >= self.protection_end_date:
            raise TypeError(
                f"ResolvedCds: protection_start_date ({self.protection_start_date}) "
                f"must be < protection_end_date ({self.protection_end_date})"
            )
        if not isinstance(self.payment_periods, tuple) or not self.payment_periods:
            raise TypeError("ResolvedCds.payment_periods must be a non-empty tuple")
        for i, p in enumerate(self.payment_periods):
            if not isinstance(p, CreditCouponPaymentPeriod):
                raise TypeError(
                    "ResolvedCds.payment_periods must hold CreditCouponPaymentPeriod, "
                    f"got {type(p).__name__} at index {i}"
                )
            if p.currency != self.currency:
                raise TypeError(
                    f"ResolvedCds.payment_periods[{i}] currency {p.currency} "
                    f"must equal product currency {self.currency}"
                )
            if i > 0 and p.start_date < self.payment_periods[i - 1].end_date:
                raise TypeError(
                    "ResolvedCds.payment_periods must be in chronological order: "
                    f"payment_periods[{i}] starts {p.start_date} before "
                    f"payment_periods[{i - 1}] ends {self.payment_periods[i - 1].end_date}"
                )

    @property
    def accrual_start_date(self) -> date:
        return self.payment_periods[0].start_date

    @property
    def accrual_end_date(self) -> date:
        return self.payment_periods[-1].end_date

    def with_changes(self, **overrides: Any) -> ResolvedCds:
        return replace(self, **overrides)


# ---------------------------------------------------------------------------
# Trade
# ---------------------------------------------------------------------------


def _fee_violations(
    product: ResolvedCds, upfront_fee: Payment | None,
) -> list[FieldViolation]:
    if upfront_fee is None:
        return []
    if not isinstance(upfront_fee, Payment):
        return [FieldViolation(
            path="upfront_fee", constraint="must be Payment",
            actual_value=type(upfront_fee).__name__,
        )]
    violations: list[FieldViolation] = []
    if upfront_fee.currency != product.currency:
        violations.append(FieldViolation(
            path="upfront_fee.currency",
            constraint=f"must equal product currency {product.currency}",
            actual_value=str(upfront_fee.currency),
        ))
    # Fee is signed from the holder's view: the buyer pays, the seller receives.
    if product.buy_sell is ProtectionSide.BUYER and upfront_fee.amount > 0:
        violations.append(FieldViolation(
            path="upfront_fee.amount",
            constraint="must be <= 0 for protection buyer",
            actual_value=str(upfront_fee.amount),
        ))
    if product.buy_sell is ProtectionSide.SELLER and upfront_fee.amount < 0:
        violations.append(FieldViolation(
            path="upfront_fee.amount",
            constraint="must be >= 0 for protection seller",
            actual_value=str(upfront_fee.amount),
        ))
    return violations


@final
@dataclass(frozen=True, slots=True)
class ResolvedCdsTrade:
    """A CDS trade ready for pricing.

    info defaults to TradeInfo.EMPTY and is never None. A None upfront_fee
    means the trade was done at par.
    """

    product: ResolvedCds
    info: TradeInfo = field(default_factory=lambda: TradeInfo.EMPTY)
    upfront_fee: Payment | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.product, ResolvedCds):
            raise TypeError(
                f"ResolvedCdsTrade.product must be ResolvedCds, got {type(self.product).__name__}"
            )
        if not isinstance(self.info, TradeInfo):
            raise TypeError(
                f"ResolvedCdsTrade.info must be TradeInfo, got {type(self.info).__name__}"
            )
        violations = _fee_violations(self.product, self.upfront_fee)
        if violations:
            v = violations[0]
            raise TypeError(
                f"ResolvedCdsTrade.{v.path} {v.constraint}, got {v.actual_value}"
            )

    @staticmethod
    def create(
        product: ResolvedCds | None,
        info: TradeInfo | None = None,
        upfront_fee: Payment | None = None,
    ) -> Ok[ResolvedCdsTrade] | Err[ValidationError]:
        """Validated construction. A None info means TradeInfo.EMPTY.

        All upfront fee violations are reported together.
        """
        source = "instrument.credit_types.ResolvedCdsTrade.create"
        if product is None:
            return Err(missing_product(source))
        if not isinstance(product, ResolvedCds):
            return Err(invalid_product(product, ResolvedCds, source))
        resolved_info = TradeInfo.EMPTY if info is None else info
        if not isinstance(resolved_info, TradeInfo):
            return Err(invalid_info(resolved_info, source))
        violations = _fee_violations(product, upfront_fee)
        if violations:
            return Err(validation_error(
                "ResolvedCdsTrade: invalid upfront fee", source, violations,
            ))
        return Ok(ResolvedCdsTrade(product=product, info=resolved_info, upfront_fee=upfront_fee))

    def with_changes(self, **overrides: Any) -> ResolvedCdsTrade:
        return replace(self, **overrides)
