"""Discount curves: discount factors at tenor pillars, log-linear in between.

Tenors are year fractions from the curve's valuation date. All arithmetic
uses Decimal with DECIMAL_CONTEXT. No float.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, localcontext
from typing import final

from otcval.core.decimal_math import exp_d, ln_d
from otcval.core.money import DECIMAL_CONTEXT, NonEmptyStr, is_finite_decimal
from otcval.core.result import Err, Ok

_ZERO = Decimal("0")
_ONE = Decimal("1")


@final
@dataclass(frozen=True, slots=True)
class DiscountCurve:
    """Discount factors at ascending tenor pillars for one currency."""

    currency: NonEmptyStr
    tenors: tuple[Decimal, ...]
    discount_factors: tuple[Decimal, ...]

    def __post_init__(self) -> None:
        match DiscountCurve._check(self.tenors, self.discount_factors):
            case Err(e):
                raise TypeError(f"DiscountCurve: {e}")
            case Ok(_):
                pass

    @staticmethod
    def _check(
        tenors: tuple[Decimal, ...], discount_factors: tuple[Decimal, ...],
    ) -> Ok[None] | Err[str]:
        if len(tenors) != len(discount_factors):
            return Err(
                f"tenors ({len(tenors)}) and discount_factors ({len(discount_factors)}) "
                "must have same length"
            )
        if len(tenors) == 0:
            return Err("tenors must be non-empty")
        for i, t in enumerate(tenors):
            if not is_finite_decimal(t) or t <= 0:
                return Err(f"tenors[{i}] must be Decimal > 0, got {t!r}")
            if i > 0 and t <= tenors[i - 1]:
                return Err(
                    f"tenors must be ascending: tenors[{i}]={t} "
                    f"<= tenors[{i-1}]={tenors[i-1]}"
                )
        for i, d in enumerate(discount_factors):
            if not is_finite_decimal(d) or d <= 0:
                return Err(f"discount_factors[{i}] must be Decimal > 0, got {d!r}")
        return Ok(None)

    @staticmethod
    def create(
        currency: str,
        tenors: tuple[Decimal, ...],
        discount_factors: tuple[Decimal, ...],
    ) -> Ok[DiscountCurve] | Err[str]:
        """Validated construction.

        Enforced:
        - len(tenors) == len(discount_factors), non-empty
        - tenors ascending, all > 0
        - all discount factors > 0
        """
        match NonEmptyStr.parse(currency):
            case Err(e):
                return Err(f"DiscountCurve.currency: {e}")
            case Ok(cur):
                pass
        match DiscountCurve._check(tenors, discount_factors):
            case Err(e):
                return Err(e)
            case Ok(_):
                return Ok(DiscountCurve(
                    currency=cur, tenors=tenors, discount_factors=discount_factors,
                ))

    @staticmethod
    def from_zero_rates(
        currency: str,
        tenors: tuple[Decimal, ...],
        zero_rates: tuple[Decimal, ...],
    ) -> Ok[DiscountCurve] | Err[str]:
        """Build from continuously compounded zero rates: DF(t) = exp(-r * t)."""
        if len(tenors) != len(zero_rates):
            return Err(
                f"tenors ({len(tenors)}) and zero_rates ({len(zero_rates)}) "
                "must have same length"
            )
        with localcontext(DECIMAL_CONTEXT):
            dfs = tuple(exp_d(-r * t) for t, r in zip(tenors, zero_rates, strict=True))
        return DiscountCurve.create(currency, tenors, dfs)

    def discount_factor(self, tenor: Decimal) -> Decimal:
        """Discount factor at an arbitrary tenor.

        - tenor <= 0: 1
        - before the first pillar: log-linear from DF(0) = 1
        - between pillars: log-linear
        - after the last pillar: flat at the last discount factor
        """
        if tenor <= 0:
            return _ONE
        tenors = self.tenors
        dfs = self.discount_factors
        with localcontext(DECIMAL_CONTEXT):
            if tenor <= tenors[0]:
                return exp_d(tenor / tenors[0] * ln_d(dfs[0]))
            if tenor >= tenors[-1]:
                return dfs[-1]
            for i in range(len(tenors) - 1):
                if tenors[i] <= tenor <= tenors[i + 1]:
                    w = (tenor - tenors[i]) / (tenors[i + 1] - tenors[i])
                    return exp_d((_ONE - w) * ln_d(dfs[i]) + w * ln_d(dfs[i + 1]))
        # Unreachable once tenors are validated ascending.
        raise TypeError(f"DiscountCurve: cannot interpolate at tenor {tenor}")

    def zero_rate(self, tenor: Decimal) -> Decimal:
        """Continuously compounded zero rate: -ln(DF(t)) / t."""
        if tenor <= 0:
            raise TypeError(f"DiscountCurve.zero_rate requires tenor > 0, got {tenor}")
        with localcontext(DECIMAL_CONTEXT):
            return -ln_d(self.discount_factor(tenor)) / tenor
