"""Reset schedule: how often a floating rate is fixed within an accrual period,
and how the fixings are averaged into a single period rate.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal, localcontext
from enum import Enum
from typing import Any, final

from otcval.core.calendar import adjust
from otcval.core.errors import FieldViolation, ValidationError, validation_error
from otcval.core.money import DECIMAL_CONTEXT
from otcval.core.result import Err, Ok
from otcval.core.types import BusinessDayAdjustments, Frequency


class RateAveragingMethod(Enum):
    """How the rates observed over the reset periods combine into one rate.

    UNWEIGHTED: arithmetic mean of the fixings.
    WEIGHTED: each fixing weighted by the number of days its reset period covers.
    """

    UNWEIGHTED = "UNWEIGHTED"
    WEIGHTED = "WEIGHTED"

    def average(self, rates: Sequence[Decimal], weights: Sequence[Decimal]) -> Decimal:
        """Average rates; weights are ignored for UNWEIGHTED.

        Raises TypeError on empty input or mismatched lengths.
        """
        if not rates:
            raise TypeError("RateAveragingMethod.average: rates must be non-empty")
        if len(rates) != len(weights):
            raise TypeError(
                f"RateAveragingMethod.average: {len(rates)} rates "
                f"but {len(weights)} weights"
            )
        with localcontext(DECIMAL_CONTEXT):
            if self is RateAveragingMethod.UNWEIGHTED:
                return sum(rates, Decimal("0")) / Decimal(len(rates))
            total_weight = sum(weights, Decimal("0"))
            if total_weight <= 0:
                raise TypeError(
                    f"RateAveragingMethod.average: total weight must be > 0, got {total_weight}"
                )
            weighted = sum((r * w for r, w in zip(rates, weights, strict=True)), Decimal("0"))
            return weighted / total_weight


@final
@dataclass(frozen=True, slots=True)
class ResetSchedule:
    """Reset definition for a floating leg.

    The reset frequency must be no longer than the accrual frequency of the
    leg it belongs to; check_accrual_frequency verifies that once the leg's
    accrual frequency is known.
    """

    reset_frequency: Frequency
    reset_business_day_adjustment: BusinessDayAdjustments
    rate_averaging_method: RateAveragingMethod = RateAveragingMethod.UNWEIGHTED

    def __post_init__(self) -> None:
        if not isinstance(self.reset_frequency, Frequency):
            raise TypeError(
                "ResetSchedule.reset_frequency must be Frequency, "
                f"got {type(self.reset_frequency).__name__}"
            )
        if not isinstance(self.reset_business_day_adjustment, BusinessDayAdjustments):
            raise TypeError(
                "ResetSchedule.reset_business_day_adjustment must be BusinessDayAdjustments, "
                f"got {type(self.reset_business_day_adjustment).__name__}"
            )
        if not isinstance(self.rate_averaging_method, RateAveragingMethod):
            raise TypeError(
                "ResetSchedule.rate_averaging_method must be RateAveragingMethod, "
                f"got {type(self.rate_averaging_method).__name__}"
            )

    @staticmethod
    def create(
        reset_frequency: Frequency | None,
        reset_business_day_adjustment: BusinessDayAdjustments | None,
        rate_averaging_method: RateAveragingMethod | None = None,
    ) -> Ok[ResetSchedule] | Err[ValidationError]:
        """Validated construction. A None averaging method means UNWEIGHTED."""
        violations: list[FieldViolation] = []
        if reset_frequency is None:
            violations.append(FieldViolation(
                path="reset_frequency", constraint="must be present", actual_value="None",
            ))
        if reset_business_day_adjustment is None:
            violations.append(FieldViolation(
                path="reset_business_day_adjustment",
                constraint="must be present", actual_value="None",
            ))
        if violations:
            return Err(validation_error(
                "ResetSchedule: missing mandatory fields",
                "instrument.reset.ResetSchedule.create",
                violations,
            ))
        assert reset_frequency is not None
        assert reset_business_day_adjustment is not None
        try:
            return Ok(ResetSchedule(
                reset_frequency=reset_frequency,
                reset_business_day_adjustment=reset_business_day_adjustment,
                rate_averaging_method=(
                    rate_averaging_method
                    if rate_averaging_method is not None
                    else RateAveragingMethod.UNWEIGHTED
                ),
            ))
        except TypeError as e:
            return Err(validation_error(
                str(e), "instrument.reset.ResetSchedule.create",
                [FieldViolation(path="ResetSchedule", constraint=str(e), actual_value="")],
            ))

    def check_accrual_frequency(self, accrual_frequency: Frequency) -> Ok[None] | Err[str]:
        """Verify the reset frequency does not exceed the accrual frequency."""
        if not self.reset_frequency.is_no_longer_than(accrual_frequency):
            return Err(
                f"ResetSchedule: reset frequency {self.reset_frequency} must be "
                f"no longer than accrual frequency {accrual_frequency}"
            )
        return Ok(None)

    def adjust_reset_date(self, d: date) -> date:
        return adjust(d, self.reset_business_day_adjustment)

    def with_changes(self, **overrides: Any) -> ResetSchedule:
        return replace(self, **overrides)
