"""Pricing configuration. Pure configuration data, no I/O."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, final

from otcval.core.types import DayCountConvention


@final
@dataclass(frozen=True, slots=True)
class PricingConfig:
    """Settings shared by market data environments.

    curve_day_count: converts dates into curve tenors (years from valuation date).
    use_fixing_on_valuation_date: prefer a published fixing over the forward
        curve when an observation fixes on the valuation date itself.
    """

    curve_day_count: DayCountConvention = DayCountConvention.ACT_365
    use_fixing_on_valuation_date: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.curve_day_count, DayCountConvention):
            raise TypeError(
                "PricingConfig.curve_day_count must be DayCountConvention, "
                f"got {type(self.curve_day_count).__name__}"
            )
        if not isinstance(self.use_fixing_on_valuation_date, bool):
            raise TypeError(
                "PricingConfig.use_fixing_on_valuation_date must be bool, "
                f"got {type(self.use_fixing_on_valuation_date).__name__}"
            )

    def with_changes(self, **overrides: Any) -> PricingConfig:
        return replace(self, **overrides)


DEFAULT_PRICING_CONFIG: PricingConfig = PricingConfig()
