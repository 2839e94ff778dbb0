"""Market observables referenced by resolved cash flows.

FloatingRateIndex identifies a rate index and tenor. RateObservation and
FxObservation say what must be observed, and when, to price one period.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import final

from otcval.core.money import CurrencyPair, is_finite_decimal
from otcval.core.types import Period

# ---------------------------------------------------------------------------
# Floating rate indices
# ---------------------------------------------------------------------------


class FloatingRateIndexEnum(Enum):
    """Commonly traded floating rate indices."""

    # Overnight rates (RFR)
    SOFR = "USD-SOFR"
    ESTR = "EUR-ESTR"
    SONIA = "GBP-SONIA"
    TONA = "JPY-TONA"
    SARON = "CHF-SARON"
    # IBOR rates
    EURIBOR = "EUR-EURIBOR"
    TIBOR = "JPY-TIBOR"
    BBSW = "AUD-BBSW"
    # Legacy (still used in outstanding contracts)
    USD_LIBOR = "USD-LIBOR"
    GBP_LIBOR = "GBP-LIBOR"


@final
@dataclass(frozen=True, slots=True)
class FloatingRateIndex:
    """A floating rate index with its designated maturity, e.g. EUR-EURIBOR-6M.

    For overnight rates designated_maturity is 1D by convention.
    """

    index: FloatingRateIndexEnum
    designated_maturity: Period

    def __post_init__(self) -> None:
        if not isinstance(self.index, FloatingRateIndexEnum):
            raise TypeError(
                "FloatingRateIndex.index must be FloatingRateIndexEnum, "
                f"got {type(self.index).__name__}"
            )
        if not isinstance(self.designated_maturity, Period):
            raise TypeError(
                "FloatingRateIndex.designated_maturity must be Period, "
                f"got {type(self.designated_maturity).__name__}"
            )

    @property
    def name(self) -> str:
        p = self.designated_maturity
        return f"{self.index.value}-{p.multiplier}{p.unit}"


# ---------------------------------------------------------------------------
# Observations
# ---------------------------------------------------------------------------


@final
@dataclass(frozen=True, slots=True)
class RateObservation:
    """Observation of an index rate fixed on fixing_date for the deposit
    period [effective_date, maturity_date), whose year fraction is given."""

    index: FloatingRateIndex
    fixing_date: date
    effective_date: date
    maturity_date: date
    year_fraction: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.index, FloatingRateIndex):
            raise TypeError(
                f"RateObservation.index must be FloatingRateIndex, got {type(self.index).__name__}"
            )
        if self.effective_date >= self.maturity_date:
            raise TypeError(
                f"RateObservation: effective_date ({self.effective_date}) "
                f"must be < maturity_date ({self.maturity_date})"
            )
        if not is_finite_decimal(self.year_fraction) or self.year_fraction <= 0:
            raise TypeError(
                f"RateObservation.year_fraction must be Decimal > 0, got {self.year_fraction!r}"
            )

    def __str__(self) -> str:
        return f"{self.index.name} fixing {self.fixing_date}"


@final
@dataclass(frozen=True, slots=True)
class FxObservation:
    """Observation of an FX rate (quote per unit of base) on fixing_date."""

    pair: CurrencyPair
    fixing_date: date

    def __post_init__(self) -> None:
        if not isinstance(self.pair, CurrencyPair):
            raise TypeError(
                f"FxObservation.pair must be CurrencyPair, got {type(self.pair).__name__}"
            )

    def __str__(self) -> str:
        return f"FX {self.pair.value} fixing {self.fixing_date}"
