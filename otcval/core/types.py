"""Core types: UtcDatetime, FrozenMap, day counts, periods and frequencies,
business-day adjustments, pay/receive direction.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import UTC, date, datetime
from enum import Enum
from typing import Any, ClassVar, Literal, final

from dateutil.relativedelta import relativedelta

from otcval.core.result import Err, Ok

# ---------------------------------------------------------------------------
# Day count conventions
# ---------------------------------------------------------------------------


class DayCountConvention(Enum):
    """Day count conventions for year-fraction calculation (ISDA 2006 4.16)."""

    ACT_360 = "ACT/360"
    ACT_365 = "ACT/365"
    THIRTY_360 = "30/360"
    ACT_ACT_ISDA = "ACT/ACT.ISDA"


@final
@dataclass(frozen=True, slots=True)
class UtcDatetime:
    """Timezone-aware UTC datetime. Naive datetimes are rejected."""

    value: datetime

    def __post_init__(self) -> None:
        if self.value.tzinfo is None:
            raise TypeError("UtcDatetime requires timezone-aware datetime, got naive")

    @staticmethod
    def now() -> UtcDatetime:
        return UtcDatetime(value=datetime.now(tz=UTC))


@final
@dataclass(frozen=True, slots=True)
class FrozenMap[K, V]:
    """Immutable sorted mapping with deterministic iteration and hashing.

    Entries are held as a sorted tuple of (key, value) pairs, so two maps
    built from the same items compare and hash equal regardless of
    insertion order.
    """

    _entries: tuple[tuple[K, V], ...]

    EMPTY: ClassVar[FrozenMap[Any, Any]]

    @staticmethod
    def create(items: dict[K, V] | Iterable[tuple[K, V]]) -> Ok[FrozenMap[K, V]] | Err[str]:
        """Build from a dict or (key, value) pairs. Duplicate keys: last wins."""
        d = items if isinstance(items, dict) else dict(items)
        try:
            entries = tuple(sorted(d.items(), key=lambda kv: kv[0]))
        except TypeError as e:
            return Err(f"FrozenMap keys must be comparable: {e}")
        return Ok(FrozenMap(_entries=entries))

    def get(self, key: K, default: V | None = None) -> V | None:
        for k, v in self._entries:
            if k == key:
                return v
        return default

    def __getitem__(self, key: K) -> V:
        for k, v in self._entries:
            if k == key:
                return v
        raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        return any(k == key for k, _ in self._entries)

    def __iter__(self) -> Iterator[K]:
        return (k for k, _ in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def items(self) -> tuple[tuple[K, V], ...]:
        return self._entries

    def with_entry(self, key: K, value: V) -> FrozenMap[K, V]:
        """Return a new map with key set to value."""
        d = dict(self._entries)
        d[key] = value
        return FrozenMap(_entries=tuple(sorted(d.items(), key=lambda kv: kv[0])))

    def to_dict(self) -> dict[K, V]:
        return dict(self._entries)


FrozenMap.EMPTY = FrozenMap(_entries=())


# ---------------------------------------------------------------------------
# Periods and frequencies
# ---------------------------------------------------------------------------

type PeriodUnit = Literal["D", "W", "M", "Y"]


@final
@dataclass(frozen=True, slots=True)
class Period:
    """A time period: multiplier x unit (e.g. 3M, 1Y, 5D)."""

    multiplier: int
    unit: PeriodUnit

    def __post_init__(self) -> None:
        if not isinstance(self.multiplier, int) or isinstance(self.multiplier, bool):
            raise TypeError(
                f"Period.multiplier must be int, got {type(self.multiplier).__name__}"
            )
        if self.multiplier <= 0:
            raise TypeError(f"Period.multiplier must be > 0, got {self.multiplier}")
        if self.unit not in ("D", "W", "M", "Y"):
            raise TypeError(f"Period.unit must be one of D, W, M, Y, got {self.unit!r}")

    def to_relativedelta(self) -> relativedelta:
        match self.unit:
            case "D":
                return relativedelta(days=self.multiplier)
            case "W":
                return relativedelta(weeks=self.multiplier)
            case "M":
                return relativedelta(months=self.multiplier)
            case "Y":
                return relativedelta(years=self.multiplier)
        raise TypeError(f"Unknown period unit {self.unit!r}")

    def add_to(self, d: date) -> date:
        return d + self.to_relativedelta()

    def __str__(self) -> str:
        return f"P{self.multiplier}{self.unit}"


# Fixed anchor for comparing periods of different units: "1M" from here is
# 31 days, longer than "4W" and shorter than "5W".
_COMPARISON_ANCHOR = date(2001, 1, 1)


@final
@dataclass(frozen=True, slots=True)
class Frequency:
    """Periodic frequency of events, e.g. every 3 months."""

    period: Period

    def __post_init__(self) -> None:
        if not isinstance(self.period, Period):
            raise TypeError(
                f"Frequency.period must be Period, got {type(self.period).__name__}"
            )

    @staticmethod
    def of_months(months: int) -> Frequency:
        return Frequency(period=Period(months, "M"))

    @staticmethod
    def of_days(days: int) -> Frequency:
        return Frequency(period=Period(days, "D"))

    def is_no_longer_than(self, other: Frequency) -> bool:
        """True if one step of self does not go past one step of other."""
        return self.period.add_to(_COMPARISON_ANCHOR) <= other.period.add_to(_COMPARISON_ANCHOR)

    def __str__(self) -> str:
        return str(self.period)


# ---------------------------------------------------------------------------
# Business day adjustment
# ---------------------------------------------------------------------------

type BusinessDayConvention = Literal[
    "MOD_FOLLOWING", "FOLLOWING", "PRECEDING", "NONE",
]


@final
@dataclass(frozen=True, slots=True)
class BusinessDayAdjustments:
    """Convention + business centers for moving a date to a good business day."""

    convention: BusinessDayConvention
    business_centers: frozenset[str]  # e.g. frozenset({"GBLO", "USNY"})

    NONE: ClassVar[BusinessDayAdjustments]

    def __post_init__(self) -> None:
        if self.convention not in ("MOD_FOLLOWING", "FOLLOWING", "PRECEDING", "NONE"):
            raise TypeError(
                f"BusinessDayAdjustments: unknown convention {self.convention!r}"
            )
        if self.convention != "NONE" and not self.business_centers:
            raise TypeError(
                "BusinessDayAdjustments: business_centers required "
                f"when convention is {self.convention!r}"
            )


BusinessDayAdjustments.NONE = BusinessDayAdjustments(
    convention="NONE", business_centers=frozenset(),
)


# ---------------------------------------------------------------------------
# Direction
# ---------------------------------------------------------------------------


class PayReceive(Enum):
    """Whether a leg is paid or received from the holder's point of view."""

    PAY = "PAY"
    RECEIVE = "RECEIVE"


class SwapLegType(Enum):
    FIXED = "FIXED"
    FLOAT = "FLOAT"
    OTHER = "OTHER"
