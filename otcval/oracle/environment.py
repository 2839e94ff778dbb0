"""Pricing environment: the market data a valuation function may consult.

PricingEnvironment is the protocol pricers depend on. MarketDataEnvironment is
an immutable in-memory implementation built from discount curves, forward
curves, historic fixings and FX rates. Every lookup returns Ok or an
Err(MissingMarketDataError); nothing here raises for absent data.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal, localcontext
from typing import Protocol, final, runtime_checkable

from otcval.core.calendar import day_count_fraction
from otcval.core.errors import MissingMarketDataError, missing_market_data
from otcval.core.money import (
    DECIMAL_CONTEXT,
    CurrencyPair,
    NonEmptyStr,
    is_finite_decimal,
)
from otcval.core.result import Err, Ok
from otcval.core.types import FrozenMap
from otcval.infra.config import DEFAULT_PRICING_CONFIG, PricingConfig
from otcval.oracle.curves import DiscountCurve
from otcval.oracle.observable import FloatingRateIndex, FxObservation, RateObservation

logger = logging.getLogger(__name__)

_ONE = Decimal("1")


@runtime_checkable
class PricingEnvironment(Protocol):
    """Market data consulted during valuation."""

    @property
    def valuation_date(self) -> date: ...

    def discount_factor(
        self, currency: NonEmptyStr, on: date,
    ) -> Ok[Decimal] | Err[MissingMarketDataError]: ...

    def forward_rate(
        self, observation: RateObservation,
    ) -> Ok[Decimal] | Err[MissingMarketDataError]: ...

    def fx_rate(
        self, observation: FxObservation,
    ) -> Ok[Decimal] | Err[MissingMarketDataError]: ...


_SOURCE = "oracle.environment.MarketDataEnvironment"


@final
@dataclass(frozen=True, slots=True)
class MarketDataEnvironment:
    """In-memory market data as of one valuation date.

    discount_curves: currency code -> curve
    forward_curves: index name (e.g. "EUR-EURIBOR-6M") -> pseudo-discount curve
    rate_fixings: (index name, fixing date) -> published rate
    fx_spot: "BASE/QUOTE" -> spot rate
    fx_fixings: ("BASE/QUOTE", fixing date) -> published rate
    """

    valuation_date: date
    discount_curves: FrozenMap[str, DiscountCurve] = field(default_factory=lambda: FrozenMap.EMPTY)
    forward_curves: FrozenMap[str, DiscountCurve] = field(default_factory=lambda: FrozenMap.EMPTY)
    rate_fixings: FrozenMap[tuple[str, date], Decimal] = field(
        default_factory=lambda: FrozenMap.EMPTY,
    )
    fx_spot: FrozenMap[str, Decimal] = field(default_factory=lambda: FrozenMap.EMPTY)
    fx_fixings: FrozenMap[tuple[str, date], Decimal] = field(
        default_factory=lambda: FrozenMap.EMPTY,
    )
    config: PricingConfig = DEFAULT_PRICING_CONFIG

    def __post_init__(self) -> None:
        if not isinstance(self.valuation_date, date):
            raise TypeError(
                "MarketDataEnvironment.valuation_date must be date, "
                f"got {type(self.valuation_date).__name__}"
            )
        for ccy, curve in self.discount_curves.items():
            if curve.currency.value != ccy:
                raise TypeError(
                    f"MarketDataEnvironment.discount_curves[{ccy!r}] "
                    f"holds a {curve.currency} curve"
                )
        for pair, rate in self.fx_spot.items():
            if not is_finite_decimal(rate) or rate <= 0:
                raise TypeError(
                    f"MarketDataEnvironment.fx_spot[{pair!r}] must be > 0, got {rate!r}"
                )
        for key, rate in self.fx_fixings.items():
            if not is_finite_decimal(rate) or rate <= 0:
                raise TypeError(
                    f"MarketDataEnvironment.fx_fixings[{key!r}] must be > 0, got {rate!r}"
                )
        for key, rate in self.rate_fixings.items():
            if not is_finite_decimal(rate):
                raise TypeError(
                    f"MarketDataEnvironment.rate_fixings[{key!r}] must be finite Decimal, "
                    f"got {rate!r}"
                )

    @staticmethod
    def create(
        valuation_date: date,
        discount_curves: Mapping[str, DiscountCurve] | None = None,
        forward_curves: Mapping[str, DiscountCurve] | None = None,
        fx_spot: Mapping[str, Decimal] | None = None,
        config: PricingConfig = DEFAULT_PRICING_CONFIG,
    ) -> Ok[MarketDataEnvironment] | Err[str]:
        """Validated construction from plain mappings."""
        curves = dict(discount_curves or {})
        for ccy, curve in curves.items():
            if curve.currency.value != ccy:
                return Err(f"discount_curves[{ccy!r}] holds a {curve.currency} curve")
        spots = dict(fx_spot or {})
        for pair, rate in spots.items():
            match CurrencyPair.parse(pair):
                case Err(e):
                    return Err(f"fx_spot[{pair!r}]: {e}")
                case Ok(_):
                    pass
            if not is_finite_decimal(rate) or rate <= 0:
                return Err(f"fx_spot[{pair!r}] must be Decimal > 0, got {rate!r}")
        return Ok(MarketDataEnvironment(
            valuation_date=valuation_date,
            discount_curves=FrozenMap.create(curves).unwrap(),
            forward_curves=FrozenMap.create(dict(forward_curves or {})).unwrap(),
            fx_spot=FrozenMap.create(spots).unwrap(),
            config=config,
        ))

    # -- copy operations ---------------------------------------------------

    def with_discount_curve(self, curve: DiscountCurve) -> MarketDataEnvironment:
        return replace(
            self, discount_curves=self.discount_curves.with_entry(curve.currency.value, curve),
        )

    def with_forward_curve(
        self, index: FloatingRateIndex, curve: DiscountCurve,
    ) -> MarketDataEnvironment:
        return replace(self, forward_curves=self.forward_curves.with_entry(index.name, curve))

    def with_fixing(
        self, index: FloatingRateIndex, fixing_date: date, rate: Decimal,
    ) -> MarketDataEnvironment:
        return replace(
            self, rate_fixings=self.rate_fixings.with_entry((index.name, fixing_date), rate),
        )

    def with_fx_spot(self, pair: CurrencyPair, rate: Decimal) -> MarketDataEnvironment:
        return replace(self, fx_spot=self.fx_spot.with_entry(pair.value, rate))

    def with_fx_fixing(
        self, pair: CurrencyPair, fixing_date: date, rate: Decimal,
    ) -> MarketDataEnvironment:
        return replace(
            self, fx_fixings=self.fx_fixings.with_entry((pair.value, fixing_date), rate),
        )

    # -- lookups -----------------------------------------------------------

    def _tenor(self, on: date) -> Decimal:
        return day_count_fraction(self.valuation_date, on, self.config.curve_day_count)

    def discount_factor(
        self, currency: NonEmptyStr, on: date,
    ) -> Ok[Decimal] | Err[MissingMarketDataError]:
        """DF from valuation date to on. 1 on or before the valuation date."""
        if on <= self.valuation_date:
            return Ok(_ONE)
        curve = self.discount_curves.get(currency.value)
        if curve is None:
            return Err(missing_market_data(
                f"discount curve {currency}", self.valuation_date, f"{_SOURCE}.discount_factor",
            ))
        return Ok(curve.discount_factor(self._tenor(on)))

    def forward_rate(
        self, observation: RateObservation,
    ) -> Ok[Decimal] | Err[MissingMarketDataError]:
        """Fixed or forward rate for an index observation."""
        name = observation.index.name
        fixing = self.rate_fixings.get((name, observation.fixing_date))
        if observation.fixing_date < self.valuation_date:
            if fixing is None:
                return Err(missing_market_data(
                    f"fixing {name} {observation.fixing_date}",
                    self.valuation_date, f"{_SOURCE}.forward_rate",
                ))
            return Ok(fixing)
        if (
            observation.fixing_date == self.valuation_date
            and self.config.use_fixing_on_valuation_date
            and fixing is not None
        ):
            return Ok(fixing)
        if observation.fixing_date == self.valuation_date:
            logger.debug(
                "No %s fixing on valuation date %s, using forward", name, self.valuation_date,
            )
        curve = self.forward_curves.get(name)
        if curve is None:
            return Err(missing_market_data(
                f"forward curve {name}", self.valuation_date, f"{_SOURCE}.forward_rate",
            ))
        start = max(observation.effective_date, self.valuation_date)
        end = max(observation.maturity_date, self.valuation_date)
        df_start = curve.discount_factor(self._tenor(start))
        df_end = curve.discount_factor(self._tenor(end))
        with localcontext(DECIMAL_CONTEXT):
            return Ok((df_start / df_end - _ONE) / observation.year_fraction)

    def _spot(self, pair: CurrencyPair) -> Decimal | None:
        direct = self.fx_spot.get(pair.value)
        if direct is not None:
            return direct
        inverse = self.fx_spot.get(f"{pair.quote}/{pair.base}")
        if inverse is not None:
            with localcontext(DECIMAL_CONTEXT):
                return _ONE / inverse
        return None

    def _fx_fixing(self, pair: CurrencyPair, on: date) -> Decimal | None:
        direct = self.fx_fixings.get((pair.value, on))
        if direct is not None:
            return direct
        inverse = self.fx_fixings.get((f"{pair.quote}/{pair.base}", on))
        if inverse is not None:
            with localcontext(DECIMAL_CONTEXT):
                return _ONE / inverse
        return None

    def fx_rate(
        self, observation: FxObservation,
    ) -> Ok[Decimal] | Err[MissingMarketDataError]:
        """Price of one unit of base in quote currency, as observed."""
        pair = observation.pair
        fixing = self._fx_fixing(pair, observation.fixing_date)
        if observation.fixing_date < self.valuation_date:
            if fixing is None:
                return Err(missing_market_data(
                    f"FX fixing {pair.value} {observation.fixing_date}",
                    self.valuation_date, f"{_SOURCE}.fx_rate",
                ))
            return Ok(fixing)
        if (
            observation.fixing_date == self.valuation_date
            and self.config.use_fixing_on_valuation_date
            and fixing is not None
        ):
            return Ok(fixing)
        spot = self._spot(pair)
        if spot is None:
            return Err(missing_market_data(
                f"FX spot {pair.value}", self.valuation_date, f"{_SOURCE}.fx_rate",
            ))
        if observation.fixing_date == self.valuation_date:
            return Ok(spot)
        match self.discount_factor(pair.base, observation.fixing_date):
            case Err(e):
                return Err(e)
            case Ok(df_base):
                pass
        match self.discount_factor(pair.quote, observation.fixing_date):
            case Err(e):
                return Err(e)
            case Ok(df_quote):
                pass
        with localcontext(DECIMAL_CONTEXT):
            return Ok(spot * df_base / df_quote)
