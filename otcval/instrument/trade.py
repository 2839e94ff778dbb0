"""Trade-level information and the resolved swap trade."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any, ClassVar, final

from otcval.core.errors import FieldViolation, ValidationError, validation_error
from otcval.core.identifiers import LEI, UTI
from otcval.core.result import Err, Ok
from otcval.core.types import FrozenMap
from otcval.instrument.leg import ResolvedSwap


@final
@dataclass(frozen=True, slots=True)
class TradeInfo:
    """Additional information attached to a trade. All fields optional."""

    trade_id: UTI | None = None
    counterparty: LEI | None = None
    trade_date: date | None = None
    settlement_date: date | None = None
    attributes: FrozenMap[str, str] = field(default_factory=lambda: FrozenMap.EMPTY)

    EMPTY: ClassVar[TradeInfo]

    def __post_init__(self) -> None:
        if self.trade_id is not None and not isinstance(self.trade_id, UTI):
            raise TypeError(f"TradeInfo.trade_id must be UTI, got {type(self.trade_id).__name__}")
        if self.counterparty is not None and not isinstance(self.counterparty, LEI):
            raise TypeError(
                f"TradeInfo.counterparty must be LEI, got {type(self.counterparty).__name__}"
            )
        if (
            self.trade_date is not None
            and self.settlement_date is not None
            and self.settlement_date < self.trade_date
        ):
            raise TypeError(
                f"TradeInfo: settlement_date ({self.settlement_date}) "
                f"must be >= trade_date ({self.trade_date})"
            )
        if not isinstance(self.attributes, FrozenMap):
            raise TypeError(
                f"TradeInfo.attributes must be FrozenMap, got {type(self.attributes).__name__}"
            )

    @property
    def is_empty(self) -> bool:
        return self == TradeInfo.EMPTY

    def with_attribute(self, key: str, value: str) -> TradeInfo:
        return replace(self, attributes=self.attributes.with_entry(key, value))

    def with_changes(self, **overrides: Any) -> TradeInfo:
        return replace(self, **overrides)


TradeInfo.EMPTY = TradeInfo()


def missing_product(source: str) -> ValidationError:
    return validation_error(
        "Trade: product is required", source,
        [FieldViolation(path="product", constraint="must be present", actual_value="None")],
    )


def invalid_product(product: object, expected: type, source: str) -> ValidationError:
    return validation_error(
        f"Trade: product must be {expected.__name__}", source,
        [FieldViolation(
            path="product", constraint=f"must be {expected.__name__}",
            actual_value=type(product).__name__,
        )],
    )


def invalid_info(info: object, source: str) -> ValidationError:
    return validation_error(
        "Trade: info must be TradeInfo", source,
        [FieldViolation(
            path="info", constraint="must be TradeInfo", actual_value=type(info).__name__,
        )],
    )


@final
@dataclass(frozen=True, slots=True)
class ResolvedSwapTrade:
    """A swap trade ready for pricing: resolved product plus trade info."""

    product: ResolvedSwap
    info: TradeInfo = field(default_factory=lambda: TradeInfo.EMPTY)

    def __post_init__(self) -> None:
        if not isinstance(self.product, ResolvedSwap):
            raise TypeError(
                f"ResolvedSwapTrade.product must be ResolvedSwap, got {type(self.product).__name__}"
            )
        if not isinstance(self.info, TradeInfo):
            raise TypeError(
                f"ResolvedSwapTrade.info must be TradeInfo, got {type(self.info).__name__}"
            )

    @staticmethod
    def create(
        product: ResolvedSwap | None, info: TradeInfo | None = None,
    ) -> Ok[ResolvedSwapTrade] | Err[ValidationError]:
        """Validated construction. A None info means TradeInfo.EMPTY."""
        source = "instrument.trade.ResolvedSwapTrade.create"
        if product is None:
            return Err(missing_product(source))
        if not isinstance(product, ResolvedSwap):
            return Err(invalid_product(product, ResolvedSwap, source))
        resolved_info = TradeInfo.EMPTY if info is None else info
        if not isinstance(resolved_info, TradeInfo):
            return Err(invalid_info(resolved_info, source))
        return Ok(ResolvedSwapTrade(product=product, info=resolved_info))

    def with_changes(self, **overrides: Any) -> ResolvedSwapTrade:
        return replace(self, **overrides)
