"""Error value hierarchy. Valuation functions return these inside Err.

Every error is a frozen dataclass value that can be pattern-matched,
compared and serialized. Base class DomainError, three @final subclasses.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import final

from otcval.core.types import UtcDatetime


@dataclass(frozen=True, slots=True)
class DomainError:
    """Base error value. NOT @final: has subclasses."""

    message: str
    code: str
    timestamp: UtcDatetime = field(compare=False)
    source: str  # "module.function" that produced this error

    def with_context(self, context: str) -> DomainError:
        """Return a copy with context prepended to message."""
        return replace(self, message=f"{context}: {self.message}")

    def to_dict(self) -> dict[str, object]:
        return {
            "message": self.message,
            "code": self.code,
            "timestamp": self.timestamp.value.isoformat(),
            "source": self.source,
        }


@final
@dataclass(frozen=True, slots=True)
class FieldViolation:
    """A single field validation failure."""

    path: str  # e.g. "trade.product"
    constraint: str  # e.g. "must be present"
    actual_value: str  # e.g. "None"


@final
@dataclass(frozen=True, slots=True)
class ValidationError(DomainError):
    """One or more fields failed validation at construction."""

    fields: tuple[FieldViolation, ...]

    def to_dict(self) -> dict[str, object]:
        return {
            **DomainError.to_dict(self),
            "fields": [
                {"path": f.path, "constraint": f.constraint, "actual_value": f.actual_value}
                for f in self.fields
            ],
        }


@final
@dataclass(frozen=True, slots=True)
class MissingMarketDataError(DomainError):
    """The pricing environment cannot answer a required query."""

    observable: str  # e.g. "discount curve USD", "fixing USD-LIBOR-3M 2024-03-18"
    as_of: str

    def to_dict(self) -> dict[str, object]:
        return {**DomainError.to_dict(self), "observable": self.observable, "as_of": self.as_of}


@final
@dataclass(frozen=True, slots=True)
class UnsupportedComponentError(DomainError):
    """No pricer function is registered for a cash-flow component's class."""

    component_type: str
    family: str  # "PaymentPeriod" or "PaymentEvent"
    value_kind: str

    def to_dict(self) -> dict[str, object]:
        return {
            **DomainError.to_dict(self),
            "component_type": self.component_type,
            "family": self.family,
            "value_kind": self.value_kind,
        }


type ValuationFailure = UnsupportedComponentError | MissingMarketDataError


def missing_market_data(observable: str, as_of: object, source: str) -> MissingMarketDataError:
    """Build a MissingMarketDataError with consistent formatting."""
    return MissingMarketDataError(
        message=f"Market data not available: {observable}",
        code="MISSING_MARKET_DATA",
        timestamp=UtcDatetime.now(),
        source=source,
        observable=observable,
        as_of=str(as_of),
    )


def validation_error(
    message: str, source: str, violations: list[FieldViolation],
) -> ValidationError:
    return ValidationError(
        message=message,
        code="VALIDATION_FAILED",
        timestamp=UtcDatetime.now(),
        source=source,
        fields=tuple(violations),
    )
