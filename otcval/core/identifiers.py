"""Validated trade identifiers: LEI (counterparty) and UTI (trade id)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import final

from otcval.core.result import Err, Ok


@final
@dataclass(frozen=True, slots=True)
class LEI:
    """Legal Entity Identifier: exactly 20 alphanumeric characters."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or len(self.value) != 20 or not self.value.isalnum():
            raise TypeError(f"LEI must be 20 alphanumeric characters, got {self.value!r}")

    @staticmethod
    def parse(raw: str) -> Ok[LEI] | Err[str]:
        if len(raw) != 20:
            return Err(f"LEI must be 20 characters, got {len(raw)}")
        if not raw.isalnum():
            return Err(f"LEI must be alphanumeric, got '{raw}'")
        return Ok(LEI(value=raw))


@final
@dataclass(frozen=True, slots=True)
class UTI:
    """Unique Transaction Identifier: 1-52 chars, first 20 alphanumeric."""

    value: str

    def __post_init__(self) -> None:
        match UTI._check(self.value):
            case Err(e):
                raise TypeError(e)
            case Ok(_):
                pass

    @staticmethod
    def _check(raw: str) -> Ok[None] | Err[str]:
        if not isinstance(raw, str) or not raw:
            return Err("UTI must be non-empty")
        if len(raw) > 52:
            return Err(f"UTI must be at most 52 characters, got {len(raw)}")
        if not raw[:20].isalnum():
            return Err(f"UTI first 20 chars must be alphanumeric, got '{raw[:20]}'")
        return Ok(None)

    @staticmethod
    def parse(raw: str) -> Ok[UTI] | Err[str]:
        match UTI._check(raw):
            case Err(e):
                return Err(e)
            case Ok(_):
                return Ok(UTI(value=raw))
