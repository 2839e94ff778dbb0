"""otcval.core: public API for all core types."""

from otcval.core.calendar import (
    adjust as adjust,
)
from otcval.core.calendar import (
    adjust_date as adjust_date,
)
from otcval.core.calendar import (
    day_count_fraction as day_count_fraction,
)
from otcval.core.decimal_math import (
    exp_d as exp_d,
)
from otcval.core.decimal_math import (
    ln_d as ln_d,
)
from otcval.core.errors import (
    DomainError as DomainError,
)
from otcval.core.errors import (
    FieldViolation as FieldViolation,
)
from otcval.core.errors import (
    MissingMarketDataError as MissingMarketDataError,
)
from otcval.core.errors import (
    UnsupportedComponentError as UnsupportedComponentError,
)
from otcval.core.errors import (
    ValidationError as ValidationError,
)
from otcval.core.errors import (
    ValuationFailure as ValuationFailure,
)
from otcval.core.errors import (
    missing_market_data as missing_market_data,
)
from otcval.core.errors import (
    validation_error as validation_error,
)
from otcval.core.identifiers import (
    LEI as LEI,
)
from otcval.core.identifiers import (
    UTI as UTI,
)
from otcval.core.money import (
    DECIMAL_CONTEXT as DECIMAL_CONTEXT,
)
from otcval.core.money import (
    CurrencyPair as CurrencyPair,
)
from otcval.core.money import (
    Money as Money,
)
from otcval.core.money import (
    NonEmptyStr as NonEmptyStr,
)
from otcval.core.money import (
    Payment as Payment,
)
from otcval.core.money import (
    validate_currency as validate_currency,
)
from otcval.core.result import (
    Err as Err,
)
from otcval.core.result import (
    Ok as Ok,
)
from otcval.core.result import (
    Result as Result,
)
from otcval.core.result import (
    sequence as sequence,
)
from otcval.core.result import (
    unwrap as unwrap,
)
from otcval.core.types import (
    BusinessDayAdjustments as BusinessDayAdjustments,
)
from otcval.core.types import (
    BusinessDayConvention as BusinessDayConvention,
)
from otcval.core.types import (
    DayCountConvention as DayCountConvention,
)
from otcval.core.types import (
    Frequency as Frequency,
)
from otcval.core.types import (
    FrozenMap as FrozenMap,
)
from otcval.core.types import (
    PayReceive as PayReceive,
)
from otcval.core.types import (
    Period as Period,
)
from otcval.core.types import (
    SwapLegType as SwapLegType,
)
from otcval.core.types import (
    UtcDatetime as UtcDatetime,
)
