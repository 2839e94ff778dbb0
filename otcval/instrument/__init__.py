"""otcval.instrument: resolved cash flows, legs and trades."""

from otcval.instrument.credit_types import (
    CreditCouponPaymentPeriod as CreditCouponPaymentPeriod,
)
from otcval.instrument.credit_types import (
    ProtectionSide as ProtectionSide,
)
from otcval.instrument.credit_types import (
    ResolvedCds as ResolvedCds,
)
from otcval.instrument.credit_types import (
    ResolvedCdsTrade as ResolvedCdsTrade,
)
from otcval.instrument.events import (
    NotionalExchange as NotionalExchange,
)
from otcval.instrument.events import (
    PaymentEvent as PaymentEvent,
)
from otcval.instrument.events import (
    TerminationPayment as TerminationPayment,
)
from otcval.instrument.leg import (
    ResolvedSwap as ResolvedSwap,
)
from otcval.instrument.leg import (
    ResolvedSwapLeg as ResolvedSwapLeg,
)
from otcval.instrument.periods import (
    FixedRatePaymentPeriod as FixedRatePaymentPeriod,
)
from otcval.instrument.periods import (
    FloatingRatePaymentPeriod as FloatingRatePaymentPeriod,
)
from otcval.instrument.periods import (
    FxResetPaymentPeriod as FxResetPaymentPeriod,
)
from otcval.instrument.periods import (
    PaymentPeriod as PaymentPeriod,
)
from otcval.instrument.periods import (
    ResetPeriod as ResetPeriod,
)
from otcval.instrument.reset import (
    RateAveragingMethod as RateAveragingMethod,
)
from otcval.instrument.reset import (
    ResetSchedule as ResetSchedule,
)
from otcval.instrument.trade import (
    ResolvedSwapTrade as ResolvedSwapTrade,
)
from otcval.instrument.trade import (
    TradeInfo as TradeInfo,
)
