"""otcval.pricing: component pricers, dispatch and leg aggregation."""

from otcval.pricing.components import (
    FIXED_RATE_PERIOD_PRICER as FIXED_RATE_PERIOD_PRICER,
)
from otcval.pricing.components import (
    FLOATING_RATE_PERIOD_PRICER as FLOATING_RATE_PERIOD_PRICER,
)
from otcval.pricing.components import (
    FX_RESET_PERIOD_PRICER as FX_RESET_PERIOD_PRICER,
)
from otcval.pricing.components import (
    NOTIONAL_EXCHANGE_PRICER as NOTIONAL_EXCHANGE_PRICER,
)
from otcval.pricing.components import (
    TERMINATION_PAYMENT_PRICER as TERMINATION_PAYMENT_PRICER,
)
from otcval.pricing.components import (
    discounted as discounted,
)
from otcval.pricing.dispatch import (
    DispatchingPricer as DispatchingPricer,
)
from otcval.pricing.dispatch import (
    default_event_pricer as default_event_pricer,
)
from otcval.pricing.dispatch import (
    default_period_pricer as default_period_pricer,
)
from otcval.pricing.leg import (
    SwapLegPricer as SwapLegPricer,
)
from otcval.pricing.leg import (
    SwapPricer as SwapPricer,
)
from otcval.pricing.leg import (
    default_leg_pricer as default_leg_pricer,
)
from otcval.pricing.leg import (
    default_swap_pricer as default_swap_pricer,
)
from otcval.pricing.types import (
    ComponentPricer as ComponentPricer,
)
from otcval.pricing.types import (
    PricerFn as PricerFn,
)
from otcval.pricing.types import (
    ValueKind as ValueKind,
)
