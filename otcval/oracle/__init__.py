"""otcval.oracle: observables, curves and pricing environments."""

from otcval.oracle.curves import (
    DiscountCurve as DiscountCurve,
)
from otcval.oracle.environment import (
    MarketDataEnvironment as MarketDataEnvironment,
)
from otcval.oracle.environment import (
    PricingEnvironment as PricingEnvironment,
)
from otcval.oracle.observable import (
    FloatingRateIndex as FloatingRateIndex,
)
from otcval.oracle.observable import (
    FloatingRateIndexEnum as FloatingRateIndexEnum,
)
from otcval.oracle.observable import (
    FxObservation as FxObservation,
)
from otcval.oracle.observable import (
    RateObservation as RateObservation,
)
