"""otcval.infra: configuration."""

from otcval.infra.config import (
    DEFAULT_PRICING_CONFIG as DEFAULT_PRICING_CONFIG,
)
from otcval.infra.config import (
    PricingConfig as PricingConfig,
)
