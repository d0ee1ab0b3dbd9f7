"""Risk rules package.

Exports ALL_RULES (list of all rule instances) and individual rule classes
for direct use.
"""

from .amount import AmountAnomalyRule
from .base import RiskRule
from .device import DeviceRiskRule, LocationAnomalyRule
from .merchant import MerchantRiskRule
from .temporal import TimePatternRule, in_band, local_hour
from .velocity import VelocityRule, trailing_window

# All rule instances in evaluation order; reasons follow this order
ALL_RULES: list[RiskRule] = [
    AmountAnomalyRule(),
    VelocityRule(),
    TimePatternRule(),
    MerchantRiskRule(),
    DeviceRiskRule(),
    LocationAnomalyRule(),
]

__all__ = [
    "ALL_RULES",
    "AmountAnomalyRule",
    "DeviceRiskRule",
    "LocationAnomalyRule",
    "MerchantRiskRule",
    "RiskRule",
    "TimePatternRule",
    "VelocityRule",
    "in_band",
    "local_hour",
    "trailing_window",
]
