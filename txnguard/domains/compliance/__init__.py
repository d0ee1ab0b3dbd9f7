"""Anti-money-laundering compliance domain."""

from .aml import AMLPatternDetector, classify_aml_category
from .config import AMLConfig, AMLRiskBands
from .models import AMLFlag, AMLRisk, AMLRiskCategory, PatternFinding

__all__ = [
    "AMLConfig",
    "AMLFlag",
    "AMLPatternDetector",
    "AMLRisk",
    "AMLRiskBands",
    "AMLRiskCategory",
    "PatternFinding",
    "classify_aml_category",
]
