"""QuoteShield configuration.

This package contains:
- settings: Environment variables and configuration
- scoring: Score Engine weights and caps
- errors: Custom exceptions and error codes
"""

from config.settings import settings
from config.scoring import ScoringConfig, DEFAULT_SCORING_CONFIG
from config.errors import QuoteShieldError, ValidationError, BenchmarkError, ErrorCode

__all__ = [
    "settings",
    "ScoringConfig",
    "DEFAULT_SCORING_CONFIG",
    "QuoteShieldError",
    "ValidationError",
    "BenchmarkError",
    "ErrorCode",
]
