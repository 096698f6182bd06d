"""QuoteShield configuration settings.

Loads configuration from environment variables with sensible defaults.
"""

import os
from dataclasses import dataclass, field
from dotenv import load_dotenv

# Load .env file for non-secret configuration (collection names, defaults, log level)
load_dotenv()


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    # Preview findings
    preview_findings_max: int = field(default_factory=lambda: int(os.getenv("PREVIEW_FINDINGS_MAX", "4")))

    # Pricing benchmarks
    benchmark_collection: str = field(default_factory=lambda: os.getenv("BENCHMARK_COLLECTION", "pricingBenchmarks"))
    default_region_key: str = field(default_factory=lambda: os.getenv("DEFAULT_REGION_KEY", "unknown"))
    default_trade: str = field(default_factory=lambda: os.getenv("DEFAULT_TRADE", "Roofing"))

    # Logging
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))


# Singleton settings instance
settings = Settings()
