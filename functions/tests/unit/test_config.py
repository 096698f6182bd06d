"""Unit tests for settings, scoring config and errors."""

import dataclasses

import pytest

from config.errors import BenchmarkError, ErrorCode, QuoteShieldError, ValidationError
from config.scoring import DEFAULT_SCORING_CONFIG, ScoringConfig
from config.settings import Settings


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, monkeypatch):
        """Test defaults when no environment variables are set."""
        for name in (
            "PREVIEW_FINDINGS_MAX",
            "BENCHMARK_COLLECTION",
            "DEFAULT_REGION_KEY",
            "DEFAULT_TRADE",
            "LOG_LEVEL",
        ):
            monkeypatch.delenv(name, raising=False)

        s = Settings()

        assert s.preview_findings_max == 4
        assert s.benchmark_collection == "pricingBenchmarks"
        assert s.default_region_key == "unknown"
        assert s.default_trade == "Roofing"
        assert s.log_level == "INFO"

    def test_env_overrides(self, monkeypatch):
        """Test environment variables override defaults."""
        monkeypatch.setenv("PREVIEW_FINDINGS_MAX", "6")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("BENCHMARK_COLLECTION", "benchmarksStaging")

        s = Settings()

        assert s.preview_findings_max == 6
        assert s.log_level == "DEBUG"
        assert s.benchmark_collection == "benchmarksStaging"


class TestScoringConfig:
    """Tests for ScoringConfig."""

    def test_overall_weights_sum_to_one(self):
        """Test the overall weights add up to 1."""
        c = DEFAULT_SCORING_CONFIG
        total = (
            c.weight_labor + c.weight_materials + c.weight_scope + c.weight_warranty
            + c.weight_timeline + c.weight_doc + c.weight_clarity
        )

        assert total == pytest.approx(1.0)

    def test_frozen(self):
        """Test the default config cannot be mutated."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_SCORING_CONFIG.max_penalty = 10

    def test_replace(self):
        """Test alternate configs are built without touching the default."""
        alt = dataclasses.replace(DEFAULT_SCORING_CONFIG, warranty_cap=2)

        assert alt.warranty_cap == 2
        assert DEFAULT_SCORING_CONFIG.warranty_cap == 4
        assert isinstance(alt, ScoringConfig)


class TestErrors:
    """Tests for error types."""

    def test_base_to_dict(self):
        """Test the base error serializes code, message and details."""
        err = QuoteShieldError(ErrorCode.UNSUPPORTED_TRADE, "No profile", {"trade": "HVAC"})

        assert err.to_dict() == {
            "code": "UNSUPPORTED_TRADE",
            "message": "No profile",
            "details": {"trade": "HVAC"},
        }
        assert str(err) == "No profile"

    def test_validation_error_field(self):
        """Test ValidationError records the offending field."""
        err = ValidationError("trade must be a string", field="trade")

        assert err.code == ErrorCode.VALIDATION_ERROR
        assert err.field == "trade"
        assert err.details == {"field": "trade"}

    def test_benchmark_error_key(self):
        """Test BenchmarkError carries the lookup key."""
        key = {"trade": "Roofing", "region_key": "TX"}
        err = BenchmarkError(ErrorCode.BENCHMARK_LOOKUP_FAILED, "timeout", benchmark_key=key)

        assert err.benchmark_key == key
        assert err.to_dict()["details"]["benchmark_key"] == key
        assert isinstance(err, QuoteShieldError)
