"""Unit tests for the Signal Adapter and AI result parsing."""

import math

import pytest

from models.ai_result import CurrentAiResult, LegacyAiResult, RedFlag, parse_ai_result
from models.score import ScoreInputs
from services.signal_adapter import (
    ai_result_to_score_inputs,
    clarity_from_line_item_count,
    confidence_to_quality,
    score_inputs_from_ai_result,
    warranty_signals_from_red_flags,
)


class TestParseAiResult:
    """Tests for current/legacy schema detection."""

    def test_current_schema_detected(self, current_ai_result):
        """Test explicit signals and quality parse as the current schema."""
        parsed = parse_ai_result(current_ai_result)

        assert isinstance(parsed, CurrentAiResult)
        assert parsed.signals is not None
        assert parsed.quality is not None
        assert parsed.sections.deposit_percent == 25

    def test_legacy_schema_detected(self, legacy_ai_result):
        """Test a result without signals/quality parses as legacy."""
        parsed = parse_ai_result(legacy_ai_result)

        assert isinstance(parsed, LegacyAiResult)
        assert parsed.sections.line_item_count == 4
        assert parsed.sections.missing_or_unclear_count == 2
        assert parsed.sections.high_cost_flag_count == 1
        assert len(parsed.sections.red_flags) == 3

    def test_signals_with_only_non_numeric_fields_is_legacy(self):
        """Test a signals object counts as present only with a real number."""
        parsed = parse_ai_result({
            "signals": {"pricing_outliers": "3", "missing_scope": True, "warranty_red_flags": None},
        })

        assert isinstance(parsed, LegacyAiResult)

    def test_non_finite_signal_is_not_present(self):
        """Test NaN/inf do not make the signals object present."""
        parsed = parse_ai_result({"signals": {"pricing_outliers": math.nan, "missing_scope": math.inf}})

        assert isinstance(parsed, LegacyAiResult)

    def test_quality_only_is_current(self):
        """Test a quality object alone is enough for the current schema."""
        parsed = parse_ai_result({"quality": {"doc_quality": 0.7}})

        assert isinstance(parsed, CurrentAiResult)
        assert parsed.signals is None
        assert parsed.quality.doc_quality == 0.7

    @pytest.mark.parametrize("raw", [None, "not a dict", 42, [1, 2]])
    def test_non_dict_parses_as_empty_legacy(self, raw):
        """Test anything that is not a dict is an empty legacy result."""
        parsed = parse_ai_result(raw)

        assert isinstance(parsed, LegacyAiResult)
        assert parsed.sections.line_item_count == 0
        assert parsed.sections.red_flags == ()

    def test_explicit_null_timeline_is_absent(self):
        """Test a null timeline section counts as explicitly absent."""
        parsed = parse_ai_result({"timeline": None})

        assert parsed.sections.timeline_present is False

    def test_red_flag_strings_accepted(self):
        """Test red flags given as plain strings are kept as titles."""
        parsed = parse_ai_result({"red_flags": ["No warranty listed", {"title": "Deposit"}, 7]})

        assert [f.text for f in parsed.sections.red_flags] == ["No warranty listed", "Deposit"]


class TestDerivationHelpers:
    """Tests for legacy derivation helpers."""

    @pytest.mark.parametrize("label,expected", [
        ("high", 0.85),
        ("medium", 0.65),
        ("low", 0.45),
        ("unknown", 0.65),
        (None, 0.65),
    ])
    def test_confidence_to_quality(self, label, expected):
        """Test confidence label mapping with medium as default."""
        assert confidence_to_quality(label) == expected

    def test_clarity_from_line_item_count(self):
        """Test clarity scales by 0.05 per item and caps at 0.9."""
        assert clarity_from_line_item_count(0) == 0.5
        assert clarity_from_line_item_count(4) == pytest.approx(0.7)
        assert clarity_from_line_item_count(8) == pytest.approx(0.9)
        assert clarity_from_line_item_count(20) == 0.9

    def test_warranty_keyword_match_is_case_insensitive(self):
        """Test warranty keywords match title or detail in any case."""
        flags = [
            RedFlag(title="LIMITED coverage"),
            RedFlag(title="Cleanup", detail="2 YEAR guarantee only"),
            RedFlag(title="Cleanup", detail="No magnet sweep"),
        ]

        assert warranty_signals_from_red_flags(flags) == 2

    def test_warranty_signals_capped(self):
        """Test warranty signals cap at 4."""
        flags = [RedFlag(title=f"Warranty issue {i}") for i in range(7)]

        assert warranty_signals_from_red_flags(flags) == 4


class TestScoreInputsFromAiResult:
    """Tests for normalizing AI results into ScoreInputs."""

    def test_current_schema_used_directly(self, current_ai_result):
        """Test explicit signals and quality pass through."""
        inputs = ai_result_to_score_inputs(current_ai_result)

        assert inputs == ScoreInputs(
            doc_quality=0.55,
            line_item_clarity=0.5,
            missing_scope_signals=1,
            pricing_outlier_signals=1,
            warranty_signals=0,
            timeline_signals=0,
        )

    def test_signals_only_derives_quality(self):
        """Test quality is derived from sections when only signals exist."""
        from tests.fixtures.mock_ai_results import CURRENT_SIGNALS_ONLY_RESULT

        inputs = ai_result_to_score_inputs(CURRENT_SIGNALS_ONLY_RESULT)

        assert inputs.doc_quality == 0.85
        assert inputs.line_item_clarity == pytest.approx(0.6)
        assert inputs.pricing_outlier_signals == 3
        assert inputs.warranty_signals == 2
        assert inputs.timeline_signals == 1

    def test_legacy_schema_derived(self, legacy_ai_result):
        """Test every legacy field is derived from report sections."""
        inputs = ai_result_to_score_inputs(legacy_ai_result)

        assert inputs.doc_quality == 0.45
        assert inputs.line_item_clarity == pytest.approx(0.7)
        assert inputs.missing_scope_signals == 2
        assert inputs.pricing_outlier_signals == 1
        assert inputs.warranty_signals == 1
        # timeline_clarity "basic" counts as weak
        assert inputs.timeline_signals == 1

    def test_legacy_caps(self):
        """Test legacy missing-scope and pricing caps of 5 and 6."""
        inputs = ai_result_to_score_inputs({
            "scope": {"missing_or_unclear": ["x"] * 9},
            "costs": {"high_cost_flags": ["y"] * 9},
        })

        assert inputs.missing_scope_signals == 5
        assert inputs.pricing_outlier_signals == 6

    def test_explicit_signals_clamped_and_rounded(self):
        """Test explicit signals are rounded and clamped to their caps."""
        inputs = ai_result_to_score_inputs({
            "signals": {
                "missing_scope": 25,
                "pricing_outliers": -3,
                "warranty_red_flags": 2.5,
                "timeline_red_flags": "3",
            },
        })

        assert inputs.missing_scope_signals == 10
        assert inputs.pricing_outlier_signals == 0
        assert inputs.warranty_signals == 3
        assert inputs.timeline_signals == 0

    def test_partial_quality_uses_fallback(self):
        """Test a missing quality field falls back to its constant."""
        inputs = ai_result_to_score_inputs({"quality": {"doc_quality": 0.9}})

        assert inputs.doc_quality == 0.9
        assert inputs.line_item_clarity == 0.5

    def test_quality_clamped(self):
        """Test out-of-range quality values are clamped into 0..1."""
        inputs = ai_result_to_score_inputs({"quality": {"doc_quality": 1.7, "line_item_clarity": -0.2}})

        assert inputs.doc_quality == 1.0
        assert inputs.line_item_clarity == 0.0

    def test_none_yields_defaults(self):
        """Test a missing AI result never raises and yields defaults."""
        inputs = ai_result_to_score_inputs(None)

        assert inputs.doc_quality == 0.65
        assert inputs.line_item_clarity == 0.5
        assert inputs.total_signals == 0

    def test_timeline_absent_flags_signal(self):
        """Test an explicitly absent timeline produces one signal."""
        absent = ai_result_to_score_inputs({"timeline": {"timeline_present": False}})
        clear = ai_result_to_score_inputs({"timeline": {"timeline_present": True, "timeline_clarity": "detailed"}})
        missing_clarity = ai_result_to_score_inputs({"timeline": {"timeline_clarity": "missing"}})

        assert absent.timeline_signals == 1
        assert clear.timeline_signals == 0
        assert missing_clarity.timeline_signals == 1

    def test_parsed_and_raw_paths_agree(self, legacy_ai_result):
        """Test the raw helper matches the parsed path."""
        assert ai_result_to_score_inputs(legacy_ai_result) == score_inputs_from_ai_result(
            parse_ai_result(legacy_ai_result)
        )
