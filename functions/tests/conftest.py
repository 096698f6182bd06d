"""Pytest configuration and shared fixtures for QuoteShield tests."""

import copy
import os
import sys
import pytest
from unittest.mock import MagicMock
from typing import Dict, Any, List


# ============================================================================
# Ensure local imports work (config/, models/, services/, trades/, utils/)
# ============================================================================
#
# Our codebase uses absolute imports like `from models...` / `from services...`.
# This guarantees that `functions/` is importable as the top-level module root.
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


from tests.fixtures.mock_ai_results import (  # noqa: E402
    CURRENT_SCHEMA_RESULT,
    LEGACY_CLEAN_RESULT,
    LEGACY_SCHEMA_RESULT,
)
from tests.fixtures.mock_pricing_data import (  # noqa: E402
    ROOFING_LINE_ITEMS_SQUARES,
    TX_REPLACEMENT_BENCHMARK,
    TX_REPLACEMENT_BENCHMARK_OLD,
    TX_REPLACEMENT_LEGACY_ROW,
    TX_ROOFING_SUBMISSION,
)


# ============================================================================
# AI Result Fixtures
# ============================================================================

@pytest.fixture
def current_ai_result() -> Dict[str, Any]:
    """Current-schema AI result matching the regression score inputs."""
    return copy.deepcopy(CURRENT_SCHEMA_RESULT)


@pytest.fixture
def legacy_ai_result() -> Dict[str, Any]:
    """Legacy-schema AI result with derivable signals."""
    return copy.deepcopy(LEGACY_SCHEMA_RESULT)


@pytest.fixture
def clean_ai_result() -> Dict[str, Any]:
    """Legacy-schema AI result with nothing to flag."""
    return copy.deepcopy(LEGACY_CLEAN_RESULT)


# ============================================================================
# Score Fixtures
# ============================================================================

@pytest.fixture
def regression_score_inputs():
    """Fixed ScoreInputs used as the score regression fixture."""
    from models.score import ScoreInputs

    return ScoreInputs(
        doc_quality=0.55,
        line_item_clarity=0.5,
        missing_scope_signals=1,
        pricing_outlier_signals=1,
        warranty_signals=0,
        timeline_signals=0,
    )


# ============================================================================
# Pricing Fixtures
# ============================================================================

@pytest.fixture
def roofing_line_items() -> List[Dict[str, Any]]:
    """Roofing line items mentioning 22 squares."""
    return copy.deepcopy(ROOFING_LINE_ITEMS_SQUARES)


@pytest.fixture
def tx_submission() -> Dict[str, Any]:
    """Roofing submission in Austin, TX with a known project value."""
    return copy.deepcopy(TX_ROOFING_SUBMISSION)


@pytest.fixture
def benchmark_store():
    """In-memory benchmark store seeded with Texas roofing rows."""
    from services.benchmark_service import InMemoryBenchmarkStore

    return InMemoryBenchmarkStore([
        TX_REPLACEMENT_BENCHMARK_OLD,
        TX_REPLACEMENT_BENCHMARK,
        TX_REPLACEMENT_LEGACY_ROW,
    ])


@pytest.fixture
def empty_benchmark_store():
    """In-memory benchmark store with no rows."""
    from services.benchmark_service import InMemoryBenchmarkStore

    return InMemoryBenchmarkStore()


# ============================================================================
# Firebase Mocks
# ============================================================================

@pytest.fixture
def make_firestore_doc():
    """Factory for mock Firestore document snapshots."""
    def _make(doc_id: str, data: Dict[str, Any]) -> MagicMock:
        doc = MagicMock()
        doc.id = doc_id
        doc.to_dict.return_value = dict(data)
        return doc
    return _make


@pytest.fixture
def mock_firestore_client():
    """Mock Firestore client.

    Query methods (where/order_by/limit) return the same query mock so any
    chain ends at ``query.stream``. Tests set ``stream.return_value``.
    """
    client = MagicMock()
    query = MagicMock()

    client.collection.return_value = query
    query.where.return_value = query
    query.order_by.return_value = query
    query.limit.return_value = query
    query.stream.return_value = iter([])

    client.query = query
    return client


@pytest.fixture
def firestore_benchmark_store(mock_firestore_client):
    """FirestoreBenchmarkStore with mocked client."""
    from services.benchmark_service import FirestoreBenchmarkStore

    return FirestoreBenchmarkStore(db=mock_firestore_client)
