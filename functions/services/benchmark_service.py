"""Pricing benchmark service for QuoteShield.

Looks up the most recent market price-per-unit range for a
(trade, subtrade, region_key, unit_basis) key. Benchmark data is read-only
reference data; this module never writes it.

Lookup contract:
- exact match on all four key fields, newest first
- if nothing matches and the region is not the generic bucket, one retry
  without the unit_basis filter
- otherwise an all-null range

Store failures degrade to the empty range. Only a malformed key raises.
"""

from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Protocol

import structlog
from firebase_admin import firestore

from config.errors import BenchmarkError, ErrorCode, ValidationError
from config.settings import settings
from models.pricing import BenchmarkRange
from utils.numbers import coerce_number

logger = structlog.get_logger()


class BenchmarkStore(Protocol):
    """Read-only source of benchmark rows."""

    def find_latest(
        self,
        trade: str,
        subtrade: str,
        region_key: str,
        unit_basis: Optional[str] = None
    ) -> Optional[Dict[str, Any]]:
        """Return the newest matching row, or None.

        Raises:
            BenchmarkError: If the underlying store fails.
        """
        ...


# =============================================================================
# Stores
# =============================================================================


def _sort_value(value: Any) -> str:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value) if value is not None else ""


class InMemoryBenchmarkStore:
    """Benchmark store backed by a list of row dicts.

    Used for tests, local runs and seeding from fixtures.
    """

    def __init__(self, rows: Optional[Iterable[Dict[str, Any]]] = None):
        self._rows: List[Dict[str, Any]] = [dict(r) for r in (rows or [])]

    def add(self, row: Dict[str, Any]) -> None:
        self._rows.append(dict(row))

    def find_latest(
        self,
        trade: str,
        subtrade: str,
        region_key: str,
        unit_basis: Optional[str] = None
    ) -> Optional[Dict[str, Any]]:
        matches = [
            row for row in self._rows
            if row.get("trade") == trade
            and row.get("subtrade") == subtrade
            and row.get("region_key") == region_key
            and (unit_basis is None or row.get("unit_basis") == unit_basis)
        ]
        if not matches:
            return None
        matches.sort(
            key=lambda r: (_sort_value(r.get("effective_date")), _sort_value(r.get("created_at"))),
            reverse=True,
        )
        return dict(matches[0])


class FirestoreBenchmarkStore:
    """Benchmark store backed by a Firestore collection.

    Note: Firebase Admin SDK for Python is synchronous; queries block.
    """

    def __init__(self, db=None, collection: Optional[str] = None):
        """Initialize FirestoreBenchmarkStore.

        Args:
            db: Optional Firestore client. If not provided, uses default.
            collection: Collection name (defaults to settings).
        """
        self._db = db
        self.collection = collection or settings.benchmark_collection

    @property
    def db(self):
        """Get Firestore client (lazy initialization)."""
        if self._db is None:
            self._db = firestore.client()
        return self._db

    def find_latest(
        self,
        trade: str,
        subtrade: str,
        region_key: str,
        unit_basis: Optional[str] = None
    ) -> Optional[Dict[str, Any]]:
        key = {"trade": trade, "subtrade": subtrade, "region_key": region_key, "unit_basis": unit_basis}
        try:
            query = (
                self.db.collection(self.collection)
                .where("trade", "==", trade)
                .where("subtrade", "==", subtrade)
                .where("region_key", "==", region_key)
            )
            if unit_basis is not None:
                query = query.where("unit_basis", "==", unit_basis)
            query = query.order_by("effective_date", direction=firestore.Query.DESCENDING)
            if unit_basis is not None:
                query = query.order_by("created_at", direction=firestore.Query.DESCENDING)

            for doc in query.limit(1).stream():
                return {"id": doc.id, **doc.to_dict()}
            return None

        except Exception as e:
            logger.error("benchmark_query_failed", collection=self.collection, error=str(e), **key)
            raise BenchmarkError(
                code=ErrorCode.FIRESTORE_ERROR,
                message=f"Failed to query benchmarks: {str(e)}",
                benchmark_key=key,
            )


# =============================================================================
# Row decoding
# =============================================================================


def _date_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def _prefer_unit(row: Dict[str, Any], unit_key: str, plain_key: str) -> Optional[float]:
    value = coerce_number(row.get(unit_key))
    if value is None:
        value = coerce_number(row.get(plain_key))
    return value


def decode_benchmark_row(row: Optional[Dict[str, Any]]) -> BenchmarkRange:
    """Decode a stored row into a BenchmarkRange.

    unit_low/unit_mid/unit_high win over low/mid/high; a missing mid is the
    midpoint of low and high.
    """
    if not row:
        return BenchmarkRange()

    low = _prefer_unit(row, "unit_low", "low")
    mid = _prefer_unit(row, "unit_mid", "mid")
    high = _prefer_unit(row, "unit_high", "high")
    if mid is None and low is not None and high is not None:
        mid = (low + high) / 2

    source = row.get("source")
    return BenchmarkRange(
        unit_low=low,
        unit_mid=mid,
        unit_high=high,
        source=source if isinstance(source, str) else None,
        effective_date=_date_text(row.get("effective_date")),
        benchmark_row={k: _date_text(v) if isinstance(v, (datetime, date)) else v for k, v in row.items()},
    )


# =============================================================================
# Public API
# =============================================================================


def _validate_key(**key: Any) -> None:
    for name, value in key.items():
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(
                f"Benchmark key field '{name}' must be a non-empty string",
                field=name,
                details={"code": ErrorCode.BENCHMARK_KEY_INVALID, "value": repr(value)},
            )


def _safe_find(
    store: BenchmarkStore,
    trade: str,
    subtrade: str,
    region_key: str,
    unit_basis: Optional[str]
) -> Optional[Dict[str, Any]]:
    try:
        return store.find_latest(trade, subtrade, region_key, unit_basis)
    except BenchmarkError as e:
        logger.warning("benchmark_lookup_failed", error=e.message, code=e.code, **e.benchmark_key)
        return None
    except Exception as e:
        # Stores other than FirestoreBenchmarkStore may raise their own errors
        err = BenchmarkError(
            code=ErrorCode.BENCHMARK_LOOKUP_FAILED,
            message=str(e),
            benchmark_key={"trade": trade, "subtrade": subtrade, "region_key": region_key, "unit_basis": unit_basis},
        )
        logger.warning("benchmark_lookup_failed", error=err.message, code=err.code, **err.benchmark_key)
        return None


def fetch_unit_benchmark(
    store: BenchmarkStore,
    trade: str,
    subtrade: str,
    region_key: str,
    unit_basis: str
) -> BenchmarkRange:
    """Fetch the newest benchmark range for a key.

    Args:
        store: Benchmark store to query.
        trade: Trade name (e.g. "Roofing").
        subtrade: Subtrade name (e.g. "Residential Replacement").
        region_key: Region key (e.g. "TX" or "unknown").
        unit_basis: Unit basis (e.g. "square").

    Returns:
        BenchmarkRange; all-null when no row is available.

    Raises:
        ValidationError: If a key field is empty or not a string.
    """
    _validate_key(trade=trade, subtrade=subtrade, region_key=region_key, unit_basis=unit_basis)

    row = _safe_find(store, trade, subtrade, region_key, unit_basis)
    if row is None and region_key != settings.default_region_key:
        logger.info(
            "benchmark_fallback_lookup",
            trade=trade,
            subtrade=subtrade,
            region_key=region_key,
            unit_basis=unit_basis,
        )
        row = _safe_find(store, trade, subtrade, region_key, None)

    if row is None:
        logger.info("benchmark_not_found", trade=trade, subtrade=subtrade, region_key=region_key)
        return BenchmarkRange()

    return decode_benchmark_row(row)
