"""QuoteShield error handling.

Custom exceptions and error codes for the scoring and pricing core.
Malformed, partial or absent quote data never raises; these errors are
reserved for caller contract violations and benchmark store failures.
"""

from typing import Optional, Dict, Any


# Error Codes
class ErrorCode:
    """Error code constants."""

    # Validation Errors (1xxx)
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Benchmark Errors (2xxx)
    BENCHMARK_KEY_INVALID = "BENCHMARK_KEY_INVALID"
    BENCHMARK_LOOKUP_FAILED = "BENCHMARK_LOOKUP_FAILED"

    # Trade Errors (3xxx)
    UNSUPPORTED_TRADE = "UNSUPPORTED_TRADE"

    # Firestore Errors (5xxx)
    FIRESTORE_ERROR = "FIRESTORE_ERROR"


class QuoteShieldError(Exception):
    """Base exception for QuoteShield errors.

    Attributes:
        code: Error code from ErrorCode constants
        message: Human-readable error message
        details: Additional error context
    """

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging or persistence.

        Returns:
            Dictionary with code, message, and details.
        """
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }

    def __repr__(self) -> str:
        return f"QuoteShieldError(code={self.code!r}, message={self.message!r})"


class ValidationError(QuoteShieldError):
    """Validation-specific error."""

    def __init__(self, message: str, field: Optional[str] = None, details: Optional[Dict] = None):
        super().__init__(
            code=ErrorCode.VALIDATION_ERROR,
            message=message,
            details={**(details or {}), "field": field} if field else details
        )
        self.field = field


class BenchmarkError(QuoteShieldError):
    """Benchmark store error."""

    def __init__(
        self,
        code: str,
        message: str,
        benchmark_key: Optional[Dict[str, Any]] = None,
        details: Optional[Dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            details={**(details or {}), "benchmark_key": benchmark_key or {}}
        )
        self.benchmark_key = benchmark_key or {}
