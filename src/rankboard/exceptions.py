# src/rankboard/exceptions.py

"""Custom exception hierarchy for RankBoard.

This module provides a structured exception hierarchy that enables:
1. Proper HTTP status code mapping in API endpoints
2. Detailed error context for logging and debugging
3. Clear distinction between infrastructure failures and bad input
"""

from __future__ import annotations


class RankBoardError(Exception):
    """Base exception for all RankBoard errors.

    Attributes:
        message: Human-readable error description
        details: Optional dict with additional context for logging/debugging
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)


# =============================================================================
# Store Unavailable Errors (HTTP 503)
# =============================================================================


class StoreUnavailableError(RankBoardError):
    """Base class for transient infrastructure failures.

    Any of these aborts the whole request; no partial page is returned.
    """

    pass


class RankingIndexUnavailableError(StoreUnavailableError):
    """Raised when the ranking index store cannot be reached."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(
            message=f"Ranking index unavailable while reading '{key}': {reason}",
            details={"index_key": key, "reason": reason},
        )


class RelationalStoreUnavailableError(StoreUnavailableError):
    """Raised when the relational store query fails."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(
            message=f"Relational store unavailable during {operation}: {reason}",
            details={"operation": operation, "reason": reason},
        )


# =============================================================================
# Timeout Errors (HTTP 504)
# =============================================================================


class LeaderboardTimeoutError(RankBoardError):
    """Raised when a leaderboard request exceeds its deadline."""

    def __init__(self, timeout: float) -> None:
        super().__init__(
            message=f"Leaderboard request exceeded its {timeout:.2f}s deadline",
            details={"timeout_seconds": timeout},
        )


# =============================================================================
# Validation Errors (HTTP 422)
# =============================================================================


class ValidationError(RankBoardError):
    """Base class for validation errors."""

    pass


class MissingFieldError(ValidationError):
    """Raised when a required query field is absent or zero."""

    def __init__(self, field: str) -> None:
        super().__init__(
            message=f"Missing parameter: {field}",
            details={"field": field},
        )
