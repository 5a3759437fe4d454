# src/rankboard/middleware/__init__.py

"""Middleware components for RankBoard API."""

from .logging import RequestLoggingMiddleware

__all__ = ["RequestLoggingMiddleware"]
