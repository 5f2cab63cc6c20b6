"""
Observability Package - Structured Logging, Metrics, Tracing.

This package provides:
    - ObservabilityManager: structlog-based audit logger and metrics sink

Design Principles:
    - Optional dependency of the engine (engine runs without it)
    - Structured JSON logging via structlog
    - Correlation ID propagation for gesture tracing
"""

from evaluation_board.observability.observability_manager import (
    ObservabilityManager,
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)

__all__ = [
    "ObservabilityManager",
    "clear_correlation_id",
    "get_correlation_id",
    "set_correlation_id",
]
