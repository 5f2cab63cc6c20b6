"""
Audit Logger Protocol.

Defines the abstract interface for audit logging. The audit logger
tracks every change the engine commits to a board, plus drag gesture
boundaries, for debugging and for replaying what a user did.

Design Notes:
    - Structured logging (JSON format recommended)
    - Correlation ID propagation: one id per drag gesture
    - No side effects on engine logic
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Protocol, runtime_checkable


@runtime_checkable
class AuditLogger(Protocol):
    """Abstract interface for audit logging."""

    def set_correlation_id(self, correlation_id: str) -> None:
        """Set correlation ID for subsequent log entries."""
        ...

    def clear_correlation_id(self) -> None:
        """Stop attaching the current correlation ID (gesture finished)."""
        ...

    def log_board_change(
        self,
        action: str,
        evaluation_id: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Log a committed change to the board.

        Args:
            action: relocate, reorder, add, update, delete or restore
            evaluation_id: The evaluation affected
            metadata: Stage ids, indices and other context
        """
        ...

    def log_gesture(
        self,
        phase: str,
        evaluation_id: Optional[str],
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Log a drag gesture boundary.

        Args:
            phase: start, end or cancel
            evaluation_id: The dragged evaluation (None if unknown)
            metadata: Outcome and stage context
        """
        ...

    def log_anomaly(
        self,
        message: str,
        severity: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Log an anomaly or warning.

        Args:
            message: Description of the anomaly
            severity: INFO, WARNING, or CRITICAL
            context: Optional additional context
        """
        ...


@runtime_checkable
class MetricsCollector(Protocol):
    """Abstract interface for operation metrics."""

    def record_timing(
        self, name: str, duration_seconds: float, tags: Optional[Dict] = None
    ) -> None:
        ...

    def record_count(
        self, name: str, value: int, tags: Optional[Dict] = None
    ) -> None:
        ...

    def get_metrics(self) -> Dict[str, Any]:
        ...
