"""
Console Audit Logger.

A simple audit logger that outputs board changes to the console.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional


class ConsoleAuditLogger:
    """Simple console-based audit logger."""

    def __init__(self, verbose: bool = True) -> None:
        """
        Initialize console logger.

        Args:
            verbose: If True, log gestures as well. If False, only changes
                and anomalies.
        """
        self._verbose = verbose
        self._correlation_id: Optional[str] = None

    def set_correlation_id(self, correlation_id: str) -> None:
        """Set correlation ID for subsequent log entries."""
        self._correlation_id = correlation_id

    def clear_correlation_id(self) -> None:
        self._correlation_id = None

    def log_board_change(
        self,
        action: str,
        evaluation_id: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Log a committed change to the board."""
        details = " ".join(f"{k}={v}" for k, v in (metadata or {}).items())
        self._log("INFO", f"{action} {evaluation_id} {details}".rstrip())

    def log_gesture(
        self,
        phase: str,
        evaluation_id: Optional[str],
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Log a drag gesture boundary."""
        if self._verbose:
            outcome = (metadata or {}).get("outcome")
            suffix = f" ({outcome})" if outcome else ""
            self._log("DEBUG", f"drag {phase} {evaluation_id}{suffix}")

    def log_anomaly(
        self,
        message: str,
        severity: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Log an anomaly or warning."""
        self._log(severity, f"ANOMALY: {message}")

    def _log(self, level: str, message: str) -> None:
        timestamp = datetime.now().strftime("%H:%M:%S")
        corr_id = self._correlation_id[:8] if self._correlation_id else "--------"
        print(f"[{timestamp}] [{corr_id}] [{level:5}] {message}")
