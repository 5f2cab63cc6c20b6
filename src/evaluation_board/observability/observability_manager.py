"""
Observability Manager - Structured Logging, Metrics, and Tracing.

Provides:
    - Structured JSON logging via structlog
    - Correlation ID propagation (one id per drag gesture)
    - In-memory event and metric recording

Design Notes:
    - Thread-safe storage even though the engine is single-threaded,
      so one manager can serve several boards
    - Implements both the AuditLogger and MetricsCollector protocols
"""

from __future__ import annotations

import logging
import threading
import uuid
from contextvars import ContextVar
from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog

if TYPE_CHECKING:
    from evaluation_board.config.models import ObservabilityConfig

# Context variable for correlation ID
_correlation_id: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)


def get_correlation_id() -> Optional[str]:
    """Get current correlation ID from context."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> None:
    """Set correlation ID in context."""
    _correlation_id.set(correlation_id)


def clear_correlation_id() -> None:
    """Remove the correlation ID from context."""
    _correlation_id.set(None)


class ObservabilityManager:
    """
    Unified observability: logging, metrics, and tracing.

    Provides structured logging with correlation IDs and metrics recording.
    """

    def __init__(
        self,
        service_name: str = "evaluation_board",
        use_json: bool = True,
        log_level: int = logging.INFO,
    ) -> None:
        """
        Initialize observability manager.

        Args:
            service_name: Service name for log entries
            use_json: JSON output if True, colored console output otherwise
            log_level: Logging level
        """
        self.service_name = service_name
        self.use_json = use_json
        self.log_level = log_level
        self._metrics: Dict[str, List[Dict[str, Any]]] = {}
        self._events: List[Dict[str, Any]] = []
        self._lock = threading.Lock()

        self._configure_structlog()
        self._logger = structlog.get_logger(service_name)

    @classmethod
    def from_config(cls, config: ObservabilityConfig) -> ObservabilityManager:
        """Build a manager from the observability section of BoardConfig."""
        return cls(
            service_name=config.service_name,
            use_json=config.use_json,
            log_level=getattr(logging, config.log_level),
        )

    def _configure_structlog(self) -> None:
        processors = [
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
        ]

        if self.use_json:
            processors.append(structlog.processors.JSONRenderer())
        else:
            processors.append(structlog.dev.ConsoleRenderer())

        structlog.configure(
            processors=processors,
            wrapper_class=structlog.make_filtering_bound_logger(self.log_level),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(),
            cache_logger_on_first_use=False,
        )

    def set_correlation_id(self, correlation_id: str) -> None:
        """
        Set correlation ID for current context.

        Args:
            correlation_id: Unique ID for gesture tracing
        """
        set_correlation_id(correlation_id)
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(correlation_id=correlation_id)

    def clear_correlation_id(self) -> None:
        """Unbind the correlation ID from the current context."""
        clear_correlation_id()
        structlog.contextvars.clear_contextvars()

    def generate_correlation_id(self) -> str:
        """Generate and set a new correlation ID."""
        correlation_id = str(uuid.uuid4())
        self.set_correlation_id(correlation_id)
        return correlation_id

    def log_event(
        self,
        event_type: str,
        data: Optional[Dict[str, Any]] = None,
        level: str = "info",
    ) -> None:
        """
        Log a structured event.

        Args:
            event_type: Type of event (e.g., "board_change", "drag_start")
            data: Additional event data
            level: Log level (debug, info, warning, error)
        """
        event_data = {
            "event_type": event_type,
            "timestamp": datetime.now().isoformat(),
            "correlation_id": get_correlation_id(),
            **(data or {}),
        }

        with self._lock:
            self._events.append(event_data)

        log_method = getattr(self._logger, level.lower(), self._logger.info)
        log_method(event_type, **{k: v for k, v in event_data.items() if k != "event_type"})

    def record_metric(
        self,
        name: str,
        value: float,
        tags: Optional[Dict[str, str]] = None,
        metric_type: str = "gauge",
    ) -> None:
        """
        Record a metric value.

        Args:
            name: Metric name
            value: Metric value
            tags: Additional tags/labels
            metric_type: Type (gauge, counter, histogram)
        """
        metric_entry = {
            "timestamp": datetime.now().isoformat(),
            "value": value,
            "tags": tags or {},
            "type": metric_type,
            "correlation_id": get_correlation_id(),
        }

        with self._lock:
            self._metrics.setdefault(name, []).append(metric_entry)

    def get_trace_context(self) -> Dict[str, Any]:
        """Get current trace context (correlation id and service)."""
        return {
            "correlation_id": get_correlation_id(),
            "service_name": self.service_name,
            "timestamp": datetime.now().isoformat(),
        }

    def get_metrics(self) -> Dict[str, List[Dict[str, Any]]]:
        """Get all recorded metrics."""
        with self._lock:
            return {name: list(entries) for name, entries in self._metrics.items()}

    def metric_total(self, name: str, **tags: str) -> float:
        """Sum of a metric's values, optionally restricted to matching tags."""
        with self._lock:
            entries = list(self._metrics.get(name, []))
        return sum(
            e["value"]
            for e in entries
            if all(e["tags"].get(k) == v for k, v in tags.items())
        )

    def get_events(self, event_type: Optional[str] = None) -> List[Dict[str, Any]]:
        """Get recorded events, optionally only one type."""
        with self._lock:
            events = list(self._events)
        if event_type is None:
            return events
        return [e for e in events if e["event_type"] == event_type]

    def clear(self) -> None:
        """Clear all recorded metrics and events."""
        with self._lock:
            self._metrics.clear()
            self._events.clear()

    # =========================================================================
    # AuditLogger Protocol Compatibility
    # =========================================================================

    def log_board_change(
        self,
        action: str,
        evaluation_id: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Log a committed board change (AuditLogger compatible)."""
        self.log_event(
            "board_change",
            {"action": action, "evaluation_id": evaluation_id, **(metadata or {})},
        )

    def log_gesture(
        self,
        phase: str,
        evaluation_id: Optional[str],
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Log a drag gesture boundary (AuditLogger compatible)."""
        self.log_event(
            f"drag_{phase}",
            {"evaluation_id": evaluation_id, **(metadata or {})},
            level="debug",
        )

    def log_anomaly(
        self,
        message: str,
        severity: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Log an anomaly (AuditLogger compatible)."""
        level = "warning" if severity.upper() in ("INFO", "WARNING") else "error"
        self.log_event(
            "anomaly",
            {"message": message, "severity": severity, **(context or {})},
            level=level,
        )

    # =========================================================================
    # MetricsCollector Protocol Compatibility
    # =========================================================================

    def record_timing(
        self,
        name: str,
        duration_seconds: float,
        tags: Optional[Dict] = None,
    ) -> None:
        """Record timing metric (MetricsCollector compatible)."""
        self.record_metric(name, duration_seconds, tags, metric_type="histogram")

    def record_count(
        self,
        name: str,
        value: int,
        tags: Optional[Dict] = None,
    ) -> None:
        """Record count metric (MetricsCollector compatible)."""
        self.record_metric(name, float(value), tags, metric_type="counter")
