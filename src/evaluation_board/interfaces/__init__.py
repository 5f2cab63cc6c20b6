"""
Interfaces Layer - Abstract Protocols for Dependencies.

This package defines the abstract interfaces (using typing.Protocol) for all
collaborators of the pipeline engine. Following the Dependency Inversion
Principle, the engine depends on these abstractions, not on concrete
implementations.

Protocols:
    - PipelineProvider: Source of provisioned boards
    - AuditLogger: Logging abstraction for board changes and gestures
    - MetricsCollector: Operation counters and timings
    - ChangeListener: Receives committed changes (persistence collaborator)
    - Clock: Source of "now" for timestamps and overdue checks

Design Principles:
    - Use typing.Protocol (not ABC) for Pythonic interfaces
    - Interface Segregation: Small, focused interfaces
    - No implementation details leak into interfaces
"""

from evaluation_board.interfaces.audit_logger import AuditLogger, MetricsCollector
from evaluation_board.interfaces.change_listener import ChangeListener
from evaluation_board.interfaces.clock import Clock
from evaluation_board.interfaces.pipeline_provider import PipelineProvider

__all__ = [
    "AuditLogger",
    "MetricsCollector",
    "ChangeListener",
    "Clock",
    "PipelineProvider",
]
