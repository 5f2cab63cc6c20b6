"""
Adapters Package - Infrastructure Implementations.

This package contains concrete implementations of the abstract
interfaces defined in the interfaces package. Following the
Hexagonal Architecture (Ports & Adapters) pattern.

Providers:
    - DemoPipelineProvider: Fixed demo boards for development/testing

Loggers:
    - ConsoleAuditLogger: Simple console output
    - ObservabilityManager (observability package): Structured JSON logging

Clocks:
    - SystemClock: Real UTC time
    - FixedClock: Pinned time for tests

Design Principles:
    - All adapters implement their respective protocols
    - Easily swappable via Dependency Injection
    - No business logic in adapters
"""

from evaluation_board.adapters.clock import FixedClock, SystemClock
from evaluation_board.adapters.console_logger import ConsoleAuditLogger
from evaluation_board.adapters.demo_provider import DemoPipelineProvider

__all__ = [
    "FixedClock",
    "SystemClock",
    "ConsoleAuditLogger",
    "DemoPipelineProvider",
]
