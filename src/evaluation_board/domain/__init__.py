"""
Domain Layer - Core Business Entities and Value Objects.

This package contains the core domain model of the evaluation board.
All entities here are pure Python with no external dependencies
(except Pydantic for validation).

Entities:
    - Evaluation: One course's evaluation cycle (a card)
    - Stage: Ordered, named column of evaluations
    - Pipeline: Ordered stages forming one board

Value Objects:
    - DragResult: Outcome of a drag gesture
    - BoardMetrics: Active/completed/overdue counters
    - CardIndicators: Per-card overdue and progress display state

Design Principles:
    - Immutable (frozen Pydantic models)
    - Derived state (overdue) is computed, never stored
    - No infrastructure dependencies
"""

from evaluation_board.domain.entities import (
    Evaluation,
    EvaluationStatus,
    Pipeline,
    Priority,
    Stage,
)
from evaluation_board.domain.value_objects import (
    BoardMetrics,
    CardIndicators,
    DisplayStatus,
    DragOutcome,
    DragResult,
    ProgressBand,
    StageCount,
)

__all__ = [
    "Evaluation",
    "EvaluationStatus",
    "Pipeline",
    "Priority",
    "Stage",
    "BoardMetrics",
    "CardIndicators",
    "DisplayStatus",
    "DragOutcome",
    "DragResult",
    "ProgressBand",
    "StageCount",
]
