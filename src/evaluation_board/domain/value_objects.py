"""
Value Objects for Domain Layer.

Value objects are immutable results handed back to the rendering layer:
the outcome of a drag gesture, board counters and per-card indicators.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


# =============================================================================
# Type Aliases for improved readability
# =============================================================================

# Field values for a new evaluation or a patch, keyed by field name
EvaluationFields = Dict[str, Any]

# Stage id -> number of evaluations in that stage
StageCountsDict = Dict[str, int]


class DragOutcome(str, Enum):
    """How a drag gesture ended."""

    MOVED = "moved"  # Final stage differs from the origin stage
    REORDERED = "reordered"  # Position changed inside the origin stage
    UNCHANGED = "unchanged"  # Valid drop, nothing changed
    DISCARDED = "discarded"  # Dropped outside any valid target
    CANCELLED = "cancelled"  # Pre-drag placement restored
    IGNORED = "ignored"  # No matching drag session


class DisplayStatus(str, Enum):
    """Status shown on a card; OVERDUE is derived, never stored."""

    ACTIVE = "active"
    COMPLETED = "completed"
    OVERDUE = "overdue"


class ProgressBand(str, Enum):
    """Coarse progress bucket used to color the progress bar."""

    EARLY = "early"
    ON_TRACK = "on_track"
    COMPLETE = "complete"


class DragResult(BaseModel):
    """Result of ending (or cancelling) a drag gesture."""

    outcome: DragOutcome
    evaluation_id: Optional[str] = None
    origin_stage_id: Optional[str] = None
    final_stage_id: Optional[str] = None
    origin_index: Optional[int] = None
    final_index: Optional[int] = None
    hover_moves: int = Field(default=0, ge=0, description="Relocations during hover")

    model_config = {"frozen": True}

    @property
    def changed(self) -> bool:
        """True if the gesture left the board in a different arrangement."""
        return self.outcome in (DragOutcome.MOVED, DragOutcome.REORDERED) or (
            self.outcome == DragOutcome.DISCARDED and self.hover_moves > 0
        )


class StageCount(BaseModel):
    """Number of evaluations shown in one column header."""

    stage_id: str
    stage_name: str
    count: int = Field(ge=0)

    model_config = {"frozen": True}


class BoardMetrics(BaseModel):
    """Board-level counters derived from one snapshot."""

    active_count: int = Field(ge=0)
    completed_count: int = Field(ge=0)
    overdue_count: int = Field(ge=0)
    total_count: int = Field(ge=0)
    stage_counts: List[StageCount] = Field(default_factory=list)

    model_config = {"frozen": True}

    @property
    def completion_ratio(self) -> float:
        """Share of completed evaluations (0.0 for an empty board)."""
        if self.total_count == 0:
            return 0.0
        return self.completed_count / self.total_count


class CardIndicators(BaseModel):
    """Display indicators for a single evaluation card."""

    evaluation_id: str
    display_status: DisplayStatus
    is_overdue: bool
    days_overdue: int = Field(default=0, ge=0)
    progress_band: ProgressBand

    model_config = {"frozen": True}
