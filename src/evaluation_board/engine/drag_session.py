"""
Drag Session - Transient State of One Drag Gesture.

State machine:
    IDLE --start--> DRAGGING --crossing--> DRAGGING --finish--> IDLE

The session only records what the gesture did; the engine applies the
board mutations. While DRAGGING it holds a frozen copy of the dragged
evaluation (for overlay rendering and for cancellation) and the
pre-drag placement.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from evaluation_board.domain.entities import Evaluation


class DragState(Enum):
    """Drag session states."""
    IDLE = "idle"
    DRAGGING = "dragging"


class DragSessionError(RuntimeError):
    """Raised when a session transition is requested from the wrong state."""
    pass


@dataclass
class DragSession:
    """Mutable state for the gesture in progress."""
    state: DragState = DragState.IDLE
    active_id: Optional[str] = None
    dragged: Optional[Evaluation] = None  # Pre-drag copy of the card
    origin_stage_id: Optional[str] = None
    origin_index: Optional[int] = None
    correlation_id: Optional[str] = None
    hover_moves: int = 0
    started_at: float = 0.0

    @property
    def is_dragging(self) -> bool:
        return self.state == DragState.DRAGGING

    def matches(self, evaluation_id: Optional[str]) -> bool:
        """True if a gesture event belongs to this session."""
        return self.is_dragging and evaluation_id == self.active_id

    def start(
        self,
        evaluation: Evaluation,
        origin_index: int,
        correlation_id: str,
    ) -> None:
        """IDLE -> DRAGGING."""
        if self.is_dragging:
            raise DragSessionError(f"Drag of {self.active_id} already in progress")
        self.state = DragState.DRAGGING
        self.active_id = evaluation.id
        self.dragged = evaluation
        self.origin_stage_id = evaluation.stage_id
        self.origin_index = origin_index
        self.correlation_id = correlation_id
        self.hover_moves = 0
        self.started_at = time.perf_counter()

    def record_crossing(self) -> None:
        """Count a hover relocation into another stage."""
        if not self.is_dragging:
            raise DragSessionError("No drag in progress")
        self.hover_moves += 1

    def elapsed_seconds(self) -> float:
        if not self.is_dragging:
            return 0.0
        return time.perf_counter() - self.started_at

    def reset(self) -> None:
        """Any state -> IDLE, clearing the overlay snapshot."""
        self.state = DragState.IDLE
        self.active_id = None
        self.dragged = None
        self.origin_stage_id = None
        self.origin_index = None
        self.correlation_id = None
        self.hover_moves = 0
        self.started_at = 0.0
