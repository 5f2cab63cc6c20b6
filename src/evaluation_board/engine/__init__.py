"""
Engine Package - Board State and Gesture Handling.

This package contains the in-memory ordered-collection engine behind
the evaluation board.

Components:
    - PipelineEngine: Owns the arrangement; move, reorder, add, update, delete
    - PlacementIndex: Evaluation id -> stage id lookup
    - DragSession: State of the gesture in progress
    - metrics: Pure functions deriving counters from a snapshot
    - invariants: Ownership invariant checks

The engine is responsible for:
    - Resolving drag sources and targets
    - Applying cross-stage relocations and intra-stage reorders atomically
    - Keeping every evaluation in exactly one stage
    - Handing out immutable snapshots for rendering
"""

from evaluation_board.engine.drag_session import DragSession, DragSessionError, DragState
from evaluation_board.engine.invariants import (
    InvariantViolation,
    check_ownership,
)
from evaluation_board.engine.pipeline_engine import PipelineEngine
from evaluation_board.engine.placement_index import PlacementIndex

__all__ = [
    "DragSession",
    "DragSessionError",
    "DragState",
    "InvariantViolation",
    "check_ownership",
    "PipelineEngine",
    "PlacementIndex",
]
