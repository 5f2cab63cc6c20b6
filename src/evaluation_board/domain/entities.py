"""
Core Domain Entities.

This module defines the fundamental entities of the evaluation board:
Evaluations (work items), Stages (ordered columns) and the Pipeline
(the whole board). All entities are frozen; the engine replaces them
instead of mutating them, so a Pipeline handed to a caller never changes.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Iterator, Optional, Tuple

from pydantic import BaseModel, Field


class EvaluationStatus(str, Enum):
    """Persisted lifecycle status of an evaluation."""

    ACTIVE = "active"
    COMPLETED = "completed"


class Priority(str, Enum):
    """Informational priority shown on a card."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Evaluation(BaseModel):
    """One course's evaluation cycle, tracked as a card on the board."""

    id: str = Field(..., min_length=1, description="Opaque unique identifier")
    course_id: str = Field(..., description="Reference to the evaluated course")
    course_name: str = Field(..., description="Display name of the course")
    instructor: str = Field(..., description="Instructor display name")
    stage_id: str = Field(..., description="Id of the containing stage")
    progress: int = Field(default=0, ge=0, le=100, description="Percent complete")
    due_date: date = Field(..., description="Calendar due date")
    status: EvaluationStatus = Field(default=EvaluationStatus.ACTIVE)
    priority: Priority = Field(default=Priority.MEDIUM)
    last_updated: datetime = Field(..., description="Last engine mutation")

    model_config = {"frozen": True}


class Stage(BaseModel):
    """A named, ordered column of evaluations."""

    id: str = Field(..., min_length=1)
    name: str
    color: str = Field(default="bg-gray-500", description="Display color token")
    order: int = Field(..., ge=0, description="Left-to-right board position")
    evaluations: Tuple[Evaluation, ...] = Field(default_factory=tuple)

    model_config = {"frozen": True}

    @property
    def evaluation_ids(self) -> Tuple[str, ...]:
        return tuple(e.id for e in self.evaluations)


class Pipeline(BaseModel):
    """The whole board: stages in display order."""

    id: str = Field(..., min_length=1)
    name: str
    stages: Tuple[Stage, ...] = Field(default_factory=tuple)

    model_config = {"frozen": True}

    def get_stage(self, stage_id: str) -> Optional[Stage]:
        """Get stage by id."""
        for stage in self.stages:
            if stage.id == stage_id:
                return stage
        return None

    def iter_evaluations(self) -> Iterator[Evaluation]:
        """Iterate all evaluations, stage by stage, in board order."""
        for stage in self.stages:
            yield from stage.evaluations

    @property
    def evaluation_count(self) -> int:
        return sum(len(stage.evaluations) for stage in self.stages)
