"""
Configuration Models - Pydantic Models for Type-Safe Config.

All configuration is validated at load time using Pydantic.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field, field_validator

from evaluation_board.domain.entities import EvaluationStatus, Priority


class StageTemplate(BaseModel):
    """One column of a freshly provisioned board."""

    id: str = Field(..., min_length=1)
    name: str
    color: str = Field(default="bg-gray-500")
    order: int = Field(..., ge=0)


def _default_stages() -> List[StageTemplate]:
    return [
        StageTemplate(id="stage_1", name="Planning", color="bg-blue-500", order=0),
        StageTemplate(id="stage_2", name="Survey Creation", color="bg-yellow-500", order=1),
        StageTemplate(id="stage_3", name="Data Collection", color="bg-orange-500", order=2),
        StageTemplate(id="stage_4", name="Analysis", color="bg-purple-500", order=3),
        StageTemplate(id="stage_5", name="Completed", color="bg-green-500", order=4),
    ]


class BoardLayoutConfig(BaseModel):
    """Stage layout used when a pipeline is built from a template."""

    stages: List[StageTemplate] = Field(default_factory=_default_stages)

    @field_validator("stages")
    @classmethod
    def _unique_ids_and_orders(cls, stages: List[StageTemplate]) -> List[StageTemplate]:
        ids = [s.id for s in stages]
        if len(ids) != len(set(ids)):
            raise ValueError("stage ids must be unique")
        orders = [s.order for s in stages]
        if len(orders) != len(set(orders)):
            raise ValueError("stage orders must be unique")
        return stages


class NewEvaluationDefaults(BaseModel):
    """Field defaults applied by the engine's add operation."""

    course_name: str = "New Course Evaluation"
    instructor: str = "Instructor Name"
    progress: int = Field(default=0, ge=0, le=100)
    due_in_days: int = Field(default=14, ge=0)
    status: EvaluationStatus = EvaluationStatus.ACTIVE
    priority: Priority = Priority.MEDIUM
    id_prefix: str = Field(default="evaluation_", min_length=1)


class EngineConfig(BaseModel):
    """Behavior switches for the pipeline engine."""

    # Raise InvariantViolation after a mutation breaks ownership
    verify_invariants: bool = True


class ObservabilityConfig(BaseModel):
    """Structured logging settings."""

    service_name: str = "evaluation_board"
    use_json: bool = True
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {value}")
        return level


class BoardConfig(BaseModel):
    """Root configuration object."""

    version: str = "1.0"
    layout: BoardLayoutConfig = Field(default_factory=BoardLayoutConfig)
    new_evaluation: NewEvaluationDefaults = Field(
        default_factory=NewEvaluationDefaults,
    )
    engine: EngineConfig = Field(default_factory=EngineConfig)
    observability: ObservabilityConfig = Field(
        default_factory=ObservabilityConfig,
    )

    model_config = {"populate_by_name": True}
