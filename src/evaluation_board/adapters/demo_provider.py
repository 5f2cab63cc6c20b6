"""
Demo Pipeline Provider.

A fixed board source for development and testing. Serves the three
boards of the evaluation dashboard; the standard board is seeded with
seven evaluations spread over the five default stages, the others start
empty.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Dict, List, Optional, Tuple

from evaluation_board.config.models import BoardLayoutConfig
from evaluation_board.domain.entities import (
    Evaluation,
    EvaluationStatus,
    Pipeline,
    Priority,
    Stage,
)

logger = logging.getLogger(__name__)


class DemoPipelineProvider:
    """Fixed demo boards for development and testing."""

    DEMO_PIPELINES = [
        ("pipeline_1", "Standard Evaluation Pipeline"),
        ("pipeline_2", "Mid-Semester Review Pipeline"),
        ("pipeline_3", "Final Assessment Pipeline"),
    ]

    # (id, course_id, course_name, instructor, stage_id, progress,
    #  due_date, status, priority, last_updated)
    DEMO_EVALUATIONS = [
        ("evaluation_1", "course_1", "Introduction to Psychology", "Dr. Sarah Johnson",
         "stage_1", 10, "2024-02-15", "active", "high", "2024-01-10T10:30:00Z"),
        ("evaluation_2", "course_2", "Advanced Mathematics", "Prof. Michael Chen",
         "stage_1", 25, "2024-02-20", "active", "medium", "2024-01-12T14:15:00Z"),
        ("evaluation_3", "course_3", "Digital Marketing", "Dr. Emily Rodriguez",
         "stage_2", 45, "2024-02-18", "active", "high", "2024-01-14T09:20:00Z"),
        ("evaluation_4", "course_4", "Software Engineering", "Dr. James Wilson",
         "stage_3", 70, "2024-02-12", "active", "medium", "2024-01-15T16:45:00Z"),
        ("evaluation_5", "course_5", "Data Science Fundamentals", "Prof. Lisa Anderson",
         "stage_3", 65, "2024-02-25", "active", "low", "2024-01-16T11:30:00Z"),
        ("evaluation_6", "course_6", "Business Analytics", "Dr. Robert Taylor",
         "stage_4", 85, "2024-02-10", "active", "high", "2024-01-17T13:20:00Z"),
        ("evaluation_7", "course_7", "Web Development", "Dr. Maria Garcia",
         "stage_5", 100, "2024-01-30", "completed", "medium", "2024-01-18T10:15:00Z"),
    ]

    SEEDED_PIPELINE = "pipeline_1"

    def __init__(self, layout: Optional[BoardLayoutConfig] = None) -> None:
        """
        Initialize demo provider.

        Args:
            layout: Stage layout for every board (config default if omitted)
        """
        self._layout = layout or BoardLayoutConfig()
        self._names: Dict[str, str] = dict(self.DEMO_PIPELINES)

    def list_pipelines(self) -> List[Tuple[str, str]]:
        return list(self.DEMO_PIPELINES)

    def load_pipeline(self, pipeline_id: str) -> Pipeline:
        """
        Build a demo board.

        Raises:
            KeyError: If pipeline_id is not a demo board
        """
        if pipeline_id not in self._names:
            raise KeyError(f"Unknown pipeline: {pipeline_id}")

        evaluations = (
            self._demo_evaluations() if pipeline_id == self.SEEDED_PIPELINE else []
        )
        stages = []
        for template in sorted(self._layout.stages, key=lambda t: t.order):
            stages.append(
                Stage(
                    id=template.id,
                    name=template.name,
                    color=template.color,
                    order=template.order,
                    evaluations=tuple(e for e in evaluations if e.stage_id == template.id),
                )
            )
        placed = {e.id for stage in stages for e in stage.evaluations}
        dropped = [e.id for e in evaluations if e.id not in placed]
        if dropped:
            logger.warning(
                f"Layout has no stage for seeded evaluations of {pipeline_id}, "
                f"left off the board: {', '.join(dropped)}"
            )
        return Pipeline(id=pipeline_id, name=self._names[pipeline_id], stages=tuple(stages))

    def _demo_evaluations(self) -> List[Evaluation]:
        return [
            Evaluation(
                id=eid,
                course_id=course_id,
                course_name=course_name,
                instructor=instructor,
                stage_id=stage_id,
                progress=progress,
                due_date=date.fromisoformat(due),
                status=EvaluationStatus(status),
                priority=Priority(priority),
                last_updated=datetime.fromisoformat(updated.replace("Z", "+00:00")),
            )
            for (eid, course_id, course_name, instructor, stage_id, progress,
                 due, status, priority, updated) in self.DEMO_EVALUATIONS
        ]
