"""
Derived Metrics - Board Counters Computed from a Snapshot.

Every function here is a pure function of a Pipeline snapshot and a
reference time. Nothing is cached or counted incrementally; the stage
lists are the only source of truth.
"""

from __future__ import annotations

import math
from datetime import date, datetime, time, timezone
from typing import List

from evaluation_board.domain.entities import Evaluation, EvaluationStatus, Pipeline
from evaluation_board.domain.value_objects import (
    BoardMetrics,
    CardIndicators,
    DisplayStatus,
    ProgressBand,
    StageCount,
)

SECONDS_PER_DAY = 24 * 60 * 60

# Progress at or above this is shown as on track
ON_TRACK_PROGRESS = 50


def is_overdue(evaluation: Evaluation, today: date) -> bool:
    """Active and due strictly before today."""
    return evaluation.status == EvaluationStatus.ACTIVE and evaluation.due_date < today


def days_overdue(evaluation: Evaluation, now: datetime) -> int:
    """
    Whole days an evaluation is overdue, rounded up.

    The due date counts from its midnight (UTC for aware datetimes), so a
    card due yesterday is overdue by one day from midnight onwards and by
    two days once more than 24 hours have passed.

    Args:
        evaluation: The card to check
        now: Reference time

    Returns:
        0 when the evaluation is not overdue
    """
    if not is_overdue(evaluation, now.date()):
        return 0
    tz = timezone.utc if now.tzinfo is not None else None
    due_start = datetime.combine(evaluation.due_date, time.min, tzinfo=tz)
    delta = now - due_start
    return max(1, math.ceil(delta.total_seconds() / SECONDS_PER_DAY))


def count_by_status(pipeline: Pipeline, status: EvaluationStatus) -> int:
    """Number of evaluations across all stages with the given status."""
    return sum(1 for e in pipeline.iter_evaluations() if e.status == status)


def overdue_count(pipeline: Pipeline, today: date) -> int:
    """Number of active evaluations due before today."""
    return sum(1 for e in pipeline.iter_evaluations() if is_overdue(e, today))


def stage_counts(pipeline: Pipeline) -> List[StageCount]:
    """Column header counts, in board order."""
    return [
        StageCount(stage_id=s.id, stage_name=s.name, count=len(s.evaluations))
        for s in pipeline.stages
    ]


def board_metrics(pipeline: Pipeline, today: date) -> BoardMetrics:
    """All board-level counters for one snapshot."""
    return BoardMetrics(
        active_count=count_by_status(pipeline, EvaluationStatus.ACTIVE),
        completed_count=count_by_status(pipeline, EvaluationStatus.COMPLETED),
        overdue_count=overdue_count(pipeline, today),
        total_count=pipeline.evaluation_count,
        stage_counts=stage_counts(pipeline),
    )


def progress_band(progress: int) -> ProgressBand:
    if progress >= 100:
        return ProgressBand.COMPLETE
    if progress >= ON_TRACK_PROGRESS:
        return ProgressBand.ON_TRACK
    return ProgressBand.EARLY


def card_indicators(evaluation: Evaluation, now: datetime) -> CardIndicators:
    """Overdue flag, days overdue and progress band for one card."""
    overdue = is_overdue(evaluation, now.date())
    if overdue:
        display = DisplayStatus.OVERDUE
    elif evaluation.status == EvaluationStatus.COMPLETED:
        display = DisplayStatus.COMPLETED
    else:
        display = DisplayStatus.ACTIVE
    return CardIndicators(
        evaluation_id=evaluation.id,
        display_status=display,
        is_overdue=overdue,
        days_overdue=days_overdue(evaluation, now) if overdue else 0,
        progress_band=progress_band(evaluation.progress),
    )
