"""
Pytest Configuration and Shared Fixtures.

This module contains fixtures available to all tests.
"""

from __future__ import annotations

import random
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Optional

import pytest

from evaluation_board.adapters.clock import FixedClock
from evaluation_board.adapters.console_logger import ConsoleAuditLogger
from evaluation_board.adapters.demo_provider import DemoPipelineProvider
from evaluation_board.config.models import BoardConfig
from evaluation_board.domain.entities import (
    Evaluation,
    EvaluationStatus,
    Pipeline,
    Priority,
    Stage,
)
from evaluation_board.engine.pipeline_engine import PipelineEngine
from evaluation_board.observability.observability_manager import (
    ObservabilityManager,
    clear_correlation_id,
)

# Pinned "now" for every test: Wednesday 2024-02-14, noon UTC
REFERENCE_NOW = datetime(2024, 2, 14, 12, 0, tzinfo=timezone.utc)
SEED_TIMESTAMP = datetime(2024, 1, 10, 10, 30, tzinfo=timezone.utc)


def make_evaluation(
    evaluation_id: str,
    stage_id: str,
    due_date: date = date(2024, 3, 1),
    status: EvaluationStatus = EvaluationStatus.ACTIVE,
    progress: int = 0,
    priority: Priority = Priority.MEDIUM,
    last_updated: Optional[datetime] = None,
) -> Evaluation:
    """Build an evaluation with sensible defaults for tests."""
    return Evaluation(
        id=evaluation_id,
        course_id=f"course_{evaluation_id}",
        course_name=f"Course {evaluation_id}",
        instructor="Dr. Test",
        stage_id=stage_id,
        progress=progress,
        due_date=due_date,
        status=status,
        priority=priority,
        last_updated=last_updated or SEED_TIMESTAMP,
    )


@pytest.fixture(autouse=True)
def set_random_seed():
    """Ensure all tests are deterministic."""
    random.seed(42)
    yield


@pytest.fixture(autouse=True)
def reset_correlation_id():
    """No correlation id carries over from one test to the next."""
    yield
    clear_correlation_id()


@pytest.fixture
def sample_config_path() -> Path:
    """Path to sample configuration file."""
    return Path(__file__).parent / "fixtures" / "sample_config.yaml"


@pytest.fixture
def clock() -> FixedClock:
    """Clock pinned to the reference time."""
    return FixedClock(REFERENCE_NOW)


@pytest.fixture
def default_config() -> BoardConfig:
    """Default board configuration."""
    return BoardConfig()


@pytest.fixture
def console_logger() -> ConsoleAuditLogger:
    """Create console logger for testing."""
    return ConsoleAuditLogger(verbose=False)


@pytest.fixture
def observability() -> ObservabilityManager:
    """Structured audit logger and metrics sink."""
    return ObservabilityManager(service_name="test_board", use_json=False)


@pytest.fixture
def demo_provider() -> DemoPipelineProvider:
    """Demo board provider with the default layout."""
    return DemoPipelineProvider()


@pytest.fixture
def demo_pipeline(demo_provider: DemoPipelineProvider) -> Pipeline:
    """The seeded standard evaluation board."""
    return demo_provider.load_pipeline("pipeline_1")


@pytest.fixture
def demo_engine(demo_pipeline: Pipeline, clock: FixedClock) -> PipelineEngine:
    """Engine owning the seeded demo board."""
    return PipelineEngine(demo_pipeline, clock=clock)


@pytest.fixture
def scenario_pipeline() -> Pipeline:
    """
    Three named stages:
        Planning:        [E1 (due in the past), E2 (due in the future)]
        Survey Creation: []
        Data Collection: [E3, E4, E5]
    """
    return Pipeline(
        id="scenario",
        name="Scenario Board",
        stages=(
            Stage(
                id="Planning",
                name="Planning",
                order=0,
                evaluations=(
                    make_evaluation("E1", "Planning", due_date=date(2024, 2, 1)),
                    make_evaluation("E2", "Planning", due_date=date(2024, 3, 1)),
                ),
            ),
            Stage(id="Survey Creation", name="Survey Creation", order=1),
            Stage(
                id="Data Collection",
                name="Data Collection",
                order=2,
                evaluations=(
                    make_evaluation("E3", "Data Collection"),
                    make_evaluation("E4", "Data Collection"),
                    make_evaluation("E5", "Data Collection"),
                ),
            ),
        ),
    )


@pytest.fixture
def engine(scenario_pipeline: Pipeline, clock: FixedClock) -> PipelineEngine:
    """Engine owning the scenario board."""
    return PipelineEngine(scenario_pipeline, clock=clock)


def stage_ids(engine: PipelineEngine, stage_id: str):
    """Evaluation ids of one stage, in order, from the current snapshot."""
    return list(engine.snapshot().get_stage(stage_id).evaluation_ids)
