"""
Unit Tests for the ownership invariant check.

Test Aspects Covered:
    ✅ Business Logic: Each kind of ownership break is reported
    ✅ Integration: Engine stays consistent after every operation
"""

from __future__ import annotations

import pytest

from evaluation_board.engine.invariants import (
    InvariantViolation,
    check_ownership,
)
from evaluation_board.engine.pipeline_engine import PipelineEngine
from evaluation_board.engine.placement_index import PlacementIndex
from tests.conftest import make_evaluation


class TestCheckOwnership:
    """check_ownership on hand-built arrangements."""

    def test_consistent_board(self) -> None:
        columns = {"a": [make_evaluation("E1", "a")], "b": []}
        assert check_ownership(columns, PlacementIndex.build(columns)) == []

    def test_stage_id_mismatch(self) -> None:
        columns = {"a": [make_evaluation("E1", "b")], "b": []}
        index = PlacementIndex.build(columns)

        problems = check_ownership(columns, index)

        assert any("has stage_id b" in p for p in problems)

    def test_duplicate_membership(self) -> None:
        card = make_evaluation("E1", "a")
        columns = {"a": [card], "b": [card.model_copy(update={"stage_id": "b"})]}
        index = PlacementIndex.build(columns)

        problems = check_ownership(columns, index)

        assert any("appears in 2 stage lists" in p for p in problems)

    def test_stale_index_entry(self) -> None:
        columns = {"a": [make_evaluation("E1", "a")]}
        index = PlacementIndex.build(columns)
        columns["a"].clear()

        problems = check_ownership(columns, index)

        assert problems == ["index holds E1 which no stage lists"]

    def test_engine_raises_on_corrupted_index(self, engine: PipelineEngine) -> None:
        """
        SCENARIO: Index disagrees with the stage lists when a mutation commits
        EXPECTED: InvariantViolation listing the disagreement
        """
        # Arrange
        engine.placement_index.place("E3", "Planning")

        # Act
        with pytest.raises(InvariantViolation) as exc_info:
            engine.relocate("E1", "Survey Creation")

        # Assert
        assert any("index places E3 in Planning" in p for p in exc_info.value.problems)


class TestEngineConsistency:
    """The engine's own state after mutations."""

    def test_each_evaluation_in_exactly_one_stage(self, engine: PipelineEngine) -> None:
        """
        SCENARIO: A mix of moves, reorders, adds and deletes
        EXPECTED: Snapshot lists every id once; stage_id matches the stage
        """
        # Act
        engine.relocate("E1", "Survey Creation")
        engine.relocate("E4", "E1")
        engine.reorder("E4", "E1")
        engine.add("Planning", {"id": "E6"})
        engine.delete("E2")

        # Assert
        snapshot = engine.snapshot()
        seen = [e.id for e in snapshot.iter_evaluations()]
        assert sorted(seen) == ["E1", "E3", "E4", "E5", "E6"]
        for stage in snapshot.stages:
            assert all(e.stage_id == stage.id for e in stage.evaluations)
            for e in stage.evaluations:
                assert engine.resolve_container(e.id) == stage.id
