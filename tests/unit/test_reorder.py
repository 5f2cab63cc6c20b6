"""
Unit Tests for PipelineEngine.reorder.

Test Aspects Covered:
    ✅ Business Logic: Move-element semantics in both directions
    ✅ Edge Cases: Same index, reference in another stage, unknown ids
    ✅ Idempotency: No-op reorders leave the snapshot unchanged
    ✅ Time Logic: Reorder does not touch last_updated
"""

from __future__ import annotations

from datetime import date

import pytest

from evaluation_board.domain.entities import Pipeline, Stage
from evaluation_board.engine.pipeline_engine import PipelineEngine
from tests.conftest import SEED_TIMESTAMP, make_evaluation, stage_ids


class TestReorder:
    """Intra-stage reordering."""

    def test_move_last_before_first(self, engine: PipelineEngine) -> None:
        """
        SCENARIO: Data Collection [E3, E4, E5]; reorder E5 onto E3
        EXPECTED: [E5, E3, E4]
        """
        # Act
        changed = engine.reorder("E5", "E3")

        # Assert
        assert changed is True
        assert stage_ids(engine, "Data Collection") == ["E5", "E3", "E4"]

    def test_move_first_after_last(self, engine: PipelineEngine) -> None:
        """
        SCENARIO: reorder E3 onto E5 (old index < new index)
        EXPECTED: [E4, E5, E3], insertion at the reference's old index
        """
        engine.reorder("E3", "E5")
        assert stage_ids(engine, "Data Collection") == ["E4", "E5", "E3"]

    def test_move_to_neighbour(self, engine: PipelineEngine) -> None:
        engine.reorder("E3", "E4")
        assert stage_ids(engine, "Data Collection") == ["E4", "E3", "E5"]

    def test_does_not_touch_last_updated(self, engine: PipelineEngine) -> None:
        engine.reorder("E5", "E3")
        assert engine.find_evaluation("E5").last_updated == SEED_TIMESTAMP

    @pytest.mark.parametrize(
        "old_index,new_index",
        [(0, 4), (4, 0), (1, 3), (3, 1), (2, 2)],
    )
    def test_matches_pop_and_insert(self, clock, old_index: int, new_index: int) -> None:
        """
        SCENARIO: Five cards, move index i to index j
        EXPECTED: Same list as list.pop(i) followed by list.insert(j, item)
        """
        # Arrange
        ids = ["a", "b", "c", "d", "e"]
        pipeline = Pipeline(
            id="p",
            name="P",
            stages=(
                Stage(
                    id="s",
                    name="S",
                    order=0,
                    evaluations=tuple(make_evaluation(i, "s") for i in ids),
                ),
            ),
        )
        engine = PipelineEngine(pipeline, clock=clock)
        expected = list(ids)
        expected.insert(new_index, expected.pop(old_index))

        # Act
        engine.reorder(ids[old_index], ids[new_index])

        # Assert
        assert stage_ids(engine, "s") == expected


class TestReorderNoOps:
    """Reorders that must decline."""

    def test_same_index_is_noop(self, engine: PipelineEngine) -> None:
        # Arrange
        before = engine.snapshot()

        # Act
        changed = engine.reorder("E4", "E4")

        # Assert
        assert changed is False
        assert engine.snapshot() is before

    def test_reference_in_other_stage_is_noop(self, engine: PipelineEngine) -> None:
        """
        SCENARIO: Reference card lives in a different stage
        EXPECTED: No-op; cross-stage moves go through relocate
        """
        before = engine.snapshot().model_dump_json()
        assert engine.reorder("E3", "E1") is False
        assert engine.snapshot().model_dump_json() == before

    def test_stage_as_reference_is_noop(self, engine: PipelineEngine) -> None:
        assert engine.reorder("E3", "Data Collection") is False
        assert stage_ids(engine, "Data Collection") == ["E3", "E4", "E5"]

    def test_unknown_ids_are_noops(self, engine: PipelineEngine) -> None:
        assert engine.reorder("E99", "E3") is False
        assert engine.reorder("E3", "E99") is False
        assert engine.reorder("E3", None) is False

    def test_stage_order_independent_of_due_dates(self, clock) -> None:
        """
        SCENARIO: Cards provisioned out of due-date order
        EXPECTED: Provisioned order is kept; the engine never sorts
        """
        pipeline = Pipeline(
            id="p",
            name="P",
            stages=(
                Stage(
                    id="s",
                    name="S",
                    order=0,
                    evaluations=(
                        make_evaluation("late", "s", due_date=date(2024, 5, 1)),
                        make_evaluation("early", "s", due_date=date(2024, 1, 1)),
                    ),
                ),
            ),
        )
        engine = PipelineEngine(pipeline, clock=clock)
        assert stage_ids(engine, "s") == ["late", "early"]
