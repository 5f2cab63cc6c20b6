"""
Unit Tests for PipelineEngine.relocate.

Test Aspects Covered:
    ✅ Business Logic: Cross-stage move to the tail of the target
    ✅ Edge Cases: Unknown ids, same stage, stage id as source
    ✅ Idempotency: No-op moves leave the snapshot unchanged
    ✅ Time Logic: last_updated set from the engine clock
"""

from __future__ import annotations

from datetime import timedelta

from evaluation_board.adapters.clock import FixedClock
from evaluation_board.engine.pipeline_engine import PipelineEngine
from tests.conftest import REFERENCE_NOW, SEED_TIMESTAMP, stage_ids


class TestRelocate:
    """Cross-stage relocation."""

    def test_moves_to_empty_stage(self, engine: PipelineEngine) -> None:
        """
        SCENARIO: Drag E1 from Planning onto the empty Survey Creation column
        EXPECTED: Planning [E2], Survey Creation [E1], stage_id updated
        """
        # Act
        moved = engine.relocate("E1", "Survey Creation")

        # Assert
        assert moved is True
        assert stage_ids(engine, "Planning") == ["E2"]
        assert stage_ids(engine, "Survey Creation") == ["E1"]
        assert engine.find_evaluation("E1").stage_id == "Survey Creation"

    def test_appends_to_tail_when_hovering_a_card(self, engine: PipelineEngine) -> None:
        """
        SCENARIO: Hover over E3 (first card of Data Collection)
        EXPECTED: E1 lands at the end of Data Collection, not before E3
        """
        # Act
        engine.relocate("E1", "E3")

        # Assert
        assert stage_ids(engine, "Data Collection") == ["E3", "E4", "E5", "E1"]

    def test_preserves_order_of_remaining_items(self, engine: PipelineEngine) -> None:
        """
        SCENARIO: Move the middle card out of Data Collection
        EXPECTED: Remaining cards keep their relative order
        """
        # Act
        engine.relocate("E4", "Planning")

        # Assert
        assert stage_ids(engine, "Data Collection") == ["E3", "E5"]
        assert stage_ids(engine, "Planning") == ["E1", "E2", "E4"]

    def test_sets_last_updated(self, engine: PipelineEngine, clock: FixedClock) -> None:
        # Arrange
        clock.advance(minutes=5)

        # Act
        engine.relocate("E3", "Planning")

        # Assert
        assert engine.find_evaluation("E3").last_updated == REFERENCE_NOW + timedelta(minutes=5)
        assert engine.find_evaluation("E4").last_updated == SEED_TIMESTAMP

    def test_updates_placement_index(self, engine: PipelineEngine) -> None:
        # Act
        engine.relocate("E5", "Survey Creation")

        # Assert
        assert engine.resolve_container("E5") == "Survey Creation"
        assert engine.stage_of("E5").id == "Survey Creation"


class TestRelocateNoOps:
    """Relocations that must decline without touching state."""

    def test_same_stage_is_noop(self, engine: PipelineEngine) -> None:
        """
        SCENARIO: Hover over a sibling card in the same stage
        EXPECTED: False, snapshot identical
        """
        # Arrange
        before = engine.snapshot()

        # Act
        moved = engine.relocate("E3", "E5")

        # Assert
        assert moved is False
        assert engine.snapshot() == before
        assert engine.relocate("E3", "Data Collection") is False

    def test_unknown_target_is_noop(self, engine: PipelineEngine) -> None:
        """
        SCENARIO: Target id does not exist as a stage or card
        EXPECTED: Snapshot byte-for-byte unchanged
        """
        # Arrange
        before = engine.snapshot().model_dump_json()

        # Act
        moved = engine.relocate("E1", "does-not-exist")

        # Assert
        assert moved is False
        assert engine.snapshot().model_dump_json() == before

    def test_unknown_source_is_noop(self, engine: PipelineEngine) -> None:
        before = engine.snapshot()
        assert engine.relocate("E99", "Planning") is False
        assert engine.snapshot() is before

    def test_stage_id_as_dragged_item_is_noop(self, engine: PipelineEngine) -> None:
        """
        SCENARIO: A column id is passed where a card id is expected
        EXPECTED: No-op; columns are not draggable items
        """
        before = engine.snapshot()
        assert engine.relocate("Planning", "Survey Creation") is False
        assert engine.snapshot() is before

    def test_none_target_is_noop(self, engine: PipelineEngine) -> None:
        assert engine.relocate("E1", None) is False
