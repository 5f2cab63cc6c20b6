"""
Unit Tests for PlacementIndex.

Test Aspects Covered:
    ✅ Business Logic: Stage and evaluation resolution
    ✅ Edge Cases: Empty stages, unknown ids, None
    ✅ State: Incremental place/discard, rebuild
"""

from __future__ import annotations

import pytest

from evaluation_board.engine.placement_index import PlacementIndex
from tests.conftest import make_evaluation


@pytest.fixture
def index() -> PlacementIndex:
    """Index over two stages, the second one empty."""
    return PlacementIndex.build(
        {
            "planning": [make_evaluation("e1", "planning"), make_evaluation("e2", "planning")],
            "survey": [],
        }
    )


class TestResolveContainer:
    """Test container resolution."""

    def test_stage_id_resolves_to_itself(self, index: PlacementIndex) -> None:
        """
        SCENARIO: Drop target is an empty column
        EXPECTED: The stage id itself is returned
        """
        assert index.resolve_container("survey") == "survey"

    def test_evaluation_resolves_to_owner(self, index: PlacementIndex) -> None:
        """
        SCENARIO: Drop target is a card
        EXPECTED: The stage holding the card
        """
        assert index.resolve_container("e2") == "planning"

    def test_unknown_id_is_unresolved(self, index: PlacementIndex) -> None:
        """
        SCENARIO: Id names neither a stage nor a card
        EXPECTED: None
        """
        assert index.resolve_container("nowhere") is None
        assert index.resolve_container(None) is None

    def test_owner_of_ignores_stage_ids(self, index: PlacementIndex) -> None:
        """
        SCENARIO: owner_of is asked about a stage id
        EXPECTED: None, stages are not evaluations
        """
        assert index.owner_of("planning") is None
        assert index.is_stage("planning")
        assert not index.is_stage("e1")


class TestIncrementalUpdates:
    """Test place, discard and rebuild."""

    def test_place_moves_evaluation(self, index: PlacementIndex) -> None:
        # Act
        index.place("e1", "survey")

        # Assert
        assert index.resolve_container("e1") == "survey"
        assert len(index) == 2

    def test_place_into_unknown_stage_raises(self, index: PlacementIndex) -> None:
        with pytest.raises(KeyError):
            index.place("e1", "archive")

    def test_discard_returns_former_stage(self, index: PlacementIndex) -> None:
        # Act
        former = index.discard("e2")

        # Assert
        assert former == "planning"
        assert "e2" not in index
        assert index.discard("e2") is None

    def test_rebuild_replaces_entries(self, index: PlacementIndex) -> None:
        """
        SCENARIO: Rebuild from a different arrangement
        EXPECTED: Old entries and stages are gone
        """
        # Act
        index.rebuild({"done": [make_evaluation("e9", "done")]})

        # Assert
        assert index.items() == {"e9": "done"}
        assert index.stage_ids == {"done"}
        assert index.resolve_container("e1") is None
