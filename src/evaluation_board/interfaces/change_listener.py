"""
Change Listener Protocol.

The persistence collaborator subscribes to committed board changes
through this interface. The engine calls it only after a change fully
applied, so a listener never observes a half-moved evaluation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from evaluation_board.domain.entities import Evaluation


@runtime_checkable
class ChangeListener(Protocol):
    """Receives committed evaluation changes."""

    def evaluation_added(self, evaluation: Evaluation) -> None:
        ...

    def evaluation_updated(self, evaluation: Evaluation) -> None:
        ...

    def evaluation_deleted(self, evaluation: Evaluation) -> None:
        ...

    def evaluation_moved(
        self, evaluation: Evaluation, from_stage_id: str, index: int
    ) -> None:
        """Called for relocations and reorders; index is the new position."""
        ...
