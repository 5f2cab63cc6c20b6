"""
Placement Index - Evaluation Id to Stage Lookup.

Answers "which stage contains this id?" in O(1). Drag targets can be
either a card or a column, so a lookup first checks whether the id is
itself a stage (dropping onto an empty column) and only then looks for
a card with that id.

Design Notes:
    - The engine updates the index on every mutation (place/discard)
    - rebuild() re-derives it from the authoritative stage lists
    - A stale entry is a correctness bug: callers use the answer to
      decide between cross-stage relocation and intra-stage reorder
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Mapping, Optional, Sequence, Set

from evaluation_board.domain.entities import Evaluation

logger = logging.getLogger(__name__)


class PlacementIndex:
    """Mapping of evaluation id -> owning stage id, plus the set of stage ids."""

    def __init__(self, stage_ids: Iterable[str] = ()) -> None:
        self._stage_ids: Set[str] = set(stage_ids)
        self._owners: Dict[str, str] = {}

    @classmethod
    def build(cls, columns: Mapping[str, Sequence[Evaluation]]) -> PlacementIndex:
        """Create an index for the given stage id -> evaluations mapping."""
        index = cls()
        index.rebuild(columns)
        return index

    def rebuild(self, columns: Mapping[str, Sequence[Evaluation]]) -> None:
        """Discard all entries and re-derive them from the stage lists."""
        self._stage_ids = set(columns)
        self._owners = {}
        for stage_id, evaluations in columns.items():
            for evaluation in evaluations:
                self._owners[evaluation.id] = stage_id
        logger.debug(
            f"Placement index rebuilt: {len(self._stage_ids)} stages, "
            f"{len(self._owners)} evaluations"
        )

    # ---- queries ----

    def resolve_container(self, item_id: Optional[str]) -> Optional[str]:
        """
        Resolve a drag source or target to a stage id.

        Args:
            item_id: Stage id or evaluation id

        Returns:
            The stage id itself if item_id names a stage, otherwise the
            id of the stage holding that evaluation; None if unknown
        """
        if item_id is None:
            return None
        if item_id in self._stage_ids:
            return item_id
        return self._owners.get(item_id)

    def is_stage(self, item_id: str) -> bool:
        return item_id in self._stage_ids

    def owner_of(self, evaluation_id: str) -> Optional[str]:
        """Owning stage of an evaluation; stage ids are not resolved."""
        return self._owners.get(evaluation_id)

    @property
    def stage_ids(self) -> Set[str]:
        return set(self._stage_ids)

    def items(self) -> Dict[str, str]:
        """Copy of all evaluation id -> stage id entries."""
        return dict(self._owners)

    def __contains__(self, evaluation_id: object) -> bool:
        return evaluation_id in self._owners

    def __len__(self) -> int:
        return len(self._owners)

    # ---- incremental updates ----

    def place(self, evaluation_id: str, stage_id: str) -> None:
        """Record that an evaluation now lives in stage_id (add or move)."""
        if stage_id not in self._stage_ids:
            raise KeyError(f"Unknown stage: {stage_id}")
        self._owners[evaluation_id] = stage_id

    def discard(self, evaluation_id: str) -> Optional[str]:
        """Forget an evaluation; returns its former stage id."""
        return self._owners.pop(evaluation_id, None)
