"""
Ownership Invariant Checks.

Every evaluation is a member of exactly one stage list, its stage_id
names that stage, and the placement index agrees. A violation means an
engine bug, never bad user input, so it is raised as an AssertionError
subclass.
"""

from __future__ import annotations

from collections import Counter
from typing import List, Mapping, Sequence

from evaluation_board.domain.entities import Evaluation
from evaluation_board.engine.placement_index import PlacementIndex


class InvariantViolation(AssertionError):
    """Raised when the board's ownership invariant does not hold."""

    def __init__(self, problems: List[str]) -> None:
        super().__init__("; ".join(problems))
        self.problems = problems


def check_ownership(
    columns: Mapping[str, Sequence[Evaluation]],
    index: PlacementIndex,
) -> List[str]:
    """
    Collect ownership problems.

    Args:
        columns: Stage id -> ordered evaluations
        index: Placement index that should mirror the columns

    Returns:
        Human-readable problems; empty when the invariant holds
    """
    problems: List[str] = []
    occurrences: Counter = Counter()

    for stage_id, evaluations in columns.items():
        for evaluation in evaluations:
            occurrences[evaluation.id] += 1
            if evaluation.stage_id != stage_id:
                problems.append(
                    f"{evaluation.id} has stage_id {evaluation.stage_id} "
                    f"but is listed in {stage_id}"
                )
            owner = index.owner_of(evaluation.id)
            if owner != stage_id:
                problems.append(
                    f"index places {evaluation.id} in {owner}, list has it in {stage_id}"
                )

    for evaluation_id, count in occurrences.items():
        if count > 1:
            problems.append(f"{evaluation_id} appears in {count} stage lists")

    for evaluation_id in index.items():
        if evaluation_id not in occurrences:
            problems.append(f"index holds {evaluation_id} which no stage lists")

    if index.stage_ids != set(columns):
        problems.append("index stage ids differ from board stages")

    return problems

