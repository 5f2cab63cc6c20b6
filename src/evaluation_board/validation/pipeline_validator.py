"""
Pipeline Validator - Validate Boards and Caller Input.

Validates:
    - Provisioned boards before the engine takes ownership of them
    - Field patches passed to update
    - Field values passed to add

Design Notes:
    - Fail-fast principle: a bad board is rejected whole
    - All problems collected into one message
    - Field-level checks (ranges, enums, dates) are left to Pydantic
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Dict, FrozenSet, List, Mapping, Optional

from evaluation_board.domain.entities import Evaluation, Pipeline

logger = logging.getLogger(__name__)

# Fields only the engine may set
ENGINE_OWNED_FIELDS: FrozenSet[str] = frozenset({"id", "stage_id", "last_updated"})

PATCHABLE_FIELDS: FrozenSet[str] = frozenset(
    set(Evaluation.model_fields) - ENGINE_OWNED_FIELDS
)


class ValidationError(Exception):
    """Raised when a board or caller input fails validation."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


class PipelineValidator:
    """
    Validates boards and evaluation field input.

    Validates:
        - Stage ids and orders are unique
        - Evaluation ids are unique across the board
        - Evaluation stage_id matches the containing stage
        - Stage ids and evaluation ids don't collide
    """

    def validate(self, pipeline: Pipeline) -> None:
        """
        Validate a provisioned board.

        Args:
            pipeline: Board to validate

        Raises:
            ValidationError: If validation fails
        """
        errors: List[str] = []

        stage_ids = Counter(s.id for s in pipeline.stages)
        for stage_id, count in stage_ids.items():
            if count > 1:
                errors.append(f"stage id {stage_id} used {count} times")

        orders = Counter(s.order for s in pipeline.stages)
        for order, count in orders.items():
            if count > 1:
                errors.append(f"stage order {order} used {count} times")

        evaluation_ids: Counter = Counter()
        for stage in pipeline.stages:
            for evaluation in stage.evaluations:
                evaluation_ids[evaluation.id] += 1
                if evaluation.stage_id != stage.id:
                    errors.append(
                        f"evaluation {evaluation.id} has stage_id "
                        f"{evaluation.stage_id} but is listed in {stage.id}"
                    )

        for evaluation_id, count in evaluation_ids.items():
            if count > 1:
                errors.append(f"evaluation id {evaluation_id} used {count} times")
            if evaluation_id in stage_ids:
                errors.append(f"evaluation id {evaluation_id} collides with a stage id")

        if errors:
            error_message = "; ".join(errors)
            logger.error(f"Pipeline validation failed: {error_message}")
            raise ValidationError(error_message, field="stages")

        logger.debug(
            f"Pipeline validated: {pipeline.id} "
            f"({len(pipeline.stages)} stages, {sum(evaluation_ids.values())} evaluations)"
        )

    def validate_patch(self, patch: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Validate the keys of an update patch.

        Args:
            patch: Field name -> new value

        Returns:
            The patch as a plain dict

        Raises:
            ValidationError: On engine-owned or unknown fields
        """
        owned = sorted(set(patch) & ENGINE_OWNED_FIELDS)
        if owned:
            raise ValidationError(
                f"Fields set by the engine cannot be patched: {', '.join(owned)}",
                field=owned[0],
            )
        unknown = sorted(set(patch) - PATCHABLE_FIELDS)
        if unknown:
            raise ValidationError(
                f"Unknown evaluation fields: {', '.join(unknown)}",
                field=unknown[0],
            )
        return dict(patch)

    def validate_new_fields(self, fields: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Validate the keys passed to add.

        An explicit id is allowed; stage_id and last_updated are not.

        Raises:
            ValidationError: On engine-owned or unknown fields
        """
        rest = {k: v for k, v in fields.items() if k != "id"}
        cleaned = self.validate_patch(rest)
        if "id" in fields:
            if not isinstance(fields["id"], str) or not fields["id"]:
                raise ValidationError("id must be a non-empty string", field="id")
            cleaned["id"] = fields["id"]
        return cleaned
