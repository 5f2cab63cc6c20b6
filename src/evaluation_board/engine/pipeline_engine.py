"""
Pipeline Engine - Owner of the Board Arrangement.

The PipelineEngine holds the only mutable copy of a board and exposes
the operations the rendering layer and the persistence collaborator may
use. Callers receive frozen Pipeline snapshots and never touch the stage
lists directly.

Gesture flow:
    on_drag_start -> on_drag_over* -> on_drag_end (or on_drag_cancel)

Every cross-stage hover relocates the card to the tail of the hovered
stage; fine positioning inside a stage is resolved at drop time by
reorder. Unknown ids are no-ops, never errors.
"""

from __future__ import annotations

import logging
import uuid
from datetime import timedelta
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import ValidationError as PydanticValidationError

from evaluation_board.adapters.clock import SystemClock
from evaluation_board.config.models import BoardConfig
from evaluation_board.domain.entities import (
    Evaluation,
    EvaluationStatus,
    Pipeline,
    Stage,
)
from evaluation_board.domain.value_objects import (
    BoardMetrics,
    CardIndicators,
    DragOutcome,
    DragResult,
)
from evaluation_board.engine import metrics
from evaluation_board.engine.drag_session import DragSession, DragState
from evaluation_board.engine.invariants import InvariantViolation, check_ownership
from evaluation_board.engine.placement_index import PlacementIndex
from evaluation_board.interfaces.audit_logger import AuditLogger, MetricsCollector
from evaluation_board.interfaces.change_listener import ChangeListener
from evaluation_board.interfaces.clock import Clock
from evaluation_board.validation.pipeline_validator import (
    PipelineValidator,
    ValidationError,
)

logger = logging.getLogger(__name__)


class PipelineEngine:
    """Validates and applies board mutations; derives metrics from snapshots."""

    def __init__(
        self,
        pipeline: Pipeline,
        config: Optional[BoardConfig] = None,
        audit_logger: Optional[AuditLogger] = None,
        metrics_collector: Optional[MetricsCollector] = None,
        clock: Optional[Clock] = None,
        validator: Optional[PipelineValidator] = None,
        listeners: Optional[Sequence[ChangeListener]] = None,
    ) -> None:
        """
        Take ownership of a provisioned board.

        Args:
            pipeline: Board to manage (validated before use)
            config: Board configuration (defaults if omitted)
            audit_logger: For the audit trail (optional)
            metrics_collector: For operation counters (optional)
            clock: Source of "now" (UTC system clock by default)
            validator: Board and input validator
            listeners: Receivers of committed changes

        Raises:
            ValidationError: If the board is malformed
        """
        self.config = config or BoardConfig()
        self.audit_logger = audit_logger
        self.metrics_collector = metrics_collector
        self.clock: Clock = clock or SystemClock()
        self.validator = validator or PipelineValidator()
        self._listeners: List[ChangeListener] = list(listeners or [])

        self.validator.validate(pipeline)

        self._pipeline_id = pipeline.id
        self._pipeline_name = pipeline.name
        ordered = sorted(pipeline.stages, key=lambda s: s.order)
        # Stage headers only; membership lives in _columns
        self._stages: List[Stage] = [
            s.model_copy(update={"evaluations": ()}) for s in ordered
        ]
        self._columns: Dict[str, List[Evaluation]] = {
            s.id: list(s.evaluations) for s in ordered
        }
        self._index = PlacementIndex.build(self._columns)
        self._session = DragSession()
        self._snapshot: Optional[Pipeline] = None

        logger.info(
            f"Engine provisioned board {pipeline.id}: {len(self._stages)} stages, "
            f"{len(self._index)} evaluations"
        )

    # =========================================================================
    # Read-only views
    # =========================================================================

    @property
    def pipeline_id(self) -> str:
        return self._pipeline_id

    @property
    def placement_index(self) -> PlacementIndex:
        return self._index

    def snapshot(self) -> Pipeline:
        """
        Frozen view of the current board.

        The same object is returned until the next mutation, so callers
        can compare snapshots by identity to detect changes.
        """
        if self._snapshot is None:
            self._snapshot = Pipeline(
                id=self._pipeline_id,
                name=self._pipeline_name,
                stages=tuple(
                    stage.model_copy(
                        update={"evaluations": tuple(self._columns[stage.id])}
                    )
                    for stage in self._stages
                ),
            )
        return self._snapshot

    def find_evaluation(self, evaluation_id: str) -> Optional[Evaluation]:
        location = self._locate(evaluation_id)
        if location is None:
            return None
        stage_id, position = location
        return self._columns[stage_id][position]

    def stage_of(self, evaluation_id: str) -> Optional[Stage]:
        """Stage (from the current snapshot) holding an evaluation."""
        stage_id = self._index.owner_of(evaluation_id)
        if stage_id is None:
            return None
        return self.snapshot().get_stage(stage_id)

    def resolve_container(self, item_id: Optional[str]) -> Optional[str]:
        return self._index.resolve_container(item_id)

    @property
    def drag_state(self) -> DragState:
        return self._session.state

    @property
    def active_id(self) -> Optional[str]:
        return self._session.active_id

    @property
    def dragged_evaluation(self) -> Optional[Evaluation]:
        """Pre-drag copy of the card being dragged, for overlay rendering."""
        return self._session.dragged

    def add_listener(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    # =========================================================================
    # Derived metrics
    # =========================================================================

    def count_by_status(self, status: Union[EvaluationStatus, str]) -> int:
        return metrics.count_by_status(self.snapshot(), EvaluationStatus(status))

    def overdue_count(self) -> int:
        return metrics.overdue_count(self.snapshot(), self.clock.today())

    def board_metrics(self) -> BoardMetrics:
        return metrics.board_metrics(self.snapshot(), self.clock.today())

    def card_indicators(self, evaluation_id: str) -> Optional[CardIndicators]:
        evaluation = self.find_evaluation(evaluation_id)
        if evaluation is None:
            return None
        return metrics.card_indicators(evaluation, self.clock.now())

    # =========================================================================
    # Move / reorder
    # =========================================================================

    def relocate(self, evaluation_id: str, target_container_id: Optional[str]) -> bool:
        """
        Move an evaluation to the tail of another stage.

        Args:
            evaluation_id: Card to move
            target_container_id: Stage id, or id of a card in the target stage

        Returns:
            True if the card moved; False for unresolved ids or same stage
        """
        source = self._index.owner_of(evaluation_id)
        target = self._index.resolve_container(target_container_id)
        if source is None or target is None:
            logger.debug(
                f"relocate ignored: unresolved {evaluation_id} -> {target_container_id}"
            )
            return False
        if source == target:
            return False

        column = self._columns[source]
        evaluation = column.pop(self._position(column, evaluation_id))
        moved = evaluation.model_copy(
            update={"stage_id": target, "last_updated": self.clock.now()}
        )
        destination = self._columns[target]
        destination.append(moved)
        self._index.place(evaluation_id, target)
        self._commit()

        new_index = len(destination) - 1
        self._count("relocations_total")
        self._audit(
            "relocate",
            evaluation_id,
            {"from_stage": source, "to_stage": target, "index": new_index},
        )
        self._notify("evaluation_moved", moved, source, new_index)
        return True

    def reorder(self, evaluation_id: str, reference_id: Optional[str]) -> bool:
        """
        Move an evaluation to the position of another card in its stage.

        Uses move-element semantics: the card is removed, then inserted at
        the reference card's former index. Everything else keeps its
        relative order.

        Args:
            evaluation_id: Card to move
            reference_id: Card whose position it takes

        Returns:
            True if the order changed
        """
        stage_id = self._index.owner_of(evaluation_id)
        if stage_id is None or reference_id is None:
            return False
        if self._index.owner_of(reference_id) != stage_id:
            logger.debug(
                f"reorder ignored: {reference_id} is not in stage {stage_id}"
            )
            return False

        column = self._columns[stage_id]
        old_index = self._position(column, evaluation_id)
        new_index = self._position(column, reference_id)
        if old_index == new_index:
            return False

        column.insert(new_index, column.pop(old_index))
        self._commit()

        self._count("reorders_total")
        self._audit(
            "reorder",
            evaluation_id,
            {"stage": stage_id, "from_index": old_index, "to_index": new_index},
        )
        self._notify("evaluation_moved", column[new_index], stage_id, new_index)
        return True

    # =========================================================================
    # Gesture events
    # =========================================================================

    def on_drag_start(self, evaluation_id: str) -> bool:
        """
        Begin dragging a card (IDLE -> DRAGGING).

        A start while another drag is in progress ends the old gesture as
        discarded first.

        Returns:
            True if a session started; False for an unknown card
        """
        if self._session.is_dragging:
            self._anomaly(
                "Drag started while another drag was in progress",
                "WARNING",
                {"previous": self._session.active_id, "next": evaluation_id},
            )
            self._finish_session(DragOutcome.DISCARDED)

        location = self._locate(evaluation_id)
        if location is None:
            logger.debug(f"drag start ignored: unknown evaluation {evaluation_id}")
            return False

        stage_id, position = location
        correlation_id = str(uuid.uuid4())
        if self.audit_logger:
            self.audit_logger.set_correlation_id(correlation_id)
        self._session.start(self._columns[stage_id][position], position, correlation_id)
        if self.audit_logger:
            self.audit_logger.log_gesture(
                "start", evaluation_id, {"stage": stage_id, "index": position}
            )
        return True

    def on_drag_over(
        self, evaluation_id: str, hovered_container_id: Optional[str]
    ) -> bool:
        """
        Pointer crossed into another container while dragging.

        Returns:
            True if the card was relocated
        """
        if not self._session.matches(evaluation_id):
            return False
        if not self.relocate(evaluation_id, hovered_container_id):
            return False
        self._session.record_crossing()
        return True

    def on_drag_end(
        self,
        evaluation_id: str,
        final_container_id: Optional[str],
        reference_id: Optional[str] = None,
    ) -> DragResult:
        """
        Finish the gesture (DRAGGING -> IDLE).

        Args:
            evaluation_id: Card being dragged
            final_container_id: Drop target (stage or card); None when
                released outside every column
            reference_id: Card to take the position of; defaults to
                final_container_id

        Returns:
            DragResult describing what the gesture did
        """
        if not self._session.matches(evaluation_id):
            return DragResult(outcome=DragOutcome.IGNORED, evaluation_id=evaluation_id)

        target = self._index.resolve_container(final_container_id)
        if target is None:
            # Last hover placement stands; no revert to the origin stage.
            return self._finish_session(DragOutcome.DISCARDED)

        # A stage no hover reached keeps the card where the hovers left it.
        if self._index.owner_of(evaluation_id) == target:
            reference = reference_id if reference_id is not None else final_container_id
            self.reorder(evaluation_id, reference)

        stage_id, position = self._locate(evaluation_id)
        if stage_id != self._session.origin_stage_id:
            outcome = DragOutcome.MOVED
        elif position != self._session.origin_index:
            outcome = DragOutcome.REORDERED
        else:
            outcome = DragOutcome.UNCHANGED
        return self._finish_session(outcome)

    def on_drag_cancel(self) -> DragResult:
        """
        Abort the gesture and restore the pre-drag placement exactly.

        The card goes back to its origin stage and index with its
        pre-drag field values (including last_updated).
        """
        if not self._session.is_dragging:
            return DragResult(outcome=DragOutcome.IGNORED)

        original = self._session.dragged
        origin_stage = self._session.origin_stage_id
        origin_index = self._session.origin_index
        current_stage, position = self._locate(original.id)
        column = self._columns[current_stage]

        if (
            current_stage != origin_stage
            or position != origin_index
            or column[position] != original
        ):
            column.pop(position)
            destination = self._columns[origin_stage]
            destination.insert(min(origin_index, len(destination)), original)
            self._index.place(original.id, origin_stage)
            self._commit()
            self._audit(
                "restore",
                original.id,
                {"from_stage": current_stage, "to_stage": origin_stage, "index": origin_index},
            )
            self._notify("evaluation_moved", original, current_stage, origin_index)

        return self._finish_session(DragOutcome.CANCELLED)

    # =========================================================================
    # Persistence-facing operations
    # =========================================================================

    def add(
        self, stage_id: str, fields: Optional[Mapping[str, Any]] = None
    ) -> Optional[Evaluation]:
        """
        Create an evaluation at the tail of a stage.

        Args:
            stage_id: Target stage
            fields: Field values; missing ones come from config defaults.
                An explicit unused id may be given.

        Returns:
            The new evaluation, or None for an unknown stage

        Raises:
            ValidationError: For invalid fields or an id already in use
        """
        if not self._index.is_stage(stage_id):
            logger.debug(f"add ignored: unknown stage {stage_id}")
            return None

        values = self.validator.validate_new_fields(fields or {})
        evaluation_id = values.pop("id", None) or self._new_id()
        if evaluation_id in self._index or self._index.is_stage(evaluation_id):
            raise ValidationError(
                f"Evaluation id already in use: {evaluation_id}", field="id"
            )

        defaults = self.config.new_evaluation
        now = self.clock.now()
        data: Dict[str, Any] = {
            "course_id": f"course_{uuid.uuid4().hex[:12]}",
            "course_name": defaults.course_name,
            "instructor": defaults.instructor,
            "progress": defaults.progress,
            "due_date": now.date() + timedelta(days=defaults.due_in_days),
            "status": defaults.status,
            "priority": defaults.priority,
            **values,
            "id": evaluation_id,
            "stage_id": stage_id,
            "last_updated": now,
        }
        evaluation = self._build(data)

        self._columns[stage_id].append(evaluation)
        self._index.place(evaluation_id, stage_id)
        self._commit()

        self._count("evaluations_added_total")
        self._audit("add", evaluation_id, {"stage": stage_id})
        self._notify("evaluation_added", evaluation)
        return evaluation

    def update(
        self, evaluation_id: str, patch: Mapping[str, Any]
    ) -> Optional[Evaluation]:
        """
        Apply a field patch in place (position and stage unchanged).

        An empty patch changes nothing and does not touch last_updated.

        Returns:
            The updated evaluation, or None for an unknown id

        Raises:
            ValidationError: For engine-owned, unknown or invalid fields
        """
        location = self._locate(evaluation_id)
        if location is None:
            logger.debug(f"update ignored: unknown evaluation {evaluation_id}")
            return None

        values = self.validator.validate_patch(patch)
        stage_id, position = location
        column = self._columns[stage_id]
        if not values:
            return column[position]

        updated = self._build(
            {
                **column[position].model_dump(),
                **values,
                "last_updated": self.clock.now(),
            }
        )
        column[position] = updated
        self._commit()

        self._count("evaluations_updated_total")
        self._audit("update", evaluation_id, {"fields": sorted(values)})
        self._notify("evaluation_updated", updated)
        return updated

    def delete(self, evaluation_id: str) -> bool:
        """
        Remove an evaluation from its stage.

        Deleting the card being dragged ends the gesture.

        Returns:
            True if removed; False for an unknown id
        """
        location = self._locate(evaluation_id)
        if location is None:
            logger.debug(f"delete ignored: unknown evaluation {evaluation_id}")
            return False

        stage_id, position = location
        evaluation = self._columns[stage_id].pop(position)
        self._index.discard(evaluation_id)
        if self._session.matches(evaluation_id):
            self._finish_session(DragOutcome.DISCARDED)
        self._commit()

        self._count("evaluations_deleted_total")
        self._audit("delete", evaluation_id, {"stage": stage_id, "index": position})
        self._notify("evaluation_deleted", evaluation)
        return True

    # =========================================================================
    # Internals
    # =========================================================================

    def _locate(self, evaluation_id: str) -> Optional[Tuple[str, int]]:
        stage_id = self._index.owner_of(evaluation_id)
        if stage_id is None:
            return None
        return stage_id, self._position(self._columns[stage_id], evaluation_id)

    def _position(self, column: List[Evaluation], evaluation_id: str) -> int:
        for i, evaluation in enumerate(column):
            if evaluation.id == evaluation_id:
                return i
        raise InvariantViolation(
            [f"index lists {evaluation_id} but its stage list does not"]
        )

    def _new_id(self) -> str:
        prefix = self.config.new_evaluation.id_prefix
        while True:
            candidate = f"{prefix}{uuid.uuid4().hex[:12]}"
            if candidate not in self._index and not self._index.is_stage(candidate):
                return candidate

    def _build(self, data: Dict[str, Any]) -> Evaluation:
        try:
            return Evaluation.model_validate(data)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid evaluation fields: {e}") from e

    def _commit(self) -> None:
        """Drop the cached snapshot and verify ownership."""
        self._snapshot = None
        if not self.config.engine.verify_invariants:
            return
        problems = check_ownership(self._columns, self._index)
        if problems:
            self._anomaly("Ownership invariant violated", "CRITICAL", {"problems": problems})
            raise InvariantViolation(problems)

    def _finish_session(self, outcome: DragOutcome) -> DragResult:
        session = self._session
        evaluation_id = session.active_id
        location = self._locate(evaluation_id) if evaluation_id else None
        result = DragResult(
            outcome=outcome,
            evaluation_id=evaluation_id,
            origin_stage_id=session.origin_stage_id,
            final_stage_id=location[0] if location else None,
            origin_index=session.origin_index,
            final_index=location[1] if location else None,
            hover_moves=session.hover_moves,
        )

        if self.metrics_collector:
            self.metrics_collector.record_count(
                "drag_sessions_total", 1, {"outcome": outcome.value}
            )
            self.metrics_collector.record_timing(
                "drag_session_seconds", session.elapsed_seconds()
            )
        if self.audit_logger:
            phase = "cancel" if outcome == DragOutcome.CANCELLED else "end"
            self.audit_logger.log_gesture(
                phase,
                evaluation_id,
                {
                    "outcome": outcome.value,
                    "origin_stage": result.origin_stage_id,
                    "final_stage": result.final_stage_id,
                    "hover_moves": result.hover_moves,
                },
            )
            self.audit_logger.clear_correlation_id()

        session.reset()
        return result

    def _count(self, name: str) -> None:
        if self.metrics_collector:
            self.metrics_collector.record_count(name, 1, {"pipeline": self._pipeline_id})

    def _audit(self, action: str, evaluation_id: str, metadata: Dict[str, Any]) -> None:
        if self.audit_logger:
            self.audit_logger.log_board_change(action, evaluation_id, metadata)

    def _anomaly(self, message: str, severity: str, context: Dict[str, Any]) -> None:
        logger.warning(f"{message}: {context}")
        if self.audit_logger:
            self.audit_logger.log_anomaly(message, severity, context)

    def _notify(self, event: str, evaluation: Evaluation, *args: Any) -> None:
        """Deliver a committed change; a failing listener does not undo it."""
        for listener in self._listeners:
            try:
                getattr(listener, event)(evaluation, *args)
            except Exception as e:
                logger.exception(f"Change listener failed on {event} for {evaluation.id}")
                if self.audit_logger:
                    self.audit_logger.log_anomaly(
                        f"Change listener failed: {e}",
                        "WARNING",
                        {"listener_event": event, "evaluation_id": evaluation.id},
                    )
