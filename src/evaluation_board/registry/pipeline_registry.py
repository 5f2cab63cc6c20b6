"""
Pipeline Registry - Selectable Boards.

A user picks one board (Standard, Mid-Semester Review, Final
Assessment...) from a list. The registry maps board ids to factories
that provision a Pipeline, and builds a ready PipelineEngine for the
selected one.

Usage:
    registry = PipelineRegistry(config)
    registry.register_provider(DemoPipelineProvider(config.layout))
    registry.register_template("pipeline_4", "Summer Term Pipeline")

    engine = registry.create_engine("pipeline_1")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from threading import RLock
from typing import Any, Callable, Dict, List, Optional

from evaluation_board.config.models import BoardConfig, BoardLayoutConfig
from evaluation_board.domain.entities import Pipeline, Stage
from evaluation_board.engine.pipeline_engine import PipelineEngine
from evaluation_board.interfaces.pipeline_provider import PipelineProvider

logger = logging.getLogger(__name__)

PipelineFactory = Callable[[BoardLayoutConfig], Pipeline]


@dataclass
class PipelineInfo:
    """Metadata about a registered board."""

    pipeline_id: str
    name: str
    version: str
    factory: PipelineFactory
    description: str = ""
    tags: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "pipeline_id": self.pipeline_id,
            "name": self.name,
            "version": self.version,
            "description": self.description,
            "tags": self.tags,
        }


def empty_pipeline(pipeline_id: str, name: str, layout: BoardLayoutConfig) -> Pipeline:
    """Board with the layout's stages and no evaluations."""
    return Pipeline(
        id=pipeline_id,
        name=name,
        stages=tuple(
            Stage(id=t.id, name=t.name, color=t.color, order=t.order)
            for t in sorted(layout.stages, key=lambda t: t.order)
        ),
    )


class PipelineRegistry:
    """
    Thread-safe registry of selectable boards.

    Supports:
        - Factory registration per board id
        - Empty boards built from the configured stage layout
        - Bulk registration of every board a provider serves
        - Engine construction for the selected board
    """

    def __init__(self, config: Optional[BoardConfig] = None) -> None:
        self.config = config or BoardConfig()
        self._pipelines: Dict[str, PipelineInfo] = {}
        self._order: List[str] = []
        self._lock = RLock()

    def register(
        self,
        pipeline_id: str,
        name: str,
        factory: PipelineFactory,
        version: str = "1.0.0",
        description: str = "",
        tags: Optional[List[str]] = None,
    ) -> None:
        """
        Register a board factory.

        Args:
            pipeline_id: Unique board id
            name: Display name for the board selector
            factory: Called with the layout config, returns the Pipeline
            version: Version string for the board definition
            description: Optional description
            tags: Optional tags for categorization

        Raises:
            ValueError: If the id is already registered
        """
        with self._lock:
            if pipeline_id in self._pipelines:
                raise ValueError(
                    f"Pipeline '{pipeline_id}' is already registered. "
                    f"Use unregister() first."
                )
            self._pipelines[pipeline_id] = PipelineInfo(
                pipeline_id=pipeline_id,
                name=name,
                version=version,
                factory=factory,
                description=description,
                tags=tags or [],
            )
            self._order.append(pipeline_id)
            logger.info(f"Registered pipeline: {pipeline_id} v{version}")

    def register_template(
        self,
        pipeline_id: str,
        name: str,
        version: str = "1.0.0",
        description: str = "",
    ) -> None:
        """Register an empty board using the configured stage layout."""
        self.register(
            pipeline_id,
            name,
            lambda layout: empty_pipeline(pipeline_id, name, layout),
            version=version,
            description=description,
            tags=["template"],
        )

    def register_provider(self, provider: PipelineProvider, version: str = "1.0.0") -> int:
        """
        Register every board a provider can load.

        Returns:
            Number of boards registered
        """
        count = 0
        for pipeline_id, name in provider.list_pipelines():
            self.register(
                pipeline_id,
                name,
                lambda layout, pid=pipeline_id: provider.load_pipeline(pid),
                version=version,
                tags=["provider", type(provider).__name__],
            )
            count += 1
        return count

    def unregister(self, pipeline_id: str) -> bool:
        """
        Unregister a board.

        Returns:
            True if removed, False if not found
        """
        with self._lock:
            if pipeline_id not in self._pipelines:
                logger.warning(f"Cannot unregister: pipeline '{pipeline_id}' not found")
                return False
            del self._pipelines[pipeline_id]
            self._order.remove(pipeline_id)
            logger.info(f"Unregistered pipeline: {pipeline_id}")
            return True

    def get_info(self, pipeline_id: str) -> Optional[PipelineInfo]:
        with self._lock:
            return self._pipelines.get(pipeline_id)

    def list_all(self) -> List[PipelineInfo]:
        """Registered boards in registration order."""
        with self._lock:
            return [self._pipelines[pid] for pid in self._order]

    def build(self, pipeline_id: str) -> Pipeline:
        """
        Provision a board.

        Raises:
            KeyError: If the id is not registered
        """
        with self._lock:
            info = self._pipelines.get(pipeline_id)
        if info is None:
            raise KeyError(f"Unknown pipeline: {pipeline_id}")
        return info.factory(self.config.layout)

    def create_engine(self, pipeline_id: str, **engine_kwargs: Any) -> PipelineEngine:
        """
        Provision a board and hand it to a new engine.

        Args:
            pipeline_id: Board to select
            **engine_kwargs: Passed to PipelineEngine (audit_logger, clock...)
        """
        pipeline = self.build(pipeline_id)
        engine_kwargs.setdefault("config", self.config)
        return PipelineEngine(pipeline, **engine_kwargs)

    @property
    def registered_count(self) -> int:
        with self._lock:
            return len(self._pipelines)

    def clear(self) -> None:
        """Remove all registered boards."""
        with self._lock:
            self._pipelines.clear()
            self._order.clear()
            logger.info("Cleared all pipelines from registry")
