"""
Evaluation Board - Course Evaluation Pipeline Engine.

An in-memory ordered-collection engine behind a drag-and-drop board.
Course evaluations move through ordered stages (Planning, Survey
Creation, Data Collection, Analysis, Completed); the engine applies
relocations and reorders while keeping every evaluation in exactly one
stage, and derives active/completed/overdue counters from the current
arrangement.

Architecture:
    - Hexagonal Architecture (Ports & Adapters)
    - Dependency Injection for testability
    - Immutable snapshots for rendering, engine-private mutable state
    - Configuration-driven behavior via YAML

Main Components:
    - domain: Core entities (Evaluation, Stage, Pipeline) and value objects
    - engine: PipelineEngine, PlacementIndex, DragSession, metrics
    - interfaces: Abstract protocols for all collaborators
    - adapters: Demo provider, console logger, clocks
    - config: Configuration models and loaders
    - registry: Selectable boards

Example:
    >>> from evaluation_board import create_engine
    >>> engine = create_engine("pipeline_1")
    >>> engine.on_drag_start("evaluation_1")
    True
    >>> engine.on_drag_over("evaluation_1", "stage_2")
    True
    >>> engine.on_drag_end("evaluation_1", "stage_2").outcome
    <DragOutcome.MOVED: 'moved'>

"""

import logging
from pathlib import Path
from typing import Any, Optional, Union

__version__ = "0.4.0"


def configure_logging(
    level: int = logging.INFO,
    format: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
) -> None:
    """
    Configure logging for the evaluation board.

    Call this at application startup to see log messages.
    By default, only WARNING and above are visible.

    Args:
        level: Logging level (default: INFO)
        format: Log message format

    Example:
        >>> import evaluation_board
        >>> evaluation_board.configure_logging(logging.DEBUG)
    """
    logging.basicConfig(
        level=level,
        format=format,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("evaluation_board").setLevel(level)


def create_engine(
    pipeline_id: str = "pipeline_1",
    config_path: Optional[Union[str, Path]] = None,
    profile: Optional[str] = None,
    **engine_kwargs: Any,
):
    """
    Build an engine for one of the demo boards.

    Args:
        pipeline_id: Board to load
        config_path: Optional YAML config (defaults used if omitted)
        profile: Optional profile merged over the config file
        **engine_kwargs: Passed to PipelineEngine (audit_logger, clock...)

    Returns:
        PipelineEngine owning the selected board
    """
    from evaluation_board.adapters.demo_provider import DemoPipelineProvider
    from evaluation_board.config.loader import ConfigLoader
    from evaluation_board.config.models import BoardConfig
    from evaluation_board.registry.pipeline_registry import PipelineRegistry

    if config_path is not None:
        config = ConfigLoader().load(config_path, profile)
    else:
        config = BoardConfig()

    registry = PipelineRegistry(config)
    registry.register_provider(DemoPipelineProvider(config.layout))
    return registry.create_engine(pipeline_id, **engine_kwargs)
