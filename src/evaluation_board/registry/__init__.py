"""
Registry Module - Selectable Boards.

This module provides a registry of boards a user can choose between,
and builds the engine for the chosen one.

Components:
    - PipelineRegistry: Central registry of board factories
    - PipelineInfo: Metadata about registered boards
"""

from evaluation_board.registry.pipeline_registry import (
    PipelineInfo,
    PipelineRegistry,
    empty_pipeline,
)

__all__ = [
    "PipelineInfo",
    "PipelineRegistry",
    "empty_pipeline",
]
