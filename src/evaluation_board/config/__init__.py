"""
Configuration Package - Models and Loaders.

This package handles all configuration aspects of the evaluation board:
    - Pydantic models for type-safe configuration
    - YAML loader with validation
    - Support for configuration profiles

Configuration Structure:
    - BoardConfig: Root configuration object
    - BoardLayoutConfig: Stage templates for new boards
    - NewEvaluationDefaults: Field defaults for added evaluations
    - EngineConfig: Engine behavior switches
    - ObservabilityConfig: Structured logging settings
"""

from evaluation_board.config.loader import ConfigLoader, load_config
from evaluation_board.config.models import (
    BoardConfig,
    BoardLayoutConfig,
    EngineConfig,
    NewEvaluationDefaults,
    ObservabilityConfig,
    StageTemplate,
)

__all__ = [
    "ConfigLoader",
    "load_config",
    "BoardConfig",
    "BoardLayoutConfig",
    "EngineConfig",
    "NewEvaluationDefaults",
    "ObservabilityConfig",
    "StageTemplate",
]
