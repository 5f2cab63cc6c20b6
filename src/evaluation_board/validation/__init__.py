"""
Validation Package - Board and Input Validation.

This package provides validation for:
    - PipelineValidator: Validate provisioned boards and add/update input

Design Principles:
    - Fail fast on invalid input
    - Clear, actionable error messages
"""

from evaluation_board.validation.pipeline_validator import (
    ENGINE_OWNED_FIELDS,
    PATCHABLE_FIELDS,
    PipelineValidator,
    ValidationError,
)

__all__ = [
    "ENGINE_OWNED_FIELDS",
    "PATCHABLE_FIELDS",
    "PipelineValidator",
    "ValidationError",
]
