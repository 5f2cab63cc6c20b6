"""
Pipeline Provider Protocol.

Defines the abstract interface for loading a provisioned board. Boards
are seeded or loaded by an external source once per engine instance;
the engine never writes back through this interface.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Protocol, Tuple, runtime_checkable

if TYPE_CHECKING:
    from evaluation_board.domain.entities import Pipeline


@runtime_checkable
class PipelineProvider(Protocol):
    """Abstract interface for board sources."""

    def list_pipelines(self) -> List[Tuple[str, str]]:
        """
        List the boards this provider can load.

        Returns:
            (pipeline_id, name) pairs in display order
        """
        ...

    def load_pipeline(self, pipeline_id: str) -> Pipeline:
        """
        Load a provisioned board.

        Args:
            pipeline_id: Board identifier

        Returns:
            Pipeline with stages and their evaluations

        Raises:
            KeyError: If the provider has no such board
        """
        ...
