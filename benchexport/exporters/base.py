"""
Base exporter contract and lazy one-time initialization.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

from benchexport.data.schemas import BenchmarkSummary
from benchexport.exceptions import ExporterStateError


logger = logging.getLogger(__name__)


class ExporterState(str, Enum):
    """Initialization state of an exporter."""

    NOT_INITIALIZED = "not_initialized"
    INITIALIZING = "initializing"
    READY = "ready"


class BaseExporter(ABC):
    """
    Exporter invoked once per benchmark session by the host tool.

    Remote setup (clients, tables) happens on the first export, not at
    construction. One export in flight per instance is assumed.
    """

    name = "exporter"

    def __init__(self) -> None:
        self._state = ExporterState.NOT_INITIALIZED
        self._writer: Any = None

    @property
    def state(self) -> ExporterState:
        return self._state

    def _ensure_ready(self) -> Any:
        """Run initialization once and return the writer."""
        if self._state is ExporterState.READY:
            return self._writer
        if self._state is ExporterState.INITIALIZING:
            raise ExporterStateError(
                f"{self.name} is already initializing",
                exporter=self.name,
                state=self._state.value,
            )

        self._state = ExporterState.INITIALIZING
        try:
            self._writer = self._initialize()
        except BaseException:
            self._state = ExporterState.NOT_INITIALIZED
            raise
        self._state = ExporterState.READY
        logger.debug(f"{self.name} ready")
        return self._writer

    @abstractmethod
    def _initialize(self) -> Any:
        """Create clients and remote resources; return the batch writer."""

    def export_to_files(self, summary: BenchmarkSummary) -> list[str]:
        """
        Export one benchmark session.

        Returns:
            Human-readable descriptors of where the data was written
        """
        writer = self._ensure_ready()
        return writer.write(summary)

    def export_to_log(self, summary: BenchmarkSummary, log: logging.Logger | None = None) -> None:
        """Log export is not supported; emit one diagnostic and write nothing."""
        (log or logger).error(
            f"{self.name} does not output to a logger. "
            f"Use the descriptors returned by export_to_files instead."
        )
