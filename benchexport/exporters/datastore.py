"""
Datastore exporter: summary entities with report entities as their children.
"""

from typing import Any

from benchexport.data.datastore.config import DatastoreExportConfig
from benchexport.data.datastore.writer import DatastoreBatchWriter
from benchexport.exporters.base import BaseExporter


class DatastoreExporter(BaseExporter):
    """Exports benchmark sessions to Cloud Datastore. Datastore is schemaless, so
    nothing is reconciled; the client is created on first export."""

    name = "DatastoreExporter"

    def __init__(self, config: DatastoreExportConfig, client: Any = None):
        super().__init__()
        self.config = config
        self._client = client
        self._datastore_module: Any = None

    def _get_datastore(self) -> Any:
        """Lazy import of Datastore module."""
        if self._datastore_module is None:
            try:
                from google.cloud import datastore
                self._datastore_module = datastore
            except ImportError:
                raise ImportError(
                    "google-cloud-datastore is required for Datastore export. "
                    "Install it with: pip install google-cloud-datastore"
                )
        return self._datastore_module

    @property
    def client(self) -> Any:
        """Get or create Datastore client."""
        if self._client is None:
            datastore = self._get_datastore()
            self._client = datastore.Client(
                project=self.config.project_id,
                namespace=self.config.namespace or None,
                credentials=self.config.credentials,
            )
        return self._client

    def _initialize(self) -> DatastoreBatchWriter:
        return DatastoreBatchWriter(
            self.client,
            self.config.commit_id,
            single_summary=self.config.single_summary,
            summary_kind=self.config.summary_kind,
            report_kind=self.config.report_kind,
        )
