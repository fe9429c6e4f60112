"""
BigQuery exporter: reconciles the export tables once, then writes each session.
"""

import logging
from typing import Any

from benchexport.data.bigquery.config import BigQueryExportConfig
from benchexport.data.bigquery.reconciler import SchemaReconciler
from benchexport.data.bigquery.writer import BigQueryBatchWriter
from benchexport.data.table_schema import TableRole
from benchexport.exporters.base import BaseExporter


logger = logging.getLogger(__name__)


class BigQueryExporter(BaseExporter):
    """
    Exports benchmark sessions to BigQuery summary and report tables.

    On first export the dataset and both tables are created if needed; existing
    tables are validated against the canonical schema.
    """

    name = "BigQueryExporter"

    def __init__(self, config: BigQueryExportConfig, client: Any = None):
        """
        Args:
            config: BigQuery export configuration
            client: Optional google.cloud.bigquery.Client (created lazily otherwise)
        """
        super().__init__()
        self.config = config
        self._client = client
        self._bigquery_module: Any = None
        self.reconciler: SchemaReconciler | None = None

    def _get_bigquery(self) -> Any:
        """Lazy import of BigQuery module."""
        if self._bigquery_module is None:
            try:
                from google.cloud import bigquery
                self._bigquery_module = bigquery
            except ImportError:
                raise ImportError(
                    "google-cloud-bigquery is required for BigQuery export. "
                    "Install it with: pip install google-cloud-bigquery"
                )
        return self._bigquery_module

    @property
    def client(self) -> Any:
        """Get or create BigQuery client."""
        if self._client is None:
            bigquery = self._get_bigquery()
            self._client = bigquery.Client(
                project=self.config.project_id,
                credentials=self.config.credentials,
            )
        return self._client

    def _initialize(self) -> BigQueryBatchWriter:
        reconciler = SchemaReconciler(
            self.client,
            self.config.dataset_ref,
            location=self.config.location,
        )
        reconciler.ensure_dataset()
        tables = reconciler.ensure_tables({
            TableRole.SUMMARY: self.config.get_full_table_name(self.config.summary_table_id),
            TableRole.REPORT: self.config.get_full_table_name(self.config.report_table_id),
        })
        self.reconciler = reconciler
        logger.info(f"BigQuery export tables ready in {self.config.dataset_ref}")
        return BigQueryBatchWriter(
            self.client,
            tables[TableRole.SUMMARY],
            tables[TableRole.REPORT],
            self.config.commit_id,
            single_summary=self.config.single_summary,
        )
