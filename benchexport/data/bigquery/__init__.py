"""
BigQuery export tables.

Handles:
- Export configuration (project, dataset, table names)
- Get-or-create of the dataset and tables with schema validation
- Concurrent summary and report inserts, reports in bounded batches
"""

from benchexport.data.bigquery.config import BigQueryExportConfig
from benchexport.data.bigquery.reconciler import SchemaReconciler, validate_schema
from benchexport.data.bigquery.writer import (
    BIGQUERY_INSERT_BATCH_SIZE,
    BigQueryBatchWriter,
    qualified_table_id,
)

__all__ = [
    "BigQueryExportConfig",
    "SchemaReconciler",
    "validate_schema",
    "BIGQUERY_INSERT_BATCH_SIZE",
    "BigQueryBatchWriter",
    "qualified_table_id",
]
