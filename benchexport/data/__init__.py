"""
Data module for the benchmark exporters.

Contains the session and record models, the canonical table schemas, and the
pure conversions between them.
"""

from benchexport.data.schemas import (
    BenchmarkReport,
    BenchmarkSummary,
    HostEnvironmentInfo,
    Percentiles,
    ReportRecord,
    Statistics,
    SummaryRecord,
)
from benchexport.data.table_schema import (
    CANONICAL_SCHEMAS,
    REPORT_SCHEMA,
    SUMMARY_SCHEMA,
    FieldSchema,
    FieldType,
    TableRole,
)
from benchexport.data.batching import batched
from benchexport.data.rows import (
    build_report_record,
    build_summary_record,
    full_method_name,
    report_to_row,
    summary_to_row,
)

__all__ = [
    # Input models
    "BenchmarkReport",
    "BenchmarkSummary",
    "HostEnvironmentInfo",
    "Percentiles",
    "Statistics",
    # Records
    "ReportRecord",
    "SummaryRecord",
    # Schemas
    "CANONICAL_SCHEMAS",
    "REPORT_SCHEMA",
    "SUMMARY_SCHEMA",
    "FieldSchema",
    "FieldType",
    "TableRole",
    # Conversions
    "batched",
    "build_report_record",
    "build_summary_record",
    "full_method_name",
    "report_to_row",
    "summary_to_row",
]
