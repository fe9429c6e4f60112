"""
Module: rows

Purpose: Pure conversions from a benchmark session to exported records and rows.

Key Functions:
- build_summary_record / build_report_record: Input models to frozen records
- summary_to_row / report_to_row: BigQuery rows (column name -> value)
- summary_to_properties / report_to_properties: Datastore property bags

Architecture Notes:
- No side effects beyond reading the clock and host name when not supplied
- The parent identity is always passed explicitly
- full_method_name is derived at conversion time, never stored upstream
"""

import socket
from datetime import datetime, timezone
from typing import Any, Sequence

from benchexport.data.schemas import (
    BenchmarkReport,
    BenchmarkSummary,
    ReportRecord,
    SummaryRecord,
)
from benchexport.data.table_schema import (
    IDENTITY_FIELDS,
    REPORT_SCHEMA,
    SUMMARY_SCHEMA,
    FieldSchema,
)


METHOD_SEPARATOR = "."


def full_method_name(full_type_name: str, method_name: str) -> str:
    """Join a type's fully qualified name and a method name."""
    return f"{full_type_name}{METHOD_SEPARATOR}{method_name}"


# =============================================================================
# RECORD BUILDERS
# =============================================================================


def build_summary_record(
    summary: BenchmarkSummary,
    summary_id: str,
    commit_id: str,
    *,
    timestamp: datetime | None = None,
    host_name: str | None = None,
) -> SummaryRecord:
    """
    Build the summary record for one export.

    Args:
        summary: Benchmark session from the host tool
        summary_id: Generated identity of the summary
        commit_id: Commit the benchmarks were run against
        timestamp: Export time (defaults to now, UTC)
        host_name: Machine name (defaults to summary.host_name, then the local host)

    Returns:
        Frozen SummaryRecord
    """
    env = summary.host_environment
    return SummaryRecord(
        id=summary_id,
        commit=commit_id,
        timestamp=timestamp or datetime.now(tz=timezone.utc),
        host_name=host_name or summary.host_name or socket.gethostname(),
        os_version=env.os_version,
        processor_name=env.processor_name,
        processor_count=env.processor_count,
        runtime_version=env.runtime_version,
        architecture=env.architecture,
        jit_modules=env.jit_modules,
        sdk_version=env.sdk_version,
        tool_version=env.tool_version,
        timer_frequency=env.timer_frequency,
        timer_kind=env.timer_kind,
    )


def build_report_record(summary_id: str, report: BenchmarkReport) -> ReportRecord:
    """Build the report record for one benchmarked method under summary_id."""
    stats = report.statistics
    return ReportRecord(
        summary_id=summary_id,
        namespace=report.namespace,
        type_name=report.type_name,
        full_type_name=report.full_type_name,
        method_name=report.method_name,
        full_method_name=full_method_name(report.full_type_name, report.method_name),
        parameters=report.parameters,
        method_signature=report.method_signature,
        min=stats.min,
        max=stats.max,
        median=stats.median,
        mean=stats.mean,
        standard_deviation=stats.standard_deviation,
        standard_error=stats.standard_error,
        variance=stats.variance,
        percentile_67=stats.percentiles.p67,
        percentile_85=stats.percentiles.p85,
        percentile_95=stats.percentiles.p95,
        percentile_100=stats.percentiles.p100,
    )


# =============================================================================
# SERIALIZERS
# =============================================================================


def _record_to_dict(
    record: SummaryRecord | ReportRecord,
    fields: Sequence[FieldSchema],
    *,
    skip: frozenset[str] = frozenset(),
) -> dict[str, Any]:
    return {
        f.name: getattr(record, f.record_attribute)
        for f in fields
        if f.name not in skip
    }


def summary_to_row(
    summary: BenchmarkSummary,
    summary_id: str,
    commit_id: str,
    *,
    timestamp: datetime | None = None,
    host_name: str | None = None,
) -> dict[str, Any]:
    """Build a BigQuery summary row keyed by canonical column names."""
    record = build_summary_record(
        summary, summary_id, commit_id, timestamp=timestamp, host_name=host_name
    )
    return _record_to_dict(record, SUMMARY_SCHEMA)


def report_to_row(summary_id: str, report: BenchmarkReport) -> dict[str, Any]:
    """Build a BigQuery report row keyed by canonical column names."""
    return _record_to_dict(build_report_record(summary_id, report), REPORT_SCHEMA)


def summary_to_properties(record: SummaryRecord) -> dict[str, Any]:
    """Build Datastore properties for a summary entity (identity lives in the key)."""
    return _record_to_dict(record, SUMMARY_SCHEMA, skip=IDENTITY_FIELDS)


def report_to_properties(record: ReportRecord) -> dict[str, Any]:
    """Build Datastore properties for a report entity (parent lives in the key)."""
    return _record_to_dict(record, REPORT_SCHEMA, skip=IDENTITY_FIELDS)
