"""
Module: schemas

Purpose: Pydantic models for benchmark sessions and the records exported from them.

The input models (HostEnvironmentInfo, BenchmarkReport, BenchmarkSummary) are what
the host measurement tool hands to an exporter. SummaryRecord and ReportRecord are
the immutable rows derived from them at export time.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# BASE MODELS
# =============================================================================


class BaseSchema(BaseModel):
    """Base model with common configuration."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )


# =============================================================================
# INPUT SCHEMAS (host measurement tool)
# =============================================================================


class HostEnvironmentInfo(BaseSchema):
    """Environment the benchmarks ran on."""

    os_version: str
    processor_name: str
    processor_count: int = Field(ge=1)
    runtime_version: str
    architecture: str
    jit_modules: str = ""  # Comma-separated module list
    sdk_version: str = ""
    tool_version: str
    timer_frequency: int = Field(ge=0)  # Hz
    timer_kind: str


class Percentiles(BaseSchema):
    """Percentile values of a measurement distribution."""

    p67: float
    p85: float
    p95: float
    p100: float


class Statistics(BaseSchema):
    """Precomputed statistics for one benchmarked method."""

    min: float
    max: float
    median: float
    mean: float
    standard_deviation: float
    standard_error: float
    variance: float
    percentiles: Percentiles


class BenchmarkReport(BaseSchema):
    """Result of one benchmarked method."""

    namespace: str
    type_name: str
    full_type_name: str
    method_name: str
    parameters: str = ""
    method_signature: str
    statistics: Statistics

    def __repr__(self) -> str:
        return (
            f"BenchmarkReport(type={self.full_type_name!r}, "
            f"method={self.method_name!r})"
        )


class BenchmarkSummary(BaseSchema):
    """One measurement session: host metadata plus ordered per-method reports."""

    host_environment: HostEnvironmentInfo
    reports: list[BenchmarkReport] = Field(default_factory=list)
    host_name: str | None = None

    def __repr__(self) -> str:
        return f"BenchmarkSummary(reports={len(self.reports)})"


# =============================================================================
# EXPORTED RECORDS
# =============================================================================


class SummaryRecord(BaseSchema):
    """Summary row written once per export (or once per writer in single-summary mode)."""

    id: str
    commit: str
    timestamp: datetime
    host_name: str
    os_version: str
    processor_name: str
    processor_count: int
    runtime_version: str
    architecture: str
    jit_modules: str
    sdk_version: str
    tool_version: str
    timer_frequency: int
    timer_kind: str

    def __repr__(self) -> str:
        return (
            f"SummaryRecord(id={self.id!r}, commit={self.commit!r}, "
            f"timestamp={self.timestamp.isoformat()})"
        )


class ReportRecord(BaseSchema):
    """Report row linked to exactly one SummaryRecord through summary_id."""

    summary_id: str
    namespace: str
    type_name: str
    full_type_name: str
    method_name: str
    full_method_name: str
    parameters: str
    method_signature: str
    min: float
    max: float
    median: float
    mean: float
    standard_deviation: float
    standard_error: float
    variance: float
    percentile_67: float
    percentile_85: float
    percentile_95: float
    percentile_100: float

    def __repr__(self) -> str:
        return (
            f"ReportRecord(summary_id={self.summary_id!r}, "
            f"method={self.full_method_name!r})"
        )
