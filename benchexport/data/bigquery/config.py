"""
Configuration for exporting benchmark data to BigQuery.

Defines where summary and report rows are written and how summaries are deduplicated.
"""

from dataclasses import dataclass
from typing import Any

from benchexport.exceptions import ConfigurationError


DEFAULT_SUMMARY_TABLE = "BenchmarkSummary"
DEFAULT_REPORT_TABLE = "BenchmarkReport"


@dataclass
class BigQueryExportConfig:
    """Complete configuration for the BigQuery exporter."""

    # Commit the benchmarks ran against (e.g. a git hash)
    commit_id: str

    # GCP project and dataset
    project_id: str
    dataset_id: str

    # Target tables
    summary_table_id: str = DEFAULT_SUMMARY_TABLE
    report_table_id: str = DEFAULT_REPORT_TABLE

    # Write one summary row for the writer's lifetime instead of one per export
    single_summary: bool = True

    # google.auth credentials; None uses application default credentials
    credentials: Any = None

    # Dataset location used when the dataset has to be created
    location: str | None = None

    def __post_init__(self) -> None:
        for name in ("commit_id", "project_id", "dataset_id", "summary_table_id", "report_table_id"):
            if not getattr(self, name):
                raise ConfigurationError(f"{name} must not be empty", setting=name)
        if self.summary_table_id == self.report_table_id:
            raise ConfigurationError(
                "Summary and report tables must differ",
                setting="report_table_id",
                context={"table_id": self.report_table_id},
            )

    @property
    def dataset_ref(self) -> str:
        """Get fully qualified dataset id."""
        return f"{self.project_id}.{self.dataset_id}"

    def get_full_table_name(self, table_name: str) -> str:
        """Get fully qualified table name."""
        if "." in table_name:
            return table_name
        return f"{self.project_id}.{self.dataset_id}.{table_name}"

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> "BigQueryExportConfig":
        """Create config from dictionary (e.g., from YAML/JSON)."""
        return cls(
            commit_id=config["commit_id"],
            project_id=config["project_id"],
            dataset_id=config["dataset_id"],
            summary_table_id=config.get("summary_table_id") or DEFAULT_SUMMARY_TABLE,
            report_table_id=config.get("report_table_id") or DEFAULT_REPORT_TABLE,
            single_summary=config.get("single_summary", True),
            credentials=config.get("credentials"),
            location=config.get("location"),
        )
