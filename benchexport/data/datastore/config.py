"""
Configuration for exporting benchmark data to Cloud Datastore.
"""

from dataclasses import dataclass
from typing import Any

from benchexport.exceptions import ConfigurationError


DEFAULT_SUMMARY_KIND = "BenchmarkSummary"
DEFAULT_REPORT_KIND = "BenchmarkReport"


@dataclass
class DatastoreExportConfig:
    """Complete configuration for the Datastore exporter."""

    commit_id: str
    project_id: str

    # Datastore namespace; "" is the default namespace
    namespace: str = ""

    summary_kind: str = DEFAULT_SUMMARY_KIND
    report_kind: str = DEFAULT_REPORT_KIND  # Always a child of a summary entity

    # The host tool produces a summary per benchmarked class; True keeps one
    # summary entity for the whole lifetime of the exporter
    single_summary: bool = True

    credentials: Any = None

    def __post_init__(self) -> None:
        for name in ("commit_id", "project_id", "summary_kind", "report_kind"):
            if not getattr(self, name):
                raise ConfigurationError(f"{name} must not be empty", setting=name)

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> "DatastoreExportConfig":
        """Create config from dictionary (e.g., from YAML/JSON)."""
        return cls(
            commit_id=config["commit_id"],
            project_id=config["project_id"],
            namespace=config.get("namespace") or "",
            summary_kind=config.get("summary_kind") or DEFAULT_SUMMARY_KIND,
            report_kind=config.get("report_kind") or DEFAULT_REPORT_KIND,
            single_summary=config.get("single_summary", True),
            credentials=config.get("credentials"),
        )
