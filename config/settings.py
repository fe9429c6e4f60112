"""
Module: settings

Purpose: Centralized configuration management for the benchmark exporters.

Key Functions:
- get_settings: Load settings from environment variables
- ExportSettings: Pydantic settings model with validation

Architecture Notes:
- Uses pydantic-settings for type-safe configuration
- Environment variables (prefix BENCH_EXPORT_) and an optional .env override defaults
- Credentials are not loaded here; pass a google.auth credentials object to the
  store configs directly, or rely on application default credentials
"""

from functools import lru_cache
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from benchexport.data.bigquery.config import (
    DEFAULT_REPORT_TABLE,
    DEFAULT_SUMMARY_TABLE,
    BigQueryExportConfig,
)
from benchexport.data.datastore.config import (
    DEFAULT_REPORT_KIND,
    DEFAULT_SUMMARY_KIND,
    DatastoreExportConfig,
)


SUPPORTED_TARGETS = ("bigquery", "datastore")


class ExportSettings(BaseSettings):
    """Exporter settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="BENCH_EXPORT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    commit_id: str = Field(default="")
    project_id: str = Field(default="")

    # Comma-separated: "bigquery", "datastore" or both
    targets: str = Field(default="bigquery")

    # BigQuery
    dataset_id: str = Field(default="benchmarks")
    summary_table_id: str = Field(default=DEFAULT_SUMMARY_TABLE)
    report_table_id: str = Field(default=DEFAULT_REPORT_TABLE)
    bigquery_location: str | None = Field(default=None)

    # Datastore
    datastore_namespace: str = Field(default="")
    summary_kind: str = Field(default=DEFAULT_SUMMARY_KIND)
    report_kind: str = Field(default=DEFAULT_REPORT_KIND)

    single_summary: bool = Field(default=True)

    # Logging
    log_level: str = Field(default="INFO")

    @field_validator("targets")
    @classmethod
    def validate_targets(cls, value: str) -> str:
        names = [t.strip().lower() for t in value.split(",") if t.strip()]
        unknown = [t for t in names if t not in SUPPORTED_TARGETS]
        if unknown:
            raise ValueError(f"Unsupported export targets: {', '.join(unknown)}")
        if not names:
            raise ValueError("At least one export target is required")
        return ",".join(names)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        return value.upper()

    @property
    def target_list(self) -> list[str]:
        return self.targets.split(",")

    def to_bigquery_config(self, credentials: Any = None) -> BigQueryExportConfig:
        return BigQueryExportConfig(
            commit_id=self.commit_id,
            project_id=self.project_id,
            dataset_id=self.dataset_id,
            summary_table_id=self.summary_table_id,
            report_table_id=self.report_table_id,
            single_summary=self.single_summary,
            credentials=credentials,
            location=self.bigquery_location,
        )

    def to_datastore_config(self, credentials: Any = None) -> DatastoreExportConfig:
        return DatastoreExportConfig(
            commit_id=self.commit_id,
            project_id=self.project_id,
            namespace=self.datastore_namespace,
            summary_kind=self.summary_kind,
            report_kind=self.report_kind,
            single_summary=self.single_summary,
            credentials=credentials,
        )


@lru_cache
def get_settings() -> ExportSettings:
    """Get cached settings instance."""
    return ExportSettings()
