"""
Canonical table schemas for exported benchmark data.

Both stores share one logical field list per table role. BigQuery receives it as
typed columns; Datastore receives the same names as entity properties, with the
identity columns moved into the entity key.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Sequence


SCHEMA_VERSION = 1


class TableRole(str, Enum):
    """Which exported table a schema describes."""

    SUMMARY = "summary"
    REPORT = "report"


class FieldType(str, Enum):
    """Declared column types, named as BigQuery names them."""

    STRING = "STRING"
    INTEGER = "INTEGER"
    FLOAT = "FLOAT"
    TIMESTAMP = "TIMESTAMP"
    RECORD = "RECORD"


# Standard SQL names returned by some API paths for the same legacy types
TYPE_SYNONYMS: dict[str, str] = {
    "INT64": "INTEGER",
    "FLOAT64": "FLOAT",
    "STRUCT": "RECORD",
}


def normalize_type(type_name: str | FieldType) -> str:
    """Fold BigQuery type synonyms onto one name. Distinct types stay distinct."""
    if isinstance(type_name, FieldType):
        return type_name.value
    upper = str(type_name).upper()
    return TYPE_SYNONYMS.get(upper, upper)


@dataclass(frozen=True)
class FieldSchema:
    """
    One canonical column.

    Attribute names match google.cloud.bigquery.SchemaField (name, field_type,
    fields) so canonical and remote schemas can be walked by the same code.
    """

    name: str
    field_type: FieldType
    fields: tuple["FieldSchema", ...] = ()
    attribute: str | None = field(default=None, compare=False)  # Record attribute

    @property
    def record_attribute(self) -> str:
        return self.attribute or self.name


# =============================================================================
# CANONICAL SCHEMAS
# =============================================================================

SUMMARY_SCHEMA: tuple[FieldSchema, ...] = (
    FieldSchema("Id", FieldType.STRING, attribute="id"),
    FieldSchema("Commit", FieldType.STRING, attribute="commit"),
    FieldSchema("Timestamp", FieldType.TIMESTAMP, attribute="timestamp"),
    FieldSchema("HostName", FieldType.STRING, attribute="host_name"),
    FieldSchema("OsVersion", FieldType.STRING, attribute="os_version"),
    FieldSchema("ProcessorName", FieldType.STRING, attribute="processor_name"),
    FieldSchema("ProcessorCount", FieldType.INTEGER, attribute="processor_count"),
    FieldSchema("RuntimeVersion", FieldType.STRING, attribute="runtime_version"),
    FieldSchema("Architecture", FieldType.STRING, attribute="architecture"),
    FieldSchema("JitModules", FieldType.STRING, attribute="jit_modules"),
    FieldSchema("SdkVersion", FieldType.STRING, attribute="sdk_version"),
    FieldSchema("ToolVersion", FieldType.STRING, attribute="tool_version"),
    FieldSchema("TimerFrequency", FieldType.INTEGER, attribute="timer_frequency"),
    FieldSchema("TimerKind", FieldType.STRING, attribute="timer_kind"),
)

REPORT_SCHEMA: tuple[FieldSchema, ...] = (
    FieldSchema("SummaryId", FieldType.STRING, attribute="summary_id"),
    FieldSchema("Namespace", FieldType.STRING, attribute="namespace"),
    FieldSchema("Type", FieldType.STRING, attribute="type_name"),
    FieldSchema("FullType", FieldType.STRING, attribute="full_type_name"),
    FieldSchema("MethodName", FieldType.STRING, attribute="method_name"),
    FieldSchema("FullMethodName", FieldType.STRING, attribute="full_method_name"),
    FieldSchema("Parameters", FieldType.STRING, attribute="parameters"),
    FieldSchema("MethodSignature", FieldType.STRING, attribute="method_signature"),
    FieldSchema("Min", FieldType.FLOAT, attribute="min"),
    FieldSchema("Max", FieldType.FLOAT, attribute="max"),
    FieldSchema("Median", FieldType.FLOAT, attribute="median"),
    FieldSchema("Mean", FieldType.FLOAT, attribute="mean"),
    FieldSchema("StandardDeviation", FieldType.FLOAT, attribute="standard_deviation"),
    FieldSchema("StandardError", FieldType.FLOAT, attribute="standard_error"),
    FieldSchema("Variance", FieldType.FLOAT, attribute="variance"),
    FieldSchema("Percentile67", FieldType.FLOAT, attribute="percentile_67"),
    FieldSchema("Percentile85", FieldType.FLOAT, attribute="percentile_85"),
    FieldSchema("Percentile95", FieldType.FLOAT, attribute="percentile_95"),
    FieldSchema("Percentile100", FieldType.FLOAT, attribute="percentile_100"),
)

CANONICAL_SCHEMAS: dict[TableRole, tuple[FieldSchema, ...]] = {
    TableRole.SUMMARY: SUMMARY_SCHEMA,
    TableRole.REPORT: REPORT_SCHEMA,
}

# Columns that Datastore stores as key material instead of properties
IDENTITY_FIELDS: frozenset[str] = frozenset({"Id", "SummaryId"})


def get_schema(role: TableRole | str) -> tuple[FieldSchema, ...]:
    """Get the canonical field list for a table role."""
    return CANONICAL_SCHEMAS[TableRole(role)]


def to_bigquery_schema(fields: Sequence[FieldSchema]) -> list[Any]:
    """Convert canonical fields to google.cloud.bigquery.SchemaField objects."""
    from google.cloud import bigquery

    return [
        bigquery.SchemaField(
            f.name,
            f.field_type.value,
            mode="NULLABLE",
            fields=to_bigquery_schema(f.fields),
        )
        for f in fields
    ]
