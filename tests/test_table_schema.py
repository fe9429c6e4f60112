"""
Tests for benchexport/data/table_schema.py
"""

import pytest

from benchexport.data.table_schema import (
    CANONICAL_SCHEMAS,
    IDENTITY_FIELDS,
    REPORT_SCHEMA,
    SUMMARY_SCHEMA,
    FieldSchema,
    FieldType,
    TableRole,
    get_schema,
    normalize_type,
    to_bigquery_schema,
)
from benchexport.data.schemas import ReportRecord, SummaryRecord


# =============================================================================
# TESTS: Canonical schemas
# =============================================================================


class TestCanonicalSchemas:
    """Tests for the canonical field lists."""

    @pytest.mark.parametrize("role", list(TableRole))
    def test_field_names_unique(self, role: TableRole) -> None:
        """Column names are unique within a table."""
        names = [f.name for f in get_schema(role)]

        assert len(names) == len(set(names))

    def test_roles_mapped(self) -> None:
        """Each role maps to its canonical schema."""
        assert CANONICAL_SCHEMAS[TableRole.SUMMARY] is SUMMARY_SCHEMA
        assert CANONICAL_SCHEMAS[TableRole.REPORT] is REPORT_SCHEMA
        assert get_schema("report") is REPORT_SCHEMA

    def test_attributes_exist_on_records(self) -> None:
        """Every column maps to a record attribute."""
        assert {f.record_attribute for f in SUMMARY_SCHEMA} == set(SummaryRecord.model_fields)
        assert {f.record_attribute for f in REPORT_SCHEMA} == set(ReportRecord.model_fields)

    def test_identity_columns(self) -> None:
        """Identity columns come first."""
        assert SUMMARY_SCHEMA[0].name == "Id"
        assert REPORT_SCHEMA[0].name == "SummaryId"
        assert IDENTITY_FIELDS == {"Id", "SummaryId"}

    def test_report_statistics_are_floats(self) -> None:
        """Statistics columns are FLOAT."""
        stats = [f for f in REPORT_SCHEMA if f.name in ("Min", "Max", "Median", "Mean", "Percentile95")]

        assert len(stats) == 5
        assert all(f.field_type is FieldType.FLOAT for f in stats)

    def test_field_equality_ignores_attribute(self) -> None:
        """Comparison is by name, type and children only."""
        assert FieldSchema("Min", FieldType.FLOAT, attribute="min") == FieldSchema("Min", FieldType.FLOAT)


# =============================================================================
# TESTS: normalize_type
# =============================================================================


class TestNormalizeType:
    """Tests for normalize_type."""

    def test_enum_value(self) -> None:
        """Enum members normalize to their value."""
        assert normalize_type(FieldType.TIMESTAMP) == "TIMESTAMP"

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("INT64", "INTEGER"), ("FLOAT64", "FLOAT"), ("STRUCT", "RECORD"), ("string", "STRING")],
    )
    def test_synonyms(self, raw: str, expected: str) -> None:
        """Standard SQL names fold to legacy names."""
        assert normalize_type(raw) == expected

    def test_distinct_types_stay_distinct(self) -> None:
        """Distinct types are not folded together."""
        assert normalize_type("NUMERIC") == "NUMERIC"
        assert normalize_type("FLOAT") != normalize_type("INTEGER")


# =============================================================================
# TESTS: to_bigquery_schema
# =============================================================================


class TestToBigQuerySchema:
    """Tests for to_bigquery_schema."""

    def test_flat_schema(self) -> None:
        """Flat fields convert to NULLABLE SchemaFields in order."""
        fields = to_bigquery_schema(SUMMARY_SCHEMA)

        assert [f.name for f in fields] == [f.name for f in SUMMARY_SCHEMA]
        assert fields[2].field_type == "TIMESTAMP"
        assert fields[6].field_type == "INTEGER"
        assert all(f.mode == "NULLABLE" for f in fields)

    def test_nested_schema(self) -> None:
        """RECORD fields convert with their children."""
        canonical = (
            FieldSchema(
                "Stats",
                FieldType.RECORD,
                fields=(FieldSchema("Min", FieldType.FLOAT), FieldSchema("Max", FieldType.FLOAT)),
            ),
        )

        fields = to_bigquery_schema(canonical)

        assert fields[0].field_type == "RECORD"
        assert [f.name for f in fields[0].fields] == ["Min", "Max"]
