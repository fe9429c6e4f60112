"""
Schema reconciliation for BigQuery export tables.

Creates missing tables from the canonical schema, or validates that an existing
table can hold it:
- Each canonical field must match exactly one same-named sibling
- A matched field must have the canonical type, then its children are checked
- Extra remote fields are tolerated and never examined
"""

import logging
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Mapping, Sequence

from google.api_core.exceptions import Conflict, NotFound
from google.cloud import bigquery

from benchexport.data.table_schema import (
    FieldSchema,
    TableRole,
    get_schema,
    normalize_type,
    to_bigquery_schema,
)
from benchexport.exceptions import (
    AmbiguousFieldError,
    FieldTypeMismatchError,
    MissingFieldError,
    TooFewFieldsError,
)


logger = logging.getLogger(__name__)


# =============================================================================
# SCHEMA VALIDATION
# =============================================================================


def validate_schema(
    canonical: Sequence[Any] | None,
    actual: Sequence[Any] | None,
    schema_id: str,
) -> None:
    """
    Validate one nesting level of a remote schema against the canonical one.

    Fields are compared by their name, field_type and fields attributes, so both
    FieldSchema and google.cloud.bigquery.SchemaField work on either side.

    Args:
        canonical: Expected fields at this level
        actual: Remote fields at the same level
        schema_id: Dotted path used in error messages (table or parent field)

    Raises:
        TooFewFieldsError: Remote level has fewer fields than canonical
        MissingFieldError: A canonical field has no same-named sibling
        AmbiguousFieldError: A canonical field has several same-named siblings
        FieldTypeMismatchError: A matched field has a different type
    """
    canonical = list(canonical or ())
    actual = list(actual or ())

    if len(actual) < len(canonical):
        raise TooFewFieldsError(
            f"Schema for {schema_id} has too few fields.",
            schema_id=schema_id,
            expected_count=len(canonical),
            actual_count=len(actual),
        )

    siblings: dict[str, list[Any]] = defaultdict(list)
    for remote_field in actual:
        siblings[remote_field.name].append(remote_field)

    for expected in canonical:
        _validate_field(expected, siblings.get(expected.name, []), f"{schema_id}.{expected.name}")


def _validate_field(expected: Any, matches: list[Any], field_id: str) -> None:
    if not matches:
        raise MissingFieldError(
            f"Field {field_id} does not exist on actual table.",
            schema_id=field_id,
        )
    if len(matches) > 1:
        raise AmbiguousFieldError(
            f"Field {field_id} exists {len(matches)} times on actual table.",
            schema_id=field_id,
            match_count=len(matches),
        )

    actual = matches[0]
    expected_type = normalize_type(expected.field_type)
    actual_type = normalize_type(actual.field_type)
    if expected_type != actual_type:
        raise FieldTypeMismatchError(
            f"Field {field_id} had Type {actual_type} but should have {expected_type}",
            schema_id=field_id,
            expected_type=expected_type,
            actual_type=actual_type,
        )

    validate_schema(expected.fields, actual.fields, field_id)


# =============================================================================
# SCHEMA RECONCILER
# =============================================================================


class SchemaReconciler:
    """
    Gets or creates export tables and validates their schemas.

    Each table id is reconciled at most once per reconciler; later calls return
    the cached table handle without touching the API.

    Usage:
        reconciler = SchemaReconciler(client, "my-project.benchmarks")
        tables = reconciler.ensure_tables({
            TableRole.SUMMARY: "my-project.benchmarks.BenchmarkSummary",
            TableRole.REPORT: "my-project.benchmarks.BenchmarkReport",
        })
    """

    def __init__(self, client: Any, dataset_ref: str, *, location: str | None = None):
        """
        Initialize reconciler.

        Args:
            client: google.cloud.bigquery.Client
            dataset_ref: Fully qualified dataset id (project.dataset)
            location: Location for the dataset if it has to be created
        """
        self.client = client
        self.dataset_ref = dataset_ref
        self.location = location
        self._tables: dict[str, Any] = {}
        self._dataset: Any = None

    def ensure_dataset(self) -> Any:
        """Get or create the target dataset."""
        if self._dataset is None:
            dataset = bigquery.Dataset(self.dataset_ref)
            if self.location:
                dataset.location = self.location
            self._dataset = self.client.create_dataset(dataset, exists_ok=True)
            logger.info(f"Using dataset {self.dataset_ref}")
        return self._dataset

    def ensure_table(self, table_id: str, canonical: Sequence[FieldSchema]) -> bigquery.Table:
        """
        Get a table that satisfies the canonical schema, creating it if missing.

        Args:
            table_id: Fully qualified table id (project.dataset.table)
            canonical: Canonical fields the table must hold

        Returns:
            Validated table handle

        Raises:
            SchemaIncompatibilityError: Existing table cannot hold the canonical schema
        """
        if table_id in self._tables:
            return self._tables[table_id]

        try:
            table = self.client.get_table(table_id)
        except NotFound:
            table = self._create_table(table_id, canonical)
            if table is not None:
                self._tables[table_id] = table
                return table
            # Lost a creation race, validate what the other writer created
            table = self.client.get_table(table_id)

        validate_schema(canonical, table.schema, table.table_id)
        logger.info(f"Validated schema of existing table {table_id}")
        self._tables[table_id] = table
        return table

    def _create_table(self, table_id: str, canonical: Sequence[FieldSchema]) -> Any:
        table = bigquery.Table(table_id, schema=to_bigquery_schema(canonical))
        try:
            created = self.client.create_table(table)
        except Conflict:
            logger.debug(f"Table {table_id} was created concurrently")
            return None
        logger.info(f"Created table {table_id} with {len(canonical)} fields")
        return created

    def ensure_tables(self, table_ids: Mapping[TableRole, str]) -> dict[TableRole, Any]:
        """
        Reconcile several tables concurrently against their role's canonical schema.

        All reconciliations are joined; the first failure is raised.
        """
        with ThreadPoolExecutor(max_workers=max(len(table_ids), 1)) as executor:
            futures = {
                role: executor.submit(self.ensure_table, table_id, get_schema(role))
                for role, table_id in table_ids.items()
            }
            return {role: future.result() for role, future in futures.items()}
