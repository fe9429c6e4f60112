"""
Module: writer

Purpose: Batch writer for Cloud Datastore summary and report entities.

Key Functions:
- DatastoreBatchWriter: Inserts a summary entity, then its reports as child entities

Architecture Notes:
- The summary key is generated by Datastore on insert and is the parent of every
  report key, so the summary is always written before any report batch
- Reports go out in batches of DATASTORE_BATCH_SIZE (the bulk-insert limit)
- Batches are not atomic across each other: a failure part way through leaves
  the earlier batches committed
"""

import logging
from typing import Any

from google.cloud import datastore

from benchexport.data.batching import batched
from benchexport.data.rows import (
    build_report_record,
    build_summary_record,
    report_to_properties,
    summary_to_properties,
)
from benchexport.data.schemas import BenchmarkSummary


logger = logging.getLogger(__name__)

DATASTORE_BATCH_SIZE = 500


def describe_key(key: Any) -> str:
    """Human readable location of a Datastore key."""
    return (
        f"{key.kind}:{key.id_or_name} "
        f"(project {key.project}, namespace {key.namespace or '<default>'!r})"
    )


class DatastoreBatchWriter:
    """
    Writes one benchmark session as a summary entity with child report entities.

    Usage:
        writer = DatastoreBatchWriter(client, commit_id="abc123")
        descriptors = writer.write(summary)
    """

    batch_size = DATASTORE_BATCH_SIZE

    def __init__(
        self,
        client: Any,
        commit_id: str,
        *,
        single_summary: bool = True,
        summary_kind: str = "BenchmarkSummary",
        report_kind: str = "BenchmarkReport",
    ):
        """
        Args:
            client: google.cloud.datastore.Client (carries project and namespace)
            commit_id: Commit recorded on every summary entity
            single_summary: Write one summary entity for the writer's lifetime
            summary_kind: Entity kind for summaries
            report_kind: Entity kind for reports
        """
        self.client = client
        self.commit_id = commit_id
        self.single_summary = single_summary
        self.summary_kind = summary_kind
        self.report_kind = report_kind
        self._summary_key: Any = None

    @property
    def summary_key(self) -> Any:
        """Key of the last summary entity written, if any."""
        return self._summary_key

    def write(self, summary: BenchmarkSummary) -> list[str]:
        """
        Write the summary entity (when due) and all report entities under it.

        Returns:
            One descriptor naming the summary entity key

        Raises:
            google.api_core.exceptions.GoogleAPIError: Transport or service failure
        """
        if not self.single_summary or self._summary_key is None:
            self._summary_key = self._insert_summary(summary)

        summary_key = self._summary_key
        summary_id = str(summary_key.id_or_name)
        entities = [
            self._build_report_entity(summary_key, summary_id, report)
            for report in summary.reports
        ]

        batch_count = 0
        for batch in batched(entities, self.batch_size):
            self.client.put_multi(batch)
            batch_count += 1
            logger.debug(f"Wrote report batch {batch_count} ({len(batch)} entities)")

        if entities:
            logger.info(
                f"Wrote {len(entities)} reports in {batch_count} batches "
                f"under {describe_key(summary_key)}"
            )
        return [f"Datastore summary entity key: {describe_key(summary_key)}"]

    def _insert_summary(self, summary: BenchmarkSummary) -> Any:
        # Datastore assigns the id on insert; the Id column is not stored as a property
        record = build_summary_record(summary, "", self.commit_id)
        entity = datastore.Entity(key=self.client.key(self.summary_kind))
        entity.update(summary_to_properties(record))
        self.client.put(entity)
        logger.info(f"Wrote summary entity {describe_key(entity.key)}")
        return entity.key

    def _build_report_entity(self, summary_key: Any, summary_id: str, report: Any) -> Any:
        entity = datastore.Entity(key=self.client.key(self.report_kind, parent=summary_key))
        entity.update(report_to_properties(build_report_record(summary_id, report)))
        return entity
