"""
Batch writer for BigQuery summary and report tables.

The summary row and the report rows are independent streaming inserts: they are
submitted together and both joined before a write counts as done. insert_rows
sends everything it is given as one insertAll request, so report rows are split
into requests of BIGQUERY_INSERT_BATCH_SIZE rows, sent in order.
"""

import logging
import uuid
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any

from benchexport.data.batching import batched
from benchexport.data.rows import report_to_row, summary_to_row
from benchexport.data.schemas import BenchmarkSummary
from benchexport.exceptions import RowInsertError


logger = logging.getLogger(__name__)

# Recommended rows per insertAll request
BIGQUERY_INSERT_BATCH_SIZE = 500


def qualified_table_id(table: Any) -> str:
    """Get project.dataset.table for a table handle."""
    return f"{table.project}.{table.dataset_id}.{table.table_id}"


class BigQueryBatchWriter:
    """
    Writes one benchmark session to validated summary and report tables.

    In single-summary mode the first write generates and stores the summary row;
    later writes reuse its id and skip the summary insert. Not safe for
    concurrent write() calls on one instance.
    """

    batch_size = BIGQUERY_INSERT_BATCH_SIZE

    def __init__(
        self,
        client: Any,
        summary_table: Any,
        report_table: Any,
        commit_id: str,
        *,
        single_summary: bool = True,
    ):
        """
        Args:
            client: google.cloud.bigquery.Client
            summary_table: Validated summary table handle
            report_table: Validated report table handle
            commit_id: Commit recorded on every summary row
            single_summary: Write one summary row for the writer's lifetime
        """
        self.client = client
        self.summary_table = summary_table
        self.report_table = report_table
        self.commit_id = commit_id
        self.single_summary = single_summary
        self._summary_id: str | None = None

    @property
    def summary_id(self) -> str | None:
        """Id of the last summary row written, if any."""
        return self._summary_id

    def write(self, summary: BenchmarkSummary) -> list[str]:
        """
        Write the summary (when due) and all its reports.

        Returns:
            One descriptor naming the summary id and both tables

        Raises:
            RowInsertError: BigQuery rejected rows
            google.api_core.exceptions.GoogleAPIError: Transport or service failure
        """
        write_summary = not self.single_summary or self._summary_id is None
        summary_id = str(uuid.uuid4()) if write_summary else self._summary_id

        report_rows = [report_to_row(summary_id, report) for report in summary.reports]

        with ThreadPoolExecutor(max_workers=2) as executor:
            summary_future: Future | None = None
            report_future: Future | None = None
            if write_summary:
                summary_row = summary_to_row(summary, summary_id, self.commit_id)
                summary_future = executor.submit(self._insert, self.summary_table, [summary_row])
            if report_rows:
                report_future = executor.submit(self._insert_reports, report_rows)

            if summary_future is not None:
                summary_future.result()
                self._summary_id = summary_id
                logger.info(f"Wrote summary {summary_id} to {qualified_table_id(self.summary_table)}")
            if report_future is not None:
                report_future.result()
                logger.info(
                    f"Wrote {len(report_rows)} reports to {qualified_table_id(self.report_table)}"
                )

        return [
            f"{summary_id} in {qualified_table_id(self.summary_table)} "
            f"and {qualified_table_id(self.report_table)}"
        ]

    def _insert_reports(self, rows: list[dict[str, Any]]) -> None:
        # Batches already sent stay committed if a later one fails
        for number, batch in enumerate(batched(rows, self.batch_size), start=1):
            self._insert(self.report_table, batch)
            logger.debug(f"Wrote report batch {number} ({len(batch)} rows)")

    def _insert(self, table: Any, rows: list[dict[str, Any]]) -> None:
        errors = self.client.insert_rows(table, rows)
        if errors:
            table_id = qualified_table_id(table)
            logger.error(f"Insert into {table_id} rejected {len(errors)} rows")
            raise RowInsertError(
                f"BigQuery rejected {len(errors)} of {len(rows)} rows for {table_id}",
                table_id=table_id,
                errors=list(errors),
            )
