"""
Tests for benchexport/data/bigquery/writer.py
"""

from unittest.mock import MagicMock

import pytest
from google.api_core.exceptions import ServiceUnavailable

from benchexport.data.bigquery.writer import (
    BIGQUERY_INSERT_BATCH_SIZE,
    BigQueryBatchWriter,
    qualified_table_id,
)
from benchexport.data.schemas import (
    BenchmarkReport,
    BenchmarkSummary,
    HostEnvironmentInfo,
    Percentiles,
    Statistics,
)
from benchexport.exceptions import RowInsertError


def make_summary(n_reports: int = 2) -> BenchmarkSummary:
    stats = Statistics(
        min=1.0,
        max=3.0,
        median=2.0,
        mean=2.1,
        standard_deviation=0.4,
        standard_error=0.04,
        variance=0.16,
        percentiles=Percentiles(p67=2.2, p85=2.5, p95=2.8, p100=3.0),
    )
    return BenchmarkSummary(
        host_environment=HostEnvironmentInfo(
            os_version="macOS 14.3",
            processor_name="Apple M2",
            processor_count=8,
            runtime_version="CPython 3.11.7",
            architecture="arm64",
            tool_version="1.4.0",
            timer_frequency=1_000_000_000,
            timer_kind="perf_counter",
        ),
        reports=[
            BenchmarkReport(
                namespace="bench.io",
                type_name="ReadBench",
                full_type_name="bench.io.ReadBench",
                method_name=f"Read{i}",
                method_signature=f"Read{i}(self)",
                statistics=stats,
            )
            for i in range(n_reports)
        ],
        host_name="bench-host",
    )


def make_table(name: str) -> MagicMock:
    table = MagicMock()
    table.project = "test-project"
    table.dataset_id = "benchmarks"
    table.table_id = name
    return table


# =============================================================================
# TESTS: BigQueryBatchWriter
# =============================================================================


class TestBigQueryBatchWriter:
    """Tests for BigQueryBatchWriter."""

    @pytest.fixture
    def client(self) -> MagicMock:
        client = MagicMock()
        client.insert_rows.return_value = []
        return client

    @pytest.fixture
    def summary_table(self) -> MagicMock:
        return make_table("BenchmarkSummary")

    @pytest.fixture
    def report_table(self) -> MagicMock:
        return make_table("BenchmarkReport")

    def _inserts_into(self, client: MagicMock, table: MagicMock) -> list[list[dict]]:
        return [c.args[1] for c in client.insert_rows.call_args_list if c.args[0] is table]

    def test_qualified_table_id(self, summary_table: MagicMock) -> None:
        """Table handles are named project.dataset.table."""
        assert qualified_table_id(summary_table) == "test-project.benchmarks.BenchmarkSummary"

    def test_writes_summary_and_reports(
        self, client: MagicMock, summary_table: MagicMock, report_table: MagicMock
    ) -> None:
        """One summary row and its report rows share the generated id."""
        writer = BigQueryBatchWriter(client, summary_table, report_table, "abc123")

        descriptors = writer.write(make_summary(3))

        summary_inserts = self._inserts_into(client, summary_table)
        report_inserts = self._inserts_into(client, report_table)
        assert len(summary_inserts) == 1
        assert len(report_inserts) == 1

        summary_row = summary_inserts[0][0]
        assert summary_row["Commit"] == "abc123"
        assert summary_row["HostName"] == "bench-host"
        assert [r["SummaryId"] for r in report_inserts[0]] == [summary_row["Id"]] * 3
        assert descriptors == [
            f"{summary_row['Id']} in test-project.benchmarks.BenchmarkSummary "
            f"and test-project.benchmarks.BenchmarkReport"
        ]

    def test_reports_keep_input_order(
        self, client: MagicMock, summary_table: MagicMock, report_table: MagicMock
    ) -> None:
        """Report rows are inserted in the order the session lists them."""
        writer = BigQueryBatchWriter(client, summary_table, report_table, "abc123")

        writer.write(make_summary(5))

        rows = self._inserts_into(client, report_table)[0]
        assert [r["MethodName"] for r in rows] == [f"Read{i}" for i in range(5)]

    def test_full_method_name_derived_at_write(
        self, client: MagicMock, summary_table: MagicMock, report_table: MagicMock
    ) -> None:
        """FullMethodName is built from each report's type and method."""
        writer = BigQueryBatchWriter(client, summary_table, report_table, "abc123")

        writer.write(make_summary(2))

        rows = self._inserts_into(client, report_table)[0]
        assert [r["FullMethodName"] for r in rows] == ["bench.io.ReadBench.Read0", "bench.io.ReadBench.Read1"]

    def test_single_summary_mode_writes_one_summary(
        self, client: MagicMock, summary_table: MagicMock, report_table: MagicMock
    ) -> None:
        """Later writes reuse the first summary id."""
        writer = BigQueryBatchWriter(client, summary_table, report_table, "abc123", single_summary=True)

        first = writer.write(make_summary(2))
        second = writer.write(make_summary(2))

        assert len(self._inserts_into(client, summary_table)) == 1
        assert len(self._inserts_into(client, report_table)) == 2
        assert first == second
        summary_id = self._inserts_into(client, summary_table)[0][0]["Id"]
        assert all(
            row["SummaryId"] == summary_id
            for rows in self._inserts_into(client, report_table)
            for row in rows
        )

    def test_multi_summary_mode_writes_each_time(
        self, client: MagicMock, summary_table: MagicMock, report_table: MagicMock
    ) -> None:
        """Every write gets a fresh summary row."""
        writer = BigQueryBatchWriter(client, summary_table, report_table, "abc123", single_summary=False)

        first = writer.write(make_summary(1))
        second = writer.write(make_summary(1))

        summary_inserts = self._inserts_into(client, summary_table)
        assert len(summary_inserts) == 2
        assert summary_inserts[0][0]["Id"] != summary_inserts[1][0]["Id"]
        assert first != second

    def test_empty_reports_write_summary_only(
        self, client: MagicMock, summary_table: MagicMock, report_table: MagicMock
    ) -> None:
        """No report insert is made for a session without reports."""
        writer = BigQueryBatchWriter(client, summary_table, report_table, "abc123")

        descriptors = writer.write(make_summary(0))

        assert len(self._inserts_into(client, summary_table)) == 1
        assert self._inserts_into(client, report_table) == []
        assert len(descriptors) == 1

    def test_row_errors_raise(
        self, client: MagicMock, summary_table: MagicMock, report_table: MagicMock
    ) -> None:
        """Per-row errors returned by insert_rows raise RowInsertError."""
        def insert_rows(table, rows):
            if table is report_table:
                return [{"index": 0, "errors": [{"reason": "invalid"}]}]
            return []

        client.insert_rows.side_effect = insert_rows
        writer = BigQueryBatchWriter(client, summary_table, report_table, "abc123")

        with pytest.raises(RowInsertError) as exc_info:
            writer.write(make_summary(2))

        assert exc_info.value.table_id == "test-project.benchmarks.BenchmarkReport"
        assert len(exc_info.value.errors) == 1

    def test_report_failure_keeps_written_summary(
        self, client: MagicMock, summary_table: MagicMock, report_table: MagicMock
    ) -> None:
        """A summary that was written is reused even if its reports failed."""
        calls = {"reports": 0}

        def insert_rows(table, rows):
            if table is report_table:
                calls["reports"] += 1
                if calls["reports"] == 1:
                    raise ServiceUnavailable("backend error")
            return []

        client.insert_rows.side_effect = insert_rows
        writer = BigQueryBatchWriter(client, summary_table, report_table, "abc123")

        with pytest.raises(ServiceUnavailable):
            writer.write(make_summary(1))
        writer.write(make_summary(1))

        assert len(self._inserts_into(client, summary_table)) == 1

    def test_summary_failure_propagates_unmodified(
        self, client: MagicMock, summary_table: MagicMock, report_table: MagicMock
    ) -> None:
        """Transport errors reach the caller as raised by the client."""
        error = ServiceUnavailable("backend error")

        def insert_rows(table, rows):
            if table is summary_table:
                raise error
            return []

        client.insert_rows.side_effect = insert_rows
        writer = BigQueryBatchWriter(client, summary_table, report_table, "abc123")

        with pytest.raises(ServiceUnavailable) as exc_info:
            writer.write(make_summary(1))

        assert exc_info.value is error
        assert writer.summary_id is None

    def test_batch_size_constant(self) -> None:
        """Report rows go out in insertAll requests of at most 500 rows."""
        assert BIGQUERY_INSERT_BATCH_SIZE == 500
        assert BigQueryBatchWriter.batch_size == 500

    def test_reports_split_into_batches(
        self, client: MagicMock, summary_table: MagicMock, report_table: MagicMock
    ) -> None:
        """1201 reports are sent as 500, 500, 201 rows, in input order."""
        writer = BigQueryBatchWriter(client, summary_table, report_table, "abc123")

        descriptors = writer.write(make_summary(1201))

        assert len(self._inserts_into(client, summary_table)) == 1
        batches = self._inserts_into(client, report_table)
        assert [len(b) for b in batches] == [500, 500, 201]
        names = [row["MethodName"] for batch in batches for row in batch]
        assert names == [f"Read{i}" for i in range(1201)]
        assert len(descriptors) == 1

    def test_batch_failure_stops_later_batches(
        self, client: MagicMock, summary_table: MagicMock, report_table: MagicMock
    ) -> None:
        """A rejected batch raises; earlier batches stay sent and later ones are not sent."""
        report_calls = {"count": 0}

        def insert_rows(table, rows):
            if table is report_table:
                report_calls["count"] += 1
                if report_calls["count"] == 2:
                    return [{"index": 0, "errors": [{"reason": "invalid"}]}]
            return []

        client.insert_rows.side_effect = insert_rows
        writer = BigQueryBatchWriter(client, summary_table, report_table, "abc123")

        with pytest.raises(RowInsertError):
            writer.write(make_summary(1201))

        assert [len(b) for b in self._inserts_into(client, report_table)] == [500, 500]
        client.delete_rows.assert_not_called()
