#!/usr/bin/env python3
"""BigQuery export example for benchexport.

This example exports one benchmark session to BigQuery, creating the dataset
and tables on first use.

Requirements:
    - Application default credentials (gcloud auth application-default login)
    - BENCH_EXPORT_PROJECT_ID set to a project you can write to

Usage:
    python examples/export_to_bigquery.py
"""

import logging
import os
import subprocess

from benchexport.data.bigquery.config import BigQueryExportConfig
from benchexport.data.schemas import (
    BenchmarkReport,
    BenchmarkSummary,
    HostEnvironmentInfo,
    Percentiles,
    Statistics,
)
from benchexport.exporters import BigQueryExporter


def current_commit() -> str:
    """Return the checked-out git commit, or "unknown" outside a repository."""
    try:
        return subprocess.run(
            ["git", "rev-parse", "HEAD"], capture_output=True, text=True, check=True
        ).stdout.strip()
    except (OSError, subprocess.CalledProcessError):
        return "unknown"


def sample_summary() -> BenchmarkSummary:
    """Build a small session with two measured methods."""
    reports = []
    for method, mean in (("Encode", 12.4), ("Decode", 18.9)):
        reports.append(
            BenchmarkReport(
                namespace="bench.codec",
                type_name="CodecBench",
                full_type_name="bench.codec.CodecBench",
                method_name=method,
                parameters="payload=1KB",
                method_signature=f"{method}(self, payload)",
                statistics=Statistics(
                    min=mean * 0.9,
                    max=mean * 1.3,
                    median=mean,
                    mean=mean,
                    standard_deviation=mean * 0.05,
                    standard_error=mean * 0.005,
                    variance=(mean * 0.05) ** 2,
                    percentiles=Percentiles(
                        p67=mean * 1.02, p85=mean * 1.08, p95=mean * 1.15, p100=mean * 1.3
                    ),
                ),
            )
        )

    return BenchmarkSummary(
        host_environment=HostEnvironmentInfo(
            os_version="Ubuntu 22.04",
            processor_name="Intel Xeon Platinum 8375C",
            processor_count=8,
            runtime_version="CPython 3.11.6",
            architecture="x86_64",
            tool_version="1.4.0",
            timer_frequency=1_000_000_000,
            timer_kind="perf_counter_ns",
        ),
        reports=reports,
    )


def main() -> None:
    """Export a sample session twice into the same summary."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("=" * 60)
    print("BigQuery Export Example")
    print("=" * 60)

    config = BigQueryExportConfig(
        commit_id=current_commit(),
        project_id=os.environ["BENCH_EXPORT_PROJECT_ID"],
        dataset_id=os.environ.get("BENCH_EXPORT_DATASET_ID", "benchmarks"),
    )
    exporter = BigQueryExporter(config)

    # Single-summary mode: the second export reuses the first summary row
    for run in (1, 2):
        print(f"\nExport {run}...")
        for descriptor in exporter.export_to_files(sample_summary()):
            print(f"  {descriptor}")

    print(f"\nExporter state: {exporter.state.value}")


if __name__ == "__main__":
    main()
