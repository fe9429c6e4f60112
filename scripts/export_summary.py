#!/usr/bin/env python3
"""
Export a benchmark session stored as JSON to BigQuery and/or Cloud Datastore.

Usage:
    python scripts/export_summary.py SUMMARY_JSON --commit COMMIT --project PROJECT
        [--target bigquery|datastore ...] [--dataset DATASET] [--namespace NS]
        [--multi-summary] [--verbose]

Example:
    python scripts/export_summary.py results/summary.json --commit $(git rev-parse HEAD) \\
        --project my-gcp-project --target bigquery --target datastore

Options not given on the command line fall back to BENCH_EXPORT_* environment variables.
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from pydantic import ValidationError

from benchexport.data.schemas import BenchmarkSummary
from benchexport.exceptions import BenchExportError
from benchexport.exporters import get_exporters
from config.settings import SUPPORTED_TARGETS, ExportSettings


def build_settings(args: argparse.Namespace) -> ExportSettings:
    """Overlay command line options on environment settings."""
    overrides = {
        "commit_id": args.commit,
        "project_id": args.project,
        "dataset_id": args.dataset,
        "datastore_namespace": args.namespace,
        "targets": ",".join(args.target) if args.target else None,
        "single_summary": False if args.multi_summary else None,
        "log_level": "DEBUG" if args.verbose else None,
    }
    return ExportSettings(**{k: v for k, v in overrides.items() if v is not None})


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Export a benchmark summary JSON file to BigQuery or Datastore"
    )
    parser.add_argument("summary_file", type=str, help="Benchmark summary JSON file")
    parser.add_argument("--commit", type=str, help="Commit id the benchmarks ran against")
    parser.add_argument("--project", type=str, help="Google Cloud project id")
    parser.add_argument("--dataset", type=str, help="BigQuery dataset id")
    parser.add_argument("--namespace", type=str, help="Datastore namespace")
    parser.add_argument(
        "--target",
        action="append",
        choices=SUPPORTED_TARGETS,
        help="Export target (repeatable, default: bigquery)",
    )
    parser.add_argument(
        "--multi-summary",
        action="store_true",
        help="Write a new summary per export instead of one per run",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Print verbose output",
    )

    args = parser.parse_args()

    summary_path = Path(args.summary_file)
    if not summary_path.exists():
        print(f"Error: Summary file not found: {summary_path}")
        return 1

    try:
        settings = build_settings(args)
    except ValidationError as e:
        print(f"Error: Invalid settings: {e}")
        return 1

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        summary = BenchmarkSummary.model_validate_json(summary_path.read_text())
    except ValidationError as e:
        print(f"Error: Invalid summary file {summary_path}: {e}")
        return 1

    try:
        exporters = get_exporters(settings)
    except BenchExportError as e:
        print(f"Error: {e.message}")
        return 1

    print(f"Exporting {len(summary.reports)} reports from {summary_path}")
    for exporter in exporters:
        for descriptor in exporter.export_to_files(summary):
            print(f"  {exporter.name}: {descriptor}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
