"""
Benchmark export to Google BigQuery and Cloud Datastore.

Exports one benchmark session (a summary of the host environment plus per-method
reports) per call, reconciling table schemas on first use.
"""

__version__ = "0.1.0"
