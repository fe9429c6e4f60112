"""
Exporters invoked by the host tool once per benchmark session.
"""

from benchexport.exporters.base import BaseExporter, ExporterState
from benchexport.exporters.bigquery import BigQueryExporter
from benchexport.exporters.datastore import DatastoreExporter
from benchexport.exporters.factory import get_exporters

__all__ = [
    "BaseExporter",
    "ExporterState",
    "BigQueryExporter",
    "DatastoreExporter",
    "get_exporters",
]
