"""
Builds the exporters enabled in settings.
"""

from typing import Any, TYPE_CHECKING

from benchexport.exporters.base import BaseExporter
from benchexport.exporters.bigquery import BigQueryExporter
from benchexport.exporters.datastore import DatastoreExporter

if TYPE_CHECKING:
    from config.settings import ExportSettings


def get_exporters(settings: "ExportSettings", credentials: Any = None) -> list[BaseExporter]:
    """
    Create one exporter per configured target, in the order listed.

    Args:
        settings: Export settings (targets, project, tables, kinds)
        credentials: Optional google.auth credentials shared by all exporters

    Returns:
        Uninitialized exporters; remote setup happens on their first export
    """
    exporters: list[BaseExporter] = []
    for target in settings.target_list:
        if target == "bigquery":
            exporters.append(BigQueryExporter(settings.to_bigquery_config(credentials)))
        elif target == "datastore":
            exporters.append(DatastoreExporter(settings.to_datastore_config(credentials)))
    return exporters
