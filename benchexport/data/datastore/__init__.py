"""Cloud Datastore export entities."""

from benchexport.data.datastore.config import DatastoreExportConfig
from benchexport.data.datastore.writer import DATASTORE_BATCH_SIZE, DatastoreBatchWriter

__all__ = [
    "DatastoreExportConfig",
    "DATASTORE_BATCH_SIZE",
    "DatastoreBatchWriter",
]
