"""Backend collaborators: record service and object store."""

from .base import ObjectStore, RecordService
from .records import NotesRecordService, RecordsClient
from .storage import ImageStorage, ObjectStoreClient, make_image_key

__all__ = [
    "ImageStorage",
    "NotesRecordService",
    "ObjectStore",
    "ObjectStoreClient",
    "RecordService",
    "RecordsClient",
    "make_image_key",
]
