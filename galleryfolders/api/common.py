"""Helper methods for the API."""

from galleryfolders.objectstorage.store import ObjectStore, S3ObjectStore


def get_object_store() -> ObjectStore:
    """FastAPI dependency providing the object store; override it to use another store."""
    return S3ObjectStore()
