"""Exceptions raised by the gallery core and its storage adapters."""


class GalleryError(Exception):
    pass


class InvalidPath(GalleryError, ValueError):
    """A folder path that escapes the gallery root or is otherwise malformed."""


class ObjectStoreError(GalleryError):
    """The object store could not be listed or could not delete what was asked."""

    reason = "object-store"

    def __init__(self, message: str, operation: str | None = None):
        super().__init__(message)
        self.operation = operation
