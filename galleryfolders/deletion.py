"""
Remove folders and images across the object store and the metadata database.

The two backends share no transaction, so the order is fixed: objects first, description second.
Images are authoritative. If they cannot be deleted nothing else is touched and the deletion fails;
if only the description cannot be deleted, the folder is gone for the user and the left-over row
is reported as a warning.
"""

import logging

from peewee import PeeweeException

from galleryfolders.config import get_settings
from galleryfolders.errors import ObjectStoreError
from galleryfolders.metadata import delete_folder_metadata
from galleryfolders.models import DeletionResult
from galleryfolders.objectstorage.store import ObjectStore
from galleryfolders.paths import folder_name, split_segments, validate_deletion_path


async def delete_folder(store: ObjectStore, full_path: str, root_prefix: str | None = None) -> DeletionResult:
    """
    Delete all images under a folder (e.g. ``gallery/Picnic``) and then its description.
    :raises InvalidPath: if the path is the gallery root or lies outside it; nothing is deleted
    """
    root_prefix = root_prefix or get_settings().root_prefix
    full_path = validate_deletion_path(full_path, root_prefix)
    logging.info(f"Deleting folder {full_path}")

    try:
        # trailing slash, so gallery/Picnic does not also remove gallery/Picnic2
        deleted = await store.delete_prefix(full_path + "/")
        deleted += await _delete_unnormalized_keys(store, full_path)
    except ObjectStoreError as e:
        logging.error(f"Could not {e.operation or 'delete'} folder {full_path}: {e}")
        return DeletionResult(success=False, reason=e.reason)

    result = DeletionResult(success=True, deleted_objects=deleted)
    name = folder_name(full_path)
    try:
        if not delete_folder_metadata(name):
            logging.debug(f"Folder {name} had no description")
    except PeeweeException as e:
        logging.warning(f"Deleted folder {full_path}, but could not delete its description: {e}")
        result.warnings.append(f"Folder description for {name} could not be deleted: {e}")
    return result


async def _delete_unnormalized_keys(store: ObjectStore, full_path: str) -> int:
    """
    Delete objects that are listed under the folder only because empty segments are ignored,
    e.g. gallery//Picnic/a.jpg or gallery/Picnic//a.jpg for gallery/Picnic
    """
    segments = split_segments(full_path)
    prefix = full_path + "/"
    leftovers = [
        obj
        for obj in await store.list_objects(get_settings().listing_limit)
        if not obj.key.startswith(prefix)
        and len(split_segments(obj.key)) > len(segments)
        and split_segments(obj.key)[: len(segments)] == segments
    ]
    for obj in leftovers:
        await store.delete_object(obj.id)
    return len(leftovers)


async def delete_image(store: ObjectStore, object_id: str) -> None:
    """
    Delete a single image by its object store id.
    :raises ObjectStoreError: if the object store refuses
    """
    if not object_id:
        raise ValueError("An object id is required")
    logging.info(f"Deleting image {object_id}")
    await store.delete_object(object_id)
