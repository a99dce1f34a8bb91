"""
Read side of the gallery: folder listings and the recently added view.

Each call lists the object store afresh (bounded by the listing_limit setting) and builds the
requested view in memory. Nothing is cached, so views always match the current store contents.
"""

from galleryfolders.config import get_settings
from galleryfolders.metadata import description_map
from galleryfolders.models import GalleryListing, ImageItem, RecentFolderNode
from galleryfolders.objectstorage.store import ObjectStore
from galleryfolders.paths import normalize_folder, relative_segments, search_prefix
from galleryfolders.recent import rank_recent_folders
from galleryfolders.tree import compose_folders, index_objects


async def list_folder(store: ObjectStore, folder: str | None = None) -> GalleryListing:
    """
    List one level of the gallery: the images directly in folder and its immediate subfolders.
    An empty folder lists the gallery root.
    :raises InvalidPath: before the store is contacted, if folder is malformed
    :raises ObjectStoreError: if the store cannot be listed
    """
    settings = get_settings()
    current_path = normalize_folder(folder)
    objects = await store.list_objects(settings.listing_limit)

    level = index_objects(objects, settings.root_prefix, current_path)
    subfolders = compose_folders(level.subfolder_groups, description_map(), settings.root_prefix, current_path)
    subfolders.sort(key=lambda f: f.name)

    root = search_prefix(settings.root_prefix)
    return GalleryListing(
        current_path=current_path,
        subfolders=subfolders,
        images=[ImageItem.from_record(obj) for obj in level.direct_images],
        total_files=len(objects),
        gallery_files=sum(1 for obj in objects if relative_segments(obj.key, root)),
    )


async def recent_folders(store: ObjectStore, limit: int | None = None) -> list[RecentFolderNode]:
    """The top-level folders with the most recently added images, newest first"""
    settings = get_settings()
    if limit is None:
        limit = settings.recent_limit
    objects = await store.list_objects(settings.listing_limit)
    return rank_recent_folders(objects, settings.root_prefix, limit, description_map())
