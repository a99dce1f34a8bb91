"""API Endpoints for browsing the gallery folder tree and managing folders."""

import logging
from typing import Annotated

from fastapi import APIRouter, Body, Depends, HTTPException, Path, Query, Response, status
from fastapi.responses import JSONResponse

from galleryfolders.api.common import get_object_store
from galleryfolders.deletion import delete_folder, delete_image
from galleryfolders.gallery import list_folder, recent_folders
from galleryfolders.metadata import (
    FolderMetadata,
    delete_folder_metadata,
    get_folder_metadata,
    list_folder_metadata,
    upsert_folder_metadata,
)
from galleryfolders.models import (
    DeletionResult,
    FolderMetadataBody,
    FolderMetadataItem,
    FolderMetadataList,
    GalleryListing,
    RecentFolders,
)
from galleryfolders.objectstorage.store import ObjectStore

app_gallery = APIRouter(prefix="/gallery", tags=["gallery"])


def _metadata_item(row: FolderMetadata) -> FolderMetadataItem:
    return FolderMetadataItem(
        folder_name=row.folder_name,
        description=row.description,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


@app_gallery.get("")
async def gallery_list(
    folder: Annotated[str, Query(description="Folder to list, relative to the gallery root. Empty lists the root")] = "",
    store: ObjectStore = Depends(get_object_store),
) -> GalleryListing:
    """
    List the images directly in a folder and its immediate subfolders, with cover image, image count
    and description for each subfolder.
    """
    return await list_folder(store, folder)


@app_gallery.get("/recent")
async def gallery_recent(
    limit: Annotated[int | None, Query(ge=1, description="Number of folders to return")] = None,
    store: ObjectStore = Depends(get_object_store),
) -> RecentFolders:
    """
    List the top-level folders ordered by their most recently added image, newest first.
    """
    return RecentFolders(folders=await recent_folders(store, limit))


@app_gallery.delete("/folder/{full_path:path}")
async def gallery_delete_folder(
    full_path: Annotated[str, Path(description="Full folder path including the gallery root, e.g. gallery/Picnic")],
    store: ObjectStore = Depends(get_object_store),
):
    """
    Delete a folder: all images below it, and then its description.
    A failure to delete the description does not fail the request, it is returned as a warning.
    """
    result: DeletionResult = await delete_folder(store, full_path)
    if not result.success:
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"message": f"Failed to delete folder {full_path}", "reason": result.reason},
        )
    return result


@app_gallery.delete("/image/{object_id:path}")
async def gallery_delete_image(
    object_id: Annotated[str, Path(description="Object store id of the image")],
    store: ObjectStore = Depends(get_object_store),
):
    """Delete a single image."""
    await delete_image(store, object_id)
    return {"success": True}


@app_gallery.post("/folder-metadata")
def folder_metadata_upsert(body: Annotated[FolderMetadataBody, Body(...)]) -> FolderMetadataItem:
    """
    Create or replace the description of a folder. Descriptions are keyed by the bare folder name.
    """
    row = upsert_folder_metadata(body.folder_name, body.description)
    logging.info(f"Saved description for folder {row.folder_name}")
    return _metadata_item(row)


@app_gallery.get("/folder-metadata")
def folder_metadata_list() -> FolderMetadataList:
    """List all folder descriptions, including those of folders that currently have no images."""
    return FolderMetadataList(metadata=[_metadata_item(row) for row in list_folder_metadata()])


@app_gallery.get("/folder-metadata/{folder_name}")
def folder_metadata_get(folder_name: str) -> FolderMetadataItem:
    row = get_folder_metadata(folder_name)
    if row is None:
        raise HTTPException(status_code=404, detail=f"No description for folder {folder_name}")
    return _metadata_item(row)


@app_gallery.delete("/folder-metadata/{folder_name}", status_code=status.HTTP_204_NO_CONTENT)
def folder_metadata_delete(folder_name: str):
    """Delete the description of a folder, e.g. to clean up descriptions of folders that no longer exist."""
    delete_folder_metadata(folder_name)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
