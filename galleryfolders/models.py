from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class GalleryModel(BaseModel):
    """Base for the API facing models: snake_case in python, camelCase on the wire."""

    model_config = ConfigDict(populate_by_name=True)


######################## OBJECT STORE #########################


class ObjectRecord(GalleryModel):
    """One stored file, as returned by the object store listing."""

    id: str = Field(description="Opaque unique id assigned by the object store")
    key: str = Field(description="Full slash delimited key, starting with the gallery root segment")
    url: str = Field(description="Publicly resolvable address of the object")
    name: str = Field(description="Last path segment of the key (file name)")
    created_at: datetime = Field(alias="createdAt", description="Creation timestamp assigned by the object store")


class ImageItem(GalleryModel):
    id: str
    name: str
    url: str
    created_at: datetime = Field(alias="createdAt")

    @classmethod
    def from_record(cls, record: ObjectRecord) -> "ImageItem":
        return cls(id=record.id, name=record.name, url=record.url, created_at=record.created_at)


######################## FOLDERS #########################


class FolderNode(GalleryModel):
    """A folder inferred from object keys. Never persisted."""

    name: str = Field(description="Path segment identifying this folder at its level")
    path: str = Field(description="Path relative to the gallery root, usable as the folder= parameter")
    full_path: str = Field(alias="fullPath", description="Full prefix including the gallery root, used for deletion")
    cover_image: str = Field(alias="coverImage", description="URL of one object in this folder")
    count: int = Field(description="Number of objects under this folder prefix")
    description: str | None = Field(default=None, description="Description from the folder metadata store")


class RecentFolderNode(FolderNode):
    latest_image_date: datetime = Field(alias="latestImageDate", description="Creation time of the newest object")


class GalleryListing(GalleryModel):
    current_path: str = Field(alias="currentPath", description="Listed folder, relative to the gallery root")
    subfolders: list[FolderNode]
    images: list[ImageItem]
    total_files: int = Field(alias="totalFiles", description="Number of objects in the (bounded) store listing")
    gallery_files: int = Field(alias="galleryFiles", description="Number of listed objects under the gallery root")


class RecentFolders(GalleryModel):
    folders: list[RecentFolderNode]


######################## METADATA #########################


class FolderMetadataBody(GalleryModel):
    folder_name: str = Field(alias="folderName", description="Bare folder name the description belongs to")
    description: str | None = Field(default=None, description="Human entered description")


class FolderMetadataItem(GalleryModel):
    folder_name: str = Field(alias="folderName")
    description: str | None = None
    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")


class FolderMetadataList(GalleryModel):
    metadata: list[FolderMetadataItem]


######################## DELETION #########################


class DeletionResult(GalleryModel):
    success: bool
    reason: str | None = Field(default=None, description="Which backend failed, if the deletion failed")
    warnings: list[str] = Field(default_factory=list, description="Non-fatal failures that did not stop the deletion")
    deleted_objects: int = Field(default=0, alias="deletedObjects")
