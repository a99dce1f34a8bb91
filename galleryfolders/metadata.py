"""
Human authored folder descriptions, stored in the relational database.

Descriptions are keyed by the bare folder name (``Picnic``), not the full path, and are owned
independently of the object store: a row may exist for a folder that currently has no images.
Reads used to decorate folder listings never fail; they fall back to "no description".
"""

import logging
from datetime import datetime, UTC

from peewee import CharField, DateTimeField, Model, PeeweeException, TextField

from galleryfolders.db import db


def utcnow() -> datetime:
    # naive UTC, so every backend reads back what was written
    return datetime.now(UTC).replace(tzinfo=None)


class FolderMetadata(Model):
    folder_name = CharField(unique=True)
    description = TextField(null=True)
    created_at = DateTimeField(default=utcnow)
    updated_at = DateTimeField(default=utcnow)

    class Meta:
        database = db
        table_name = "gallery_folders"


def upsert_folder_metadata(folder_name: str, description: str | None) -> FolderMetadata:
    """
    Create or update the description of a folder, relying on the unique folder_name for atomicity
    """
    folder_name = (folder_name or "").strip()
    if not folder_name:
        raise ValueError("Folder name is required")
    now = utcnow()
    (
        FolderMetadata.insert(folder_name=folder_name, description=description, created_at=now, updated_at=now)
        .on_conflict(
            conflict_target=[FolderMetadata.folder_name],
            update={FolderMetadata.description: description, FolderMetadata.updated_at: now},
        )
        .execute()
    )
    return FolderMetadata.get(FolderMetadata.folder_name == folder_name)


def get_folder_metadata(folder_name: str) -> FolderMetadata | None:
    return FolderMetadata.get_or_none(FolderMetadata.folder_name == folder_name)


def list_folder_metadata() -> list[FolderMetadata]:
    return list(FolderMetadata.select().order_by(FolderMetadata.folder_name))


def delete_folder_metadata(folder_name: str) -> bool:
    """
    Delete the description of a folder.
    :return: True if a row was deleted, False if there was none
    """
    return FolderMetadata.delete().where(FolderMetadata.folder_name == folder_name).execute() > 0


def description_map() -> dict[str, str | None]:
    """
    All descriptions as {folder_name: description}, to join into folder listings.
    If the database cannot be read the listing is shown without descriptions.
    """
    try:
        return {row.folder_name: row.description for row in FolderMetadata.select()}
    except PeeweeException:
        logging.warning("Could not read folder descriptions, continuing without them", exc_info=True)
        return {}
