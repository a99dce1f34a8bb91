"""
The object store as seen by the gallery: list everything (bounded), delete one object, delete a prefix.
"""

import logging
from datetime import datetime, UTC
from typing import Protocol
from urllib.parse import quote

from botocore.exceptions import BotoCoreError, ClientError

from galleryfolders.config import Settings, get_settings
from galleryfolders.errors import ObjectStoreError
from galleryfolders.models import ObjectRecord
from galleryfolders.objectstorage import s3bucket
from galleryfolders.paths import folder_name


class ObjectStore(Protocol):
    async def list_objects(self, limit: int) -> list[ObjectRecord]: ...

    async def delete_object(self, object_id: str) -> None: ...

    async def delete_prefix(self, prefix: str) -> int: ...


class S3ObjectStore:
    """
    ObjectStore backed by an S3 bucket. S3 has no object id besides the key, so the key doubles as id,
    and since gallery objects are never rewritten, LastModified is their creation time.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    async def object_url(self, bucket: str, key: str) -> str:
        if self.settings.s3_public_url:
            return f"{self.settings.s3_public_url.rstrip('/')}/{quote(key)}"
        return await s3bucket.presigned_get(bucket, key)

    async def list_objects(self, limit: int) -> list[ObjectRecord]:
        try:
            bucket = await s3bucket.get_bucket()
            records = []
            async for obj in s3bucket.scan_s3_objects(bucket, limit=limit):
                key = obj["key"]
                if key.endswith("/"):
                    # directory marker created by some S3 consoles
                    continue
                records.append(
                    ObjectRecord(
                        id=key,
                        key=key,
                        url=await self.object_url(bucket, key),
                        name=folder_name(key),
                        created_at=obj["last_modified"] or datetime.fromtimestamp(0, UTC),
                    )
                )
        except (ClientError, BotoCoreError, ConnectionError) as e:
            logging.exception("Listing the object store failed")
            raise ObjectStoreError(f"Failed to list objects: {e}", operation="list") from e
        logging.info(f"Listed {len(records)} objects from bucket {bucket}")
        return records

    async def delete_object(self, object_id: str) -> None:
        try:
            bucket = await s3bucket.get_bucket()
            await s3bucket.delete_s3_by_key(bucket, [object_id])
        except (ClientError, BotoCoreError, ConnectionError) as e:
            logging.exception(f"Deleting object {object_id} failed")
            raise ObjectStoreError(f"Failed to delete {object_id}: {e}", operation="delete") from e

    async def delete_prefix(self, prefix: str) -> int:
        try:
            bucket = await s3bucket.get_bucket()
            return await s3bucket.delete_s3_by_prefix(bucket, prefix)
        except (ClientError, BotoCoreError, ConnectionError) as e:
            logging.exception(f"Deleting objects under {prefix} failed")
            raise ObjectStoreError(f"Failed to delete objects under {prefix}: {e}", operation="delete") from e
