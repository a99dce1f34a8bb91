"""
Interact with S3-compatible object storage (e.g., AWS S3, MinIO, SeaweedFS, Cloudflare R2).
"""

from datetime import datetime
from typing import AsyncIterable
from typing_extensions import TypedDict

import async_lru
from botocore.exceptions import ClientError
from types_aiobotocore_s3.type_defs import ObjectIdentifierTypeDef

from galleryfolders.config import get_settings
from galleryfolders.connections import s3

PRESIGNED_GET_HOURS_VALID = 24

# S3 refuses more than 1000 keys in a single delete_objects call
MAX_DELETE_KEYS = 1000


class ListObject(TypedDict):
    key: str
    last_modified: datetime | None


async def get_bucket() -> str:
    """
    Get the gallery bucket, taking into account whether we are using a test database.
    """
    settings = get_settings()
    bucket = settings.s3_bucket
    if settings.use_test_db:
        bucket = f"test-{bucket}"
    return await _create_or_get_bucket_name(bucket)


@async_lru.alru_cache(maxsize=100)
async def _create_or_get_bucket_name(bucket: str) -> str:
    try:
        await s3().head_bucket(Bucket=bucket)
    except ClientError as e:
        error = e.response.get("Error", {})
        if error.get("Code") in ("404", "NoSuchBucket"):
            await s3().create_bucket(Bucket=bucket)
        else:
            raise
    return bucket


async def scan_s3_objects(bucket: str, prefix: str = "", limit: int = 1000) -> AsyncIterable[ListObject]:
    """
    Yield at most limit objects, in the (lexicographic key) order the store lists them.
    """
    paginator = s3().get_paginator("list_objects_v2")
    config = {"MaxItems": limit, "PageSize": min(limit, 1000)}
    n = 0
    async for page in paginator.paginate(Bucket=bucket, Prefix=prefix, PaginationConfig=config):
        for content in page.get("Contents", []):
            if "Key" not in content:
                continue
            yield ListObject(
                key=content["Key"],
                last_modified=content.get("LastModified"),
            )
            n += 1
            if n >= limit:
                return


async def delete_s3_by_prefix(bucket: str, prefix: str) -> int:
    """
    Delete all objects whose key starts with prefix. Returns the number of deleted keys.
    """
    if not prefix:
        raise ValueError("Refusing to delete the whole bucket")
    paginator = s3().get_paginator("list_objects_v2")
    deleted = 0
    async for page in paginator.paginate(Bucket=bucket, Prefix=prefix, PaginationConfig={"PageSize": MAX_DELETE_KEYS}):
        keys = [obj["Key"] for obj in page.get("Contents", []) if "Key" in obj]
        await delete_s3_by_key(bucket, keys)
        deleted += len(keys)
    return deleted


async def delete_s3_by_key(bucket: str, keys: list[str]):
    to_delete: list[ObjectIdentifierTypeDef] = [{"Key": key} for key in keys]
    for i in range(0, len(to_delete), MAX_DELETE_KEYS):
        res = await s3().delete_objects(Bucket=bucket, Delete={"Objects": to_delete[i : i + MAX_DELETE_KEYS]})
        if errors := res.get("Errors"):
            failed = ", ".join(f"{e.get('Key')} ({e.get('Code')})" for e in errors)
            raise ClientError(
                {"Error": {"Code": errors[0].get("Code", "DeleteFailed"), "Message": f"Could not delete {failed}"}},
                "DeleteObjects",
            )


async def add_s3_object(bucket: str, key: str, data: bytes, content_type: str | None = None):
    if content_type:
        await s3().put_object(Bucket=bucket, Key=key, Body=data, ContentType=content_type)
    else:
        await s3().put_object(Bucket=bucket, Key=key, Body=data)


async def presigned_get(bucket: str, key: str, hours_valid=PRESIGNED_GET_HOURS_VALID) -> str:
    return await s3().generate_presigned_url(
        "get_object", Params={"Bucket": bucket, "Key": key}, ExpiresIn=hours_valid * 3600
    )
