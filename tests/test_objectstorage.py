import pytest

from galleryfolders.config import get_settings
from galleryfolders.connections import gallery_connections, s3_enabled
from galleryfolders.gallery import list_folder, recent_folders
from galleryfolders.objectstorage.s3bucket import (
    _create_or_get_bucket_name,
    add_s3_object,
    delete_s3_by_prefix,
    get_bucket,
    scan_s3_objects,
)
from galleryfolders.objectstorage.store import S3ObjectStore

if not s3_enabled():
    pytest.skip("S3 not configured, skipping object storage tests", allow_module_level=True)


@pytest.fixture()
async def bucket(metadata_db, monkeypatch):
    monkeypatch.setattr(get_settings(), "use_test_db", True)
    _create_or_get_bucket_name.cache_clear()
    async with gallery_connections(metadata_db):
        bucket = await get_bucket()
        await delete_s3_by_prefix(bucket, "gallery/")
        yield bucket
        await delete_s3_by_prefix(bucket, "gallery/")


@pytest.mark.anyio
async def test_scan_and_delete(bucket):
    for key in ["gallery/Picnic/a.jpg", "gallery/Picnic/b.jpg", "gallery/Picnic2/c.jpg"]:
        await add_s3_object(bucket, key, b"bytes", content_type="image/jpeg")
    keys = [o["key"] async for o in scan_s3_objects(bucket, "gallery/")]
    assert keys == ["gallery/Picnic/a.jpg", "gallery/Picnic/b.jpg", "gallery/Picnic2/c.jpg"]
    assert len([o async for o in scan_s3_objects(bucket, "gallery/", limit=2)]) == 2

    assert await delete_s3_by_prefix(bucket, "gallery/Picnic/") == 2
    assert [o["key"] async for o in scan_s3_objects(bucket, "gallery/")] == ["gallery/Picnic2/c.jpg"]


@pytest.mark.anyio
async def test_store(bucket):
    await add_s3_object(bucket, "gallery/Retreat/c.jpg", b"bytes")
    await add_s3_object(bucket, "gallery/Picnic/", b"")
    store = S3ObjectStore()
    records = [r for r in await store.list_objects(1000) if r.key.startswith("gallery/")]
    assert [(r.id, r.name) for r in records] == [("gallery/Retreat/c.jpg", "c.jpg")]
    assert records[0].url

    listing = await list_folder(store)
    assert [f.name for f in listing.subfolders] == ["Retreat"]
    assert [f.name for f in await recent_folders(store, 1)] == ["Retreat"]

    assert await store.delete_prefix("gallery/Retreat/") == 1
    await store.delete_object("gallery/Picnic/")
    assert [r for r in await store.list_objects(1000) if r.key.startswith("gallery/")] == []
