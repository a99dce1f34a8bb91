from datetime import datetime, timedelta, UTC

import httpx

from galleryfolders.errors import ObjectStoreError
from galleryfolders.models import ObjectRecord
from galleryfolders.paths import folder_name

T0 = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)


def record(key: str, minutes: int = 0) -> ObjectRecord:
    """An object record for key, created the given number of minutes after T0"""
    return ObjectRecord(
        id=f"id-{key}",
        key=key,
        url=f"https://cdn.test/{key}",
        name=folder_name(key),
        created_at=T0 + timedelta(minutes=minutes),
    )


def records(*keys: str) -> list[ObjectRecord]:
    return [record(key, i) for i, key in enumerate(keys)]


class FakeObjectStore:
    """In-memory object store that can be told to fail"""

    def __init__(self, objects: list[ObjectRecord] | None = None):
        self.objects = list(objects or [])
        self.fail_list = False
        self.fail_delete = False
        self.list_calls = 0
        self.deleted_prefixes: list[str] = []

    def add(self, key: str, minutes: int = 0) -> ObjectRecord:
        obj = record(key, minutes)
        self.objects.append(obj)
        return obj

    def keys(self) -> list[str]:
        return [obj.key for obj in self.objects]

    async def list_objects(self, limit: int) -> list[ObjectRecord]:
        self.list_calls += 1
        if self.fail_list:
            raise ObjectStoreError("store is down", operation="list")
        return self.objects[:limit]

    async def delete_object(self, object_id: str) -> None:
        if self.fail_delete:
            raise ObjectStoreError("store is down", operation="delete")
        self.objects = [obj for obj in self.objects if obj.id != object_id]

    async def delete_prefix(self, prefix: str) -> int:
        if self.fail_delete:
            raise ObjectStoreError("store is down", operation="delete")
        self.deleted_prefixes.append(prefix)
        before = len(self.objects)
        self.objects = [obj for obj in self.objects if not obj.key.startswith(prefix)]
        return before - len(self.objects)


def check(response: httpx.Response, expected: int, msg: str | None = None):
    assert response.status_code == expected, (
        f"{msg or ''}{': ' if msg else ''}Unexpected status: received {response.status_code} != expected {expected};"
        f" reply: {response.text}"
    )
