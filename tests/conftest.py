import pytest
from httpx import ASGITransport, AsyncClient
from peewee import SqliteDatabase

from galleryfolders import api
from galleryfolders.api.common import get_object_store
from galleryfolders.db import initialize_db, initialize_if_needed
from tests.tools import FakeObjectStore


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def metadata_db(tmp_path):
    database = initialize_db(SqliteDatabase(str(tmp_path / "metadata.db")))
    initialize_if_needed()
    yield database
    database.close()


@pytest.fixture()
def store():
    return FakeObjectStore()


@pytest.fixture()
def picnic_store():
    """The Picnic/Retreat gallery: two Picnic images and one newer Retreat image"""
    store = FakeObjectStore()
    store.add("gallery/Picnic/a.jpg", 1)
    store.add("gallery/Picnic/b.jpg", 2)
    store.add("gallery/Retreat/c.jpg", 3)
    return store


@pytest.fixture()
async def client(store):
    api.app.dependency_overrides[get_object_store] = lambda: store
    async with AsyncClient(transport=ASGITransport(app=api.app), base_url="http://test") as client:
        yield client
    api.app.dependency_overrides.clear()
