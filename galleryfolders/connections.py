import logging
from contextlib import AsyncExitStack, asynccontextmanager
from typing import AsyncGenerator

from aiobotocore.config import AioConfig
from aiobotocore.session import get_session
from types_aiobotocore_s3.client import S3Client

from galleryfolders.config import get_settings
from galleryfolders.db import close_db, initialize_db, initialize_if_needed


class GalleryConnections:
    s3_client: S3Client | None
    s3_context_stack: AsyncExitStack | None

    def __init__(
        self,
        s3_client: S3Client | None = None,
        s3_context_stack: AsyncExitStack | None = None,
    ):
        self.s3_client = s3_client
        self.s3_context_stack = s3_context_stack


CONNECTIONS = GalleryConnections()


@asynccontextmanager
async def gallery_connections(database=None) -> AsyncGenerator[None, None]:
    """
    The main context manager to start and stop the connections to the object store and the metadata database.
    Always use this once (and only once):
        - For running the server: in the FastAPI lifespan
        - For tests: in the setup fixture in the tests
        - For CLI commands: within the CLI command
    """
    try:
        await _start_s3()
        _start_db(database)
        yield
    finally:
        await _close_s3()
        close_db()


def s3() -> S3Client:
    """
    Use this function to access the s3 client.
    """
    if CONNECTIONS.s3_client is None:
        raise ConnectionError("S3 client not started")
    return CONNECTIONS.s3_client


def s3_enabled() -> bool:
    settings = get_settings()
    return all([settings.s3_host, settings.s3_access_key, settings.s3_secret_key])


def _start_db(database=None):
    initialize_db(database)
    initialize_if_needed()


async def _start_s3() -> None:
    if s3_enabled() is False:
        logging.warning("S3 is not configured, the gallery cannot be listed")
        return None

    settings = get_settings()
    logging.debug(f"Connecting with S3 at {settings.s3_host}, bucket {settings.s3_bucket}")

    session = get_session()
    client = session.create_client(
        service_name="s3",
        endpoint_url=settings.s3_host,
        region_name=settings.s3_region,
        aws_access_key_id=settings.s3_access_key,
        aws_secret_access_key=settings.s3_secret_key,
        config=AioConfig(signature_version="s3v4"),
    )

    # client is an async context manager, so we use an AsyncExitStack to manage its lifetime
    CONNECTIONS.s3_context_stack = AsyncExitStack()
    CONNECTIONS.s3_client = await CONNECTIONS.s3_context_stack.enter_async_context(client)


async def _close_s3():
    if CONNECTIONS.s3_context_stack is not None:
        await CONNECTIONS.s3_context_stack.aclose()
        CONNECTIONS.s3_client = None
        CONNECTIONS.s3_context_stack = None
