"""
Gallery folders configuration

We read configuration from 2 sources, in order of precedence (higher is more priority)
- Environment variables
- A .env file, either in the current working directory or in a location specified
  by the GALLERY_ENV_FILE environment variable
"""

import functools
from pathlib import Path
from typing import Annotated

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PREFIX = "gallery_"


class Settings(BaseSettings):
    env_file: Annotated[
        Path,
        Field(
            description="Location of a .env file (if used) relative to working directory",
        ),
    ] = Path(".env")
    host: Annotated[
        str,
        Field(
            description="Host this instance is served at",
        ),
    ] = "http://localhost:5000"

    s3_host: Annotated[str | None, Field(description="Endpoint URL of the S3 compatible object store")] = None
    s3_access_key: Annotated[str | None, Field(description="S3 access key id")] = None
    s3_secret_key: Annotated[str | None, Field(description="S3 secret access key")] = None
    s3_region: Annotated[str | None, Field(description="S3 region (leave empty for MinIO and similar)")] = None
    s3_bucket: Annotated[str, Field(description="Bucket that holds the gallery objects")] = "gallery"
    s3_public_url: Annotated[
        str | None,
        Field(
            description=(
                "Public base URL under which object keys can be fetched (e.g. a CDN). "
                "If not set, object URLs are presigned GET URLs"
            )
        ),
    ] = None

    root_prefix: Annotated[
        str,
        Field(
            description="Fixed root segment that all gallery object keys start with",
        ),
    ] = "gallery"
    listing_limit: Annotated[
        int,
        Field(
            description="Maximum number of objects read from the object store for a single request",
        ),
    ] = 1000
    recent_limit: Annotated[
        int,
        Field(
            description="Default number of folders returned by the recently added view",
        ),
    ] = 4

    database_url: Annotated[
        str,
        Field(
            description="Database URL (peewee db_url syntax) of the folder description store",
        ),
    ] = "sqlite:///galleryfolders.db"

    use_test_db: Annotated[bool, Field(description="Use test buckets (for unit tests)")] = False

    @field_validator("root_prefix")
    @classmethod
    def clean_root_prefix(cls, value: str) -> str:
        value = value.strip("/")
        if not value:
            raise ValueError("root_prefix cannot be empty")
        return value

    @field_validator("listing_limit", "recent_limit")
    @classmethod
    def positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError("limit must be a positive number")
        return value

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX)


@functools.lru_cache()
def get_settings() -> Settings:
    temp = Settings()
    load_dotenv(temp.env_file, override=False)
    return Settings()


def validate_settings():
    settings = get_settings()
    if not all([settings.s3_host, settings.s3_access_key, settings.s3_secret_key]):
        return (
            "The object store is not configured. "
            f"Set {ENV_PREFIX.upper()}S3_HOST, {ENV_PREFIX.upper()}S3_ACCESS_KEY and {ENV_PREFIX.upper()}S3_SECRET_KEY"
            " to list and delete gallery images"
        )


if __name__ == "__main__":
    # Echo the settings
    for k, v in get_settings().model_dump().items():
        print(f"{ENV_PREFIX.upper()}{k.upper()}={v}")
