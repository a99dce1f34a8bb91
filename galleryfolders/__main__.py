"""
Gallery folders API and management commands
"""

import argparse
import asyncio
import inspect
import json
import logging
import sys
from pathlib import Path

import uvicorn
from uvicorn.config import LOGGING_CONFIG

from galleryfolders.config import ENV_PREFIX, get_settings, validate_settings
from galleryfolders.connections import gallery_connections
from galleryfolders.deletion import delete_folder
from galleryfolders.errors import GalleryError
from galleryfolders.gallery import list_folder, recent_folders
from galleryfolders.metadata import upsert_folder_metadata
from galleryfolders.objectstorage.store import S3ObjectStore


def run(args):
    logging.info(f"Starting server at port {args.port}, debug={not args.nodebug}")
    if message := validate_settings():
        logging.warning(message)
    logging.info(
        "To change server config, create an .env file and/or set environment parameters,\n"
        f"{' ' * 26}see galleryfolders/config.py for more information.\n"
    )
    log_config = "logging.yml" if Path("logging.yml").exists() else LOGGING_CONFIG
    uvicorn.run(
        "galleryfolders.api:app", host="0.0.0.0", reload=not args.nodebug, port=int(args.port), log_config=log_config
    )


def config_gallery(_args):
    for k, v in get_settings().model_dump().items():
        if v is None:
            print(f"#{ENV_PREFIX.upper()}{k.upper()}=")
        else:
            print(f"{ENV_PREFIX.upper()}{k.upper()}={v}")


async def create_db(_args):
    async with gallery_connections():
        logging.info(f"Metadata tables are ready in {get_settings().database_url}")


def _dump(model) -> str:
    return json.dumps(model.model_dump(mode="json", by_alias=True), indent=2)


async def list_gallery(args):
    async with gallery_connections():
        listing = await list_folder(S3ObjectStore(), args.folder)
    print(_dump(listing))


async def list_recent(args):
    async with gallery_connections():
        folders = await recent_folders(S3ObjectStore(), args.k)
    for folder in folders:
        print(f"{folder.latest_image_date.isoformat()}  {folder.full_path} ({folder.count} images)")


async def delete_gallery_folder(args):
    async with gallery_connections():
        result = await delete_folder(S3ObjectStore(), args.full_path)
    for warning in result.warnings:
        logging.warning(warning)
    if not result.success:
        logging.error(f"Could not delete {args.full_path}: {result.reason} failed")
        sys.exit(1)
    print(f"Deleted {args.full_path} ({result.deleted_objects} objects)")


async def set_description(args):
    async with gallery_connections():
        row = upsert_folder_metadata(args.folder_name, args.description)
    print(f"{row.folder_name}: {row.description}")


def main():
    parser = argparse.ArgumentParser(description=__doc__, prog="python -m galleryfolders")

    subparsers = parser.add_subparsers(dest="action", title="action", help="Action to perform:", required=True)
    p = subparsers.add_parser("run", help="Run the backend API in development mode")
    p.add_argument(
        "--no-debug",
        action="store_true",
        dest="nodebug",
        help="Disable debug mode (useful for testing downstream clients)",
    )
    p.add_argument("-p", "--port", help="Port", default=5000)
    p.set_defaults(func=run)

    p = subparsers.add_parser("config", help="Print the current settings in .env format")
    p.set_defaults(func=config_gallery)

    p = subparsers.add_parser("create-db", help="Create the folder description table if needed")
    p.set_defaults(func=create_db)

    p = subparsers.add_parser("list", help="List a gallery folder (default: the root)")
    p.add_argument("folder", nargs="?", default="", help="Folder relative to the gallery root")
    p.set_defaults(func=list_gallery)

    p = subparsers.add_parser("recent", help="List the most recently added folders")
    p.add_argument("-k", type=int, default=None, help="Number of folders")
    p.set_defaults(func=list_recent)

    p = subparsers.add_parser("delete-folder", help="Delete a folder with all its images and its description")
    p.add_argument("full_path", help="Full folder path, e.g. gallery/Picnic")
    p.set_defaults(func=delete_gallery_folder)

    p = subparsers.add_parser("set-description", help="Set the description of a folder")
    p.add_argument("folder_name", help="Bare folder name, e.g. Picnic")
    p.add_argument("description", nargs="?", default=None, help="Description (omit to clear)")
    p.set_defaults(func=set_description)

    args = parser.parse_args()

    logging.basicConfig(format="[%(levelname)-7s:%(name)-15s] %(message)s", level=logging.INFO)
    for name in ("botocore", "aiobotocore"):
        logging.getLogger(name).setLevel(logging.WARNING)

    try:
        if inspect.iscoroutinefunction(args.func):
            asyncio.run(args.func(args))
        else:
            args.func(args)
    except GalleryError as e:
        logging.error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
