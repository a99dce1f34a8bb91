"""Gallery folders API: browse an object-store image gallery as a tree of folders."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from peewee import PeeweeException

from galleryfolders.api.gallery import app_gallery
from galleryfolders.connections import gallery_connections
from galleryfolders.errors import ObjectStoreError


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.info("Connecting to object store and metadata database...")
    async with gallery_connections():
        yield


app = FastAPI(
    title="Gallery folders",
    description=__doc__ if __doc__ else "",
    openapi_tags=[
        dict(name="gallery", description="Endpoints to list gallery folders, describe them and delete them"),
    ],
    lifespan=lifespan,
)
app.include_router(app_gallery)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(GZipMiddleware, minimum_size=1000)


@app.exception_handler(ValueError)
async def value_error_exception_handler(request: Request, exc: ValueError):
    return JSONResponse(
        status_code=400,
        content={"message": str(exc)},
    )


@app.exception_handler(ObjectStoreError)
async def object_store_exception_handler(request: Request, exc: ObjectStoreError):
    return JSONResponse(
        status_code=502,
        content={"message": str(exc), "reason": exc.reason, "operation": exc.operation},
    )


@app.exception_handler(PeeweeException)
async def metadata_exception_handler(request: Request, exc: PeeweeException):
    logging.error(f"Folder metadata store failed: {exc}")
    return JSONResponse(
        status_code=500,
        content={"message": f"Failed to access folder metadata: {exc}"},
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc) -> JSONResponse:
    return JSONResponse(
        status_code=422, content={"message": "There was an issue with the data you sent.", "fields_invalid": exc.errors()}
    )
