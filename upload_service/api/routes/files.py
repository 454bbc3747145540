"""
File upload and listing endpoints.

Upload flow:
1. Parse the multipart body (10 MiB in memory per part, the rest spills to disk)
2. Stage the ``file`` part in a temporary file
3. Put the staged file to the bucket under ``<key prefix><filename>``

The client-supplied filename is used verbatim as the key suffix. There is no
sanitization and no collision handling; a second upload with the same name
replaces the first.

All responses are plain text.
"""

import asyncio
import logging
import shutil
import tempfile

from fastapi import Request, status
from fastapi.responses import PlainTextResponse
from starlette.datastructures import UploadFile
from starlette.routing import Route

from ..dependencies import get_app_settings, get_object_store
from ..forms import FormParseError, parse_upload_form
from ...infrastructure.storage.client import ObjectStore, StorageError

logger = logging.getLogger(__name__)

FILE_FIELD = "file"
TEMP_FILE_PREFIX = "upload-"


# ---------------------------------------------------------------------------
# Helper Functions
# ---------------------------------------------------------------------------

def build_object_key(key_prefix: str, filename: str) -> str:
    """Storage key for an uploaded file: prefix plus the filename as given."""
    return key_prefix + filename


def render_listing(keys: list[str]) -> str:
    """Render keys as ``Files in S3: [k1 k2 ...]``."""
    return f"Files in S3: [{' '.join(keys)}]"


async def stage_and_put(
    upload: UploadFile,
    key: str,
    store: ObjectStore,
) -> PlainTextResponse:
    """
    Copy the uploaded part into a temporary file and put it to the store.

    The temporary file is deleted when this function returns, whatever
    the outcome.
    """
    try:
        staged = tempfile.NamedTemporaryFile(prefix=TEMP_FILE_PREFIX)
    except OSError as e:
        logger.error("Failed to create temp file", extra={"error": str(e)})
        return PlainTextResponse(
            "Error creating temp file",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    with staged:
        try:
            await upload.seek(0)
            await asyncio.to_thread(shutil.copyfileobj, upload.file, staged)
            staged.flush()
            staged.seek(0)
        except OSError as e:
            logger.error(
                "Failed to stage upload",
                extra={"temp_file": staged.name, "error": str(e)}
            )
            return PlainTextResponse(
                "Error saving file",
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        try:
            await store.put(key, staged)
        except StorageError as e:
            return PlainTextResponse(
                f"Error uploading file: {e}",
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

    logger.info("File uploaded", extra={"key": key})

    return PlainTextResponse("File uploaded successfully!")


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

async def upload_file(request: Request) -> PlainTextResponse:
    """
    Store the multipart ``file`` part under the configured key prefix.

    Returns 400 if the body is not a multipart form or has no ``file``
    part with a filename, 500 if staging or the store put fails.
    """
    settings = get_app_settings(request)
    store = get_object_store(request)

    try:
        form = await parse_upload_form(request)
    except FormParseError as e:
        logger.warning("Unable to parse upload form", extra={"error": str(e)})
        return PlainTextResponse(
            "Unable to parse form",
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    try:
        upload = form.get(FILE_FIELD)
        # a part with an empty filename is a plain value, not a file
        if not isinstance(upload, UploadFile) or not upload.filename:
            logger.warning("Upload form has no file part", extra={"fields": list(form.keys())})
            return PlainTextResponse(
                "Error retrieving the file",
                status_code=status.HTTP_400_BAD_REQUEST,
            )

        key = build_object_key(settings.s3_key_path, upload.filename)
        return await stage_and_put(upload, key, store)
    finally:
        await form.close()


async def list_files(request: Request) -> PlainTextResponse:
    """List object keys under the configured key prefix (first page only)."""
    settings = get_app_settings(request)
    store = get_object_store(request)

    try:
        keys = await store.list(settings.s3_key_path)
    except StorageError as e:
        return PlainTextResponse(
            f"Error listing files: {e}",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return PlainTextResponse(render_listing(keys))


routes = [
    Route("/upload", upload_file, name="upload_file"),
    Route("/list", list_files, name="list_files"),
]
