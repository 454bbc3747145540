"""
Multipart form parsing for uploads.

Starlette keeps each uploaded part in a SpooledTemporaryFile. The default
spool threshold is 1 MiB; uploads here keep up to 10 MiB per part in memory
before spilling to disk.
"""

from fastapi import Request
from starlette.datastructures import FormData
from starlette.formparsers import MultiPartException, MultiPartParser

MAX_MEMORY_BYTES = 10 << 20


class FormParseError(Exception):
    """Raised when the request body is not a readable multipart form."""
    pass


class UploadFormParser(MultiPartParser):
    spool_max_size = MAX_MEMORY_BYTES


async def parse_upload_form(request: Request) -> FormData:
    """
    Parse the request body as multipart/form-data.

    The caller owns the returned form and must ``await form.close()``
    to release spooled parts.

    Raises:
        FormParseError: content type is not multipart or the body is malformed
    """
    content_type = request.headers.get("content-type", "")
    if not content_type.lower().startswith("multipart/form-data"):
        raise FormParseError(f"unsupported content type: {content_type or 'none'}")

    parser = UploadFormParser(request.headers, request.stream())
    try:
        return await parser.parse()
    except MultiPartException as e:
        raise FormParseError(e.message) from e
    except ValueError as e:
        # python-multipart rejects bodies that do not follow the boundary
        raise FormParseError(str(e)) from e
