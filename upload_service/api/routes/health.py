"""
Health check endpoint.

``/healthz`` is a liveness check: it answers 200 with an empty body for any
method and does not touch the object store.
"""

from fastapi import Request, Response, status
from starlette.routing import Route


async def healthz(request: Request) -> Response:
    """Is the process alive?"""
    return Response(status_code=status.HTTP_200_OK)


routes = [
    Route("/healthz", healthz, name="healthz", include_in_schema=False),
]
