"""Permissive cross-origin headers applied to every response."""

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from src.books_api.runtime.config.config_data import CORSConfig


def cors_headers(cors: CORSConfig | None = None) -> dict[str, str]:
    """Render the CORS response headers for a configuration."""
    cors = cors or CORSConfig()
    return {
        "Access-Control-Allow-Origin": cors.allow_origin,
        "Access-Control-Allow-Methods": ", ".join(cors.allow_methods),
        "Access-Control-Allow-Headers": ", ".join(cors.allow_headers),
    }


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """Write the CORS headers on every response and answer preflight requests.

    Any ``OPTIONS`` request gets an empty 200 without reaching the router.
    """

    def __init__(self, app: ASGIApp, cors: CORSConfig | None = None) -> None:
        super().__init__(app)
        self._headers = cors_headers(cors)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=self._headers)

        response = await call_next(request)
        response.headers.update(self._headers)
        return response
