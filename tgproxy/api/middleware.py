"""Middlewares shared by all routes.

Adds permissive CORS headers so the bundled page, or any other browser client,
can call the API, and turns unexpected handler failures into the standard
error envelope.
"""

import logging
from collections.abc import Awaitable, Callable

from aiohttp import web

from .messages import INTERNAL_SERVER_ERROR

logger = logging.getLogger(__name__)

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]

CORS_ALLOW_METHODS = "GET,HEAD,PUT,PATCH,POST,DELETE"
CORS_ORIGIN_KEY = web.AppKey("cors_allow_origin", str)


def _apply_cors(request: web.Request, headers) -> None:
    headers["Access-Control-Allow-Origin"] = request.app.get(CORS_ORIGIN_KEY, "*")


@web.middleware
async def cors_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    """Attach CORS headers and answer preflight requests.

    Args:
        request: Incoming request.
        handler: Next handler in the chain.

    Returns:
        Handler response with CORS headers, or an empty 204 for preflights.
    """
    if request.method == "OPTIONS" and "Access-Control-Request-Method" in request.headers:
        response = web.Response(status=204)
        _apply_cors(request, response.headers)
        response.headers["Access-Control-Allow-Methods"] = CORS_ALLOW_METHODS
        requested_headers = request.headers.get("Access-Control-Request-Headers")
        if requested_headers:
            response.headers["Access-Control-Allow-Headers"] = requested_headers
            response.headers["Vary"] = "Access-Control-Request-Headers"
        return response

    try:
        response = await handler(request)
    except web.HTTPException as exc:
        _apply_cors(request, exc.headers)
        raise

    _apply_cors(request, response.headers)
    return response


@web.middleware
async def error_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    """Report unexpected API failures with the standard error envelope.

    Only ``/api/`` routes are covered, other routes keep aiohttp's defaults.

    Args:
        request: Incoming request.
        handler: Next handler in the chain.

    Returns:
        Handler response, or a 500 JSON envelope if the handler crashed.
    """
    try:
        return await handler(request)
    except web.HTTPException:
        raise
    except Exception as e:
        if not request.path.startswith("/api/"):
            raise
        logger.exception(f"Unhandled error in {request.method} {request.path}: {e}")
        return web.json_response(
            {"ok": False, "description": INTERNAL_SERVER_ERROR.format(error=e)},
            status=500,
        )
