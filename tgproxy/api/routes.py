"""Route handlers for the proxied Telegram Bot API methods.

Every handler follows the same sequence: resolve the bot token from the
request or the configured default, validate the method's own fields, build the
parameter set, call the Bot API once and pass its JSON body back with HTTP 200.
Validation failures answer 400 and upstream failures answer 500, both with a
``{"ok": false, "description": ...}`` envelope.
"""

import json
import logging
from typing import Any, TypeVar

import aiohttp
from aiohttp import web
from pydantic import ValidationError

from ..config import Config
from ..models import (
    GetMeQuery,
    GetUpdatesQuery,
    ProxyRequest,
    SendMessageRequest,
    SetWebhookRequest,
)
from ..services import telegram
from .messages import (
    BOT_TOKEN_REQUIRED,
    CHAT_ID_AND_TEXT_REQUIRED,
    INTERNAL_SERVER_ERROR,
    INVALID_JSON_BODY,
    INVALID_PARAMETERS,
)

logger = logging.getLogger(__name__)

CONFIG_KEY = web.AppKey("config", Config)
SESSION_KEY = web.AppKey("session", aiohttp.ClientSession)

RequestModel = TypeVar("RequestModel", bound=ProxyRequest)

routes = web.RouteTableDef()


class BadRequest(Exception):
    """Request rejected before any upstream call."""

    def __init__(self, description: str):
        super().__init__(description)
        self.description = description


def error_response(description: str, status: int) -> web.Response:
    """Build the standard error envelope."""
    return web.json_response({"ok": False, "description": description}, status=status)


def query_fields(request: web.Request) -> dict[str, str]:
    """Get query parameters with empty values treated as unset."""
    return {key: value for key, value in request.query.items() if value != ""}


async def body_fields(request: web.Request) -> dict[str, Any]:
    """Parse the JSON object body of a POST request.

    Args:
        request: Incoming request.

    Returns:
        Decoded body, empty if the request has no body.

    Raises:
        BadRequest: If the body is not a UTF-8 encoded JSON object.
    """
    raw = await request.read()
    if not raw.strip():
        return {}

    try:
        data = json.loads(raw)
    except ValueError:
        raise BadRequest(INVALID_JSON_BODY) from None

    if not isinstance(data, dict):
        raise BadRequest(INVALID_JSON_BODY)
    return data


def resolve_token(request: web.Request, fields: dict[str, Any]) -> str:
    """Pick the request's own token, falling back to the configured default.

    Raises:
        BadRequest: If neither is available.
    """
    token = fields.get("token") or request.app[CONFIG_KEY].default_token
    if not token:
        raise BadRequest(BOT_TOKEN_REQUIRED)
    return token


def parse_fields(model: type[RequestModel], fields: dict[str, Any]) -> RequestModel:
    """Validate raw request fields against a request model.

    Raises:
        BadRequest: If a field has the wrong type.
    """
    try:
        return model.model_validate(fields)
    except ValidationError as e:
        names = sorted({".".join(str(part) for part in error["loc"]) for error in e.errors()})
        raise BadRequest(INVALID_PARAMETERS.format(fields=", ".join(names))) from None


async def forward(
    request: web.Request, method: str, token: str, params: dict[str, Any] | None
) -> web.Response:
    """Call the Bot API and relay its JSON body.

    Args:
        request: Incoming request, used to reach the session and config.
        method: Bot API method name.
        token: Resolved bot token.
        params: Outbound parameter set, None for read-only calls.

    Returns:
        HTTP 200 with the upstream body, or HTTP 500 if the call failed.
    """
    config = request.app[CONFIG_KEY]
    try:
        result = await telegram.call(
            request.app[SESSION_KEY],
            method,
            token,
            params,
            api_url=config.telegram.base_url,
        )
    except telegram.TelegramAPIError as e:
        logger.error(f"Error in {method}: {e}")
        return error_response(INTERNAL_SERVER_ERROR.format(error=e), 500)

    return web.json_response(result)


@routes.get("/api/getUpdates")
async def get_updates(request: web.Request) -> web.Response:
    """Proxy ``getUpdates``, the token comes from the query string."""
    try:
        fields = query_fields(request)
        token = resolve_token(request, fields)
        query = parse_fields(GetUpdatesQuery, fields)
    except BadRequest as e:
        return error_response(e.description, 400)

    return await forward(request, "getUpdates", token, query.to_params())


@routes.post("/api/sendMessage")
async def send_message(request: web.Request) -> web.Response:
    """Proxy ``sendMessage``, chat_id and text are mandatory."""
    try:
        fields = await body_fields(request)
        token = resolve_token(request, fields)
        message = parse_fields(SendMessageRequest, fields)
        if not message.has_required_fields:
            raise BadRequest(CHAT_ID_AND_TEXT_REQUIRED)
    except BadRequest as e:
        return error_response(e.description, 400)

    return await forward(request, "sendMessage", token, message.to_params())


@routes.get("/api/getMe")
async def get_me(request: web.Request) -> web.Response:
    """Proxy ``getMe`` as a bodiless read, other query fields are ignored."""
    try:
        fields = query_fields(request)
        token = resolve_token(request, fields)
        parse_fields(GetMeQuery, fields)
    except BadRequest as e:
        return error_response(e.description, 400)

    return await forward(request, "getMe", token, None)


@routes.post("/api/setWebhook")
async def set_webhook(request: web.Request) -> web.Response:
    """Proxy ``setWebhook``, url and drop_pending_updates are always sent."""
    try:
        fields = await body_fields(request)
        token = resolve_token(request, fields)
        webhook = parse_fields(SetWebhookRequest, fields)
    except BadRequest as e:
        return error_response(e.description, 400)

    return await forward(request, "setWebhook", token, webhook.to_params())


@routes.get("/")
async def index(request: web.Request) -> web.FileResponse:
    """Serve the bundled web page."""
    return web.FileResponse(request.app[CONFIG_KEY].server.static_dir / "index.html")
