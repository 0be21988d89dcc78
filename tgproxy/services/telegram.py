"""Telegram Bot API call helper.

Issues a single request to the Bot API for a given method and token and returns
the parsed JSON body as is. Interpreting the body, including its own ``ok``
flag, is left to the caller.
"""

import asyncio
import json
import logging
from typing import Any

import aiohttp

logger = logging.getLogger(__name__)

TELEGRAM_API_URL = "https://api.telegram.org"

INVALID_JSON_RESPONSE = "Invalid JSON response from Telegram API"
UPSTREAM_TIMEOUT = "Request to Telegram API timed out"


class TelegramAPIError(Exception):
    """Base error for failed calls to the Telegram Bot API."""


class TransportError(TelegramAPIError):
    """The request could not be completed (connection, DNS, timeout)."""


class InvalidResponseError(TelegramAPIError):
    """The response body is not valid JSON."""


async def call(
    session: aiohttp.ClientSession,
    method: str,
    token: str,
    params: dict[str, Any] | None = None,
    *,
    api_url: str = TELEGRAM_API_URL,
) -> Any:
    """Call a Telegram Bot API method.

    Sends a POST with ``params`` as JSON body when parameters are given, and a
    bodiless GET otherwise. The whole response body is read before parsing.

    Args:
        session: HTTP session for requests.
        method: Bot API method name, e.g. ``getUpdates``.
        token: Bot token, embedded into the request path.
        params: Method parameters, None for read-only calls.
        api_url: Bot API base URL without trailing slash.

    Returns:
        Parsed JSON body, regardless of the HTTP status code.

    Raises:
        TransportError: If the request fails or times out.
        InvalidResponseError: If the body is not valid JSON.
    """
    url = f"{api_url}/bot{token}/{method}"
    logger.debug(f"Calling Telegram API method {method} ({'POST' if params is not None else 'GET'})")

    try:
        if params is None:
            request = session.get(url)
        else:
            request = session.post(url, json=params)

        async with request as response:
            body = await response.read()
            status = response.status
    except asyncio.TimeoutError as e:
        raise TransportError(UPSTREAM_TIMEOUT) from e
    except aiohttp.ClientError as e:
        raise TransportError(str(e) or e.__class__.__name__) from e

    logger.debug(f"Telegram API method {method} answered with HTTP {status}")

    try:
        return json.loads(body)
    except ValueError as e:
        raise InvalidResponseError(INVALID_JSON_RESPONSE) from e
