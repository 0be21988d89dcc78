"""Data models for the Telegram proxy.

Defines Pydantic models for the inbound requests of every proxied Telegram
method. Each model validates the caller's fields and builds the parameter set
that is forwarded upstream.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class ProxyRequest(BaseModel):
    """Fields shared by every proxied request.

    Attributes:
        token: Bot token supplied by the caller, None to use the default.
    """

    model_config = ConfigDict(extra="ignore")

    token: str | None = None

    def to_params(self) -> dict[str, Any]:
        """Build the outbound parameter set.

        Fields left unset or sent as null are dropped. Falsy values such as
        ``False`` or ``0`` are kept. The token is never part of the set.

        Returns:
            Mapping of Telegram field names to values.
        """
        return self.model_dump(exclude={"token"}, exclude_none=True)


class GetUpdatesQuery(ProxyRequest):
    """Query parameters of ``GET /api/getUpdates``.

    Attributes:
        offset: Identifier of the first update to return.
        limit: Maximum number of updates to return.
        timeout: Long polling timeout in seconds.
    """

    offset: int | None = None
    limit: int = 100
    timeout: int = 0


class SendMessageRequest(ProxyRequest):
    """JSON body of ``POST /api/sendMessage``.

    Attributes:
        chat_id: Target chat identifier or @channel username.
        text: Message text.
        parse_mode: Telegram formatting mode, e.g. HTML or MarkdownV2.
        reply_to_message_id: Identifier of the message to reply to.
        disable_notification: Send the message silently.
    """

    chat_id: int | str | None = None
    text: str | None = None
    parse_mode: str | None = None
    reply_to_message_id: int | None = None
    disable_notification: bool | None = None

    @property
    def has_required_fields(self) -> bool:
        """Whether both chat_id and a non-empty text are present."""
        return self.chat_id not in (None, "") and bool(self.text)


class GetMeQuery(ProxyRequest):
    """Query parameters of ``GET /api/getMe``, only the token is recognized."""


class SetWebhookRequest(ProxyRequest):
    """JSON body of ``POST /api/setWebhook``.

    Attributes:
        url: HTTPS URL to send updates to, empty string removes the webhook.
        drop_pending_updates: Drop all pending updates.
    """

    url: str | None = None
    drop_pending_updates: bool | None = None

    def to_params(self) -> dict[str, Any]:
        """Build the outbound parameter set with both fields always present.

        Returns:
            Mapping with ``url`` and ``drop_pending_updates``, defaulted to
            an empty string and False when unset.
        """
        return {
            "url": self.url or "",
            "drop_pending_updates": self.drop_pending_updates or False,
        }
