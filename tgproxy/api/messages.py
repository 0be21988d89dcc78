"""Response description templates.

Contains the description strings the route handlers put into their
``{"ok": false, "description": ...}`` envelopes, so clients and tests can rely
on stable wording.
"""

# Validation errors (HTTP 400)
BOT_TOKEN_REQUIRED = "Bot token is required"
CHAT_ID_AND_TEXT_REQUIRED = "chat_id and text are required"
INVALID_JSON_BODY = "Request body must be a JSON object"
INVALID_PARAMETERS = "Invalid parameters: {fields}"

# Upstream failures (HTTP 500)
INTERNAL_SERVER_ERROR = "Internal server error: {error}"
