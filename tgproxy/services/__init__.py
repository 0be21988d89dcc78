"""External API services package.

Contains the client-side helpers used to reach the Telegram Bot HTTP API.
"""
