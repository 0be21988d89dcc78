"""Telegram Bot API Proxy Package.

A small aiohttp service that lets browser clients talk to the Telegram Bot API
without exposing CORS problems or hard-coding credentials in the page.

The application is split into:
- Configuration loading from environment variables and an optional YAML file
- Request models that turn query strings and JSON bodies into parameter sets
- The upstream call helper for the Telegram Bot HTTP API
- HTTP route handlers and middlewares
"""
