"""HTTP surface of the proxy.

Contains the route handlers for the proxied Telegram methods, the middlewares
shared by all routes, and the response description templates.
"""
