"""Application entry point.

Builds the aiohttp application that proxies browser requests to the Telegram
Bot API, configures logging, and runs the HTTP server. The configuration is
created once here and injected into the application.
"""

import logging
from collections.abc import AsyncIterator

import aiohttp
from aiohttp import web

from .api.middleware import CORS_ORIGIN_KEY, cors_middleware, error_middleware
from .api.routes import CONFIG_KEY, SESSION_KEY, routes
from .config import Config

logger = logging.getLogger(__name__)


async def client_session(app: web.Application) -> AsyncIterator[None]:
    """Open the upstream HTTP session on startup and close it on shutdown."""
    telegram_config = app[CONFIG_KEY].telegram
    timeout = aiohttp.ClientTimeout(
        total=telegram_config.timeout if telegram_config.timeout_enabled else None
    )

    async with aiohttp.ClientSession(timeout=timeout) as session:
        app[SESSION_KEY] = session
        logger.info(f"Upstream session opened for {telegram_config.base_url}")
        yield

    logger.info("Upstream session closed")


def create_app(config: Config) -> web.Application:
    """Create the proxy application.

    Args:
        config: Application configuration, used by every handler.

    Returns:
        Configured aiohttp application ready to be served.
    """
    app = web.Application(middlewares=[cors_middleware, error_middleware])
    app[CONFIG_KEY] = config
    app[CORS_ORIGIN_KEY] = config.server.cors_allow_origin

    app.add_routes(routes)
    if config.server.static_dir.is_dir():
        app.router.add_static("/static/", config.server.static_dir)
    else:
        logger.warning(f"Static directory {config.server.static_dir} not found")

    app.cleanup_ctx.append(client_session)
    return app


def main() -> None:
    """Main application entry point.

    Loads configuration, configures logging and serves the proxy until
    interrupted.
    """
    config = Config()

    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=config.server.log_level.upper(),
    )

    if config.default_token:
        logger.info("Default bot token configured")
    else:
        logger.warning("TELEGRAM_BOT_TOKEN not set; requests must provide a token")

    app = create_app(config)
    logger.info(f"Starting proxy on http://{config.server.host}:{config.server.port}")
    web.run_app(app, host=config.server.host, port=config.server.port, print=None)


if __name__ == "__main__":
    main()
