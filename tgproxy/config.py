"""Configuration management for the Telegram proxy.

Handles application configuration from environment variables, an optional YAML
config file, and default settings. Provides structured configuration classes
for the upstream Telegram API and the local HTTP server.
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_STATIC_DIR = Path(__file__).parent / "static"


class TelegramConfig(BaseSettings):
    """Upstream Telegram Bot API settings.

    Attributes:
        bot_token: Default bot token used when a request carries none.
        api_url: Base URL of the Bot API server, without trailing slash.
        timeout: Total timeout for one upstream call in seconds, <= 0 disables it.
    """

    model_config = SettingsConfigDict(populate_by_name=True)

    bot_token: str | None = Field(default=None, validation_alias="TELEGRAM_BOT_TOKEN")
    api_url: str = Field(default="https://api.telegram.org", validation_alias="TELEGRAM_API_URL")
    timeout: float = Field(default=60.0, validation_alias="TELEGRAM_API_TIMEOUT")

    @property
    def base_url(self) -> str:
        """Get the API URL normalized for path concatenation.

        Returns:
            API URL without a trailing slash.
        """
        return self.api_url.rstrip("/")

    @property
    def timeout_enabled(self) -> bool:
        """Whether a client-side timeout should be applied to upstream calls."""
        return self.timeout > 0


class ServerConfig(BaseSettings):
    """Local HTTP server settings.

    Attributes:
        host: Interface to bind, localhost unless explicitly overridden.
        port: TCP port to listen on.
        static_dir: Directory holding index.html and other static assets.
        cors_allow_origin: Value of the Access-Control-Allow-Origin header.
        log_level: Root logging level name.
    """

    model_config = SettingsConfigDict(populate_by_name=True)

    host: str = Field(default="127.0.0.1", validation_alias="HOST")
    port: int = Field(default=3000, validation_alias="PORT")
    static_dir: Path = Field(default=DEFAULT_STATIC_DIR, validation_alias="STATIC_DIR")
    cors_allow_origin: str = Field(default="*", validation_alias="CORS_ALLOW_ORIGIN")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")


class Config:
    """Application configuration manager.

    Combines environment variables, an optional YAML file and defaults into
    typed sections. Values from the YAML file take precedence over the
    environment. Sections passed in explicitly are used as is.
    """

    def __init__(
        self,
        config_file: Path | str | None = None,
        telegram: TelegramConfig | None = None,
        server: ServerConfig | None = None,
    ):
        """Initialize configuration manager.

        Args:
            config_file: Path to a YAML config file, defaults to $TGPROXY_CONFIG.
            telegram: Prebuilt Telegram section, skips loading when given.
            server: Prebuilt server section, skips loading when given.
        """
        if config_file is None:
            config_file = os.environ.get("TGPROXY_CONFIG") or None

        self.config_file = Path(config_file) if config_file else None
        file_data = self._load_file()

        self.telegram = telegram or TelegramConfig(**(file_data.get("telegram") or {}))
        self.server = server or ServerConfig(**(file_data.get("server") or {}))

    def _load_file(self) -> dict[str, Any]:
        """Load section overrides from the YAML config file.

        Returns:
            Mapping of section name to field overrides, empty if no file.

        Raises:
            ValueError: If the file does not contain a mapping.
        """
        if self.config_file is None or not self.config_file.exists():
            return {}

        with open(self.config_file) as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Config file {self.config_file} must contain a mapping")

        return data

    @property
    def default_token(self) -> str | None:
        """Get the process-wide default bot token, None if not configured."""
        return self.telegram.bot_token or None
