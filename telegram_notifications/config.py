"""Configuration settings for telegram-notifications"""

from dataclasses import dataclass, field
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError

DEFAULT_MESSAGE = "Hello from Telegram Bot! 🤖"
DEFAULT_PORT = 3000
DEFAULT_HOST = "0.0.0.0"
DEFAULT_LOG_LEVEL = "INFO"

# Names understood by both stdlib logging and uvicorn
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    """Environment settings"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    TELEGRAM_BOT_TOKEN: Optional[str] = None
    TELEGRAM_CHAT_ID: Optional[str] = None
    # Kept as a string; an unparseable PORT falls back to the CLI value
    PORT: Optional[str] = None
    LOG_LEVEL: str = DEFAULT_LOG_LEVEL


@dataclass
class ResolvedConfig:
    """Process configuration after merging CLI flags with the environment."""

    bot_token: str = field(repr=False)
    chat_id: str
    message: str = DEFAULT_MESSAGE
    server: bool = False
    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST
    log_level: str = DEFAULT_LOG_LEVEL


def _parse_log_level(value: str) -> str:
    level = value.strip().upper()
    return level if level in LOG_LEVELS else DEFAULT_LOG_LEVEL


def _parse_port(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        port = int(value)
    except ValueError:
        return None
    return port if 0 <= port <= 65535 else None


def resolve_config(
    bot_token: Optional[str] = None,
    chat_id: Optional[str] = None,
    message: str = DEFAULT_MESSAGE,
    server: bool = False,
    port: int = DEFAULT_PORT,
    host: str = DEFAULT_HOST,
    settings: Optional[Settings] = None,
) -> ResolvedConfig:
    """Merge command-line values with environment settings.

    Token and chat ID given on the command line take precedence over the
    environment. ``PORT`` from the environment overrides ``port`` when it is
    a valid port number. An unknown ``LOG_LEVEL`` falls back to ``INFO``.

    Raises:
        ConfigurationError: Token or chat ID missing or empty.
    """
    settings = settings or Settings()

    token = bot_token if bot_token is not None else settings.TELEGRAM_BOT_TOKEN
    if token is None:
        raise ConfigurationError(
            "Bot token is required. Set TELEGRAM_BOT_TOKEN environment variable or use --bot-token flag"
        )

    chat = chat_id if chat_id is not None else settings.TELEGRAM_CHAT_ID
    if chat is None:
        raise ConfigurationError(
            "Chat ID is required. Set TELEGRAM_CHAT_ID environment variable or use --chat-id flag"
        )

    if not token:
        raise ConfigurationError(
            "Bot token cannot be empty. Set TELEGRAM_BOT_TOKEN environment variable or use --bot-token flag"
        )
    if not chat:
        raise ConfigurationError(
            "Chat ID cannot be empty. Set TELEGRAM_CHAT_ID environment variable or use --chat-id flag"
        )

    env_port = _parse_port(settings.PORT)

    return ResolvedConfig(
        bot_token=token,
        chat_id=chat,
        message=message,
        server=server,
        port=env_port if env_port is not None else port,
        host=host,
        log_level=_parse_log_level(settings.LOG_LEVEL),
    )
