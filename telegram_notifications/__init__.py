"""
    telegram-notifications - Telegram notification relay.

    Sends messages through the Telegram Bot API, either once from the command
    line or on demand through a small HTTP API.

Example usage:
    from telegram_notifications import NotificationRequest, NotificationService, TelegramClient

    async with TelegramClient(bot_token="123456:ABC") as client:
        service = NotificationService(client, default_chat_id="987654321")
        result = await service.notify(NotificationRequest(message="Deploy finished"))
"""

from .client import TELEGRAM_API_BASE, TelegramClient, build_send_payload
from .config import ResolvedConfig, Settings, resolve_config
from .exceptions import (
    ConfigurationError,
    InvalidRequestError,
    ProviderError,
    TelegramNotificationsError,
    TransportError,
)
from .models import (
    HealthReport,
    HealthStatus,
    NotificationRequest,
    NotificationResult,
    ParseMode,
    ProviderResponse,
    extract_message_id,
    extract_username,
)
from .service import NotificationService, simulate_mode_enabled
from .version import __version__

__all__ = [
    # Client
    "TelegramClient",
    "TELEGRAM_API_BASE",
    "build_send_payload",
    # Service
    "NotificationService",
    "simulate_mode_enabled",
    # Config
    "Settings",
    "ResolvedConfig",
    "resolve_config",
    # Exceptions
    "TelegramNotificationsError",
    "ConfigurationError",
    "InvalidRequestError",
    "TransportError",
    "ProviderError",
    # Models
    "NotificationRequest",
    "NotificationResult",
    "HealthReport",
    "HealthStatus",
    "ParseMode",
    "ProviderResponse",
    "extract_message_id",
    "extract_username",
    # Version
    "__version__",
]
