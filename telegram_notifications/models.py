"""Data models for telegram-notifications."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .version import __version__

SERVICE_NAME = "telegram-notifications"


# =============================================================================
# Enums
# =============================================================================


class ParseMode(str, Enum):
    """Telegram message formatting modes."""

    markdown = "Markdown"
    markdown_v2 = "MarkdownV2"
    html = "HTML"


class HealthStatus(str, Enum):
    """Outcome of the bot identity check."""

    healthy = "healthy"
    unavailable = "unavailable"


# =============================================================================
# Notification Models
# =============================================================================


class NotificationRequest(BaseModel):
    """Inbound notification, from the HTTP body or the command line."""

    message: str = Field(..., description="Message to send")
    chat_id: str | None = Field(None, description="Overrides the default chat ID")
    parse_mode: ParseMode | None = Field(None, description="Markdown, MarkdownV2 or HTML")
    disable_notification: bool | None = Field(None, description="Send silently")


class NotificationResult(BaseModel):
    """Outcome of a single notification attempt."""

    success: bool
    message: str
    telegram_message_id: int | None = None
    code: str | None = None


class HealthReport(BaseModel):
    """Outcome of the bot identity check."""

    status: HealthStatus
    bot_verified: bool
    bot_username: str | None = None
    error: str | None = None

    @property
    def is_healthy(self) -> bool:
        return self.status == HealthStatus.healthy


# =============================================================================
# Telegram Bot API Models
# =============================================================================


class ProviderResponse(BaseModel):
    """Response envelope returned by every Telegram Bot API method."""

    model_config = ConfigDict(extra="ignore")

    ok: bool
    result: Any | None = None
    description: str | None = None
    error_code: int | None = None


def extract_message_id(result: Any) -> int | None:
    """Return ``message_id`` from a sendMessage result, if present."""
    if not isinstance(result, dict):
        return None
    message_id = result.get("message_id")
    if isinstance(message_id, bool) or not isinstance(message_id, int):
        return None
    return message_id


def extract_username(result: Any) -> str | None:
    """Return ``username`` from a getMe result, if present."""
    if not isinstance(result, dict):
        return None
    username = result.get("username")
    return username if isinstance(username, str) else None


# =============================================================================
# HTTP API Models
# =============================================================================


class SendNotificationResponse(BaseModel):
    success: bool
    message: str
    telegram_message_id: int | None = None


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    code: str | None = None


class HealthResponse(BaseModel):
    status: str
    service: str = SERVICE_NAME
    version: str = __version__
    bot_verified: bool
    bot_username: str | None = None


class EndpointInfo(BaseModel):
    method: str
    path: str
    description: str


class InfoResponse(BaseModel):
    name: str = "Telegram Notifications API"
    version: str = __version__
    description: str = "Send notifications via Telegram Bot API"
    endpoints: list[EndpointInfo] = Field(
        default_factory=lambda: [
            EndpointInfo(method="GET", path="/", description="API information and available endpoints"),
            EndpointInfo(method="GET", path="/health", description="Health check and bot status"),
            EndpointInfo(method="POST", path="/notify", description="Send a notification message"),
            EndpointInfo(
                method="POST",
                path="/send",
                description="Send a notification message (alias for /notify)",
            ),
        ]
    )
