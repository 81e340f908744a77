"""Notification pipeline: validate, resolve destination, forward to Telegram."""

import os
from typing import Callable

import structlog

from .client import TelegramClient
from .exceptions import InvalidRequestError, ProviderError, TransportError
from .models import (
    HealthReport,
    HealthStatus,
    NotificationRequest,
    NotificationResult,
    extract_message_id,
    extract_username,
)

logger = structlog.get_logger(__name__)

SIMULATE_ENV_VAR = "TELEGRAM_NOTIFICATIONS_SKIP_VALIDATION"
SIMULATED_MESSAGE_ID = 42
SIMULATED_BOT_USERNAME = "test-bot"

EMPTY_MESSAGE = "EMPTY_MESSAGE"
TELEGRAM_API_ERROR = "TELEGRAM_API_ERROR"


def simulate_mode_enabled() -> bool:
    """Read the simulate switch from the environment."""
    return os.getenv(SIMULATE_ENV_VAR, "").lower() == "true"


def _preview(text: str, limit: int = 50) -> str:
    return text[:limit]


class NotificationService:
    """Turns notification requests into Telegram messages.

    The ``simulate`` callable is consulted on every call so the switch can be
    flipped while the process is running. When it returns True no request
    reaches Telegram and placeholder results are returned instead.
    """

    def __init__(
        self,
        client: TelegramClient,
        default_chat_id: str,
        simulate: Callable[[], bool] = simulate_mode_enabled,
    ) -> None:
        self.client = client
        self.default_chat_id = default_chat_id
        self._simulate = simulate

    def validate_request(self, request: NotificationRequest) -> None:
        if not request.message:
            raise InvalidRequestError("Message cannot be empty", code=EMPTY_MESSAGE)

    def resolve_chat_id(self, request: NotificationRequest) -> str:
        return request.chat_id or self.default_chat_id

    async def notify(self, request: NotificationRequest) -> NotificationResult:
        """Validate and send one notification. Failures are returned, not raised."""
        logger.info("notification_request_received", preview=_preview(request.message))

        try:
            self.validate_request(request)
        except InvalidRequestError as e:
            logger.warning("notification_rejected", reason=e.message)
            return NotificationResult(success=False, message=e.message, code=e.code)

        chat_id = self.resolve_chat_id(request)

        if self._simulate():
            logger.info("notification_simulated", chat_id=chat_id)
            return NotificationResult(
                success=True,
                message="Notification sent successfully (test mode)",
                telegram_message_id=SIMULATED_MESSAGE_ID,
            )

        try:
            response = await self.client.send_message(
                chat_id,
                request.message,
                parse_mode=request.parse_mode,
                disable_notification=bool(request.disable_notification),
            )
        except (ProviderError, TransportError) as e:
            logger.error("notification_failed", chat_id=chat_id, error=e.message)
            return NotificationResult(
                success=False,
                message=f"Failed to send notification: {e.message}",
                code=TELEGRAM_API_ERROR,
            )

        logger.info("notification_sent", chat_id=chat_id)
        return NotificationResult(
            success=True,
            message="Notification sent successfully",
            telegram_message_id=extract_message_id(response.result),
        )

    async def check_health(self) -> HealthReport:
        """Verify the bot token with getMe. Never raises."""
        if self._simulate():
            logger.info("health_check_simulated")
            return HealthReport(
                status=HealthStatus.healthy,
                bot_verified=False,
                bot_username=SIMULATED_BOT_USERNAME,
            )

        try:
            response = await self.client.get_me()
        except (ProviderError, TransportError) as e:
            logger.error("health_check_failed", error=e.message)
            return HealthReport(status=HealthStatus.unavailable, bot_verified=False, error=e.message)

        return HealthReport(
            status=HealthStatus.healthy,
            bot_verified=True,
            bot_username=extract_username(response.result),
        )
