"""
Telegram notification exceptions.

ConfigurationError stops the process at startup. InvalidRequestError is
raised before anything is sent. TransportError and ProviderError split
failures talking to the Bot API into "no usable answer" and "Telegram said
no". NotificationService turns all of them except ConfigurationError into
failed results.
"""

from typing import Any


class TelegramNotificationsError(Exception):
    """Base exception; carries a readable message plus structured details."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.original_error = original_error

    def to_dict(self) -> dict[str, Any]:
        """Error name, message and details, for logs and JSON bodies."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, details={self.details})"


class ConfigurationError(TelegramNotificationsError):
    """Bot token, chat ID or another setting is missing or invalid."""

    pass


class InvalidRequestError(TelegramNotificationsError):
    """Notification request rejected locally, before reaching Telegram."""

    def __init__(self, message: str, code: str = "INVALID_REQUEST"):
        super().__init__(message, details={"code": code})
        self.code = code


class TransportError(TelegramNotificationsError):
    """Request to the Telegram API could not complete or its response could not be parsed."""

    pass


class ProviderError(TelegramNotificationsError):
    """Telegram API answered with ``ok: false``."""

    def __init__(self, description: str, error_code: int | None = None):
        message = f"Telegram API error: {description}"
        if error_code is not None:
            message += f" (code: {error_code})"
        super().__init__(
            message,
            details={"description": description, "error_code": error_code},
        )
        self.description = description
        self.error_code = error_code
