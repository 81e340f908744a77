"""Telegram Bot API client.

Wraps the two Bot API methods the service needs, ``sendMessage`` and
``getMe``. Every Bot API response is an envelope with an ``ok`` flag;
a response with ``ok: false`` is raised as :class:`ProviderError` whatever
its HTTP status.

See: https://core.telegram.org/bots/api#making-requests
"""

from typing import Any

import httpx
import structlog

from .exceptions import ProviderError, TransportError
from .models import ParseMode, ProviderResponse

logger = structlog.get_logger(__name__)

TELEGRAM_API_BASE = "https://api.telegram.org/bot"

# InvalidURL is raised while building the request and is not an HTTPError
_REQUEST_ERRORS = (httpx.HTTPError, httpx.InvalidURL)


def build_send_payload(
    chat_id: str,
    text: str,
    parse_mode: ParseMode | str | None = None,
    disable_notification: bool = False,
) -> dict[str, Any]:
    """Build the sendMessage JSON body.

    ``parse_mode`` and ``disable_notification`` are left out entirely when
    unset; Telegram must never receive ``null`` or ``false`` for them.
    """
    payload: dict[str, Any] = {"chat_id": chat_id, "text": text}
    if parse_mode:
        payload["parse_mode"] = parse_mode.value if isinstance(parse_mode, ParseMode) else parse_mode
    if disable_notification:
        payload["disable_notification"] = True
    return payload


class TelegramClient:
    """Async client for the Telegram Bot API.

    Example:
        ```python
        async with TelegramClient(bot_token="123456:ABC") as bot:
            me = await bot.get_me()
            await bot.send_message("987654321", "Deploy finished")
        ```
    """

    def __init__(
        self,
        bot_token: str,
        http_client: httpx.AsyncClient | None = None,
        api_base: str = TELEGRAM_API_BASE,
    ) -> None:
        """
        Initialize the Telegram client.

        Args:
            bot_token: Bot token issued by @BotFather
            http_client: Shared HTTP client. When omitted the client creates
                and owns one.
            api_base: Bot API base URL the token is appended to
        """
        self._bot_token = bot_token
        self.api_url = f"{api_base}{bot_token}"
        self._http = http_client if http_client is not None else httpx.AsyncClient()
        self._owns_http = http_client is None

    async def __aenter__(self) -> "TelegramClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http:
            await self._http.aclose()

    def __repr__(self) -> str:
        return "TelegramClient(bot_token='***')"

    def _redact(self, text: str) -> str:
        return text.replace(self._bot_token, "***") if self._bot_token else text

    async def send_message(
        self,
        chat_id: str,
        text: str,
        parse_mode: ParseMode | str | None = None,
        disable_notification: bool = False,
    ) -> ProviderResponse:
        """Send a text message to a chat.

        Args:
            chat_id: Target chat, user or channel ID
            text: Message text
            parse_mode: Optional formatting mode
            disable_notification: Deliver without sound

        Returns:
            The parsed response envelope; ``result`` holds the sent Message.

        Raises:
            TransportError: Request failed or the response was not an envelope.
            ProviderError: Telegram rejected the message.
        """
        payload = build_send_payload(chat_id, text, parse_mode, disable_notification)
        try:
            response = await self._http.post(f"{self.api_url}/sendMessage", json=payload)
        except _REQUEST_ERRORS as e:
            raise TransportError(
                self._redact(f"Failed to send request to Telegram API: {e}"),
                original_error=e,
            ) from e
        return self._parse_response(response, method="sendMessage")

    async def get_me(self) -> ProviderResponse:
        """Return basic information about the bot; used to verify the token."""
        try:
            response = await self._http.get(f"{self.api_url}/getMe")
        except _REQUEST_ERRORS as e:
            raise TransportError(
                self._redact(f"Failed to send getMe request to Telegram API: {e}"),
                original_error=e,
            ) from e
        return self._parse_response(response, method="getMe")

    def _parse_response(self, response: httpx.Response, method: str) -> ProviderResponse:
        # ValidationError and JSONDecodeError both derive from ValueError
        try:
            envelope = ProviderResponse.model_validate(response.json())
        except ValueError as e:
            logger.error(
                "telegram_response_unparseable",
                method=method,
                status_code=response.status_code,
            )
            raise TransportError(
                "Failed to parse Telegram API response",
                details={"status_code": response.status_code},
                original_error=e,
            ) from e

        if not envelope.ok:
            logger.warning(
                "telegram_api_error",
                method=method,
                error_code=envelope.error_code,
                description=envelope.description,
            )
            raise ProviderError(envelope.description or "Unknown error", envelope.error_code)

        return envelope
