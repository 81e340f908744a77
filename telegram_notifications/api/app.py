"""FastAPI application for the notification relay"""

from contextlib import asynccontextmanager
from typing import Callable, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import structlog

from telegram_notifications.client import TelegramClient
from telegram_notifications.service import NotificationService, simulate_mode_enabled
from telegram_notifications.version import __version__

from .routes import router

logger = structlog.get_logger(__name__)


def create_app(
    bot_token: str,
    default_chat_id: str,
    telegram_client: Optional[TelegramClient] = None,
    simulate: Callable[[], bool] = simulate_mode_enabled,
) -> FastAPI:
    """
    Build the API application.

    Args:
        bot_token: Telegram bot token
        default_chat_id: Chat used when a request carries no ``chat_id``
        telegram_client: Shared client; created (and closed on shutdown) when omitted
        simulate: Simulate switch, consulted on every request
    """
    owns_client = telegram_client is None
    client = telegram_client or TelegramClient(bot_token)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Telegram Notifications API starting", default_chat_id=default_chat_id)
        yield
        if owns_client:
            await client.aclose()
        logger.info("Telegram Notifications API shutting down")

    app = FastAPI(
        title="Telegram Notifications API",
        description="Send notifications via Telegram Bot API",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.service = NotificationService(client, default_chat_id, simulate=simulate)
    app.include_router(router)
    return app
