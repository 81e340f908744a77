"""Command line entry point: send one message, or serve the HTTP API."""

import asyncio
import sys

import click
import structlog
import uvicorn
from dotenv import find_dotenv, load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from telegram_notifications.api import create_app
from telegram_notifications.client import TelegramClient
from telegram_notifications.config import (
    DEFAULT_HOST,
    DEFAULT_MESSAGE,
    DEFAULT_PORT,
    ResolvedConfig,
    resolve_config,
)
from telegram_notifications.exceptions import ConfigurationError, ProviderError, TransportError
from telegram_notifications.logging_config import configure_logging
from telegram_notifications.models import NotificationRequest, ParseMode, extract_username
from telegram_notifications.service import NotificationService, simulate_mode_enabled
from telegram_notifications.version import __version__

logger = structlog.get_logger(__name__)
console = Console()


async def verify_bot(client: TelegramClient) -> str | None:
    """Check the token with getMe and return the bot username."""
    response = await client.get_me()
    return extract_username(response.result)


async def _startup_check(config: ResolvedConfig) -> None:
    async with TelegramClient(config.bot_token) as client:
        username = await verify_bot(client)
    if username:
        logger.info("bot_verified", username=f"@{username}")
    else:
        logger.info("bot_verified")


async def _send_once(config: ResolvedConfig) -> bool:
    async with TelegramClient(config.bot_token) as client:
        service = NotificationService(client, config.chat_id)
        result = await service.notify(
            NotificationRequest(message=config.message, parse_mode=ParseMode.markdown)
        )
    if result.success:
        logger.info("message_sent", chat_id=config.chat_id)
        console.print("[green]Message sent successfully![/green] Check your Telegram chat.")
        return True

    logger.error("message_send_failed", error=result.message)
    console.print(f"[red]{escape(result.message)}[/red]", soft_wrap=True)
    console.print(Panel.fit(
        "Common issues:\n"
        " - Make sure the chat ID is correct\n"
        " - If using a group chat, add the bot to the group first\n"
        " - If using a private chat, start a conversation with the bot first",
        title="Troubleshooting",
    ))
    return False


def _serve(config: ResolvedConfig) -> None:
    app = create_app(config.bot_token, config.chat_id)
    console.print(Panel.fit(
        f"Listening on http://{config.host}:{config.port}\n"
        f"Default chat ID: {config.chat_id}\n\n"
        "GET  /       - API information\n"
        "GET  /health - Health check and bot status\n"
        "POST /notify - Send notification\n"
        "POST /send   - Send notification (alias)",
        title="Telegram Notifications API",
    ))
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())


@click.command(name="telegram-notifications")
@click.version_option(version=__version__, prog_name="telegram-notifications")
@click.option("--bot-token", "-b", default=None, help="Telegram Bot Token (can also be set via TELEGRAM_BOT_TOKEN env var)")
@click.option("--chat-id", "-c", default=None, help="Chat ID to send messages to (can also be set via TELEGRAM_CHAT_ID env var)")
@click.option("--message", "-m", default=DEFAULT_MESSAGE, show_default=True, help="Message to send (CLI mode only)")
@click.option("--server", is_flag=True, default=False, help="Run as HTTP server instead of CLI mode")
@click.option("--port", "-p", default=DEFAULT_PORT, show_default=True, type=int, help="Server port (can also be set via PORT env var)")
@click.option("--host", default=DEFAULT_HOST, show_default=True, help="Server host address")
def main(bot_token, chat_id, message, server, port, host):
    """
    A Telegram notification service - supports both CLI and HTTP API modes.

    Sends a single message by default; pass --server to run the HTTP API.
    """
    load_dotenv(find_dotenv(usecwd=True))

    try:
        config = resolve_config(
            bot_token=bot_token,
            chat_id=chat_id,
            message=message,
            server=server,
            port=port,
            host=host,
        )
    except ConfigurationError as e:
        console.print(f"[red]Error: {escape(e.message)}[/red]", soft_wrap=True)
        sys.exit(1)

    configure_logging(config.log_level)

    if simulate_mode_enabled():
        logger.warning("bot_validation_skipped", reason="test mode")
    else:
        logger.info("verifying_bot_configuration")
        try:
            asyncio.run(_startup_check(config))
        except (ProviderError, TransportError) as e:
            logger.error("bot_verification_failed", error=e.message)
            console.print(
                f"[red]Failed to verify bot: {escape(e.message)}[/red]\n"
                "Make sure your bot token is correct and the bot is properly configured with @BotFather",
                soft_wrap=True,
            )
            sys.exit(1)

    if config.server:
        _serve(config)
        return

    logger.info("sending_message", chat_id=config.chat_id, message=config.message)
    if not asyncio.run(_send_once(config)):
        sys.exit(1)


if __name__ == "__main__":
    main()
