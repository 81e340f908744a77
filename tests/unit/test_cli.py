"""Tests for the telegram-notifications command."""

from unittest.mock import AsyncMock, patch

import pytest
from click.testing import CliRunner
from uvicorn.config import LOG_LEVELS

from telegram_notifications.cli import main
from telegram_notifications.exceptions import ProviderError
from telegram_notifications.models import ProviderResponse
from telegram_notifications.service import SIMULATE_ENV_VAR


@pytest.fixture(autouse=True)
def no_logging_setup():
    """Keep the command from rebinding log handlers to CliRunner's streams."""
    with patch("telegram_notifications.cli.configure_logging"):
        yield


@pytest.fixture
def env(monkeypatch, tmp_path):
    """Isolated environment: no .env file, token and chat ID set."""
    monkeypatch.chdir(tmp_path)
    for name in ("PORT", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "dummy-token")
    monkeypatch.setenv("TELEGRAM_CHAT_ID", "12345")
    return monkeypatch


@pytest.mark.unit
def test_help_lists_options():
    """Test that --help documents both modes."""
    result = CliRunner().invoke(main, ["--help"])

    assert result.exit_code == 0
    assert "telegram-notifications" in result.output
    assert "--server" in result.output
    assert "--port" in result.output
    assert "--message" in result.output
    assert "HTTP API" in result.output


@pytest.mark.unit
def test_version():
    """Test that --version prints the package version."""
    result = CliRunner().invoke(main, ["--version"])

    assert result.exit_code == 0
    assert "0.1.0" in result.output


@pytest.mark.unit
def test_missing_token_exits_with_error(env):
    """Test that a missing token exits 1 with guidance."""
    env.delenv("TELEGRAM_BOT_TOKEN")

    result = CliRunner().invoke(main, [])

    assert result.exit_code == 1
    assert "Bot token is required" in result.output


@pytest.mark.unit
def test_simulated_send_skips_network(env):
    """Test that simulate mode skips both the bot check and the send."""
    env.setenv(SIMULATE_ENV_VAR, "true")

    with patch("telegram_notifications.client.TelegramClient.send_message", new_callable=AsyncMock) as send, \
         patch("telegram_notifications.client.TelegramClient.get_me", new_callable=AsyncMock) as get_me:
        result = CliRunner().invoke(main, ["--message", "hello"])

    assert result.exit_code == 0
    send.assert_not_called()
    get_me.assert_not_called()


@pytest.mark.unit
def test_sends_markdown_message_to_default_chat(env):
    """Test that one-shot mode sends Markdown to the configured chat."""
    get_me = AsyncMock(return_value=ProviderResponse(ok=True, result={"username": "test_bot"}))
    send = AsyncMock(return_value=ProviderResponse(ok=True, result={"message_id": 7}))

    with patch("telegram_notifications.client.TelegramClient.get_me", get_me), \
         patch("telegram_notifications.client.TelegramClient.send_message", send):
        result = CliRunner().invoke(main, ["-m", "*deploy done*"])

    assert result.exit_code == 0
    get_me.assert_awaited_once()
    args, kwargs = send.call_args
    assert args == ("12345", "*deploy done*")
    assert kwargs["parse_mode"].value == "Markdown"
    assert kwargs["disable_notification"] is False


@pytest.mark.unit
def test_verification_failure_exits(env):
    """Test that a rejected token stops before sending."""
    get_me = AsyncMock(side_effect=ProviderError("Unauthorized", 401))
    send = AsyncMock()

    with patch("telegram_notifications.client.TelegramClient.get_me", get_me), \
         patch("telegram_notifications.client.TelegramClient.send_message", send):
        result = CliRunner().invoke(main, [])

    assert result.exit_code == 1
    assert "BotFather" in result.output
    send.assert_not_called()


@pytest.mark.unit
def test_malformed_token_fails_verification(env):
    """Test that a token unusable in a URL exits 1 without a traceback."""
    env.setenv("TELEGRAM_BOT_TOKEN", "bad\x01token")

    result = CliRunner().invoke(main, [])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "Failed to verify bot" in result.output


@pytest.mark.unit
def test_send_failure_exits(env):
    """Test that a failed send exits 1 and shows the reason."""
    get_me = AsyncMock(return_value=ProviderResponse(ok=True, result={"username": "test_bot"}))
    send = AsyncMock(side_effect=ProviderError("Bad Request: chat not found", 400))

    with patch("telegram_notifications.client.TelegramClient.get_me", get_me), \
         patch("telegram_notifications.client.TelegramClient.send_message", send):
        result = CliRunner().invoke(main, [])

    assert result.exit_code == 1
    assert "chat not found" in result.output


@pytest.mark.unit
def test_server_mode_runs_uvicorn(env):
    """Test that --server starts uvicorn on the requested host and env port."""
    env.setenv(SIMULATE_ENV_VAR, "true")
    env.setenv("PORT", "8080")

    with patch("telegram_notifications.cli.uvicorn.run") as run:
        result = CliRunner().invoke(main, ["--server", "--host", "127.0.0.1"])

    assert result.exit_code == 0
    run.assert_called_once()
    _, kwargs = run.call_args
    assert kwargs["host"] == "127.0.0.1"
    assert kwargs["port"] == 8080


@pytest.mark.unit
def test_server_mode_with_unknown_log_level(env):
    """Test that an unknown LOG_LEVEL reaches uvicorn as a level it accepts."""
    env.setenv(SIMULATE_ENV_VAR, "true")
    env.setenv("LOG_LEVEL", "chatty")

    with patch("telegram_notifications.cli.uvicorn.run") as run:
        result = CliRunner().invoke(main, ["--server"])

    assert result.exit_code == 0
    _, kwargs = run.call_args
    assert kwargs["log_level"] == "info"
    assert kwargs["log_level"] in LOG_LEVELS
