"""Pytest configuration and fixtures"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from telegram_notifications.client import TelegramClient
from telegram_notifications.service import SIMULATE_ENV_VAR

TEST_BOT_TOKEN = "test_token_123:ABCdefGHIjklMNOpqrSTUvwxyz"
TEST_CHAT_ID = "987654321"


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without network access")
    config.addinivalue_line("markers", "e2e: tests against the live Telegram Bot API")


@pytest.fixture(autouse=True)
def configure_structlog():
    """Configure structlog for testing."""
    import structlog

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


@pytest.fixture(autouse=True)
def real_mode(monkeypatch):
    """Start every test with simulate mode off."""
    monkeypatch.delenv(SIMULATE_ENV_VAR, raising=False)


def _make_response(body=None, status_code=200, json_error=None):
    # httpx.Response methods are synchronous, so use MagicMock
    response = MagicMock()
    response.status_code = status_code
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = body
    return response


@pytest.fixture
def make_response():
    """Factory for stand-in httpx responses."""
    return _make_response


@pytest.fixture
def mock_http():
    """Mocked httpx.AsyncClient."""
    return AsyncMock()


@pytest.fixture
def telegram_client(mock_http):
    """TelegramClient wired to the mocked HTTP client."""
    return TelegramClient(TEST_BOT_TOKEN, http_client=mock_http)


@pytest.fixture
def send_ok_body():
    return {
        "ok": True,
        "result": {
            "message_id": 42,
            "date": 1234567890,
            "chat": {"id": 987654321, "type": "private"},
            "text": "Test message",
        },
    }


@pytest.fixture
def get_me_ok_body():
    return {
        "ok": True,
        "result": {
            "id": 123456789,
            "is_bot": True,
            "first_name": "Test Bot",
            "username": "test_bot",
            "can_join_groups": True,
            "can_read_all_group_messages": False,
            "supports_inline_queries": False,
        },
    }
