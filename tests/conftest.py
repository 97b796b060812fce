"""
Pytest configuration and shared fixtures for the test suite.
"""
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import pytest_asyncio

# Add project root and src/ to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))
sys.path.insert(0, str(project_root / "src"))

from hwm_worker.config.settings import Settings  # noqa: E402
from tests.fixtures.fake_services import (  # noqa: E402
    FakeCaptchaService,
    FakeImageHost,
    FakeTelegramApi,
    start_app,
)


@pytest.fixture
def mock_logger():
    """Stand-in for a structlog logger; records every call."""
    return MagicMock()


@pytest_asyncio.fixture
async def captcha_service():
    """Fake captcha solving API served on localhost."""
    service = FakeCaptchaService()
    runner, base_url = await start_app(service.app())
    service.base_url = base_url

    yield service

    await runner.cleanup()


@pytest_asyncio.fixture
async def telegram_api():
    """Fake Telegram Bot API served on localhost."""
    api = FakeTelegramApi()
    runner, base_url = await start_app(api.app())
    api.base_url = base_url

    yield api

    await runner.cleanup()


@pytest_asyncio.fixture
async def image_host():
    """Serves captcha images for download tests."""
    host = FakeImageHost()
    runner, base_url = await start_app(host.app())
    host.base_url = base_url

    yield host

    await runner.cleanup()


@pytest.fixture
def test_settings():
    """Settings with every secret filled in and no waiting between polls."""
    return Settings(
        rucaptcha_api_key="test_api_key",
        captcha_first_delay=0,
        captcha_retry_delay=0,
        telegram_bot_token="test_bot_token",
        telegram_chat_id="-123456789",
    )


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Mock environment variables for testing."""
    test_env = {
        "RUCAPTCHA_API_KEY": "env_api_key",
        "TELEGRAM_BOT_TOKEN": "env_bot_token",
        "TELEGRAM_CHAT_ID": "-42",
        "CAPTCHA_FIRST_DELAY": "5",
        "CAPTCHA_RETRY_DELAY": "7.5",
        "APP_ENV": "production",
        "LOG_LEVEL": "INFO",
    }

    for key, value in test_env.items():
        monkeypatch.setenv(key, value)

    return test_env


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
