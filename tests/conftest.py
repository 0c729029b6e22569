from unittest.mock import AsyncMock, MagicMock

import pytest

from utils import config as config_module


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "asyncio: mark test to run in an asyncio event loop"
    )


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep real KUCOIN_* settings (or a local .env) out of the tests."""
    for name in (
        "KUCOIN_API_KEY", "KUCOIN_API_SECRET", "KUCOIN_API_PASSPHRASE",
        "KUCOIN_BASE_URL", "KUCOIN_SANDBOX", "KUCOIN_REQUEST_TIMEOUT",
        "KUCOIN_MAX_RETRIES", "KUCOIN_RETRY_DELAY",
        "KUCOIN_REQUESTS_PER_PERIOD", "KUCOIN_RATE_PERIOD",
    ):
        monkeypatch.delenv(name, raising=False)
    config_module.reset_config()
    yield
    config_module.reset_config()


@pytest.fixture
def mock_transport():
    """Transport double exposing the get/post/delete coroutines."""
    transport = MagicMock()
    transport.get = AsyncMock(return_value={"code": "200000", "data": {}})
    transport.post = AsyncMock(return_value={"code": "200000", "data": {}})
    transport.delete = AsyncMock(return_value={"code": "200000", "data": {}})
    return transport


@pytest.fixture
def make_response():
    """Factory for aiohttp response doubles."""
    def _make(status: int, text: str) -> MagicMock:
        response = MagicMock()
        response.status = status
        response.text = AsyncMock(return_value=text)
        return response
    return _make


@pytest.fixture
def mock_session():
    """aiohttp session double; set session.responses to a list of responses or exceptions."""
    session = MagicMock()
    session.closed = False
    session.close = AsyncMock()
    session.responses = []

    def request(**kwargs):
        outcome = session.responses.pop(0)
        ctx = MagicMock()
        if isinstance(outcome, BaseException):
            ctx.__aenter__ = AsyncMock(side_effect=outcome)
        else:
            ctx.__aenter__ = AsyncMock(return_value=outcome)
        ctx.__aexit__ = AsyncMock(return_value=False)
        return ctx

    session.request = MagicMock(side_effect=request)
    return session
