import sys
from pathlib import Path

import httpx
import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from woocommerce_api import WooCommerceClient  # noqa: E402

SHOP_URL = "https://shop.example.com"
CONSUMER_KEY = "ck_0123456789abcdef0123"
CONSUMER_SECRET = "cs_0123456789abcdef0123"


def pytest_configure(config):
    # Add custom markers for test organization
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )


@pytest.fixture(autouse=True)
def mock_env_vars(monkeypatch):
    """Set required environment variables for tests.

    This fixture automatically sets up the environment variables read by
    the Settings class, and clears the optional ones so a developer's own
    shell configuration cannot leak into a test run.
    """
    monkeypatch.setenv("WOOCOMMERCE_URL", SHOP_URL)
    monkeypatch.setenv("WOOCOMMERCE_CONSUMER_KEY", CONSUMER_KEY)
    monkeypatch.setenv("WOOCOMMERCE_CONSUMER_SECRET", CONSUMER_SECRET)

    for name in (
        "WOOCOMMERCE_API_PATH_PREFIX",
        "WOOCOMMERCE_API_VERSION",
        "WOOCOMMERCE_MAX_RETRIES",
        "WOOCOMMERCE_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)

    # Logging
    monkeypatch.setenv("LOG_LEVEL", "INFO")

    yield


class ScriptedHandler:
    """``httpx.MockTransport`` handler that replays scripted responses.

    Each item is an ``httpx.Response`` or an exception to raise. The last
    item repeats once the script is exhausted. Every request seen is
    recorded in ``requests``.
    """

    def __init__(self, *script):
        self.script = list(script)
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        item = self.script.pop(0) if len(self.script) > 1 else self.script[0]
        if isinstance(item, Exception):
            raise item
        # Fresh response per attempt; the client binds and closes each one
        return httpx.Response(item.status_code, headers=item.headers, content=item.content)

    @property
    def calls(self) -> int:
        return len(self.requests)


@pytest.fixture
def scripted():
    """The ScriptedHandler class, for building per-test handlers."""
    return ScriptedHandler


@pytest.fixture
def sleeps():
    """Durations passed to the client's sleep function."""
    return []


@pytest.fixture
def make_client(sleeps):
    """Factory for clients whose traffic goes to a MockTransport handler."""
    clients = []

    def factory(handler, base_url=SHOP_URL, **kwargs):
        kwargs.setdefault("sleep", sleeps.append)
        client = WooCommerceClient(
            base_url,
            CONSUMER_KEY,
            CONSUMER_SECRET,
            transport=httpx.MockTransport(handler),
            **kwargs,
        )
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.close()
