"""
Pytest fixtures for the Muta SDK tests.
"""
import pytest

from muta_sdk._rate_limited_log import reset_rate_limits
from muta_sdk.client import MutaClient
from muta_sdk.config import ClientConfig

from tests.test_helpers import TEST_ENDPOINT, create_stub_client, create_stub_signer


@pytest.fixture(autouse=True)
def _reset_rate_limited_log():
    """Every test starts with an empty rate-limit cache."""
    reset_rate_limits()
    yield
    reset_rate_limits()


@pytest.fixture
def stub_client():
    """Transport client stub returning a successful JSON receipt"""
    return create_stub_client()


@pytest.fixture
def stub_signer():
    return create_stub_signer()


@pytest.fixture
def fast_config():
    """Client config that polls receipts quickly so tests don't wait"""
    return ClientConfig(
        endpoint=TEST_ENDPOINT,
        receipt_poll_interval=0.01,
        receipt_timeout=0.2,
        http_timeout=5,
    )


@pytest.fixture
def muta_client(fast_config):
    client = MutaClient(config=fast_config)
    yield client
    client.close()
