import os
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from bing_ads_api.auth.strategies import LegacyLoginStrategy, OAuth2Strategy  # noqa: E402
from bing_ads_api.config.settings import Settings  # noqa: E402
from bing_ads_api.credentials import CredentialStore  # noqa: E402


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "asyncio: mark test to run in an asyncio event loop"
    )
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
    config.addinivalue_line("markers", "auth: mark test as testing authentication")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Keep the developer's environment out of the settings under test.

    Clears every ``BING_ADS_*`` variable and runs each test from an empty
    directory so no ``.env`` file is picked up.
    """
    for name in list(os.environ):
        if name.upper().startswith("BING_ADS_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    yield


@pytest.fixture
def make_settings():
    """Build Settings from nested keyword sections."""

    def _make(**sections):
        return Settings(**sections)

    return _make


@pytest.fixture
def legacy_settings(make_settings):
    return make_settings(
        authentication={
            "method": "LEGACY_LOGIN",
            "username": "user@example.com",
            "password": "s3cret",
            "developer_token": "dev-token",
            "customer_id": "1234",
            "account_id": "5678",
        }
    )


@pytest.fixture
def oauth2_settings(make_settings):
    return make_settings(
        authentication={
            "method": "OAUTH2",
            "client_id": "test-client-id",
            "client_secret": "test-client-secret",
            "refresh_token": "test-refresh-token",
            "developer_token": "dev-token",
            "customer_id": "1234",
            "account_id": "5678",
        }
    )


@pytest.fixture
def credential_store():
    return CredentialStore(
        developer_token="dev-token", customer_id="1234", account_id="5678"
    )


@pytest.fixture
def legacy_strategy(legacy_settings):
    return LegacyLoginStrategy(legacy_settings, "https://www.microsoft.com", "adcenter")


@pytest.fixture
def mock_token_response():
    """Successful token endpoint response."""
    response = MagicMock()
    response.status_code = 200
    response.json.return_value = {
        "access_token": "new-access-token",
        "refresh_token": "rotated-refresh-token",
        "token_type": "bearer",
        "expires_in": 3600,
        "scope": "bingads.manage",
    }
    return response


@pytest.fixture
def oauth2_strategy(oauth2_settings):
    return OAuth2Strategy(
        oauth2_settings,
        scope="bingads.manage",
        token_url="https://login.live.com/oauth20_token.srf",
    )
