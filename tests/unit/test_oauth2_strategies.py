"""Tests for the OAuth2 and OAuth2 JWT strategies."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import jwt
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from bing_ads_api.auth.strategies import OAuth2JwtStrategy, OAuth2Strategy
from bing_ads_api.auth.strategies.oauth2_jwt import JWT_BEARER_GRANT
from bing_ads_api.exceptions import (
    AuthenticationError,
    ConfigurationError,
    OAuthError,
    TokenError,
)
from bing_ads_api.models import Token

TOKEN_URL = "https://login.live.com/oauth20_token.srf"


def mock_client_returning(response):
    client = AsyncMock()
    client.post = AsyncMock(return_value=response)
    return client


@pytest.fixture(scope="module")
def rsa_key_pair():
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode()
    public_pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode()
    return private_pem, public_pem


@pytest.mark.unit
@pytest.mark.auth
class TestOAuth2Strategy:
    """Tests for the refresh-token grant."""

    @pytest.mark.asyncio
    async def test_token_refresh(self, oauth2_strategy, mock_token_response):
        client = mock_client_returning(mock_token_response)
        with patch.object(
            oauth2_strategy, "_get_client", new_callable=AsyncMock, return_value=client
        ):
            token = await oauth2_strategy.get_token()

        assert token.value == "new-access-token"
        expected_expiry = datetime.now(timezone.utc) + timedelta(seconds=3600)
        assert abs((token.expires_at - expected_expiry).total_seconds()) < 5

        args, kwargs = client.post.call_args
        assert args[0] == TOKEN_URL
        assert kwargs["data"] == {
            "grant_type": "refresh_token",
            "refresh_token": "test-refresh-token",
            "client_id": "test-client-id",
            "client_secret": "test-client-secret",
            "scope": "bingads.manage",
        }

    @pytest.mark.asyncio
    async def test_rotated_refresh_token_is_kept(
        self, oauth2_strategy, mock_token_response
    ):
        client = mock_client_returning(mock_token_response)
        with patch.object(
            oauth2_strategy, "_get_client", new_callable=AsyncMock, return_value=client
        ):
            await oauth2_strategy.get_token()
        assert oauth2_strategy.refresh_token == "rotated-refresh-token"

    @pytest.mark.asyncio
    async def test_cached_token_is_reused(self, oauth2_strategy):
        oauth2_strategy._access_token = Token(
            value="cached-token",
            expires_at=datetime.now(timezone.utc) + timedelta(hours=1),
        )
        with patch.object(
            oauth2_strategy, "_refresh_access_token", new_callable=AsyncMock
        ) as refresh:
            material = await oauth2_strategy.get_auth_material()
        assert material == {"AuthenticationToken": "cached-token"}
        refresh.assert_not_called()

    @pytest.mark.asyncio
    async def test_expiring_token_is_refreshed(
        self, oauth2_strategy, mock_token_response
    ):
        oauth2_strategy._access_token = Token(
            value="expiring-token",
            expires_at=datetime.now(timezone.utc) + timedelta(minutes=2),
        )
        client = mock_client_returning(mock_token_response)
        with patch.object(
            oauth2_strategy, "_get_client", new_callable=AsyncMock, return_value=client
        ):
            material = await oauth2_strategy.get_auth_material()
        assert material == {"AuthenticationToken": "new-access-token"}

    @pytest.mark.asyncio
    async def test_oauth_error_response(self, oauth2_strategy):
        response = MagicMock()
        response.status_code = 400
        response.json.return_value = {
            "error": "invalid_grant",
            "error_description": "The refresh token has expired.",
        }
        client = mock_client_returning(response)
        with patch.object(
            oauth2_strategy, "_get_client", new_callable=AsyncMock, return_value=client
        ):
            with pytest.raises(OAuthError) as exc_info:
                await oauth2_strategy.get_token()
        assert exc_info.value.error_code == "invalid_grant"
        assert exc_info.value.details == {"oauth_error": "invalid_grant"}
        assert isinstance(exc_info.value, AuthenticationError)

    @pytest.mark.asyncio
    async def test_transport_failure_is_token_error(self, oauth2_strategy):
        client = AsyncMock()
        client.post = AsyncMock(side_effect=httpx.ConnectError("connection refused"))
        with patch.object(
            oauth2_strategy, "_get_client", new_callable=AsyncMock, return_value=client
        ):
            with pytest.raises(TokenError):
                await oauth2_strategy.get_token()

    @pytest.mark.asyncio
    async def test_missing_access_token_in_response(self, oauth2_strategy):
        response = MagicMock()
        response.status_code = 200
        response.json.return_value = {"expires_in": 3600}
        client = mock_client_returning(response)
        with patch.object(
            oauth2_strategy, "_get_client", new_callable=AsyncMock, return_value=client
        ):
            with pytest.raises(TokenError, match="No access token"):
                await oauth2_strategy.get_token()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            ["not", "a", "dict"],
            {"access_token": {"nested": "value"}},
        ],
    )
    async def test_malformed_success_body_is_token_error(self, oauth2_strategy, body):
        response = MagicMock()
        response.status_code = 200
        response.json.return_value = body
        client = mock_client_returning(response)
        with patch.object(
            oauth2_strategy, "_get_client", new_callable=AsyncMock, return_value=client
        ):
            with pytest.raises(TokenError):
                await oauth2_strategy.get_auth_material()

    @pytest.mark.asyncio
    async def test_null_token_type_defaults_to_bearer(self, oauth2_strategy):
        response = MagicMock()
        response.status_code = 200
        response.json.return_value = {"access_token": "x", "token_type": None}
        client = mock_client_returning(response)
        with patch.object(
            oauth2_strategy, "_get_client", new_callable=AsyncMock, return_value=client
        ):
            token = await oauth2_strategy.get_token()
        assert token.token_type == "Bearer"
        assert token.scope == "bingads.manage"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", ["client_id", "refresh_token"])
    async def test_missing_credentials(self, make_settings, missing):
        credentials = {"method": "OAUTH2", "client_id": "c", "refresh_token": "r"}
        credentials.pop(missing)
        strategy = OAuth2Strategy(
            make_settings(authentication=credentials), "scope", TOKEN_URL
        )
        with patch.object(strategy, "_get_client", new_callable=AsyncMock) as get_client:
            with pytest.raises(ConfigurationError, match=missing):
                await strategy.get_token()
        get_client.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_token_url(self, oauth2_settings):
        strategy = OAuth2Strategy(oauth2_settings, "scope", None)
        with pytest.raises(ConfigurationError, match="token endpoint"):
            await strategy.get_token()

    def test_public_client_omits_secret_and_empty_scope(self, make_settings):
        settings = make_settings(
            authentication={"client_id": "c", "refresh_token": "r"}
        )
        strategy = OAuth2Strategy(settings, "", TOKEN_URL)
        assert strategy._token_request_data() == {
            "grant_type": "refresh_token",
            "refresh_token": "r",
            "client_id": "c",
        }

    @pytest.mark.asyncio
    async def test_close_drops_cached_token(self, oauth2_strategy):
        oauth2_strategy._access_token = Token(
            value="cached-token",
            expires_at=datetime.now(timezone.utc) + timedelta(hours=1),
        )
        await oauth2_strategy.close()
        assert oauth2_strategy._access_token is None


@pytest.mark.unit
@pytest.mark.auth
class TestOAuth2JwtStrategy:
    """Tests for the JWT assertion grant."""

    @pytest.fixture
    def jwt_settings(self, make_settings, rsa_key_pair):
        private_pem, _ = rsa_key_pair
        return make_settings(
            authentication={
                "method": "OAUTH2_JWT",
                "jwt_issuer": "service@example.com",
                "jwt_subject": "user@example.com",
                "jwt_private_key": private_pem,
                "jwt_key_id": "key-1",
            }
        )

    def test_assertion_claims(self, jwt_settings, rsa_key_pair):
        _, public_pem = rsa_key_pair
        strategy = OAuth2JwtStrategy(jwt_settings, "bingads.manage", TOKEN_URL)

        assertion = strategy.build_assertion()

        assert jwt.get_unverified_header(assertion)["kid"] == "key-1"
        claims = jwt.decode(
            assertion, public_pem, algorithms=["RS256"], audience=TOKEN_URL
        )
        assert claims["iss"] == "service@example.com"
        assert claims["sub"] == "user@example.com"
        assert claims["scope"] == "bingads.manage"
        assert claims["exp"] - claims["iat"] == 3600

    @pytest.mark.asyncio
    async def test_token_request_uses_jwt_bearer_grant(
        self, jwt_settings, mock_token_response
    ):
        strategy = OAuth2JwtStrategy(jwt_settings, "bingads.manage", TOKEN_URL)
        client = mock_client_returning(mock_token_response)
        with patch.object(
            strategy, "_get_client", new_callable=AsyncMock, return_value=client
        ):
            material = await strategy.get_auth_material()

        assert material == {"AuthenticationToken": "new-access-token"}
        data = client.post.call_args.kwargs["data"]
        assert data["grant_type"] == JWT_BEARER_GRANT
        assert data["assertion"].count(".") == 2

    def test_private_key_from_file(self, make_settings, rsa_key_pair, tmp_path):
        private_pem, public_pem = rsa_key_pair
        key_file = tmp_path / "key.pem"
        key_file.write_text(private_pem)
        settings = make_settings(
            authentication={
                "jwt_issuer": "service@example.com",
                "jwt_private_key_file": str(key_file),
            }
        )
        strategy = OAuth2JwtStrategy(settings, None, TOKEN_URL)
        claims = jwt.decode(
            strategy.build_assertion(),
            public_pem,
            algorithms=["RS256"],
            audience=TOKEN_URL,
        )
        assert "sub" not in claims
        assert "scope" not in claims

    def test_missing_private_key(self, make_settings):
        settings = make_settings(authentication={"jwt_issuer": "service@example.com"})
        strategy = OAuth2JwtStrategy(settings, None, TOKEN_URL)
        with pytest.raises(ConfigurationError, match="jwt_private_key"):
            strategy.validate_credentials()

    def test_unreadable_key_file(self, make_settings, tmp_path):
        settings = make_settings(
            authentication={
                "jwt_issuer": "service@example.com",
                "jwt_private_key_file": str(tmp_path / "missing.pem"),
            }
        )
        strategy = OAuth2JwtStrategy(settings, None, TOKEN_URL)
        with pytest.raises(ConfigurationError, match="Cannot read"):
            strategy.build_assertion()

    def test_invalid_key_is_configuration_error(self, make_settings):
        settings = make_settings(
            authentication={
                "jwt_issuer": "service@example.com",
                "jwt_private_key": "not a pem key",
            }
        )
        strategy = OAuth2JwtStrategy(settings, None, TOKEN_URL)
        with pytest.raises(ConfigurationError, match="Unable to sign"):
            strategy.build_assertion()

    def test_unsupported_algorithm_is_configuration_error(
        self, make_settings, rsa_key_pair
    ):
        private_pem, _ = rsa_key_pair
        settings = make_settings(
            authentication={
                "jwt_issuer": "service@example.com",
                "jwt_private_key": private_pem,
                "jwt_algorithm": "FOO",
            }
        )
        strategy = OAuth2JwtStrategy(settings, None, TOKEN_URL)
        with pytest.raises(
            ConfigurationError, match="Unsupported JWT algorithm"
        ) as exc_info:
            strategy.build_assertion()
        assert exc_info.value.setting == "authentication.jwt_algorithm"
