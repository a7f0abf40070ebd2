"""OAuth2 authentication strategies.

``OAuth2Strategy`` exchanges a long-lived refresh token for access tokens.
``BaseOAuth2Strategy`` holds the token caching and token-endpoint handling
shared with the JWT assertion variant.
"""

import logging
from abc import abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Tuple

import httpx
from pydantic import ValidationError

from ...config.settings import Settings
from ...exceptions import ConfigurationError, OAuthError, TokenError
from ...models import Token
from ...utils.http import get_http_client
from ..base import AuthMethod, BaseAuthStrategy

logger = logging.getLogger(__name__)

DEFAULT_EXPIRES_IN = 3600


class BaseOAuth2Strategy(BaseAuthStrategy):
    """Token caching and token-endpoint exchange for OAuth2 variants.

    :param settings: Client settings providing the credentials
    :type settings: Settings
    :param scope: OAuth scope for the target environment
    :type scope: Optional[str]
    :param token_url: Token endpoint for the target environment
    :type token_url: Optional[str]
    """

    def __init__(
        self,
        settings: Settings,
        scope: Optional[str] = None,
        token_url: Optional[str] = None,
    ):
        super().__init__(settings)
        self.scope = scope
        self.token_url = token_url
        self._access_token: Optional[Token] = None

    async def _get_client(self) -> httpx.AsyncClient:
        return await get_http_client()

    def validate_credentials(self) -> None:
        if not self.token_url:
            raise ConfigurationError(
                "No OAuth2 token endpoint configured for this environment",
                setting="service.environment",
            )

    @abstractmethod
    def _token_request_data(self) -> Dict[str, str]:
        """Return the form fields of the token request."""

    def _on_token_response(self, data: Dict[str, Any]) -> None:
        """Hook for variant-specific handling of a successful response."""

    async def get_token(self) -> Token:
        """Return a valid access token, refreshing it when needed.

        :return: Valid access token
        :rtype: Token
        :raises ConfigurationError: If credentials are incomplete
        :raises AuthenticationError: If the token endpoint rejects the request
        """
        if self._access_token and self._access_token.is_valid():
            return self._access_token

        self.validate_credentials()
        return await self._refresh_access_token()

    async def get_auth_material(self) -> Dict[str, str]:
        token = await self.get_token()
        return {"AuthenticationToken": token.value}

    async def _refresh_access_token(self) -> Token:
        """Request a new access token from the token endpoint.

        :return: New access token with expiration
        :rtype: Token
        :raises TokenError: On transport failure or a malformed response
        :raises OAuthError: If the endpoint answers with an error
        """
        logger.debug("Requesting %s access token", self.auth_method.value)

        client = await self._get_client()
        try:
            response = await client.post(
                self.token_url,
                data=self._token_request_data(),
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )
        except httpx.HTTPError as e:
            logger.error(f"Token request to {self.token_url} failed: {e}")
            raise TokenError(
                f"Token request failed: {e}", token_type="access_token"
            ) from e

        if response.status_code != 200:
            error_code, description = self._parse_error(response)
            logger.error(
                f"Token refresh failed: {response.status_code} - {error_code}"
            )
            raise OAuthError(
                f"Token refresh failed with status {response.status_code}: "
                f"{description or error_code or 'no details'}",
                error_code=error_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise TokenError(
                "Token endpoint returned a non-JSON response",
                token_type="access_token",
            ) from e

        if not isinstance(data, dict):
            raise TokenError(
                "Token response is not a JSON object", token_type="access_token"
            )

        access_token = data.get("access_token")
        if not access_token:
            raise TokenError(
                "No access token in token response", token_type="access_token"
            )

        try:
            expires_in = int(data.get("expires_in", DEFAULT_EXPIRES_IN))
        except (TypeError, ValueError):
            expires_in = DEFAULT_EXPIRES_IN
        expires_at = datetime.now(timezone.utc) + timedelta(seconds=expires_in)

        self._on_token_response(data)
        try:
            self._access_token = Token(
                value=access_token,
                expires_at=expires_at,
                token_type=data.get("token_type") or "Bearer",
                scope=data.get("scope") or self.scope,
                metadata={"auth_method": self.auth_method.value},
            )
        except ValidationError as e:
            raise TokenError(
                f"Malformed token response: {e}", token_type="access_token"
            ) from e

        logger.debug(f"Access token obtained, expires at {expires_at}")
        return self._access_token

    @staticmethod
    def _parse_error(response: httpx.Response) -> Tuple[Optional[str], Optional[str]]:
        """Extract ``error`` and ``error_description`` from an error response."""
        try:
            body = response.json()
        except ValueError:
            return None, response.text or None
        if not isinstance(body, dict):
            return None, None
        return body.get("error"), body.get("error_description")

    async def close(self) -> None:
        self._access_token = None


class OAuth2Strategy(BaseOAuth2Strategy):
    """Refresh-token grant.

    Requires ``authentication.client_id`` and ``authentication.refresh_token``;
    ``authentication.client_secret`` is sent when configured. A refresh token
    rotated by the endpoint replaces the configured one for later refreshes.
    """

    auth_method = AuthMethod.OAUTH2

    def __init__(
        self,
        settings: Settings,
        scope: Optional[str] = None,
        token_url: Optional[str] = None,
    ):
        super().__init__(settings, scope, token_url)
        self.refresh_token = self._credential("refresh_token")

    def validate_credentials(self) -> None:
        super().validate_credentials()
        self._require("client_id")
        if not self.refresh_token:
            raise ConfigurationError(
                "OAUTH2 authentication requires 'authentication.refresh_token'",
                setting="authentication.refresh_token",
            )

    def _token_request_data(self) -> Dict[str, str]:
        data = {
            "grant_type": "refresh_token",
            "refresh_token": self.refresh_token,
            "client_id": self._credential("client_id"),
        }
        client_secret = self._credential("client_secret")
        if client_secret:
            data["client_secret"] = client_secret
        if self.scope:
            data["scope"] = self.scope
        return data

    def _on_token_response(self, data: Dict[str, Any]) -> None:
        rotated = data.get("refresh_token")
        if rotated and rotated != self.refresh_token:
            logger.info("Token endpoint rotated the refresh token")
            self.refresh_token = rotated
