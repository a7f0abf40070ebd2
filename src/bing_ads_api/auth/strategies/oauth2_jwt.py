"""OAuth2 JWT-bearer assertion strategy.

Signs a short-lived assertion with a service private key and exchanges it
at the token endpoint (``urn:ietf:params:oauth:grant-type:jwt-bearer``).
"""

import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Dict

import jwt

from ...exceptions import ConfigurationError
from ..base import AuthMethod
from .oauth2 import BaseOAuth2Strategy

logger = logging.getLogger(__name__)

JWT_BEARER_GRANT = "urn:ietf:params:oauth:grant-type:jwt-bearer"
ASSERTION_LIFETIME = timedelta(hours=1)


class OAuth2JwtStrategy(BaseOAuth2Strategy):
    """JWT assertion grant.

    Requires ``authentication.jwt_issuer`` and either
    ``authentication.jwt_private_key`` (PEM text) or
    ``authentication.jwt_private_key_file``. ``jwt_subject`` and
    ``jwt_key_id`` are added to the assertion when configured.
    """

    auth_method = AuthMethod.OAUTH2_JWT

    def validate_credentials(self) -> None:
        super().validate_credentials()
        self._require("jwt_issuer")
        if not (
            self._credential("jwt_private_key")
            or self._credential("jwt_private_key_file")
        ):
            raise ConfigurationError(
                "OAUTH2_JWT authentication requires 'authentication.jwt_private_key' "
                "or 'authentication.jwt_private_key_file'",
                setting="authentication.jwt_private_key",
            )

    def _private_key(self) -> str:
        key = self._credential("jwt_private_key")
        if key:
            return key
        path = Path(self._credential("jwt_private_key_file")).expanduser()
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read JWT private key file '{path}': {e}",
                setting="authentication.jwt_private_key_file",
            ) from e

    def build_assertion(self) -> str:
        """Return a freshly signed assertion.

        :return: Encoded JWT
        :rtype: str
        :raises ConfigurationError: If the key cannot sign the assertion
        """
        now = datetime.now(timezone.utc)
        claims = {
            "iss": self._credential("jwt_issuer"),
            "aud": self.token_url,
            "iat": int(now.timestamp()),
            "exp": int((now + ASSERTION_LIFETIME).timestamp()),
        }
        if self.scope:
            claims["scope"] = self.scope
        subject = self._credential("jwt_subject")
        if subject:
            claims["sub"] = subject

        key_id = self._credential("jwt_key_id")
        algorithm = self.settings.read("authentication.jwt_algorithm", "RS256")
        try:
            return jwt.encode(
                claims,
                self._private_key(),
                algorithm=algorithm,
                headers={"kid": key_id} if key_id else None,
            )
        except NotImplementedError as e:
            raise ConfigurationError(
                f"Unsupported JWT algorithm '{algorithm}'",
                setting="authentication.jwt_algorithm",
            ) from e
        except (jwt.PyJWTError, ValueError, TypeError) as e:
            logger.error(f"Failed to sign JWT assertion with {algorithm}: {e}")
            raise ConfigurationError(
                f"Unable to sign JWT assertion: {e}",
                setting="authentication.jwt_private_key",
            ) from e

    def _token_request_data(self) -> Dict[str, str]:
        return {
            "grant_type": JWT_BEARER_GRANT,
            "assertion": self.build_assertion(),
        }
