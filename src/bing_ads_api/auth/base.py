"""Define the authentication strategy interface.

Every strategy produces the authentication material a header builder
stamps into outbound SOAP headers. Which strategy a client uses is decided
once from configuration (see :mod:`bing_ads_api.auth.selector`).
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, Optional

from ..config.settings import Settings
from ..exceptions import ConfigurationError


class AuthMethod(str, Enum):
    """Supported values of ``authentication.method``."""

    LEGACY_LOGIN = "LEGACY_LOGIN"
    OAUTH = "OAUTH"
    OAUTH2 = "OAUTH2"
    OAUTH2_JWT = "OAUTH2_JWT"

    @classmethod
    def parse(cls, value: str) -> "AuthMethod":
        """Return the member for a configured method name.

        ``CLIENTLOGIN`` is accepted as an older name of ``LEGACY_LOGIN``.

        :param value: Configured method name (case-insensitive)
        :type value: str
        :return: The matching method
        :rtype: AuthMethod
        :raises ConfigurationError: If the name is unknown
        """
        if isinstance(value, cls):
            return value
        name = str(value).strip().upper()
        if name == "CLIENTLOGIN":
            return cls.LEGACY_LOGIN
        try:
            return cls(name)
        except ValueError:
            raise ConfigurationError(
                f"Unknown authentication method '{value}'",
                setting="authentication.method",
            ) from None


class BaseAuthStrategy(ABC):
    """Produce authentication material for outbound calls.

    Subclasses own whatever secrets their protocol needs. Credential
    completeness is checked on first use, not at construction, so a client
    can be configured before all credentials are known.
    """

    auth_method: AuthMethod

    def __init__(self, settings: Settings):
        self.settings = settings

    def _credential(self, key: str) -> Optional[str]:
        return self.settings.read(f"authentication.{key}")

    def _require(self, *keys: str) -> None:
        """Raise ConfigurationError naming the first missing credential."""
        for key in keys:
            if not self._credential(key):
                raise ConfigurationError(
                    f"{self.auth_method.value} authentication requires "
                    f"'authentication.{key}'",
                    setting=f"authentication.{key}",
                )

    @abstractmethod
    def validate_credentials(self) -> None:
        """Check that every credential the protocol needs is configured.

        :raises ConfigurationError: If a required value is missing
        """

    @abstractmethod
    async def get_auth_material(self) -> Dict[str, str]:
        """Return the current authentication header values.

        May refresh tokens over the network.

        :return: Mapping of SOAP header field names to values
        :raises ConfigurationError: If credentials are incomplete
        :raises AuthenticationError: If material cannot be produced
        """

    async def close(self) -> None:
        """Drop cached authentication state."""
