"""Select the authentication strategy for a client from configuration.

``authentication.method`` defaults to OAUTH2 here. The strategy is built
without any network I/O; tokens are fetched on first use.
"""

import logging
from typing import Optional, Type

from ..api_config import ApiConfig
from ..config.settings import Settings
from ..exceptions import ConfigurationError
from .base import AuthMethod, BaseAuthStrategy
from .strategies import LegacyLoginStrategy, OAuth2JwtStrategy, OAuth2Strategy

logger = logging.getLogger(__name__)

DEFAULT_AUTH_METHOD = AuthMethod.OAUTH2


def select_auth_strategy(
    settings: Settings,
    api_config: Type[ApiConfig] = ApiConfig,
    log: Optional[logging.Logger] = None,
) -> BaseAuthStrategy:
    """Build the strategy named by ``authentication.method``.

    :param settings: Client settings
    :type settings: Settings
    :param api_config: Service directory to read auth constants from
    :type api_config: Type[ApiConfig]
    :param log: Logger receiving the legacy login deprecation warning
    :type log: Optional[logging.Logger]
    :return: The configured strategy
    :rtype: BaseAuthStrategy
    :raises ConfigurationError: For the deprecated OAUTH method, unknown
        methods and unknown environments
    """
    log = log or logger
    method = AuthMethod.parse(
        settings.read("authentication.method", DEFAULT_AUTH_METHOD)
    )

    if method is AuthMethod.LEGACY_LOGIN:
        log.warning("Legacy login authentication method is now deprecated")
        return LegacyLoginStrategy(
            settings,
            api_config.legacy_login_config("AUTH_SERVER"),
            api_config.legacy_login_config("LOGIN_SERVICE_NAME"),
        )

    if method is AuthMethod.OAUTH:
        raise ConfigurationError(
            "OAuth authorization method is deprecated, use OAuth2 instead.",
            setting="authentication.method",
        )

    environment = settings.read(
        "service.environment", api_config.default_environment()
    )
    if not api_config.has_environment(environment):
        raise ConfigurationError(
            f"Unknown environment '{environment}'", setting="service.environment"
        )
    scope = api_config.environment_config(environment, "oauth_scope")
    token_url = api_config.environment_config(environment, "oauth_token_url")

    strategy_class = (
        OAuth2JwtStrategy if method is AuthMethod.OAUTH2_JWT else OAuth2Strategy
    )
    logger.debug(
        f"Using {method.value} authentication for {environment} (scope={scope!r})"
    )
    return strategy_class(settings, scope=scope, token_url=token_url)
