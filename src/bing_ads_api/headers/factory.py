"""Pick and build the header builder for the configured auth method.

``authentication.method`` defaults to LEGACY_LOGIN here, unlike strategy
selection which defaults to OAUTH2. With no method configured, a client
gets an OAuth2 strategy that the legacy builder refuses.
"""

from typing import Type

from ..auth.base import AuthMethod, BaseAuthStrategy
from ..config.settings import Settings
from ..credentials import CredentialStore
from .base import BaseHeaderBuilder
from .legacy_login import LegacyLoginHeaderBuilder
from .oauth import OAuthHeaderBuilder

DEFAULT_HEADER_AUTH_METHOD = AuthMethod.LEGACY_LOGIN

_BUILDERS = {
    AuthMethod.LEGACY_LOGIN: LegacyLoginHeaderBuilder,
    AuthMethod.OAUTH: OAuthHeaderBuilder,
    AuthMethod.OAUTH2: OAuthHeaderBuilder,
    AuthMethod.OAUTH2_JWT: OAuthHeaderBuilder,
}


def header_builder_class(settings: Settings) -> Type[BaseHeaderBuilder]:
    """Return the builder class for ``authentication.method``.

    :raises ConfigurationError: If the method is unknown
    """
    method = AuthMethod.parse(
        settings.read("authentication.method", DEFAULT_HEADER_AUTH_METHOD)
    )
    return _BUILDERS[method]


def build_header_builder(
    settings: Settings,
    credential_store: CredentialStore,
    auth_strategy: BaseAuthStrategy,
    version: str,
    header_ns: str,
    default_ns: str,
) -> BaseHeaderBuilder:
    """Build the header builder matching the configured auth method.

    :param settings: Client settings
    :type settings: Settings
    :param credential_store: Store the builder reads on every call
    :type credential_store: CredentialStore
    :param auth_strategy: Strategy producing authentication material
    :type auth_strategy: BaseAuthStrategy
    :param version: Target API version
    :type version: str
    :param header_ns: Header namespace
    :type header_ns: str
    :param default_ns: Default (service) namespace
    :type default_ns: str
    :return: Builder bound to the store and strategy
    :rtype: BaseHeaderBuilder
    :raises ConfigurationError: If the method is unknown or does not match
        the strategy
    """
    builder_class = header_builder_class(settings)
    return builder_class(credential_store, auth_strategy, header_ns, default_ns, version)
