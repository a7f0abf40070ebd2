"""Base SOAP header builder.

A header builder stamps authentication material, identity fields and the
current session flags into the header mapping a SOAP transport merges into
the request envelope. Keys use Clark notation (``{namespace}LocalName``):
credentials and identity go under the header namespace, session flags under
the default (service) namespace.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Type

from ..auth.base import BaseAuthStrategy
from ..credentials import CredentialStore
from ..exceptions import ConfigurationError
from ..utils.security import sanitize_headers

logger = logging.getLogger(__name__)

IDENTITY_FIELDS = {
    "developer_token": "DeveloperToken",
    "customer_id": "CustomerId",
    "account_id": "CustomerAccountId",
}

FLAG_FIELDS = {
    "use_mcc": "UseMcc",
    "validate_only": "ValidateOnly",
    "partial_failure": "PartialFailure",
}


def qualify(namespace: Optional[str], name: str) -> str:
    """Return ``name`` qualified with ``namespace`` in Clark notation."""
    if not namespace:
        return name
    return f"{{{namespace}}}{name}"


class BaseHeaderBuilder(ABC):
    """Populate outbound SOAP headers for one authentication strategy.

    :param credential_store: Store holding identity fields and session flags
    :type credential_store: CredentialStore
    :param auth_strategy: Strategy producing authentication material
    :type auth_strategy: BaseAuthStrategy
    :param header_ns: Namespace of the credential header fields
    :type header_ns: str
    :param default_ns: Namespace of the service (session flag fields)
    :type default_ns: str
    :param version: Target API version
    :type version: str
    :raises ConfigurationError: If the strategy does not match this builder
    """

    strategy_class: Type[BaseAuthStrategy] = BaseAuthStrategy

    def __init__(
        self,
        credential_store: CredentialStore,
        auth_strategy: BaseAuthStrategy,
        header_ns: str,
        default_ns: str,
        version: str,
    ):
        if not isinstance(auth_strategy, self.strategy_class):
            raise ConfigurationError(
                f"{type(self).__name__} cannot be paired with "
                f"{type(auth_strategy).__name__}; check 'authentication.method'",
                setting="authentication.method",
            )
        self.credential_store = credential_store
        self.auth_strategy = auth_strategy
        self.header_ns = header_ns
        self.default_ns = default_ns
        self.version = version

    @abstractmethod
    async def auth_fields(self) -> Dict[str, str]:
        """Return the authentication header fields, unqualified."""

    async def populate(self, headers: Dict[str, Any]) -> Dict[str, Any]:
        """Write credentials and current session flags into ``headers``.

        Keys this builder does not own are left untouched, and the
        credential store is only read.

        :param headers: Outbound header mapping, updated in place
        :type headers: Dict[str, Any]
        :return: The same mapping
        :rtype: Dict[str, Any]
        :raises ConfigurationError: If credentials are incomplete
        :raises AuthenticationError: If authentication material is unavailable
        """
        auth = await self.auth_fields()

        # Flags are read after the auth await, right before dispatch
        store = self.credential_store
        owned: Dict[str, Any] = {}
        for name, value in auth.items():
            owned[qualify(self.header_ns, name)] = value
        for attr, name in IDENTITY_FIELDS.items():
            value = getattr(store, attr)
            if value:
                owned[qualify(self.header_ns, name)] = value
        for attr, name in FLAG_FIELDS.items():
            owned[qualify(self.default_ns, name)] = getattr(store, attr)

        headers.update(owned)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Populated %s headers: %s", self.version, sanitize_headers(owned)
            )
        return headers
