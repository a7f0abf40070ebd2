"""Main point of access to the Bing Ads API.

``BingAdsApi`` holds the configuration, the credential store, the
authentication strategy and one header builder per API version. It also
exposes the session flags, either permanently through properties or for a
single operation through the ``run_*`` helpers and ``flag_scope``.

Example
-------
.. code-block:: python

   api = BingAdsApi(Settings.from_yaml())
   headers = await api.request_headers()

   # Validate a mutation without committing it
   with api.flag_scope(SessionFlag.VALIDATE_ONLY):
       headers = await api.request_headers()

A client instance is not safe for concurrent use: flag scopes on one
instance must not overlap across threads or tasks.
"""

import logging
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, Optional, Type, TypeVar

from .api_config import ApiConfig
from .auth.base import BaseAuthStrategy
from .auth.selector import select_auth_strategy
from .config.settings import Settings
from .credentials import CredentialStore, SessionFlag
from .exceptions import ConfigurationError
from .headers.base import BaseHeaderBuilder
from .headers.factory import build_header_builder
from .report_utils import ReportUtils
from .scoped_flags import flag_scope, run_with_flag
from .utils.security import setup_secure_logging

R = TypeVar("R")


class BingAdsApi:
    """Client facade holding services configuration and credentials.

    :param settings: Client settings; loaded from the environment if omitted
    :type settings: Optional[Settings]
    :param api_config: Service directory
    :type api_config: Type[ApiConfig]
    :param logger: Logger receiving client warnings and debug output
        (defaults to this module's logger)
    :type logger: Optional[logging.Logger]
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        api_config: Type[ApiConfig] = ApiConfig,
        logger: Optional[logging.Logger] = None,
    ):
        self.settings = settings if settings is not None else Settings()
        self.api_config = api_config
        self.logger = logger or logging.getLogger(__name__)
        self.credential_store = CredentialStore(
            developer_token=self.settings.read("authentication.developer_token"),
            customer_id=self.settings.read("authentication.customer_id"),
            account_id=self.settings.read("authentication.account_id"),
        )
        self._auth_strategy: Optional[BaseAuthStrategy] = None
        self._header_builders: Dict[str, BaseHeaderBuilder] = {}

    @property
    def environment(self) -> str:
        """Return the configured service environment."""
        return self.settings.read(
            "service.environment", self.api_config.default_environment()
        )

    # ------------------------------------------------------------------
    # Authentication and headers
    # ------------------------------------------------------------------

    def create_auth_strategy(self) -> BaseAuthStrategy:
        """Build a new authentication strategy from configuration."""
        return select_auth_strategy(self.settings, self.api_config, self.logger)

    @property
    def auth_strategy(self) -> BaseAuthStrategy:
        """Return the authentication strategy, building it on first access."""
        if self._auth_strategy is None:
            self._auth_strategy = self.create_auth_strategy()
        return self._auth_strategy

    def _check_version(self, version: Optional[str]) -> str:
        version = version or self.api_config.default_version()
        if version not in self.api_config.versions():
            raise ConfigurationError(f"Unknown version '{version}'", setting="version")
        return version

    def soap_header_builder(
        self,
        auth_strategy: BaseAuthStrategy,
        version: str,
        header_ns: str,
        default_ns: str,
    ) -> BaseHeaderBuilder:
        """Build the header builder matching the configured auth method.

        :param auth_strategy: Strategy producing authentication material
        :param version: Intended API version
        :param header_ns: Header namespace
        :param default_ns: Default namespace
        :return: SOAP header builder
        """
        return build_header_builder(
            self.settings,
            self.credential_store,
            auth_strategy,
            version,
            header_ns,
            default_ns,
        )

    def header_builder(self, version: Optional[str] = None) -> BaseHeaderBuilder:
        """Return the cached header builder for ``version``.

        :param version: API version; defaults to the directory default
        :type version: Optional[str]
        :return: Header builder
        :rtype: BaseHeaderBuilder
        :raises ConfigurationError: For unknown versions or environments, or
            a builder that does not match the strategy
        """
        version = self._check_version(version)
        builder = self._header_builders.get(version)
        if builder is None:
            header_ns = self.api_config.header_namespace(self.environment, version)
            if header_ns is None:
                raise ConfigurationError(
                    f"Unknown environment '{self.environment}'",
                    setting="service.environment",
                )
            builder = self.soap_header_builder(
                self.auth_strategy,
                version,
                header_ns,
                self.api_config.default_namespace(version),
            )
            self._header_builders[version] = builder
            self.logger.debug(f"Built {type(builder).__name__} for {version}")
        return builder

    async def request_headers(
        self,
        version: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Populate SOAP headers for an outbound call.

        :param version: API version; defaults to the directory default
        :type version: Optional[str]
        :param headers: Existing header mapping to update in place
        :type headers: Optional[Dict[str, Any]]
        :return: The populated mapping
        :rtype: Dict[str, Any]
        """
        if headers is None:
            headers = {}
        return await self.header_builder(version).populate(headers)

    def service_endpoint(self, service: str, version: Optional[str] = None) -> str:
        """Return the endpoint URL of ``service`` in the configured environment.

        :raises ConfigurationError: For unknown versions or services, or a
            service not served in this environment
        """
        version = self._check_version(version)
        if not self.api_config.has_service(version, service):
            raise ConfigurationError(
                f"Version '{version}' does not contain service '{service}'",
                setting="service",
            )
        url = self.api_config.endpoint(version, service, self.environment)
        if not url:
            raise ConfigurationError(
                f"Service '{service}' {version} is not available in "
                f"environment '{self.environment}'",
                setting="service.environment",
            )
        return url

    def report_utils(self, version: Optional[str] = None) -> ReportUtils:
        """Return reporting utilities for ``version``."""
        return ReportUtils(self, self._check_version(version))

    def configure_logging(self) -> None:
        """Install sanitizing root logging at ``library.log_level``."""
        setup_secure_logging(self.settings.read("library.log_level", "INFO"))

    async def aclose(self) -> None:
        """Drop cached authentication state."""
        if self._auth_strategy is not None:
            await self._auth_strategy.close()

    # ------------------------------------------------------------------
    # Session flags
    # ------------------------------------------------------------------

    @contextmanager
    def flag_scope(self, flag: SessionFlag, value: bool = True) -> Iterator[bool]:
        """Hold a session flag at ``value`` for the duration of the block.

        :param flag: Flag to override
        :type flag: SessionFlag
        :param value: Temporary value
        :type value: bool
        :return: Context manager yielding the previous value
        """
        with flag_scope(self.credential_store, flag, value) as previous:
            yield previous

    def run_with_flag(
        self,
        flag: SessionFlag,
        value: bool,
        operation: Callable[..., R],
        *args: Any,
        **kwargs: Any,
    ) -> R:
        """Run ``operation`` with ``flag`` temporarily set to ``value``."""
        return run_with_flag(
            self.credential_store, flag, value, operation, *args, **kwargs
        )

    @property
    def use_mcc(self) -> bool:
        """Whether operations run at the manager (MCC) account level."""
        return self.credential_store.use_mcc

    @use_mcc.setter
    def use_mcc(self, value: bool) -> None:
        self.credential_store.use_mcc = value

    def run_as_mcc(self, operation: Callable[..., R], *args: Any, **kwargs: Any) -> R:
        """Run ``operation`` as a manager-level operation."""
        return self.run_with_flag(
            SessionFlag.ACCOUNT_MANAGEMENT, True, operation, *args, **kwargs
        )

    @property
    def validate_only(self) -> bool:
        """Whether requests are validated without being committed."""
        return self.credential_store.validate_only

    @validate_only.setter
    def validate_only(self, value: bool) -> None:
        self.credential_store.validate_only = value

    def run_validate_only(
        self, operation: Callable[..., R], *args: Any, **kwargs: Any
    ) -> R:
        """Run ``operation`` as a validate-only operation."""
        return self.run_with_flag(
            SessionFlag.VALIDATE_ONLY, True, operation, *args, **kwargs
        )

    @property
    def partial_failure(self) -> bool:
        """Whether batched requests report per-item failures."""
        return self.credential_store.partial_failure

    @partial_failure.setter
    def partial_failure(self, value: bool) -> None:
        self.credential_store.partial_failure = value

    def run_with_partial_failure(
        self, operation: Callable[..., R], *args: Any, **kwargs: Any
    ) -> R:
        """Run ``operation`` with partial failures enabled."""
        return self.run_with_flag(
            SessionFlag.PARTIAL_FAILURE, True, operation, *args, **kwargs
        )
