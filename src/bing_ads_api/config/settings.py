"""Configuration settings for the Bing Ads API client.

Settings are grouped in three sections (``authentication``, ``service`` and
``library``) and loaded from environment variables, ``.env`` files or a YAML
file. Nested values use a double underscore in environment variables, e.g.
``BING_ADS_AUTHENTICATION__METHOD=OAUTH2``.

The client reads values by key path (``settings.read("service.environment")``)
so unset values fall back to caller-supplied defaults.
"""

from pathlib import Path
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..api_config import ApiConfig
from ..exceptions import ConfigurationError


def _upper(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        return value.upper() or None
    return value


class AuthenticationSettings(BaseModel):
    """Authentication method and credential values.

    ``method`` stays a free-form string so unknown values reach the
    authentication selector and fail there with a clear error.
    """

    method: Optional[str] = Field(
        None, description="LEGACY_LOGIN, OAUTH2, OAUTH2_JWT (OAUTH is deprecated)"
    )

    # Identity
    developer_token: Optional[str] = None
    customer_id: Optional[str] = None
    account_id: Optional[str] = None

    # Legacy login
    username: Optional[str] = None
    password: Optional[str] = None

    # OAuth2
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    refresh_token: Optional[str] = None

    # OAuth2 JWT assertion
    jwt_issuer: Optional[str] = None
    jwt_subject: Optional[str] = None
    jwt_private_key: Optional[str] = None
    jwt_private_key_file: Optional[str] = None
    jwt_key_id: Optional[str] = None
    jwt_algorithm: str = "RS256"

    @field_validator("method", mode="before")
    @classmethod
    def normalize_method(cls, v: Any) -> Any:
        return _upper(v)


class ServiceSettings(BaseModel):
    """Target environment for service calls."""

    environment: Optional[str] = Field(None, description="PRODUCTION or SANDBOX")

    @field_validator("environment", mode="before")
    @classmethod
    def normalize_environment(cls, v: Any) -> Any:
        return _upper(v)


class LibrarySettings(BaseModel):
    """Library-level behaviour."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        "INFO", description="Logging level"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> Any:
        return _upper(v) or "INFO"


class Settings(BaseSettings):
    """Client settings loaded from environment variables, ``.env`` or YAML.

    :param authentication: Authentication method and credentials
    :type authentication: AuthenticationSettings
    :param service: Service environment selection
    :type service: ServiceSettings
    :param library: Library behaviour such as the log level
    :type library: LibrarySettings
    """

    model_config = SettingsConfigDict(
        env_prefix="BING_ADS_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra fields in .env file
    )

    authentication: AuthenticationSettings = Field(
        default_factory=AuthenticationSettings
    )
    service: ServiceSettings = Field(default_factory=ServiceSettings)
    library: LibrarySettings = Field(default_factory=LibrarySettings)

    def read(self, path: str, default: Any = None) -> Any:
        """Return the value at a dotted key path.

        Missing keys and keys whose value is None yield ``default``.

        :param path: Dotted key path, e.g. ``"authentication.method"``
        :type path: str
        :param default: Value returned when the key is unset
        :type default: Any
        :return: The configured value or the default
        :rtype: Any
        """
        node: Any = self
        for part in path.split("."):
            if isinstance(node, dict):
                node = node.get(part)
            else:
                node = getattr(node, part, None)
            if node is None:
                return default
        return node

    @classmethod
    def from_yaml(cls, path: Optional[Union[str, Path]] = None) -> "Settings":
        """Load settings from a YAML file.

        Environment variables still apply to keys the file leaves unset.

        :param path: YAML file path; defaults to ``bing_ads_api.yml`` in the
            user's home directory
        :type path: Optional[Union[str, Path]]
        :return: Loaded settings
        :rtype: Settings
        :raises ConfigurationError: If the file is missing or malformed
        """
        import yaml

        if path is None:
            path = Path.home() / ApiConfig.default_config_filename()
        path = Path(path)
        if not path.is_file():
            raise ConfigurationError(
                f"Configuration file '{path}' not found", setting="config_file"
            )

        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Failed to parse configuration file '{path}': {e}",
                setting="config_file",
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration file '{path}' must contain a mapping",
                setting="config_file",
            )
        return cls(**data)
