"""Bing Ads API client package.

This package provides programmatic access to the Bing Ads SOAP API:
service endpoint lookup per version and environment, authentication
(legacy login, OAuth2, OAuth2 JWT assertion), SOAP header population and
scoped session flags (manager-level, validate-only, partial failure).

:var __version__: Current package version
:type __version__: str
"""

from .api import BingAdsApi
from .api_config import ApiConfig
from .config.settings import Settings
from .credentials import CredentialStore, SessionFlag
from .exceptions import (
    APIError,
    AuthenticationError,
    BingAdsApiError,
    ConfigurationError,
    OAuthError,
    TokenError,
)

__version__ = "0.1.0"

__all__ = [
    "APIError",
    "ApiConfig",
    "AuthenticationError",
    "BingAdsApi",
    "BingAdsApiError",
    "ConfigurationError",
    "CredentialStore",
    "OAuthError",
    "SessionFlag",
    "Settings",
    "TokenError",
]
