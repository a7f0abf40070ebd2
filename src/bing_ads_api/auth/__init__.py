"""Authentication strategies and their selection from configuration."""

from .base import AuthMethod, BaseAuthStrategy
from .selector import DEFAULT_AUTH_METHOD, select_auth_strategy
from .strategies import (
    BaseOAuth2Strategy,
    LegacyLoginStrategy,
    OAuth2JwtStrategy,
    OAuth2Strategy,
)

__all__ = [
    "AuthMethod",
    "BaseAuthStrategy",
    "BaseOAuth2Strategy",
    "DEFAULT_AUTH_METHOD",
    "LegacyLoginStrategy",
    "OAuth2JwtStrategy",
    "OAuth2Strategy",
    "select_auth_strategy",
]
