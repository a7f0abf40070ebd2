"""Authentication strategy implementations, one per supported method."""

from .legacy_login import LegacyLoginStrategy
from .oauth2 import BaseOAuth2Strategy, OAuth2Strategy
from .oauth2_jwt import OAuth2JwtStrategy

__all__ = [
    "LegacyLoginStrategy",
    "BaseOAuth2Strategy",
    "OAuth2Strategy",
    "OAuth2JwtStrategy",
]
