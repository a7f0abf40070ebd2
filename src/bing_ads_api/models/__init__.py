"""Bing Ads API client models package."""

from .base_models import TOKEN_EXPIRY_BUFFER, Token

__all__ = [
    "Token",
    "TOKEN_EXPIRY_BUFFER",
]
