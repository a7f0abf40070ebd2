"""SOAP header builders, one per authentication header shape."""

from .base import BaseHeaderBuilder, qualify
from .factory import (
    DEFAULT_HEADER_AUTH_METHOD,
    build_header_builder,
    header_builder_class,
)
from .legacy_login import LegacyLoginHeaderBuilder
from .oauth import OAuthHeaderBuilder

__all__ = [
    "BaseHeaderBuilder",
    "DEFAULT_HEADER_AUTH_METHOD",
    "LegacyLoginHeaderBuilder",
    "OAuthHeaderBuilder",
    "build_header_builder",
    "header_builder_class",
    "qualify",
]
