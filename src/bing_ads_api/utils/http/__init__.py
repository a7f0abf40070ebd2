"""HTTP utilities public API.

Recommended import pattern for consumers:
    from bing_ads_api.utils.http import get_http_client
"""

from .client_manager import (
    HTTPClientManager,
    get_http_client,
    http_client_manager,
)

__all__ = [
    "HTTPClientManager",
    "http_client_manager",
    "get_http_client",
]
