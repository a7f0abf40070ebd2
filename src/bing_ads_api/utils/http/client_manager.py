"""Shared HTTP client manager with connection pooling.

Token endpoints and report downloads go through clients handed out here so
connections are reused across refreshes. Clients are cached per base URL
and timeout; ``close_all`` releases them.
"""

import asyncio
import logging
from typing import Dict, Optional

import httpx

logger = logging.getLogger(__name__)


class HTTPClientManager:
    """Manages shared ``httpx.AsyncClient`` instances.

    This singleton caches clients by configuration so that callers asking
    for the same settings share one connection pool.
    """

    _instance: Optional["HTTPClientManager"] = None

    def __new__(cls):
        """Ensure singleton pattern - only one instance exists."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not hasattr(self, "_initialized"):
            self._clients: Dict[str, httpx.AsyncClient] = {}
            self._lock = asyncio.Lock()
            self._default_timeout = httpx.Timeout(
                connect=5.0, read=30.0, write=10.0, pool=5.0
            )
            self._default_limits = httpx.Limits(
                max_keepalive_connections=10,
                max_connections=20,
                keepalive_expiry=30.0,
            )
            self._initialized = True

    async def get_client(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[httpx.Timeout] = None,
    ) -> httpx.AsyncClient:
        """Get or create an HTTP client for the given configuration.

        :param base_url: Optional base URL for the client
        :type base_url: Optional[str]
        :param timeout: Optional custom timeout configuration
        :type timeout: Optional[httpx.Timeout]
        :return: Configured HTTP client instance
        :rtype: httpx.AsyncClient
        """
        t_key = None
        if timeout:
            t_key = (timeout.connect, timeout.read, timeout.write, timeout.pool)
        cache_key = str((base_url or "default", t_key))

        client = self._clients.get(cache_key)
        if client is None or client.is_closed:
            async with self._lock:
                client = self._clients.get(cache_key)
                if client is None or client.is_closed:
                    kwargs = {
                        "timeout": timeout or self._default_timeout,
                        "limits": self._default_limits,
                        "follow_redirects": True,
                    }
                    if base_url:
                        kwargs["base_url"] = base_url
                    client = httpx.AsyncClient(**kwargs)
                    self._clients[cache_key] = client
                    logger.debug("Created new HTTP client for %s", cache_key)
        return client

    async def close_all(self) -> None:
        """Close all managed HTTP clients."""
        if not self._clients:
            logger.debug("No HTTP clients to close")
            return
        logger.info("Closing %d HTTP client(s)...", len(self._clients))
        for cache_key, client in list(self._clients.items()):
            try:
                await client.aclose()
                logger.debug("Closed managed HTTP client: %s", cache_key)
            except httpx.HTTPError as e:
                logger.warning("Error closing HTTP client %s: %s", cache_key, e)
        self._clients.clear()


http_client_manager = HTTPClientManager()


async def get_http_client(**kwargs) -> httpx.AsyncClient:
    """Get a shared HTTP client from the global manager.

    :param kwargs: ``base_url`` and ``timeout`` overrides
    :return: Configured HTTP client instance
    :rtype: httpx.AsyncClient
    """
    return await http_client_manager.get_client(**kwargs)

