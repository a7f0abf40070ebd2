"""Reporting helpers: ad hoc report download URLs and report downloads."""

import logging
from typing import TYPE_CHECKING, Optional

import httpx

from .exceptions import APIError
from .utils.http import get_http_client
from .utils.security import sanitize_url

if TYPE_CHECKING:
    from .api import BingAdsApi

logger = logging.getLogger(__name__)


class ReportUtils:
    """Report utilities bound to one client and API version.

    :param api: Client whose environment and service directory are used
    :type api: BingAdsApi
    :param version: API version
    :type version: str
    """

    def __init__(self, api: "BingAdsApi", version: str):
        self.api = api
        self.version = version

    def download_url(self) -> Optional[str]:
        """Return the ad hoc report download URL for the client environment.

        :return: URL, or None if the environment has no reporting base URL
            for this version
        :rtype: Optional[str]
        """
        return self.api.api_config.adhoc_report_download_url(
            self.api.environment, self.version
        )

    async def download_report(self, url: str) -> bytes:
        """Download a generated report.

        :param url: Report URL as returned by the reporting service
        :type url: str
        :return: Raw report content (usually a zip archive)
        :rtype: bytes
        :raises APIError: If the download fails
        """
        client = await get_http_client()
        logger.info(f"Downloading report from {sanitize_url(url)}")
        try:
            response = await client.get(url)
        except httpx.HTTPError as e:
            logger.error(f"Report download failed: {e}")
            raise APIError(f"Report download failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise APIError(
                f"Report download failed with status {response.status_code}",
                status_code=response.status_code,
                response_body=response.text,
            )
        return response.content
