"""Shared Pydantic models for the Bing Ads API client."""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

# Tokens are refreshed this long before they actually expire
TOKEN_EXPIRY_BUFFER = timedelta(minutes=5)


class Token(BaseModel):
    """OAuth2 access token with expiration and metadata.

    :param value: The actual token string value
    :type value: str
    :param expires_at: When the token expires
    :type expires_at: datetime
    :param token_type: Type of token (default: "Bearer")
    :type token_type: str
    :param scope: Optional scope string for the token
    :type scope: Optional[str]
    :param metadata: Additional token metadata
    :type metadata: Dict[str, Any]
    """

    value: str
    expires_at: datetime
    token_type: str = "Bearer"
    scope: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)

    def is_valid(self, buffer: timedelta = TOKEN_EXPIRY_BUFFER) -> bool:
        """Return whether the token can still be used.

        :param buffer: Safety margin before the expiry time
        :type buffer: timedelta
        :return: True if the token does not expire within ``buffer``
        :rtype: bool
        """
        now = datetime.now(timezone.utc)
        expiry = self.expires_at
        # Ensure both datetimes are timezone-aware for comparison
        if expiry.tzinfo is None:
            expiry = expiry.replace(tzinfo=timezone.utc)
        return now < (expiry - buffer)
