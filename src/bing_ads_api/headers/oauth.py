"""Header builder shared by the OAuth2 strategies."""

from typing import Dict

from ..auth.strategies import BaseOAuth2Strategy
from .base import BaseHeaderBuilder


class OAuthHeaderBuilder(BaseHeaderBuilder):
    """Send the OAuth access token as ``AuthenticationToken``.

    Works with both the refresh-token and the JWT assertion strategy.
    """

    strategy_class = BaseOAuth2Strategy

    async def auth_fields(self) -> Dict[str, str]:
        return await self.auth_strategy.get_auth_material()
