"""Header builder for legacy username/password authentication."""

from typing import Dict

from ..auth.strategies import LegacyLoginStrategy
from .base import BaseHeaderBuilder


class LegacyLoginHeaderBuilder(BaseHeaderBuilder):
    """Send ``UserName`` and ``Password`` header fields."""

    strategy_class = LegacyLoginStrategy

    async def auth_fields(self) -> Dict[str, str]:
        return await self.auth_strategy.get_auth_material()
