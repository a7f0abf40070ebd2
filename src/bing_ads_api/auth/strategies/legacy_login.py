"""Legacy username/password authentication.

Deprecated by the API in favour of OAuth2 but still accepted; the selector
warns whenever it is chosen.
"""

from typing import Dict, Optional

from ...config.settings import Settings
from ..base import AuthMethod, BaseAuthStrategy


class LegacyLoginStrategy(BaseAuthStrategy):
    """Send the account user name and password with every request.

    :param settings: Client settings providing username and password
    :type settings: Settings
    :param auth_server: Login server URL from the service directory
    :type auth_server: Optional[str]
    :param login_service_name: Login service name from the service directory
    :type login_service_name: Optional[str]
    """

    auth_method = AuthMethod.LEGACY_LOGIN

    def __init__(
        self,
        settings: Settings,
        auth_server: Optional[str] = None,
        login_service_name: Optional[str] = None,
    ):
        super().__init__(settings)
        self.auth_server = auth_server
        self.login_service_name = login_service_name

    def validate_credentials(self) -> None:
        self._require("username", "password")

    async def get_auth_material(self) -> Dict[str, str]:
        self.validate_credentials()
        return {
            "UserName": self._credential("username"),
            "Password": self._credential("password"),
        }
