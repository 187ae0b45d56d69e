"""Gotify provider."""

from healarr_notify.models.domain.notification import ProviderType
from healarr_notify.providers.base import BaseProvider, strip_scheme


class GotifyProvider(BaseProvider):
    """Gotify server notifications.

    Parameters:
        - server_url: Gotify server URL
        - app_token: Application token
        - priority: 1-10 (optional)
    """

    provider_type = ProviderType.GOTIFY

    def build_url(self) -> str:
        server_url = strip_scheme(self.require("server_url"))
        app_token = self.require("app_token")
        url = f"gotify://{server_url}/{app_token}"

        priority = self.get_int("priority")
        if priority > 0:
            url += f"?priority={priority}"
        return url
