"""Matrix provider."""

from healarr_notify.models.domain.notification import ProviderType
from healarr_notify.providers.base import BaseProvider, query_escape, strip_scheme


class MatrixProvider(BaseProvider):
    """Matrix room notifications.

    Parameters:
        - home_server: Homeserver URL
        - user: Matrix user ID
        - password: Password or access token
        - rooms: Comma-separated room IDs (optional)
    """

    provider_type = ProviderType.MATRIX

    def build_url(self) -> str:
        host = strip_scheme(self.require("home_server"))
        user = query_escape(self.require("user"))
        password = query_escape(self.require("password"))

        url = f"matrix://{user}:{password}@{host}"
        rooms = self.get("rooms")
        if rooms:
            url += "/?rooms=" + query_escape(rooms)
        return url
