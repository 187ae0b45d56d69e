"""Bark provider."""

from healarr_notify.models.domain.notification import ProviderType
from healarr_notify.providers.base import BaseProvider, normalize_api_url


class BarkProvider(BaseProvider):
    """Bark iOS push notifications.

    Parameters:
        - device_key: Bark device key
        - server_url: Bark server (default api.day.app)
    """

    provider_type = ProviderType.BARK

    def build_url(self) -> str:
        device_key = self.require("device_key")
        server_url = normalize_api_url(self.get("server_url") or "api.day.app")
        return f"bark://{device_key}@{server_url}"
