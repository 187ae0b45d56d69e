"""Pushbullet provider."""

from healarr_notify.models.domain.notification import ProviderType
from healarr_notify.providers.base import BaseProvider


class PushbulletProvider(BaseProvider):
    """Pushbullet push notifications.

    Parameters:
        - api_token: Access token
        - targets: Device, channel or email targets (optional)
    """

    provider_type = ProviderType.PUSHBULLET

    def build_url(self) -> str:
        url = f"pushbullet://{self.require('api_token')}"
        targets = self.get("targets")
        if targets:
            url += "/" + targets
        return url
