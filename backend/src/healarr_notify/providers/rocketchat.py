"""Rocket.Chat provider."""

from healarr_notify.models.domain.notification import ProviderType
from healarr_notify.providers.base import BaseProvider
from healarr_notify.providers.mattermost import hook_url


class RocketChatProvider(BaseProvider):
    """Rocket.Chat incoming webhook notifications.

    Parameters:
        - webhook_url: https://{host}/hooks/{token}
        - channel: Channel override (optional)
    """

    provider_type = ProviderType.ROCKETCHAT

    def build_url(self) -> str:
        return hook_url(self, "rocketchat")
