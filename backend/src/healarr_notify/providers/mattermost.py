"""Mattermost provider."""

from urllib.parse import urlsplit

from healarr_notify.models.domain.notification import ProviderType
from healarr_notify.providers.base import BaseProvider


def hook_url(provider: BaseProvider, scheme: str) -> str:
    """Build a {scheme}://{host}/{token}[/{channel}] URL from a /hooks/ webhook.

    Shared by the Mattermost and Rocket.Chat providers, whose incoming
    webhooks use the same path layout.
    """
    try:
        parsed = urlsplit(provider.require("webhook_url"))
    except ValueError as e:
        raise provider.invalid(f"invalid {provider.label} webhook URL: {e}") from None

    token = parsed.path.removeprefix("/hooks/")
    url = f"{scheme}://{parsed.netloc}/{token}"
    channel = provider.get("channel")
    if channel:
        url += "/" + channel
    return url


class MattermostProvider(BaseProvider):
    """Mattermost incoming webhook notifications.

    Parameters:
        - webhook_url: https://{host}/hooks/{token}
        - channel: Channel override (optional)
    """

    provider_type = ProviderType.MATTERMOST

    def build_url(self) -> str:
        return hook_url(self, "mattermost")
