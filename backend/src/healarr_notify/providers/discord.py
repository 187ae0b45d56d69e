"""Discord provider."""

from healarr_notify.models.domain.notification import ProviderType
from healarr_notify.providers.base import BaseProvider


class DiscordProvider(BaseProvider):
    """Discord webhook notifications.

    Parameters:
        - webhook_url: https://discord.com/api/webhooks/{id}/{token}
    """

    provider_type = ProviderType.DISCORD

    def build_url(self) -> str:
        webhook_url = self.get("webhook_url").strip()
        parts = webhook_url.split("/webhooks/")
        if len(parts) != 2:
            raise self.invalid("invalid Discord webhook URL format")

        id_token = parts[1].split("/")
        if len(id_token) < 2:
            raise self.invalid("invalid Discord webhook URL format")

        webhook_id = id_token[0]
        token = id_token[1].split("?")[0]
        return f"discord://{token}@{webhook_id}"
