"""IFTTT provider."""

from healarr_notify.models.domain.notification import ProviderType
from healarr_notify.providers.base import BaseProvider


class IFTTTProvider(BaseProvider):
    """IFTTT webhook trigger.

    Parameters:
        - webhook_key: Maker webhook key
        - event: Event name to trigger
    """

    provider_type = ProviderType.IFTTT

    def build_url(self) -> str:
        webhook_key = self.require("webhook_key")
        event = self.require("event")
        return f"ifttt://{webhook_key}/?events={event}"
