"""Google Chat provider."""

from urllib.parse import urlsplit

from healarr_notify.models.domain.notification import ProviderType
from healarr_notify.providers.base import BaseProvider


class GoogleChatProvider(BaseProvider):
    """Google Chat space webhook notifications.

    Parameters:
        - webhook_url: Incoming webhook URL including key and token query
    """

    provider_type = ProviderType.GOOGLECHAT

    def build_url(self) -> str:
        try:
            parsed = urlsplit(self.require("webhook_url"))
        except ValueError as e:
            raise self.invalid(f"invalid Google Chat webhook URL: {e}") from None
        return f"googlechat://{parsed.netloc}{parsed.path}?{parsed.query}"
