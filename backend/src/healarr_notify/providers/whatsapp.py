"""WhatsApp provider (CallMeBot compatible API)."""

from healarr_notify.models.domain.notification import ProviderType
from healarr_notify.providers.base import HTTPS_PREFIX, BaseProvider, query_escape, strip_scheme

DEFAULT_API_URL = HTTPS_PREFIX + "api.callmebot.com/whatsapp.php"


class WhatsAppProvider(BaseProvider):
    """WhatsApp notifications through an HTTP gateway.

    Parameters:
        - phone: Phone number with country code
        - api_key: Gateway API key
        - api_url: Gateway URL (default CallMeBot)
    """

    provider_type = ProviderType.WHATSAPP

    def build_url(self) -> str:
        phone = self.require("phone")
        api_key = self.require("api_key")
        api_url = strip_scheme(self.get("api_url") or DEFAULT_API_URL)
        return (
            f"generic+{HTTPS_PREFIX}{api_url}"
            f"?phone={query_escape(phone)}&apikey={query_escape(api_key)}"
        )
