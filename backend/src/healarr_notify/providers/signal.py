"""Signal provider (signal-cli-rest-api)."""

from healarr_notify.models.domain.notification import ProviderType
from healarr_notify.providers.base import HTTP_PREFIX, BaseProvider, normalize_api_url, query_escape


class SignalProvider(BaseProvider):
    """Signal notifications through signal-cli-rest-api.

    Parameters:
        - api_url: REST API URL (http://hostname:port)
        - number: Registered sender number
        - recipient: Recipient number or group ID
    """

    provider_type = ProviderType.SIGNAL

    def build_url(self) -> str:
        api_url = self.get("api_url").strip()
        if not api_url:
            raise self.invalid("signal API URL is required (format: http://hostname:port)")

        number = self.require("number")
        recipient = self.require("recipient")
        return (
            f"generic+{HTTP_PREFIX}{normalize_api_url(api_url)}/v2/send"
            f"?number={query_escape(number)}&recipients={query_escape(recipient)}"
        )
