"""ntfy provider."""

from healarr_notify.models.domain.notification import ProviderType
from healarr_notify.providers.base import HTTPS_PREFIX, BaseProvider, strip_scheme

DEFAULT_SERVER = HTTPS_PREFIX + "ntfy.sh"


class NtfyProvider(BaseProvider):
    """ntfy topic notifications.

    Parameters:
        - server_url: ntfy server (default https://ntfy.sh)
        - topic: Topic name
        - priority: 1-5 (optional)
    """

    provider_type = ProviderType.NTFY

    def build_url(self) -> str:
        server_url = strip_scheme(self.get("server_url") or DEFAULT_SERVER)
        topic = self.require("topic")
        url = f"ntfy://{server_url}/{topic}"

        priority = self.get_int("priority")
        if priority > 0:
            url += f"?priority={priority}"
        return url
