"""Microsoft Teams provider."""

from urllib.parse import urlsplit

from healarr_notify.models.domain.notification import ProviderType
from healarr_notify.providers.base import BaseProvider


class TeamsProvider(BaseProvider):
    """Microsoft Teams incoming webhook notifications.

    Parameters:
        - webhook_url: https://{host}/webhookb2/{group}@{tenant}/IncomingWebhook/{id}/{signature}
    """

    provider_type = ProviderType.TEAMS

    def build_url(self) -> str:
        try:
            parsed = urlsplit(self.get("webhook_url").strip())
        except ValueError as e:
            raise self.invalid(f"invalid Teams webhook URL: {e}") from None

        parts = parsed.path.removeprefix("/webhookb2/").split("/")
        if len(parts) < 4:
            raise self.invalid("invalid Teams webhook URL format")

        group_tenant = parts[0].split("@")
        if len(group_tenant) != 2:
            raise self.invalid("invalid Teams webhook URL format: missing group@tenant")

        group, tenant = group_tenant
        return f"teams://{group}@{tenant}/{parts[2]}/{parts[3]}?host={parsed.netloc}"
