"""Custom provider (raw transport URL)."""

from healarr_notify.models.domain.notification import ProviderType
from healarr_notify.providers.base import BaseProvider


class CustomProvider(BaseProvider):
    """User-supplied transport URL, used verbatim."""

    provider_type = ProviderType.CUSTOM

    def build_url(self) -> str:
        url = self.get("url")
        if not url.strip():
            raise self.invalid("missing required field: url")
        return url
