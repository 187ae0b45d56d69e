"""Zulip provider."""

from healarr_notify.models.domain.notification import ProviderType
from healarr_notify.providers.base import BaseProvider, query_escape, strip_scheme


class ZulipProvider(BaseProvider):
    """Zulip stream notifications.

    Parameters:
        - bot_email: Bot email address
        - bot_key: Bot API key
        - host: Zulip server
        - stream: Stream name
        - topic: Topic name
    """

    provider_type = ProviderType.ZULIP

    def build_url(self) -> str:
        bot_email = query_escape(self.require("bot_email"))
        bot_key = query_escape(self.require("bot_key"))
        host = strip_scheme(self.require("host"))
        stream = query_escape(self.get("stream"))
        topic = query_escape(self.get("topic"))
        return f"zulip://{bot_email}:{bot_key}@{host}/?stream={stream}&topic={topic}"
