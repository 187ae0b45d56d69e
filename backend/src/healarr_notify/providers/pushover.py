"""Pushover provider."""

from healarr_notify.models.domain.notification import ProviderType
from healarr_notify.providers.base import BaseProvider, encode_query


class PushoverProvider(BaseProvider):
    """Pushover push notifications.

    Parameters:
        - user_key: Pushover user key
        - app_token: Application API token
        - priority: -2 to 2 (optional)
        - sound: Notification sound (optional)
    """

    provider_type = ProviderType.PUSHOVER

    def build_url(self) -> str:
        user_key = self.require("user_key")
        app_token = self.require("app_token")
        url = f"pushover://shoutrrr:{app_token}@{user_key}/"

        params: dict[str, str] = {}
        priority = self.get_int("priority")
        if priority != 0:
            params["priority"] = str(priority)
        sound = self.get("sound")
        if sound:
            params["sound"] = sound

        if params:
            url += "?" + encode_query(params)
        return url
