"""Telegram provider."""

from healarr_notify.models.domain.notification import ProviderType
from healarr_notify.providers.base import BaseProvider


class TelegramProvider(BaseProvider):
    """Telegram bot notifications.

    Parameters:
        - bot_token: Bot API token
        - chat_id: Target chat or channel ID
    """

    provider_type = ProviderType.TELEGRAM

    def build_url(self) -> str:
        bot_token = self.require("bot_token")
        chat_id = self.require("chat_id")
        return f"telegram://{bot_token}@telegram?chats={chat_id}"
