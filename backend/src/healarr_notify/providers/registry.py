"""Provider registry keyed by provider type."""

from typing import Any

from healarr_notify.exceptions import UnknownProviderError
from healarr_notify.models.domain.notification import ProviderType
from healarr_notify.providers.bark import BarkProvider
from healarr_notify.providers.base import BaseProvider
from healarr_notify.providers.custom import CustomProvider
from healarr_notify.providers.discord import DiscordProvider
from healarr_notify.providers.email import EmailProvider
from healarr_notify.providers.generic import GenericWebhookProvider
from healarr_notify.providers.googlechat import GoogleChatProvider
from healarr_notify.providers.gotify import GotifyProvider
from healarr_notify.providers.ifttt import IFTTTProvider
from healarr_notify.providers.join import JoinProvider
from healarr_notify.providers.matrix import MatrixProvider
from healarr_notify.providers.mattermost import MattermostProvider
from healarr_notify.providers.ntfy import NtfyProvider
from healarr_notify.providers.pushbullet import PushbulletProvider
from healarr_notify.providers.pushover import PushoverProvider
from healarr_notify.providers.rocketchat import RocketChatProvider
from healarr_notify.providers.signal import SignalProvider
from healarr_notify.providers.slack import SlackProvider
from healarr_notify.providers.teams import TeamsProvider
from healarr_notify.providers.telegram import TelegramProvider
from healarr_notify.providers.whatsapp import WhatsAppProvider
from healarr_notify.providers.zulip import ZulipProvider

PROVIDERS: dict[ProviderType, type[BaseProvider]] = {
    ProviderType.DISCORD: DiscordProvider,
    ProviderType.PUSHOVER: PushoverProvider,
    ProviderType.TELEGRAM: TelegramProvider,
    ProviderType.SLACK: SlackProvider,
    ProviderType.EMAIL: EmailProvider,
    ProviderType.GOTIFY: GotifyProvider,
    ProviderType.NTFY: NtfyProvider,
    ProviderType.WHATSAPP: WhatsAppProvider,
    ProviderType.SIGNAL: SignalProvider,
    ProviderType.BARK: BarkProvider,
    ProviderType.GOOGLECHAT: GoogleChatProvider,
    ProviderType.IFTTT: IFTTTProvider,
    ProviderType.JOIN: JoinProvider,
    ProviderType.MATTERMOST: MattermostProvider,
    ProviderType.MATRIX: MatrixProvider,
    ProviderType.PUSHBULLET: PushbulletProvider,
    ProviderType.ROCKETCHAT: RocketChatProvider,
    ProviderType.TEAMS: TeamsProvider,
    ProviderType.ZULIP: ZulipProvider,
    ProviderType.GENERIC: GenericWebhookProvider,
    ProviderType.CUSTOM: CustomProvider,
}


def get_provider(provider_type: str, config: dict[str, Any]) -> BaseProvider:
    """Instantiate the provider for a type.

    Args:
        provider_type: Provider type string
        config: Provider parameters

    Returns:
        Provider instance

    Raises:
        UnknownProviderError: If the type is not registered
    """
    try:
        provider_class = PROVIDERS[ProviderType(provider_type)]
    except (ValueError, KeyError):
        raise UnknownProviderError(provider_type) from None
    return provider_class(config)


def build_provider_url(provider_type: str, config: dict[str, Any]) -> str:
    """Build the transport URL for a provider configuration.

    Raises:
        UnknownProviderError: If the type is not registered
        InvalidProviderConfigError: If the parameters are invalid
    """
    return get_provider(provider_type, config).build_url()
