"""Notification provider package."""

from healarr_notify.providers.base import BaseProvider
from healarr_notify.providers.generic import GenericWebhookProvider
from healarr_notify.providers.registry import PROVIDERS, build_provider_url, get_provider

__all__ = [
    "BaseProvider",
    "GenericWebhookProvider",
    "PROVIDERS",
    "build_provider_url",
    "get_provider",
]
