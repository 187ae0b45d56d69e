"""Conversion between stored notification rows and domain configs."""

import json
from typing import Any

from healarr_notify.exceptions import InvalidConfigError
from healarr_notify.models.domain.notification import NotificationConfig
from healarr_notify.models.orm.notification import NotificationORM
from healarr_notify.security.encryption import SecretCipher


def encode_params(params: dict[str, Any], cipher: SecretCipher) -> str:
    """Serialize and encrypt provider parameters for storage."""
    return cipher.encrypt(json.dumps(params))


def encode_events(events: list[str]) -> str:
    """Serialize an event list for storage."""
    return json.dumps(list(events))


def decode_params(stored: str, cipher: SecretCipher) -> dict[str, Any]:
    """Decrypt and parse a stored parameter blob.

    Raises:
        EncryptionError: If decryption fails
        InvalidConfigError: If the plaintext is not a JSON object
    """
    plaintext = cipher.decrypt(stored)
    try:
        params = json.loads(plaintext)
    except json.JSONDecodeError:
        raise InvalidConfigError("invalid provider parameters: not valid JSON") from None
    if not isinstance(params, dict):
        raise InvalidConfigError("invalid provider parameters: expected a JSON object")
    return params


def decode_events(stored: str) -> frozenset[str]:
    """Parse a stored event list.

    Raises:
        InvalidConfigError: If the value is not a JSON array of strings
    """
    try:
        events = json.loads(stored or "[]")
    except json.JSONDecodeError:
        raise InvalidConfigError("invalid event list: not valid JSON") from None
    if not isinstance(events, list) or not all(isinstance(e, str) for e in events):
        raise InvalidConfigError("invalid event list: expected a JSON array of strings")
    return frozenset(events)


def row_to_config(row: NotificationORM, cipher: SecretCipher) -> NotificationConfig:
    """Build a decrypted domain config from a stored row.

    Raises:
        EncryptionError: If the parameters cannot be decrypted
        InvalidConfigError: If the parameters or event list cannot be parsed
    """
    return NotificationConfig(
        id=row.id,
        name=row.name,
        provider_type=row.provider_type,
        config=decode_params(row.config, cipher),
        events=decode_events(row.events),
        enabled=row.enabled,
        throttle_seconds=row.throttle_seconds,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )
