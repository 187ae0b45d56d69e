"""In-memory cache of enabled notification configurations."""

import asyncio
import logging
from collections.abc import Mapping
from types import MappingProxyType
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from healarr_notify.database import session_scope
from healarr_notify.exceptions import ConfigurationError, EncryptionError
from healarr_notify.models.domain.notification import NotificationConfig
from healarr_notify.repositories.notification_repository import NotificationRepository
from healarr_notify.security.encryption import SecretCipher
from healarr_notify.services.config_codec import row_to_config
from healarr_notify.utils.secure_logging import log_error

logger = logging.getLogger(__name__)


class ConfigCache:
    """Decrypted enabled configs keyed by ID.

    The map is replaced on every reload and never mutated, so readers take
    a snapshot without locking. Reloads are serialized.
    """

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        cipher: SecretCipher,
        store_timeout: float = 10.0,
    ) -> None:
        self._session_maker = session_maker
        self._cipher = cipher
        self._store_timeout = store_timeout
        self._configs: Mapping[UUID, NotificationConfig] = MappingProxyType({})
        self._reload_lock = asyncio.Lock()

    async def reload(self) -> int:
        """Reload enabled configs from the store.

        Rows that cannot be decrypted or parsed are logged and skipped.

        Returns:
            Number of configs loaded

        Raises:
            StoreError: If the store fails; the previous map is kept
        """
        async with self._reload_lock:
            async with session_scope(self._session_maker, self._store_timeout) as session:
                rows = await NotificationRepository(session).get_enabled()

            configs: dict[UUID, NotificationConfig] = {}
            for row in rows:
                try:
                    configs[row.id] = row_to_config(row, self._cipher)
                except (EncryptionError, ConfigurationError) as e:
                    log_error(logger, f"Skipping notification {row.id}", e)

            self._configs = MappingProxyType(configs)
            logger.info(f"Loaded {len(configs)} notification configurations")
            return len(configs)

    def snapshot(self) -> Mapping[UUID, NotificationConfig]:
        """Get the current immutable config map."""
        return self._configs

    def get(self, config_id: UUID) -> NotificationConfig | None:
        return self._configs.get(config_id)

    def __len__(self) -> int:
        return len(self._configs)
