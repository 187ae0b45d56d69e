"""AES-256-GCM encryption for notification credentials stored at rest."""

import base64
import binascii
import hashlib
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from healarr_notify.config import Settings
from healarr_notify.exceptions import DecryptionError, NoEncryptionKeyError

ENCRYPTED_PREFIX = "enc:v1:"


def is_encrypted(value: str) -> bool:
    """Check whether a stored value carries the versioned encryption marker.

    Pure prefix test, independent of whether a key is configured. The bare
    marker with nothing after it is not considered encrypted.
    """
    return len(value) > len(ENCRYPTED_PREFIX) and value.startswith(ENCRYPTED_PREFIX)


class SecretCipher:
    """Encrypts and decrypts opaque configuration blobs.

    The AES key is the SHA-256 digest of the configured secret, so any
    passphrase length works and the secret itself is never stored.

    Data format:
    - Encrypted: "enc:v1:" + base64(nonce (12 bytes) + ciphertext + tag)
    - Legacy: plaintext without prefix, passed through unchanged on decrypt

    Without a secret the cipher is the identity, which keeps installations
    that never enabled encryption working.
    """

    NONCE_SIZE = 12  # 96 bits for GCM

    def __init__(self, secret: str | None = None) -> None:
        """Initialize cipher.

        Args:
            secret: Encryption secret, or None/empty to disable encryption
        """
        if secret:
            self._aesgcm: AESGCM | None = AESGCM(hashlib.sha256(secret.encode("utf-8")).digest())
        else:
            self._aesgcm = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "SecretCipher":
        """Build a cipher from application settings."""
        return cls(settings.healarr_encryption_key or None)

    @property
    def has_key(self) -> bool:
        """Whether an encryption key is configured."""
        return self._aesgcm is not None

    def encrypt(self, plaintext: str) -> str:
        """Encrypt a string for storage.

        Args:
            plaintext: Value to encrypt

        Returns:
            Prefixed ciphertext, or the plaintext unchanged if no key is configured
        """
        if self._aesgcm is None:
            return plaintext

        nonce = os.urandom(self.NONCE_SIZE)
        ciphertext = self._aesgcm.encrypt(nonce, plaintext.encode("utf-8"), None)
        return ENCRYPTED_PREFIX + base64.b64encode(nonce + ciphertext).decode("ascii")

    def decrypt(self, value: str) -> str:
        """Decrypt a stored value.

        Args:
            value: Stored value, encrypted or legacy plaintext

        Returns:
            Plaintext

        Raises:
            NoEncryptionKeyError: If the value is encrypted but no key is configured
            DecryptionError: If the ciphertext is malformed or fails authentication
        """
        if not is_encrypted(value):
            return value

        if self._aesgcm is None:
            raise NoEncryptionKeyError()

        try:
            data = base64.b64decode(value[len(ENCRYPTED_PREFIX) :], validate=True)
        except (binascii.Error, ValueError):
            raise DecryptionError() from None

        if len(data) < self.NONCE_SIZE:
            raise DecryptionError()

        nonce, ciphertext = data[: self.NONCE_SIZE], data[self.NONCE_SIZE :]
        try:
            plaintext = self._aesgcm.decrypt(nonce, ciphertext, None)
            return plaintext.decode("utf-8")
        except (InvalidTag, ValueError, UnicodeDecodeError):
            raise DecryptionError() from None

    @staticmethod
    def is_encrypted(value: str) -> bool:
        """Check whether a value carries the encryption marker."""
        return is_encrypted(value)
