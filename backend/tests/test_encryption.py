"""Credential encryption tests."""

import base64

import pytest

from healarr_notify.exceptions import DecryptionError, NoEncryptionKeyError
from healarr_notify.security.encryption import ENCRYPTED_PREFIX, SecretCipher, is_encrypted


class TestSecretCipher:
    """Test AES-GCM encryption of provider parameters."""

    def test_round_trip(self) -> None:
        """Encrypted values decrypt to the original plaintext."""
        cipher = SecretCipher("secret")
        plaintext = '{"webhook_url": "https://discord.com/api/webhooks/1/abc"}'

        encrypted = cipher.encrypt(plaintext)

        assert encrypted.startswith(ENCRYPTED_PREFIX)
        assert plaintext not in encrypted
        assert cipher.decrypt(encrypted) == plaintext

    def test_fresh_nonce_per_encryption(self) -> None:
        """Encrypting the same value twice gives different ciphertexts."""
        cipher = SecretCipher("secret")

        first = cipher.encrypt("same value")
        second = cipher.encrypt("same value")

        assert first != second
        assert cipher.decrypt(first) == cipher.decrypt(second) == "same value"

    def test_unicode_round_trip(self) -> None:
        cipher = SecretCipher("secret")
        assert cipher.decrypt(cipher.encrypt("🔴 ünïcødé")) == "🔴 ünïcødé"

    def test_encrypt_without_key_is_identity(self) -> None:
        cipher = SecretCipher()
        assert not cipher.has_key
        assert cipher.encrypt('{"a": 1}') == '{"a": 1}'

    @pytest.mark.parametrize("secret", [None, "secret"])
    def test_legacy_plaintext_passes_through(self, secret: str | None) -> None:
        """Unmarked values decrypt to themselves with or without a key."""
        cipher = SecretCipher(secret)
        assert cipher.decrypt('{"url": "x"}') == '{"url": "x"}'

    def test_encrypted_value_without_key_raises(self) -> None:
        encrypted = SecretCipher("secret").encrypt("value")

        with pytest.raises(NoEncryptionKeyError, match="no encryption key configured"):
            SecretCipher().decrypt(encrypted)

    def test_wrong_key_raises(self) -> None:
        encrypted = SecretCipher("secret").encrypt("value")

        with pytest.raises(DecryptionError, match="decryption failed: invalid ciphertext"):
            SecretCipher("other-secret").decrypt(encrypted)

    def test_invalid_base64_raises(self) -> None:
        with pytest.raises(DecryptionError):
            SecretCipher("secret").decrypt(ENCRYPTED_PREFIX + "!!!not-base64!!!")

    def test_data_shorter_than_nonce_raises(self) -> None:
        short = ENCRYPTED_PREFIX + base64.b64encode(b"short").decode()

        with pytest.raises(DecryptionError):
            SecretCipher("secret").decrypt(short)

    def test_tampered_ciphertext_raises(self) -> None:
        """A modified ciphertext fails authentication."""
        cipher = SecretCipher("secret")
        data = bytearray(base64.b64decode(cipher.encrypt("value")[len(ENCRYPTED_PREFIX) :]))
        data[-1] ^= 0x01
        tampered = ENCRYPTED_PREFIX + base64.b64encode(bytes(data)).decode()

        with pytest.raises(DecryptionError):
            cipher.decrypt(tampered)

    def test_from_settings(self, settings) -> None:
        cipher = SecretCipher.from_settings(settings)
        assert cipher.has_key
        assert SecretCipher("test-encryption-secret").decrypt(cipher.encrypt("x")) == "x"


class TestIsEncrypted:
    """Test the encryption marker check."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("enc:v1:x", True),
            ("enc:v1:abcdef==", True),
            ("plain", False),
            ("enc:v2:x", False),
            ("enc:v1:", False),
            ("", False),
        ],
    )
    def test_marker(self, value: str, expected: bool) -> None:
        assert is_encrypted(value) is expected
        assert SecretCipher.is_encrypted(value) is expected
