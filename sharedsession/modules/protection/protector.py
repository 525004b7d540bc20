"""
Purpose-scoped payload protection using HKDF + AES-GCM.

A protector created for one purpose cannot unprotect payloads produced
for another purpose, even with the same master key.
"""

import base64
import logging
import os
from pathlib import Path
from typing import Protocol, Union

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from ..errors import InvalidArgumentError, ProtectionError

logger = logging.getLogger(__name__)

# AES-256-GCM configuration
KEY_LENGTH_BYTES = 32  # 256 bits
NONCE_LENGTH_BYTES = 12  # 96 bits, recommended for AES-GCM


class KeyProtector(Protocol):
    """Protects and unprotects byte payloads for one purpose."""

    def protect(self, plaintext: bytes) -> bytes:
        ...

    def unprotect(self, protected: bytes) -> bytes:
        """
        Raises:
            ProtectionError: If the payload was tampered with or protected
                under a different key or purpose
        """
        ...


class ProtectionProvider(Protocol):
    """Creates protectors bound to a purpose string."""

    def create_protector(self, purpose: str) -> KeyProtector:
        ...


class AesGcmProtector:
    """AES-256-GCM protector keyed by a purpose-derived subkey."""

    def __init__(self, key: bytes, purpose: str):
        self._aesgcm = AESGCM(key)
        self._associated_data = purpose.encode("utf-8")
        self.purpose = purpose

    def protect(self, plaintext: bytes) -> bytes:
        nonce = os.urandom(NONCE_LENGTH_BYTES)
        return nonce + self._aesgcm.encrypt(nonce, plaintext, self._associated_data)

    def unprotect(self, protected: bytes) -> bytes:
        if len(protected) <= NONCE_LENGTH_BYTES:
            raise ProtectionError("Protected payload is too short")

        nonce = protected[:NONCE_LENGTH_BYTES]
        ciphertext = protected[NONCE_LENGTH_BYTES:]
        try:
            return self._aesgcm.decrypt(nonce, ciphertext, self._associated_data)
        except InvalidTag as e:
            raise ProtectionError("Protected payload failed authentication") from e


class AesGcmProtectionProvider:
    """Protection provider deriving one AES key per purpose from a master key."""

    def __init__(self, master_key: bytes):
        if not master_key or len(master_key) < KEY_LENGTH_BYTES:
            raise InvalidArgumentError(f"master_key must be at least {KEY_LENGTH_BYTES} bytes")
        self._master_key = master_key

    def create_protector(self, purpose: str) -> AesGcmProtector:
        if not purpose:
            raise InvalidArgumentError("purpose")

        subkey = HKDF(
            algorithm=hashes.SHA256(),
            length=KEY_LENGTH_BYTES,
            salt=None,
            info=purpose.encode("utf-8"),
        ).derive(self._master_key)

        return AesGcmProtector(subkey, purpose)

    @classmethod
    def ephemeral(cls) -> "AesGcmProtectionProvider":
        """Provider with a random in-memory master key (single process only)."""
        return cls(AESGCM.generate_key(bit_length=KEY_LENGTH_BYTES * 8))


def load_or_create_master_key(path: Union[str, Path]) -> bytes:
    """
    Load the shared master key, creating the key file if it does not exist.

    The file holds the base64-encoded key. Every application in the farm
    must read the same file.

    Raises:
        ValueError: If the file exists but does not hold a valid key
    """
    key_file = Path(path)

    if key_file.exists():
        try:
            key = base64.b64decode(key_file.read_text().strip(), validate=True)
        except ValueError as e:
            raise ValueError(f"Key file {key_file} is not valid base64") from e
        if len(key) != KEY_LENGTH_BYTES:
            raise ValueError(f"Key file {key_file} must hold a {KEY_LENGTH_BYTES}-byte key")
        return key

    key_file.parent.mkdir(parents=True, exist_ok=True)
    key = AESGCM.generate_key(bit_length=KEY_LENGTH_BYTES * 8)
    key_file.write_text(base64.b64encode(key).decode("ascii"))
    os.chmod(key_file, 0o600)
    logger.info(f"Created new session protection key at {key_file}")
    return key
