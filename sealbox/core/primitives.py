"""
AEAD Primitives

The authenticated-encryption capability used by EncryptionService:
- seal / open with a fixed-size nonce and key
- generic hash used to normalize caller keys to the key size
- secure random bytes for nonce generation

Two backends are provided:
- SodiumSecretBox: libsodium crypto_secretbox (XSalsa20-Poly1305) via PyNaCl
- ChaCha20Poly1305Box: IETF ChaCha20-Poly1305 via cryptography
"""

import hashlib
import secrets
from abc import ABC, abstractmethod
from typing import Dict, Optional, Type

import nacl.bindings
import nacl.encoding
import nacl.exceptions
import nacl.hash
import nacl.utils
from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import ChaCha20Poly1305

from sealbox.core.exceptions import ConfigurationException


class AeadPrimitive(ABC):
    """
    Authenticated-encryption capability.

    Implementations must never raise from open() on authentication or
    length failures; they return None instead.
    """

    name: str = ""
    NONCE_SIZE: int = 0
    KEY_SIZE: int = 0

    @abstractmethod
    def seal(self, plaintext: bytes, nonce: bytes, key: bytes) -> bytes:
        """Encrypt plaintext and append an authentication tag."""

    @abstractmethod
    def open(self, ciphertext: bytes, nonce: bytes, key: bytes) -> Optional[bytes]:
        """Verify and decrypt, returning None when verification fails."""

    @abstractmethod
    def generic_hash(self, data: bytes, size: int) -> bytes:
        """Unkeyed fixed-length hash of data."""

    @abstractmethod
    def random_bytes(self, size: int) -> bytes:
        """Cryptographically secure random bytes."""


class SodiumSecretBox(AeadPrimitive):
    """
    libsodium crypto_secretbox with BLAKE2b generichash key derivation.

    Output is the combined (tag + ciphertext) form, compatible with
    sodium_crypto_secretbox / crypto_secretbox_easy.
    """

    name = "secretbox"
    NONCE_SIZE = nacl.bindings.crypto_secretbox_NONCEBYTES
    KEY_SIZE = nacl.bindings.crypto_secretbox_KEYBYTES

    def seal(self, plaintext: bytes, nonce: bytes, key: bytes) -> bytes:
        return nacl.bindings.crypto_secretbox(plaintext, nonce, key)

    def open(self, ciphertext: bytes, nonce: bytes, key: bytes) -> Optional[bytes]:
        try:
            return nacl.bindings.crypto_secretbox_open(ciphertext, nonce, key)
        except nacl.exceptions.CryptoError:
            # nacl's ValueError (bad nonce/key length) subclasses CryptoError
            return None

    def generic_hash(self, data: bytes, size: int) -> bytes:
        return nacl.hash.generichash(data, digest_size=size, encoder=nacl.encoding.RawEncoder)

    def random_bytes(self, size: int) -> bytes:
        return nacl.utils.random(size)


class ChaCha20Poly1305Box(AeadPrimitive):
    """
    IETF ChaCha20-Poly1305 (96-bit nonce) from the cryptography package.

    Key derivation uses BLAKE2b, the same hash as sodium's generichash.
    """

    name = "chacha20poly1305"
    NONCE_SIZE = 12
    KEY_SIZE = 32

    def seal(self, plaintext: bytes, nonce: bytes, key: bytes) -> bytes:
        return ChaCha20Poly1305(key).encrypt(nonce, plaintext, None)

    def open(self, ciphertext: bytes, nonce: bytes, key: bytes) -> Optional[bytes]:
        try:
            return ChaCha20Poly1305(key).decrypt(nonce, ciphertext, None)
        except (InvalidTag, ValueError):
            return None

    def generic_hash(self, data: bytes, size: int) -> bytes:
        return hashlib.blake2b(data, digest_size=size).digest()

    def random_bytes(self, size: int) -> bytes:
        return secrets.token_bytes(size)


PRIMITIVES: Dict[str, Type[AeadPrimitive]] = {
    SodiumSecretBox.name: SodiumSecretBox,
    ChaCha20Poly1305Box.name: ChaCha20Poly1305Box,
}


def get_primitive(name: str) -> AeadPrimitive:
    """
    Instantiate a primitive by name.

    Args:
        name: Registered primitive name

    Returns:
        AeadPrimitive: Primitive instance

    Raises:
        ConfigurationException: If the name is not registered
    """
    try:
        return PRIMITIVES[name.lower()]()
    except KeyError:
        raise ConfigurationException(
            message=f"Unknown primitive: {name}",
            detail={"available": sorted(PRIMITIVES)},
        )
