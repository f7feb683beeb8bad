"""
Encryption Service

Authenticates and encrypts byte messages into dot-delimited tokens:

    <base64(nonce)>.<base64(ciphertext + tag)>

The service owns key resolution, key derivation, nonce handling and token
framing. All cryptographic work is delegated to an AeadPrimitive.
"""

import base64
from typing import Optional, Union

from sealbox.config import Settings, get_settings
from sealbox.core.exceptions import (
    DecryptException,
    KeyNotFoundException,
    KeyNotFoundReason,
    MalformedTokenException,
    NonceException,
    SealboxException,
    TokenDecodeException,
)
from sealbox.core.logging import get_logger
from sealbox.core.metrics import track_operation
from sealbox.core.primitives import AeadPrimitive, SodiumSecretBox, get_primitive


logger = get_logger(__name__)

KeyLike = Union[bytes, str]

TOKEN_SEPARATOR = "."


def _to_bytes(key: Optional[KeyLike]) -> Optional[bytes]:
    if isinstance(key, str):
        return key.encode("utf-8")
    return key


class EncryptionService:
    """
    Encryption service for messages and tokens.

    Holds an optional default key for its lifetime. Each call may pass its
    own key, which takes precedence over the default. Instances are
    immutable and safe to share between threads.
    """

    def __init__(
        self,
        key: Optional[KeyLike] = None,
        primitive: Optional[AeadPrimitive] = None,
        metrics: bool = True,
    ):
        """
        Initialize encryption service.

        Args:
            key: Default key used when a call passes none
            primitive: AEAD backend (default: libsodium secretbox)
            metrics: Record Prometheus metrics for each operation
        """
        self._key = _to_bytes(key)
        self._primitive = primitive or SodiumSecretBox()
        self._metrics = metrics

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "EncryptionService":
        """
        Build a service from configuration.

        Args:
            settings: Settings to use (default: cached environment settings)

        Returns:
            EncryptionService: Configured service
        """
        settings = settings or get_settings()
        return cls(
            key=settings.default_key,
            primitive=get_primitive(settings.PRIMITIVE),
            metrics=settings.ENABLE_METRICS,
        )

    @property
    def key(self) -> Optional[bytes]:
        """Default key, or None when the service has none."""
        return self._key

    @property
    def primitive(self) -> AeadPrimitive:
        """AEAD backend used for every call."""
        return self._primitive

    # ===================================
    # Public API
    # ===================================

    def encrypt(
        self,
        message: bytes,
        nonce: Optional[bytes] = None,
        key: Optional[KeyLike] = None,
    ) -> str:
        """
        Encrypt a message into a token.

        Args:
            message: Plaintext bytes
            nonce: Nonce of exactly NONCE_SIZE bytes (default: random)
            key: Key for this call (default: the service's default key)

        Returns:
            str: Token of the form <b64 nonce>.<b64 ciphertext>

        Raises:
            NonceException: If the nonce has the wrong length
            KeyNotFoundException: If no usable key resolves
        """
        try:
            nonce = self._check_nonce(nonce)
            derived = self._derive_key(self._check_key(key))
        except SealboxException as e:
            self._track("encrypt", e.error_code)
            logger.warning(f"Encryption rejected: {e.message}")
            raise

        encrypted = self._primitive.seal(message, nonce, derived)

        self._track("encrypt", "success", len(message))
        logger.debug(f"Encrypted message of {len(message)} bytes")
        return TOKEN_SEPARATOR.join([self._b64encode(nonce), self._b64encode(encrypted)])

    def decrypt(self, token: str, key: Optional[KeyLike] = None) -> bytes:
        """
        Decrypt a token.

        Args:
            token: Token produced by encrypt()
            key: Key for this call (default: the service's default key)

        Returns:
            bytes: Plaintext

        Raises:
            KeyNotFoundException: If no usable key resolves
            MalformedTokenException: If the token is not two segments
            TokenDecodeException: If a segment is not valid base64
            DecryptException: If authentication fails
        """
        try:
            plaintext = self._decrypt(token, key)
        except SealboxException as e:
            self._track("decrypt", e.error_code)
            logger.warning(f"Decryption failed: {e.message}")
            raise

        self._track("decrypt", "success", len(plaintext))
        logger.debug(f"Decrypted message of {len(plaintext)} bytes")
        return plaintext

    def decrypt_best_effort(
        self,
        value: str,
        nonce: Optional[Union[str, bytes]] = None,
        key: Optional[KeyLike] = None,
    ) -> str:
        """
        Decrypt a value stored apart from its nonce, falling back to the value.

        This helper intentionally hides ALL failures: whatever goes wrong
        (bad key, bad token, a raising primitive, non-UTF-8 plaintext) the
        original still-encrypted value is returned unchanged, and nothing is
        logged or counted as a decrypt failure. Use decrypt() wherever a
        failure must be noticed.

        Args:
            value: Base64 ciphertext, or a full token when nonce is None
            nonce: Nonce tracked separately from the ciphertext, either as
                base64 text or as the raw bytes given to encrypt()
            key: Key for this call (default: the service's default key)

        Returns:
            str: Plaintext text, or value unchanged on any failure
        """
        try:
            if isinstance(nonce, bytes):
                nonce = self._b64encode(nonce)
            token = TOKEN_SEPARATOR.join([nonce, value]) if nonce else value
            plaintext = self._decrypt(token, key).decode("utf-8")
        except Exception as e:
            # Worst case, hand back the text in its encrypted state
            logger.debug(f"Best-effort decryption returned value unchanged: {type(e).__name__}")
            self._track("decrypt_best_effort", "fallback")
            return value

        self._track("decrypt_best_effort", "success")
        return plaintext

    def generate_nonce(self) -> bytes:
        """Fresh random nonce of the primitive's nonce size."""
        return self._primitive.random_bytes(self._primitive.NONCE_SIZE)

    # ===================================
    # Internals
    # ===================================

    def _decrypt(self, token: str, key: Optional[KeyLike]) -> bytes:
        derived = self._derive_key(self._check_key(key))

        payload = token.split(TOKEN_SEPARATOR)
        if len(payload) != 2:
            raise MalformedTokenException(detail={"segments": len(payload)})

        nonce = self._b64decode(payload[0], "nonce")
        ciphertext = self._b64decode(payload[1], "ciphertext")

        decrypted = self._primitive.open(ciphertext, nonce, derived)
        if decrypted is None:
            raise DecryptException()

        return decrypted

    def _check_nonce(self, nonce: Optional[bytes]) -> bytes:
        """
        Check a custom nonce, or generate a random one if not provided.

        Raises:
            NonceException: If the nonce is not exactly NONCE_SIZE bytes
        """
        if nonce is None:
            return self.generate_nonce()

        if len(nonce) != self._primitive.NONCE_SIZE:
            raise NonceException(expected=self._primitive.NONCE_SIZE, actual=len(nonce))

        return nonce

    def _check_key(self, key: Optional[KeyLike]) -> bytes:
        """
        Resolve the key for one call: custom key first, then default key.

        Raises:
            KeyNotFoundException: If the resolved key is empty or absent
        """
        key = _to_bytes(key)

        if key is not None:
            if key == b"":
                raise KeyNotFoundException(KeyNotFoundReason.CUSTOM_KEY_EMPTY)
            return key

        if self._key is not None:
            if self._key == b"":
                raise KeyNotFoundException(KeyNotFoundReason.DEFAULT_KEY_EMPTY)
            return self._key

        raise KeyNotFoundException(KeyNotFoundReason.NEITHER_KEY_PROVIDED)

    def _derive_key(self, key: bytes) -> bytes:
        # Both encrypt and decrypt derive to KEY_SIZE
        return self._primitive.generic_hash(key, self._primitive.KEY_SIZE)

    @staticmethod
    def _b64encode(data: bytes) -> str:
        return base64.b64encode(data).decode("ascii")

    @staticmethod
    def _b64decode(segment: str, name: str) -> bytes:
        try:
            return base64.b64decode(segment, validate=True)
        except ValueError as e:
            raise TokenDecodeException(segment=name, detail={"error": str(e)})

    def _track(self, operation: str, status: str, size: Optional[int] = None):
        if self._metrics:
            track_operation(operation, status, size)
