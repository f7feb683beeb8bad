"""
Custom Exceptions

Sealbox-specific exceptions with error codes and messages.
Every failure of an encrypt/decrypt call surfaces as one of these.
"""

from enum import Enum
from typing import Optional, Any


class SealboxException(Exception):
    """
    Base exception for all Sealbox errors.
    """

    def __init__(
        self,
        message: str,
        error_code: str = "internal_error",
        detail: Optional[Any] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.detail = detail
        super().__init__(self.message)


class KeyNotFoundReason(str, Enum):
    """Why key resolution failed."""

    CUSTOM_KEY_EMPTY = "custom_key_empty"
    DEFAULT_KEY_EMPTY = "default_key_empty"
    NEITHER_KEY_PROVIDED = "neither_key_provided"


_KEY_NOT_FOUND_MESSAGES = {
    KeyNotFoundReason.CUSTOM_KEY_EMPTY: "Custom key is empty",
    KeyNotFoundReason.DEFAULT_KEY_EMPTY: "Default key is empty",
    KeyNotFoundReason.NEITHER_KEY_PROVIDED: "Neither custom key nor default key is provided",
}


class KeyNotFoundException(SealboxException):
    """
    Raised when no usable key resolves for an operation.
    """

    def __init__(self, reason: KeyNotFoundReason, detail: Optional[Any] = None):
        self.reason = reason
        super().__init__(
            message=_KEY_NOT_FOUND_MESSAGES[reason],
            error_code="key_not_found",
            detail=detail,
        )


class NonceException(SealboxException):
    """
    Raised when a caller-supplied nonce has the wrong length.
    """

    def __init__(self, expected: int, actual: int, detail: Optional[Any] = None):
        super().__init__(
            message=f"Nonce must be exactly {expected} bytes, got {actual}",
            error_code="invalid_nonce",
            detail=detail,
        )


class MalformedTokenException(SealboxException):
    """
    Raised when a token does not split into exactly two segments.
    """

    def __init__(self, detail: Optional[Any] = None):
        super().__init__(
            message="Decryption payload malformatted",
            error_code="malformed_token",
            detail=detail,
        )


class TokenDecodeException(SealboxException):
    """
    Raised when a token segment is not valid base64.
    """

    def __init__(self, segment: str, detail: Optional[Any] = None):
        super().__init__(
            message=f"Token {segment} segment is not valid base64",
            error_code="token_decode_error",
            detail=detail,
        )


class DecryptException(SealboxException):
    """
    Raised when authentication or decryption of a ciphertext fails.

    Deliberately carries no detail about which check failed.
    """

    def __init__(self):
        super().__init__(
            message="Decryption failed",
            error_code="decrypt_failed",
        )


class ConfigurationException(SealboxException):
    """
    Raised when the service is configured with an unknown primitive.
    """

    def __init__(self, message: str = "Invalid configuration", detail: Optional[Any] = None):
        super().__init__(
            message=message,
            error_code="configuration_error",
            detail=detail,
        )
