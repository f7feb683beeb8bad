"""
Sealbox - Authenticated Symmetric Encryption Helper

Encrypts byte messages under a secret key and a nonce with an authenticated
encryption primitive (libsodium secretbox by default) and frames the result
as a single dot-delimited base64 token.

License: MIT
Version: 1.0.0
"""

__version__ = "1.0.0"
__license__ = "MIT"

from sealbox.core.exceptions import (
    SealboxException,
    KeyNotFoundException,
    KeyNotFoundReason,
    NonceException,
    MalformedTokenException,
    TokenDecodeException,
    DecryptException,
    ConfigurationException,
)
from sealbox.services.encryption_service import EncryptionService

__all__ = [
    "__version__",
    "__license__",
    "EncryptionService",
    "SealboxException",
    "KeyNotFoundException",
    "KeyNotFoundReason",
    "NonceException",
    "MalformedTokenException",
    "TokenDecodeException",
    "DecryptException",
    "ConfigurationException",
]
