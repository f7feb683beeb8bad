"""
Services Module

Encryption and decryption of messages into tokens.
"""

from sealbox.services.encryption_service import EncryptionService

__all__ = [
    "EncryptionService",
]
