"""
Shared fixtures for Sealbox tests.
"""

import pytest

from sealbox.core.primitives import ChaCha20Poly1305Box, SodiumSecretBox
from sealbox.services.encryption_service import EncryptionService


@pytest.fixture(params=[SodiumSecretBox, ChaCha20Poly1305Box], ids=["secretbox", "chacha20poly1305"])
def primitive(request):
    return request.param()


@pytest.fixture
def service(primitive):
    """Service with a default key, run against every backend."""
    return EncryptionService(key=b"default-service-key", primitive=primitive, metrics=False)


@pytest.fixture
def keyless_service(primitive):
    return EncryptionService(primitive=primitive, metrics=False)
