"""
Primitive Tests

Backends honour the seal/open/hash contract and the service output is
compatible with plain libsodium secretbox users.
"""

import base64
import hashlib

import nacl.encoding
import nacl.hash
import nacl.secret
import pytest

from sealbox.core.exceptions import ConfigurationException, DecryptException
from sealbox.core.primitives import (
    ChaCha20Poly1305Box,
    PRIMITIVES,
    SodiumSecretBox,
    get_primitive,
)
from sealbox.services.encryption_service import EncryptionService


def test_secretbox_sizes_match_libsodium():
    assert SodiumSecretBox.NONCE_SIZE == nacl.secret.SecretBox.NONCE_SIZE == 24
    assert SodiumSecretBox.KEY_SIZE == nacl.secret.SecretBox.KEY_SIZE == 32


def test_chacha_sizes():
    assert ChaCha20Poly1305Box.NONCE_SIZE == 12
    assert ChaCha20Poly1305Box.KEY_SIZE == 32


def test_seal_open(primitive):
    key = primitive.random_bytes(primitive.KEY_SIZE)
    nonce = primitive.random_bytes(primitive.NONCE_SIZE)

    sealed = primitive.seal(b"message", nonce, key)

    assert sealed != b"message"
    assert primitive.open(sealed, nonce, key) == b"message"


def test_open_returns_none_on_failure(primitive):
    key = b"\x01" * primitive.KEY_SIZE
    nonce = b"\x02" * primitive.NONCE_SIZE
    sealed = primitive.seal(b"message", nonce, key)

    assert primitive.open(sealed, nonce, b"\x03" * primitive.KEY_SIZE) is None
    assert primitive.open(sealed[:-1], nonce, key) is None
    assert primitive.open(sealed, nonce[:-1], key) is None
    assert primitive.open(b"", nonce, key) is None


def test_generic_hash_is_blake2b(primitive):
    expected = hashlib.blake2b(b"key material", digest_size=32).digest()
    assert primitive.generic_hash(b"key material", 32) == expected


def test_generic_hash_is_deterministic(primitive):
    assert primitive.generic_hash(b"k", 32) == primitive.generic_hash(b"k", 32)
    assert primitive.generic_hash(b"k", 32) != primitive.generic_hash(b"j", 32)
    assert len(primitive.generic_hash(b"k", 16)) == 16


def test_random_bytes(primitive):
    assert len(primitive.random_bytes(24)) == 24
    assert primitive.random_bytes(24) != primitive.random_bytes(24)


def test_secretbox_token_opens_with_plain_pynacl():
    service = EncryptionService(key=b"shared secret", metrics=False)
    nonce_b64, ciphertext_b64 = service.encrypt(b"interop").split(".")

    derived = nacl.hash.generichash(b"shared secret", digest_size=32, encoder=nacl.encoding.RawEncoder)
    box = nacl.secret.SecretBox(derived)

    assert box.decrypt(base64.b64decode(ciphertext_b64), base64.b64decode(nonce_b64)) == b"interop"


def test_secretbox_opens_plain_pynacl_output():
    derived = nacl.hash.generichash(b"shared secret", digest_size=32, encoder=nacl.encoding.RawEncoder)
    encrypted = nacl.secret.SecretBox(derived).encrypt(b"from pynacl")
    token = f"{base64.b64encode(encrypted.nonce).decode()}.{base64.b64encode(encrypted.ciphertext).decode()}"

    service = EncryptionService(key=b"shared secret", metrics=False)
    assert service.decrypt(token) == b"from pynacl"


def test_tokens_do_not_cross_primitives():
    secretbox = EncryptionService(key=b"k", primitive=SodiumSecretBox(), metrics=False)
    chacha = EncryptionService(key=b"k", primitive=ChaCha20Poly1305Box(), metrics=False)

    with pytest.raises(DecryptException):
        chacha.decrypt(secretbox.encrypt(b"m"))


# ===================================
# Registry
# ===================================

@pytest.mark.parametrize("name", sorted(PRIMITIVES))
def test_get_primitive(name):
    assert get_primitive(name).name == name


def test_get_primitive_is_case_insensitive():
    assert isinstance(get_primitive("SecretBox"), SodiumSecretBox)


def test_unknown_primitive_rejected():
    with pytest.raises(ConfigurationException) as exc:
        get_primitive("rot13")
    assert exc.value.error_code == "configuration_error"
    assert "secretbox" in exc.value.detail["available"]
