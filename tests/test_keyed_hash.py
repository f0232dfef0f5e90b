import hashlib
import hmac

import pytest
from cryptography.hazmat.primitives import hashes

from urlsigner.errors import UnsupportedAlgorithmError
from urlsigner.keyed_hash import (
    hmac_hex,
    resolve_algorithm,
    signatures_equal,
    supported_algorithms,
)


@pytest.mark.parametrize("name, digest", [
    ("md5", hashlib.md5),
    ("sha1", hashlib.sha1),
    ("sha256", hashlib.sha256),
    ("sha512", hashlib.sha512),
    ("sha3-256", hashlib.sha3_256),
])
def test_hmac_matches_stdlib(name, digest):
    expected = hmac.new(b"key", b"/path?a=1", digest).hexdigest()
    assert hmac_hex(name, b"key", "/path?a=1") == expected


def test_hmac_encodes_message_utf8():
    expected = hmac.new(b"k", "/café".encode("utf-8"), hashlib.md5).hexdigest()
    assert hmac_hex("md5", b"k", "/café") == expected


@pytest.mark.parametrize("alias, cls", [
    ("MD5", hashes.MD5),
    ("SHA-256", hashes.SHA256),
    ("RSA-SHA256", hashes.SHA256),
    ("sha512/256", hashes.SHA512_256),
    ("SHA3_512", hashes.SHA3_512),
])
def test_aliases(alias, cls):
    assert isinstance(resolve_algorithm(alias), cls)


def test_blake2_digest_sizes():
    assert resolve_algorithm("blake2b512").digest_size == 64
    assert resolve_algorithm("blake2s256").digest_size == 32


@pytest.mark.parametrize("name", ["", "   ", "rot13", None])
def test_unknown_algorithm(name):
    with pytest.raises(UnsupportedAlgorithmError):
        resolve_algorithm(name)


def test_supported_algorithms_listed():
    names = supported_algorithms()
    assert "md5" in names
    assert names == sorted(names)


def test_signatures_equal():
    assert signatures_equal("abc123", "abc123")
    assert not signatures_equal("abc123", "abc124")
    assert not signatures_equal("abc123", "abc12")
    assert not signatures_equal("abc", "é")
