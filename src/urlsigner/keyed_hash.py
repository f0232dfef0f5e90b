"""
keyed_hash.py — HMAC primitive for URI signatures

Maps OpenSSL-style algorithm names ("md5", "sha256", "RSA-SHA256",
"sha3-256", ...) onto ``cryptography`` hash classes and computes hex
HMAC digests.

Dependencies:
  - cryptography >= 41.0
"""

from __future__ import annotations
from typing import Callable, Dict, List

from cryptography.hazmat.primitives import constant_time, hashes, hmac

from .errors import UnsupportedAlgorithmError

_ALGORITHMS: Dict[str, Callable[[], hashes.HashAlgorithm]] = {
    "md5": hashes.MD5,
    "sha1": hashes.SHA1,
    "sha224": hashes.SHA224,
    "sha256": hashes.SHA256,
    "sha384": hashes.SHA384,
    "sha512": hashes.SHA512,
    "sha512224": hashes.SHA512_224,
    "sha512256": hashes.SHA512_256,
    "sha3224": hashes.SHA3_224,
    "sha3256": hashes.SHA3_256,
    "sha3384": hashes.SHA3_384,
    "sha3512": hashes.SHA3_512,
    "blake2b512": lambda: hashes.BLAKE2b(64),
    "blake2s256": lambda: hashes.BLAKE2s(32),
}


def _normalize_name(name: str) -> str:
    # "RSA-SHA512/256", "sha-256" and "SHA3_256" all fold onto one table key
    folded = name.strip().lower()
    if folded.startswith("rsa-"):
        folded = folded[4:]
    for sep in ("-", "_", "/"):
        folded = folded.replace(sep, "")
    return folded


def supported_algorithms() -> List[str]:
    """Return the canonical names accepted by ``resolve_algorithm``."""
    return sorted(_ALGORITHMS)


def resolve_algorithm(name: str) -> hashes.HashAlgorithm:
    """Return a fresh ``cryptography`` hash instance for ``name``.

    Raises:
        UnsupportedAlgorithmError: If the name is empty or unknown.
    """
    if not isinstance(name, str) or not name.strip():
        raise UnsupportedAlgorithmError(f"algorithm={name!r}")
    factory = _ALGORITHMS.get(_normalize_name(name))
    if factory is None:
        raise UnsupportedAlgorithmError(f"algorithm={name!r}")
    return factory()


def hmac_hex(algorithm: str, key: bytes, message: str) -> str:
    """Return the lowercase hex HMAC of ``message`` (UTF-8) under ``key``."""
    h = hmac.HMAC(key, resolve_algorithm(algorithm))
    h.update(message.encode("utf-8"))
    return h.finalize().hex()


def signatures_equal(expected: str, supplied: str) -> bool:
    """Constant-time equality of two hex signature strings."""
    return constant_time.bytes_eq(
        expected.encode("utf-8"), supplied.encode("utf-8")
    )
