"""
signer.py — HMAC URI signing and validation

  sign(uri)      -> uri with ?<param>=<hex hmac of the signing string>
  validate(uri)  -> True iff the embedded signature matches

Relative input stays relative and absolute input stays absolute. The
signature parameter never takes part in its own signing string: any copy
already present is dropped before hashing, on both sides.

Security model:
  - The key never leaves the SignerConfig and is never logged.
  - A missing, empty or mismatched signature is "not valid", never an
    exception. Comparison is constant-time.
  - Repeated query keys are signed by their last value only (in the
    sorted orders). Changing an earlier duplicate does not invalidate the
    signature, so applications that read the first value of a repeated
    parameter must reject duplicates themselves or sign with order=False.
"""

from __future__ import annotations
import logging
from typing import Optional, Union

from .canonical_uri import ParsedUri, canonicalize, parse_uri
from .config import (
    DEFAULT_ALGORITHM,
    DEFAULT_QUERYSTRING_NAME,
    Comparator,
    QueryOrder,
    SignerConfig,
)
from .keyed_hash import hmac_hex, signatures_equal

logger = logging.getLogger(__name__)


class UrlSigner:
    """Signs and validates URIs with one immutable SignerConfig."""

    def __init__(self, config: SignerConfig):
        self.config = config

    def _signature_for(self, uri: ParsedUri) -> str:
        signing_string = canonicalize(uri, self.config)
        logger.debug("Signing string: %s", signing_string)
        return hmac_hex(self.config.algorithm, self.config.key_bytes, signing_string)

    def signing_string(self, uri: str) -> str:
        """Return the string that ``sign`` would hash for ``uri``."""
        parsed = parse_uri(uri)
        return canonicalize(parsed.without(self.config.querystring_name), self.config)

    def sign(self, uri: str) -> str:
        """Sign an absolute or relative URI.

        Args:
            uri: URI text. An existing signature parameter is overwritten.

        Returns:
            str: The URI in its original form (relative stays relative)
            with the signature parameter set.

        Raises:
            MalformedUriError: If the URI cannot be parsed.
            UnknownSchemeError: If an absolute URI has no port and no
                default port is known for its scheme.
        """
        parsed = parse_uri(uri)
        signature = self._signature_for(parsed.without(self.config.querystring_name))
        parsed.set(self.config.querystring_name, signature)
        return parsed.to_text()

    def validate(self, uri: str) -> bool:
        """Check the signature embedded in ``uri``.

        Returns:
            bool: False when the signature parameter is missing, empty or
            does not match the recomputed signature.

        Raises:
            MalformedUriError: If the URI cannot be parsed.
            UnknownSchemeError: As for ``sign``.
        """
        parsed = parse_uri(uri)
        supplied = parsed.get(self.config.querystring_name)
        if not supplied:
            logger.debug("No %s parameter present; not validated", self.config.querystring_name)
            return False

        parsed.delete(self.config.querystring_name)
        expected = self._signature_for(parsed)

        is_valid = signatures_equal(expected, supplied)
        if not is_valid:
            logger.warning("Signature verification failed for %s", parsed.path)
        return is_valid


def create_signer(
    key: Optional[Union[str, bytes]] = None,
    order: Union[QueryOrder, bool, Comparator] = True,
    algorithm: str = DEFAULT_ALGORITHM,
    querystring_name: str = DEFAULT_QUERYSTRING_NAME,
) -> UrlSigner:
    """Factory for a UrlSigner.

    Args:
        key: Signing secret (str or bytes). Required.
        order: True (lexical, default), False (preserve original order), or
            a comparator(a, b) -> negative/zero/positive over parameter names.
        algorithm: HMAC hash algorithm name. Defaults to ``md5``.
        querystring_name: Name of the appended parameter. Defaults to ``hash``.

    Raises:
        MissingKeyError: If ``key`` is missing or empty.

    Example:
        signer = create_signer(key="s3cret")
        url = signer.sign("/downloads/report.pdf?user=42")
        assert signer.validate(url)
    """
    config = SignerConfig(
        key=key,
        order=order,
        algorithm=algorithm,
        querystring_name=querystring_name,
    )
    return UrlSigner(config)
