"""urlsigner public API.

Self-contained HMAC signatures for absolute and relative URIs.

Example:
    from urlsigner import create_signer

    signer = create_signer(key="s3cret")
    url = signer.sign("http://example.com/foo?bar=baz&abc=123")
    assert signer.validate(url)
"""

from .canonical_uri import ParsedUri, canonicalize, parse_uri
from .config import OrderMode, QueryOrder, SignerConfig
from .errors import (
    ConfigurationError,
    MalformedUriError,
    MissingKeyError,
    UnknownSchemeError,
    UnsupportedAlgorithmError,
    UrlSignerError,
)
from .ports import DEFAULT_PORTS, default_port
from .signer import UrlSigner, create_signer

__version__ = "1.0.0"
__all__ = [
    "create_signer",
    "UrlSigner",
    "SignerConfig",
    "QueryOrder",
    "OrderMode",
    "ParsedUri",
    "parse_uri",
    "canonicalize",
    "DEFAULT_PORTS",
    "default_port",
    "UrlSignerError",
    "ConfigurationError",
    "MissingKeyError",
    "UnsupportedAlgorithmError",
    "UnknownSchemeError",
    "MalformedUriError",
]
