"""
errors.py — urlsigner Error Taxonomy

Coded exceptions raised by configuration, canonicalization and the CLI.
A failed signature check is never an error: ``validate`` returns False.
"""

from typing import Optional

__all__ = [
    "UrlSignerError",
    "ConfigurationError",
    "MissingKeyError",
    "UnsupportedAlgorithmError",
    "UnknownSchemeError",
    "MalformedUriError",
]

class UrlSignerError(Exception):
    """Base class for all urlsigner errors."""
    def __init__(
        self,
        code: str,
        message: str,
        context: Optional[str] = None,
    ):
        self.code = code
        self.message = message
        self.context = context

        full_msg = f"[{code}] {message}"
        if context:
            full_msg += f" Context: {context}"

        super().__init__(full_msg)

# Configuration Errors (E1xx)
class ConfigurationError(UrlSignerError, ValueError):
    def __init__(self, context: Optional[str] = None):
        super().__init__("URLSIGNER_E100", "A signer option has an invalid value.", context)

class MissingKeyError(UrlSignerError, ValueError):
    def __init__(self, context: Optional[str] = None):
        super().__init__("URLSIGNER_E101", "A signing key (key) is required.", context)

class UnsupportedAlgorithmError(UrlSignerError, ValueError):
    def __init__(self, context: Optional[str] = None):
        super().__init__("URLSIGNER_E102", "The requested hash algorithm is not supported for HMAC.", context)

# URI Errors (E2xx)
class UnknownSchemeError(UrlSignerError):
    def __init__(self, context: Optional[str] = None):
        super().__init__("URLSIGNER_E200", "The URI has no explicit port and its scheme has no known default port.", context)

class MalformedUriError(UrlSignerError, ValueError):
    def __init__(self, context: Optional[str] = None):
        super().__init__("URLSIGNER_E201", "The URI text could not be parsed.", context)
