"""
config.py — Signer configuration

SignerConfig is created once per signer and never mutated. The ``order``
option is the QueryOrder sum type:

  PRESERVE: hash the query string exactly as received
  LEXICAL:  hash distinct keys in ascending code-point order
  CUSTOM:   hash distinct keys sorted by a caller comparator(a, b) -> int
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Union

from .errors import ConfigurationError, MissingKeyError
from .keyed_hash import resolve_algorithm

logger = logging.getLogger(__name__)

Comparator = Callable[[str, str], int]

DEFAULT_ALGORITHM = "md5"
DEFAULT_QUERYSTRING_NAME = "hash"


class OrderMode(Enum):
    PRESERVE = "preserve"
    LEXICAL = "lexical"
    CUSTOM = "custom"


@dataclass(frozen=True)
class QueryOrder:
    mode: OrderMode = OrderMode.LEXICAL
    comparator: Optional[Comparator] = None

    def __post_init__(self) -> None:
        if self.mode is OrderMode.CUSTOM and not callable(self.comparator):
            raise ConfigurationError("order=CUSTOM requires a callable comparator")
        if self.mode is not OrderMode.CUSTOM and self.comparator is not None:
            raise ConfigurationError(f"order={self.mode.value} takes no comparator")

    @classmethod
    def preserve(cls) -> "QueryOrder":
        return cls(OrderMode.PRESERVE)

    @classmethod
    def lexical(cls) -> "QueryOrder":
        return cls(OrderMode.LEXICAL)

    @classmethod
    def custom(cls, comparator: Comparator) -> "QueryOrder":
        return cls(OrderMode.CUSTOM, comparator)

    @classmethod
    def coerce(cls, value: Union["QueryOrder", bool, Comparator, None]) -> "QueryOrder":
        """Map the tri-state ``order`` option onto a QueryOrder.

        ``True`` (or None) is lexical, ``False`` preserves the original
        query, and a callable becomes a custom comparator.
        """
        if isinstance(value, QueryOrder):
            return value
        if value is None or value is True:
            return cls.lexical()
        if value is False:
            return cls.preserve()
        if callable(value):
            return cls.custom(value)
        raise ConfigurationError(f"order={value!r}")

    @property
    def sorts(self) -> bool:
        return self.mode is not OrderMode.PRESERVE


@dataclass(frozen=True)
class SignerConfig:
    """Immutable options shared by every sign/validate call of one signer.

    Args:
        key: Signing secret (str is encoded as UTF-8).
        order: QueryOrder, or True / False / comparator.
        algorithm: HMAC hash algorithm name. Defaults to ``md5``.
        querystring_name: Name of the signature query parameter.

    Raises:
        MissingKeyError: If ``key`` is missing or empty.
        UnsupportedAlgorithmError: If ``algorithm`` is unknown.
        ConfigurationError: If any other option is invalid.
    """
    key: Union[str, bytes] = field(repr=False, default=b"")
    order: Union[QueryOrder, bool, Comparator] = field(default_factory=QueryOrder.lexical)
    algorithm: str = DEFAULT_ALGORITHM
    querystring_name: str = DEFAULT_QUERYSTRING_NAME

    def __post_init__(self) -> None:
        if not self.key:
            raise MissingKeyError()
        if not isinstance(self.key, (str, bytes)):
            raise ConfigurationError(f"key must be str or bytes, got {type(self.key).__name__}")
        # frozen: normalize through object.__setattr__
        object.__setattr__(self, "order", QueryOrder.coerce(self.order))
        resolve_algorithm(self.algorithm)
        if not isinstance(self.querystring_name, str) or not self.querystring_name:
            raise ConfigurationError(f"querystring_name={self.querystring_name!r}")
        logger.debug(
            "Signer configured: algorithm=%s order=%s param=%s",
            self.algorithm, self.order.mode.value, self.querystring_name,
        )

    @property
    def key_bytes(self) -> bytes:
        if isinstance(self.key, bytes):
            return self.key
        return self.key.encode("utf-8")
