"""
canonical_uri.py — Deterministic signing strings for URIs

The signing string of a URI is:

  [scheme "://" host ":" port]  path  ["?" query]

- The origin part is present only for absolute URIs. The port is always
  explicit: when the URI carries none, the scheme's default port is used.
- Relative URIs are resolved against a reserved sentinel origin so that one
  parser handles both forms. A URI is absolute iff its resolved hostname is
  not the sentinel hostname.
- The path is emitted as parsed, with dot segments resolved for absolute
  and relative URIs alike (empty path -> "/").
- The query is either kept byte-for-byte (QueryOrder.PRESERVE) or rebuilt
  from its distinct keys, sorted, last value winning, every key and value
  component-encoded.
- Fragments never take part in signing.

IMPORTANT: signer and validator MUST build identical strings for identical
URIs. Any change here invalidates every signature already handed out.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from functools import cmp_to_key
from typing import Dict, List, Optional, Tuple, Union
from urllib.parse import quote, unquote_plus, urljoin, urlsplit, urlunsplit

from .config import OrderMode, QueryOrder, SignerConfig
from .errors import MalformedUriError
from .ports import default_port

SENTINEL_HOST = "5f0c2e1a-8d4b-4c67-9a3e-b1d2f7e40c19"
SENTINEL_ORIGIN = f"http://{SENTINEL_HOST}"

# encodeURIComponent's unreserved set; quote() always keeps A-Z a-z 0-9 _.-~
_COMPONENT_SAFE = "!*'()"


def encode_component(text: str) -> str:
    """Strict percent-encoding for a query key or value (UTF-8)."""
    return quote(text, safe=_COMPONENT_SAFE)


def _remove_dot_segments(path: str) -> str:
    """Resolve ``.`` and ``..`` in an absolute path, as urljoin does."""
    if not path.startswith("/"):
        return path
    segments = path.split("/")
    resolved: List[str] = []
    for seg in segments[1:]:
        if seg == "..":
            if resolved:
                resolved.pop()
        elif seg != ".":
            resolved.append(seg)
    if segments[-1] in (".", ".."):
        resolved.append("")
    return "/" + "/".join(resolved)


def _decode_segment(segment: str) -> Tuple[str, str]:
    name, _, value = segment.partition("=")
    return unquote_plus(name), unquote_plus(value)


@dataclass
class ParsedUri:
    """A URI split for signing, with its query kept as raw ``&`` segments."""
    scheme: str
    netloc: str
    hostname: Optional[str]
    port: Optional[int]
    path: str
    segments: List[str] = field(default_factory=list)
    fragment: str = ""

    @property
    def absolute(self) -> bool:
        return self.hostname != SENTINEL_HOST

    @property
    def raw_query(self) -> str:
        return "&".join(self.segments)

    def params(self) -> List[Tuple[str, str]]:
        """Decoded (name, value) pairs in query order; empty segments skipped."""
        return [_decode_segment(s) for s in self.segments if s]

    def get(self, name: str) -> Optional[str]:
        """Value of the last parameter called ``name``, or None."""
        found = None
        for key, value in self.params():
            if key == name:
                found = value
        return found

    def delete(self, name: str) -> None:
        self.segments = [
            s for s in self.segments if not s or _decode_segment(s)[0] != name
        ]

    def without(self, name: str) -> "ParsedUri":
        """Copy of this URI with every ``name`` parameter removed."""
        stripped = replace(self, segments=list(self.segments))
        stripped.delete(name)
        return stripped

    def set(self, name: str, value: str) -> None:
        """Replace the first ``name`` parameter in place, drop the rest.

        Appends when the parameter is absent. Other segments keep their
        original bytes and position.
        """
        encoded = f"{encode_component(name)}={encode_component(value)}"
        kept: List[str] = []
        placed = False
        for s in self.segments:
            if s and _decode_segment(s)[0] == name:
                if not placed:
                    kept.append(encoded)
                    placed = True
                continue
            kept.append(s)
        if not placed:
            kept.append(encoded)
        self.segments = kept

    def to_text(self) -> str:
        """Serialize; relative URIs come back without the sentinel origin."""
        if self.absolute:
            return urlunsplit(
                (self.scheme, self.netloc, self.path, self.raw_query, self.fragment)
            )
        text = self.path
        if self.raw_query:
            text += "?" + self.raw_query
        if self.fragment:
            text += "#" + self.fragment
        return text


def parse_uri(text: str) -> ParsedUri:
    """Parse absolute or relative URI text.

    Raises:
        MalformedUriError: If the text is not a string or the parser rejects
            it (bad IPv6 literal, non-numeric or out-of-range port).
    """
    if not isinstance(text, str):
        raise MalformedUriError(f"expected str, got {type(text).__name__}")
    try:
        parts = urlsplit(urljoin(SENTINEL_ORIGIN + "/", text))
        hostname = parts.hostname
        port = parts.port
    except ValueError as exc:
        raise MalformedUriError(f"{text!r}: {exc}") from exc
    return ParsedUri(
        scheme=parts.scheme,
        netloc=parts.netloc,
        hostname=hostname,
        port=port,
        # urljoin leaves absolute input untouched; normalize both forms alike
        path=_remove_dot_segments(parts.path) or "/",
        segments=parts.query.split("&") if parts.query else [],
        fragment=parts.fragment,
    )


def canonical_origin(uri: ParsedUri) -> str:
    """``scheme://host:port`` for absolute URIs, "" for relative ones."""
    if not uri.absolute:
        return ""
    host = uri.hostname or ""
    if ":" in host:
        host = f"[{host}]"
    # port 0 counts as absent, like an omitted port
    port = uri.port if uri.port else default_port(uri.scheme)
    return f"{uri.scheme}://{host}:{port}"


def canonical_query(uri: ParsedUri, order: QueryOrder) -> str:
    """Query part of the signing string, including its leading ``?``."""
    if not uri.raw_query:
        return ""
    if not order.sorts:
        return "?" + uri.raw_query

    latest: Dict[str, str] = {}
    for name, value in uri.params():
        latest[name] = value
    if not latest:
        return ""

    if order.mode is OrderMode.CUSTOM:
        names = sorted(latest, key=cmp_to_key(order.comparator))
    else:
        names = sorted(latest)
    return "?" + "&".join(
        f"{encode_component(name)}={encode_component(latest[name])}"
        for name in names
    )


def canonicalize(uri: Union[ParsedUri, str], config: SignerConfig) -> str:
    """Return the signing string for ``uri`` under ``config``."""
    if not isinstance(uri, ParsedUri):
        uri = parse_uri(uri)
    return canonical_origin(uri) + uri.path + canonical_query(uri, config.order)
